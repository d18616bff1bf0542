"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Reserved role that implicitly holds every permission and cannot be deleted
SUPERUSER_ROLE_ID = "superuser"

# Roles whose users appear in the doctor listing
DOCTOR_ROLE_IDS = ("doctor", SUPERUSER_ROLE_ID)

# Identifier prefixes for generated primary keys
ROLE_ID_PREFIX = "role-"
USER_ID_PREFIX = "usr-"

# String field lengths
MAX_ID_LENGTH = 64
MAX_ROLE_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 255
MAX_USERNAME_LENGTH = 100
MAX_SPECIALTY_LENGTH = 100
MAX_PERMISSION_ID_LENGTH = 100

# Password requirements
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# User search needs at least this many characters before filtering
MIN_USER_QUERY_LENGTH = 2

# Token settings
SESSION_TOKEN_TYPE = "session"
SESSION_TOKEN_JTI_LENGTH = 32

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"

# Cache keys
ROLE_LISTING_CACHE_KEY = "roles:list"
