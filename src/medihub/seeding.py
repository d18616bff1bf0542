"""Seed data for the clinic's standard roles and demo users.

Seeding is idempotent: roles and users that already exist are left
untouched.
"""

from typing import TypedDict

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from medihub.core.cache import RoleListingCache
from medihub.core.constants import SUPERUSER_ROLE_ID
from medihub.core.permissions.catalog import PERMISSION_IDS
from medihub.modules.roles.repos import RoleRepository
from medihub.modules.roles.schemas import RoleCreate
from medihub.modules.roles.services import RoleService
from medihub.modules.users.repos import UserRepository
from medihub.modules.users.schemas import UserCreate
from medihub.modules.users.services import UserService


logger = structlog.get_logger()


# ============================================================
# Type Definitions
# ============================================================


class RoleData(TypedDict):
    name: str
    description: str
    has_specialty: bool
    permissions: list[str]


class UserData(TypedDict):
    username: str
    password: str
    role_id: str
    specialty: str | None


# ============================================================
# Seed Definitions
# ============================================================

DEMO_PASSWORD = "password123"

ROLE_DEFINITIONS: dict[str, RoleData] = {
    SUPERUSER_ROLE_ID: {
        "name": "Superusuario",
        "description": "Acceso total a todas las funciones del sistema.",
        "has_specialty": True,
        # Stored for display only; the superuser role is never checked against it
        "permissions": sorted(PERMISSION_IDS),
    },
    "administrator": {
        "name": "Administrador",
        "description": "Gestiona la parametrización del sistema como empresas y catálogos.",
        "has_specialty": False,
        "permissions": [
            "companies.manage",
            "cie10.manage",
            "reports.view",
            "people.manage",
            "titulars.manage",
            "beneficiaries.manage",
            "patientlist.view",
            "waitlist.manage",
            "surveys.manage",
            "services.manage",
        ],
    },
    "asistencial": {
        "name": "Asistencial",
        "description": "Personal de recepción encargado de la admisión de pacientes.",
        "has_specialty": False,
        "permissions": [
            "people.manage",
            "titulars.manage",
            "beneficiaries.manage",
            "patientlist.view",
            "waitlist.manage",
            "companies.manage",
        ],
    },
    "doctor": {
        "name": "Doctor",
        "description": "Personal médico que realiza consultas.",
        "has_specialty": True,
        "permissions": [
            "consultation.perform",
            "hce.view",
            "treatmentlog.manage",
            "reports.view",
            "waitlist.manage",
            "occupationalhealth.manage",
        ],
    },
    "enfermera": {
        "name": "Enfermera",
        "description": "Personal de enfermería que aplica tratamientos.",
        "has_specialty": False,
        "permissions": ["treatmentlog.manage", "waitlist.manage"],
    },
}

DEMO_USERS: list[UserData] = [
    {"username": "superuser", "password": DEMO_PASSWORD, "role_id": SUPERUSER_ROLE_ID, "specialty": None},
    {"username": "admin", "password": DEMO_PASSWORD, "role_id": "administrator", "specialty": None},
    {"username": "asistente", "password": DEMO_PASSWORD, "role_id": "asistencial", "specialty": None},
    {"username": "enfermera", "password": DEMO_PASSWORD, "role_id": "enfermera", "specialty": None},
    {"username": "carolina.guerrero", "password": DEMO_PASSWORD, "role_id": "doctor", "specialty": "medico familiar"},
    {"username": "angela.dicenso", "password": DEMO_PASSWORD, "role_id": "doctor", "specialty": "medico pediatra"},
    {"username": "mirna.b", "password": DEMO_PASSWORD, "role_id": "doctor", "specialty": "medico pediatra"},
    {"username": "zulma.r", "password": DEMO_PASSWORD, "role_id": "doctor", "specialty": "medico familiar"},
]


# ============================================================
# Seed Functions
# ============================================================


def _role_service(session: AsyncSession) -> RoleService:
    return RoleService(RoleRepository(session), RoleListingCache(enabled=False))


async def seed_roles(session: AsyncSession) -> list[str]:
    """Create the standard roles that do not exist yet.

    Returns:
        Identifiers of the roles created
    """
    service = _role_service(session)
    created: list[str] = []

    for role_id, role_data in ROLE_DEFINITIONS.items():
        if await service.repo.get_by_id(role_id):
            continue
        await service.create_role(
            RoleCreate(
                name=role_data["name"],
                description=role_data["description"],
                has_specialty=role_data["has_specialty"],
                permissions=role_data["permissions"],
            ),
            role_id=role_id,
        )
        created.append(role_id)

    logger.info("roles_seeded", created=created)
    return created


async def seed_users(session: AsyncSession) -> list[str]:
    """Create the demo users that do not exist yet.

    Returns:
        Usernames of the users created
    """
    repo = UserRepository(session)
    service = UserService(repo, RoleRepository(session))
    created: list[str] = []

    for user_data in DEMO_USERS:
        if await repo.get_by_username(user_data["username"]):
            continue
        await service.create_user(UserCreate(**user_data))
        created.append(user_data["username"])

    logger.info("users_seeded", created=created)
    return created
