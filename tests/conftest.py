"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from medihub.config import settings
from medihub.core.auth.backend import hash_password
from medihub.core.constants import SUPERUSER_ROLE_ID
from medihub.core.database import (
    Base,
    build_engine,
    commit,
    discard_post_commit,
    get_db,
)
from medihub.core.permissions.models import Role, RolePermission  # noqa: F401
from medihub.main import create_app
from medihub.modules.roles.repos import RoleRepository
from medihub.modules.users.models import User
from medihub.modules.users.repos import UserRepository
from tests.factories.user import TEST_PASSWORD, session_cookie_for


@pytest.fixture(scope="function")
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a throwaway SQLite database for one test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back after the
    test completes. Commits inside the code under test only release a
    SAVEPOINT.
    """
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency. Commits only release a SAVEPOINT and
    # failed requests are rolled back with the test transaction.
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db
            await commit(db)
        except Exception:
            discard_post_commit(db)
            raise

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"


# ============================================================
# Role and User Fixtures
# ============================================================


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash the shared test password once per run."""
    return hash_password(TEST_PASSWORD)


async def create_role(
    db: AsyncSession,
    name: str,
    permissions: list[str],
    role_id: str | None = None,
    has_specialty: bool = False,
) -> Role:
    """Helper to create a role with its permission rows."""
    repo = RoleRepository(db)
    role = Role(name=name, description="", has_specialty=has_specialty)
    if role_id:
        role.id = role_id
    role = await repo.create(role)
    await repo.add_permissions(role.id, permissions)
    return role


async def create_user(
    db: AsyncSession,
    username: str,
    role: Role,
    password_hash: str,
    specialty: str | None = None,
) -> User:
    """Helper to create a user assigned to a role."""
    user = User(
        username=username,
        password_hash=password_hash,
        role_id=role.id,
        specialty=specialty,
    )
    return await UserRepository(db).create(user)


@pytest.fixture
async def superuser_role(db: AsyncSession) -> Role:
    """The reserved superuser role, stored with no permission rows."""
    return await create_role(db, "Superusuario", [], role_id=SUPERUSER_ROLE_ID)


@pytest.fixture
async def doctor_role(db: AsyncSession) -> Role:
    return await create_role(
        db,
        "Doctor",
        ["consultation.perform", "hce.view"],
        role_id="doctor",
        has_specialty=True,
    )


@pytest.fixture
async def security_role(db: AsyncSession) -> Role:
    """A role that manages roles and users."""
    return await create_role(db, "Seguridad", ["roles.manage", "users.manage"])


@pytest.fixture
async def empty_role(db: AsyncSession) -> Role:
    """A role granting nothing."""
    return await create_role(db, "Invitado", [])


@pytest.fixture
async def superuser(db: AsyncSession, superuser_role: Role, password_hash: str) -> User:
    return await create_user(db, "superuser", superuser_role, password_hash)


@pytest.fixture
async def doctor(db: AsyncSession, doctor_role: Role, password_hash: str) -> User:
    return await create_user(
        db, "carolina.guerrero", doctor_role, password_hash, specialty="medico familiar"
    )


@pytest.fixture
async def security_officer(
    db: AsyncSession, security_role: Role, password_hash: str
) -> User:
    return await create_user(db, "seguridad", security_role, password_hash)


@pytest.fixture
async def guest(db: AsyncSession, empty_role: Role, password_hash: str) -> User:
    return await create_user(db, "invitado", empty_role, password_hash)


@pytest.fixture
def login_as(client: AsyncClient) -> Callable[[User], AsyncClient]:
    """Return a helper that puts a user's session cookie on the client."""

    def _login(user: User) -> AsyncClient:
        client.cookies.set(settings.session_cookie_name, session_cookie_for(user))
        return client

    return _login
