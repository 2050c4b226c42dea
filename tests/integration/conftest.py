import bcrypt
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from dctrack.adapter.services.local_file_storage import LocalFileStorage
from dctrack.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from dctrack.depends import get_file_storage, get_unit_of_work
from dctrack.domain.entities import User, UserType

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPass123!"
CLIENT_EMAIL = "client@example.com"
CLIENT_PASSWORD = "ClientPass123!"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_users(db_session):
    """An Admin and a Client account"""
    users = {
        "admin": User(
            name="Admin User",
            email=ADMIN_EMAIL,
            password_hash=bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
            user_type=UserType.admin,
        ),
        "client": User(
            name="Client User",
            email=CLIENT_EMAIL,
            password_hash=bcrypt.hashpw(CLIENT_PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
            user_type=UserType.client,
        ),
    }
    for user in users.values():
        db_session.add(user)
    await db_session.commit()
    for user in users.values():
        await db_session.refresh(user)
    return users


@pytest_asyncio.fixture
async def storage(tmp_path):
    return LocalFileStorage(str(tmp_path / "storage"))


@pytest_asyncio.fixture
async def client(db_session, storage):
    from httpx import ASGITransport
    from dctrack.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_file_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _login(client: AsyncClient, email: str, password: str) -> dict:
    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest_asyncio.fixture
async def admin_headers(client, seeded_users):
    return await _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest_asyncio.fixture
async def client_headers(client, seeded_users):
    return await _login(client, CLIENT_EMAIL, CLIENT_PASSWORD)
