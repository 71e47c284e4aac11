from typing import Optional

import bcrypt
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from lead_admin.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from lead_admin.depends import get_unit_of_work
from lead_admin.domain.entities import Company, Investor, User, UserRole

# Cost 4 hash; checkpw reads the cost from the hash itself
TEST_PASSWORD = "SecurePass123!"
TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode(), bcrypt.gensalt(4)).decode()


class IntegrationConfig(ApplicationConfig):
    # Plain http test client, no outbound geo calls
    AUTH_COOKIE_SECURE = False
    GEO_LOOKUP_ENABLED = False
    RATE_LIMIT_ENABLED = False
    ENABLE_LOGGING_MIDDLEWARE = False
    LEGACY_ADMIN_USERNAME = ""
    LEGACY_ADMIN_PASSWORD_HASH = ""


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
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
async def app(db_session):
    from lead_admin.api.app import create_app

    app = create_app(IntegrationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.state.activity_recorder.uow_factory = lambda: SqlAlchemyUnitOfWork(db_session)
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def seed(db_session):
    """
    Insert rows directly and return them refreshed.

    Rows are detached so a later request rolling back the shared session
    does not expire them.
    """

    async def _seed(*rows):
        for row in rows:
            db_session.add(row)
        await db_session.commit()
        for row in rows:
            await db_session.refresh(row)
            db_session.expunge(row)
        return rows[0] if len(rows) == 1 else rows

    return _seed


@pytest_asyncio.fixture
async def companies(seed):
    """Companies 5 and 9"""
    return await seed(
        Company(company_id=5, name="Alpha Capital"),
        Company(company_id=9, name="Nine Holdings"),
    )


@pytest_asyncio.fixture
async def make_user(seed):
    async def _make_user(
        username: str,
        role: UserRole,
        company_id: Optional[int] = None,
        is_active: bool = True,
    ) -> User:
        return await seed(
            User(
                username=username,
                email=f"{username}@example.com",
                password_hash=TEST_PASSWORD_HASH,
                role=role,
                company_id=company_id,
                is_active=is_active,
            )
        )

    return _make_user


@pytest_asyncio.fixture
async def sign_in(app, client, make_user):
    """Create a user and put a valid session cookie on the client"""

    async def _sign_in(
        role: UserRole, company_id: Optional[int] = None, username: Optional[str] = None
    ) -> User:
        user = await make_user(username or role.value, role, company_id)
        codec = app.state.token_codec
        identity = codec.identity_for(user.id, user.username, user.role, user.company_id)
        client.cookies.set(IntegrationConfig.AUTH_COOKIE_NAME, codec.issue(identity))
        return user

    return _sign_in


@pytest_asyncio.fixture
async def make_investor(seed):
    async def _make_investor(company_id: Optional[int] = 5, **overrides) -> Investor:
        values = dict(
            full_name="Jane Investor",
            phone_number="+1 555 0100",
            shares_quantity=100,
            calculated_total=2500.0,
            city="Hanoi",
            company_id=company_id,
        )
        values.update(overrides)
        return await seed(Investor(**values))

    return _make_investor
