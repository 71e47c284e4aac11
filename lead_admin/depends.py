from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends, Request, status
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from lead_admin.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from lead_admin.api.error import ClientError
from lead_admin.api.utils.jwt import SessionTokenCodec
from lead_admin.app.security import (
    LEAD_GRANTS,
    AccessContext,
    AuthenticationGate,
    Identity,
    PermissionGrant,
    authorize,
    check_company_access,
)
from lead_admin.app.services.activity_recorder import ActivityRecorder
from lead_admin.app.services.notification_service import INotificationService
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import OperationClass

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

cookie_scheme = APIKeyCookie(name=ApplicationConfig.AUTH_COOKIE_NAME, auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@asynccontextmanager
async def unit_of_work_scope() -> AsyncIterator[UnitOfWork]:
    """Session-owning unit of work for work done outside a request (audit writes)"""
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            yield uow


def get_token_codec(request: Request) -> SessionTokenCodec:
    return request.app.state.token_codec


def get_activity_recorder(request: Request) -> ActivityRecorder:
    return request.app.state.activity_recorder


def get_notifier(request: Request) -> INotificationService:
    return request.app.state.notifier


def get_optional_identity(
    request: Request, token: Optional[str] = Depends(cookie_scheme)
) -> Optional[Identity]:
    """Identity when a valid cookie is present, otherwise None"""
    gate: AuthenticationGate = request.app.state.auth_gate
    result = gate.authenticate(token)
    return result.value if result.is_ok() else None


async def get_current_identity(
    request: Request, token: Optional[str] = Depends(cookie_scheme)
) -> Identity:
    """
    Dependency to extract and verify the session token from the auth cookie.

    The identity is also stored on request.state so the activity tracker can
    attribute the request.

    Raises:
        ClientError: 401 if the cookie is missing, invalid or expired
    """
    gate: AuthenticationGate = request.app.state.auth_gate
    result = gate.authenticate(token)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    request.state.identity = result.value
    return result.value


def require_access(
    operation: OperationClass,
    grants: PermissionGrant = LEAD_GRANTS,
    company_scoped: bool = False,
):
    """
    Dependency factory: authenticate, check the role grant and, for routes
    naming a company, run the company-scope check on that company.

    Returns:
        Dependency yielding an AccessContext
    """

    async def dependency(
        request: Request, identity: Identity = Depends(get_current_identity)
    ) -> AccessContext:
        result = authorize(identity, operation, grants)
        if result.is_err():
            raise ClientError(result.error, status_code=status.HTTP_403_FORBIDDEN)

        if company_scoped:
            requested = (
                request.path_params.get("companyID")
                or request.path_params.get("companyId")
                or request.query_params.get("companyID")
            )
            scoped = check_company_access(identity, requested)
            if scoped.is_err():
                raise ClientError(scoped.error, status_code=status.HTTP_403_FORBIDDEN)

        return AccessContext(identity=identity, scope=result.value)

    return dependency
