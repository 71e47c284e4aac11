from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from lead_admin.api.error import ClientError, ServerError
from lead_admin.api.middleware.activity_tracker import request_context
from lead_admin.api.utils.jwt import SessionTokenCodec
from lead_admin.app.security import USER_GRANTS, AccessContext, Identity
from lead_admin.app.services.activity_recorder import ActivityRecorder, ResponseContext
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.app.use_cases.auth import LoginResponse, LoginUseCase
from lead_admin.app.use_cases.dtos import ApiModel, Envelope
from lead_admin.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetProfileUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    ProfileOut,
    UpdateUserUseCase,
    UserOut,
)
from lead_admin.depends import (
    get_activity_recorder,
    get_current_identity,
    get_optional_identity,
    get_token_codec,
    get_unit_of_work,
    require_access,
)
from lead_admin.domain.entities import OperationClass, UserRole

router = APIRouter(prefix="/admin/users", tags=["User"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    username: str = Field(..., min_length=1, description="Username (case-sensitive)")
    password: str = Field(..., min_length=1, description="Password")


def _set_session_cookie(response: Response, request: Request, token: str, max_age: int):
    config = request.app.state.config
    response.set_cookie(
        key=config.AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=config.AUTH_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: SessionTokenCodec = Depends(get_token_codec),
):
    """
    Staff Login

    Verifies credentials and sets the session cookie.

    Raises:
        - 400 Bad Request: Missing username or password
        - 401 Unauthorized: Invalid credentials (same response for unknown
          user, wrong password and disabled account)
    """
    config = request.app.state.config
    use_case = LoginUseCase(
        uow,
        codec,
        legacy_username=config.LEGACY_ADMIN_USERNAME,
        legacy_password_hash=config.LEGACY_ADMIN_PASSWORD_HASH,
    )
    result = await use_case.execute(body.username, body.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    identity = result.value.identity
    _set_session_cookie(
        response,
        request,
        codec.issue(identity),
        max_age=int(codec.expires_in.total_seconds()),
    )
    return LoginResponse(user=result.value.user)


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    identity: Optional[Identity] = Depends(get_optional_identity),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    """
    Staff Logout

    Clears the session cookie. Always succeeds; the token itself stays valid
    until it expires.
    """
    config = request.app.state.config
    response.delete_cookie(
        key=config.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=config.AUTH_COOKIE_SECURE,
        samesite="lax",
    )

    # The tracking middleware skips logout, so the event is recorded here
    request.state.identity = identity
    background_tasks.add_task(
        recorder.record,
        request_context(request),
        ResponseContext(status_code=status.HTTP_200_OK, body={"success": True}),
        force=True,
    )
    return {"success": True}


@router.get("/me/profile", response_model=Envelope[ProfileOut])
async def get_profile(
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current user's profile

    Raises:
        - 401 Unauthorized: Missing or invalid session
        - 404 Not Found: Account was removed after sign-in
    """
    result = await GetProfileUseCase(uow).execute(identity)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return Envelope(data=result.value)


class CreateUserRequest(ApiModel):
    """
    Create user HTTP request payload

    company_* roles require companyId; super_* roles ignore it.
    """

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: UserRole
    company_id: Optional[int] = Field(default=None, gt=0)


class UpdateUserRequest(ApiModel):
    """Update user HTTP request payload (all fields optional)"""

    username: Optional[str] = Field(default=None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=72)
    role: Optional[UserRole] = None
    company_id: Optional[int] = Field(default=None, gt=0)
    is_active: Optional[bool] = None


def _raise_user_error(error):
    if error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code in (
        "USERNAME_EXISTS",
        "EMAIL_EXISTS",
        "COMPANY_REQUIRED",
        "COMPANY_NOT_FOUND",
        "CANNOT_DELETE_SELF",
    ):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("", response_model=Envelope[List[UserOut]])
async def list_users(
    access: AccessContext = Depends(require_access(OperationClass.read, USER_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List all staff users (super_admin, super_viewer)"""
    result = await ListUsersUseCase(uow).execute()
    if result.is_err():
        raise ServerError(result.error)
    return Envelope(data=result.value)


@router.get("/{userId}", response_model=Envelope[UserOut])
async def get_user(
    userId: str,
    access: AccessContext = Depends(require_access(OperationClass.read, USER_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetUserUseCase(uow).execute(userId)
    if result.is_err():
        _raise_user_error(result.error)
    return Envelope(data=result.value)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[UserOut])
async def create_user(
    body: CreateUserRequest,
    access: AccessContext = Depends(require_access(OperationClass.create, USER_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create staff user (super_admin)

    Raises:
        - 400 Bad Request: Duplicate username/email, missing or unknown company
        - 403 Forbidden: Caller is not super_admin
    """
    command = CreateUserCommand(
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
        company_id=body.company_id,
    )
    result = await CreateUserUseCase(uow).execute(command)
    if result.is_err():
        _raise_user_error(result.error)
    return Envelope(data=result.value)


@router.put("/{userId}", response_model=Envelope[UserOut])
async def update_user(
    userId: str,
    body: UpdateUserRequest,
    access: AccessContext = Depends(require_access(OperationClass.update, USER_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateUserUseCase(uow).execute(userId, body.model_dump(exclude_unset=True))
    if result.is_err():
        _raise_user_error(result.error)
    return Envelope(data=result.value)


@router.delete("/{userId}", response_model=Envelope[UserOut])
async def delete_user(
    userId: str,
    access: AccessContext = Depends(require_access(OperationClass.delete, USER_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteUserUseCase(uow).execute(access.identity, userId)
    if result.is_err():
        _raise_user_error(result.error)
    return Envelope(data=result.value)
