"""
Update User Use Case
"""

from typing import Any, Dict

from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.base import utcnow
from lead_admin.domain.entities import UserRole
from lead_admin.libs.result import Result, Return

from .create_user_use_case import COMPANY_NOT_FOUND, COMPANY_REQUIRED, EMAIL_EXISTS, USERNAME_EXISTS
from .dtos import UserOut
from .get_user_use_case import USER_NOT_FOUND
from .passwords import hash_password


class UpdateUserUseCase:
    """
    Use case for updating a staff user.

    Business Rules:
    - Only the fields sent are changed; a password is re-hashed
    - Username and email stay unique
    - The resulting role/company pair must satisfy the same rule as create
    - Changes take effect at the user's next sign-in (tokens are not revoked)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, changes: Dict[str, Any]) -> Result[UserOut]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            username = changes.get("username") or user.username
            email = changes.get("email") or user.email
            if username != user.username:
                if await self.uow.users.get_by_username(username) is not None:
                    return Return.err(USERNAME_EXISTS)
            if email != user.email:
                if await self.uow.users.get_by_email(email) is not None:
                    return Return.err(EMAIL_EXISTS)

            role = UserRole(changes.get("role") or user.role)
            company_id = changes.get("company_id", user.company_id)
            if role.is_super:
                company_id = None
            elif company_id is None:
                return Return.err(COMPANY_REQUIRED)
            elif company_id != user.company_id:
                if await self.uow.companies.get_by_id(company_id) is None:
                    return Return.err(COMPANY_NOT_FOUND)

            user.username = username
            user.email = email
            user.role = role
            user.company_id = company_id
            if changes.get("is_active") is not None:
                user.is_active = changes["is_active"]
            if changes.get("password"):
                user.password_hash = await hash_password(changes["password"])
            user.updated_at = utcnow()

            user = await self.uow.users.update(user)
            await self.uow.commit()
            return Return.ok(UserOut.model_validate(user))
