"""
Create User Use Case

Creates a staff account.
"""

import logging

from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import User
from lead_admin.libs.result import Error, Result, Return

from .dtos import CreateUserCommand, UserOut
from .passwords import hash_password

logger = logging.getLogger(__name__)

USERNAME_EXISTS = Error("USERNAME_EXISTS", "Username already exists")
EMAIL_EXISTS = Error("EMAIL_EXISTS", "Email already exists")
COMPANY_REQUIRED = Error("COMPANY_REQUIRED", "Company roles require a companyId")
COMPANY_NOT_FOUND = Error("COMPANY_NOT_FOUND", "Company not found")


class CreateUserUseCase:
    """
    Use case for creating a staff user.

    Business Rules:
    - Username and email are unique
    - company_* roles must be assigned to an existing company
    - super_* roles are stored without a company
    - Password stored as bcrypt hash (cost factor 12)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateUserCommand) -> Result[UserOut]:
        company_id = None if command.role.is_super else command.company_id
        if not command.role.is_super and company_id is None:
            return Return.err(COMPANY_REQUIRED)

        async with self.uow:
            existing = await self.uow.users.get_by_username_or_email(
                command.username, command.email
            )
            if existing is not None:
                if existing.username == command.username:
                    return Return.err(USERNAME_EXISTS)
                return Return.err(EMAIL_EXISTS)

            if company_id is not None:
                company = await self.uow.companies.get_by_id(company_id)
                if company is None:
                    return Return.err(COMPANY_NOT_FOUND)

            user = User(
                username=command.username,
                email=command.email,
                password_hash=await hash_password(command.password),
                role=command.role,
                company_id=company_id,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

            logger.info(f"User {user.username} created with role {user.role.value}")
            return Return.ok(UserOut.model_validate(user))
