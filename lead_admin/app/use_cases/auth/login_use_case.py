"""
Login Use Case

Verifies a username/password pair and returns the caller's Identity.
"""

import asyncio
import logging

import bcrypt

from lead_admin.api.utils.jwt import SessionTokenCodec
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Error, Result, Return

from .credential_lookup import CredentialLookup
from .dtos import LoginResult, LoginUser

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid credentials")


MAX_PASSWORD_BYTES = 72


def _check_password(password: str, password_hash: str) -> bool:
    encoded = password.encode()
    if len(encoded) > MAX_PASSWORD_BYTES:
        # No stored password can be this long
        _burn_password_check()
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode())
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def _burn_password_check() -> None:
    # Same bcrypt cost as a real comparison
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for staff sign-in.

    Business Rules:
    - Username match is exact and case-sensitive
    - Missing user, disabled user and wrong password are indistinguishable:
      same error, same bcrypt work
    - bcrypt runs in a worker thread so the event loop is not blocked
    - The legacy superuser, when configured, signs in through the same path
    """

    def __init__(
        self,
        uow: UnitOfWork,
        codec: SessionTokenCodec,
        legacy_username: str = "",
        legacy_password_hash: str = "",
    ):
        self.uow = uow
        self.codec = codec
        self.legacy_username = legacy_username
        self.legacy_password_hash = legacy_password_hash

    async def execute(self, username: str, password: str) -> Result[LoginResult]:
        """
        Execute login use case.

        Args:
            username: Submitted username
            password: Plain text password

        Returns:
            Result with LoginResult (identity + user info), or Error
        """
        async with self.uow:
            lookup = CredentialLookup(
                self.uow.users, self.legacy_username, self.legacy_password_hash
            )
            user = await lookup.find(username)

            if user is None:
                await asyncio.to_thread(_burn_password_check)
                return Return.err(INVALID_CREDENTIALS)

            password_valid = await asyncio.to_thread(
                _check_password, password, user.password_hash
            )
            if not password_valid or not user.is_active:
                return Return.err(INVALID_CREDENTIALS)

            identity = self.codec.identity_for(
                subject_id=user.id,
                username=user.username,
                role=user.role,
                company_scope=user.company_id,
            )
            logger.info(f"User {user.username} signed in as {user.role.value}")

            return Return.ok(
                LoginResult(
                    identity=identity,
                    user=LoginUser(
                        id=user.id,
                        username=user.username,
                        email=user.email,
                        role=user.role.value,
                        company_id=user.company_id,
                    ),
                )
            )
