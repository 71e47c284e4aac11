"""
Credential Lookup

One lookup path for sign-in: database users first, then the configured
legacy superuser materialised as an ordinary User record.
"""

from typing import Optional

from lead_admin.app.repositories.user_repository import IUserRepository
from lead_admin.domain.entities import User, UserRole

LEGACY_ADMIN_ID = "legacy-admin"
LEGACY_ADMIN_EMAIL = "admin@legacy.com"


class CredentialLookup:
    def __init__(
        self,
        users: IUserRepository,
        legacy_username: str = "",
        legacy_password_hash: str = "",
    ):
        self.users = users
        self.legacy_username = legacy_username or ""
        self.legacy_password_hash = legacy_password_hash or ""

    @property
    def legacy_enabled(self) -> bool:
        return bool(self.legacy_username and self.legacy_password_hash)

    def legacy_user(self) -> User:
        return User(
            id=LEGACY_ADMIN_ID,
            username=self.legacy_username,
            email=LEGACY_ADMIN_EMAIL,
            password_hash=self.legacy_password_hash,
            role=UserRole.super_admin,
            company_id=None,
            is_active=True,
        )

    async def find(self, username: str) -> Optional[User]:
        """Exact, case-sensitive match. A database user shadows the legacy one."""
        user = await self.users.get_by_username(username)
        if user is not None:
            return user

        if self.legacy_enabled and username == self.legacy_username:
            return self.legacy_user()

        return None
