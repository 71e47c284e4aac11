from lead_admin.app.security.identity import Identity
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.app.use_cases.auth.credential_lookup import LEGACY_ADMIN_EMAIL, LEGACY_ADMIN_ID
from lead_admin.libs.result import Result, Return

from .dtos import ProfileOut
from .get_user_use_case import USER_NOT_FOUND


class GetProfileUseCase:
    """
    Current caller's profile.

    The legacy superuser has no row and is answered from the token.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[ProfileOut]:
        if identity.subject_id == LEGACY_ADMIN_ID:
            return Return.ok(
                ProfileOut(
                    id=LEGACY_ADMIN_ID,
                    username=identity.username,
                    email=LEGACY_ADMIN_EMAIL,
                    role=identity.role,
                    is_legacy=True,
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(identity.subject_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)
            return Return.ok(
                ProfileOut(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    role=user.role,
                    company_id=user.company_id,
                    is_active=user.is_active,
                )
            )
