from lead_admin.app.security.identity import Identity
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Error, Result, Return

from .dtos import UserOut
from .get_user_use_case import USER_NOT_FOUND

CANNOT_DELETE_SELF = Error("CANNOT_DELETE_SELF", "Cannot delete your own account")


class DeleteUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, user_id: str) -> Result[UserOut]:
        if user_id == identity.subject_id:
            return Return.err(CANNOT_DELETE_SELF)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            deleted = UserOut.model_validate(user)
            await self.uow.users.delete(user)
            await self.uow.commit()
            return Return.ok(deleted)
