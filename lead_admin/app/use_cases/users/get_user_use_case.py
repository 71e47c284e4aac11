from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Error, Result, Return

from .dtos import UserOut

USER_NOT_FOUND = Error("USER_NOT_FOUND", "User not found")


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[UserOut]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)
            return Return.ok(UserOut.model_validate(user))
