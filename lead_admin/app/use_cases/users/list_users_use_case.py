from typing import List

from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Result, Return

from .dtos import UserOut


class ListUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[UserOut]]:
        async with self.uow:
            users = await self.uow.users.list()
            return Return.ok([UserOut.model_validate(u) for u in users])
