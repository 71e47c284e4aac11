"""
Submit Investor Use Case

Stores a public investor-interest form.
"""

import logging

from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import Investor
from lead_admin.libs.result import Result, Return

from .dtos import InvestorOut, SubmitInvestorCommand

logger = logging.getLogger(__name__)


class SubmitInvestorUseCase:
    """
    Use case for the public submission form.

    Business Rules:
    - No authentication; source is always "website"
    - The notification is sent by the caller after the response, so a
      failing notifier never loses a submission
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SubmitInvestorCommand) -> Result[InvestorOut]:
        async with self.uow:
            investor = Investor(**command.model_dump(), source="website")
            investor = await self.uow.investors.create(investor)
            await self.uow.commit()

            logger.info(f"Investor submission {investor.id} received")
            return Return.ok(InvestorOut.model_validate(investor))
