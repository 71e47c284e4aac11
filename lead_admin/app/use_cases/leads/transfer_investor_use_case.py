"""
Transfer Investor Use Case

Turns a public submission into a lead. The new lead and the submission's
transferred flag are written in one transaction.
"""

import logging
from datetime import datetime
from typing import Optional

from lead_admin.app.security.identity import Identity
from lead_admin.app.security.policy import LEAD_GRANTS, authorize_resource
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.base import to_naive_utc, utcnow
from lead_admin.domain.entities import InvestorAdmin, OperationClass
from lead_admin.libs.result import Error, Result, Return

from .create_lead_use_case import MSG_DATE_REQUIRED
from .dtos import LeadOut

logger = logging.getLogger(__name__)

INVESTOR_NOT_FOUND = Error("INVESTOR_NOT_FOUND", "Investor not found")
ALREADY_TRANSFERRED = Error("ALREADY_TRANSFERRED", "Investor already transferred")
TRANSFER_FAILED = Error("TRANSFER_FAILED", "Transfer could not be completed")


class TransferInvestorUseCase:
    """
    Use case for transferring a submission to the lead pipeline.

    Business Rules:
    - Company-tier callers may only transfer submissions of their company
    - A submission is transferred at most once
    - Creator roles must supply msgDate
    - Lead creation and marking the submission transferred commit together;
      a failure in either leaves both untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        identity: Identity,
        investor_id: str,
        notes: Optional[str] = None,
        msg_date: Optional[datetime] = None,
    ) -> Result[LeadOut]:
        if identity.role.is_creator and msg_date is None:
            return Return.err(MSG_DATE_REQUIRED)

        async with self.uow:
            investor = await self.uow.investors.get_by_id(investor_id)
            if investor is None:
                return Return.err(INVESTOR_NOT_FOUND)

            access = authorize_resource(
                identity,
                OperationClass.create,
                investor.company_id,
                LEAD_GRANTS,
                "investor",
            )
            if access.is_err():
                return access

            existing = await self.uow.investor_admins.get_by_original_investor_id(
                investor.id
            )
            if existing is not None or investor.transferred:
                return Return.err(ALREADY_TRANSFERRED)

            try:
                lead = await self.uow.investor_admins.create(
                    InvestorAdmin(
                        full_name=investor.full_name,
                        phone_number=investor.phone_number,
                        company_id=investor.company_id,
                        shares_quantity=investor.shares_quantity,
                        calculated_total=investor.calculated_total,
                        city=investor.city,
                        source=investor.source,
                        notes=notes,
                        calling_times=0,
                        lead_status="new",
                        original_investor_id=investor.id,
                        msg_date=to_naive_utc(msg_date),
                        created_by=identity.subject_id,
                    )
                )

                investor.transferred = True
                investor.updated_at = utcnow()
                await self.uow.investors.update(investor)

                await self.uow.commit()
            except Exception:
                logger.exception(f"Transfer of investor {investor_id} failed")
                await self.uow.rollback()
                return Return.err(TRANSFER_FAILED)

            logger.info(
                f"Investor {investor_id} transferred to lead {lead.id} by {identity.username}"
            )
            return Return.ok(LeadOut.model_validate(lead))
