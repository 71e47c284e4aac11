"""
Update Lead Use Case

Applies a partial update to a lead the caller is allowed to change.
"""

import logging
from datetime import datetime
from typing import Any, Dict

from lead_admin.app.security.identity import Identity
from lead_admin.app.security.policy import (
    LEAD_GRANTS,
    authorize_resource,
    check_company_access,
)
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.base import to_naive_utc, utcnow
from lead_admin.domain.entities import OperationClass
from lead_admin.libs.result import Error, Result, Return

from .create_lead_use_case import PHONE_NUMBER_EXISTS
from .dtos import LeadOut

logger = logging.getLogger(__name__)

LEAD_NOT_FOUND = Error("LEAD_NOT_FOUND", "Lead not found")
NO_CHANGES = Error(
    "NO_CHANGES",
    "No changes detected. Please update at least one field before submitting.",
)

UPDATABLE_FIELDS = (
    "full_name",
    "phone_number",
    "city",
    "source",
    "email_sent_to_admin",
    "email_sent_to_investor",
    "notes",
    "calling_times",
    "lead_status",
    "investment_amount",
    "calculated_total",
    "shares_quantity",
    "msg_date",
    "company_id",
)


class UpdateLeadUseCase:
    """
    Use case for updating a lead.

    Business Rules:
    - Company-tier callers may only update leads of their own company
    - Moving a lead to another company is subject to the same scope check
    - An update that changes nothing is rejected (keeps the audit trail clean)
    - updated_by records the acting user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, lead_id: int, changes: Dict[str, Any]
    ) -> Result[LeadOut]:
        """
        Args:
            identity: Caller
            lead_id: Lead to update
            changes: Only the fields the caller sent, snake_case
        """
        async with self.uow:
            lead = await self.uow.investor_admins.get_by_id(lead_id)
            if lead is None:
                return Return.err(LEAD_NOT_FOUND)

            access = authorize_resource(
                identity, OperationClass.update, lead.company_id, LEAD_GRANTS, "lead"
            )
            if access.is_err():
                return access

            updates = {}
            for name, value in changes.items():
                if name not in UPDATABLE_FIELDS:
                    continue
                if isinstance(value, datetime):
                    value = to_naive_utc(value)
                if value != getattr(lead, name):
                    updates[name] = value

            if not updates:
                return Return.err(NO_CHANGES)

            if "company_id" in updates:
                moved = check_company_access(identity, updates["company_id"])
                if moved.is_err():
                    return moved

            if updates.get("phone_number"):
                existing = await self.uow.investor_admins.get_by_phone_number(
                    updates["phone_number"]
                )
                if existing is not None and existing.id != lead.id:
                    return Return.err(PHONE_NUMBER_EXISTS)

            for name, value in updates.items():
                setattr(lead, name, value)
            lead.updated_by = identity.subject_id
            lead.updated_at = utcnow()

            lead = await self.uow.investor_admins.update(lead)
            await self.uow.commit()

            logger.info(
                f"Lead {lead.id} updated by {identity.username}: {sorted(updates)}"
            )
            return Return.ok(LeadOut.model_validate(lead))
