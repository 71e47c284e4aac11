"""
Lead History Use Case

Reconstructs a lead's change history from its creation and the recorded
UPDATE audit events.
"""

from lead_admin.app.security.identity import Identity
from lead_admin.app.security.policy import LEAD_GRANTS, authorize_resource
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import OperationClass, ResourceType
from lead_admin.libs.result import Result, Return

from .dtos import HistoryActor, HistoryEntry, LeadHistory
from .update_lead_use_case import LEAD_NOT_FOUND


class LeadHistoryUseCase:
    """
    Use case for reading a lead's history.

    Business Rules:
    - Same visibility as reading the lead itself
    - First entry is the creation, followed by updates oldest first
    - Update entries carry the sanitized request body as changes
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, lead_id: int) -> Result[LeadHistory]:
        async with self.uow:
            lead = await self.uow.investor_admins.get_by_id(lead_id)
            if lead is None:
                return Return.err(LEAD_NOT_FOUND)

            access = authorize_resource(
                identity, OperationClass.read, lead.company_id, LEAD_GRANTS, "lead"
            )
            if access.is_err():
                return access

            creator = None
            if lead.created_by:
                user = await self.uow.users.get_by_id(lead.created_by)
                creator = HistoryActor(
                    id=lead.created_by,
                    username=user.username if user else lead.created_by,
                )

            updates = await self.uow.activity_logs.list_updates_for_resource(
                ResourceType.InvestorAdmin.value, str(lead.id)
            )

            history = [
                HistoryEntry(
                    action="CREATE",
                    created_at=lead.created_at,
                    created_by_user=creator,
                    changes={"fullName": lead.full_name, "phoneNumber": lead.phone_number},
                )
            ]
            history.extend(
                HistoryEntry(
                    action="UPDATE",
                    updated_at=event.created_at,
                    updated_by_user=HistoryActor(
                        id=event.actor_id, username=event.actor_username
                    ),
                    user_role=event.actor_role,
                    changes=event.request_body,
                )
                for event in updates
            )

            return Return.ok(
                LeadHistory(
                    id=lead.id,
                    full_name=lead.full_name,
                    history=history,
                    total_updates=len(updates),
                )
            )
