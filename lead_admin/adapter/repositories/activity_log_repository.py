from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lead_admin.app.repositories.activity_log_repository import IActivityLogRepository
from lead_admin.domain.entities import ActivityAction, ActivityLog


class ActivityLogRepository(IActivityLogRepository):
    """ActivityLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, activity_log: ActivityLog) -> ActivityLog:
        """Append an audit event (immutable)"""
        self.session.add(activity_log)
        await self.session.flush()
        await self.session.refresh(activity_log)
        return activity_log

    async def list_updates_for_resource(
        self, resource_type: str, resource_id: str
    ) -> List[ActivityLog]:
        stmt = (
            select(ActivityLog)
            .where(ActivityLog.resource_type == resource_type)
            .where(ActivityLog.resource_id == resource_id)
            .where(ActivityLog.action == ActivityAction.UPDATE.value)
            .order_by(ActivityLog.created_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
