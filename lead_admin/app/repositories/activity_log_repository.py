from abc import ABC, abstractmethod
from typing import List

from lead_admin.domain.entities import ActivityLog


class IActivityLogRepository(ABC):
    """ActivityLog repository interface - application layer (append-only)"""

    @abstractmethod
    async def create(self, activity_log: ActivityLog) -> ActivityLog:
        """Append an audit event"""
        pass

    @abstractmethod
    async def list_updates_for_resource(
        self, resource_type: str, resource_id: str
    ) -> List[ActivityLog]:
        """UPDATE events for one resource, oldest first"""
        pass
