from abc import ABC, abstractmethod

from lead_admin.app.use_cases.investors.dtos import InvestorOut


class INotificationService(ABC):
    """Outbound notification about new public submissions"""

    @abstractmethod
    async def notify_new_submission(self, investor: InvestorOut) -> None:
        pass
