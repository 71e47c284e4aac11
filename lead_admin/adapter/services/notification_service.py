import logging

from lead_admin.app.services.notification_service import INotificationService
from lead_admin.app.use_cases.investors.dtos import InvestorOut

logger = logging.getLogger(__name__)


class LoggingNotificationService(INotificationService):
    """
    Logs the notification that would be mailed to the admin inbox.

    Used until an email provider is configured.
    """

    def __init__(self, recipient: str = ""):
        self.recipient = recipient

    async def notify_new_submission(self, investor: InvestorOut) -> None:
        try:
            logger.info(
                f"New investor submission {investor.id} from {investor.city} "
                f"(company {investor.company_id}) for {self.recipient or 'admin'}"
            )
        except Exception:
            logger.exception("Failed to send submission notification")
