from abc import ABC, abstractmethod

from lead_admin.app.repositories.activity_log_repository import IActivityLogRepository
from lead_admin.app.repositories.company_repository import ICompanyRepository
from lead_admin.app.repositories.investor_admin_repository import IInvestorAdminRepository
from lead_admin.app.repositories.investor_repository import IInvestorRepository
from lead_admin.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    companies: ICompanyRepository
    investors: IInvestorRepository
    investor_admins: IInvestorAdminRepository
    activity_logs: IActivityLogRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
