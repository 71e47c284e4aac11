from abc import ABC, abstractmethod
from typing import List, Optional

from lead_admin.domain.entities import Company


class ICompanyRepository(ABC):
    """Company repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, company_id: int) -> Optional[Company]:
        """Get company by ID"""
        pass

    @abstractmethod
    async def list(self, company_id: Optional[int] = None) -> List[Company]:
        """List companies, restricted to one company when company_id is given"""
        pass

    @abstractmethod
    async def create(self, company: Company) -> Company:
        """Create a new company"""
        pass

    @abstractmethod
    async def update(self, company: Company) -> Company:
        """Update existing company"""
        pass

    @abstractmethod
    async def delete(self, company: Company) -> None:
        """Delete a company"""
        pass
