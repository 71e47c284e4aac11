from abc import ABC, abstractmethod
from typing import List, Optional

from lead_admin.domain.entities import Investor


class IInvestorRepository(ABC):
    """Investor submission repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, investor_id: str) -> Optional[Investor]:
        """Get submission by ID"""
        pass

    @abstractmethod
    async def list(self, company_id: Optional[int] = None) -> List[Investor]:
        """List submissions newest first, restricted to one company when given"""
        pass

    @abstractmethod
    async def create(self, investor: Investor) -> Investor:
        """Create a new submission"""
        pass

    @abstractmethod
    async def update(self, investor: Investor) -> Investor:
        """Update existing submission"""
        pass
