from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from lead_admin.domain.entities import InvestorAdmin


@dataclass(frozen=True)
class LeadQuery:
    """Filters for the lead listing. None means no filter."""

    company_id: Optional[int] = None
    search: Optional[str] = None
    status: Optional[str] = None
    city: Optional[str] = None
    source: Optional[str] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None
    updated_from: Optional[datetime] = None
    updated_to: Optional[datetime] = None


@dataclass(frozen=True)
class LeadStatistics:
    """Aggregates over investment_amount"""

    max: Optional[float]
    min: Optional[float]
    avg: Optional[float]
    sum: Optional[float]
    count: int


class IInvestorAdminRepository(ABC):
    """Lead repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, lead_id: int) -> Optional[InvestorAdmin]:
        """Get lead by ID"""
        pass

    @abstractmethod
    async def get_by_phone_number(self, phone_number: str) -> Optional[InvestorAdmin]:
        """Get the lead holding a phone number"""
        pass

    @abstractmethod
    async def get_by_original_investor_id(
        self, investor_id: str
    ) -> Optional[InvestorAdmin]:
        """Get the lead transferred from a submission"""
        pass

    @abstractmethod
    async def list_paginated(
        self, query: LeadQuery, offset: int, limit: int
    ) -> Tuple[List[InvestorAdmin], int]:
        """List leads newest first; returns (page, total matching)"""
        pass

    @abstractmethod
    async def statistics(self, company_id: Optional[int] = None) -> LeadStatistics:
        """Aggregate investment amounts, restricted to one company when given"""
        pass

    @abstractmethod
    async def create(self, lead: InvestorAdmin) -> InvestorAdmin:
        """Create a new lead"""
        pass

    @abstractmethod
    async def update(self, lead: InvestorAdmin) -> InvestorAdmin:
        """Update existing lead"""
        pass

    @abstractmethod
    async def delete(self, lead: InvestorAdmin) -> None:
        """Delete a lead"""
        pass
