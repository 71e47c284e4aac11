"""
Lead Use Case DTOs (Data Transfer Objects)

Commands and responses for the investor-admin (lead) domain.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from lead_admin.app.use_cases.dtos import ApiModel, Pagination
from lead_admin.domain.base import to_naive_utc


# ============================================================================
# Command DTOs
# ============================================================================


class LeadListCommand(BaseModel):
    """
    Raw listing filters as received on the query string.

    Values are kept as strings; the use case parses them leniently and
    drops anything unparsable or equal to "all".
    """

    search: Optional[str] = None
    status: Optional[str] = None
    city: Optional[str] = None
    company_id: Optional[str] = None
    source: Optional[str] = None
    created_at_from: Optional[str] = None
    created_at_to: Optional[str] = None
    updated_at_from: Optional[str] = None
    updated_at_to: Optional[str] = None
    page: Optional[str] = None
    limit: Optional[str] = None


class LeadCreateCommand(BaseModel):
    """Validated intent to create a lead"""

    full_name: str
    city: str
    phone_number: Optional[str] = None
    company_id: Optional[int] = None
    shares_quantity: Optional[int] = None
    calculated_total: Optional[float] = None
    investment_amount: Optional[float] = None
    notes: Optional[str] = None
    lead_status: Optional[str] = None
    calling_times: Optional[int] = None
    source: Optional[str] = None
    msg_date: Optional[datetime] = None

    @field_validator("msg_date")
    @classmethod
    def _store_as_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


# ============================================================================
# Response DTOs
# ============================================================================


class LeadOut(ApiModel):
    """Lead as returned by the admin API"""

    id: int
    full_name: str
    phone_number: Optional[str] = None
    shares_quantity: Optional[int] = None
    calculated_total: Optional[float] = None
    investment_amount: Optional[float] = None
    city: str
    source: str
    notes: Optional[str] = None
    calling_times: Optional[int] = None
    lead_status: str
    original_investor_id: Optional[str] = None
    company_id: Optional[int] = Field(default=None, alias="companyID")
    msg_date: Optional[datetime] = None
    email_sent_to_admin: bool = False
    email_sent_to_investor: bool = False
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class LeadPage(BaseModel):
    items: List[LeadOut]
    pagination: Pagination


class LeadStatisticsOut(ApiModel):
    """Aggregates over investmentAmount"""

    max: Optional[float] = None
    min: Optional[float] = None
    avg: Optional[float] = None
    sum: Optional[float] = None
    count: int = 0


class HistoryActor(ApiModel):
    id: Optional[str] = None
    username: str


class HistoryEntry(ApiModel):
    """One line of a lead's history: the creation or a recorded update"""

    action: Literal["CREATE", "UPDATE"]
    created_at: Optional[datetime] = None
    created_by_user: Optional[HistoryActor] = None
    updated_at: Optional[datetime] = None
    updated_by_user: Optional[HistoryActor] = None
    user_role: Optional[str] = None
    changes: Optional[Any] = None


class LeadHistory(ApiModel):
    id: int
    full_name: str
    history: List[HistoryEntry]
    total_updates: int
