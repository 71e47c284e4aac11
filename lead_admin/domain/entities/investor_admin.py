"""
InvestorAdmin Entity

A lead worked by staff.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class InvestorAdmin(SQLModel, table=True):
    """
    InvestorAdmin entity - lead under triage.

    Business Rules:
    - Phone number is unique across leads
    - original_investor_id links a lead transferred from a submission
    - created_by is set on create, updated_by on every update
    """

    __tablename__ = "investor_admins"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=50, index=True)
    shares_quantity: Optional[int] = None
    calculated_total: Optional[float] = None
    investment_amount: Optional[float] = None
    city: str = Field(max_length=255)
    source: str = Field(default="admin", max_length=100)

    notes: Optional[str] = None
    calling_times: Optional[int] = Field(default=0)
    lead_status: str = Field(default="new", max_length=50)
    original_investor_id: Optional[str] = Field(default=None, max_length=64, unique=True)
    company_id: Optional[int] = Field(default=None, foreign_key="companies.company_id")
    msg_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    email_sent_to_admin: bool = Field(default=False)
    email_sent_to_investor: bool = Field(default=False)

    created_by: Optional[str] = Field(default=None, max_length=64)
    updated_by: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_investor_admin_company_id", "company_id"),
        Index("idx_investor_admin_lead_status", "lead_status"),
        Index("idx_investor_admin_created_at", "created_at"),
    )
