"""
Investor Entity

Raw investor-interest submission from the public form.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import generate_uuid, utcnow


class Investor(SQLModel, table=True):
    """
    Investor entity - public form submission awaiting triage.

    Business Rules:
    - Created without authentication
    - transferred flips to True exactly when an InvestorAdmin lead is
      created from it, in the same transaction
    """

    __tablename__ = "investors"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=64)
    full_name: str = Field(max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=50)
    shares_quantity: Optional[int] = None
    calculated_total: Optional[float] = None
    city: str = Field(max_length=255)
    source: str = Field(default="website", max_length=100)
    company_id: Optional[int] = Field(default=None, foreign_key="companies.company_id")

    transferred: bool = Field(default=False)
    email_sent_to_admin: bool = Field(default=False)
    email_sent_to_investor: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_investor_company_id", "company_id"),
        Index("idx_investor_transferred", "transferred"),
    )
