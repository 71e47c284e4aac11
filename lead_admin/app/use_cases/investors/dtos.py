"""
Investor Submission Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from lead_admin.app.use_cases.dtos import ApiModel


class SubmitInvestorCommand(BaseModel):
    full_name: str
    phone_number: str
    shares_quantity: int
    calculated_total: float
    city: str
    company_id: Optional[int] = None


class SubmissionReceipt(ApiModel):
    id: str
    created_at: datetime


class InvestorOut(ApiModel):
    id: str
    full_name: str
    phone_number: Optional[str] = None
    shares_quantity: Optional[int] = None
    calculated_total: Optional[float] = None
    city: str
    source: str
    company_id: Optional[int] = Field(default=None, alias="companyID")
    transferred: bool = False
    email_sent_to_admin: bool = False
    email_sent_to_investor: bool = False
    created_at: datetime
    updated_at: datetime
