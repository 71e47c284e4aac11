"""
Company Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from lead_admin.app.use_cases.dtos import ApiModel


class CompanyCommand(BaseModel):
    """Validated company fields for create"""

    name: str
    description: Optional[str] = None
    phone_number: Optional[str] = None
    url: Optional[str] = None


class CompanyOut(ApiModel):
    company_id: int = Field(alias="companyID")
    name: str
    description: Optional[str] = None
    phone_number: Optional[str] = None
    url: Optional[str] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
