"""
Company Entity

The scope boundary for company_* roles.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class Company(SQLModel, table=True):
    """
    Company entity - every scoped record belongs to at most one company.

    Business Rules:
    - Only super_admin and super_creator create companies
    - created_by / updated_by track the acting user id
    """

    __tablename__ = "companies"

    company_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, max_length=50)
    url: Optional[str] = Field(default=None, max_length=500)

    created_by: Optional[str] = Field(default=None, max_length=64)
    updated_by: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
