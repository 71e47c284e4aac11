"""
User Entity

Staff account used to sign in to the admin API.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import generate_uuid, utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - staff account with a role and an optional company.

    Business Rules:
    - Username and email are unique
    - Username lookup at login is exact and case-sensitive
    - company_* roles must be assigned a company
    - Password stored as bcrypt hash (cost factor 12)
    - Inactive users cannot sign in
    """

    __tablename__ = "users"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=64)
    username: str = Field(unique=True, index=True, max_length=150)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(nullable=False)
    company_id: Optional[int] = Field(default=None, foreign_key="companies.company_id")
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_company_id", "company_id"),)
