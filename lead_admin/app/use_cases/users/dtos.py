"""
User Management Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from lead_admin.app.use_cases.dtos import ApiModel
from lead_admin.domain.entities import UserRole


class CreateUserCommand(BaseModel):
    username: str
    email: str
    password: str
    role: UserRole
    company_id: Optional[int] = None


class UserOut(ApiModel):
    """User as returned by the admin API (never includes the hash)"""

    id: str
    username: str
    email: str
    role: UserRole
    company_id: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileOut(ApiModel):
    id: str
    username: str
    email: Optional[str] = None
    role: UserRole
    company_id: Optional[int] = None
    is_active: bool = True
    is_legacy: bool = False
