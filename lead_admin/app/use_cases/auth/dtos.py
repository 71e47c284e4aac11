"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from typing import Optional

from pydantic import BaseModel

from lead_admin.app.security.identity import Identity
from lead_admin.app.use_cases.dtos import ApiModel


class LoginUser(ApiModel):
    """User information returned by a successful login"""

    id: str
    username: str
    email: str
    role: str
    company_id: Optional[int] = None


class LoginResponse(BaseModel):
    """HTTP body of a successful login"""

    success: bool = True
    user: LoginUser


class LoginResult(BaseModel):
    """
    Output of the credential verifier.

    The route issues the session token from identity and returns user.
    """

    identity: Identity
    user: LoginUser
