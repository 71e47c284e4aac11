"""
Authentication Use Cases

Credential verification for staff sign-in.
"""

from .credential_lookup import LEGACY_ADMIN_ID, CredentialLookup
from .login_use_case import LoginUseCase
from .dtos import LoginResponse, LoginResult, LoginUser

__all__ = [
    # Use Cases
    "LoginUseCase",
    "CredentialLookup",
    "LEGACY_ADMIN_ID",
    # DTOs - Responses
    "LoginResponse",
    "LoginResult",
    "LoginUser",
]
