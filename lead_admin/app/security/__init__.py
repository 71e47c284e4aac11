"""
Access Control

Identity, permission grants, the role policy engine, the company-scope
enforcer and the authentication gate.
"""

from .identity import Identity
from .gate import AuthenticationGate
from .policy import (
    AUTHORIZATION_ERROR_CODES,
    COMPANY_GRANTS,
    LEAD_GRANTS,
    USER_GRANTS,
    AccessContext,
    PermissionGrant,
    ScopeFilter,
    authorize,
    authorize_create,
    authorize_resource,
    check_company_access,
)

__all__ = [
    "Identity",
    "AuthenticationGate",
    "AUTHORIZATION_ERROR_CODES",
    "COMPANY_GRANTS",
    "LEAD_GRANTS",
    "USER_GRANTS",
    "AccessContext",
    "PermissionGrant",
    "ScopeFilter",
    "authorize",
    "authorize_create",
    "authorize_resource",
    "check_company_access",
]
