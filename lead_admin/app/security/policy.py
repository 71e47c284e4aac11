"""
Role Policy Engine and Company-Scope Enforcer

Pure decision functions over an Identity and static permission grants.
Nothing here touches the store; callers short-circuit on an error Result
before any repository access.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional, Union

from lead_admin.domain.entities import OperationClass, UserRole
from lead_admin.libs.result import Error, Result, Return

from .identity import Identity

logger = logging.getLogger(__name__)

ACCESS_DENIED = "ACCESS_DENIED"
NO_COMPANY_ASSIGNED = "NO_COMPANY_ASSIGNED"
ACCESS_DENIED_TO_RESOURCE = "ACCESS_DENIED_TO_RESOURCE"
COMPANY_SCOPE_MISMATCH = "COMPANY_SCOPE_MISMATCH"
COMPANY_ACCESS_DENIED = "COMPANY_ACCESS_DENIED"

AUTHORIZATION_ERROR_CODES = frozenset(
    {
        ACCESS_DENIED,
        NO_COMPANY_ASSIGNED,
        ACCESS_DENIED_TO_RESOURCE,
        COMPANY_SCOPE_MISMATCH,
        COMPANY_ACCESS_DENIED,
    }
)

_ROLE_ORDER = list(UserRole)


@dataclass(frozen=True)
class PermissionGrant:
    """
    Static mapping of operation class to the roles allowed to perform it.

    update and delete must never be wider than read: a role that can change
    a record can always see it.
    """

    read: FrozenSet[UserRole]
    create: FrozenSet[UserRole]
    update: FrozenSet[UserRole]
    delete: FrozenSet[UserRole]

    def __post_init__(self):
        for op in (OperationClass.update, OperationClass.delete):
            extra = self.roles_for(op) - self.read
            if extra:
                raise ValueError(
                    f"{op.value} grant includes roles without read: "
                    f"{sorted(r.value for r in extra)}"
                )

    def roles_for(self, operation: OperationClass) -> FrozenSet[UserRole]:
        return getattr(self, OperationClass(operation).value)

    def allows(self, role: UserRole, operation: OperationClass) -> bool:
        return role in self.roles_for(operation)


LEAD_GRANTS = PermissionGrant(
    read=frozenset(
        {
            UserRole.super_admin,
            UserRole.company_admin,
            UserRole.super_viewer,
            UserRole.company_viewer,
        }
    ),
    create=frozenset(
        {
            UserRole.super_admin,
            UserRole.company_admin,
            UserRole.super_creator,
            UserRole.company_creator,
        }
    ),
    update=frozenset({UserRole.super_admin, UserRole.company_admin}),
    delete=frozenset({UserRole.super_admin, UserRole.company_admin}),
)

COMPANY_GRANTS = PermissionGrant(
    read=frozenset(
        {
            UserRole.super_admin,
            UserRole.company_admin,
            UserRole.super_viewer,
            UserRole.company_viewer,
            UserRole.super_creator,
        }
    ),
    create=frozenset({UserRole.super_admin, UserRole.super_creator}),
    update=frozenset({UserRole.super_admin, UserRole.company_admin}),
    delete=frozenset({UserRole.super_admin, UserRole.company_admin}),
)

USER_GRANTS = PermissionGrant(
    read=frozenset({UserRole.super_admin, UserRole.super_viewer}),
    create=frozenset({UserRole.super_admin}),
    update=frozenset({UserRole.super_admin}),
    delete=frozenset({UserRole.super_admin}),
)


@dataclass(frozen=True)
class ScopeFilter:
    """Company restriction applied to queries. None means unrestricted."""

    company_id: Optional[int] = None

    @property
    def unrestricted(self) -> bool:
        return self.company_id is None

    def allows(self, resource_company_id: Optional[int]) -> bool:
        return self.unrestricted or resource_company_id == self.company_id

    def resolve_company_filter(self, requested: Optional[int]) -> Optional[int]:
        """Company-tier filters are silently forced to the caller's own scope."""
        if self.unrestricted:
            return requested
        return self.company_id


@dataclass(frozen=True)
class AccessContext:
    """What a handler receives once authentication and authorization passed"""

    identity: Identity
    scope: ScopeFilter


def _required_roles(grants: PermissionGrant, operation: OperationClass) -> str:
    allowed = grants.roles_for(operation)
    return ", ".join(r.value for r in _ROLE_ORDER if r in allowed)


def authorize(
    identity: Identity,
    operation: OperationClass,
    grants: PermissionGrant = LEAD_GRANTS,
) -> Result[ScopeFilter]:
    """
    Decide whether the caller may perform an operation class at all.

    Returns:
        Result with the ScopeFilter to apply to queries, or Error with
        ACCESS_DENIED / NO_COMPANY_ASSIGNED
    """
    if not grants.allows(identity.role, operation):
        logger.info(
            "Role %s denied %s for user %s",
            identity.role.value,
            OperationClass(operation).value,
            identity.subject_id,
        )
        return Return.err(
            Error(
                ACCESS_DENIED,
                f"Access denied. Required roles: {_required_roles(grants, operation)}",
            )
        )

    if identity.is_super:
        return Return.ok(ScopeFilter())

    if identity.company_scope is None:
        logger.warning(
            "Configuration error: user %s has role %s but no company assigned",
            identity.subject_id,
            identity.role.value,
        )
        return Return.err(
            Error(NO_COMPANY_ASSIGNED, "No company assigned to your account")
        )

    return Return.ok(ScopeFilter(company_id=identity.company_scope))


def authorize_resource(
    identity: Identity,
    operation: OperationClass,
    resource_company_id: Optional[int],
    grants: PermissionGrant = LEAD_GRANTS,
    resource_label: str = "resource",
) -> Result[ScopeFilter]:
    """Like authorize, then requires a company-tier caller to own the resource."""
    result = authorize(identity, operation, grants)
    if result.is_err():
        return result

    if not result.value.allows(resource_company_id):
        logger.info(
            "User %s (company %s) denied access to %s of company %s",
            identity.subject_id,
            identity.company_scope,
            resource_label,
            resource_company_id,
        )
        return Return.err(
            Error(ACCESS_DENIED_TO_RESOURCE, f"Access denied to this {resource_label}")
        )

    return result


def authorize_create(
    identity: Identity,
    requested_company_id: Optional[int],
    grants: PermissionGrant = LEAD_GRANTS,
    resource_label: str = "lead",
) -> Result[Optional[int]]:
    """
    Resolve the owning company for a record about to be created.

    Company-tier callers default to their own scope and are rejected when
    they name another company. Super-tier callers get what they asked for.
    """
    result = authorize(identity, OperationClass.create, grants)
    if result.is_err():
        return result

    scope = result.value
    if scope.unrestricted:
        return Return.ok(requested_company_id)

    if requested_company_id is not None and requested_company_id != scope.company_id:
        return Return.err(
            Error(
                COMPANY_SCOPE_MISMATCH,
                f"Access denied. You can only create {resource_label}s for company ID "
                f"{scope.company_id}, but you tried to create for company ID "
                f"{requested_company_id}",
            )
        )

    return Return.ok(scope.company_id)


def check_company_access(
    identity: Identity, requested: Union[int, str, None]
) -> Result[None]:
    """
    Company-Scope Enforcer for endpoints naming a company.

    Runs after the capability check. A requested id that is not an integer
    never matches a company-tier scope.
    """
    if identity.is_super or requested is None or requested == "":
        return Return.ok()

    if isinstance(requested, str):
        try:
            requested = int(requested)
        except ValueError:
            requested = None

    if (
        requested is None
        or isinstance(requested, bool)
        or requested != identity.company_scope
    ):
        logger.info(
            "User %s (company %s) denied access to company %s",
            identity.subject_id,
            identity.company_scope,
            requested,
        )
        return Return.err(
            Error(
                COMPANY_ACCESS_DENIED,
                "Access denied. You can only access data from your assigned company.",
            )
        )

    return Return.ok()
