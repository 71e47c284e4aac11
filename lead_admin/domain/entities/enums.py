"""
Lead Admin Domain Enums

All enumeration types used across domain entities and the access policy.
"""

from enum import Enum


class RoleTier(str, Enum):
    """Whether a role's authority is global or confined to one company"""

    super = "super"
    company = "company"


class RoleCapability(str, Enum):
    """CRUD breadth granted to a role"""

    admin = "admin"
    viewer = "viewer"
    creator = "creator"


class UserRole(str, Enum):
    """Staff role: tier x capability"""

    super_admin = "super_admin"
    company_admin = "company_admin"
    super_viewer = "super_viewer"
    company_viewer = "company_viewer"
    super_creator = "super_creator"
    company_creator = "company_creator"

    @property
    def tier(self) -> RoleTier:
        return RoleTier(self.value.split("_", 1)[0])

    @property
    def capability(self) -> RoleCapability:
        return RoleCapability(self.value.split("_", 1)[1])

    @property
    def is_super(self) -> bool:
        return self.tier == RoleTier.super

    @property
    def is_creator(self) -> bool:
        return self.capability == RoleCapability.creator


class OperationClass(str, Enum):
    """Operation classes covered by permission grants"""

    read = "read"
    create = "create"
    update = "update"
    delete = "delete"


class ActivityAction(str, Enum):
    """Audit event actions"""

    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    TRANSFER = "TRANSFER"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    READ = "READ"


class ResourceType(str, Enum):
    """Audited resource types"""

    InvestorAdmin = "InvestorAdmin"
    Investor = "Investor"
    Company = "Company"
    User = "User"
    Unknown = "Unknown"
