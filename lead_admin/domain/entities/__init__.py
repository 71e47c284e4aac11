"""
Lead Admin Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ActivityAction,
    OperationClass,
    ResourceType,
    RoleCapability,
    RoleTier,
    UserRole,
)

# Export all entities
from .company import Company
from .user import User
from .investor import Investor
from .investor_admin import InvestorAdmin
from .activity_log import ActivityLog

__all__ = [
    # Enums
    "ActivityAction",
    "OperationClass",
    "ResourceType",
    "RoleCapability",
    "RoleTier",
    "UserRole",
    # Entities
    "Company",
    "User",
    "Investor",
    "InvestorAdmin",
    "ActivityLog",
]
