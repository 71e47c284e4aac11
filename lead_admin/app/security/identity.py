"""
Identity

Caller identity decoded from a session token. Lives for one request.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from lead_admin.domain.entities import RoleTier, UserRole


class Identity(BaseModel):
    """
    Verified caller identity.

    company_scope absent means unrestricted; it is only meaningful for
    company_* roles and ignored for super_* roles.
    """

    model_config = ConfigDict(frozen=True)

    subject_id: str
    username: str
    role: UserRole
    company_scope: Optional[int] = None
    issued_at: datetime
    expires_at: datetime

    @property
    def tier(self) -> RoleTier:
        return self.role.tier

    @property
    def is_super(self) -> bool:
        return self.role.is_super
