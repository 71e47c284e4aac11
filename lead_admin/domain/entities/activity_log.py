"""
ActivityLog Entity

Immutable audit trail of mutating requests.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow


class ActivityLog(SQLModel, table=True):
    """
    ActivityLog entity - one row per tracked request.

    Business Rules:
    - Append-only (never updated or deleted by the service)
    - Written after the response is sent; failures never reach the caller
    - request_body is sanitized and size-capped before it is stored
    - actor_id nullable for pre-authentication attempts (failed login)
    """

    __tablename__ = "activity_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    actor_id: Optional[str] = Field(default=None, max_length=64)
    actor_username: str = Field(default="anonymous", max_length=150)
    actor_role: str = Field(default="none", max_length=50)
    company_id: Optional[int] = Field(default=None)

    action: str = Field(max_length=50)
    resource_type: str = Field(max_length=50)
    resource_id: Optional[str] = Field(default=None, max_length=64)

    http_method: str = Field(max_length=10)
    endpoint: str = Field(max_length=500)
    status_code: int
    duration_ms: Optional[int] = None

    client_ip: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, max_length=255)

    request_body: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    error_message: Optional[str] = None
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_activity_created_at", "created_at"),
        Index("idx_activity_actor_id", "actor_id"),
        Index("idx_activity_resource", "resource_type", "resource_id", "action"),
        Index("idx_activity_company_id", "company_id"),
    )
