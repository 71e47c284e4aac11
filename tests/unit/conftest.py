from datetime import UTC, datetime, timedelta
from typing import Optional

import pytest
from unittest.mock import AsyncMock, MagicMock

from lead_admin.app.security import Identity
from lead_admin.domain.entities import UserRole


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_username_or_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.companies = MagicMock()
    uow.companies.get_by_id = AsyncMock(return_value=None)

    uow.investors = MagicMock()
    uow.investors.get_by_id = AsyncMock(return_value=None)
    uow.investors.create = AsyncMock(side_effect=lambda investor: investor)
    uow.investors.update = AsyncMock(side_effect=lambda investor: investor)

    uow.investor_admins = MagicMock()
    uow.investor_admins.get_by_id = AsyncMock(return_value=None)
    uow.investor_admins.get_by_phone_number = AsyncMock(return_value=None)
    uow.investor_admins.get_by_original_investor_id = AsyncMock(return_value=None)
    uow.investor_admins.list_paginated = AsyncMock(return_value=([], 0))
    uow.investor_admins.create = AsyncMock(side_effect=lambda lead: lead)
    uow.investor_admins.update = AsyncMock(side_effect=lambda lead: lead)
    uow.investor_admins.delete = AsyncMock()

    uow.activity_logs = MagicMock()
    uow.activity_logs.create = AsyncMock()
    uow.activity_logs.list_updates_for_resource = AsyncMock(return_value=[])
    return uow


@pytest.fixture
def make_identity():
    def _make_identity(
        role: UserRole, company_scope: Optional[int] = None, subject_id: str = "user-1"
    ) -> Identity:
        issued_at = datetime(2026, 1, 1, tzinfo=UTC)
        return Identity(
            subject_id=subject_id,
            username=role.value,
            role=role,
            company_scope=company_scope,
            issued_at=issued_at,
            expires_at=issued_at + timedelta(hours=24),
        )

    return _make_identity
