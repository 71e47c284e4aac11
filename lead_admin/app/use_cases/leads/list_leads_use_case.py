"""
List Leads Use Case

Filtered, paginated lead listing confined to the caller's company scope.
"""

from datetime import UTC, datetime
from typing import Optional

from lead_admin.app.repositories.investor_admin_repository import LeadQuery
from lead_admin.app.security.policy import ScopeFilter
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.app.use_cases.dtos import Pagination
from lead_admin.libs.result import Result, Return

from .dtos import LeadListCommand, LeadOut, LeadPage

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _filter_value(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value or value == "all":
        return None
    return value


def _parse_int(value: Optional[str]) -> Optional[int]:
    value = _filter_value(value)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_date_bound(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse an ISO date/datetime filter bound into naive UTC.

    Upper bounds are widened to the last instant of that day so the whole
    day is included. Unparsable values mean no bound.
    """
    value = _filter_value(value)
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None

    if end_of_day:
        parsed = parsed.replace(hour=23, minute=59, second=59, microsecond=999999)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def page_window(page: Optional[str], limit: Optional[str]) -> tuple:
    """(page, limit) with page >= 1 and 1 <= limit <= 100; limit <= 0 means the default"""
    page_num = _parse_int(page)
    page_num = max(1, page_num) if page_num is not None else 1

    limit_num = _parse_int(limit)
    if limit_num is None or limit_num <= 0:
        limit_num = DEFAULT_PAGE_SIZE
    limit_num = min(MAX_PAGE_SIZE, limit_num)
    return page_num, limit_num


class ListLeadsUseCase:
    """
    Use case for listing leads.

    Business Rules:
    - Super-tier callers may filter by any companyID
    - Company-tier callers always see their own company only; a requested
      companyID is silently replaced by their scope
    - "all" or an unparsable value means no filter
    - Ordered newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, scope: ScopeFilter, command: LeadListCommand) -> Result[LeadPage]:
        page, limit = page_window(command.page, command.limit)

        query = LeadQuery(
            company_id=scope.resolve_company_filter(_parse_int(command.company_id)),
            search=_filter_value(command.search),
            status=_filter_value(command.status),
            city=_filter_value(command.city),
            source=_filter_value(command.source),
            created_from=parse_date_bound(command.created_at_from),
            created_to=parse_date_bound(command.created_at_to, end_of_day=True),
            updated_from=parse_date_bound(command.updated_at_from),
            updated_to=parse_date_bound(command.updated_at_to, end_of_day=True),
        )

        async with self.uow:
            leads, total = await self.uow.investor_admins.list_paginated(
                query, offset=(page - 1) * limit, limit=limit
            )
            items = [LeadOut.model_validate(lead) for lead in leads]

        return Return.ok(
            LeadPage(items=items, pagination=Pagination.build(page, limit, total))
        )
