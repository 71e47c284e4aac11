from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from lead_admin.app.repositories.investor_admin_repository import (
    IInvestorAdminRepository,
    LeadQuery,
    LeadStatistics,
)
from lead_admin.domain.entities import InvestorAdmin


class InvestorAdminRepository(IInvestorAdminRepository):
    """Lead repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, lead_id: int) -> Optional[InvestorAdmin]:
        """Get lead by ID"""
        stmt = select(InvestorAdmin).where(InvestorAdmin.id == lead_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_phone_number(self, phone_number: str) -> Optional[InvestorAdmin]:
        stmt = select(InvestorAdmin).where(InvestorAdmin.phone_number == phone_number)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_original_investor_id(
        self, investor_id: str
    ) -> Optional[InvestorAdmin]:
        stmt = select(InvestorAdmin).where(
            InvestorAdmin.original_investor_id == investor_id
        )
        result = await self.session.exec(stmt)
        return result.first()

    @staticmethod
    def _conditions(query: LeadQuery) -> list:
        conditions = []
        if query.company_id is not None:
            conditions.append(InvestorAdmin.company_id == query.company_id)
        if query.search:
            pattern = f"%{query.search}%"
            conditions.append(
                or_(
                    InvestorAdmin.full_name.ilike(pattern),
                    InvestorAdmin.phone_number.ilike(pattern),
                )
            )
        if query.status:
            conditions.append(InvestorAdmin.lead_status == query.status)
        if query.city:
            conditions.append(InvestorAdmin.city == query.city)
        if query.source:
            conditions.append(InvestorAdmin.source == query.source)
        if query.created_from:
            conditions.append(InvestorAdmin.created_at >= query.created_from)
        if query.created_to:
            conditions.append(InvestorAdmin.created_at <= query.created_to)
        if query.updated_from:
            conditions.append(InvestorAdmin.updated_at >= query.updated_from)
        if query.updated_to:
            conditions.append(InvestorAdmin.updated_at <= query.updated_to)
        return conditions

    async def list_paginated(
        self, query: LeadQuery, offset: int, limit: int
    ) -> Tuple[List[InvestorAdmin], int]:
        """
        List leads matching the query, newest first.

        Returns the requested page and the total number of matching rows.
        """
        conditions = self._conditions(query)

        count_stmt = select(func.count()).select_from(InvestorAdmin).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(InvestorAdmin)
            .where(*conditions)
            .order_by(InvestorAdmin.created_at.desc(), InvestorAdmin.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def statistics(self, company_id: Optional[int] = None) -> LeadStatistics:
        amount = InvestorAdmin.investment_amount
        stmt = select(
            func.max(amount),
            func.min(amount),
            func.avg(amount),
            func.sum(amount),
            func.count(amount),
        ).select_from(InvestorAdmin)
        if company_id is not None:
            stmt = stmt.where(InvestorAdmin.company_id == company_id)

        row = (await self.session.exec(stmt)).one()
        return LeadStatistics(
            max=row[0], min=row[1], avg=row[2], sum=row[3], count=row[4] or 0
        )

    async def create(self, lead: InvestorAdmin) -> InvestorAdmin:
        """Create a new lead"""
        self.session.add(lead)
        await self.session.flush()
        await self.session.refresh(lead)
        return lead

    async def update(self, lead: InvestorAdmin) -> InvestorAdmin:
        """Update existing lead"""
        self.session.add(lead)
        await self.session.flush()
        await self.session.refresh(lead)
        return lead

    async def delete(self, lead: InvestorAdmin) -> None:
        await self.session.delete(lead)
        await self.session.flush()
