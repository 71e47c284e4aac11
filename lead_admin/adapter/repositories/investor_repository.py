from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lead_admin.app.repositories.investor_repository import IInvestorRepository
from lead_admin.domain.entities import Investor


class InvestorRepository(IInvestorRepository):
    """Investor submission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, investor_id: str) -> Optional[Investor]:
        stmt = select(Investor).where(Investor.id == investor_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(self, company_id: Optional[int] = None) -> List[Investor]:
        stmt = select(Investor)
        if company_id is not None:
            stmt = stmt.where(Investor.company_id == company_id)
        stmt = stmt.order_by(Investor.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, investor: Investor) -> Investor:
        self.session.add(investor)
        await self.session.flush()
        await self.session.refresh(investor)
        return investor

    async def update(self, investor: Investor) -> Investor:
        self.session.add(investor)
        await self.session.flush()
        await self.session.refresh(investor)
        return investor
