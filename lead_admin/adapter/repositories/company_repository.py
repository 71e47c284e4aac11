from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lead_admin.app.repositories.company_repository import ICompanyRepository
from lead_admin.domain.entities import Company


class CompanyRepository(ICompanyRepository):
    """Company repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, company_id: int) -> Optional[Company]:
        """Get company by ID"""
        stmt = select(Company).where(Company.company_id == company_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(self, company_id: Optional[int] = None) -> List[Company]:
        stmt = select(Company)
        if company_id is not None:
            stmt = stmt.where(Company.company_id == company_id)
        stmt = stmt.order_by(Company.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, company: Company) -> Company:
        """Create a new company"""
        self.session.add(company)
        await self.session.flush()
        await self.session.refresh(company)
        return company

    async def update(self, company: Company) -> Company:
        """Update existing company"""
        self.session.add(company)
        await self.session.flush()
        await self.session.refresh(company)
        return company

    async def delete(self, company: Company) -> None:
        await self.session.delete(company)
        await self.session.flush()
