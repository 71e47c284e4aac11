from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import Field

from lead_admin.api.error import ClientError, ServerError
from lead_admin.app.security import COMPANY_GRANTS, AccessContext
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.app.use_cases.companies import (
    CompanyCommand,
    CompanyOut,
    CreateCompanyUseCase,
    DeleteCompanyUseCase,
    GetCompanyUseCase,
    ListCompaniesUseCase,
    UpdateCompanyUseCase,
)
from lead_admin.app.use_cases.dtos import ApiModel, Envelope
from lead_admin.depends import get_unit_of_work, require_access
from lead_admin.domain.entities import OperationClass

router = APIRouter(prefix="/admin/company", tags=["Company"])


class CreateCompanyRequest(ApiModel):
    """
    Create company HTTP request payload
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, pattern=r"^[0-9+\-\s()]+$")
    url: Optional[str] = None


class UpdateCompanyRequest(ApiModel):
    """Update company HTTP request payload; only the fields sent are applied"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, pattern=r"^[0-9+\-\s()]+$")
    url: Optional[str] = None


def _raise_company_error(error):
    if error.code == "COMPANY_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("", response_model=Envelope[List[CompanyOut]])
async def list_companies(
    access: AccessContext = Depends(require_access(OperationClass.read, COMPANY_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List companies

    Company-tier callers receive only their own company.
    """
    result = await ListCompaniesUseCase(uow).execute(access.scope)
    if result.is_err():
        raise ServerError(result.error)
    return Envelope(data=result.value)


@router.get("/{companyID}", response_model=Envelope[CompanyOut])
async def get_company(
    companyID: int,
    access: AccessContext = Depends(
        require_access(OperationClass.read, COMPANY_GRANTS, company_scoped=True)
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get one company

    Raises:
        - 403 Forbidden: Company-tier caller asking for another company
        - 404 Not Found: No such company
    """
    result = await GetCompanyUseCase(uow).execute(companyID)
    if result.is_err():
        _raise_company_error(result.error)
    return Envelope(data=result.value)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[CompanyOut])
async def create_company(
    body: CreateCompanyRequest,
    access: AccessContext = Depends(require_access(OperationClass.create, COMPANY_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Create company (super_admin, super_creator)"""
    command = CompanyCommand(**body.model_dump())
    result = await CreateCompanyUseCase(uow).execute(access.identity, command)
    if result.is_err():
        raise ServerError(result.error)
    return Envelope(data=result.value)


@router.put("/{companyID}", response_model=Envelope[CompanyOut])
async def update_company(
    companyID: int,
    body: UpdateCompanyRequest,
    access: AccessContext = Depends(
        require_access(OperationClass.update, COMPANY_GRANTS, company_scoped=True)
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateCompanyUseCase(uow).execute(
        access.identity, companyID, body.model_dump(exclude_unset=True)
    )
    if result.is_err():
        _raise_company_error(result.error)
    return Envelope(data=result.value)


@router.delete("/{companyID}", response_model=Envelope[CompanyOut])
async def delete_company(
    companyID: int,
    access: AccessContext = Depends(
        require_access(OperationClass.delete, COMPANY_GRANTS, company_scoped=True)
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteCompanyUseCase(uow).execute(companyID)
    if result.is_err():
        _raise_company_error(result.error)
    return Envelope(data=result.value)
