from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from lead_admin.api.error import ClientError, ServerError
from lead_admin.app.security import AUTHORIZATION_ERROR_CODES, LEAD_GRANTS, AccessContext
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.app.use_cases.dtos import ApiModel, Envelope, PaginatedEnvelope
from lead_admin.app.use_cases.leads import (
    CreateLeadUseCase,
    DeleteLeadUseCase,
    LeadCreateCommand,
    LeadHistory,
    LeadHistoryUseCase,
    LeadListCommand,
    LeadOut,
    LeadStatisticsOut,
    LeadStatisticsUseCase,
    ListLeadsUseCase,
    TransferInvestorUseCase,
    UpdateLeadUseCase,
)
from lead_admin.depends import get_unit_of_work, require_access
from lead_admin.domain.entities import OperationClass
from lead_admin.libs.result import Error

router = APIRouter(prefix="/admin/investor-admin", tags=["Investor Admin"])

PHONE_PATTERN = r"^[0-9+\-\s()]+$"


def _raise_lead_error(error: Error):
    """Map lead use-case errors to HTTP statuses"""
    if error.code in AUTHORIZATION_ERROR_CODES:
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if error.code in ("LEAD_NOT_FOUND", "INVESTOR_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code in ("PHONE_NUMBER_EXISTS", "ALREADY_TRANSFERRED"):
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    if error.code in ("MSG_DATE_REQUIRED", "NO_CHANGES"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("", response_model=PaginatedEnvelope[LeadOut])
async def list_leads(
    search: Optional[str] = None,
    lead_status: Optional[str] = Query(default=None, alias="status"),
    city: Optional[str] = None,
    company_id: Optional[str] = Query(default=None, alias="companyID"),
    source: Optional[str] = None,
    created_at_from: Optional[str] = Query(default=None, alias="createdAtFrom"),
    created_at_to: Optional[str] = Query(default=None, alias="createdAtTo"),
    updated_at_from: Optional[str] = Query(default=None, alias="updatedAtFrom"),
    updated_at_to: Optional[str] = Query(default=None, alias="updatedAtTo"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    access: AccessContext = Depends(require_access(OperationClass.read, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List leads

    Filters are lenient: "all", empty or unparsable values mean no filter.
    Company-tier callers always get their own company, whatever companyID
    they send.
    """
    command = LeadListCommand(
        search=search,
        status=lead_status,
        city=city,
        company_id=company_id,
        source=source,
        created_at_from=created_at_from,
        created_at_to=created_at_to,
        updated_at_from=updated_at_from,
        updated_at_to=updated_at_to,
        page=page,
        limit=limit,
    )
    result = await ListLeadsUseCase(uow).execute(access.scope, command)
    if result.is_err():
        _raise_lead_error(result.error)

    return PaginatedEnvelope(data=result.value.items, pagination=result.value.pagination)


@router.get("/statistics", response_model=Envelope[LeadStatisticsOut])
async def lead_statistics(
    access: AccessContext = Depends(require_access(OperationClass.read, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Aggregates over investmentAmount within the caller's scope"""
    result = await LeadStatisticsUseCase(uow).execute(access.scope)
    if result.is_err():
        _raise_lead_error(result.error)
    return Envelope(data=result.value)


class LeadCreateRequest(ApiModel):
    """
    Create lead HTTP request payload

    companyID defaults to the caller's company; msgDate is required for
    creator roles.
    """

    full_name: str = Field(..., min_length=1, max_length=255)
    phone_number: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    company_id: Optional[int] = Field(default=None, gt=0, alias="companyID")
    shares_quantity: Optional[int] = Field(default=None, gt=0)
    calculated_total: Optional[float] = Field(default=None, gt=0)
    investment_amount: Optional[float] = Field(default=None, gt=0)
    city: str = Field(..., min_length=1)
    notes: Optional[str] = None
    lead_status: Optional[str] = None
    calling_times: Optional[int] = Field(default=None, ge=0)
    source: Optional[str] = None
    msg_date: Optional[datetime] = None


class LeadUpdateRequest(ApiModel):
    """Update lead HTTP request payload; only the fields sent are compared and applied"""

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone_number: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    company_id: Optional[int] = Field(default=None, gt=0, alias="companyID")
    shares_quantity: Optional[int] = Field(default=None, gt=0)
    calculated_total: Optional[float] = Field(default=None, gt=0)
    investment_amount: Optional[float] = Field(default=None, gt=0)
    city: Optional[str] = Field(default=None, min_length=1)
    source: Optional[str] = None
    notes: Optional[str] = None
    lead_status: Optional[str] = None
    calling_times: Optional[int] = Field(default=None, ge=0)
    email_sent_to_admin: Optional[bool] = None
    email_sent_to_investor: Optional[bool] = None
    msg_date: Optional[datetime] = None


class TransferRequest(ApiModel):
    notes: Optional[str] = None
    msg_date: Optional[datetime] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[LeadOut])
async def create_lead(
    body: LeadCreateRequest,
    access: AccessContext = Depends(require_access(OperationClass.create, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create lead

    Raises:
        - 400 Bad Request: Validation failed, or msgDate missing for a creator
        - 403 Forbidden: Company-tier caller naming another company
        - 409 Conflict: Phone number already used by another lead
    """
    command = LeadCreateCommand(**body.model_dump())
    result = await CreateLeadUseCase(uow).execute(access.identity, command)
    if result.is_err():
        _raise_lead_error(result.error)
    return Envelope(data=result.value)


@router.put("/{id}", response_model=Envelope[LeadOut])
async def update_lead(
    id: int,
    body: LeadUpdateRequest,
    access: AccessContext = Depends(require_access(OperationClass.update, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update lead

    Raises:
        - 400 Bad Request: Nothing changed
        - 403 Forbidden: Lead (or target company) outside the caller's scope
        - 404 Not Found: No such lead
        - 409 Conflict: Phone number already used by another lead
    """
    result = await UpdateLeadUseCase(uow).execute(
        access.identity, id, body.model_dump(exclude_unset=True)
    )
    if result.is_err():
        _raise_lead_error(result.error)
    return Envelope(data=result.value)


@router.delete("/{id}", response_model=Envelope[LeadOut])
async def delete_lead(
    id: int,
    access: AccessContext = Depends(require_access(OperationClass.delete, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteLeadUseCase(uow).execute(access.identity, id)
    if result.is_err():
        _raise_lead_error(result.error)
    return Envelope(data=result.value)


@router.post(
    "/transfer/{investorId}",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[LeadOut],
)
async def transfer_investor(
    investorId: str,
    body: Optional[TransferRequest] = None,
    access: AccessContext = Depends(require_access(OperationClass.create, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Transfer a public submission into the lead pipeline

    The lead is created and the submission marked transferred in one
    transaction.

    Raises:
        - 403 Forbidden: Submission outside the caller's scope
        - 404 Not Found: No such submission
        - 409 Conflict: Already transferred
        - 500 Internal Server Error: Transfer failed and was rolled back
    """
    body = body or TransferRequest()
    result = await TransferInvestorUseCase(uow).execute(
        access.identity, investorId, notes=body.notes, msg_date=body.msg_date
    )
    if result.is_err():
        _raise_lead_error(result.error)
    return Envelope(data=result.value)


@router.get("/{id}/history", response_model=Envelope[LeadHistory])
async def lead_history(
    id: int,
    access: AccessContext = Depends(require_access(OperationClass.read, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Creation record followed by recorded updates, oldest first"""
    result = await LeadHistoryUseCase(uow).execute(access.identity, id)
    if result.is_err():
        _raise_lead_error(result.error)
    return Envelope(data=result.value)
