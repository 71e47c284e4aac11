from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, Field

from lead_admin.api.error import ServerError
from lead_admin.app.security import LEAD_GRANTS, AccessContext
from lead_admin.app.services.notification_service import INotificationService
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.app.use_cases.dtos import ApiModel, Envelope
from lead_admin.app.use_cases.investors import (
    InvestorOut,
    ListInvestorsUseCase,
    SubmissionReceipt,
    SubmitInvestorCommand,
    SubmitInvestorUseCase,
)
from lead_admin.depends import get_notifier, get_unit_of_work, require_access
from lead_admin.domain.entities import OperationClass

router = APIRouter(prefix="/investor-form", tags=["Investor Form"])


class InvestorFormRequest(ApiModel):
    """
    Public investor form payload

    Validates incoming submission from the marketing site.
    """

    full_name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., min_length=1, pattern=r"^[0-9+\-\s()]+$")
    company_id: Optional[int] = Field(default=None, gt=0, alias="companyID")
    shares_quantity: int = Field(..., gt=0)
    calculated_total: float = Field(..., gt=0)
    city: str = Field(..., min_length=1)


class SubmissionResponse(BaseModel):
    success: bool = True
    message: str = "Submission received"
    data: SubmissionReceipt


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
async def submit_investor_form(
    body: InvestorFormRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationService = Depends(get_notifier),
):
    """
    Public submission (no authentication)

    The admin notification is sent after the response.
    """
    command = SubmitInvestorCommand(**body.model_dump())
    result = await SubmitInvestorUseCase(uow).execute(command)
    if result.is_err():
        raise ServerError(result.error)

    investor = result.value
    background_tasks.add_task(notifier.notify_new_submission, investor)
    return SubmissionResponse(
        data=SubmissionReceipt(id=investor.id, created_at=investor.created_at)
    )


@router.get("", response_model=Envelope[List[InvestorOut]])
async def list_submissions(
    access: AccessContext = Depends(require_access(OperationClass.read, LEAD_GRANTS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Submissions visible to the caller, newest first"""
    result = await ListInvestorsUseCase(uow).execute(access.scope)
    if result.is_err():
        raise ServerError(result.error)
    return Envelope(data=result.value)
