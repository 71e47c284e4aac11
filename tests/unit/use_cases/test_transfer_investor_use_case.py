from datetime import datetime

import pytest

from lead_admin.app.use_cases.leads import TransferInvestorUseCase
from lead_admin.domain.entities import Investor, InvestorAdmin, UserRole


def _investor(**overrides) -> Investor:
    values = dict(
        id="inv-1",
        full_name="Jane Investor",
        phone_number="+1 555 0100",
        shares_quantity=100,
        calculated_total=2500.0,
        city="Hanoi",
        company_id=5,
    )
    values.update(overrides)
    return Investor(**values)


def _assign_id(lead: InvestorAdmin) -> InvestorAdmin:
    lead.id = 12
    return lead


@pytest.fixture
def uow(mock_uow):
    mock_uow.investors.get_by_id.return_value = _investor()
    mock_uow.investor_admins.create.side_effect = _assign_id
    return mock_uow


@pytest.mark.asyncio
async def test_transfer_creates_lead_and_flags_submission(uow, make_identity):
    """
    Given an untransferred submission of company 5
    When a company_admin of company 5 transfers it
    Then a lead copying its fields is created and the submission is flagged
    in the same commit
    """
    identity = make_identity(UserRole.company_admin, 5, "u-5")

    result = await TransferInvestorUseCase(uow).execute(identity, "inv-1", notes="Call back")

    assert result.is_ok()
    lead = result.value
    assert lead.id == 12
    assert lead.original_investor_id == "inv-1"
    assert lead.full_name == "Jane Investor"
    assert lead.source == "website"
    assert lead.lead_status == "new"
    assert lead.notes == "Call back"
    assert lead.created_by == "u-5"

    flagged = uow.investors.update.await_args.args[0]
    assert flagged.transferred is True
    uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_second_transfer_conflicts(uow, make_identity):
    uow.investors.get_by_id.return_value = _investor(transferred=True)

    result = await TransferInvestorUseCase(uow).execute(
        make_identity(UserRole.super_admin), "inv-1"
    )

    assert result.error.code == "ALREADY_TRANSFERRED"
    uow.investor_admins.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_existing_linked_lead_conflicts(uow, make_identity):
    uow.investor_admins.get_by_original_investor_id.return_value = InvestorAdmin(
        id=3, full_name="Jane Investor", city="Hanoi", original_investor_id="inv-1"
    )

    result = await TransferInvestorUseCase(uow).execute(
        make_identity(UserRole.super_admin), "inv-1"
    )

    assert result.error.code == "ALREADY_TRANSFERRED"


@pytest.mark.asyncio
async def test_unknown_submission(uow, make_identity):
    uow.investors.get_by_id.return_value = None

    result = await TransferInvestorUseCase(uow).execute(
        make_identity(UserRole.super_admin), "missing"
    )

    assert result.error.code == "INVESTOR_NOT_FOUND"


@pytest.mark.asyncio
async def test_submission_of_another_company_is_denied(uow, make_identity):
    result = await TransferInvestorUseCase(uow).execute(
        make_identity(UserRole.company_admin, 9), "inv-1"
    )

    assert result.error.code == "ACCESS_DENIED_TO_RESOURCE"
    assert result.error.message == "Access denied to this investor"


@pytest.mark.asyncio
async def test_creator_needs_msg_date(uow, make_identity):
    identity = make_identity(UserRole.company_creator, 5)

    missing = await TransferInvestorUseCase(uow).execute(identity, "inv-1")
    present = await TransferInvestorUseCase(uow).execute(
        identity, "inv-1", msg_date=datetime(2026, 2, 1, 9, 0)
    )

    assert missing.error.code == "MSG_DATE_REQUIRED"
    uow.investors.get_by_id.assert_awaited_once()
    assert present.value.msg_date == datetime(2026, 2, 1, 9, 0)


@pytest.mark.asyncio
async def test_failure_while_flagging_rolls_back(uow, make_identity):
    uow.investors.update.side_effect = RuntimeError("database unavailable")

    result = await TransferInvestorUseCase(uow).execute(
        make_identity(UserRole.super_admin), "inv-1"
    )

    assert result.error.code == "TRANSFER_FAILED"
    uow.rollback.assert_awaited_once()
    uow.commit.assert_not_awaited()
