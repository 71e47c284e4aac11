from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlmodel import select

from lead_admin.adapter.repositories.investor_repository import InvestorRepository
from lead_admin.domain.entities import Investor, InvestorAdmin, UserRole


def transfer_url(investor_id: str) -> str:
    return f"/api/admin/investor-admin/transfer/{investor_id}"


@pytest.mark.asyncio
async def test_transfer_creates_lead_and_marks_submission(
    client: AsyncClient, sign_in, make_investor, db_session, companies
):
    """Transfer

    Given a company 5 submission
    When a company_admin of company 5 transfers it
    Then a lead is created from the submission
    And the submission is marked transferred
    """
    submission = await make_investor(company_id=5)
    await sign_in(UserRole.company_admin, company_id=5)

    response = await client.post(transfer_url(submission.id), json={"notes": "Warm lead"})

    assert response.status_code == 201
    lead = response.json()["data"]
    assert lead["originalInvestorId"] == submission.id
    assert lead["fullName"] == "Jane Investor"
    assert lead["notes"] == "Warm lead"
    assert lead["companyID"] == 5

    stored = (
        await db_session.exec(select(Investor).where(Investor.id == submission.id))
    ).one()
    assert stored.transferred is True


@pytest.mark.asyncio
async def test_transfer_twice_conflicts(client: AsyncClient, sign_in, make_investor, companies):
    """Given an already transferred submission, a second transfer fails with 409"""
    submission = await make_investor(company_id=5)
    await sign_in(UserRole.super_admin)

    first = await client.post(transfer_url(submission.id))
    second = await client.post(transfer_url(submission.id))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"] == "Investor already transferred"


@pytest.mark.asyncio
async def test_transfer_other_company_submission_is_forbidden(
    client: AsyncClient, sign_in, make_investor, companies
):
    submission = await make_investor(company_id=9)
    await sign_in(UserRole.company_admin, company_id=5)

    response = await client.post(transfer_url(submission.id))

    assert response.status_code == 403
    assert response.json()["error"] == "Access denied to this investor"


@pytest.mark.asyncio
async def test_transfer_unknown_submission_is_not_found(client: AsyncClient, sign_in):
    await sign_in(UserRole.super_admin)

    response = await client.post(transfer_url("missing"))

    assert response.status_code == 404
    assert response.json()["error"] == "Investor not found"


@pytest.mark.asyncio
async def test_creator_transfer_requires_msg_date(
    client: AsyncClient, sign_in, make_investor, companies
):
    submission = await make_investor(company_id=5)
    await sign_in(UserRole.company_creator, company_id=5)

    without = await client.post(transfer_url(submission.id))
    with_date = await client.post(
        transfer_url(submission.id), json={"msgDate": "2026-02-01T08:00:00+07:00"}
    )

    assert without.status_code == 400
    assert with_date.status_code == 201
    assert with_date.json()["data"]["msgDate"] == "2026-02-01T01:00:00"


@pytest.mark.asyncio
async def test_transfer_is_atomic(
    client: AsyncClient, sign_in, make_investor, db_session, monkeypatch, companies
):
    """Atomic transfer

    Given marking the submission transferred fails after the lead was created
    When I transfer the submission
    Then the request fails with 500
    And neither the lead nor the transferred flag is persisted
    """
    submission = await make_investor(company_id=5)
    await sign_in(UserRole.super_admin)
    monkeypatch.setattr(
        InvestorRepository, "update", AsyncMock(side_effect=RuntimeError("write failed"))
    )

    response = await client.post(transfer_url(submission.id))

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Internal server error",
        "code": "TRANSFER_FAILED",
    }
    leads = (await db_session.exec(select(InvestorAdmin))).all()
    assert leads == []
    stored = (
        await db_session.exec(select(Investor).where(Investor.id == submission.id))
    ).one()
    assert stored.transferred is False
