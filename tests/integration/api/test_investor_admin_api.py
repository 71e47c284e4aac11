from datetime import datetime

import pytest
from httpx import AsyncClient
from sqlmodel import select

from lead_admin.domain.entities import InvestorAdmin, UserRole

LEADS_URL = "/api/admin/investor-admin"


@pytest.mark.asyncio
async def test_create_lead_records_creator(client: AsyncClient, sign_in, companies):
    """Create Lead

    Given a super_admin
    When I create a lead for company 9
    Then the lead is returned with createdBy set to me
    """
    user = await sign_in(UserRole.super_admin)

    response = await client.post(
        LEADS_URL,
        json={
            "fullName": "Nguyen Van A",
            "phoneNumber": "+84 912 345 678",
            "city": "Hanoi",
            "companyID": 9,
            "investmentAmount": 50000,
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["fullName"] == "Nguyen Van A"
    assert data["companyID"] == 9
    assert data["createdBy"] == user.id
    assert data["leadStatus"] == "new"


@pytest.mark.asyncio
async def test_create_lead_rejects_duplicate_phone(client: AsyncClient, sign_in, seed, companies):
    """Given a lead with phone 0900, creating another lead with it fails with 409"""
    await seed(InvestorAdmin(full_name="First", phone_number="0900", city="Hue", company_id=5))
    await sign_in(UserRole.super_admin)

    response = await client.post(
        LEADS_URL, json={"fullName": "Second", "phoneNumber": "0900", "city": "Hue"}
    )

    assert response.status_code == 409
    assert response.json()["error"] == "Phone number already exists for another lead."


@pytest.mark.asyncio
async def test_creator_must_send_msg_date(client: AsyncClient, sign_in, companies):
    """Given a super_creator, creating a lead without msgDate fails with 400"""
    await sign_in(UserRole.super_creator)

    response = await client.post(LEADS_URL, json={"fullName": "No Date", "city": "Hue"})

    assert response.status_code == 400
    assert response.json()["code"] == "MSG_DATE_REQUIRED"


@pytest.mark.asyncio
async def test_create_lead_validation(client: AsyncClient, sign_in):
    """Given a malformed phone number and a negative amount, the response lists both fields"""
    await sign_in(UserRole.super_admin)

    response = await client.post(
        LEADS_URL,
        json={
            "fullName": "Bad Input",
            "city": "Hue",
            "phoneNumber": "call me",
            "investmentAmount": -5,
        },
    )

    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"phoneNumber", "investmentAmount"}


@pytest.mark.asyncio
async def test_viewer_cannot_create(client: AsyncClient, sign_in):
    await sign_in(UserRole.super_viewer)

    response = await client.post(LEADS_URL, json={"fullName": "Viewer", "city": "Hue"})

    assert response.status_code == 403
    assert response.json()["error"] == (
        "Access denied. Required roles: super_admin, company_admin, "
        "super_creator, company_creator"
    )


@pytest.mark.asyncio
async def test_update_lead(client: AsyncClient, sign_in, seed, companies):
    """Update Lead

    Given a company_admin of company 5 and a company 5 lead
    When I change its status and notes
    Then the lead is updated and updatedBy is me
    """
    lead = await seed(InvestorAdmin(full_name="Lead", city="Hue", company_id=5))
    user = await sign_in(UserRole.company_admin, company_id=5)

    response = await client.put(
        f"{LEADS_URL}/{lead.id}", json={"leadStatus": "contacted", "notes": "Called once"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["leadStatus"] == "contacted"
    assert data["notes"] == "Called once"
    assert data["updatedBy"] == user.id


@pytest.mark.asyncio
async def test_update_without_changes_is_rejected(client: AsyncClient, sign_in, seed, companies):
    """Given a lead, sending its current values back fails with 400 NO_CHANGES"""
    lead = await seed(InvestorAdmin(full_name="Same", city="Hue", company_id=5))
    await sign_in(UserRole.super_admin)

    response = await client.put(f"{LEADS_URL}/{lead.id}", json={"fullName": "Same"})

    assert response.status_code == 400
    assert response.json()["code"] == "NO_CHANGES"


@pytest.mark.asyncio
async def test_update_other_company_lead_is_forbidden(
    client: AsyncClient, sign_in, seed, db_session, companies
):
    """Cross-company denial

    Given a company_admin of company 5 and a lead of company 9
    When I try to update it
    Then the request fails with 403 and the lead is unchanged
    """
    lead = await seed(InvestorAdmin(full_name="Theirs", city="Hue", company_id=9))
    await sign_in(UserRole.company_admin, company_id=5)

    response = await client.put(f"{LEADS_URL}/{lead.id}", json={"fullName": "Mine now"})

    assert response.status_code == 403
    assert response.json()["error"] == "Access denied to this lead"
    stored = (
        await db_session.exec(select(InvestorAdmin).where(InvestorAdmin.id == lead.id))
    ).one()
    assert stored.full_name == "Theirs"


@pytest.mark.asyncio
async def test_company_admin_cannot_move_lead_to_other_company(
    client: AsyncClient, sign_in, seed, companies
):
    lead = await seed(InvestorAdmin(full_name="Ours", city="Hue", company_id=5))
    await sign_in(UserRole.company_admin, company_id=5)

    response = await client.put(f"{LEADS_URL}/{lead.id}", json={"companyID": 9})

    assert response.status_code == 403
    assert response.json()["code"] == "COMPANY_ACCESS_DENIED"


@pytest.mark.asyncio
async def test_update_missing_lead_is_not_found(client: AsyncClient, sign_in):
    await sign_in(UserRole.super_admin)

    response = await client.put(f"{LEADS_URL}/999", json={"fullName": "Ghost"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_lead(client: AsyncClient, sign_in, seed, db_session, companies):
    """Given a company 5 lead, its company_admin deletes it and it is gone"""
    lead = await seed(InvestorAdmin(full_name="Gone", city="Hue", company_id=5))
    await sign_in(UserRole.company_admin, company_id=5)

    response = await client.delete(f"{LEADS_URL}/{lead.id}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == lead.id
    rows = (await db_session.exec(select(InvestorAdmin))).all()
    assert rows == []


@pytest.mark.asyncio
async def test_creator_cannot_delete(client: AsyncClient, sign_in, seed, companies):
    lead = await seed(InvestorAdmin(full_name="Kept", city="Hue", company_id=5))
    await sign_in(UserRole.company_creator, company_id=5)

    response = await client.delete(f"{LEADS_URL}/{lead.id}")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_filters_and_pagination(client: AsyncClient, sign_in, seed, companies):
    """Listing

    Given leads created on different days
    When I filter by an inclusive date range, search text and page size
    Then only matching leads are returned, newest first, with pagination info
    """
    await seed(
        InvestorAdmin(
            full_name="Early Bird", city="Hue", company_id=5,
            created_at=datetime(2026, 3, 1, 8, 0),
        ),
        InvestorAdmin(
            full_name="Late Evening", city="Hue", company_id=5,
            created_at=datetime(2026, 3, 2, 23, 30),
        ),
        InvestorAdmin(
            full_name="Next Day", city="Hanoi", company_id=5,
            created_at=datetime(2026, 3, 3, 0, 15),
        ),
    )
    await sign_in(UserRole.super_admin)

    in_range = await client.get(
        LEADS_URL, params={"createdAtFrom": "2026-03-01", "createdAtTo": "2026-03-02"}
    )
    searched = await client.get(LEADS_URL, params={"search": "late", "status": "all"})
    paged = await client.get(LEADS_URL, params={"page": 2, "limit": 2})

    assert [lead["fullName"] for lead in in_range.json()["data"]] == [
        "Late Evening",
        "Early Bird",
    ]
    assert [lead["fullName"] for lead in searched.json()["data"]] == ["Late Evening"]
    assert paged.json()["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 3,
        "totalPages": 2,
        "hasNextPage": False,
        "hasPreviousPage": True,
    }
    assert [lead["fullName"] for lead in paged.json()["data"]] == ["Early Bird"]


@pytest.mark.asyncio
async def test_limit_is_capped(client: AsyncClient, sign_in):
    await sign_in(UserRole.super_admin)

    response = await client.get(LEADS_URL, params={"limit": 500, "page": "abc"})

    assert response.json()["pagination"]["limit"] == 100
    assert response.json()["pagination"]["page"] == 1


@pytest.mark.asyncio
async def test_zero_limit_falls_back_to_default_page_size(client: AsyncClient, sign_in):
    """Given limit=0, the page size is the default 20 rather than 1"""
    await sign_in(UserRole.super_admin)

    response = await client.get(LEADS_URL, params={"limit": 0})

    assert response.status_code == 200
    assert response.json()["pagination"]["limit"] == 20


@pytest.mark.asyncio
async def test_statistics_are_scoped(client: AsyncClient, sign_in, seed, companies):
    """Given amounts 100 and 300 in company 5 and 1000 in company 9, company 5 sees its own aggregates"""
    await seed(
        InvestorAdmin(full_name="A", city="Hue", company_id=5, investment_amount=100),
        InvestorAdmin(full_name="B", city="Hue", company_id=5, investment_amount=300),
        InvestorAdmin(full_name="C", city="Hue", company_id=9, investment_amount=1000),
    )
    await sign_in(UserRole.company_viewer, company_id=5)

    response = await client.get(f"{LEADS_URL}/statistics")

    assert response.status_code == 200
    assert response.json()["data"] == {
        "max": 300.0,
        "min": 100.0,
        "avg": 200.0,
        "sum": 400.0,
        "count": 2,
    }


@pytest.mark.asyncio
async def test_history_lists_creation_then_updates(client: AsyncClient, sign_in, companies):
    """Lead history

    Given a lead created and then updated twice through the API
    When I read its history
    Then the creation comes first followed by both updates, oldest first
    """
    user = await sign_in(UserRole.super_admin, username="historian")
    created = await client.post(
        LEADS_URL, json={"fullName": "Tracked", "city": "Hue", "companyID": 5}
    )
    lead_id = created.json()["data"]["id"]
    await client.put(f"{LEADS_URL}/{lead_id}", json={"leadStatus": "contacted"})
    await client.put(f"{LEADS_URL}/{lead_id}", json={"callingTimes": 2})

    response = await client.get(f"{LEADS_URL}/{lead_id}/history")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == lead_id
    assert data["totalUpdates"] == 2
    assert [entry["action"] for entry in data["history"]] == ["CREATE", "UPDATE", "UPDATE"]
    assert data["history"][0]["createdByUser"] == {"id": user.id, "username": "historian"}
    assert data["history"][1]["changes"] == {"leadStatus": "contacted"}
    assert data["history"][2]["changes"] == {"callingTimes": 2}
    assert data["history"][2]["userRole"] == "super_admin"
