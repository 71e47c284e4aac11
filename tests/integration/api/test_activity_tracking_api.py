import pytest
from httpx import AsyncClient
from sqlmodel import select

from lead_admin.domain.entities import ActivityLog, UserRole


async def activity_rows(db_session):
    return (await db_session.exec(select(ActivityLog).order_by(ActivityLog.created_at))).all()


@pytest.mark.asyncio
async def test_get_requests_are_never_recorded(client: AsyncClient, sign_in, db_session, companies):
    """Given a signed-in user making only GET requests, no activity is recorded"""
    await sign_in(UserRole.super_admin)

    await client.get("/api/admin/investor-admin")
    await client.get("/api/admin/company")
    await client.get("/api/admin/company/5")

    assert await activity_rows(db_session) == []


@pytest.mark.asyncio
async def test_mutation_is_recorded_once(client: AsyncClient, sign_in, db_session, companies):
    """Recorded mutation

    Given a signed-in company_admin
    When I create a lead
    Then exactly one CREATE event is recorded with my identity and the new id
    """
    user = await sign_in(UserRole.company_admin, company_id=5, username="recorder")

    response = await client.post(
        "/api/admin/investor-admin",
        json={"fullName": "Audited", "city": "Hue"},
        headers={"user-agent": "pytest-agent", "x-forwarded-for": "203.0.113.7, 10.0.0.1"},
    )

    rows = await activity_rows(db_session)
    assert len(rows) == 1
    event = rows[0]
    assert event.action == "CREATE"
    assert event.resource_type == "InvestorAdmin"
    assert event.resource_id == str(response.json()["data"]["id"])
    assert event.actor_id == user.id
    assert event.actor_username == "recorder"
    assert event.actor_role == "company_admin"
    assert event.company_id == 5
    assert event.http_method == "POST"
    assert event.endpoint == "/api/admin/investor-admin"
    assert event.status_code == 201
    assert event.client_ip == "203.0.113.7"
    assert event.user_agent == "pytest-agent"
    assert event.request_body == {"fullName": "Audited", "city": "Hue"}
    assert event.error_message is None


@pytest.mark.asyncio
async def test_failed_mutation_records_error(client: AsyncClient, sign_in, db_session):
    """Given a 404 on update, the event carries the error message"""
    await sign_in(UserRole.super_admin)

    await client.put("/api/admin/investor-admin/77", json={"notes": "x"})

    event = (await activity_rows(db_session))[0]
    assert event.action == "UPDATE"
    assert event.resource_id == "77"
    assert event.status_code == 404
    assert event.error_message == "Lead not found"


@pytest.mark.asyncio
async def test_login_is_recorded_with_redacted_password(
    client: AsyncClient, make_user, db_session
):
    """Login tracking

    Given a valid user
    When I log in successfully and then fail once
    Then both attempts are recorded as LOGIN
    And the password never reaches the audit log
    """
    user = await make_user("auditee", UserRole.super_viewer)

    await client.post(
        "/api/admin/users/login", json={"username": "auditee", "password": "SecurePass123!"}
    )
    await client.post(
        "/api/admin/users/login", json={"username": "auditee", "password": "nope"}
    )

    success, failure = await activity_rows(db_session)
    assert success.action == "LOGIN"
    assert success.actor_id == user.id
    assert success.actor_username == "auditee"
    assert success.actor_role == "super_viewer"
    assert success.request_body == {"username": "auditee", "password": "[REDACTED]"}

    assert failure.status_code == 401
    assert failure.actor_id is None
    assert failure.error_message == "Invalid credentials"
    assert failure.request_body["password"] == "[REDACTED]"


@pytest.mark.asyncio
async def test_logout_is_recorded(client: AsyncClient, sign_in, db_session):
    user = await sign_in(UserRole.super_admin)

    await client.post("/api/admin/users/logout")

    rows = await activity_rows(db_session)
    assert [row.action for row in rows] == ["LOGOUT"]
    assert rows[0].actor_id == user.id


@pytest.mark.asyncio
async def test_anonymous_public_submission_is_not_recorded(
    client: AsyncClient, db_session, companies
):
    await client.post(
        "/api/investor-form",
        json={
            "fullName": "Anon",
            "phoneNumber": "123",
            "sharesQuantity": 1,
            "calculatedTotal": 10,
            "city": "Hue",
        },
    )

    assert await activity_rows(db_session) == []


@pytest.mark.asyncio
async def test_recording_failure_does_not_affect_response(
    app, client: AsyncClient, sign_in, companies
):
    """Given the audit store is unavailable, the mutation still succeeds"""

    def broken_factory():
        raise RuntimeError("audit store down")

    app.state.activity_recorder.uow_factory = broken_factory
    await sign_in(UserRole.super_admin)

    response = await client.post(
        "/api/admin/investor-admin", json={"fullName": "Still Works", "city": "Hue"}
    )

    assert response.status_code == 201
