import bcrypt
import pytest
from httpx import AsyncClient

from lead_admin.domain.entities import UserRole

PASSWORD = "SecurePass123!"


@pytest.mark.asyncio
async def test_successful_login_sets_session_cookie(client: AsyncClient, make_user, companies):
    """Successful Login

    Given an active company_admin of company 5
    When I submit login with the correct username and password
    Then I receive 200 with the user info
    And an HttpOnly session cookie is set
    """
    user = await make_user("alice", UserRole.company_admin, company_id=5)

    response = await client.post(
        "/api/admin/users/login", json={"username": "alice", "password": PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"] == {
        "id": user.id,
        "username": "alice",
        "email": "alice@example.com",
        "role": "company_admin",
        "companyId": 5,
    }

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("admin_jwt=")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=86400" in set_cookie
    assert "Path=/" in set_cookie
    assert "samesite=lax" in set_cookie.lower()


@pytest.mark.asyncio
async def test_issued_cookie_authenticates_follow_up_request(client: AsyncClient, make_user):
    """Cookie round trip

    Given I logged in successfully
    When I call a protected endpoint with the issued cookie
    Then my profile is returned
    """
    await make_user("root", UserRole.super_admin)
    login = await client.post(
        "/api/admin/users/login", json={"username": "root", "password": PASSWORD}
    )
    token = login.headers["set-cookie"].split(";", 1)[0].split("=", 1)[1]
    client.cookies.set("admin_jwt", token)

    response = await client.get("/api/admin/users/me/profile")

    assert response.status_code == 200
    assert response.json()["data"]["username"] == "root"
    assert response.json()["data"]["role"] == "super_admin"


@pytest.mark.asyncio
async def test_login_errors_are_indistinguishable(client: AsyncClient, make_user):
    """Invalid Credentials

    Given an existing user and a disabled user
    When I log in with a wrong password, an unknown username, or as the disabled user
    Then every attempt fails with 401 and the same body
    And no cookie is set
    """
    await make_user("bob", UserRole.super_viewer)
    await make_user("carol", UserRole.super_viewer, is_active=False)

    wrong_password = await client.post(
        "/api/admin/users/login", json={"username": "bob", "password": "WrongPassword!"}
    )
    unknown_user = await client.post(
        "/api/admin/users/login", json={"username": "nobody", "password": PASSWORD}
    )
    disabled_user = await client.post(
        "/api/admin/users/login", json={"username": "carol", "password": PASSWORD}
    )

    for response in (wrong_password, unknown_user, disabled_user):
        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Invalid credentials",
            "code": "INVALID_CREDENTIALS",
        }
        assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_login_username_is_case_sensitive(client: AsyncClient, make_user):
    """Given user "dave" exists, logging in as "DAVE" fails with 401"""
    await make_user("dave", UserRole.super_admin)

    response = await client.post(
        "/api/admin/users/login", json={"username": "DAVE", "password": PASSWORD}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_missing_fields_is_validation_error(client: AsyncClient):
    """Given no password, login fails with 400 Validation failed and field details"""
    response = await client.post("/api/admin/users/login", json={"username": "eve"})

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "Validation failed"
    assert data["details"][0]["field"] == "password"


@pytest.mark.asyncio
async def test_over_long_password_is_invalid_credentials(client: AsyncClient, make_user):
    """
    Given user "frank" exists
    When I log in with a password longer than any stored password can be
    Then the attempt fails with 401 Invalid credentials, not a validation error
    """
    await make_user("frank", UserRole.super_viewer)

    response = await client.post(
        "/api/admin/users/login", json={"username": "frank", "password": "x" * 100}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_logout_clears_cookie(client: AsyncClient, sign_in):
    """Logout

    Given I am signed in
    When I log out
    Then the cookie is cleared with an immediate expiry
    """
    await sign_in(UserRole.super_admin)

    response = await client.post("/api/admin/users/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith('admin_jwt="";') or set_cookie.startswith("admin_jwt=;")
    assert "Max-Age=0" in set_cookie


@pytest.mark.asyncio
async def test_configured_legacy_admin_signs_in(app, client: AsyncClient):
    """Legacy superuser

    Given a legacy admin configured by username and bcrypt hash
    When I log in with those credentials
    Then I am signed in as super_admin without a database row
    And my profile is answered from the session
    """
    legacy_hash = bcrypt.hashpw(b"legacy-pass", bcrypt.gensalt(4)).decode()

    class LegacyConfig(app.state.config):
        LEGACY_ADMIN_USERNAME = "legacy"
        LEGACY_ADMIN_PASSWORD_HASH = legacy_hash

    app.state.config = LegacyConfig

    login = await client.post(
        "/api/admin/users/login", json={"username": "legacy", "password": "legacy-pass"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["id"] == "legacy-admin"
    assert login.json()["user"]["role"] == "super_admin"

    token = login.headers["set-cookie"].split(";", 1)[0].split("=", 1)[1]
    client.cookies.set("admin_jwt", token)
    profile = await client.get("/api/admin/users/me/profile")

    assert profile.json()["data"]["isLegacy"] is True
    assert profile.json()["data"]["email"] == "admin@legacy.com"


@pytest.mark.asyncio
async def test_legacy_admin_disabled_by_default(client: AsyncClient):
    """Without legacy configuration, the legacy id is not a valid login"""
    response = await client.post(
        "/api/admin/users/login", json={"username": "legacy", "password": "legacy-pass"}
    )

    assert response.status_code == 401
