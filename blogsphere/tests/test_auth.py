import pytest
from httpx import AsyncClient
from blogsphere.constants import AuthMessages

AUTH_URL = "/api/v1/auth"


def _registration(**overrides):
    data = {
        "name": "  Ada Lovelace ",
        "email": "Ada@Example.com",
        "password": "secret123",
        "mobile": "9876543210",
        "dob": "1990-12-10",
        "preferences": ["technology", "education"],
    }
    data.update(overrides)
    return data


async def _register(client: AsyncClient, **overrides):
    return await client.post(f"{AUTH_URL}/register", json=_registration(**overrides))


@pytest.mark.asyncio
async def test_register_user(test_client: AsyncClient):
    """Test user registration"""
    response = await _register(test_client)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == AuthMessages.USER_REGISTERED
    assert data["user"]["email"] == "ada@example.com"
    assert data["user"]["name"] == "Ada Lovelace"
    assert data["user"]["preferences"] == ["technology", "education"]
    assert "password" not in data["user"]
    assert "hashed_password" not in data["user"]
    assert data["token_type"] == "bearer"
    assert "accessToken" in response.cookies
    assert "refreshToken" in response.cookies


@pytest.mark.asyncio
async def test_register_defaults_preferences(test_client: AsyncClient):
    data = _registration()
    del data["preferences"]

    response = await test_client.post(f"{AUTH_URL}/register", json=data)

    assert response.status_code == 201
    assert response.json()["user"]["preferences"] == ["technology"]


@pytest.mark.asyncio
async def test_register_duplicate_email(test_client: AsyncClient):
    await _register(test_client)

    response = await _register(test_client, email="ada@example.com")

    assert response.status_code == 400
    assert response.json()["detail"] == AuthMessages.USER_ALREADY_EXISTS


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"preferences": []},
    {"preferences": ["astrology"]},
    {"password": "123"},
    {"mobile": "12ab"},
    {"email": "not-an-email"},
])
async def test_register_validation(test_client: AsyncClient, overrides):
    response = await _register(test_client, **overrides)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_with_email(test_client: AsyncClient):
    """Test user login"""
    await _register(test_client)

    response = await test_client.post(
        f"{AUTH_URL}/login-email", json={"email": "ADA@example.com", "password": "secret123"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == AuthMessages.USER_LOGGED_IN
    assert "access_token" in data
    assert "refresh_token" in data


@pytest.mark.asyncio
async def test_login_with_mobile(test_client: AsyncClient):
    await _register(test_client)

    response = await test_client.post(
        f"{AUTH_URL}/login-mobile", json={"mobile": "9876543210", "password": "secret123"}
    )

    assert response.status_code == 200
    assert response.json()["user"]["mobile"] == "9876543210"


@pytest.mark.asyncio
async def test_login_with_wrong_password(test_client: AsyncClient):
    await _register(test_client)

    wrong = await test_client.post(
        f"{AUTH_URL}/login-email", json={"email": "ada@example.com", "password": "nope-nope"}
    )
    unknown = await test_client.post(
        f"{AUTH_URL}/login-email", json={"email": "bob@example.com", "password": "secret123"}
    )

    assert wrong.status_code == unknown.status_code == 400
    assert wrong.json()["detail"] == AuthMessages.INVALID_CREDENTIALS


@pytest.mark.asyncio
async def test_protected_endpoint(test_client: AsyncClient):
    """Test accessing protected endpoint"""
    token = (await _register(test_client)).json()["access_token"]

    response = await test_client.get("/api/v1/profile/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_access_token_cookie_is_accepted(test_client: AsyncClient):
    token = (await _register(test_client)).json()["access_token"]
    test_client.cookies.clear()
    test_client.cookies.set("accessToken", token)

    response = await test_client.get("/api/v1/profile/me")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_refresh_token(test_client: AsyncClient):
    tokens = (await _register(test_client)).json()
    test_client.cookies.clear()

    refreshed = await test_client.post(f"{AUTH_URL}/refresh-token", json={"refresh_token": tokens["refresh_token"]})
    misused = await test_client.post(f"{AUTH_URL}/refresh-token", json={"refresh_token": tokens["access_token"]})
    missing = await test_client.post(f"{AUTH_URL}/refresh-token")

    assert refreshed.status_code == 200
    assert refreshed.json()["message"] == AuthMessages.TOKEN_REFRESHED
    new_token = refreshed.json()["access_token"]
    me = await test_client.get("/api/v1/profile/me", headers={"Authorization": f"Bearer {new_token}"})
    assert me.status_code == 200

    assert misused.status_code == 403
    assert missing.status_code == 403


@pytest.mark.asyncio
async def test_access_token_cannot_be_used_as_refresh_and_vice_versa(test_client: AsyncClient):
    tokens = (await _register(test_client)).json()
    test_client.cookies.clear()

    response = await test_client.get(
        "/api/v1/profile/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_revokes_token(test_client: AsyncClient):
    token = (await _register(test_client)).json()["access_token"]
    test_client.cookies.clear()
    headers = {"Authorization": f"Bearer {token}"}

    logout = await test_client.post(f"{AUTH_URL}/logout", headers=headers)
    after = await test_client.get("/api/v1/profile/me", headers=headers)

    assert logout.status_code == 200
    assert logout.json()["message"] == AuthMessages.USER_LOGGED_OUT
    assert after.status_code == 401
