"""
PostBoard Backend — Authentication Endpoint Tests
===================================================

What:  Register / login / logout through the HTTP API.
How:   Real app, real per-test SQLite database, HTTPX AsyncClient.

What we test:
    ✅ Register returns user + token, never the password
    ✅ Field-level validation errors for bad registration data
    ✅ Duplicate email is a validation error and creates no second row
    ✅ Login failures are indistinguishable
    ✅ Logout revokes exactly the presented token
"""

import pytest
from sqlalchemy import func, select

from postboard.models.access_token import PersonalAccessToken
from postboard.models.user import User


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_user_and_token(self, test_client, registration_data):
        response = await test_client.post("/register", json=registration_data)

        assert response.status_code == 201
        body = response.json()
        assert body["statusCode"] == 201
        assert body["message"] == "Registered successfully"
        assert set(body["data"]["user"]) == {"id", "name", "email"}
        assert body["data"]["user"]["email"] == "ada@example.com"
        assert body["data"]["token"].startswith("1|")

    @pytest.mark.asyncio
    async def test_register_stores_hashed_password(
        self, test_client, registration_data, session_factory
    ):
        await test_client.post("/register", json=registration_data)

        async with session_factory() as session:
            user = (await session.execute(select(User))).scalar_one()
        assert user.password != registration_data["password"]
        assert user.password.startswith("$pbkdf2-sha256$")

    @pytest.mark.asyncio
    async def test_register_validation_errors(self, test_client):
        response = await test_client.post(
            "/register",
            json={"name": "", "email": "invalid-email", "password": "short"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["data"] is None
        assert body["message"] == "Validation failed"
        assert body["statusCode"] == 422
        for field in ("name", "email", "password", "password_confirmation"):
            assert field in body["errors"]
        assert body["errors"]["password"] == ["The password must be at least 8 characters."]

    @pytest.mark.asyncio
    async def test_register_password_confirmation_mismatch(self, test_client, registration_data):
        registration_data["password_confirmation"] = "something-else"

        response = await test_client.post("/register", json=registration_data)

        assert response.status_code == 422
        assert response.json()["errors"] == {
            "password_confirmation": ["The password confirmation does not match."]
        }

    @pytest.mark.asyncio
    async def test_register_duplicate_email(
        self, test_client, registration_data, registered_user, session_factory
    ):
        registration_data["name"] = "Someone Else"

        response = await test_client.post("/register", json=registration_data)

        assert response.status_code == 422
        assert response.json()["errors"] == {"email": ["The email has already been taken."]}
        async with session_factory() as session:
            count = (await session.execute(select(func.count(User.id)))).scalar()
        assert count == 1

    @pytest.mark.asyncio
    async def test_duplicate_email_differs_only_in_case(
        self, test_client, registration_data, registered_user
    ):
        registration_data["email"] = "ADA@Example.COM"

        response = await test_client.post("/register", json=registration_data)

        assert response.status_code == 422
        assert response.json()["errors"] == {"email": ["The email has already been taken."]}

    @pytest.mark.asyncio
    async def test_email_is_stored_lowercased(self, test_client, registration_data):
        registration_data["email"] = "Ada@Example.com"

        response = await test_client.post("/register", json=registration_data)

        assert response.json()["data"]["user"]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_user_and_token_committed_before_response_is_sent(
        self, send_observed, registration_data, session_factory
    ):
        async def count_rows():
            async with session_factory() as session:
                users = (await session.execute(select(func.count(User.id)))).scalar()
                tokens = (
                    await session.execute(select(func.count(PersonalAccessToken.id)))
                ).scalar()
            return users, tokens

        status, seen = await send_observed(
            "POST", "/register", registration_data, on_body_sent=count_rows
        )

        assert status == 201
        assert seen == (1, 1)


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success_issues_new_token(
        self, test_client, registration_data, registered_user
    ):
        response = await test_client.post(
            "/login",
            json={"email": registration_data["email"], "password": registration_data["password"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Logged in successfully"
        assert body["data"]["user"]["id"] == registered_user["user"]["id"]
        assert body["data"]["token"] != registered_user["token"]

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(
        self, test_client, registration_data, registered_user
    ):
        wrong_password = await test_client.post(
            "/login",
            json={"email": registration_data["email"], "password": "not-the-password"},
        )
        unknown_email = await test_client.post(
            "/login",
            json={"email": "nobody@example.com", "password": "not-the-password"},
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["message"] == "Invalid credentials."
        assert wrong_password.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_login_with_malformed_email_is_a_validation_error(self, test_client):
        response = await test_client.post("/login", json={"email": "nope", "password": "x"})

        assert response.status_code == 422
        assert "email" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(
        self, test_client, registration_data, registered_user
    ):
        response = await test_client.post(
            "/login",
            json={"email": "Ada@EXAMPLE.com", "password": registration_data["password"]},
        )

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == registered_user["user"]["id"]

    @pytest.mark.asyncio
    async def test_login_token_usable_once_response_is_sent(
        self, send_observed, registration_data, registered_user, session_factory
    ):
        async def count_tokens():
            async with session_factory() as session:
                return (
                    await session.execute(select(func.count(PersonalAccessToken.id)))
                ).scalar()

        status, seen = await send_observed(
            "POST",
            "/login",
            {"email": registration_data["email"], "password": registration_data["password"]},
            on_body_sent=count_tokens,
        )

        assert status == 200
        assert seen == 2

    @pytest.mark.asyncio
    async def test_earlier_tokens_stay_valid_after_login(
        self, test_client, registration_data, registered_user, auth_headers
    ):
        await test_client.post(
            "/login",
            json={"email": registration_data["email"], "password": registration_data["password"]},
        )

        response = await test_client.get("/v1/posts", headers=auth_headers)
        assert response.status_code == 200


class TestLogout:

    @pytest.mark.asyncio
    async def test_logout_revokes_the_token(self, test_client, auth_headers):
        response = await test_client.post("/logout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "data": None,
            "message": "Logged out successfully",
            "statusCode": 200,
        }

        after = await test_client.get("/v1/posts", headers=auth_headers)
        assert after.status_code == 401
        assert after.json()["message"] == "Unauthenticated."

        again = await test_client.post("/logout", headers=auth_headers)
        assert again.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_keeps_other_tokens(
        self, test_client, registration_data, registered_user, auth_headers
    ):
        login = await test_client.post(
            "/login",
            json={"email": registration_data["email"], "password": registration_data["password"]},
        )
        second_headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}

        await test_client.post("/logout", headers=auth_headers)

        assert (await test_client.get("/v1/posts", headers=auth_headers)).status_code == 401
        assert (await test_client.get("/v1/posts", headers=second_headers)).status_code == 200

    @pytest.mark.asyncio
    async def test_logout_requires_authentication(self, test_client):
        response = await test_client.post("/logout")

        assert response.status_code == 401
        assert response.json() == {
            "data": None,
            "message": "Unauthenticated.",
            "statusCode": 401,
        }

    @pytest.mark.asyncio
    async def test_logout_rejects_garbage_token(self, test_client):
        response = await test_client.post(
            "/logout", headers={"Authorization": "Bearer 1|not-a-real-token"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["²|abc", "99999999999999999999|abc"])
    async def test_unparseable_token_id_is_401(self, send_observed, token):
        status, _ = await send_observed(
            "POST", "/logout", headers={"Authorization": f"Bearer {token}"}
        )

        assert status == 401

    @pytest.mark.asyncio
    async def test_revocation_committed_before_response_is_sent(
        self, send_observed, auth_headers, session_factory
    ):
        async def count_tokens():
            async with session_factory() as session:
                return (
                    await session.execute(select(func.count(PersonalAccessToken.id)))
                ).scalar()

        status, seen = await send_observed(
            "POST", "/logout", headers=auth_headers, on_body_sent=count_tokens
        )

        assert status == 200
        assert seen == 0
