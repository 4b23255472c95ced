"""
ProjectHub Backend — Google Sign-In Tests
===========================================

What:  The OAuth exchange with Google is mocked; everything from the
       verified profile onwards (user upsert, session cookie) is real.

What we test:
    ✅ verify_identity() maps claims and rejects a missing subject
    ✅ Provider errors become AuthenticationError
    ✅ /auth/google redirects with the callback URL
    ✅ Callback upserts the user, sets the session, redirects (302)
    ✅ Failed callback → 401
    ✅ /auth/me with and without a session; logout clears it
"""

from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import pytest
from authlib.integrations.starlette_client import OAuthError
from starlette.responses import RedirectResponse

from projecthub.exceptions import AuthenticationError
from projecthub.services.auth_service import GoogleAuthService, IdentityProfile, verify_identity

PROFILE = IdentityProfile(
    subject="google-oauth2|555",
    email="ada@example.com",
    name="Ada",
    picture_url="https://example.com/ada.jpg",
)


class TestVerifyIdentity:

    def test_maps_userinfo_claims(self):
        token = {
            "access_token": "x",
            "userinfo": {
                "sub": "google-oauth2|555",
                "email": "ada@example.com",
                "name": "Ada",
                "picture": "https://example.com/ada.jpg",
            },
        }

        assert verify_identity(token) == PROFILE

    def test_missing_subject_is_rejected(self):
        with pytest.raises(AuthenticationError):
            verify_identity({"userinfo": {"email": "ada@example.com"}})

    def test_missing_userinfo_is_rejected(self):
        with pytest.raises(AuthenticationError):
            verify_identity({"access_token": "x"})


class TestGoogleAuthService:

    @pytest.mark.asyncio
    async def test_provider_error_becomes_authentication_error(self):
        client = MagicMock()
        client.authorize_access_token = AsyncMock(side_effect=OAuthError(error="access_denied"))

        with patch.object(GoogleAuthService, "client", new_callable=PropertyMock) as prop:
            prop.return_value = client
            with pytest.raises(AuthenticationError) as exc_info:
                await GoogleAuthService().authenticate(MagicMock())

        assert exc_info.value.context["provider_error"] == "access_denied"

    @pytest.mark.asyncio
    async def test_redirect_forces_account_selection(self):
        client = MagicMock()
        client.authorize_redirect = AsyncMock(return_value="redirect")
        request = MagicMock()

        with patch.object(GoogleAuthService, "client", new_callable=PropertyMock) as prop:
            prop.return_value = client
            await GoogleAuthService().authorize_redirect(request, "http://test/cb")

        client.authorize_redirect.assert_awaited_once_with(
            request, "http://test/cb", prompt="select_account"
        )


class TestAuthRoutes:

    @pytest.mark.asyncio
    async def test_login_redirects_to_google(self, test_client):
        with patch("projecthub.routes.auth.google_auth") as mock_auth:
            mock_auth.authorize_redirect = AsyncMock(
                return_value=RedirectResponse("https://accounts.google.com/o/oauth2/v2/auth")
            )
            response = await test_client.get("/auth/google")

        assert response.status_code == 307
        assert response.headers["location"].startswith("https://accounts.google.com/")
        redirect_uri = mock_auth.authorize_redirect.await_args.args[1]
        assert redirect_uri == "http://test/auth/google/callback"

    @pytest.mark.asyncio
    async def test_callback_creates_user_and_session(self, test_client):
        with patch("projecthub.routes.auth.google_auth") as mock_auth:
            mock_auth.authenticate = AsyncMock(return_value=PROFILE)
            response = await test_client.get("/auth/google/callback", params={"code": "c"})

        assert response.status_code == 302
        assert response.headers["location"] == "http://frontend.test/"

        me = await test_client.get("/auth/me")
        assert me.status_code == 200
        assert me.json()["sub"] == PROFILE.subject
        assert me.json()["email"] == PROFILE.email

    @pytest.mark.asyncio
    async def test_second_login_reuses_the_account(self, test_client):
        with patch("projecthub.routes.auth.google_auth") as mock_auth:
            mock_auth.authenticate = AsyncMock(return_value=PROFILE)
            await test_client.get("/auth/google/callback")
            await test_client.get("/auth/google/callback")

        users = await test_client.get("/users")
        assert users.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_failed_callback_answers_401(self, test_client):
        with patch("projecthub.routes.auth.google_auth") as mock_auth:
            mock_auth.authenticate = AsyncMock(
                side_effect=AuthenticationError(message="Google sign-in failed")
            )
            response = await test_client.get("/auth/google/callback", params={"error": "denied"})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_me_without_session(self, test_client):
        response = await test_client.get("/auth/me")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, test_client):
        with patch("projecthub.routes.auth.google_auth") as mock_auth:
            mock_auth.authenticate = AsyncMock(return_value=PROFILE)
            await test_client.get("/auth/google/callback")

        logout = await test_client.get("/auth/logout")
        me = await test_client.get("/auth/me")

        assert logout.status_code == 302
        assert me.status_code == 401
