"""
ProjectHub Backend — Google Sign-In Service
=============================================

What:  Wraps the OpenID Connect exchange with Google.
How:   Authlib's Starlette client performs the redirect and the code-for-token
       exchange; verify_identity() turns the returned claims into an
       IdentityProfile that the user repository can persist.
Who:   routes/auth.py.
When:  /auth/google (redirect out) and /auth/google/callback (redirect back).

Flow:
    browser → /auth/google → accounts.google.com (select_account prompt)
            → /auth/google/callback?code=… → authenticate() → IdentityProfile
            → user_repository.find_or_create_by_subject() → session cookie
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from authlib.integrations.starlette_client import OAuth, OAuthError
from starlette.requests import Request
from starlette.responses import RedirectResponse

from projecthub.config import settings
from projecthub.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

GOOGLE_DISCOVERY_URL = "https://accounts.google.com/.well-known/openid-configuration"

oauth = OAuth()
oauth.register(
    name="google",
    client_id=settings.google_client_id,
    client_secret=settings.google_client_secret,
    server_metadata_url=GOOGLE_DISCOVERY_URL,
    client_kwargs={"scope": "openid email profile"},
)


@dataclass(frozen=True)
class IdentityProfile:
    """Verified claims about the person who just signed in."""
    subject: str
    email: str
    name: str
    picture_url: str


def verify_identity(token: Mapping[str, Any]) -> IdentityProfile:
    """
    Extract the profile from an OpenID token response.

    Authlib has already validated the ID token signature and nonce by the
    time `userinfo` is present; this only checks that a subject exists.

    Raises:
        AuthenticationError: no userinfo claims, or no `sub` among them
    """
    claims = token.get("userinfo") or {}
    subject = claims.get("sub")
    if not subject:
        raise AuthenticationError(
            message="Identity provider did not return a subject",
            context={"claims": sorted(claims.keys())},
        )

    return IdentityProfile(
        subject=str(subject),
        email=claims.get("email", ""),
        name=claims.get("name", ""),
        picture_url=claims.get("picture", ""),
    )


class GoogleAuthService:
    """Thin facade over the registered Authlib client."""

    provider = "google"

    @property
    def client(self):
        return oauth.create_client(self.provider)

    async def authorize_redirect(self, request: Request, redirect_uri: str) -> RedirectResponse:
        return await self.client.authorize_redirect(
            request, redirect_uri, prompt="select_account"
        )

    async def authenticate(self, request: Request) -> IdentityProfile:
        """
        Complete the callback leg of the flow.

        Raises:
            AuthenticationError: the provider rejected the code, the state
                did not match, or the claims carry no subject
        """
        try:
            token = await self.client.authorize_access_token(request)
        except OAuthError as e:
            logger.warning("Google sign-in failed: %s", e.error)
            raise AuthenticationError(
                message="Google sign-in failed",
                context={"provider_error": e.error},
            )
        return verify_identity(token)


google_auth = GoogleAuthService()
