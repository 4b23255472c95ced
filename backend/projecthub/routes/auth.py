"""
ProjectHub Backend — Sign-In Routes
=====================================

What:  Google sign-in, the current-user lookup, and logout.
How:   Delegates the OpenID exchange to services.auth_service, persists the
       user through the user repository, and keeps only the user id in the
       signed session cookie.

Endpoints:
    GET /auth/google            302 → Google consent screen
    GET /auth/google/callback   302 → POST_LOGIN_REDIRECT_URL, or 401
    GET /auth/me                200 user, or 401 without a session
    GET /auth/logout            302 → POST_LOGIN_REDIRECT_URL
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.config import settings
from projecthub.database import get_db_session
from projecthub.models.user import User
from projecthub.repositories.users import user_repository
from projecthub.routes.deps import SESSION_USER_KEY, get_current_user
from projecthub.schemas.common import ErrorResponse
from projecthub.schemas.user import UserResponse
from projecthub.services.auth_service import google_auth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/google", summary="Start Google sign-in")
async def login_with_google(request: Request):
    redirect_uri = settings.google_redirect_uri or str(request.url_for("google_callback"))
    return await google_auth.authorize_redirect(request, redirect_uri)


@router.get(
    "/google/callback",
    name="google_callback",
    responses={401: {"description": "Sign-in rejected", "model": ErrorResponse}},
    summary="Finish Google sign-in",
)
async def google_callback(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """
    Exchange the authorization code, upsert the user, open a session.

    A failed exchange raises AuthenticationError, which the global handler
    turns into a 401.
    """
    profile = await google_auth.authenticate(request)
    user = await user_repository.find_or_create_by_subject(db, profile.subject, profile)

    request.session[SESSION_USER_KEY] = user.id
    logger.info("User %d signed in", user.id)
    return RedirectResponse(url=settings.post_login_redirect_url, status_code=302)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"description": "Not logged in", "model": ErrorResponse}},
    summary="The signed-in user",
)
async def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@router.get("/logout", summary="End the session")
async def logout(request: Request) -> RedirectResponse:
    request.session.clear()
    return RedirectResponse(url=settings.post_login_redirect_url, status_code=302)
