"""
Auth API Routes

Passwordless sign-in glue. Supabase sends the magic link and issues the
session; this service only relays the request and reports whether a
presented access token is signed in.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.security import HTTPAuthorizationCredentials

from mindwell.api.dependencies import bearer_scheme, get_auth_service, get_optional_user
from mindwell.api.models import MagicLinkRequest, MagicLinkResponse, SessionResponse, SessionUser
from mindwell.features.auth.service import AuthenticatedUser, SupabaseAuthService
from mindwell.shared.errors import AuthenticationError

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("MindWell.API.Auth")


@router.post("/magic-link", response_model=MagicLinkResponse)
async def send_magic_link(
    body: MagicLinkRequest,
    auth: SupabaseAuthService = Depends(get_auth_service),
) -> MagicLinkResponse:
    auth.send_magic_link(body.email)
    return MagicLinkResponse(message="Magic link sent! Check your email to log in.")


@router.get("/session", response_model=SessionResponse)
async def get_session(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> SessionResponse:
    """Report whether the presented token belongs to a signed-in user."""
    if user is None:
        return SessionResponse(state="signed_out")
    return SessionResponse(state="signed_in", user=SessionUser(id=user.id, email=user.email))


@router.post("/sign-out", status_code=204)
async def sign_out(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: SupabaseAuthService = Depends(get_auth_service),
) -> Response:
    if credentials is None:
        raise AuthenticationError()
    auth.sign_out(credentials.credentials)
    return Response(status_code=204)
