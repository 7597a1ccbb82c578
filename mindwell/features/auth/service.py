"""
Auth Service - Passwordless email sign-in via Supabase Auth.

The service never handles passwords or issues tokens itself. It:
- asks Supabase to email a magic link
- resolves a bearer access token to the signed-in user
- revokes a session on sign-out
"""

import logging
from dataclasses import dataclass
from typing import Optional

from mindwell.core.logging_utils import mask_email, redact_emails
from mindwell.shared.errors import AuthenticationError, AuthProviderError, ValidationError

logger = logging.getLogger("MindWell.Auth")


@dataclass(frozen=True)
class AuthenticatedUser:
    """The owner identity every stored row is scoped to."""
    id: str
    email: Optional[str] = None


class SupabaseAuthService:
    """Thin glue over Supabase Auth for the API layer."""

    def __init__(self, anon_client, service_client, redirect_url: Optional[str] = None):
        self.anon_client = anon_client
        self.service_client = service_client
        self.redirect_url = redirect_url

    def send_magic_link(self, email: str) -> None:
        """Ask Supabase to email a one-time sign-in link."""
        if not email or "@" not in email:
            raise ValidationError("A valid email address is required.", field="email")

        credentials = {"email": email.strip()}
        if self.redirect_url:
            credentials["options"] = {"email_redirect_to": self.redirect_url}

        try:
            self.anon_client.auth.sign_in_with_otp(credentials)
        except Exception as e:
            logger.error(f"Magic link request failed for {mask_email(email)}: {redact_emails(str(e))}")
            raise AuthProviderError(f"Failed to send magic link: {e}") from e

        logger.info(f"Magic link sent to {mask_email(email)}")

    def resolve_user(self, access_token: str) -> AuthenticatedUser:
        """Resolve an access token to its user or raise AuthenticationError."""
        if not access_token:
            raise AuthenticationError()

        try:
            response = self.service_client.auth.get_user(access_token)
        except Exception as e:
            logger.info(f"Access token rejected: {e}")
            raise AuthenticationError("Invalid or expired session") from e

        user = getattr(response, "user", None) if response else None
        if user is None:
            raise AuthenticationError("Invalid or expired session")

        return AuthenticatedUser(id=str(user.id), email=getattr(user, "email", None))

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        try:
            self.service_client.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.error(f"Sign-out failed: {e}")
            raise AuthProviderError(f"Failed to sign out: {e}") from e
        logger.info("Session signed out")
