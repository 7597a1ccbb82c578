"""Auth Feature - Passwordless sign-in and access token resolution."""

from mindwell.features.auth.service import AuthenticatedUser, SupabaseAuthService

__all__ = [
    "AuthenticatedUser",
    "SupabaseAuthService",
]
