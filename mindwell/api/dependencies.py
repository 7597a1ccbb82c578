"""
Request-scoped access to the service's long-lived collaborators.

The clients are built once per process (see build_services) and stored on
``app.state.services``; handlers receive them through FastAPI dependencies.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mindwell.core.config import settings
from mindwell.core.database import create_anon_client, create_service_client
from mindwell.features.auth.service import AuthenticatedUser, SupabaseAuthService
from mindwell.features.database.client import DatabaseClient
from mindwell.features.journaling.annotation import AnnotationWorkflow
from mindwell.services.llm import ClaudeInsightGenerator, InsightGenerator
from mindwell.shared.errors import AuthenticationError

logger = logging.getLogger("MindWell.API.Dependencies")

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class Services:
    """Everything a request handler may need, constructed once per process."""
    database: DatabaseClient
    generator: InsightGenerator
    auth: SupabaseAuthService
    workflow: AnnotationWorkflow


def build_services() -> Services:
    """Construct the production collaborators from settings."""
    missing = settings.missing_settings()
    if missing:
        logger.error("Missing required settings: %s", ", ".join(missing))

    service_client = create_service_client()
    anon_client = create_anon_client()

    database = DatabaseClient(service_client)
    generator = ClaudeInsightGenerator()
    auth = SupabaseAuthService(anon_client, service_client, redirect_url=settings.AUTH_REDIRECT_URL)
    workflow = AnnotationWorkflow(
        journals=database.journals,
        generator=generator,
        refresh_delay=settings.REFRESH_DELAY_SECONDS,
        list_limit=settings.DEFAULT_LIST_LIMIT,
    )
    return Services(database=database, generator=generator, auth=auth, workflow=workflow)


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_database(request: Request) -> DatabaseClient:
    return get_services(request).database


def get_workflow(request: Request) -> AnnotationWorkflow:
    return get_services(request).workflow


def get_auth_service(request: Request) -> SupabaseAuthService:
    return get_services(request).auth


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: SupabaseAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """Resolve the bearer token if one was sent; None when signed out."""
    if credentials is None:
        return None
    try:
        return auth.resolve_user(credentials.credentials)
    except AuthenticationError:
        return None


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: SupabaseAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """Require a valid bearer token and return its owner identity."""
    if credentials is None:
        raise AuthenticationError()
    return auth.resolve_user(credentials.credentials)
