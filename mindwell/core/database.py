"""
Supabase client construction.

Two clients are used by the service:
- the service-role client for table access (bypasses RLS, so every
  repository call scopes rows by owner itself)
- the anon client for end-user auth flows such as magic-link sign-in

Both are built once per process in the application lifespan and handed to
the components that need them; nothing here keeps a module-level client.
"""

import logging
from typing import Optional

from supabase import Client, create_client

from mindwell.core.config import settings

logger = logging.getLogger("MindWell.Database")


def create_service_client(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """Create a Supabase client authenticated with the service-role key."""
    url = url or settings.SUPABASE_URL
    key = key or settings.SUPABASE_SERVICE_ROLE_KEY
    if not url or not key:
        logger.error("SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not defined")
    client = create_client(url or "", key or "")
    logger.info("Supabase service client created")
    return client


def create_anon_client(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """Create a Supabase client authenticated with the public anon key."""
    url = url or settings.SUPABASE_URL
    key = key or settings.SUPABASE_ANON_KEY
    if not url or not key:
        logger.error("SUPABASE_URL or SUPABASE_ANON_KEY is not defined")
    client = create_client(url or "", key or "")
    logger.info("Supabase anon client created")
    return client
