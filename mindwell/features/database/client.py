"""
Database Client - Unified Access to the Data Repositories

Thin wrapper that hands a single Supabase client to the domain repositories.
Built once per process in the application lifespan.
"""

import logging

from mindwell.features.database.repositories.moods import MoodsRepository
from mindwell.features.database.repositories.journals import JournalsRepository

logger = logging.getLogger("MindWell.Database")


class DatabaseClient:
    """
    Unified database client providing access to all repositories.

    Usage:
        db = DatabaseClient(create_service_client())
        entry = db.journals.create(owner_id, "Had a rough day")
        moods = db.moods.list_recent(owner_id, limit=10)
    """

    def __init__(self, client):
        self._client = client

        self.moods = MoodsRepository(self._client)
        self.journals = JournalsRepository(self._client)

        logger.info("Database client initialized with all repositories")

    @property
    def client(self):
        """Direct access to Supabase client for advanced queries."""
        return self._client
