"""
Journals Repository - Journal entry data access operations.

Handles:
- Creating entries with the annotation (ai_insight) absent
- Setting the annotation exactly once
- Listing, fetching and deleting an owner's entries
"""

import logging
from typing import List, Optional

from mindwell.features.database.models import JOURNAL_TABLE, JournalEntry
from mindwell.shared.errors import StoreReadError, StoreWriteError

logger = logging.getLogger("MindWell.Database.Journals")


class JournalsRepository:
    """Repository for journal entry operations, always scoped by owner."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def create(self, owner_id: str, content: str) -> JournalEntry:
        """Insert a journal entry with no annotation and return the stored row."""
        payload = {
            "user_id": owner_id,
            "content": content,
            "ai_insight": None,
        }
        try:
            result = self.client.table(JOURNAL_TABLE).insert(payload).execute()
        except Exception as e:
            logger.error(f"Error creating journal entry: {e}")
            raise StoreWriteError("Failed to save journal entry.", table=JOURNAL_TABLE) from e

        if not result.data:
            raise StoreWriteError("Journal entry insert returned no row.", table=JOURNAL_TABLE)

        entry = JournalEntry.model_validate(result.data[0])
        logger.info(f"Journal entry created: {entry.id}")
        return entry

    def get(self, owner_id: str, entry_id: str) -> Optional[JournalEntry]:
        """Get one of the owner's journal entries by ID."""
        try:
            result = self.client.table(JOURNAL_TABLE).select("*").eq(
                "id", entry_id
            ).eq("user_id", owner_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Error fetching journal entry {entry_id}: {e}")
            raise StoreReadError("Failed to load journal entry.", table=JOURNAL_TABLE) from e

        return JournalEntry.model_validate(result.data[0]) if result.data else None

    def list_recent(self, owner_id: str, limit: int = 20) -> List[JournalEntry]:
        """Get an owner's most recent journal entries."""
        try:
            result = self.client.table(JOURNAL_TABLE).select("*").eq(
                "user_id", owner_id
            ).order("created_at", desc=True).limit(limit).execute()
        except Exception as e:
            logger.error(f"Error listing journal entries: {e}")
            raise StoreReadError("Failed to load journal entries.", table=JOURNAL_TABLE) from e

        return [JournalEntry.model_validate(row) for row in result.data or []]

    def set_annotation(self, owner_id: str, entry_id: str, text: str) -> Optional[JournalEntry]:
        """
        Set the annotation on an entry that does not have one yet.

        The update only matches rows whose ai_insight is still null, so an
        existing annotation is never overwritten.

        Returns:
            The updated entry, or None when no row matched (missing,
            owned by someone else, or already annotated)
        """
        try:
            result = self.client.table(JOURNAL_TABLE).update(
                {"ai_insight": text}
            ).eq("id", entry_id).eq("user_id", owner_id).is_(
                "ai_insight", "null"
            ).execute()
        except Exception as e:
            logger.error(f"Error annotating journal entry {entry_id}: {e}")
            raise StoreWriteError("Failed to save AI insight.", table=JOURNAL_TABLE) from e

        if not result.data:
            logger.warning(f"Annotation for journal entry {entry_id} matched no row")
            return None

        logger.info(f"Journal entry annotated: {entry_id}")
        return JournalEntry.model_validate(result.data[0])

    def delete(self, owner_id: str, entry_id: str) -> bool:
        """
        Delete one of the owner's journal entries.

        Returns:
            True if a row was removed, False if the owner has no such entry
        """
        try:
            result = self.client.table(JOURNAL_TABLE).delete().eq(
                "id", entry_id
            ).eq("user_id", owner_id).execute()
        except Exception as e:
            logger.error(f"Error deleting journal entry {entry_id}: {e}")
            raise StoreWriteError("Failed to delete journal entry.", table=JOURNAL_TABLE) from e

        deleted = bool(result.data)
        if deleted:
            logger.info(f"Journal entry deleted: {entry_id}")
        return deleted
