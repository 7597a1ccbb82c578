"""
Moods Repository - Mood entry data access operations.

Handles:
- Recording a mood for an owner
- Listing an owner's recent moods (newest first)
- Deleting a mood entry

Mood entries are immutable: there is no update method.
"""

import logging
from typing import List, Optional

from mindwell.features.database.models import MOOD_TABLE, MoodEntry, MoodLabel
from mindwell.shared.errors import StoreReadError, StoreWriteError

logger = logging.getLogger("MindWell.Database.Moods")


class MoodsRepository:
    """Repository for mood entry operations, always scoped by owner."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def create(self, owner_id: str, mood: MoodLabel, note: Optional[str] = None) -> MoodEntry:
        """Insert a mood entry and return the stored row."""
        payload = {
            "user_id": owner_id,
            "mood": MoodLabel(mood).value,
            "note": note,
        }
        try:
            result = self.client.table(MOOD_TABLE).insert(payload).execute()
        except Exception as e:
            logger.error(f"Error creating mood entry: {e}")
            raise StoreWriteError("Failed to save mood entry.", table=MOOD_TABLE) from e

        if not result.data:
            raise StoreWriteError("Mood entry insert returned no row.", table=MOOD_TABLE)

        entry = MoodEntry.model_validate(result.data[0])
        logger.info(f"Mood entry created: {entry.id}")
        return entry

    def list_recent(self, owner_id: str, limit: int = 20) -> List[MoodEntry]:
        """Get an owner's most recent mood entries."""
        try:
            result = self.client.table(MOOD_TABLE).select("*").eq(
                "user_id", owner_id
            ).order("created_at", desc=True).limit(limit).execute()
        except Exception as e:
            logger.error(f"Error listing mood entries: {e}")
            raise StoreReadError("Failed to load mood entries.", table=MOOD_TABLE) from e

        return [MoodEntry.model_validate(row) for row in result.data or []]

    def delete(self, owner_id: str, entry_id: str) -> bool:
        """
        Delete one of the owner's mood entries.

        Returns:
            True if a row was removed, False if the owner has no such entry
        """
        try:
            result = self.client.table(MOOD_TABLE).delete().eq(
                "id", entry_id
            ).eq("user_id", owner_id).execute()
        except Exception as e:
            logger.error(f"Error deleting mood entry {entry_id}: {e}")
            raise StoreWriteError("Failed to delete mood entry.", table=MOOD_TABLE) from e

        deleted = bool(result.data)
        if deleted:
            logger.info(f"Mood entry deleted: {entry_id}")
        return deleted
