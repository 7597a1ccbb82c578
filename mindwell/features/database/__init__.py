"""
Database Feature Module - Owner-scoped access to the Supabase tables.

Usage:
    from mindwell.features.database import DatabaseClient

    db = DatabaseClient(supabase_client)
    entry = db.journals.create(owner_id, content)
"""

from mindwell.features.database.client import DatabaseClient
from mindwell.features.database.models import JournalEntry, MoodEntry, MoodLabel

__all__ = [
    "DatabaseClient",
    "JournalEntry",
    "MoodEntry",
    "MoodLabel",
]
