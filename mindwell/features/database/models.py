"""Row models for the two owner-scoped tables."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

MOOD_TABLE = "mood_entries"
JOURNAL_TABLE = "journal_entries"


class MoodLabel(str, Enum):
    """Categorical moods a user can record."""
    HAPPY = "happy"
    CALM = "calm"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANXIOUS = "anxious"
    ANGRY = "angry"


class MoodEntry(BaseModel):
    """A recorded mood. Immutable once created; delete only."""
    id: str
    user_id: str
    mood: MoodLabel
    note: Optional[str] = None
    created_at: Optional[datetime] = None


class JournalEntry(BaseModel):
    """
    A free-text journal entry.

    ``ai_insight`` is the annotation: absent on insert, set at most once.
    """
    id: str
    user_id: str
    content: str
    ai_insight: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_annotated(self) -> bool:
        return self.ai_insight is not None
