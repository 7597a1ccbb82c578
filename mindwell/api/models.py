from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from mindwell.features.database.models import JournalEntry, MoodLabel

# =========================================================================
# MOOD MODELS
# =========================================================================

class MoodCreateRequest(BaseModel):
    mood: MoodLabel
    note: Optional[str] = Field(default=None, max_length=2000)

# =========================================================================
# JOURNAL MODELS
# =========================================================================

class JournalCreateRequest(BaseModel):
    content: str

class JournalSubmitResponse(BaseModel):
    status: str  # 'pending', 'annotated' or 'degraded'
    message: str
    entry: JournalEntry
    ai_insight: Optional[str] = None
    entries: List[JournalEntry] = Field(default_factory=list)

# =========================================================================
# INSIGHT MODELS
# =========================================================================

class InsightRequest(BaseModel):
    id: str
    content: str

class InsightResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    ai_insight: Optional[str] = Field(default=None, alias="aiInsight")

# =========================================================================
# AUTH MODELS
# =========================================================================

class MagicLinkRequest(BaseModel):
    email: str

class MagicLinkResponse(BaseModel):
    message: str

class SessionUser(BaseModel):
    id: str
    email: Optional[str] = None

class SessionResponse(BaseModel):
    state: str  # 'signed_in' or 'signed_out'
    user: Optional[SessionUser] = None
