"""Shared fixtures: in-memory repositories, a scripted insight generator and a test app."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from mindwell.api.dependencies import Services
from mindwell.features.auth.service import SupabaseAuthService
from mindwell.features.database.models import JournalEntry, MoodEntry, MoodLabel
from mindwell.features.journaling.annotation import AnnotationWorkflow
from mindwell.main import create_app
from mindwell.shared.errors import OracleError, StoreReadError, StoreWriteError

OWNER = "user-1"
OTHER_OWNER = "user-2"
TOKENS = {"token-1": OWNER, "token-2": OTHER_OWNER}

_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


class InMemoryJournals:
    """Journal repository double with the same contract as JournalsRepository."""

    def __init__(self) -> None:
        self.rows: Dict[str, JournalEntry] = {}
        self.next_ids: List[str] = []
        self._counter = itertools.count(1)
        self.fail_create = False
        self.fail_annotate = False
        self.fail_list = False
        self.create_calls = 0
        self.annotate_calls: List[tuple] = []

    def create(self, owner_id: str, content: str) -> JournalEntry:
        self.create_calls += 1
        if self.fail_create:
            raise StoreWriteError("Failed to save journal entry.", table="journal_entries")
        n = next(self._counter)
        entry_id = self.next_ids.pop(0) if self.next_ids else f"entry-{n}"
        entry = JournalEntry(
            id=entry_id,
            user_id=owner_id,
            content=content,
            ai_insight=None,
            created_at=_BASE_TIME + timedelta(seconds=n),
        )
        self.rows[entry_id] = entry
        return entry

    def get(self, owner_id: str, entry_id: str) -> Optional[JournalEntry]:
        entry = self.rows.get(entry_id)
        if entry is None or entry.user_id != owner_id:
            return None
        return entry

    def list_recent(self, owner_id: str, limit: int = 20) -> List[JournalEntry]:
        if self.fail_list:
            raise StoreReadError("Failed to load journal entries.", table="journal_entries")
        owned = [e for e in self.rows.values() if e.user_id == owner_id]
        owned.sort(key=lambda e: e.created_at, reverse=True)
        return owned[:limit]

    def set_annotation(self, owner_id: str, entry_id: str, text: str) -> Optional[JournalEntry]:
        self.annotate_calls.append((owner_id, entry_id, text))
        if self.fail_annotate:
            raise StoreWriteError("Failed to save AI insight.", table="journal_entries")
        entry = self.get(owner_id, entry_id)
        if entry is None or entry.ai_insight is not None:
            return None
        updated = entry.model_copy(update={"ai_insight": text})
        self.rows[entry_id] = updated
        return updated

    def delete(self, owner_id: str, entry_id: str) -> bool:
        if self.get(owner_id, entry_id) is None:
            return False
        del self.rows[entry_id]
        return True


class InMemoryMoods:
    def __init__(self) -> None:
        self.rows: Dict[str, MoodEntry] = {}
        self._counter = itertools.count(1)
        self.fail_create = False

    def create(self, owner_id: str, mood: MoodLabel, note: Optional[str] = None) -> MoodEntry:
        if self.fail_create:
            raise StoreWriteError("Failed to save mood entry.", table="mood_entries")
        n = next(self._counter)
        entry = MoodEntry(
            id=f"mood-{n}",
            user_id=owner_id,
            mood=MoodLabel(mood),
            note=note,
            created_at=_BASE_TIME + timedelta(seconds=n),
        )
        self.rows[entry.id] = entry
        return entry

    def list_recent(self, owner_id: str, limit: int = 20) -> List[MoodEntry]:
        owned = [e for e in self.rows.values() if e.user_id == owner_id]
        owned.sort(key=lambda e: e.created_at, reverse=True)
        return owned[:limit]

    def delete(self, owner_id: str, entry_id: str) -> bool:
        entry = self.rows.get(entry_id)
        if entry is None or entry.user_id != owner_id:
            return False
        del self.rows[entry_id]
        return True


class ScriptedGenerator:
    """Insight generator double: returns ``reply`` or raises ``error``."""

    def __init__(self, reply: str = "Consider a short walk to reset.") -> None:
        self.reply = reply
        self.error: Optional[Exception] = None
        self.calls: List[str] = []

    async def generate(self, content: str) -> str:
        self.calls.append(content)
        if self.error is not None:
            raise self.error
        if not self.reply.strip():
            raise OracleError("AI returned an empty insight.", reason="empty_result")
        return self.reply


def make_supabase_auth_clients():
    """Mock anon/service Supabase clients whose auth resolves TOKENS."""

    def get_user(token):
        if token not in TOKENS:
            raise Exception("invalid JWT: unable to parse or verify signature")
        owner = TOKENS[token]
        return SimpleNamespace(user=SimpleNamespace(id=owner, email=f"{owner}@example.com"))

    anon_client = MagicMock()
    service_client = MagicMock()
    service_client.auth.get_user.side_effect = get_user
    return anon_client, service_client


@pytest.fixture
def journals() -> InMemoryJournals:
    return InMemoryJournals()


@pytest.fixture
def moods() -> InMemoryMoods:
    return InMemoryMoods()


@pytest.fixture
def generator() -> ScriptedGenerator:
    return ScriptedGenerator()


@pytest.fixture
def workflow(journals, generator) -> AnnotationWorkflow:
    return AnnotationWorkflow(journals=journals, generator=generator, refresh_delay=0)


@pytest.fixture
def auth_clients():
    return make_supabase_auth_clients()


@pytest.fixture
def services(journals, moods, generator, workflow, auth_clients) -> Services:
    anon_client, service_client = auth_clients
    database = SimpleNamespace(journals=journals, moods=moods)
    auth = SupabaseAuthService(anon_client, service_client, redirect_url="http://localhost:3000")
    return Services(database=database, generator=generator, auth=auth, workflow=workflow)


@pytest.fixture
def client(services) -> TestClient:
    return TestClient(create_app(services))


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer token-1"}


@pytest.fixture
def other_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer token-2"}
