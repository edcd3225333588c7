import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.apis import deps
from app.core.db.schemas.flashcards import FlashcardSource
from app.core.db_services import (
    FlashcardNotFoundError,
    NoStorableFlashcardsError,
    StatisticsDelta,
    acceptance_delta,
    resolve_update,
    storable_candidates,
)
from app.modules.auth import current_active_user
from app.modules.flashcards.errors import ErrorKind, OpenRouterError
from app.modules.flashcards.models.flashcards import CandidateFlashcard

USER_ID = 1
OTHER_USER_ID = 2


class InMemoryStatistics:
    def __init__(self):
        self.rows = {}

    async def get_statistics(self, user_id):
        return self.rows.get(user_id)

    async def track(self, user_id, delta: StatisticsDelta):
        row = self.rows.setdefault(
            user_id,
            SimpleNamespace(
                generated_count=0, accepted_edited_count=0, accepted_unedited_count=0
            ),
        )
        row.generated_count += delta.generated
        row.accepted_edited_count += delta.accepted_edited
        row.accepted_unedited_count += delta.accepted_unedited


class InMemoryFlashcards:
    """Mirrors FlashcardService on a list, applying the same update rules."""

    def __init__(self, statistics: InMemoryStatistics):
        self.rows = []
        self.statistics = statistics
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _tick(self):
        self._clock += timedelta(seconds=1)
        return self._clock

    def add(self, user_id, front, back, source, candidate):
        now = self._tick()
        row = SimpleNamespace(
            id=uuid.uuid4(),
            user_id=user_id,
            front=front,
            back=back,
            source=source,
            candidate=candidate,
            created_at=now,
            updated_at=now,
        )
        self.rows.append(row)
        return row

    async def save_generated_flashcards(self, user_id, candidates):
        fitting = storable_candidates(candidates)
        if not fitting:
            raise NoStorableFlashcardsError("All generated flashcards exceed length limits")
        rows = [
            self.add(user_id, c.front, c.back, FlashcardSource.AI, True)
            for c in fitting
        ]
        await self.statistics.track(user_id, StatisticsDelta(generated=len(rows)))
        return rows

    async def create_manual_flashcard(self, user_id, *, front, back):
        return self.add(user_id, front, back, FlashcardSource.MANUAL, False)

    async def get_flashcard(self, user_id, flashcard_id, *, candidate=None):
        for row in self.rows:
            if row.id == flashcard_id and row.user_id == user_id:
                if candidate is None or row.candidate == candidate:
                    return row
        raise FlashcardNotFoundError(flashcard_id)

    async def list_flashcards(self, user_id, *, candidate, page=1, limit=20, sort=None):
        rows = [r for r in self.rows if r.user_id == user_id and r.candidate == candidate]
        if sort == "created_at_asc":
            rows.sort(key=lambda r: r.created_at)
        elif sort == "created_at_desc":
            rows.sort(key=lambda r: r.created_at, reverse=True)
        else:
            rows.sort(key=lambda r: r.updated_at, reverse=True)
        start = (page - 1) * limit
        return rows[start : start + limit], len(rows)

    async def list_all_accepted(self, user_id):
        rows = [r for r in self.rows if r.user_id == user_id and not r.candidate]
        return sorted(rows, key=lambda r: r.created_at)

    async def update_flashcard(self, user_id, flashcard_id, changes):
        row = await self.get_flashcard(user_id, flashcard_id)
        resolved = resolve_update(row, changes)
        for field, value in resolved.values.items():
            setattr(row, field, value)
        row.updated_at = self._tick()
        await self.statistics.track(user_id, resolved.delta)
        return row

    async def accept_flashcard(self, user_id, flashcard_id):
        row = await self.get_flashcard(user_id, flashcard_id, candidate=True)
        delta = acceptance_delta(row)
        row.candidate = False
        row.updated_at = self._tick()
        await self.statistics.track(user_id, delta)
        return row

    async def delete_flashcard(self, user_id, flashcard_id):
        row = await self.get_flashcard(user_id, flashcard_id)
        self.rows.remove(row)


class FakeGenerator:
    def __init__(self):
        self.cards = [
            CandidateFlashcard(front="What is ATP?", back="The cell's energy currency"),
            CandidateFlashcard(front="Where is ATP made?", back="In the mitochondria"),
        ]
        self.error = None
        self.texts = []

    async def generate_flashcards(self, text):
        self.texts.append(text)
        if self.error is not None:
            raise self.error
        return list(self.cards)

    def fail_with(self, kind: ErrorKind):
        self.error = OpenRouterError(kind, f"{kind.value} failure")


@pytest.fixture
def statistics_store():
    return InMemoryStatistics()


@pytest.fixture
def flashcard_store(statistics_store):
    return InMemoryFlashcards(statistics_store)


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def client(flashcard_store, statistics_store, fake_generator):
    from main import app

    user = SimpleNamespace(id=USER_ID, email="user@example.com", is_active=True)
    app.dependency_overrides[current_active_user] = lambda: user
    app.dependency_overrides[deps.get_flashcard_service] = lambda: flashcard_store
    app.dependency_overrides[deps.get_statistics_service] = lambda: statistics_store
    app.dependency_overrides[deps.get_flashcards_generator] = lambda: fake_generator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
