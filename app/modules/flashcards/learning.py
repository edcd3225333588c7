"""Linear learning session over accepted flashcards.

There is no scheduling: cards are shown in the order given and the user can
step forward, back, or start over.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, Protocol, Sequence, TypeVar


class _Reviewable(Protocol):
    candidate: bool


CardT = TypeVar("CardT", bound=_Reviewable)


@dataclass(frozen=True)
class LearningStats:
    total_cards: int
    completed_cards: int
    remaining_cards: int
    progress: int


class LearningSession(Generic[CardT]):
    def __init__(self, flashcards: Sequence[CardT], position: int = 0) -> None:
        self.cards: list[CardT] = [c for c in flashcards if not c.candidate]
        self.index = 0
        self.is_complete = False
        if self.cards:
            self.index = max(0, min(int(position), len(self.cards) - 1))

    @property
    def total_cards(self) -> int:
        return len(self.cards)

    @property
    def current(self) -> Optional[CardT]:
        if not self.cards:
            return None
        return self.cards[self.index]

    @property
    def can_go_previous(self) -> bool:
        return self.index > 0

    @property
    def can_go_next(self) -> bool:
        return self.index < self.total_cards - 1

    @property
    def stats(self) -> LearningStats:
        total = self.total_cards
        if total == 0:
            return LearningStats(0, 0, 0, 0)
        completed = self.index + 1
        return LearningStats(
            total_cards=total,
            completed_cards=completed,
            remaining_cards=total - completed,
            progress=round(completed / total * 100),
        )

    def next(self) -> Optional[CardT]:
        """Advance one card; past the last card the session is complete."""
        if self.can_go_next:
            self.index += 1
        else:
            self.is_complete = True
        return self.current

    def previous(self) -> Optional[CardT]:
        if self.can_go_previous:
            self.index -= 1
        return self.current

    def reset(self) -> None:
        self.index = 0
        self.is_complete = False
