"""Quick DB inspector for flashcards data.

Summarizes accepted vs. candidate flashcards, the source mix and per-user
statistics rows.

Usage:
  uv run scripts/inspect_flashcards.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure project root is on sys.path so `app` package imports resolve
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sqlalchemy import select, func

from app.core.db.base import session_scope
from app.core.db.schemas.flashcards import Flashcard
from app.core.db.schemas.statistics import Statistics


async def main() -> int:
    async with session_scope() as session:
        total = (await session.execute(select(func.count(Flashcard.id)))).scalar() or 0
        candidates = (
            await session.execute(
                select(func.count(Flashcard.id)).where(Flashcard.candidate.is_(True))
            )
        ).scalar() or 0

        print("Flashcards DB summary:")
        print(f"- Flashcards: {total}")
        print(f"- Accepted: {total - candidates}")
        print(f"- Candidates: {candidates}")

        by_source = await session.execute(
            select(Flashcard.source, func.count(Flashcard.id)).group_by(
                Flashcard.source
            )
        )
        print("\nBy source:")
        for source, count in by_source.all():
            print(f"  • {source.value}: {count}")

        recent = (
            (
                await session.execute(
                    select(Flashcard).order_by(Flashcard.created_at.desc()).limit(5)
                )
            )
            .scalars()
            .all()
        )
        if not recent:
            print("- No flashcards found.")
            return 0

        print("\nRecent flashcards:")
        for c in recent:
            print(
                f"  • {c.id} | user={c.user_id} | source={c.source.value} | "
                f"candidate={c.candidate}"
            )
            print(f"    Front: {c.front[:100]!r}")
            print(f"    Back: {c.back[:120]!r}")

        stats = (await session.execute(select(Statistics))).scalars().all()
        print("\nStatistics:")
        for s in stats:
            print(
                f"  • user={s.user_id} generated={s.generated_count} "
                f"accepted_edited={s.accepted_edited_count} "
                f"accepted_unedited={s.accepted_unedited_count}"
            )

        return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
