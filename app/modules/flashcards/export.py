"""Render a user's flashcards as downloadable JSON or CSV."""

from __future__ import annotations

import csv
import enum
import io
import json
from datetime import datetime
from typing import Any, Iterable, Mapping

CSV_HEADER = ["Front", "Back", "Source", "Candidate", "Created At", "Updated At"]


class ExportFormat(str, enum.Enum):
    JSON = "json"
    CSV = "csv"


MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
}


def _iso(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return "" if value is None else str(value)


def to_json(cards: Iterable[Mapping[str, Any]]) -> str:
    return json.dumps(list(cards), indent=2, ensure_ascii=False, default=str)


def to_csv(cards: Iterable[Mapping[str, Any]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for card in cards:
        writer.writerow(
            [
                card["front"],
                card["back"],
                card["source"],
                str(bool(card["candidate"])).lower(),
                _iso(card.get("created_at")),
                _iso(card.get("updated_at")),
            ]
        )
    return buf.getvalue()


def export_flashcards(
    cards: Iterable[Mapping[str, Any]], fmt: ExportFormat
) -> tuple[str, str, str]:
    """Return ``(content, filename, media_type)`` for the requested format."""
    if fmt is ExportFormat.CSV:
        content = to_csv(cards)
    else:
        content = to_json(cards)
    return content, f"flashcards.{fmt.value}", MEDIA_TYPES[fmt]
