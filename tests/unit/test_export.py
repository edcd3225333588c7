import csv
import io
import json
from datetime import datetime

import pytest

from app.modules.flashcards.export import (
    CSV_HEADER,
    ExportFormat,
    export_flashcards,
    to_csv,
    to_json,
)

CARDS = [
    {
        "id": "7f1c2d1e-0000-4000-8000-000000000001",
        "front": 'What is "ATP"?',
        "back": "Energy currency, of the cell",
        "source": "AI_EDITED",
        "candidate": False,
        "created_at": datetime(2025, 5, 1, 12, 0, 0),
        "updated_at": "2025-05-02T08:30:00",
    },
    {
        "id": "7f1c2d1e-0000-4000-8000-000000000002",
        "front": "Line\nbreak",
        "back": "ok",
        "source": "MANUAL",
        "candidate": False,
        "created_at": "2025-05-03T10:00:00",
        "updated_at": "2025-05-03T10:00:00",
    },
]


@pytest.mark.unit
def test_csv_quotes_every_field_and_doubles_quotes():
    content = to_csv(CARDS)
    lines = content.splitlines()

    assert lines[0] == ",".join(f'"{h}"' for h in CSV_HEADER)
    assert lines[1] == (
        '"What is ""ATP""?","Energy currency, of the cell","AI_EDITED","false",'
        '"2025-05-01T12:00:00","2025-05-02T08:30:00"'
    )


@pytest.mark.unit
def test_csv_round_trips_through_reader():
    rows = list(csv.reader(io.StringIO(to_csv(CARDS))))

    assert rows[0] == CSV_HEADER
    assert rows[2][0] == "Line\nbreak"
    assert len(rows) == 3


@pytest.mark.unit
def test_json_is_indented_array():
    content = to_json(CARDS)

    assert content.startswith("[\n  {")
    data = json.loads(content)
    assert data[0]["front"] == 'What is "ATP"?'
    assert data[0]["created_at"] == "2025-05-01 12:00:00"


@pytest.mark.unit
@pytest.mark.parametrize(
    "fmt,filename,media_type",
    [
        (ExportFormat.JSON, "flashcards.json", "application/json"),
        (ExportFormat.CSV, "flashcards.csv", "text/csv"),
    ],
)
def test_export_flashcards_picks_format(fmt, filename, media_type):
    content, name, mt = export_flashcards(CARDS, fmt)

    assert name == filename
    assert mt == media_type
    assert content


@pytest.mark.unit
def test_empty_csv_has_only_header():
    assert to_csv([]).splitlines() == [",".join(f'"{h}"' for h in CSV_HEADER)]
