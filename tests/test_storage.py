import json
from pathlib import Path

from jsonschema import validate

from du_scraper.models import AthleticEvent, CalendarEvent, Course
from du_scraper.storage import Storage

CALENDAR_SCHEMA = {
    "type": "object",
    "required": ["events"],
    "additionalProperties": False,
    "properties": {
        "events": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["title", "date", "time", "description"],
                "additionalProperties": False,
                "properties": {
                    "title": {"type": "string"},
                    "date": {"type": "string"},
                    "time": {"type": "string"},
                    "description": {"type": "string"},
                },
            },
        }
    },
}


def test_save_creates_results_dir(tmp_path: Path) -> None:
    results_dir = tmp_path / "out" / "results"
    storage = Storage(str(results_dir))

    path = storage.save(
        "calendar_events.json",
        "events",
        [
            CalendarEvent("Career Fair", "February 5, 2025", "10:00 AM", "Meet employers"),
            CalendarEvent("Lecture", "TBA"),
        ],
    )

    assert path == results_dir / "calendar_events.json"
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    validate(instance=data, schema=CALENDAR_SCHEMA)
    assert data["events"][1] == {
        "title": "Lecture",
        "date": "TBA",
        "time": "N/A",
        "description": "N/A",
    }


def test_save_athletic_events_shape(tmp_path: Path) -> None:
    storage = Storage(str(tmp_path))

    path = storage.save(
        "athletic_events.json",
        "events",
        [AthleticEvent("Denver Pioneers", "Université Laval", "2025-01-01")],
    )

    text = path.read_text(encoding="utf-8")
    assert "Université Laval" in text
    assert text.startswith('{\n  "events": [')
    assert json.loads(text) == {
        "events": [
            {"duTeam": "Denver Pioneers", "opponent": "Université Laval", "date": "2025-01-01"}
        ]
    }


def test_save_overwrites_previous_run(tmp_path: Path) -> None:
    storage = Storage(str(tmp_path))
    storage.save("bulletin.json", "courses", [Course("COMP 3621", "Networking")])

    path = storage.save("bulletin.json", "courses", [])

    assert json.loads(path.read_text(encoding="utf-8")) == {"courses": []}
