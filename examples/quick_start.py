#!/usr/bin/env python3
"""Quick start example for the DU scraper.

This script harvests a single month of the university calendar and the
computer science bulletin, then saves both to JSON.

This is a minimal, fast-running example; the full harvest is `du-scraper all`.
"""

import sys
from pathlib import Path

# Add parent directory to path to allow importing du_scraper
sys.path.insert(0, str(Path(__file__).parent.parent))

from du_scraper.logging_setup import configure_logging
from du_scraper.models import QueryWindow
from du_scraper.sources.bulletin_source import BulletinSource
from du_scraper.sources.calendar_source import CalendarSource
from du_scraper.storage import Storage


def main() -> None:
    """Run a simple scraping example."""
    configure_logging()
    window = QueryWindow(start="2025-01-01", end="2025-02-01")

    print(f"Scraping calendar events from {window.start} to {window.end}")

    storage = Storage("example_results")

    events = CalendarSource(windows=[window]).harvest()
    print(f"Found {len(events)} events")
    for event in events[:3]:
        print(f"  - {event.date}: {event.title}")

    courses = BulletinSource().harvest()
    print(f"Found {len(courses)} eligible courses")

    storage.save("calendar_events.json", "events", events)
    storage.save("bulletin.json", "courses", courses)
    print("\nSaved results to example_results/")


if __name__ == "__main__":
    main()
