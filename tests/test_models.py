from du_scraper.models import (
    UNAVAILABLE,
    AthleticEvent,
    CalendarEvent,
    Course,
    ListingPage,
)


def test_calendar_event_defaults_to_unavailable() -> None:
    event = CalendarEvent(title="Lecture", date="March 1, 2025")

    assert event.to_dict() == {
        "title": "Lecture",
        "date": "March 1, 2025",
        "time": UNAVAILABLE,
        "description": UNAVAILABLE,
    }


def test_athletic_event_uses_camel_case_team_key() -> None:
    event = AthleticEvent(du_team="Denver Pioneers", opponent="Miami", date="2025-02-01")

    assert list(event.to_dict()) == ["duTeam", "opponent", "date"]


def test_course_to_dict() -> None:
    assert Course("COMP 3621", "Computer Networking").to_dict() == {
        "course": "COMP 3621",
        "title": "Computer Networking",
    }


def test_listing_page_defaults() -> None:
    page = ListingPage()

    assert page.items == []
    assert page.next_url is None
    assert ListingPage().items is not page.items
