from dataclasses import dataclass, field
from typing import Iterator, TypedDict

# Placeholder for fields whose enrichment fetch failed or came back empty.
UNAVAILABLE = "N/A"


class CalendarEventDict(TypedDict):
    title: str
    date: str
    time: str
    description: str


class AthleticEventDict(TypedDict):
    duTeam: str
    opponent: str
    date: str


class CourseDict(TypedDict):
    course: str
    title: str


@dataclass(frozen=True)
class QueryWindow:
    """A date range covering one unit of pagination work.

    Dates are ISO 8601 (YYYY-MM-DD); `end` is exclusive, as the calendar
    search treats it.
    """

    start: str
    end: str

    @classmethod
    def months(cls, year: int) -> Iterator["QueryWindow"]:
        """Yields one window per calendar month of `year`, January first."""
        for month in range(1, 13):
            next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
            yield cls(
                start=f"{year:04d}-{month:02d}-01",
                end=f"{next_year:04d}-{next_month:02d}-01",
            )


@dataclass
class ItemReference:
    """An entry on a listing page pointing at its detail page."""

    title: str
    date: str
    url: str


@dataclass
class ListingPage:
    items: list[ItemReference] = field(default_factory=list)
    next_url: str | None = None


@dataclass(frozen=True)
class CalendarEvent:
    """
    Represents a single event from the university calendar.

    `date` keeps the text shown on the listing page; `time` and
    `description` come from the detail page and fall back to UNAVAILABLE.
    """

    title: str
    date: str
    time: str = UNAVAILABLE
    description: str = UNAVAILABLE

    def to_dict(self) -> CalendarEventDict:
        return CalendarEventDict(
            title=self.title,
            date=self.date,
            time=self.time,
            description=self.description,
        )


@dataclass(frozen=True)
class AthleticEvent:
    du_team: str
    opponent: str
    date: str

    def to_dict(self) -> AthleticEventDict:
        return AthleticEventDict(
            duTeam=self.du_team, opponent=self.opponent, date=self.date
        )


@dataclass(frozen=True)
class Course:
    course: str  # e.g. "COMP 3621"
    title: str

    def to_dict(self) -> CourseDict:
        return CourseDict(course=self.course, title=self.title)
