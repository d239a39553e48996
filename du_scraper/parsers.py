import re
from typing import Any
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup

from du_scraper.course_filter import MIN_COURSE_NUMBER, is_eligible
from du_scraper.exceptions import ParseError
from du_scraper.models import (
    UNAVAILABLE,
    AthleticEvent,
    Course,
    ItemReference,
    ListingPage,
)
from du_scraper.utils.date_and_time import normalize_whitespace

logger = structlog.get_logger(__name__)

DEFAULT_TEAM_NAME = "University of Denver"


class CalendarParser:
    """Parses the university calendar listing and event detail pages."""

    LISTING_ITEM_SELECTOR = "#events-listing .events-listing__item"
    NEXT_PAGE_SELECTOR = ".pagination-next a[href]"
    DESCRIPTION_SELECTOR = ".description"
    TIME_SELECTOR = "p:has(.icon-du-clock)"

    def parse_listing(self, html: str, base_url: str) -> ListingPage:
        """
        Parses one listing page into item references and the next-page link.

        Items without a detail link are skipped. Relative links are resolved
        against `base_url`.
        """
        soup = BeautifulSoup(html, "lxml")
        page = ListingPage()

        for element in soup.select(self.LISTING_ITEM_SELECTOR):
            link = element.select_one("a.event-card[href]")
            if not link:
                continue

            heading = element.find("h3")
            first_paragraph = element.find("p")
            page.items.append(
                ItemReference(
                    title=heading.get_text(" ", strip=True) if heading else "",
                    date=(
                        normalize_whitespace(first_paragraph.get_text())
                        if first_paragraph
                        else ""
                    ),
                    url=urljoin(base_url, link["href"]),
                )
            )

        next_link = soup.select_one(self.NEXT_PAGE_SELECTOR)
        if next_link:
            page.next_url = urljoin(base_url, next_link["href"])

        return page

    def parse_details(self, html: str) -> tuple[str, str]:
        """
        Extracts (time, description) from an event detail page.

        Missing or empty values are replaced by UNAVAILABLE.
        """
        soup = BeautifulSoup(html, "lxml")

        description_el = soup.select_one(self.DESCRIPTION_SELECTOR)
        description = (
            description_el.get_text(" ", strip=True) if description_el else ""
        )

        # Multi-session events carry one clock paragraph per session.
        time = normalize_whitespace(
            " ".join(el.get_text() for el in soup.select(self.TIME_SELECTOR))
        )

        return (time or UNAVAILABLE, description or UNAVAILABLE)


class AthleticsParser:
    """Turns the schedule object embedded in the athletics site into events."""

    @staticmethod
    def script_blocks(html: str) -> list[str]:
        """Returns the text of every <script> element, in document order."""
        soup = BeautifulSoup(html, "lxml")
        return [script.string or "" for script in soup.find_all("script")]

    @staticmethod
    def _team_name(entry: dict[str, Any]) -> str:
        result = entry.get("result")
        line_scores = result.get("line_scores") if isinstance(result, dict) else None
        if not isinstance(line_scores, dict):
            return DEFAULT_TEAM_NAME

        for key in ("home_full_name", "away_full_name"):
            name = line_scores.get(key)
            if isinstance(name, str) and "denver" in name.lower():
                return name
        return DEFAULT_TEAM_NAME

    def parse_schedule(self, data: dict[str, Any]) -> list[AthleticEvent]:
        """
        Maps each entry of the object's `data` list to an AthleticEvent.

        :raises ParseError: If `data` is missing or not a list.
        """
        entries = data.get("data")
        if not isinstance(entries, list):
            raise ParseError(
                "Embedded schedule object has no 'data' list",
                selector="data",
                html_snippet=str(data),
            )

        events = []
        for entry in entries:
            if not isinstance(entry, dict):
                logger.warning("schedule_entry_skipped", entry=str(entry)[:200])
                continue

            opponent = entry.get("opponent")
            opponent_name = opponent.get("name") if isinstance(opponent, dict) else None
            events.append(
                AthleticEvent(
                    du_team=self._team_name(entry),
                    opponent=opponent_name or "",
                    date=entry.get("date") or "",
                )
            )
        return events


class BulletinParser:
    """Parses course blocks from a bulletin course description page."""

    BLOCK_SELECTOR = ".courseblock"

    def __init__(self, subject: str = "COMP", min_number: int = MIN_COURSE_NUMBER):
        self.subject = subject
        self.min_number = min_number
        # "COMP 3621 Computer Networking (4 Credits)"
        self.title_pattern = re.compile(
            rf"({re.escape(subject)}\s?\d{{4}})\s(.+?)\s+\(\d+(?:-\d+)?\s+Credits?\)"
        )

    def parse_courses(self, html: str) -> list[Course]:
        soup = BeautifulSoup(html, "lxml")
        courses = []

        for block in soup.select(self.BLOCK_SELECTOR):
            title_el = block.select_one(".courseblocktitle")
            title_text = normalize_whitespace(title_el.get_text()) if title_el else ""
            if not title_text:
                continue

            desc_el = block.select_one(".courseblockdesc")
            description = normalize_whitespace(desc_el.get_text()) if desc_el else ""

            match = self.title_pattern.search(title_text)
            if not match:
                logger.warning("course_title_unmatched", title=title_text)
                continue

            code, title = match.group(1).strip(), match.group(2).strip()
            if is_eligible(code, description, self.min_number):
                courses.append(Course(course=code, title=title))
                logger.debug("course_added", course=code, title=title)
            else:
                logger.debug("course_skipped", course=code)

        return courses
