from collections.abc import Iterable
from datetime import datetime
from urllib.parse import urlencode

import structlog

from du_scraper.exceptions import FetchError
from du_scraper.models import (
    UNAVAILABLE,
    CalendarEvent,
    ItemReference,
    ListingPage,
    QueryWindow,
)
from du_scraper.parsers import CalendarParser
from du_scraper.scraper import Scraper
from du_scraper.sources.base_source import BaseSource
from du_scraper.utils.date_and_time import chronological_key

logger = structlog.get_logger(__name__)


class CalendarSource(BaseSource):
    """Harvests the university calendar one date window at a time.

    Each window is paginated: a listing page yields item references and an
    optional link to the next page. Every item is enriched from its detail
    page. Windows and pages are processed strictly in order.
    """

    name = "calendar"
    output_file = "calendar_events.json"
    result_key = "events"

    def __init__(
        self,
        calendar_url: str = "https://www.du.edu/calendar",
        site_url: str = "https://www.du.edu",
        windows: Iterable[QueryWindow] | None = None,
        scraper: Scraper | None = None,
    ):
        """Initializes the CalendarSource.

        Args:
            calendar_url: URL of the calendar search page.
            site_url: Root used to resolve relative event and page links.
            windows: Date windows to harvest (default: each month of the
                current year).
            scraper: An optional shared Scraper instance.
        """
        super().__init__(scraper)
        self.calendar_url = calendar_url
        self.site_url = site_url.rstrip("/") + "/"
        self.windows = list(
            windows if windows is not None else QueryWindow.months(datetime.now().year)
        )
        self.parser = CalendarParser()

    def listing_url(self, window: QueryWindow) -> str:
        """Returns the first listing page URL for a window."""
        query = urlencode(
            {"search": "", "start_date": window.start, "end_date": window.end}
        )
        return f"{self.calendar_url}?{query}"

    def fetch_listing(self, url: str) -> ListingPage | None:
        """Fetches and parses one listing page.

        Returns:
            The parsed page, or None if it could not be fetched.
        """
        try:
            html = self.scraper.fetch(url)
        except FetchError as e:
            logger.error("listing_fetch_failed", url=url, error=e.message)
            return None
        return self.parser.parse_listing(html, self.site_url)

    def fetch_event(self, item: ItemReference) -> CalendarEvent:
        """Builds the event for an item, enriched from its detail page.

        A failed detail fetch keeps the event with time and description set
        to UNAVAILABLE.
        """
        try:
            html = self.scraper.fetch(item.url)
        except FetchError as e:
            logger.error("event_details_fetch_failed", url=item.url, error=e.message)
            return CalendarEvent(
                title=item.title,
                date=item.date,
                time=UNAVAILABLE,
                description=UNAVAILABLE,
            )

        time, description = self.parser.parse_details(html)
        return CalendarEvent(
            title=item.title, date=item.date, time=time, description=description
        )

    def scrape_window(self, window: QueryWindow) -> list[CalendarEvent]:
        """Harvests every listing page of one window.

        Pagination stops at the first page that fails to load, has no items,
        has no next link, or links back to a page already visited. Events
        from earlier pages are kept in every case.
        """
        logger.info("scraping_window", start=window.start, end=window.end)

        events: list[CalendarEvent] = []
        visited: set[str] = set()
        url: str | None = self.listing_url(window)

        while url:
            if url in visited:
                logger.warning("pagination_loop_detected", url=url)
                break
            visited.add(url)

            page = self.fetch_listing(url)
            if page is None or not page.items:
                break

            logger.info("listing_page_parsed", url=url, items=len(page.items))
            for item in page.items:
                events.append(self.fetch_event(item))

            url = page.next_url

        logger.info(
            "window_complete", start=window.start, end=window.end, count=len(events)
        )
        return events

    def harvest(
        self, windows: Iterable[QueryWindow] | None = None
    ) -> list[CalendarEvent]:
        """Harvests all windows and returns their events in date order.

        Args:
            windows: Windows to harvest instead of the configured ones.

        Returns:
            A new list with every event, sorted chronologically. Events whose
            date cannot be parsed come last, in harvest order.
        """
        all_events: list[CalendarEvent] = []
        for window in windows if windows is not None else self.windows:
            all_events.extend(self.scrape_window(window))

        undated = sum(1 for e in all_events if chronological_key(e.date)[0])
        if undated:
            logger.warning("unparseable_event_dates", count=undated)

        logger.info("calendar_harvest_complete", count=len(all_events))
        return sorted(all_events, key=lambda e: chronological_key(e.date))
