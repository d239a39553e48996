from collections.abc import Iterable

import structlog

from du_scraper.exceptions import ExtractionError, FetchError, ParseError
from du_scraper.extractor import (
    ExtractionMarkers,
    ExtractionStatus,
    extract_embedded_object,
)
from du_scraper.models import AthleticEvent
from du_scraper.parsers import AthleticsParser
from du_scraper.scraper import Scraper
from du_scraper.sources.base_source import BaseSource

logger = structlog.get_logger(__name__)


class AthleticsSource(BaseSource):
    """Harvests the athletics schedule embedded in the team site's scripts."""

    name = "athletics"
    output_file = "athletic_events.json"
    result_key = "events"

    def __init__(
        self,
        urls: Iterable[str] = ("https://denverpioneers.com/",),
        markers: ExtractionMarkers | None = None,
        scraper: Scraper | None = None,
    ):
        """Initializes the AthleticsSource.

        Args:
            urls: Pages embedding a schedule object, tried in order.
            markers: Markers identifying the script block with the object.
            scraper: An optional shared Scraper instance.
        """
        super().__init__(scraper)
        self.urls = list(urls)
        self.markers = markers or ExtractionMarkers()
        self.parser = AthleticsParser()

    def scrape_document(
        self, url: str
    ) -> tuple[ExtractionStatus | None, list[AthleticEvent], str]:
        """Extracts the schedule from one page.

        Returns:
            (status, events, snippet). The status is None when the page could
            not be fetched; events are only present when it is FOUND.
        """
        try:
            html = self.scraper.fetch(url)
        except FetchError as e:
            logger.error("schedule_fetch_failed", url=url, error=e.message)
            return None, [], ""

        result = extract_embedded_object(self.parser.script_blocks(html), self.markers)
        if not result.found or result.data is None:
            logger.error(
                "schedule_extraction_failed", url=url, status=result.status.value
            )
            return result.status, [], result.snippet

        try:
            events = self.parser.parse_schedule(result.data)
        except ParseError as e:
            logger.error("schedule_parse_failed", url=url, error=e.message)
            return ExtractionStatus.MALFORMED, [], result.snippet

        logger.info("events_found", url=url, count=len(events))
        return result.status, events, result.snippet

    def harvest(self) -> list[AthleticEvent]:
        """Extracts events from every configured page.

        A page that fails is skipped; the run only fails when no page
        yielded a schedule.

        Raises:
            ExtractionError: If no page yielded a schedule.
        """
        events: list[AthleticEvent] = []
        succeeded = False
        last_status: ExtractionStatus | None = None
        last_snippet = ""

        for url in self.urls:
            status, page_events, snippet = self.scrape_document(url)
            if status is ExtractionStatus.FOUND:
                succeeded = True
                events.extend(page_events)
            else:
                last_status, last_snippet = status, snippet

        if not succeeded:
            status_name = last_status.value if last_status else "fetch_failed"
            raise ExtractionError(
                f"No schedule data could be extracted from {len(self.urls)} page(s)",
                status=status_name,
                url=self.urls[-1] if self.urls else None,
                html_snippet=last_snippet or None,
            )

        return events
