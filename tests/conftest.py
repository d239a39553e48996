"""Shared pytest fixtures for DU scraper tests."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from du_scraper.exceptions import FetchError
from du_scraper.scraper import Scraper

# (title, date, href); href None renders an item without a detail link.
ListingItem = tuple[str, str, str | None]


@pytest.fixture
def listing_html() -> Callable[..., str]:
    """Builds a calendar listing page."""

    def build(items: list[ListingItem], next_href: str | None = None) -> str:
        rows = []
        for title, date, href in items:
            link = f'<a class="event-card" href="{href}">View</a>' if href else ""
            rows.append(
                '<div class="events-listing__item">'
                f"<h3>{title}</h3><p>{date}</p><p>Location</p>{link}"
                "</div>"
            )
        pagination = (
            f'<ul class="pagination"><li class="pagination-next">'
            f'<a href="{next_href}">Next</a></li></ul>'
            if next_href
            else ""
        )
        return (
            "<html><body>"
            f'<div id="events-listing">{"".join(rows)}</div>'
            f"{pagination}</body></html>"
        )

    return build


@pytest.fixture
def detail_html() -> Callable[[str, str], str]:
    """Builds a calendar event detail page."""

    def build(time: str, description: str) -> str:
        return (
            "<html><body>"
            f'<p><span class="icon-du-clock"></span> {time}</p>'
            f'<div class="description"><p>{description}</p></div>'
            "</body></html>"
        )

    return build


@pytest.fixture
def fake_scraper() -> Callable[[dict[str, str]], MagicMock]:
    """Creates a Scraper stand-in serving fixed pages.

    URLs missing from `pages` raise FetchError, like an unreachable host.
    """

    def build(pages: dict[str, str]) -> MagicMock:
        scraper = MagicMock(spec=Scraper)

        def fetch(url: str, params: dict[str, str] | None = None) -> str:
            if url not in pages:
                raise FetchError(f"Failed to fetch {url}", url=url, status_code=404)
            return pages[url]

        scraper.fetch.side_effect = fetch
        return scraper

    return build
