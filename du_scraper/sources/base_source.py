from abc import ABC, abstractmethod
from typing import Any

from du_scraper.scraper import Scraper


class BaseSource(ABC):
    """Abstract base class for harvested sites.

    Attributes:
        name: Short name used on the command line and in logs.
        output_file: File name written inside the results directory.
        result_key: Top-level key of the written JSON document.
    """

    name: str
    output_file: str
    result_key: str

    def __init__(self, scraper: Scraper | None = None):
        self.scraper = scraper or Scraper()

    @abstractmethod
    def harvest(self) -> list[Any]:
        """Fetches and parses the site.

        Returns:
            The records to persist, each providing `to_dict()`.
        """
        pass
