import structlog

from du_scraper.course_filter import MIN_COURSE_NUMBER
from du_scraper.models import Course
from du_scraper.parsers import BulletinParser
from du_scraper.scraper import Scraper
from du_scraper.sources.base_source import BaseSource

logger = structlog.get_logger(__name__)

DU_BULLETIN_URL = (
    "https://bulletin.du.edu/undergraduate/majorsminorscoursedescriptions/"
    "traditionalbachelorsprogrammajorandminors/computerscience/"
)


class BulletinSource(BaseSource):
    """Harvests upper-division courses without prerequisites from the bulletin."""

    name = "bulletin"
    output_file = "bulletin.json"
    result_key = "courses"

    def __init__(
        self,
        url: str = DU_BULLETIN_URL,
        subject: str = "COMP",
        min_number: int = MIN_COURSE_NUMBER,
        scraper: Scraper | None = None,
    ):
        super().__init__(scraper)
        self.url = url
        self.parser = BulletinParser(subject=subject, min_number=min_number)

    def harvest(self) -> list[Course]:
        """Fetches the bulletin page and returns the eligible courses.

        Raises:
            FetchError: If the page cannot be fetched.
        """
        html = self.scraper.fetch(self.url)
        courses = self.parser.parse_courses(html)

        if not courses:
            logger.warning("no_courses_found", url=self.url)
        else:
            logger.info("courses_found", count=len(courses))
        return courses
