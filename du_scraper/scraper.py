import time

import cloudscraper
import structlog
from cloudscraper.exceptions import CloudflareException
from requests.exceptions import HTTPError, RequestException

from du_scraper.exceptions import FetchError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 20.0
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class Scraper:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT, retries: int = 3):
        """
        Initialize the Scraper with a cloudscraper session.

        :param timeout: Seconds to wait for each response before giving up.
        :param retries: Attempts per URL for transient failures.
        """
        self.scraper = cloudscraper.create_scraper()
        self.timeout = timeout
        self.retries = max(1, retries)

        self.scraper.headers.update({"Accept-Language": "en-US,en;q=0.9"})

    @staticmethod
    def _is_retryable(error: RequestException) -> bool:
        response = getattr(error, "response", None)
        if isinstance(error, HTTPError) and response is not None:
            return response.status_code in RETRYABLE_STATUS_CODES
        return True

    def fetch(self, url: str, params: dict[str, str] | None = None) -> str:
        """
        Perform a GET request with a timeout and bounded retries.

        :param url: Target URL.
        :param params: Query parameters.
        :return: The response body as text.
        :raises FetchError: If every attempt failed or the failure is not
            retryable (e.g. 404 or an unsolved Cloudflare challenge).
        """
        for attempt in range(self.retries):
            if attempt > 0:
                logger.info(
                    "fetching_url", url=url, attempt=attempt + 1, retries=self.retries
                )
            else:
                logger.info("fetching_url", url=url)

            try:
                response = self.scraper.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.text
            except RequestException as e:
                response = getattr(e, "response", None)
                status_code = response.status_code if response is not None else None
                retryable = self._is_retryable(e)
                logger.warning(
                    "request_failed", url=url, status_code=status_code, error=str(e)
                )

                if retryable and attempt < self.retries - 1:
                    time.sleep(2**attempt)  # Exponential backoff
                    continue

                logger.error("fetch_failed", url=url, attempts=attempt + 1)
                raise FetchError(
                    f"Failed to fetch {url} after {attempt + 1} attempt(s)",
                    url=url,
                    status_code=status_code,
                    retryable=retryable,
                    cause=e,
                ) from e
            except CloudflareException as e:
                logger.error("cloudflare_challenge_failed", url=url, error=str(e))
                raise FetchError(
                    f"Cloudflare challenge blocked {url}",
                    url=url,
                    retryable=False,
                    cause=e,
                    suggestion=(
                        "The site served a Cloudflare challenge that could not "
                        "be solved. Retry later."
                    ),
                ) from e

        # Unreachable: the loop either returns or raises.
        raise FetchError(f"Failed to fetch {url}", url=url)
