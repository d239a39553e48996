"""Exception hierarchy for the DU scrapers.

Exceptions carry structured context and a correction hint so that a failed
run can be diagnosed from the log alone. Expected extraction outcomes (no
marker on the page, an unbalanced literal) are result values and are only
turned into exceptions when they end a run.
"""

from typing import Any


class ScraperError(Exception):
    """Base exception for all scraper errors.

    Attributes:
        message: Human-readable error message.
        error_data: Structured error information.
        suggestion: Hint for how to resolve the error.
    """

    def __init__(
        self,
        message: str,
        error_data: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_data = error_data or {}
        self.suggestion = suggestion

    def __str__(self) -> str:
        """Return formatted error message with suggestion if available."""
        base = self.message
        if self.suggestion:
            return f"{base}\nSuggestion: {self.suggestion}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to structured dictionary for logging.

        Returns:
            Dictionary with error type, message, data, and suggestion.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_data": self.error_data,
            "suggestion": self.suggestion,
        }


class FetchError(ScraperError):
    """A page could not be retrieved.

    Raised for connection failures, timeouts and HTTP error statuses alike;
    callers treat every cause the same way and skip the affected unit.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        retryable: bool = True,
        cause: BaseException | None = None,
        error_data: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        """Initialize fetch error.

        Args:
            message: Human-readable error message.
            url: The URL that failed.
            status_code: HTTP status code if a response was received.
            retryable: Whether retrying might succeed.
            cause: The underlying exception.
            error_data: Additional context.
            suggestion: How to resolve the error.
        """
        data = error_data or {}
        data.update(
            {
                "url": url,
                "status_code": status_code,
                "retryable": retryable,
                "cause": str(cause) if cause else None,
            }
        )

        default_suggestion = suggestion or (
            "Check network connectivity and retry the request. "
            "If the error persists, the server may be temporarily unavailable."
            if retryable
            else "This error is not retryable. Check the URL and request parameters."
        )

        super().__init__(message, data, default_suggestion)
        self.url = url
        self.status_code = status_code
        self.retryable = retryable
        self.cause = cause


class ParseError(ScraperError):
    """Page content does not match the structure the parser expects.

    Examples:
        - Missing expected HTML elements
        - Embedded object without the expected fields
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        selector: str | None = None,
        html_snippet: str | None = None,
        error_data: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        """Initialize parse error.

        Args:
            message: Human-readable error message.
            url: Page being parsed (if known).
            selector: CSS selector or marker that failed.
            html_snippet: Relevant snippet (truncated to 500 characters).
            error_data: Additional context.
            suggestion: How to resolve the error.
        """
        data = error_data or {}
        data.update(
            {
                "url": url,
                "selector": selector,
                "html_snippet": html_snippet[:500] if html_snippet else None,
            }
        )

        default_suggestion = suggestion or (
            f"The page structure may have changed. "
            f"Check the selector '{selector}' in the source page."
            if selector
            else "The page structure may have changed. Review the parser."
        )

        super().__init__(message, data, default_suggestion)
        self.url = url
        self.selector = selector


class ExtractionError(ParseError):
    """No embedded data object could be extracted from any source document."""

    def __init__(
        self,
        message: str,
        status: str,
        url: str | None = None,
        html_snippet: str | None = None,
        suggestion: str | None = None,
    ):
        """Initialize extraction error.

        Args:
            message: Human-readable error message.
            status: The extraction status of the last document tried.
            url: The last document URL tried.
            html_snippet: Start of the offending literal, if any.
            suggestion: How to resolve the error.
        """
        if suggestion:
            default_suggestion = suggestion
        elif status == "fetch_failed":
            default_suggestion = "No source page could be fetched. Check connectivity."
        elif status == "marker_not_found":
            default_suggestion = (
                "The marker strings did not match any script block. "
                "Inspect the page and update the extraction markers in the config."
            )
        else:
            default_suggestion = (
                "The embedded object is present but could not be read. "
                "Inspect the logged snippet."
            )
        super().__init__(
            message,
            url=url,
            html_snippet=html_snippet,
            error_data={"status": status},
            suggestion=default_suggestion,
        )
        self.status = status


class ConfigurationError(ScraperError):
    """Invalid configuration file or CLI arguments."""

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        expected_format: str | None = None,
        error_data: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        """Initialize configuration error.

        Args:
            message: Human-readable error message.
            parameter: Parameter name that's invalid.
            expected_format: Expected format for the parameter.
            error_data: Additional context.
            suggestion: How to resolve the error.
        """
        data = error_data or {}
        data.update({"parameter": parameter, "expected_format": expected_format})

        default_suggestion = suggestion or (
            f"Parameter '{parameter}' must be: {expected_format}."
            if parameter and expected_format
            else "Check the configuration file and command-line arguments."
        )

        super().__init__(message, data, default_suggestion)
        self.parameter = parameter
        self.expected_format = expected_format
