"""Extraction of data objects embedded in page scripts.

Pages such as the athletics home page ship their schedule as an object
literal assigned to a variable inside a ``<script>`` block::

    var obj = {"type":"events","data":[{"date":"2025-01-01", ...}]};

The literal's length is unknown and it may contain braces inside string
values, so it cannot be cut at the next ``}``. `extract_balanced_object`
scans it with a depth counter that ignores delimiters inside quoted strings,
and `locate_object_start` finds where to begin the scan.

Expected failures are returned as values: ``None`` from the low-level
helpers, an `ExtractionResult` with a non-FOUND status from
`extract_embedded_object`.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

SNIPPET_LENGTH = 500
QUOTE_CHARS = ('"', "'")


class ExtractionStatus(str, Enum):
    FOUND = "found"
    MARKER_NOT_FOUND = "marker_not_found"
    UNBALANCED = "unbalanced"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ExtractionMarkers:
    """Strings identifying the script block that holds the data object.

    Attributes:
        assignment: The variable binding that precedes the object,
            e.g. ``var obj =``.
        content_type: A string only present in the wanted block,
            e.g. ``"type":"events"``.
    """

    assignment: str = "var obj ="
    content_type: str = '"type":"events"'


@dataclass(frozen=True)
class ObjectLocation:
    script: str
    start: int


@dataclass(frozen=True)
class ExtractionResult:
    status: ExtractionStatus
    data: dict[str, Any] | None = None
    snippet: str = ""

    @property
    def found(self) -> bool:
        return self.status is ExtractionStatus.FOUND


def extract_balanced_object(
    text: str, start_index: int, open_char: str = "{", close_char: str = "}"
) -> str | None:
    """Returns the nested structure that opens at `start_index`.

    Scans forward counting unquoted `open_char`/`close_char` pairs. Inside a
    string literal only the quote character that opened it closes it, and a
    backslash makes the following character literal.

    Args:
        text: The text holding the structure.
        start_index: Offset of the opening delimiter.
        open_char: Opening delimiter.
        close_char: Closing delimiter.

    Returns:
        The substring from `start_index` through the matching closing
        delimiter, or None if `start_index` is not an opening delimiter, the
        text ends before the structure closes, or a string is unterminated.
    """
    if not 0 <= start_index < len(text) or text[start_index] != open_char:
        return None

    depth = 0
    quote: str | None = None
    escaped = False

    for i in range(start_index, len(text)):
        char = text[i]

        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in QUOTE_CHARS:
            quote = char
        elif char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[start_index : i + 1]

    return None


def locate_object_start(
    scripts: Iterable[str], markers: ExtractionMarkers, open_char: str = "{"
) -> ObjectLocation | None:
    """Finds the script block and offset where the data object begins.

    The first block containing both marker strings is selected; the object
    starts at the first `open_char` after the assignment marker.

    Returns:
        The location, or None when no block carries both markers or no
        delimiter follows the assignment marker.
    """
    for script in scripts:
        if markers.assignment in script and markers.content_type in script:
            break
    else:
        return None

    marker_at = script.find(markers.assignment)
    start = script.find(open_char, marker_at + len(markers.assignment))
    if start == -1:
        return None
    return ObjectLocation(script=script, start=start)


def extract_embedded_object(
    scripts: Iterable[str], markers: ExtractionMarkers
) -> ExtractionResult:
    """Locates, cuts out and parses the embedded JSON object.

    Args:
        scripts: Script block texts of one page, in document order.
        markers: Markers identifying the wanted block.

    Returns:
        An ExtractionResult. `data` is set only when the status is FOUND.
    """
    location = locate_object_start(scripts, markers)
    if location is None:
        logger.warning(
            "marker_not_found",
            assignment=markers.assignment,
            content_type=markers.content_type,
        )
        return ExtractionResult(ExtractionStatus.MARKER_NOT_FOUND)

    literal = extract_balanced_object(location.script, location.start)
    if literal is None:
        snippet = location.script[location.start : location.start + SNIPPET_LENGTH]
        logger.warning("unbalanced_structure", offset=location.start, snippet=snippet)
        return ExtractionResult(ExtractionStatus.UNBALANCED, snippet=snippet)

    snippet = literal[:SNIPPET_LENGTH]
    logger.debug("literal_extracted", length=len(literal), snippet=snippet)

    try:
        data = json.loads(literal)
    except json.JSONDecodeError as e:
        logger.error("malformed_literal", error=str(e), snippet=snippet)
        return ExtractionResult(ExtractionStatus.MALFORMED, snippet=snippet)

    return ExtractionResult(ExtractionStatus.FOUND, data=data, snippet=snippet)
