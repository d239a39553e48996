"""Course eligibility rules for the bulletin harvester.

A course is kept when it is upper division (course number of at least
``MIN_COURSE_NUMBER``) and its description names no prerequisite.
"""

import re

MIN_COURSE_NUMBER = 3000

# Phrases announcing a prerequisite (checked case-insensitively).
PREREQUISITE_PATTERN = re.compile(
    r"Prerequisite|Requires|Pre-requisite|must complete before", re.IGNORECASE
)

_COURSE_NUMBER = re.compile(r"\d{4}")


def course_number(code: str) -> int | None:
    """Returns the numeric part of a course code such as "COMP 3621"."""
    match = _COURSE_NUMBER.search(code)
    return int(match.group(0)) if match else None


def has_prerequisite(description: str) -> bool:
    return bool(PREREQUISITE_PATTERN.search(description or ""))


def is_eligible(
    code: str, description: str, min_number: int = MIN_COURSE_NUMBER
) -> bool:
    """Check if a course should be included in the harvest.

    Args:
        code: Course code, e.g. "COMP 3621".
        description: The course description text.
        min_number: Lowest course number to keep.

    Returns:
        True if the course is at or above `min_number` and has no
        prerequisite.
    """
    number = course_number(code)
    if number is None or number < min_number:
        return False
    return not has_prerequisite(description)
