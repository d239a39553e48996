"""Tests for the course_filter module."""

from du_scraper.course_filter import course_number, has_prerequisite, is_eligible


def test_course_number() -> None:
    assert course_number("COMP 3621") == 3621
    assert course_number("COMP3621") == 3621
    assert course_number("COMP") is None


def test_prerequisite_phrases_case_insensitive() -> None:
    assert has_prerequisite("PREREQUISITE: COMP 2355")
    assert has_prerequisite("This course requires instructor approval.")
    assert has_prerequisite("Pre-requisite: none listed")
    assert has_prerequisite("Students must complete before COMP 3361.")
    assert not has_prerequisite("An introduction to networks.")
    assert not has_prerequisite("")


def test_is_eligible() -> None:
    assert is_eligible("COMP 3000", "Topics.")
    assert not is_eligible("COMP 2999", "Topics.")
    assert not is_eligible("COMP 3621", "Prerequisite: COMP 2355.")
    assert is_eligible("COMP 2999", "Topics.", min_number=2000)
    assert not is_eligible("COMP", "Topics.")
