from pathlib import Path

import pytest

from du_scraper.config import HarvestConfig, load_config
from du_scraper.exceptions import ConfigurationError
from du_scraper.extractor import ExtractionMarkers


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    config = load_config()

    assert config == HarvestConfig()
    assert config.timeout == 20.0
    assert config.retries == 3
    assert config.results_dir == "results"
    assert config.markers == ExtractionMarkers()
    assert config.markers.assignment == "var obj ="
    assert config.markers.content_type == '"type":"events"'


def test_yaml_overrides(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "timeout: 30\n"
        "results_dir: out\n"
        "assignment_marker: 'var schedule ='\n"
        "athletics_urls:\n"
        "  - https://denverpioneers.com/\n"
        "  - https://denverpioneers.com/calendar\n"
        "min_course_number: 2000\n",
    )

    config = load_config(path)

    assert config.timeout == 30.0
    assert isinstance(config.timeout, float)
    assert config.results_dir == "out"
    assert config.markers.assignment == "var schedule ="
    assert config.markers.content_type == '"type":"events"'
    assert config.athletics_urls == (
        "https://denverpioneers.com/",
        "https://denverpioneers.com/calendar",
    )
    assert config.min_course_number == 2000
    assert config.course_subject == "COMP"


def test_single_url_becomes_tuple(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, "athletics_urls: https://example.com/\n"))

    assert config.athletics_urls == ("https://example.com/",)


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    assert load_config(_write(tmp_path, "")) == HarvestConfig()


def test_unknown_key(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(_write(tmp_path, "timeout: 5\nrate_limit: 2\n"))

    assert exc_info.value.parameter == "rate_limit"
    assert "rate_limit" in exc_info.value.message


@pytest.mark.parametrize(
    "text, parameter",
    [
        ("timeout: 0\n", "timeout"),
        ("timeout: fast\n", "timeout"),
        ("retries: -1\n", "retries"),
        ("retries: true\n", "retries"),
        ("retries: 2.5\n", "retries"),
        ("min_course_number: 3000.7\n", "min_course_number"),
        ("athletics_urls: [1, 2]\n", "athletics_urls"),
        ("results_dir: [a]\n", "results_dir"),
    ],
)
def test_invalid_values(tmp_path: Path, text: str, parameter: str) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(_write(tmp_path, text))

    assert exc_info.value.parameter == parameter


def test_not_a_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="mapping"):
        load_config(_write(tmp_path, "- timeout\n- 5\n"))


def test_unreadable_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(_write(tmp_path, "timeout: [unclosed\n"))

    assert exc_info.value.parameter == "config"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "absent.yaml")


def test_whole_number_float_accepted_for_int_field(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, "retries: 4.0\n"))

    assert config.retries == 4
    assert isinstance(config.retries, int)
