"""Harvest configuration.

Defaults target the public DU sites. A YAML file can
override any field, for example::

    timeout: 30
    results_dir: out
    assignment_marker: "var schedule ="
    athletics_urls:
      - https://denverpioneers.com/
      - https://denverpioneers.com/calendar
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from du_scraper.course_filter import MIN_COURSE_NUMBER
from du_scraper.exceptions import ConfigurationError
from du_scraper.extractor import ExtractionMarkers
from du_scraper.scraper import DEFAULT_TIMEOUT
from du_scraper.sources.bulletin_source import DU_BULLETIN_URL


@dataclass(frozen=True)
class HarvestConfig:
    results_dir: str = "results"
    log_file: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 3

    # Athletics schedule embedded in page scripts
    athletics_urls: tuple[str, ...] = ("https://denverpioneers.com/",)
    assignment_marker: str = "var obj ="
    content_type_marker: str = '"type":"events"'

    # Calendar
    calendar_url: str = "https://www.du.edu/calendar"
    site_url: str = "https://www.du.edu"

    # Bulletin
    bulletin_url: str = DU_BULLETIN_URL
    course_subject: str = "COMP"
    min_course_number: int = MIN_COURSE_NUMBER

    @property
    def markers(self) -> ExtractionMarkers:
        return ExtractionMarkers(
            assignment=self.assignment_marker,
            content_type=self.content_type_marker,
        )


_FIELD_NAMES = {f.name for f in fields(HarvestConfig)}


def _coerce(name: str, value: Any) -> Any:
    """Converts a YAML value to the type of field `name`."""
    if name == "athletics_urls":
        if isinstance(value, str):
            return (value,)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return tuple(value)
        raise ConfigurationError(
            "athletics_urls must be a URL or a list of URLs",
            parameter=name,
            expected_format="string or list of strings",
        )

    if name in ("timeout", "retries", "min_course_number"):
        number_type = float if name == "timeout" else int
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ConfigurationError(
                f"{name} must be a number",
                parameter=name,
                expected_format=number_type.__name__,
            )
        if number_type is int and isinstance(value, float) and not value.is_integer():
            raise ConfigurationError(
                f"{name} must be a whole number", parameter=name, expected_format="int"
            )
        if value <= 0 and name != "min_course_number":
            raise ConfigurationError(
                f"{name} must be positive", parameter=name, expected_format="> 0"
            )
        return number_type(value)

    if value is not None and not isinstance(value, str):
        raise ConfigurationError(
            f"{name} must be a string", parameter=name, expected_format="string"
        )
    return value


def load_config(path: str | Path | None = None) -> HarvestConfig:
    """Loads the configuration, applying overrides from a YAML file.

    Args:
        path: YAML file to read. None returns the defaults.

    Returns:
        The merged configuration.

    Raises:
        ConfigurationError: If the file is unreadable, not a mapping, or
            holds unknown keys or values of the wrong type.
    """
    config = HarvestConfig()
    if path is None:
        return config

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot read configuration file {path}: {e}",
            parameter="config",
            expected_format="readable YAML file",
        ) from e

    if raw is None:
        return config
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a mapping",
            parameter="config",
            expected_format="YAML mapping",
        )

    unknown = sorted(str(k) for k in raw if k not in _FIELD_NAMES)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            parameter=unknown[0],
            error_data={"allowed": sorted(_FIELD_NAMES)},
            suggestion=f"Allowed keys: {', '.join(sorted(_FIELD_NAMES))}",
        )

    overrides = {name: _coerce(name, value) for name, value in raw.items()}
    return replace(config, **overrides)
