import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)


class Record(Protocol):
    def to_dict(self) -> Any: ...


class Storage:
    """Writes harvested records to JSON files in a results directory.

    Each harvest is written once, fully materialized, as
    ``{key: [record, ...]}``.
    """

    def __init__(self, results_dir: str = "results"):
        """Initializes the Storage instance.

        Args:
            results_dir: Directory receiving the output files (default:
                'results'). Created on first save if absent.
        """
        self.results_dir = Path(results_dir)

    def output_path(self, filename: str) -> Path:
        return self.results_dir / filename

    def save(self, filename: str, key: str, records: Iterable[Record]) -> Path:
        """Saves records under `key` in `filename`.

        Args:
            filename: File name inside the results directory.
            key: Top-level key of the JSON document ("events", "courses").
            records: Records providing `to_dict()`.

        Returns:
            The path written.
        """
        payload = {key: [record.to_dict() for record in records]}
        path = self.output_path(filename)

        self.results_dir.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        logger.info("results_saved", path=str(path), count=len(payload[key]))
        return path
