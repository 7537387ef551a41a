"""On-disk exports of planned pickup routes."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

SUMMARY_FILENAME = "summary.json"
STOPS_FILENAME = "stops.csv"

_LABEL_UNSAFE = re.compile(r"[^a-z0-9]+")


def _slugify(label: str) -> str:
    return _LABEL_UNSAFE.sub("-", label.lower()).strip("-")


class FileStorage:
    """Writes route itineraries under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "route", label: str | None = None) -> Path:
        """Fresh directory named ``<prefix>[_<label>]_<utc timestamp>``."""
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        slug = _slugify(label) if label else ""
        name = f"{prefix}_{slug}_{timestamp}" if slug else f"{prefix}_{timestamp}"
        path = self.output_root / name
        path.mkdir(parents=True, exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)

    def write_itinerary(self, summary: dict, stops_csv: str, *, label: str | None = None) -> Path:
        """Store one route run (summary plus stop table) and return its directory."""
        run_dir = self.make_run_directory(prefix="route", label=label)
        self.write_json(run_dir / SUMMARY_FILENAME, summary)
        self.write_csv(run_dir / STOPS_FILENAME, stops_csv)
        return run_dir
