"""Report configuration file management.

Reads the JSON file that says where attachment files are looked
up and where the report goes when no output directory is given.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from testreport.reporting.resources import (
    DEFAULT_RESOURCE_PATTERN,
    DirectoryTestResultResource,
)

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "resource_dirs": [],
    "resource_pattern": DEFAULT_RESOURCE_PATTERN,
    "output_dir": "build/reports/tests",
}


class ReportConfig:
    """Manages the report JSON configuration file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._load()

    def _load(self) -> None:
        """Load config from the file."""
        assert self.path is not None
        try:
            text = self.path.read_text()
            data = json.loads(text)
            if isinstance(data, dict):
                self._data = {**DEFAULT_CONFIG, **data}
        except (json.JSONDecodeError, OSError):
            self._data = dict(DEFAULT_CONFIG)

    @property
    def config(self) -> dict[str, Any]:
        """Get the full configuration dict."""
        return dict(self._data)

    @property
    def resource_dirs(self) -> list[Path]:
        """Get the directories searched for test attachments."""
        dirs = self._data.get("resource_dirs") or []
        return [Path(d) for d in dirs]

    @property
    def resource_pattern(self) -> str:
        """Get the glob used to match a test's attachments."""
        return str(
            self._data.get("resource_pattern", DEFAULT_CONFIG["resource_pattern"])
        )

    @property
    def output_dir(self) -> Path:
        """Get the default report directory."""
        return Path(self._data.get("output_dir", DEFAULT_CONFIG["output_dir"]))

    def resources(self) -> list[DirectoryTestResultResource]:
        """Build one attachment finder per configured directory."""
        return [
            DirectoryTestResultResource(d, self.resource_pattern)
            for d in self.resource_dirs
        ]
