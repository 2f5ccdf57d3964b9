"""Finders for extra files attached to individual tests.

Screenshots, logs and similar artifacts written by a test can be linked
from its row on the class page. Each finder decides which files belong to
a given test.
"""

from __future__ import annotations

import glob
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator

from testreport.results.model import TestResult

DEFAULT_RESOURCE_PATTERN = "{class_name}.{test_name}.*"


class AdditionalTestResultResource(ABC):
    """Locates the artifact files of a test."""

    @abstractmethod
    def find_resources(self, test: TestResult) -> Iterable[Path]:
        """Return the files attached to ``test``. May be empty."""


class DirectoryTestResultResource(AdditionalTestResultResource):
    """Finds attachments in one directory by file name pattern.

    The pattern is a glob with ``{class_name}``, ``{simple_name}`` and
    ``{test_name}`` placeholders, e.g. ``"{simple_name}-{test_name}.png"``.
    Placeholder values match literally, even when they contain ``[`` or ``*``.
    Matches are yielded in sorted order; directories are skipped.
    """

    def __init__(
        self, directory: Path, pattern: str = DEFAULT_RESOURCE_PATTERN
    ) -> None:
        self.directory = Path(directory)
        self.pattern = pattern

    def find_resources(self, test: TestResult) -> Iterator[Path]:
        if not self.directory.is_dir():
            return
        pattern = self.pattern.format(
            class_name=glob.escape(test.class_results.name),
            simple_name=glob.escape(test.class_results.simple_name),
            test_name=glob.escape(test.name),
        )
        for path in sorted(self.directory.glob(pattern)):
            if path.is_file():
                yield path

    def __repr__(self) -> str:
        return f"DirectoryTestResultResource({str(self.directory)!r}, {self.pattern!r})"
