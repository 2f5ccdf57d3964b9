"""Access to the console output captured while tests ran."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Protocol


class TestOutputDestination(Enum):
    """The stream a piece of captured output was written to."""

    STDOUT = "stdout"
    STDERR = "stderr"


class TextSink(Protocol):
    def write(self, text: str) -> object: ...


class TestResultsProvider(ABC):
    """Source of captured output, keyed by class id and destination."""

    @abstractmethod
    def has_output(self, class_id: int, destination: TestOutputDestination) -> bool:
        """Return True if any output was captured for the class and stream."""

    @abstractmethod
    def write_all_output(
        self,
        class_id: int,
        destination: TestOutputDestination,
        writer: TextSink,
    ) -> None:
        """Write all captured output for the class and stream to ``writer``."""


class InMemoryTestResultsProvider(TestResultsProvider):
    """Keeps captured output chunks in memory, in the order they were added."""

    def __init__(self) -> None:
        self._output: dict[tuple[int, TestOutputDestination], list[str]] = {}

    def add_output(
        self, class_id: int, destination: TestOutputDestination, text: str
    ) -> None:
        """Record a chunk of output. Empty chunks are ignored."""
        if not text:
            return
        self._output.setdefault((class_id, destination), []).append(text)

    def has_output(self, class_id: int, destination: TestOutputDestination) -> bool:
        return bool(self._output.get((class_id, destination)))

    def write_all_output(
        self,
        class_id: int,
        destination: TestOutputDestination,
        writer: TextSink,
    ) -> None:
        for chunk in self._output.get((class_id, destination), []):
            writer.write(chunk)
