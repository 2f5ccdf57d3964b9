"""Results tree for HTML test reports.

The tree mirrors the report pages: one root summary, one node per package,
one node per tested class, and the individual test results of each class.
Every composite node knows the relative URL of its own page, so pages can
link to each other without knowing where the report is written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

# Result types
SUCCESS = "success"
FAILURE = "failure"
SKIPPED = "skipped"

RESULT_TYPES = frozenset({SUCCESS, FAILURE, SKIPPED})

# CSS classes used to style a result
STATUS_CLASSES: dict[str, str] = {
    SUCCESS: "success",
    FAILURE: "failures",
    SKIPPED: "skipped",
}

# Display labels for result types
RESULT_LABELS: dict[str, str] = {
    SUCCESS: "passed",
    FAILURE: "failed",
    SKIPPED: "ignored",
}

DEFAULT_PACKAGE = "default-package"

_MILLIS_PER_SECOND = 1000
_MILLIS_PER_MINUTE = 60 * _MILLIS_PER_SECOND
_MILLIS_PER_HOUR = 60 * _MILLIS_PER_MINUTE
_MILLIS_PER_DAY = 24 * _MILLIS_PER_HOUR

_UNSAFE_FILE_CHARS = re.compile(r"[^A-Za-z0-9_.$-]")


def format_duration(duration_ms: int) -> str:
    """Format a duration in milliseconds as a very short string.

    Seconds are shown with 3 decimals on their own (``0.100s``) and with
    2 decimals once a larger unit is present (``1m5.00s``).
    """
    if duration_ms == 0:
        return "0s"

    result = ""
    remaining = duration_ms
    days, remaining = divmod(remaining, _MILLIS_PER_DAY)
    if days > 0:
        result += f"{days}d"
    hours, remaining = divmod(remaining, _MILLIS_PER_HOUR)
    if hours > 0 or result:
        result += f"{hours}h"
    minutes, remaining = divmod(remaining, _MILLIS_PER_MINUTE)
    if minutes > 0 or result:
        result += f"{minutes}m"

    scale = Decimal("0.01") if result else Decimal("0.001")
    seconds = (Decimal(remaining) / _MILLIS_PER_SECOND).quantize(
        scale, rounding=ROUND_HALF_UP
    )
    return f"{result}{seconds}s"


def to_safe_file_name(name: str) -> str:
    """Replace characters that are unsafe in file names with ``-``."""
    return _UNSAFE_FILE_CHARS.sub("-", name)


@dataclass(frozen=True)
class TestFailure:
    """A single failure recorded against a test."""

    message: str | None
    stack_trace: str
    exception_type: str | None = None


@dataclass(frozen=True, eq=False)
class TestResult:
    """Outcome of one test method."""

    id: int
    name: str
    duration_ms: int
    class_results: ClassTestResults = field(repr=False)
    result_type: str = SUCCESS
    failures: list[TestFailure] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.result_type not in RESULT_TYPES:
            raise ValueError(f"Unknown result type: {self.result_type}")

    @property
    def status_class(self) -> str:
        return STATUS_CLASSES[self.result_type]

    @property
    def formatted_result_type(self) -> str:
        return RESULT_LABELS[self.result_type]

    @property
    def formatted_duration(self) -> str:
        if self.result_type == SKIPPED:
            return "-"
        return format_duration(self.duration_ms)


class CompositeTestResults:
    """A node of the results tree that is rendered as its own page.

    Subclasses provide ``base_url``, ``title`` and the list of test results
    the node aggregates.
    """

    def __init__(self, parent: CompositeTestResults | None) -> None:
        self.parent = parent

    @property
    def base_url(self) -> str:
        raise NotImplementedError

    @property
    def title(self) -> str:
        raise NotImplementedError

    def all_results(self) -> list[TestResult]:
        raise NotImplementedError

    @property
    def test_count(self) -> int:
        return len(self.all_results())

    @property
    def failures(self) -> list[TestResult]:
        return [r for r in self.all_results() if r.result_type == FAILURE]

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.all_results() if r.result_type == SKIPPED)

    @property
    def duration_ms(self) -> int:
        return sum(r.duration_ms for r in self.all_results())

    @property
    def formatted_duration(self) -> str:
        if self.test_count == 0:
            return "-"
        return format_duration(self.duration_ms)

    @property
    def success_rate(self) -> int | None:
        """Percentage of executed tests that passed, rounded down."""
        executed = self.test_count - self.skipped_count
        if executed == 0:
            return None
        passed = executed - self.failure_count
        return passed * 100 // executed

    @property
    def formatted_success_rate(self) -> str:
        rate = self.success_rate
        if rate is None:
            return "-"
        return f"{rate}%"

    @property
    def status_class(self) -> str:
        if self.failure_count > 0:
            return STATUS_CLASSES[FAILURE]
        if self.test_count > 0 and self.skipped_count == self.test_count:
            return STATUS_CLASSES[SKIPPED]
        return STATUS_CLASSES[SUCCESS]

    def get_url_to(self, other: CompositeTestResults) -> str:
        """Return the URL of ``other``'s page relative to this node's page.

        Shared leading directories are dropped and every remaining directory
        of this page becomes a ``../`` step.
        """
        this_parts = self.base_url.split("/")
        other_parts = other.base_url.split("/")
        common = 0
        while (
            common < len(this_parts) - 1
            and common < len(other_parts) - 1
            and this_parts[common] == other_parts[common]
        ):
            common += 1
        ups = len(this_parts) - 1 - common
        return "../" * ups + "/".join(other_parts[common:])


class ClassTestResults(CompositeTestResults):
    """All test results of one tested class."""

    def __init__(
        self, id: int, name: str, package_results: PackageTestResults
    ) -> None:
        super().__init__(package_results)
        self.id = id
        self.name = name
        self.package_results = package_results
        self.results: list[TestResult] = []

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def base_url(self) -> str:
        return f"classes/{to_safe_file_name(self.name)}.html"

    @property
    def title(self) -> str:
        return f"Class {self.name}"

    def all_results(self) -> list[TestResult]:
        return list(self.results)

    def add_test(
        self,
        id: int,
        name: str,
        duration_ms: int,
        result_type: str = SUCCESS,
        failures: list[TestFailure] | None = None,
    ) -> TestResult:
        """Append a test result to this class."""
        test = TestResult(
            id=id,
            name=name,
            duration_ms=duration_ms,
            class_results=self,
            result_type=result_type,
            failures=list(failures or []),
        )
        self.results.append(test)
        return test


class PackageTestResults(CompositeTestResults):
    """The classes of one package."""

    def __init__(self, name: str, parent: AllTestResults) -> None:
        super().__init__(parent)
        self.name = name or DEFAULT_PACKAGE
        self.classes: dict[str, ClassTestResults] = {}

    @property
    def base_url(self) -> str:
        return f"packages/{to_safe_file_name(self.name)}.html"

    @property
    def title(self) -> str:
        return f"Package {self.name}"

    def all_results(self) -> list[TestResult]:
        results: list[TestResult] = []
        for class_results in self.classes.values():
            results.extend(class_results.results)
        return results


class AllTestResults(CompositeTestResults):
    """Root of the results tree."""

    def __init__(self) -> None:
        super().__init__(None)
        self.packages: dict[str, PackageTestResults] = {}
        self._classes: dict[str, ClassTestResults] = {}

    @property
    def base_url(self) -> str:
        return "index.html"

    @property
    def title(self) -> str:
        return "Test Summary"

    @property
    def classes(self) -> list[ClassTestResults]:
        return list(self._classes.values())

    def all_results(self) -> list[TestResult]:
        results: list[TestResult] = []
        for class_results in self._classes.values():
            results.extend(class_results.results)
        return results

    def add_class(self, id: int, class_name: str) -> ClassTestResults:
        """Return the node for ``class_name``, creating it (and its package)."""
        existing = self._classes.get(class_name)
        if existing is not None:
            return existing
        package_name = class_name.rpartition(".")[0]
        package = self._package(package_name)
        class_results = ClassTestResults(id, class_name, package)
        package.classes[class_name] = class_results
        self._classes[class_name] = class_results
        return class_results

    def _package(self, name: str) -> PackageTestResults:
        key = name or DEFAULT_PACKAGE
        package = self.packages.get(key)
        if package is None:
            package = PackageTestResults(name, self)
            self.packages[key] = package
        return package
