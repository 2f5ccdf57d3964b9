"""Test results tree, captured output and results file loading."""

from testreport.results.loader import ResultsFormatError, load_results
from testreport.results.model import (
    AllTestResults,
    ClassTestResults,
    PackageTestResults,
    TestFailure,
    TestResult,
)
from testreport.results.provider import (
    InMemoryTestResultsProvider,
    TestOutputDestination,
    TestResultsProvider,
)

__all__ = [
    "AllTestResults",
    "ClassTestResults",
    "InMemoryTestResultsProvider",
    "PackageTestResults",
    "ResultsFormatError",
    "TestFailure",
    "TestOutputDestination",
    "TestResult",
    "TestResultsProvider",
    "load_results",
]
