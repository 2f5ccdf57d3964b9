"""Loading test results from JSON or YAML results files.

A results file lists the tested classes with their tests and the output
they captured::

    classes:
      - name: com.example.FooTest
        stdout: "..."
        stderr: "..."
        tests:
          - name: foo
            duration_ms: 100
            result: success
            failures:
              - message: "..."
                stack_trace: "..."
                exception_type: "..."

Class and test ids are assigned from 1 in file order.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from testreport.results.model import (
    RESULT_TYPES,
    SUCCESS,
    AllTestResults,
    ClassTestResults,
    TestFailure,
)
from testreport.results.provider import InMemoryTestResultsProvider, TestOutputDestination

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class ResultsFormatError(ValueError):
    """Raised when a results document does not have the expected shape."""


def load_results(
    path: Path,
) -> tuple[AllTestResults, InMemoryTestResultsProvider]:
    """Load a results file.

    Args:
        path: JSON file, or YAML file when the suffix is .yaml/.yml.

    Returns:
        The results tree and a provider holding the captured output.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ResultsFormatError: If the file can't be parsed or is malformed.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        if Path(path).suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ResultsFormatError(f"Cannot parse {path}: {e}") from e
    return build_results(data)


def build_results(
    data: Any,
) -> tuple[AllTestResults, InMemoryTestResultsProvider]:
    """Build the results tree and output provider from a parsed document."""
    if not isinstance(data, dict) or not isinstance(data.get("classes"), list):
        raise ResultsFormatError("Results document must have a 'classes' list")

    all_results = AllTestResults()
    provider = InMemoryTestResultsProvider()
    next_test_id = 1
    for class_id, class_data in enumerate(data["classes"], start=1):
        if not isinstance(class_data, dict) or not class_data.get("name"):
            raise ResultsFormatError(f"Class #{class_id} has no name")
        class_results = all_results.add_class(class_id, str(class_data["name"]))

        tests = class_data.get("tests") or []
        if not isinstance(tests, list):
            raise ResultsFormatError(
                f"Class {class_results.name} has a 'tests' value that is not a list"
            )
        for test_data in tests:
            _add_test(class_results, next_test_id, test_data)
            next_test_id += 1

        for key, destination in (
            ("stdout", TestOutputDestination.STDOUT),
            ("stderr", TestOutputDestination.STDERR),
        ):
            output = class_data.get(key)
            if output:
                provider.add_output(class_results.id, destination, str(output))

    return all_results, provider


def _add_test(
    class_results: ClassTestResults, test_id: int, test_data: Any
) -> None:
    if not isinstance(test_data, dict) or not test_data.get("name"):
        raise ResultsFormatError(
            f"Test #{test_id} in class {class_results.name} has no name"
        )
    where = f"Test {test_data['name']} in class {class_results.name}"
    result_type = test_data.get("result", SUCCESS)
    if not isinstance(result_type, str) or result_type not in RESULT_TYPES:
        raise ResultsFormatError(
            f"{where} has unknown result {result_type!r} "
            f"(expected one of: {', '.join(sorted(RESULT_TYPES))})"
        )
    duration_ms = test_data.get("duration_ms", 0)
    if (
        isinstance(duration_ms, bool)
        or not isinstance(duration_ms, int)
        or duration_ms < 0
    ):
        raise ResultsFormatError(
            f"{where} has invalid duration_ms {duration_ms!r} "
            "(expected a non-negative integer)"
        )
    failure_entries = test_data.get("failures") or []
    if not isinstance(failure_entries, list):
        raise ResultsFormatError(f"{where} has a 'failures' value that is not a list")
    class_results.add_test(
        id=test_id,
        name=str(test_data["name"]),
        duration_ms=duration_ms,
        result_type=result_type,
        failures=[_build_failure(where, f) for f in failure_entries],
    )


def _build_failure(where: str, entry: Any) -> TestFailure:
    if not isinstance(entry, dict):
        raise ResultsFormatError(f"{where} has a malformed failure entry: {entry!r}")
    for key in ("message", "stack_trace", "exception_type"):
        value = entry.get(key)
        if value is not None and not isinstance(value, str):
            raise ResultsFormatError(
                f"{where} has a failure whose {key} is not a string: {value!r}"
            )
    return TestFailure(
        message=entry.get("message"),
        stack_trace=entry.get("stack_trace") or "",
        exception_type=entry.get("exception_type"),
    )
