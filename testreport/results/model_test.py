"""Unit tests for the results tree."""

from __future__ import annotations

import pytest

from testreport.results.model import (
    DEFAULT_PACKAGE,
    FAILURE,
    SKIPPED,
    AllTestResults,
    TestFailure,
    format_duration,
    to_safe_file_name,
)


def _make_results() -> AllTestResults:
    all_results = AllTestResults()
    foo = all_results.add_class(1, "com.example.FooTest")
    foo.add_test(1, "passes", 100)
    foo.add_test(2, "fails", 250, FAILURE, [TestFailure("boom", "at Foo")])
    foo.add_test(3, "skips", 0, SKIPPED)
    bar = all_results.add_class(2, "com.example.sub.BarTest")
    bar.add_test(4, "passes", 1000)
    return all_results


class TestFormatDuration:
    """Tests for very short duration formatting."""

    def test_zero(self):
        """Zero duration is 0s."""
        assert format_duration(0) == "0s"

    def test_milliseconds(self):
        """Sub-minute durations show three decimals."""
        assert format_duration(100) == "0.100s"
        assert format_duration(1) == "0.001s"
        assert format_duration(59999) == "59.999s"

    def test_minutes(self):
        """Larger units switch seconds to two decimals."""
        assert format_duration(65000) == "1m5.00s"
        assert format_duration(60005) == "1m0.01s"

    def test_hours_and_days(self):
        """Intermediate zero units are shown once a larger unit is present."""
        assert format_duration(3600000) == "1h0m0.00s"
        assert format_duration(86400000 + 1500) == "1d0h0m1.50s"


class TestSafeFileName:
    """Tests for file name sanitizing."""

    def test_keeps_safe_characters(self):
        """Letters, digits, dots, dashes, underscores and dollars are kept."""
        assert to_safe_file_name("com.example.Foo$Inner_1-a") == "com.example.Foo$Inner_1-a"

    def test_replaces_unsafe_characters(self):
        """Slashes, spaces and other characters become dashes."""
        assert to_safe_file_name("a/b c:d") == "a-b-c-d"

    def test_replaces_non_ascii_letters(self):
        """Only ASCII letters and digits are kept."""
        assert to_safe_file_name("com.example.Gr\u00fc\u00dfeTest") == "com.example.Gr--eTest"


class TestTestResult:
    """Tests for per-test derived values."""

    def test_status_and_labels(self):
        """Result types map to status classes and display labels."""
        results = _make_results()
        passes, fails, skips = results.classes[0].results
        assert (passes.status_class, passes.formatted_result_type) == ("success", "passed")
        assert (fails.status_class, fails.formatted_result_type) == ("failures", "failed")
        assert (skips.status_class, skips.formatted_result_type) == ("skipped", "ignored")

    def test_skipped_duration_is_dash(self):
        """Skipped tests show no duration."""
        skips = _make_results().classes[0].results[2]
        assert skips.formatted_duration == "-"

    def test_duration_formatted(self):
        """Executed tests format their duration."""
        passes = _make_results().classes[0].results[0]
        assert passes.formatted_duration == "0.100s"

    def test_unknown_result_type_rejected(self):
        """An unknown result type raises ValueError."""
        all_results = AllTestResults()
        cls = all_results.add_class(1, "Foo")
        with pytest.raises(ValueError):
            cls.add_test(1, "t", 0, "exploded")

    def test_back_reference(self):
        """Test results point to their class."""
        cls = _make_results().classes[0]
        assert cls.results[0].class_results is cls


class TestClassTestResults:
    """Tests for class level aggregation."""

    def test_names(self):
        """Simple name is the part after the last dot."""
        cls = _make_results().classes[0]
        assert cls.name == "com.example.FooTest"
        assert cls.simple_name == "FooTest"
        assert cls.title == "Class com.example.FooTest"

    def test_failures_preserve_order(self):
        """Failures are the failing results, in result order."""
        all_results = AllTestResults()
        cls = all_results.add_class(1, "Foo")
        cls.add_test(1, "b", 0, FAILURE)
        cls.add_test(2, "ok", 0)
        cls.add_test(3, "a", 0, FAILURE)
        assert [t.name for t in cls.failures] == ["b", "a"]

    def test_counts(self):
        """Counts and success rate ignore skipped tests for the rate."""
        cls = _make_results().classes[0]
        assert cls.test_count == 3
        assert cls.failure_count == 1
        assert cls.skipped_count == 1
        assert cls.success_rate == 50
        assert cls.formatted_success_rate == "50%"
        assert cls.status_class == "failures"

    def test_no_executed_tests(self):
        """Success rate is undefined without executed tests."""
        all_results = AllTestResults()
        cls = all_results.add_class(1, "Foo")
        cls.add_test(1, "s", 0, SKIPPED)
        assert cls.success_rate is None
        assert cls.formatted_success_rate == "-"
        assert cls.status_class == "skipped"

    def test_add_class_reuses_existing(self):
        """Adding a known class returns the existing node."""
        all_results = _make_results()
        again = all_results.add_class(99, "com.example.FooTest")
        assert again.id == 1
        assert len(all_results.classes) == 2


class TestPackages:
    """Tests for package nodes."""

    def test_package_created_from_class_name(self):
        """Classes are grouped by the part before the last dot."""
        all_results = _make_results()
        foo, bar = all_results.classes
        assert foo.package_results.name == "com.example"
        assert bar.package_results.name == "com.example.sub"
        assert foo.parent is foo.package_results
        assert foo.package_results.parent is all_results

    def test_default_package(self):
        """Classes without a package go to the default package."""
        all_results = AllTestResults()
        cls = all_results.add_class(1, "NoPackageTest")
        assert cls.package_results.name == DEFAULT_PACKAGE
        assert cls.simple_name == "NoPackageTest"

    def test_package_aggregates_classes(self):
        """Package counts cover all its classes."""
        all_results = AllTestResults()
        all_results.add_class(1, "p.A").add_test(1, "t", 10)
        all_results.add_class(2, "p.B").add_test(2, "t", 20, FAILURE)
        package = all_results.packages["p"]
        assert package.test_count == 2
        assert package.failure_count == 1
        assert package.duration_ms == 30


class TestUrls:
    """Tests for relative page URLs."""

    def test_base_urls(self):
        """Each node type has its own page location."""
        all_results = _make_results()
        cls = all_results.classes[0]
        assert all_results.base_url == "index.html"
        assert cls.package_results.base_url == "packages/com.example.html"
        assert cls.base_url == "classes/com.example.FooTest.html"

    def test_class_to_root(self):
        """From a class page the root is one directory up."""
        all_results = _make_results()
        cls = all_results.classes[0]
        assert cls.get_url_to(all_results) == "../index.html"

    def test_class_to_package(self):
        """From a class page packages are in a sibling directory."""
        cls = _make_results().classes[0]
        assert cls.get_url_to(cls.package_results) == "../packages/com.example.html"

    def test_class_to_class(self):
        """Pages in the same directory link by file name."""
        foo, bar = _make_results().classes
        assert foo.get_url_to(bar) == "com.example.sub.BarTest.html"

    def test_root_to_class(self):
        """From the root, class pages are under classes/."""
        all_results = _make_results()
        assert all_results.get_url_to(all_results.classes[0]) == (
            "classes/com.example.FooTest.html"
        )
