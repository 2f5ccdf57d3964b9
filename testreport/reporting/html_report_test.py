"""Tests for writing the class pages of a report."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from testreport.reporting.html_report import HtmlTestReport
from testreport.reporting.resources import DirectoryTestResultResource
from testreport.results.model import FAILURE, AllTestResults, TestFailure
from testreport.results.provider import (
    InMemoryTestResultsProvider,
    TestOutputDestination,
)


def _make_results() -> AllTestResults:
    all_results = AllTestResults()
    foo = all_results.add_class(1, "com.example.FooTest")
    foo.add_test(1, "foo", 100)
    foo.add_test(2, "bar", 5, FAILURE, [TestFailure("boom", "at Foo")])
    all_results.add_class(2, "BarTest").add_test(3, "baz", 1)
    return all_results


class TestHtmlTestReport:
    """Tests for HtmlTestReport.generate."""

    def test_writes_one_page_per_class(self):
        """Each class gets a page under classes/."""
        with tempfile.TemporaryDirectory() as tmpdir:
            report_dir = Path(tmpdir) / "report"
            report = HtmlTestReport(InMemoryTestResultsProvider(), report_dir)
            pages = report.generate(_make_results())
            assert pages == [
                report_dir / "classes" / "com.example.FooTest.html",
                report_dir / "classes" / "BarTest.html",
            ]
            for page in pages:
                assert page.read_text().startswith("<!DOCTYPE html>")

    def test_page_content(self):
        """Pages contain the class's tests and output."""
        with tempfile.TemporaryDirectory() as tmpdir:
            provider = InMemoryTestResultsProvider()
            provider.add_output(1, TestOutputDestination.STDOUT, "hello from foo")
            report = HtmlTestReport(provider, Path(tmpdir))
            report.generate(_make_results())
            content = (Path(tmpdir) / "classes" / "com.example.FooTest.html").read_text()
            assert "hello from foo" in content
            assert "<h3 class=\"failures\">bar</h3>" in content
            other = (Path(tmpdir) / "classes" / "BarTest.html").read_text()
            assert "hello from foo" not in other

    def test_attachments_copied_next_to_pages(self):
        """Resources passed to the report are used for every class."""
        with tempfile.TemporaryDirectory() as tmpdir:
            attachments = Path(tmpdir) / "attachments"
            attachments.mkdir()
            (attachments / "com.example.FooTest.foo.png").write_bytes(b"png")
            report_dir = Path(tmpdir) / "report"
            report = HtmlTestReport(
                InMemoryTestResultsProvider(),
                report_dir,
                [DirectoryTestResultResource(attachments)],
            )
            report.generate(_make_results())
            copied = report_dir / "classes" / "com.example.FooTest.foo.png"
            assert copied.read_bytes() == b"png"
            content = (report_dir / "classes" / "com.example.FooTest.html").read_text()
            assert 'href="com.example.FooTest.foo.png"' in content

    def test_failed_render_writes_no_page(self):
        """A page whose render fails is not written."""

        class _Broken(DirectoryTestResultResource):
            def find_resources(self, test):
                yield Path("/nonexistent/attachment.png")

        with tempfile.TemporaryDirectory() as tmpdir:
            report = HtmlTestReport(
                InMemoryTestResultsProvider(), Path(tmpdir), [_Broken(Path(tmpdir))],
            )
            with pytest.raises(OSError):
                report.generate(_make_results())
            assert not (Path(tmpdir) / "classes" / "com.example.FooTest.html").exists()

    def test_render_class_page_returns_html(self):
        """render_class_page returns the page without writing it."""
        with tempfile.TemporaryDirectory() as tmpdir:
            report = HtmlTestReport(InMemoryTestResultsProvider(), Path(tmpdir))
            cls = _make_results().classes[1]
            content = report.render_class_page(cls)
            assert "<h1>Class BarTest</h1>" in content
            assert not (Path(tmpdir) / "classes" / "BarTest.html").exists()

    def test_progress_on_stderr(self, capsys):
        """A summary line is printed to stderr."""
        with tempfile.TemporaryDirectory() as tmpdir:
            report = HtmlTestReport(InMemoryTestResultsProvider(), Path(tmpdir))
            report.generate(_make_results())
        assert "html report: wrote 2 class pages" in capsys.readouterr().err
