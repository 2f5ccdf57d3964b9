"""Page renderer for the results of a single tested class.

The class page shows the failed tests with their stack traces, a table of
all tests (with links to any attached artifact files), and the standard
output and standard error captured for the class.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from testreport.markup.code_panel import CodePanelRenderer
from testreport.markup.writer import SimpleHtmlWriter
from testreport.reporting.page_renderer import PageRenderer
from testreport.reporting.resources import AdditionalTestResultResource
from testreport.results.model import ClassTestResults, TestFailure
from testreport.results.provider import TestOutputDestination, TestResultsProvider

LINE_SEPARATOR = "\n"


def failure_text(failure: TestFailure) -> str:
    """Return the text shown for a failure.

    The message is prepended to the stack trace unless the trace already
    contains it.
    """
    if failure.message and failure.message not in failure.stack_trace:
        return failure.message + LINE_SEPARATOR + LINE_SEPARATOR + failure.stack_trace
    return failure.stack_trace


class ClassPageRenderer(PageRenderer):
    """Renders the page of one ClassTestResults node.

    Args:
        provider: Source of the captured stdout/stderr of the class.
        classes_dir: Directory the page is written to. Attachment files are
            copied here so the page can link them by file name.
    """

    def __init__(self, provider: TestResultsProvider, classes_dir: Path) -> None:
        super().__init__()
        self.provider = provider
        self.classes_dir = Path(classes_dir)
        self.code_panel_renderer = CodePanelRenderer()
        self.additional_resources: list[AdditionalTestResultResource] = []

    @property
    def results(self) -> ClassTestResults:
        results = super().results
        assert isinstance(results, ClassTestResults)
        return results

    def add_additional_resources(
        self, resources: list[AdditionalTestResultResource]
    ) -> None:
        """Append attachment finders consulted for every test row."""
        self.additional_resources.extend(resources)

    def render_breadcrumbs(self, writer: SimpleHtmlWriter) -> None:
        results = self.results
        package = results.package_results
        root = package.parent
        assert root is not None
        (
            writer.start_element("div").attribute("class", "breadcrumbs")
            .start_element("a").attribute("href", results.get_url_to(root))
            .characters("all").end_element()
            .characters(" > ")
            .start_element("a").attribute("href", results.get_url_to(package))
            .characters(package.name).end_element()
            .characters(f" > {results.simple_name}")
            .end_element()
        )

    def render_failures(self, writer: SimpleHtmlWriter) -> None:
        for test in self.results.failures:
            (
                writer.start_element("div").attribute("class", "test")
                .start_element("a").attribute("name", str(test.id)).end_element()
                .start_element("h3").attribute("class", test.status_class)
                .characters(test.name).end_element()
            )
            for failure in test.failures:
                self.code_panel_renderer.render(failure_text(failure), writer)
            writer.end_element()

    def register_tabs(self) -> None:
        self.add_failures_tab()
        self.add_tab("Tests", self._render_tests)
        class_id = self.results.id
        if self.provider.has_output(class_id, TestOutputDestination.STDOUT):
            self.add_tab(
                "Standard output",
                lambda writer: self._render_output(
                    writer, class_id, TestOutputDestination.STDOUT
                ),
            )
        if self.provider.has_output(class_id, TestOutputDestination.STDERR):
            self.add_tab(
                "Standard error",
                lambda writer: self._render_output(
                    writer, class_id, TestOutputDestination.STDERR
                ),
            )

    def _render_tests(self, writer: SimpleHtmlWriter) -> None:
        (
            writer.start_element("table")
            .start_element("thead")
            .start_element("tr")
            .start_element("th").characters("Test").end_element()
            .start_element("th").characters("Duration").end_element()
            .start_element("th").characters("Result").end_element()
            .end_element()
            .end_element()
        )

        for test in self.results.results:
            (
                writer.start_element("tr")
                .start_element("td").attribute("class", test.status_class)
                .characters(test.name).end_element()
                .start_element("td").characters(test.formatted_duration).end_element()
                .start_element("td").attribute("class", test.status_class)
                .characters(test.formatted_result_type).end_element()
                .end_element()
            )
            additional_files: list[Path] = []
            for resource in self.additional_resources:
                additional_files.extend(resource.find_resources(test))
            if not additional_files:
                continue

            writer.start_element("tr").start_element("td").attribute("colspan", "3")
            writer.start_element("table")
            for additional_file in additional_files:
                target = self.classes_dir / additional_file.name
                if additional_file.resolve() != target.resolve():
                    shutil.copy2(additional_file, target)
                (
                    writer.start_element("tr").start_element("td")
                    .start_element("a")
                    .attribute("href", additional_file.name)
                    .attribute("style", "font-size:small")
                    .characters(additional_file.name).end_element()
                    .end_element().end_element()
                )
            writer.end_element()
            writer.end_element().end_element()

        writer.end_element()

    def _render_output(
        self,
        writer: SimpleHtmlWriter,
        class_id: int,
        destination: TestOutputDestination,
    ) -> None:
        writer.start_element("span").attribute("class", "code").start_element("pre")
        self.provider.write_all_output(class_id, destination, writer)
        writer.end_element().end_element()
