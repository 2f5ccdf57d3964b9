"""Writes the class pages of a results tree to a report directory."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Iterable

from testreport.markup.writer import SimpleHtmlWriter
from testreport.reporting.class_page import ClassPageRenderer
from testreport.reporting.resources import AdditionalTestResultResource
from testreport.results.model import AllTestResults, ClassTestResults
from testreport.results.provider import TestResultsProvider


class HtmlTestReport:
    """Generates one HTML page per tested class.

    Pages go to ``<report_dir>/classes/<class name>.html``. A page is
    rendered in memory and only written once rendering has succeeded, so
    a failing class leaves no page behind. Errors are not caught here.
    """

    def __init__(
        self,
        provider: TestResultsProvider,
        report_dir: Path,
        additional_resources: Iterable[AdditionalTestResultResource] = (),
    ) -> None:
        self.provider = provider
        self.report_dir = Path(report_dir)
        self.additional_resources = list(additional_resources)

    @property
    def classes_dir(self) -> Path:
        return self.report_dir / "classes"

    def generate(self, all_results: AllTestResults) -> list[Path]:
        """Render every class page.

        Returns:
            Paths of the written pages, in class order.
        """
        self.classes_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for class_results in all_results.classes:
            written.append(self.write_class_page(class_results))
        print(
            f"html report: wrote {len(written)} class pages to {self.classes_dir}",
            file=sys.stderr,
        )
        return written

    def render_class_page(self, class_results: ClassTestResults) -> str:
        """Render the page of one class and return the HTML."""
        renderer = ClassPageRenderer(self.provider, self.classes_dir)
        renderer.add_additional_resources(self.additional_resources)
        buffer = io.StringIO()
        renderer.render(class_results, SimpleHtmlWriter(buffer))
        return buffer.getvalue()

    def write_class_page(self, class_results: ClassTestResults) -> Path:
        """Render the page of one class and write it to the classes directory."""
        self.classes_dir.mkdir(parents=True, exist_ok=True)
        content = self.render_class_page(class_results)
        path = self.report_dir / class_results.base_url
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path
