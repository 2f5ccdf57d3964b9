"""Base renderer for tabbed test result pages.

A page consists of a title, a header (breadcrumbs and a summary of the
counts of the page's results) and a row of tabs. Subclasses fill in the
breadcrumbs and register the tabs they want; the base class owns the
document structure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from testreport.markup.writer import SimpleHtmlWriter
from testreport.results.model import CompositeTestResults

TabContentRenderer = Callable[[SimpleHtmlWriter], None]

_CSS = """\
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    margin: 0;
    padding: 20px;
    background: #fff;
    color: #333;
}
h1 {
    font-size: 24px;
    margin: 0 0 10px 0;
}
h2 {
    font-size: 18px;
}
.breadcrumbs {
    margin-bottom: 16px;
    font-size: 14px;
    color: #666;
}
a {
    color: #0d6efd;
}
#summary table {
    border-collapse: collapse;
}
.infoBox {
    width: 110px;
    padding: 10px 0;
    margin-right: 10px;
    text-align: center;
    border: 1px solid #ddd;
    border-radius: 6px;
}
.counter, .percent {
    font-size: 24px;
    font-weight: 600;
}
.infoBox p {
    margin: 0;
    font-size: 13px;
    color: #666;
}
.success, .success a {
    color: #008000;
}
.failures, .failures a {
    color: #b60808;
}
.skipped, .skipped a {
    color: #c09853;
}
div.infoBox.success {
    border-color: #90EE90;
}
div.infoBox.failures {
    border-color: #FFB6C1;
}
ul.tabLinks {
    list-style: none;
    padding: 0;
    margin: 20px 0 0 0;
    border-bottom: 1px solid #ddd;
}
ul.tabLinks li {
    display: inline-block;
    margin-right: 4px;
}
ul.tabLinks li a {
    display: inline-block;
    padding: 6px 12px;
    text-decoration: none;
    color: #555;
}
ul.tabLinks li.selected a {
    border: 1px solid #ddd;
    border-bottom-color: #fff;
    border-radius: 6px 6px 0 0;
    color: #000;
}
div.tab {
    display: none;
}
div.tab.selected {
    display: block;
}
div.tab h2 {
    display: none;
}
table {
    border-collapse: collapse;
    font-size: 14px;
}
th, td {
    text-align: left;
    padding: 4px 12px 4px 0;
}
span.code pre {
    font-size: 12px;
    background: #f7f7f7;
    border: 1px solid #ddd;
    padding: 10px;
    overflow-x: auto;
}
#footer {
    margin-top: 24px;
    font-size: 12px;
    color: #999;
}
"""

_TABS_SCRIPT = """\
function selectTab(index) {
    var links = document.querySelectorAll("ul.tabLinks li");
    var tabs = document.querySelectorAll("div.tab");
    for (var i = 0; i < tabs.length; i++) {
        var selected = i === index;
        tabs[i].classList.toggle("selected", selected);
        links[i].classList.toggle("selected", selected);
    }
}
document.addEventListener("DOMContentLoaded", function () {
    var links = document.querySelectorAll("ul.tabLinks li a");
    links.forEach(function (link, index) {
        link.addEventListener("click", function (event) {
            event.preventDefault();
            selectTab(index);
        });
    });
    if (links.length > 0) {
        selectTab(0);
    }
});
"""


class PageRenderer(ABC):
    """Renders one results node as a complete HTML page."""

    def __init__(self) -> None:
        self._results: CompositeTestResults | None = None
        self._tabs: list[tuple[str, TabContentRenderer]] = []

    @property
    def results(self) -> CompositeTestResults:
        if self._results is None:
            raise RuntimeError("No results set: render() has not been called")
        return self._results

    def render(self, model: CompositeTestResults, writer: SimpleHtmlWriter) -> None:
        """Write the page for ``model``.

        Tabs are registered before any markup is written.
        """
        self._results = model
        self._tabs = []
        self.register_tabs()

        writer.write_raw("<!DOCTYPE html>\n")
        writer.start_element("html").attribute("lang", "en")
        self._render_head(writer)
        writer.start_element("body")
        writer.start_element("div").attribute("id", "content")
        writer.start_element("h1").characters(model.title).end_element()
        self.render_breadcrumbs(writer)
        self._render_summary(writer)
        self._render_tabs(writer)
        writer.end_element()
        (
            writer.start_element("div").attribute("id", "footer")
            .start_element("p").characters("Generated by testreport").end_element()
            .end_element()
        )
        writer.end_element()
        writer.end_element()
        writer.close()

    @abstractmethod
    def render_breadcrumbs(self, writer: SimpleHtmlWriter) -> None:
        """Render the navigation trail to the parent pages."""

    @abstractmethod
    def register_tabs(self) -> None:
        """Register the page's tabs with add_tab()."""

    def add_tab(self, title: str, content_renderer: TabContentRenderer) -> None:
        self._tabs.append((title, content_renderer))

    def add_failures_tab(self) -> None:
        """Register a "Failed tests" tab if the page has any failures."""
        if self.results.failures:
            self.add_tab("Failed tests", self.render_failures)

    def render_failures(self, writer: SimpleHtmlWriter) -> None:
        """Render a list of links to the failed tests."""
        writer.start_element("ul").attribute("class", "linkList")
        for test in self.results.failures:
            class_url = self.results.get_url_to(test.class_results)
            writer.start_element("li")
            (
                writer.start_element("a").attribute("href", class_url)
                .characters(test.class_results.simple_name).end_element()
            )
            writer.characters(".")
            (
                writer.start_element("a").attribute("href", f"{class_url}#{test.id}")
                .characters(test.name).end_element()
            )
            writer.end_element()
        writer.end_element()

    def _render_head(self, writer: SimpleHtmlWriter) -> None:
        writer.start_element("head")
        writer.start_element("meta").attribute("charset", "UTF-8").end_element()
        (
            writer.start_element("title")
            .characters(f"Test results - {self.results.title}")
            .end_element()
        )
        writer.start_element("style").write_raw(_CSS).end_element()
        writer.start_element("script").write_raw(_TABS_SCRIPT).end_element()
        writer.end_element()

    def _render_summary(self, writer: SimpleHtmlWriter) -> None:
        results = self.results
        writer.start_element("div").attribute("id", "summary")
        writer.start_element("table").start_element("tr")
        self._render_info_box(writer, "tests", str(results.test_count), "tests")
        self._render_info_box(
            writer, "failures", str(results.failure_count), "failures"
        )
        self._render_info_box(
            writer, "ignored", str(results.skipped_count), "ignored"
        )
        self._render_info_box(
            writer, "duration", results.formatted_duration, "duration"
        )
        self._render_info_box(
            writer,
            "successRate",
            results.formatted_success_rate,
            "successful",
            status_class=results.status_class,
        )
        writer.end_element().end_element()
        writer.end_element()

    @staticmethod
    def _render_info_box(
        writer: SimpleHtmlWriter,
        box_id: str,
        value: str,
        label: str,
        status_class: str | None = None,
    ) -> None:
        css_class = "infoBox" if status_class is None else f"infoBox {status_class}"
        counter_class = "counter" if status_class is None else "percent"
        writer.start_element("td")
        writer.start_element("div").attribute("class", css_class).attribute("id", box_id)
        writer.start_element("div").attribute("class", counter_class).characters(value).end_element()
        writer.start_element("p").characters(label).end_element()
        writer.end_element()
        writer.end_element()

    def _render_tabs(self, writer: SimpleHtmlWriter) -> None:
        writer.start_element("div").attribute("id", "tabs")
        writer.start_element("ul").attribute("class", "tabLinks")
        for index, (title, _) in enumerate(self._tabs):
            (
                writer.start_element("li")
                .start_element("a").attribute("href", f"#tab{index}")
                .characters(title).end_element()
                .end_element()
            )
        writer.end_element()
        for index, (title, content_renderer) in enumerate(self._tabs):
            writer.start_element("div").attribute("id", f"tab{index}").attribute("class", "tab")
            writer.start_element("h2").characters(title).end_element()
            content_renderer(writer)
            writer.end_element()
        writer.end_element()
