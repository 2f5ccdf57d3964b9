"""Renders preformatted text such as stack traces."""

from __future__ import annotations

from testreport.markup.writer import SimpleHtmlWriter


class CodePanelRenderer:
    def render(self, text: str, writer: SimpleHtmlWriter) -> None:
        # The span carries the styling, the pre keeps the text layout
        (
            writer.start_element("span").attribute("class", "code")
            .start_element("pre").characters(text).end_element()
            .end_element()
        )
