"""Streaming HTML markup writer.

Elements are opened and closed explicitly and the writer keeps a stack of
open elements, so unbalanced markup is reported as an error instead of
producing a broken page. Character data and attribute values are escaped.
"""

from __future__ import annotations

import html
from typing import TextIO


class MarkupError(RuntimeError):
    """Raised when the writer is used in a way that would produce bad markup."""


class SimpleHtmlWriter:
    """Writes HTML elements to a text stream.

    All element methods return the writer so calls can be chained::

        writer.start_element("a").attribute("href", url).characters("all").end_element()

    The writer also works as a plain text sink: ``write()`` emits escaped
    character data into the current element.
    """

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._open: list[str] = []
        self._tag_pending = False

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._open)

    def start_element(self, name: str) -> SimpleHtmlWriter:
        self._finish_start_tag()
        self._out.write(f"<{name}")
        self._open.append(name)
        self._tag_pending = True
        return self

    def attribute(self, name: str, value: str) -> SimpleHtmlWriter:
        if not self._tag_pending:
            raise MarkupError(
                f"Cannot write attribute {name!r}: no element start tag is open"
            )
        self._out.write(f' {name}="{html.escape(str(value), quote=True)}"')
        return self

    def characters(self, text: str) -> SimpleHtmlWriter:
        self._finish_start_tag()
        self._out.write(html.escape(text, quote=False))
        return self

    def end_element(self) -> SimpleHtmlWriter:
        if not self._open:
            raise MarkupError("Cannot end element: no element is open")
        self._finish_start_tag()
        name = self._open.pop()
        self._out.write(f"</{name}>")
        return self

    def write(self, text: str) -> int:
        """Write escaped character data, for use as a text sink."""
        self.characters(text)
        return len(text)

    def write_raw(self, markup: str) -> SimpleHtmlWriter:
        """Write markup verbatim (doctype, inline style and script blocks)."""
        self._finish_start_tag()
        self._out.write(markup)
        return self

    def close(self) -> None:
        """Check that every element has been ended."""
        if self._open:
            raise MarkupError(
                f"Unclosed elements: {', '.join(self._open)}"
            )

    def _finish_start_tag(self) -> None:
        if self._tag_pending:
            self._out.write(">")
            self._tag_pending = False
