"""HTML markup writing."""

from testreport.markup.code_panel import CodePanelRenderer
from testreport.markup.writer import MarkupError, SimpleHtmlWriter

__all__ = [
    "CodePanelRenderer",
    "MarkupError",
    "SimpleHtmlWriter",
]
