"""HTML page rendering for test results."""

from testreport.reporting.class_page import ClassPageRenderer
from testreport.reporting.html_report import HtmlTestReport
from testreport.reporting.resources import (
    AdditionalTestResultResource,
    DirectoryTestResultResource,
)

__all__ = [
    "AdditionalTestResultResource",
    "ClassPageRenderer",
    "DirectoryTestResultResource",
    "HtmlTestReport",
]
