"""Output generation modules"""

from discuss_digest.output.html_generator import HtmlDigestGenerator
from discuss_digest.output.text_report import TextReportWriter

__all__ = ["HtmlDigestGenerator", "TextReportWriter"]
