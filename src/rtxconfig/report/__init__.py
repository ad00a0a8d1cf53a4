"""Reports and secret redaction for parsed dumps."""

from rtxconfig.report.generator import ReportGenerator
from rtxconfig.report.sanitizer import sanitize_line

__all__ = ["ReportGenerator", "sanitize_line"]
