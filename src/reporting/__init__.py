"""
Reportes de consola.
"""

from .explorer import (
    MISSING_LABEL,
    REPORTERS,
    print_fatal,
    print_footer,
    print_header,
    print_ranking,
    report_gdelt,
    report_guardian,
    report_newsapi,
    report_rss,
    report_x,
)

__all__ = [
    "MISSING_LABEL",
    "REPORTERS",
    "print_fatal",
    "print_footer",
    "print_header",
    "print_ranking",
    "report_gdelt",
    "report_guardian",
    "report_newsapi",
    "report_rss",
    "report_x",
]
