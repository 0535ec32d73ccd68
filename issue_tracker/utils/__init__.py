"""Utility functions and helpers."""

from .formatting import format_date, format_issue_type
from .query_string import (
    build_page_links,
    set_filter_param,
    set_page,
    set_page_size,
    to_query_string,
)

__all__ = [
    "build_page_links",
    "format_date",
    "format_issue_type",
    "set_filter_param",
    "set_page",
    "set_page_size",
    "to_query_string",
]
