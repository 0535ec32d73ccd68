"""Query-string helpers for issue list navigation.

All functions are pure: they take the current list parameters and return a
new mapping, leaving the input untouched.
"""

from typing import Dict, Mapping, Optional
from urllib.parse import urlencode

# Value sent by the "All" option of the list filters
ALL_SENTINEL = "-1"

Params = Mapping[str, str]


def set_filter_param(params: Params, key: str, value: Optional[str]) -> Dict[str, str]:
    """
    Set or clear a filter parameter.

    The key is always removed first and only added back for a real value;
    None, "" and the "-1" sentinel clear the filter.
    """
    updated = {k: v for k, v in params.items() if k != key}
    if value is not None and value != "" and value != ALL_SENTINEL:
        updated[key] = str(value)
    return updated


def set_page(params: Params, page: int) -> Dict[str, str]:
    updated = dict(params)
    updated["page"] = str(page)
    return updated


def set_page_size(params: Params, page_size: int) -> Dict[str, str]:
    """Change the page size and go back to the first page."""
    updated = dict(params)
    updated["pageSize"] = str(page_size)
    updated["page"] = "1"
    return updated


def to_query_string(params: Params) -> str:
    """Encode parameters as "?a=1&b=2", or "" when there are none."""
    if not params:
        return ""
    return "?" + urlencode(params)


def build_page_links(params: Params, page: int, page_count: int) -> Dict[str, Optional[str]]:
    """
    Query strings for the first, previous, next and last pages.

    ``previous``/``next`` are None when there is no such page. With zero or
    one page, ``first`` and ``last`` both point at page 1.
    """
    last_page = max(page_count, 1)
    return {
        "first": to_query_string(set_page(params, 1)),
        "previous": to_query_string(set_page(params, page - 1)) if page > 1 else None,
        "next": to_query_string(set_page(params, page + 1)) if page < page_count else None,
        "last": to_query_string(set_page(params, last_page)),
    }
