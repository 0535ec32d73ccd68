"""
Issue query resolution: filtering, sorting and pagination of the issue list.

Raw request parameters are first normalized into an ``IssueQueryPlan`` by a
pure function, then the plan is applied against an issue repository.

Normalization is permissive because the list UI relies on the fallbacks: a
malformed or unknown value never produces an error, it degrades to "no
filter" or to the default sort/page. Only the create/update paths are strict.

Ordering is deterministic: after the requested sort key, ties are broken by
issue id ascending, in both sort directions, so pagination is stable across
requests.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..models.issue import Issue
from ..repositories.base import Repository
from ..schemas.issue import ID_MAX, STATUS_LABELS, IssueStatus, IssueType

logger = logging.getLogger(__name__)

# Request-facing sort names (camelCase as used by the UI, snake_case accepted
# too) mapped to Issue attributes
SORTABLE_FIELDS = {
    "title": "title",
    "status": "status",
    "issueType": "issue_type",
    "issue_type": "issue_type",
    "createdAt": "created_at",
    "created_at": "created_at",
}

DEFAULT_SORT_FIELD = "created_at"
DEFAULT_SORT_ORDER = "desc"
SORT_ORDERS = ("asc", "desc")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Sent by the user filter for "All users"
ALL_USERS_SENTINEL = "-1"

_STATUS_VALUES = {s.value for s in IssueStatus}
_ISSUE_TYPE_VALUES = {t.value for t in IssueType}


@dataclass(frozen=True)
class IssueQueryPlan:
    """
    Validated, normalized issue list query.

    Attributes:
        status: Status to filter on, or None for all statuses
        issue_type: Issue type to filter on, or None for all types
        user_id: Assignee to filter on, or None for all users
        project_id: Project to filter on, or None for all projects
        sort_by: Issue attribute used as primary sort key
        sort_order: "asc" or "desc"
        page: 1-based page index
        page_size: Number of issues per page
    """

    status: Optional[str] = None
    issue_type: Optional[str] = None
    user_id: Optional[str] = None
    project_id: Optional[int] = None
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: str = DEFAULT_SORT_ORDER
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def filters(self) -> Dict[str, Any]:
        """Equality constraints, combined with AND."""
        constraints = {
            "status": self.status,
            "issue_type": self.issue_type,
            "assigned_to_user_id": self.user_id,
            "project_id": self.project_id,
        }
        return {name: value for name, value in constraints.items() if value is not None}

    @property
    def sort(self) -> List[Tuple[str, str]]:
        """Primary sort followed by the id ascending tie-break."""
        return [(self.sort_by, self.sort_order), ("id", "asc")]


@dataclass
class IssueQueryResult:
    """A page of issues plus the size of the full filtered set."""

    items: List[Issue]
    total_count: int
    plan: IssueQueryPlan = field(default_factory=IssueQueryPlan)

    @property
    def page_count(self) -> int:
        return page_count(self.total_count, self.plan.page_size)


def _parse_int(value: Any) -> Optional[int]:
    """Parse an int from query input, returning None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def page_count(total_count: int, page_size: int) -> int:
    """Number of pages needed to show ``total_count`` items."""
    if page_size < 1:
        return 0
    return math.ceil(total_count / page_size)


def normalize_issue_query(
    status: Any = None,
    issue_type: Any = None,
    user_id: Any = None,
    project_id: Any = None,
    sort_by: Any = None,
    sort_order: Any = None,
    page: Any = None,
    page_size: Any = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> IssueQueryPlan:
    """
    Normalize raw issue list parameters into a query plan.

    This is a pure function and never raises. Rules:

    - status / issue_type: exact enum value, anything else (including
      "all" and absent) means no filter
    - user_id: absent, blank or "-1" means no filter
    - project_id: an integer (or integer string) between 1 and the
      largest stored id, anything else means no filter
    - sort_by: title, status, issueType or createdAt, default createdAt
    - sort_order: asc or desc, default desc
    - page: integer >= 1; smaller or non-numeric values become 1
    - page_size: values < 1 or non-numeric become the default, values
      above the maximum are clamped to it

    Examples:
        >>> normalize_issue_query(status="CLOSED").filters
        {'status': 'CLOSED'}
        >>> normalize_issue_query(status="bogus", page="x").page
        1
        >>> normalize_issue_query(page_size=1000).page_size
        100
    """
    plan_status = status if isinstance(status, str) and status in _STATUS_VALUES else None
    plan_issue_type = (
        issue_type if isinstance(issue_type, str) and issue_type in _ISSUE_TYPE_VALUES else None
    )

    plan_user_id = None
    if user_id is not None:
        user_id = str(user_id).strip()
        if user_id and user_id != ALL_USERS_SENTINEL:
            plan_user_id = user_id

    plan_project_id = _parse_int(project_id)
    if plan_project_id is not None and not 1 <= plan_project_id <= ID_MAX:
        plan_project_id = None

    plan_sort_by = DEFAULT_SORT_FIELD
    if isinstance(sort_by, str):
        plan_sort_by = SORTABLE_FIELDS.get(sort_by, DEFAULT_SORT_FIELD)
    plan_sort_order = sort_order if sort_order in SORT_ORDERS else DEFAULT_SORT_ORDER

    plan_page = _parse_int(page)
    if plan_page is None or plan_page < 1:
        plan_page = 1

    plan_page_size = _parse_int(page_size)
    if plan_page_size is None or plan_page_size < 1:
        plan_page_size = default_page_size
    plan_page_size = min(plan_page_size, max_page_size)

    return IssueQueryPlan(
        status=plan_status,
        issue_type=plan_issue_type,
        user_id=plan_user_id,
        project_id=plan_project_id,
        sort_by=plan_sort_by,
        sort_order=plan_sort_order,
        page=plan_page,
        page_size=plan_page_size,
    )


async def resolve_issues(issues: Repository[Issue], plan: IssueQueryPlan) -> IssueQueryResult:
    """
    Apply a query plan to the issue collection.

    Args:
        issues: Issue repository
        plan: Normalized plan from ``normalize_issue_query``

    Returns:
        IssueQueryResult with at most ``plan.page_size`` items and the count
        of all issues matching the filters. A page past the end yields no
        items but still reports the full count.
    """
    filters = plan.filters
    total_count = await issues.count(filters)

    if plan.offset >= total_count:
        items: List[Issue] = []
    else:
        items = await issues.find_many(
            filters,
            plan.sort,
            offset=plan.offset,
            limit=plan.page_size,
        )

    logger.debug(f"Resolved issue query {plan}: {len(items)} of {total_count}")
    return IssueQueryResult(items=items, total_count=total_count, plan=plan)


async def issue_status_summary(
    issues: Repository[Issue],
    project_id: Optional[int] = None,
    include_all: bool = False,
) -> List[Dict[str, Any]]:
    """
    Count issues per status, optionally within a single project.

    Args:
        issues: Issue repository
        project_id: Restrict counts to this project when given
        include_all: Prepend an "All" entry with the total

    Returns:
        List of {"label", "status", "count"} dicts in display order
    """
    base_filters: Dict[str, Any] = {}
    if project_id is not None:
        base_filters["project_id"] = project_id

    summary = []
    for issue_status, label in STATUS_LABELS.items():
        count = await issues.count({**base_filters, "status": issue_status.value})
        summary.append({"label": label, "status": issue_status.value, "count": count})

    if include_all:
        total = sum(entry["count"] for entry in summary)
        summary.insert(0, {"label": "All", "status": "ALL", "count": total})

    return summary


async def latest_issues(
    issues: Repository[Issue],
    project_id: Optional[int] = None,
    limit: int = 5,
) -> List[Issue]:
    """Most recently created issues, newest first."""
    filters = {"project_id": project_id} if project_id is not None else None
    return await issues.find_many(
        filters,
        [("created_at", "desc"), ("id", "desc")],
        limit=limit,
    )
