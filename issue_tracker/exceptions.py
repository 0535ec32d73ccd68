"""Domain errors raised by the issue and project services.

The services raise these; the HTTP layer maps each one to a status code
through ``status_code`` (see ``main.py``).
"""

from typing import Dict, List

from fastapi import status


class IssueTrackerError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"detail": self.detail}


class ValidationError(IssueTrackerError):
    """
    Input failed schema constraints.

    Carries every offending field, not just the first one.

    Attributes:
        fields: Names of the failing fields, in the order reported
        messages: Mapping of field name to its error messages
    """

    def __init__(self, messages: Dict[str, List[str]]):
        self.messages = messages
        self.fields = list(messages)
        super().__init__(f"Invalid input for: {', '.join(self.fields)}")

    def to_dict(self) -> dict:
        return {
            "detail": self.detail,
            "fields": self.fields,
            "errors": self.messages,
        }

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Build from a ``pydantic.ValidationError`` (or FastAPI's request error)."""
        messages: Dict[str, List[str]] = {}
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ())]
            # Request errors are located as ("body", "title") / ("query", "page")
            if loc and loc[0] in ("body", "query", "path"):
                loc = loc[1:]
            field = ".".join(loc) or "__root__"
            messages.setdefault(field, []).append(error.get("msg", "Invalid value"))
        return cls(messages)


class NotFoundError(IssueTrackerError):
    """Referenced issue or project does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(IssueTrackerError):
    """Duplicate project name, or delete blocked by dependent issues."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidReferenceError(IssueTrackerError):
    """A supplied project id does not reference an existing project."""

    status_code = status.HTTP_400_BAD_REQUEST
