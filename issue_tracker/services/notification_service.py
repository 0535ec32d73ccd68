"""Email notifications for issue events.

Emails go out through the Resend HTTP API. Delivery runs after the response
has been sent (FastAPI background task), so it receives plain values rather
than ORM objects, and a failed delivery is logged, never raised.
"""

import html
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import httpx

from ..config import settings
from ..utils.formatting import format_date, format_issue_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssueAssignment:
    """Snapshot of an assignment, taken while the request session is open."""

    issue_id: int
    issue_title: str
    issue_type: str
    created_at: Optional[datetime]
    assignee_email: str
    assignee_name: Optional[str] = None


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str


class NotificationService:
    """Builds and delivers notification emails."""

    @staticmethod
    def build_issue_assigned_email(assignment: IssueAssignment) -> EmailMessage:
        """Render the "issue assigned to you" email."""
        issue_url = f"{settings.app_base_url.rstrip('/')}/issues/{assignment.issue_id}"
        greeting = html.escape(assignment.assignee_name or "there")
        title = html.escape(assignment.issue_title)

        body = (
            f"<p>Hi {greeting},</p>"
            f"<p>You have been assigned issue #{assignment.issue_id}: "
            f"<strong>{title}</strong></p>"
            f"<p>Type: {format_issue_type(assignment.issue_type)}<br>"
            f"Created: {format_date(assignment.created_at)}</p>"
            f'<p><a href="{issue_url}">View the issue</a></p>'
        )

        return EmailMessage(
            to=assignment.assignee_email,
            subject=f"Issue #{assignment.issue_id} assigned to you: {assignment.issue_title}",
            html=body,
        )

    @staticmethod
    async def send_email(
        message: EmailMessage,
        client: Optional[httpx.AsyncClient] = None,
    ) -> bool:
        """
        Deliver an email through the Resend API.

        Args:
            message: The email to send
            client: Optional HTTP client (tests inject a mock transport)

        Returns:
            bool: True if the API accepted the message
        """
        if not settings.email_enabled:
            logger.debug(f"Email disabled, not sending '{message.subject}'")
            return False

        request_body = {
            "from": settings.email_from,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        headers = {"Authorization": f"Bearer {settings.resend_api_key}"}

        owns_client = client is None
        if owns_client:
            client = httpx.AsyncClient(timeout=settings.email_timeout_seconds)

        try:
            response = await client.post(
                settings.resend_api_url,
                json=request_body,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Email delivery to {message.to} failed: {e}")
            return False
        finally:
            if owns_client:
                await client.aclose()

        if response.is_success:
            logger.info(f"Email sent to {message.to}: '{message.subject}'")
            return True

        logger.warning(
            f"Email delivery to {message.to} rejected: "
            f"status={response.status_code}, body={response.text[:200]}"
        )
        return False

    @staticmethod
    async def notify_issue_assigned(
        assignment: IssueAssignment,
        client: Optional[httpx.AsyncClient] = None,
    ) -> bool:
        """Email the new assignee of an issue."""
        message = NotificationService.build_issue_assigned_email(assignment)
        return await NotificationService.send_email(message, client=client)
