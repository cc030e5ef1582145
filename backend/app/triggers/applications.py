# backend/app/triggers/applications.py
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, field_validator

from backend.app.config import settings
from backend.utils.push import NotificationPayload, send_push, stringify_data
from backend.utils.users import get_user

logger = logging.getLogger(__name__)

DEFAULT_JOB_TITLE = "a job"


# --- Pydantic model ----------------------------------------------------------
class Application(BaseModel):
    applicantId: Optional[str] = None
    jobTitle: Optional[str] = None
    status: Any = None

    @field_validator("applicantId", "jobTitle", mode="before")
    @classmethod
    def coerce_text(cls, v: Any):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @property
    def job_title(self) -> str:
        return self.jobTitle or DEFAULT_JOB_TITLE


# --- Helpers -----------------------------------------------------------------
def status_message(status: Any, job_title: str) -> Tuple[str, str]:
    """Title and body shown to the applicant for a given status."""
    if status == "accepted":
        return (
            "🎉 Application Accepted!",
            f'Congratulations! Your application for "{job_title}" has been accepted!',
        )
    if status == "rejected":
        return (
            "Application Update",
            f'Your application for "{job_title}" was not selected at this time.',
        )
    return (
        "Application Status Updated",
        f'Your application for "{job_title}" is now {status}',
    )


# --- Dispatch ----------------------------------------------------------------
def dispatch_application_status_notification(
    before: Dict[str, Any],
    after: Dict[str, Any],
    application_id: str,
) -> Optional[str]:
    before = before or {}
    after = after or {}

    # Only notify when the status actually changed
    if before.get("status") == after.get("status"):
        return None

    application = Application(**after)
    job_title = application.job_title

    try:
        applicant = get_user(application.applicantId)
        fcm_token = applicant.fcmToken if applicant else None
        if not fcm_token:
            logger.info("No FCM token found for user %s", application.applicantId)
            return None

        title, body = status_message(application.status, job_title)

        payload = NotificationPayload(
            token=fcm_token,
            title=title,
            body=body,
            data=stringify_data({
                "type": "application_status",
                "applicationId": application_id,
                "status": application.status,
                "jobTitle": job_title,
                "click_action": settings.CLICK_ACTION,
            }),
            channel_id=settings.GENERAL_CHANNEL_ID,
        )

        response = send_push(payload)
        logger.info("Successfully sent application notification to %s: %s", application.applicantId, response)
        return response
    except Exception:
        logger.exception("Error sending application notification for applications/%s", application_id)
        return None


def handle_application_updated(event) -> None:
    """Adapter for a Firestore `document updated` event (before/after change)."""
    change = event.data
    before = change.before.to_dict() if change.before is not None else None
    after = change.after.to_dict() if change.after is not None else None

    dispatch_application_status_notification(before, after, event.params["applicationId"])
    return None
