# backend/utils/push.py
import logging
from typing import Any, Dict, Mapping, Optional

from firebase_admin import messaging
from pydantic import BaseModel

from backend import firebase
from backend.app.config import settings

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


class NotificationPayload(BaseModel):
    """Everything needed to address and render one push on both platforms."""
    token: str
    title: str
    body: str
    data: Dict[str, str] = {}
    channel_id: str
    sound: str = "default"
    android_notification_priority: Optional[str] = None  # "high" for chat
    badge: Optional[int] = None                           # iOS only


def truncate_body(text: str, limit: Optional[int] = None) -> str:
    limit = settings.BODY_MAX_LENGTH if limit is None else limit
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def to_data_value(value: Any) -> str:
    """FCM data maps are string -> string only."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def stringify_data(data: Mapping[str, Any]) -> Dict[str, str]:
    return {key: to_data_value(value) for key, value in data.items()}


def build_message(payload: NotificationPayload) -> messaging.Message:
    return messaging.Message(
        token=payload.token,
        notification=messaging.Notification(
            title=payload.title,
            body=payload.body,
        ),
        data=payload.data,
        android=messaging.AndroidConfig(
            priority="high",
            notification=messaging.AndroidNotification(
                channel_id=payload.channel_id,
                sound=payload.sound,
                priority=payload.android_notification_priority,
            ),
        ),
        apns=messaging.APNSConfig(
            headers={"apns-priority": "10"},
            payload=messaging.APNSPayload(
                aps=messaging.Aps(
                    sound=payload.sound,
                    badge=payload.badge,
                ),
            ),
        ),
    )


def send_push(payload: NotificationPayload) -> str:
    """
    Sends one FCM push notification to a single device.

    Args:
        payload (NotificationPayload): token, text, data and delivery hints.

    Returns:
        str: the FCM message id.

    Gateway errors are not caught here; callers decide what a failure means.
    """
    # Ensure Firebase Admin is initialized
    firebase.init_app()

    message = build_message(payload)
    response = messaging.send(message)
    logger.debug("FCM push sent: %s", response)
    return response
