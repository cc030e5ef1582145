# backend/app/triggers/chat.py
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator

from backend.app.config import settings
from backend.utils.push import NotificationPayload, send_push, stringify_data, truncate_body
from backend.utils.users import get_user, resolve_display_name

logger = logging.getLogger(__name__)

# Messages without text are attachments
IMAGE_PLACEHOLDER = "Image"


# ------------------ Pydantic Models ------------------
class ChatMessage(BaseModel):
    senderId: Optional[str] = None
    receiverId: Optional[str] = None
    text: Optional[str] = None

    @field_validator("senderId", "receiverId", "text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @property
    def body_text(self) -> str:
        return self.text or IMAGE_PLACEHOLDER


# ------------------ Dispatch ------------------
def dispatch_chat_notification(message: Dict[str, Any], chat_id: str, message_id: str) -> Optional[str]:
    """
    Push a new chat message to its receiver.

    Returns the FCM message id, or None when nothing was sent (self message,
    no receiver, receiver without a token, or a failure that was logged).
    """
    msg = ChatMessage(**(message or {}))

    # Don't notify people about their own messages
    if not msg.receiverId or msg.senderId == msg.receiverId:
        return None

    try:
        sender_name = resolve_display_name(get_user(msg.senderId))

        receiver = get_user(msg.receiverId)
        fcm_token = receiver.fcmToken if receiver else None
        if not fcm_token:
            logger.info("No FCM token found for user %s", msg.receiverId)
            return None

        payload = NotificationPayload(
            token=fcm_token,
            title=sender_name,
            body=truncate_body(msg.body_text),
            data=stringify_data({
                "type": "chat",
                "chatId": chat_id,
                "messageId": message_id,
                "senderId": msg.senderId,
                "receiverId": msg.receiverId,
                "click_action": settings.CLICK_ACTION,
            }),
            channel_id=settings.CHAT_CHANNEL_ID,
            android_notification_priority="high",
            badge=1,
        )

        response = send_push(payload)
        logger.info("Successfully sent notification to %s: %s", msg.receiverId, response)
        return response
    except Exception:
        logger.exception("Error sending notification for chats/%s/messages/%s", chat_id, message_id)
        return None


def handle_message_created(event) -> None:
    """Adapter for a Firestore `document created` event."""
    snapshot = event.data
    if snapshot is None:
        return None

    dispatch_chat_notification(
        snapshot.to_dict() or {},
        event.params["chatId"],
        event.params["messageId"],
    )
    return None
