# main.py -- Cloud Functions for Firebase entry point
import logging

from firebase_functions import firestore_fn, options

from backend.app.config import settings
from backend.app.triggers.applications import handle_application_updated
from backend.app.triggers.chat import handle_message_created

logging.basicConfig(level=settings.LOG_LEVEL)

options.set_global_options(
    region=settings.FUNCTIONS_REGION,
    max_instances=settings.MAX_INSTANCES,
)


@firestore_fn.on_document_created(document="chats/{chatId}/messages/{messageId}")
def send_chat_notification(event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None]) -> None:
    """Push every new chat message to its receiver."""
    handle_message_created(event)


@firestore_fn.on_document_updated(document="applications/{applicationId}")
def send_application_status_notification(
    event: firestore_fn.Event[firestore_fn.Change[firestore_fn.DocumentSnapshot | None]],
) -> None:
    """Tell the applicant when their application status changes."""
    handle_application_updated(event)


__all__ = ["send_chat_notification", "send_application_status_notification"]
