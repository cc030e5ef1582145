# backend/utils/users.py
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from backend.app.config import settings

DEFAULT_DISPLAY_NAME = "Someone"


class UserProfile(BaseModel):
    """The slice of a `users/{uid}` document the notifications care about."""
    fullName: Optional[str] = None
    displayName: Optional[str] = None
    firstName: Optional[str] = None
    fcmToken: Optional[str] = None

    @field_validator("fullName", "displayName", "firstName", "fcmToken", mode="before")
    @classmethod
    def coerce_text(cls, v: Any):
        if v is None or isinstance(v, str):
            return v
        return str(v)


def get_user(uid: str) -> Optional[UserProfile]:
    """
    Look up a user document in Firestore. Returns None if it doesn't exist.
    """
    from backend import firebase  # <-- keep the client lazy so tests can swap it

    if not uid:
        raise ValueError("user id is required")

    doc = firebase.get_db().collection(settings.USERS_COLLECTION).document(uid).get()
    if not doc.exists:
        return None
    return UserProfile(**(doc.to_dict() or {}))


def resolve_display_name(user: Optional[UserProfile]) -> str:
    # first non-empty wins
    if user is None:
        return DEFAULT_DISPLAY_NAME
    return user.fullName or user.displayName or user.firstName or DEFAULT_DISPLAY_NAME
