import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    USERS_COLLECTION: str = "users"

    # Android notification channels registered by the mobile app
    CHAT_CHANNEL_ID: str = "chat_channel"
    GENERAL_CHANNEL_ID: str = "general_channel"

    CLICK_ACTION: str = "FLUTTER_NOTIFICATION_CLICK"
    BODY_MAX_LENGTH: int = 100

    LOG_LEVEL: str = "INFO"

    # Cloud Functions deployment options
    FUNCTIONS_REGION: str | None = None
    MAX_INSTANCES: int = 10

    # read by backend/firebase.py; declared so it doesn't trip validation
    GOOGLE_APPLICATION_CREDENTIALS: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
logger.debug("Loaded settings: users=%s", settings.USERS_COLLECTION)
