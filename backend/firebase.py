# backend/firebase.py
import os
import json
import logging
from pathlib import Path
from dotenv import load_dotenv
import firebase_admin
from firebase_admin import credentials, firestore

# Load .env for local dev
load_dotenv()

logger = logging.getLogger(__name__)

_db = None


def _build_cred():
    # 1) Deployed function / CI: env var set
    env_val = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    if env_val:
        # If the value looks like JSON, parse it as JSON
        if env_val.strip().startswith("{"):
            info = json.loads(env_val)
            return credentials.Certificate(info)
        # Otherwise, treat it as a file path
        return credentials.Certificate(env_val)

    # 2) Local fallback: keys file in the repo, if someone dropped one there
    base_dir = Path(__file__).resolve().parent
    local_path = base_dir / "keys" / "service-account.json"
    if local_path.exists():
        return credentials.Certificate(str(local_path))

    # 3) Cloud Functions runtime: Application Default Credentials
    return None


def init_app():
    """Initialize Firebase Admin once per process. Safe to call repeatedly."""
    if firebase_admin._apps:
        return firebase_admin.get_app()

    cred = _build_cred()
    app = firebase_admin.initialize_app(cred) if cred is not None else firebase_admin.initialize_app()
    logger.info("Firebase Admin initialized (app=%s)", app.name)
    return app


def get_db():
    """Process-wide Firestore client."""
    global _db
    if _db is None:
        init_app()
        _db = firestore.client()
    return _db


def reset_db():
    global _db
    _db = None
