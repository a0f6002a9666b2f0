"""Firestore client lifecycle (REST-based, no firebase-admin).

Initialized at app startup from FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
FIREBASE_SERVICE_ACCOUNT_PATH (file path) when database_backend is 'firestore'.
"""

import json
import logging
from pathlib import Path

from app.core.config import get_settings
from app.infrastructure.firebase._rest_client import FirestoreRESTClient, _get_credentials

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None


def _load_key_dict() -> dict | None:
    """Return the service account dict from the env key or the file path."""
    settings = get_settings()
    secret = settings.firebase_service_account_key
    key_json = secret.get_secret_value() if secret else None
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if not path:
        return None
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        logger.warning("FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s", resolved)
        return None
    with open(resolved, encoding="utf-8") as f:
        return json.load(f)


def init_firebase() -> bool:
    """Create the process-wide Firestore client.

    Idempotent. Logs and returns False on missing or malformed credentials so
    the caller decides whether startup can continue.
    """
    global _firestore_client
    if _firestore_client is not None:
        return True
    try:
        key_dict = _load_key_dict()
        if not key_dict:
            return False
        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return False
        _firestore_client = FirestoreRESTClient(project_id, _get_credentials(key_dict))
        logger.info("Firestore client initialized for project %s", project_id)
        return True
    except Exception:
        logger.exception("Firebase initialization failed")
        return False


def get_firestore_client() -> FirestoreRESTClient | None:
    """Return the Firestore client, or None if not initialized."""
    return _firestore_client


async def close_firebase() -> None:
    """Close the Firestore client's HTTP connection pool. Call from app shutdown."""
    global _firestore_client
    if _firestore_client is not None:
        await _firestore_client.aclose()
        _firestore_client = None
        logger.info("Firestore HTTP client closed")
