"""Firebase service construction (REST-based, no firebase-admin).

Built at app startup from FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
FIREBASE_SERVICE_ACCOUNT_PATH (file path), plus FIREBASE_API_KEY for the
public Identity Toolkit calls. Uses the REST APIs with google-auth to keep
the dependency footprint small (no grpcio / firebase-admin).
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from app.core.config import Settings
from app.infrastructure.firebase._rest_client import (
    RealtimeDatabaseClient,
    ServiceAccountTokenSource,
    _get_credentials,
)
from app.infrastructure.firebase.identity import FirebaseIdentityClient
from app.infrastructure.firebase.storage import FirebaseStorageClient

logger = logging.getLogger(__name__)


@dataclass
class FirebaseServices:
    """Clients for the three Firebase products the app uses."""

    database: RealtimeDatabaseClient
    identity: FirebaseIdentityClient
    storage: FirebaseStorageClient | None


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def init_firebase(settings: Settings, http_client: httpx.AsyncClient) -> FirebaseServices:
    """Build Realtime Database, Identity Toolkit and Storage clients.

    Without a service account the database client runs unauthenticated (only
    useful against the emulator or open rules) and storage is disabled.
    """
    key_dict = _load_key_dict(settings)
    token_source = None
    project_id = settings.firebase_project_id
    if key_dict:
        token_source = ServiceAccountTokenSource(_get_credentials(key_dict))
        project_id = project_id or key_dict.get("project_id")
    else:
        logger.warning("No Firebase service account configured; database calls are unauthenticated")

    if not settings.firebase_database_url:
        logger.warning("FIREBASE_DATABASE_URL is not set")

    database = RealtimeDatabaseClient(
        settings.firebase_database_url, http_client, token_source
    )
    identity = FirebaseIdentityClient(
        settings.firebase_api_key.get_secret_value() if settings.firebase_api_key else "",
        http_client,
        project_id=project_id,
        token_source=token_source,
    )
    storage = None
    if token_source is not None and settings.firebase_storage_bucket:
        storage = FirebaseStorageClient(
            settings.firebase_storage_bucket, http_client, token_source
        )
    return FirebaseServices(database=database, identity=identity, storage=storage)
