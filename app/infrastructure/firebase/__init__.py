"""Firebase REST integration: Realtime Database, Authentication, Storage."""

from app.infrastructure.firebase._rest_client import RealtimeDatabaseClient
from app.infrastructure.firebase.client import FirebaseServices, init_firebase
from app.infrastructure.firebase.identity import FirebaseIdentityClient
from app.infrastructure.firebase.storage import FirebaseStorageClient

__all__ = [
    "FirebaseIdentityClient",
    "FirebaseServices",
    "FirebaseStorageClient",
    "RealtimeDatabaseClient",
    "init_firebase",
]
