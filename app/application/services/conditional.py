"""Conditional writes built on the store's ETag compare-and-set.

The Realtime Database has no multi-path transactions over REST; these helpers
give per-path atomic create-if-absent and read-modify-write without losing
concurrent updates to the same path.
"""

import logging
from collections.abc import Callable
from typing import Any

from app.application.interfaces import IDocumentStore
from app.domain.exceptions import ConcurrentUpdateException

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class Abort(Exception):
    """Raised by a transact() mutator to leave the stored value unchanged."""


async def create_if_absent(store: IDocumentStore, path: str, value: Any) -> bool:
    """Write value at path only if nothing is stored there. Return True if written."""
    current, etag = await store.get_with_etag(path)
    if current is not None:
        return False
    return await store.set_if_match(path, value, etag)


async def transact(
    store: IDocumentStore,
    path: str,
    mutate: Callable[[Any], Any],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> tuple[bool, Any]:
    """Apply mutate(current) -> new value at path with compare-and-set.

    Re-reads and re-applies mutate when another writer wins. mutate may raise
    Abort to skip the write.

    Returns:
        (written, value): written is False when mutate aborted; value is the
        value stored at path after the call.

    Raises:
        ConcurrentUpdateException: If every attempt lost the race.
    """
    for attempt in range(1, max_attempts + 1):
        current, etag = await store.get_with_etag(path)
        try:
            new_value = mutate(current)
        except Abort:
            return False, current
        if await store.set_if_match(path, new_value, etag):
            return True, new_value
        logger.debug("Conditional write on %s lost race (attempt %d)", path, attempt)
    raise ConcurrentUpdateException(path, max_attempts)
