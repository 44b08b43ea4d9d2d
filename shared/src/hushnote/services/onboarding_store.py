"""Onboarding status persistence in the wizard document store.

Reads never fail: an unopenable store, a missing key and an unparseable
document all fall back to the default status (each logged differently).
Writes report every failure to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from hushnote.errors import StatusSerializationError, StoreUnavailableError
from hushnote.schemas.onboarding import (
    STATUS_VERSION,
    OnboardingStatus,
    default_onboarding_status,
    parse_onboarding_status,
    utc_now,
)
from hushnote.services.document_store import DocumentStore, StoreOpener, onboarding_store_opener

logger = logging.getLogger(__name__)

STATUS_KEY = "status"

# Keys written by the earlier snake_case backend, and its name for the
# transcription model entry.
_LEGACY_KEYS = {
    "current_step": "currentStep",
    "model_status": "modelStatus",
    "last_updated": "lastUpdated",
}
_LEGACY_MODEL_KEYS = {"parakeet": "transcription"}


def _migrate_v1_0(document: dict[str, Any]) -> dict[str, Any]:
    """Normalize both 1.0 layouts to camelCase keys and capability names."""
    migrated = {_LEGACY_KEYS.get(key, key): value for key, value in document.items()}
    model_status = migrated.get("modelStatus")
    if isinstance(model_status, dict):
        migrated["modelStatus"] = {
            _LEGACY_MODEL_KEYS.get(key, key): value for key, value in model_status.items()
        }
    return migrated


# Keyed by the version a document was written with; each step returns a
# document in the current schema.
DOCUMENT_MIGRATIONS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    STATUS_VERSION: _migrate_v1_0,
}


def migrate_document(document: Any) -> dict[str, Any]:
    """Bring a stored document up to the current schema version.

    Documents without a known version, and permission-record documents from
    the earlier wizard layout, are discarded rather than merged.
    """
    if not isinstance(document, dict):
        raise StatusSerializationError(
            f"Expected a JSON object, got {type(document).__name__}"
        )
    if "permissions" in document:
        raise StatusSerializationError("Legacy permission-record document; discarding")
    version = document.get("version")
    migration = DOCUMENT_MIGRATIONS.get(version) if isinstance(version, str) else None
    if migration is None:
        raise StatusSerializationError(f"No migration for document version {version!r}")
    return migration(document)


def _resolve(opener: StoreOpener | None) -> StoreOpener:
    return opener if opener is not None else onboarding_store_opener()


def _parse_stored(document: Any) -> OnboardingStatus | None:
    """Return the migrated, validated status, or ``None`` if it must be discarded."""
    try:
        return parse_onboarding_status(migrate_document(document))
    except StatusSerializationError as exc:
        logger.warning("Failed to deserialize onboarding status: %s, using defaults", exc)
        return None


def _read_status(store: DocumentStore) -> OnboardingStatus:
    document = store.get(STATUS_KEY)
    if document is None:
        logger.info("No stored onboarding status found in %s, using defaults", store.name)
        return default_onboarding_status()
    status = _parse_stored(document)
    if status is None:
        return default_onboarding_status()
    logger.info(
        "Loaded onboarding status from store - step: %s, completed: %s",
        status.current_step,
        status.completed,
    )
    return status


# Store files are small and local; open and flush run in a worker thread so
# the event loop is not blocked on disk.
async def _open(opener: StoreOpener | None) -> DocumentStore:
    return await asyncio.to_thread(_resolve(opener))


async def load_onboarding_status(opener: StoreOpener | None = None) -> OnboardingStatus:
    """Load the current status, falling back to defaults on any read failure."""
    try:
        store = await _open(opener)
    except StoreUnavailableError as exc:
        logger.warning("Failed to access onboarding store: %s, using defaults", exc)
        return default_onboarding_status()
    return _read_status(store)


async def load_onboarding_status_if_present(
    opener: StoreOpener | None = None,
) -> OnboardingStatus | None:
    """Return ``None`` when the store holds no status (never initialized).

    An unopenable store is an error here: without it there is no way to tell
    a first run from a returning user.
    """
    store = await _open(opener)
    if store.get(STATUS_KEY) is None:
        return None
    return _read_status(store)


async def onboarding_status_exists(opener: StoreOpener | None = None) -> bool:
    store = await _open(opener)
    return store.get(STATUS_KEY) is not None


async def save_onboarding_status(
    status: OnboardingStatus,
    opener: StoreOpener | None = None,
) -> OnboardingStatus:
    """Stamp ``last_updated``, write the status and flush the store.

    Returns the persisted copy; ``status`` itself is left untouched. A stored
    ``completed=True`` is never cleared here, only by ``reset_onboarding_status``.
    Stored documents that do not migrate and validate carry nothing over.
    """
    logger.info(
        "Saving onboarding status: step=%s, completed=%s",
        status.current_step,
        status.completed,
    )
    try:
        store = await _open(opener)
    except StoreUnavailableError:
        logger.error("Onboarding store unavailable; status not saved")
        raise

    stamped = status.model_copy(deep=True)
    stamped.last_updated = utc_now()

    if not stamped.completed:
        stored = store.get(STATUS_KEY)
        previous = _parse_stored(stored) if stored is not None else None
        if previous is not None and previous.completed:
            logger.warning("Stored onboarding status is complete; keeping completed flag")
            stamped.completed = True

    try:
        document = stamped.to_document()
    except ValueError as exc:
        raise StatusSerializationError(f"Failed to serialize onboarding status: {exc}") from exc

    try:
        store.set(STATUS_KEY, document)
    except Exception:
        logger.exception("Failed to write onboarding status to %s", store.name)
        raise

    try:
        await asyncio.to_thread(store.save)
    except Exception:
        logger.exception("Failed to flush onboarding store %s to disk", store.name)
        raise

    logger.info("Successfully persisted onboarding status to disk")
    return stamped


async def reset_onboarding_status(opener: StoreOpener | None = None) -> None:
    """Delete the stored status so the next load sees a first run."""
    logger.info("Resetting onboarding status")
    store = await _open(opener)
    if not store.delete(STATUS_KEY):
        logger.info("No onboarding status stored; nothing to delete")
    try:
        await asyncio.to_thread(store.save)
    except Exception:
        logger.exception("Failed to flush onboarding store %s after reset", store.name)
        raise
    logger.info("Successfully reset onboarding status")
