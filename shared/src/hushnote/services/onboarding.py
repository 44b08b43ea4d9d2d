"""Onboarding completion across the wizard store and the settings table.

The two stores share no transaction. Completion is written to the wizard
store first; the relational write only runs once that has succeeded, and a
relational failure leaves the completed flag in place. Calling
``complete_onboarding`` again re-applies the same upserts.

Concurrent completions are not serialized: each one reads, modifies and
writes the wizard store independently and the last write wins.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hushnote.database import get_session_factory
from hushnote.schemas.onboarding import CapabilitySelection, OnboardingStatus
from hushnote.services.document_store import StoreOpener
from hushnote.services.onboarding_store import load_onboarding_status, save_onboarding_status
from hushnote.services.settings_bridge import persist_capability_selection

logger = logging.getLogger(__name__)


async def complete_onboarding(
    selection: CapabilitySelection,
    *,
    opener: StoreOpener | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> OnboardingStatus:
    logger.info("Completing onboarding with summary model: %s", selection.summary_model)

    status = await load_onboarding_status(opener)
    status.mark_complete()
    persisted = await save_onboarding_status(status, opener)

    factory = session_factory if session_factory is not None else get_session_factory()
    await persist_capability_selection(factory, selection)

    logger.info(
        "Onboarding completed successfully with summary model: %s", selection.summary_model
    )
    return persisted
