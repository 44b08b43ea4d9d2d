"""Propagate wizard model selections into the relational settings store."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hushnote.errors import SettingsBridgeError, SettingsWriteError
from hushnote.models import CapabilitySetting
from hushnote.schemas.onboarding import Capability, CapabilitySelection
from hushnote.services import settings_repository

logger = logging.getLogger(__name__)

# The summary row still carries a whisper model column that only the legacy
# whisper transcription path read. Builtin providers never use it.
UNUSED_WHISPER_MODEL = "large-v3"

CapabilityWriter = Callable[[AsyncSession, CapabilitySelection], Awaitable[CapabilitySetting]]


async def _save_summary(
    session: AsyncSession, selection: CapabilitySelection
) -> CapabilitySetting:
    return await settings_repository.save_model_config(
        session,
        selection.summary_provider,
        selection.summary_model,
        UNUSED_WHISPER_MODEL,
        selection.summary_endpoint,
    )


async def _save_transcription(
    session: AsyncSession, selection: CapabilitySelection
) -> CapabilitySetting:
    return await settings_repository.save_transcript_config(
        session,
        selection.transcription_provider,
        selection.transcription_model,
    )


CAPABILITY_WRITERS: tuple[tuple[Capability, CapabilityWriter], ...] = (
    (Capability.SUMMARY, _save_summary),
    (Capability.TRANSCRIPTION, _save_transcription),
)


async def _write_capability(
    session_factory: async_sessionmaker[AsyncSession],
    selection: CapabilitySelection,
    writer: CapabilityWriter,
) -> CapabilitySetting:
    async with session_factory() as session:
        try:
            setting = await writer(session, selection)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    return setting


async def persist_capability_selection(
    session_factory: async_sessionmaker[AsyncSession],
    selection: CapabilitySelection,
) -> None:
    """Upsert each capability's provider/model in its own transaction.

    Every capability is attempted even if an earlier one fails. Failures are
    raised together as ``SettingsBridgeError`` once all writes have run.
    """
    failures: list[SettingsWriteError] = []
    for capability, writer in CAPABILITY_WRITERS:
        try:
            setting = await _write_capability(session_factory, selection, writer)
        except Exception as exc:
            logger.error("Failed to save %s model config: %s", capability.value, exc)
            failures.append(SettingsWriteError(capability.value, str(exc)))
            continue
        logger.info(
            "Saved %s model config: provider=%s, model=%s",
            capability.value,
            setting.provider,
            setting.model,
        )

    if failures:
        raise SettingsBridgeError(failures)
