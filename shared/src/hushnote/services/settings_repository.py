"""Capability settings repository backed by the capability_settings table."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hushnote.models import CapabilitySetting
from hushnote.schemas.onboarding import Capability


async def _upsert(
    session: AsyncSession,
    capability: Capability,
    *,
    provider: str,
    model: str,
    whisper_model: str | None = None,
    ollama_endpoint: str | None = None,
) -> CapabilitySetting:
    setting = await session.get(CapabilitySetting, capability.value)
    now = datetime.now(UTC)
    if setting:
        setting.provider = provider
        setting.model = model
        setting.whisper_model = whisper_model
        setting.ollama_endpoint = ollama_endpoint
        setting.updated_at = now
    else:
        setting = CapabilitySetting(
            capability=capability.value,
            provider=provider,
            model=model,
            whisper_model=whisper_model,
            ollama_endpoint=ollama_endpoint,
            updated_at=now,
        )
        session.add(setting)
    await session.flush()
    return setting


async def save_model_config(
    session: AsyncSession,
    provider: str,
    model: str,
    whisper_model: str,
    ollama_endpoint: str | None = None,
) -> CapabilitySetting:
    """Upsert the summary model selection."""
    return await _upsert(
        session,
        Capability.SUMMARY,
        provider=provider,
        model=model,
        whisper_model=whisper_model,
        ollama_endpoint=ollama_endpoint,
    )


async def save_transcript_config(
    session: AsyncSession,
    provider: str,
    model: str,
) -> CapabilitySetting:
    """Upsert the transcription model selection."""
    return await _upsert(session, Capability.TRANSCRIPTION, provider=provider, model=model)


async def get_capability_setting(
    session: AsyncSession, capability: Capability
) -> CapabilitySetting | None:
    return await session.get(CapabilitySetting, capability.value)


async def list_capability_settings(session: AsyncSession) -> list[CapabilitySetting]:
    result = await session.execute(
        select(CapabilitySetting).order_by(CapabilitySetting.capability)
    )
    return list(result.scalars().all())
