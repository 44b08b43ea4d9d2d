"""Tests for completing onboarding across the wizard store and settings table."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from hushnote.errors import SettingsBridgeError, StoreFlushError, StoreUnavailableError
from hushnote.schemas.onboarding import (
    TERMINAL_STEP,
    Capability,
    CapabilitySelection,
    ModelDownloadState,
    default_onboarding_status,
)
from hushnote.services import settings_repository
from hushnote.services.onboarding import complete_onboarding
from hushnote.services.onboarding_store import (
    STATUS_KEY,
    load_onboarding_status,
    load_onboarding_status_if_present,
    save_onboarding_status,
)
from hushnote.services.settings_repository import get_capability_setting, list_capability_settings


@pytest.fixture
def selection():
    return CapabilitySelection(summary_model="gemma3:4b")


async def test_completion_updates_both_stores(file_opener, session_factory, selection):
    persisted = await complete_onboarding(
        selection, opener=file_opener, session_factory=session_factory
    )

    assert persisted.completed is True
    stored = await load_onboarding_status(file_opener)
    assert stored.completed is True
    assert stored.current_step == TERMINAL_STEP
    assert stored.model_status.summary == ModelDownloadState.DOWNLOADED
    assert stored.model_status.transcription == ModelDownloadState.DOWNLOADED

    async with session_factory() as session:
        summary = await get_capability_setting(session, Capability.SUMMARY)
    assert summary.model == "gemma3:4b"


async def test_completion_aborts_when_store_cannot_be_opened(
    broken_opener, session_factory, selection
):
    with pytest.raises(StoreUnavailableError):
        await complete_onboarding(selection, opener=broken_opener, session_factory=session_factory)

    async with session_factory() as session:
        assert await list_capability_settings(session) == []


async def test_wizard_store_failure_skips_relational_write(fake_store, fake_opener, selection):
    fake_store.fail_save = True
    session_factory = MagicMock()

    with pytest.raises(StoreFlushError):
        await complete_onboarding(selection, opener=fake_opener, session_factory=session_factory)

    session_factory.assert_not_called()


async def test_relational_failure_keeps_completed_flag(
    file_opener, session_factory, selection, monkeypatch
):
    monkeypatch.setattr(
        settings_repository,
        "save_model_config",
        AsyncMock(side_effect=RuntimeError("database is locked")),
    )

    with pytest.raises(SettingsBridgeError):
        await complete_onboarding(selection, opener=file_opener, session_factory=session_factory)

    stored = await load_onboarding_status_if_present(file_opener)
    assert stored is not None
    assert stored.completed is True
    async with session_factory() as session:
        assert await get_capability_setting(session, Capability.TRANSCRIPTION) is not None


async def test_rerunning_completion_is_idempotent(file_opener, session_factory, selection):
    first = await complete_onboarding(selection, opener=file_opener, session_factory=session_factory)
    second = await complete_onboarding(selection, opener=file_opener, session_factory=session_factory)

    assert second.same_progress(first)
    assert second.last_updated >= first.last_updated
    async with session_factory() as session:
        assert len(await list_capability_settings(session)) == 2


async def test_completion_keeps_existing_progress_fields_terminal(
    fake_store, fake_opener, session_factory, selection
):
    in_progress = default_onboarding_status()
    in_progress.current_step = 3
    in_progress.model_status.summary = ModelDownloadState.DOWNLOADING
    await save_onboarding_status(in_progress, fake_opener)

    await complete_onboarding(selection, opener=fake_opener, session_factory=session_factory)

    doc = fake_store.data[STATUS_KEY]
    assert doc["completed"] is True
    assert doc["currentStep"] == TERMINAL_STEP
    assert doc["modelStatus"] == {"summary": "downloaded", "transcription": "downloaded"}
