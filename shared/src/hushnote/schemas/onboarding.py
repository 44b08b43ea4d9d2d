"""Pydantic schemas for first-run onboarding state."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from hushnote.errors import StatusSerializationError

STATUS_VERSION = "1.0"
FIRST_STEP = 1
TERMINAL_STEP = 5


def utc_now() -> datetime:
    return datetime.now(UTC)


class Capability(str, Enum):
    """Subsystems with an independent provider/model selection."""

    SUMMARY = "summary"
    TRANSCRIPTION = "transcription"


class ModelDownloadState(str, Enum):
    NOT_DOWNLOADED = "not_downloaded"
    DOWNLOADING = "downloading"
    DOWNLOADED = "downloaded"


class ModelStatus(BaseModel):
    """Download state of the local model backing each capability."""

    summary: ModelDownloadState = ModelDownloadState.NOT_DOWNLOADED
    transcription: ModelDownloadState = ModelDownloadState.NOT_DOWNLOADED

    model_config = {"extra": "forbid"}


class OnboardingStatus(BaseModel):
    """Wizard progress as persisted in the onboarding document store.

    Serialized with camelCase keys. Documents written by the earlier backend
    (snake_case keys, a ``parakeet`` model entry) are rewritten by the store's
    migration step before they reach this model. Unknown keys are rejected so
    a document of another shape is never partially accepted.
    """

    version: Literal["1.0"] = STATUS_VERSION
    completed: bool = False
    current_step: int = Field(default=FIRST_STEP, ge=FIRST_STEP, le=TERMINAL_STEP)
    model_status: ModelStatus = Field(default_factory=ModelStatus)
    last_updated: datetime = Field(default_factory=utc_now)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "forbid",
        "protected_namespaces": (),
    }

    def mark_complete(self) -> None:
        """Move every progress field to its terminal value."""
        self.completed = True
        self.current_step = TERMINAL_STEP
        self.model_status.summary = ModelDownloadState.DOWNLOADED
        self.model_status.transcription = ModelDownloadState.DOWNLOADED

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def same_progress(self, other: OnboardingStatus) -> bool:
        """Compare everything except ``last_updated``."""
        exclude = {"last_updated"}
        return self.model_dump(exclude=exclude) == other.model_dump(exclude=exclude)


def default_onboarding_status() -> OnboardingStatus:
    return OnboardingStatus()


def parse_onboarding_status(document: Any) -> OnboardingStatus:
    """Validate a stored document against the current schema.

    Raises ``StatusSerializationError`` on any mismatch; callers on the read
    path fall back to ``default_onboarding_status()``.
    """
    if not isinstance(document, dict):
        raise StatusSerializationError(
            f"Expected a JSON object, got {type(document).__name__}"
        )
    try:
        return OnboardingStatus.model_validate(document)
    except ValidationError as exc:
        raise StatusSerializationError(
            f"Document does not match onboarding schema {STATUS_VERSION}: "
            f"{exc.error_count()} validation error(s)"
        ) from exc


class CapabilitySelection(BaseModel):
    """Provider/model choices collected by the wizard, applied on completion."""

    summary_provider: str = "builtin-ai"
    summary_model: str = Field(min_length=1)
    summary_endpoint: str | None = None
    transcription_provider: str = "parakeet"
    transcription_model: str = "parakeet-tdt-0.6b-v3-int8"
