"""Exception hierarchy for onboarding persistence.

Read paths recover from ``StoreUnavailableError`` and
``StatusSerializationError`` by falling back to the default status. Every
other error, and any error raised while writing, reaches the caller.
"""

from __future__ import annotations


class OnboardingError(Exception):
    """Base class for onboarding persistence failures."""


class StoreUnavailableError(OnboardingError):
    """The document store could not be opened."""

    def __init__(self, store_name: str, reason: str) -> None:
        self.store_name = store_name
        self.reason = reason
        super().__init__(f"Failed to access store '{store_name}': {reason}")


class StatusSerializationError(OnboardingError):
    """A status document did not match the current schema, or could not be encoded."""


class StoreWriteError(OnboardingError):
    """A key could not be written to or removed from the document store."""


class StoreFlushError(OnboardingError):
    """The document store could not be flushed to durable storage."""


class SettingsWriteError(OnboardingError):
    """Persisting one capability's configuration failed."""

    def __init__(self, capability: str, reason: str) -> None:
        self.capability = capability
        self.reason = reason
        super().__init__(f"Failed to save {capability} model config: {reason}")


class SettingsBridgeError(OnboardingError):
    """One or more capability configurations could not be persisted."""

    def __init__(self, failures: list[SettingsWriteError]) -> None:
        self.failures = failures
        super().__init__("; ".join(str(failure) for failure in failures))

    @property
    def failed_capabilities(self) -> list[str]:
        return [failure.capability for failure in self.failures]
