"""Capability settings model - provider/model selection per capability."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from hushnote.models.base import Base


class CapabilitySetting(Base):
    __tablename__ = "capability_settings"

    capability: Mapped[str] = mapped_column(Text, primary_key=True)
    provider: Mapped[str] = mapped_column(Text, nullable=False)
    model: Mapped[str] = mapped_column(Text, nullable=False)
    # Placeholder column kept for older readers of the summary row.
    whisper_model: Mapped[str | None] = mapped_column(Text)
    ollama_endpoint: Mapped[str | None] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    __table_args__ = (
        CheckConstraint(
            "capability IN ('summary','transcription')",
            name="ck_capability_settings_capability",
        ),
    )
