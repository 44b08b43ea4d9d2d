"""Onboarding status commands.

Thin wrappers over ``hushnote.services``; failures are reported as a 500 whose
detail names the operation that failed.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from hushnote.errors import OnboardingError
from hushnote.schemas.onboarding import CapabilitySelection, OnboardingStatus
from hushnote.services.document_store import StoreOpener
from hushnote.services.onboarding import complete_onboarding
from hushnote.services.onboarding_store import (
    load_onboarding_status_if_present,
    reset_onboarding_status,
    save_onboarding_status,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies import get_db_session_factory, get_onboarding_store_opener

router = APIRouter()


def _failed(operation: str, exc: Exception) -> HTTPException:
    return HTTPException(status_code=500, detail=f"Failed to {operation}: {exc}")


@router.get("/status")
async def get_onboarding_status(
    opener: StoreOpener = Depends(get_onboarding_store_opener),
):
    try:
        status = await load_onboarding_status_if_present(opener)
    except OnboardingError as exc:
        raise _failed("load onboarding status", exc) from exc
    return status.to_document() if status is not None else None


@router.put("/status")
async def save_status(
    status: OnboardingStatus,
    opener: StoreOpener = Depends(get_onboarding_store_opener),
):
    try:
        persisted = await save_onboarding_status(status, opener)
    except OnboardingError as exc:
        raise _failed("save onboarding status", exc) from exc
    return {"status": "ok", "onboarding": persisted.to_document()}


@router.delete("/status")
async def reset_status(opener: StoreOpener = Depends(get_onboarding_store_opener)):
    try:
        await reset_onboarding_status(opener)
    except OnboardingError as exc:
        raise _failed("reset onboarding status", exc) from exc
    return {"status": "ok"}


@router.post("/complete")
async def complete(
    selection: CapabilitySelection,
    opener: StoreOpener = Depends(get_onboarding_store_opener),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_db_session_factory),
):
    try:
        persisted = await complete_onboarding(
            selection, opener=opener, session_factory=session_factory
        )
    except OnboardingError as exc:
        raise _failed("complete onboarding", exc) from exc
    return {"status": "ok", "onboarding": persisted.to_document()}
