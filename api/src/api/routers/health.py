"""Health check."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from hushnote.errors import StoreUnavailableError
from hushnote.services.document_store import StoreOpener
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_db, get_onboarding_store_opener

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": "hushnote-api"}


@router.get("/health/ready")
async def readiness_check(
    db: AsyncSession = Depends(get_db),
    opener: StoreOpener = Depends(get_onboarding_store_opener),
):
    try:
        await db.execute(text("SELECT 1"))
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": str(exc)},
        )
    try:
        opener()
    except StoreUnavailableError as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": str(exc)},
        )
    return {"status": "ready"}
