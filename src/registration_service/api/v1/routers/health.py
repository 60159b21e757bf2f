from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from registration_service.api.deps import ContextDep

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}


@router.get("/ready")
async def ready(context: ContextDep) -> JSONResponse:
    errors: list[str] = []

    try:
        async with context.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        errors.append(f"database: {type(exc).__name__}")

    if not context.storage.root.is_dir():
        errors.append("uploads: directory missing")

    if errors:
        return JSONResponse(status_code=503, content={"ok": False, "errors": errors})
    return JSONResponse(content={"ok": True})
