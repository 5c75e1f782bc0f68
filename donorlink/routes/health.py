# donorlink/routes/health.py
"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from donorlink.config import settings
from donorlink.dependencies import get_record_store
from donorlink.infrastructure.observability.logging import log_health_check
from donorlink.services.record_store import RecordStore

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "donorlink"}


@router.get("/readyz")
async def readyz(record_store: RecordStore = Depends(get_record_store)):
    """Readiness check against the configured storage backend."""
    checks = {}

    t0 = time.time()
    try:
        store_ok = await record_store.store.ping()
        checks["storage"] = {
            "ok": bool(store_ok),
            "latency_ms": round((time.time() - t0) * 1000, 1),
            "backend": settings.STORAGE_BACKEND,
        }
    except Exception as e:
        checks["storage"] = {"ok": False, "error": f"{type(e).__name__}: {e}"}

    overall_ok = all(check["ok"] for check in checks.values())
    log_health_check(
        "storage",
        overall_ok,
        checks["storage"].get("latency_ms", 0.0),
        checks["storage"].get("error"),
    )
    return {"overall_ok": overall_ok, "checks": checks}
