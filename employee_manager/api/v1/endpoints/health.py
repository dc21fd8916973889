from __future__ import annotations

from fastapi import APIRouter, Depends

from employee_manager.core.config import settings
from employee_manager.core.dependencies import get_current_user
from employee_manager.models.auth import UserInfo
from employee_manager.services.auth_service import auth_service
from employee_manager.services.document_store import document_store

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {}

    try:
        if document_store.initialized:
            ok = await document_store.check_connection(settings.COSMOS_DB_EMPLOYEES_CONTAINER)
            services["cosmos_db"] = "ok" if ok else "error"
        else:
            services["cosmos_db"] = "not_configured"
    except Exception:
        services["cosmos_db"] = "error"

    services["firebase_auth"] = "ok" if auth_service.initialized else "not_configured"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/protected")
async def health_protected(user: UserInfo = Depends(get_current_user)):
    return {"status": "ok", "user": user.model_dump()}


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
