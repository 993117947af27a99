from fastapi import APIRouter

from utils.ai_client import ai_configured

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck():
    # AI features degrade to fallbacks without a key; report it, don't fail
    return {"status": "ok", "aiConfigured": ai_configured()}
