"""Config diagnostics: reports which settings are present, never their values."""

from fastapi import APIRouter, Depends

from bbs.config import Settings, get_settings

router = APIRouter(prefix="/api/_diag", tags=["diagnostics"])


@router.get("/config")
async def config_presence(settings: Settings = Depends(get_settings)):
    return {
        "hasUrl": bool(settings.database_url),
        "hasServiceKey": settings.service_enabled,
    }
