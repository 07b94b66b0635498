from fastapi import APIRouter, Depends

from globalupi.core.config import Settings
from globalupi.db.dal import Database
from globalupi.db.migrate import SCHEMA_VERSION_KEY
from globalupi.routers.deps import get_app_settings, get_db

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness and schema version")
def health(
    db: Database = Depends(get_db), settings: Settings = Depends(get_app_settings)
):
    version = db.get_metadata(SCHEMA_VERSION_KEY)
    return {
        "status": "ok",
        "version": settings.version,
        "schema_version": int(version) if version else None,
    }
