"""GET /api/health — service status."""
import logging
from fastapi import APIRouter

from api.db import list_connection_ids
from core.config_store import ConfigStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "message": "Developer panel backend is running",
        "connections": len(list_connection_ids()),
        "configs": len(ConfigStore().list_tables()),
    }
