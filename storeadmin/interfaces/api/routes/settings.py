"""Endpoints exposing cached site and store settings."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storeadmin.application.use_cases import (
    clear_settings_cache,
    get_site_settings,
    get_store_settings,
)
from storeadmin.domain.entities import OperationResult
from storeadmin.domain.exceptions import RecordStoreError
from storeadmin.infrastructure.settings_cache import SettingsCache
from storeadmin.interfaces.api.dependencies import get_db, get_settings_cache
from storeadmin.interfaces.api.routes_helpers import to_response
from storeadmin.interfaces.api.schemas import OperationResponse

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/site", response_model=OperationResponse)
def read_site_settings(
    db: Session = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
) -> OperationResponse:
    try:
        settings = get_site_settings(db, cache)
    except RecordStoreError as exc:
        return to_response(OperationResult.failure("Failed to fetch site settings", message=str(exc)))
    return to_response(OperationResult.ok(settings))


@router.get("/store", response_model=OperationResponse)
def read_store_settings(
    db: Session = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
) -> OperationResponse:
    try:
        settings = get_store_settings(db, cache)
    except RecordStoreError as exc:
        return to_response(OperationResult.failure("Failed to fetch store settings", message=str(exc)))
    return to_response(OperationResult.ok(settings))


@router.post("/cache/clear", response_model=OperationResponse)
def clear_cache(cache: SettingsCache = Depends(get_settings_cache)) -> OperationResponse:
    """Drop cached settings so the next read hits the store."""

    clear_settings_cache(cache)
    return to_response(OperationResult.ok(None, message="Settings cache cleared"))
