"""
Settings API - read and partially update the operator's pricing settings.
"""
from fastapi import APIRouter, Depends

from ..services.catalog_store import CatalogStore
from .schemas import SettingsPatch
from .state import get_store

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("")
async def get_user_settings(store: CatalogStore = Depends(get_store)):
    return store.settings.to_dict()


@router.patch("")
async def update_user_settings(patch: SettingsPatch, store: CatalogStore = Depends(get_store)):
    """
    Merge the provided fields over the current settings.

    Unit costs are merged per category; omitted fields keep their values.
    """
    store.set_settings(patch.to_partial())
    return store.settings.to_dict()
