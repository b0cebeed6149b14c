"""Aggregate application use cases."""

from .orders import update_order_status
from .settings import clear_settings_cache, get_site_settings, get_store_settings

__all__ = [
    "clear_settings_cache",
    "get_site_settings",
    "get_store_settings",
    "update_order_status",
]
