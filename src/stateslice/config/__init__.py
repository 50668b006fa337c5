"""Configuration module using Pydantic Settings.

Provides typed configuration for the store and thunks with environment
variable support.

Usage:
    from stateslice.config import StoreSettings, ThunkSettings

    store_settings = StoreSettings(immutability_check=True)
    thunk_settings = ThunkSettings(request_id_size=12)
"""

from stateslice.config.settings import StoreSettings, ThunkSettings

__all__ = [
    "StoreSettings",
    "ThunkSettings",
]
