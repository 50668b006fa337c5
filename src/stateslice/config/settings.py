"""Configuration settings using Pydantic Settings.

Usage:
    from stateslice.config import StoreSettings, ThunkSettings

    # Load from environment variables (STATESLICE_STORE_*, STATESLICE_THUNK_*)
    store_settings = StoreSettings()

    # Or override with explicit values
    thunk_settings = ThunkSettings(abort_message="Cancelled by user")
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the reference store.

    Attributes:
        immutability_check: Detect mutation of committed state between
            dispatches and raise StateMutationError. Costs a deep copy per
            dispatch; meant for development.
        log_dispatches: Log every dispatched action type at DEBUG level.

    Environment Variables:
        STATESLICE_STORE_IMMUTABILITY_CHECK
        STATESLICE_STORE_LOG_DISPATCHES
    """

    model_config = SettingsConfigDict(
        env_prefix="STATESLICE_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    immutability_check: bool = False
    log_dispatches: bool = False


class ThunkSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for async thunks.

    Attributes:
        request_id_size: Length of generated request ids.
        abort_message: Error message used when a thunk is aborted without a reason.

    Environment Variables:
        STATESLICE_THUNK_REQUEST_ID_SIZE
        STATESLICE_THUNK_ABORT_MESSAGE
    """

    model_config = SettingsConfigDict(
        env_prefix="STATESLICE_THUNK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    request_id_size: int = Field(default=21, ge=8, le=64)
    abort_message: str = "Aborted"
