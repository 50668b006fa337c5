"""Conversion of arbitrary failures into SerializedError values."""

from __future__ import annotations

import secrets
import traceback
from collections.abc import Mapping
from typing import Any

from stateslice.thunks.models import SerializedError

_URL_ALPHABET = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"
_ERROR_FIELDS = ("name", "message", "stack", "code")


def generate_request_id(size: int = 21) -> str:
    """Random URL-safe id used to correlate one thunk invocation's actions."""
    return "".join(secrets.choice(_URL_ALPHABET) for _ in range(size))


def mini_serialize_error(value: Any) -> SerializedError:
    """Describe a failure with plain string fields.

    Exceptions contribute their class name, message, formatted traceback and
    a string `code` attribute if present. Mappings contribute their string
    `name` / `message` / `stack` / `code` entries. Anything else becomes the
    message.
    """
    if isinstance(value, BaseException):
        code = getattr(value, "code", None)
        return SerializedError(
            name=type(value).__name__,
            message=str(value),
            stack="".join(traceback.format_exception(value)),
            code=code if isinstance(code, str) else None,
        )
    if isinstance(value, SerializedError):
        return value
    if isinstance(value, Mapping):
        fields = {key: value[key] for key in _ERROR_FIELDS if isinstance(value.get(key), str)}
        return SerializedError(**fields)
    return SerializedError(message=str(value))
