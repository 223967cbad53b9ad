"""Shared utilities for FastAPI routes."""

from collections.abc import Sequence
from typing import Any

STREAM_HEADERS = {"Cache-Control": "no-cache"}
STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"


def summarize_validation_errors(errors: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Reduce pydantic error dicts to JSON-safe loc/msg/type entries.
    """
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in errors
    ]
