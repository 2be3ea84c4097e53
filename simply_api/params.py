"""Query-string encoding for request params."""


from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping

import httpx


def _query_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_query_value(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def encode_params(params: Mapping[str, Any] | None) -> httpx.QueryParams | None:
    """Encode *params* as one query entry per key, or ``None`` when absent."""
    if params is None:
        return None
    if not isinstance(params, Mapping):
        raise TypeError(
            f"query params must be a mapping, got {type(params).__name__}")
    return httpx.QueryParams([(str(k), _query_value(v)) for k, v in params.items()])
