"""
Per-call request options.

Classes:
    ResponseType: How the response body is decoded (json, text, arraybuffer, blob).

    ApiOptions: Headers, query params, response type and deserialization target of one call.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional


class ResponseType(str, Enum):
    JSON = "json"
    TEXT = "text"
    ARRAYBUFFER = "arraybuffer"
    BLOB = "blob"


@dataclass(frozen=True)
class ApiOptions:
    headers: Mapping[str, str] | None = None
    params: Dict[str, Any] | None = None
    response_type: ResponseType = ResponseType.JSON
    deserialize_to: Optional[Callable[..., Any]] = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "ApiOptions":
        response_type = data.get("response_type", data.get("responseType"))
        return ApiOptions(
            headers=data.get("headers"),
            params=data.get("params"),
            response_type=ResponseType(response_type or ResponseType.JSON),
            deserialize_to=data.get("deserialize_to", data.get("deserializeTo")),
        )
