"""
HttpClient is the protocol SimplyApi delegates to; HttpxClient is its default implementation.

HttpxClient provides the asynchronous HTTP client capability used by SimplyApi.

Attributes:
    _client (httpx.AsyncClient): The underlying httpx client instance.

Methods:
    __init__(timeout: int = 10, headers: dict | None = None, transport=None):
        Initializes the HttpxClient with an optional timeout, default headers and transport.

    get(), delete():
        Send a request without a body and return the decoded response body.

    post(), put():
        Send a request with a body. Bytes and strings are sent as raw content,
        anything else is sent as JSON.

    All methods raise httpx.HTTPStatusError for non-2xx responses and decode the
    body according to the requested ResponseType.

    aclose():
        Closes the underlying httpx client.

    __aenter__() / __aexit__():
        Enable use of HttpxClient as an async context manager.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Protocol

import httpx

from .options import ResponseType

logger = logging.getLogger(__name__)


class HttpClient(Protocol):
    async def get(self, url: str, **config: Any) -> Any:
        ...

    async def post(self, url: str, body: Any, **config: Any) -> Any:
        ...

    async def put(self, url: str, body: Any, **config: Any) -> Any:
        ...

    async def delete(self, url: str, **config: Any) -> Any:
        ...


class HttpxClient:
    def __init__(
        self,
        timeout: int = 10,
        headers: Mapping[str, str] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            timeout=timeout, headers=headers, transport=transport)

    async def get(self, url: str, **config: Any) -> Any:
        return await self._send("GET", url, None, **config)

    async def post(self, url: str, body: Any, **config: Any) -> Any:
        return await self._send("POST", url, body, **config)

    async def put(self, url: str, body: Any, **config: Any) -> Any:
        return await self._send("PUT", url, body, **config)

    async def delete(self, url: str, **config: Any) -> Any:
        return await self._send("DELETE", url, None, **config)

    async def _send(
        self,
        method: str,
        url: str,
        body: Any,
        *,
        params: httpx.QueryParams | None = None,
        headers: Mapping[str, str] | None = None,
        response_type: ResponseType = ResponseType.JSON,
    ) -> Any:
        request_args: Dict[str, Any] = {
            "params": params,
            "headers": headers,
        }
        if isinstance(body, (bytes, str)):
            request_args["content"] = body
        elif body is not None:
            request_args["json"] = body
        resp = await self._client.request(method, url, **request_args)
        logger.debug("%s %s -> %s", method, resp.request.url, resp.status_code)
        resp.raise_for_status()
        return _decode(resp, ResponseType(response_type))

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False


def _decode(resp: httpx.Response, response_type: ResponseType) -> Any:
    if response_type is ResponseType.TEXT:
        return resp.text
    if response_type in (ResponseType.ARRAYBUFFER, ResponseType.BLOB):
        return resp.content
    if not resp.content:
        return None
    return resp.json()
