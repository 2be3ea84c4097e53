"""
SimplyApi is a small facade over an HTTP client capability.

It resolves relative URLs against a configured endpoint, encodes query params,
runs request bodies and responses through an optional serializer and hands the
request to the injected client.

Classes:
    ApiCall: A cold awaitable. Nothing is sent until it is awaited, and each await
        sends a new request. Await it inside a coroutine; start() returns a fresh
        coroutine for asyncio.run() and asyncio.create_task().

    SimplyApi:
        get(url, options=None), delete(url, options=None)
        post(url, body, options=None), put(url, body, options=None)
            Return an ApiCall resolving to the (possibly deserialized) response body.
            Errors from the client or the serializer propagate unchanged.

        build_url(url):
            Returns url unchanged when it starts with "http" or no endpoint is
            configured, otherwise endpoint + url with no separator added.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import logging
from typing import Any, Callable, Coroutine, Generator, Optional

from .client import HttpClient
from .options import ApiOptions
from .params import encode_params
from .serializer import Serializer

logger = logging.getLogger(__name__)

_DEFAULT_OPTIONS = ApiOptions()


class ApiCall:
    def __init__(self, factory: Callable[[], Coroutine[Any, Any, Any]]):
        self._factory = factory

    def start(self) -> Coroutine[Any, Any, Any]:
        return self._factory()

    def __await__(self) -> Generator[Any, None, Any]:
        return self._factory().__await__()


class SimplyApi:
    def __init__(
        self,
        http: HttpClient,
        endpoint: str | None = None,
        serializer: Serializer | None = None,
    ):
        self._http = http
        self._endpoint = endpoint
        self._serializer = serializer

    @property
    def endpoint(self) -> str | None:
        return self._endpoint

    def get(self, url: str, options: ApiOptions | None = None) -> ApiCall:
        return self._call("get", url, None, options)

    def post(self, url: str, body: Any, options: ApiOptions | None = None) -> ApiCall:
        return self._call("post", url, body, options, with_body=True)

    def put(self, url: str, body: Any, options: ApiOptions | None = None) -> ApiCall:
        return self._call("put", url, body, options, with_body=True)

    def delete(self, url: str, options: ApiOptions | None = None) -> ApiCall:
        return self._call("delete", url, None, options)

    def build_url(self, url: str) -> str:
        if (url and url.startswith("http")) or not self._endpoint:
            return url
        return self._endpoint + url

    def _call(
        self,
        method: str,
        url: str,
        body: Any,
        options: ApiOptions | None,
        with_body: bool = False,
    ) -> ApiCall:
        options = options or _DEFAULT_OPTIONS

        async def send() -> Any:
            config = {
                "params": self._encode_params(options.params),
                "headers": options.headers,
                "response_type": options.response_type,
            }
            send_fn = getattr(self._http, method)
            target = self.build_url(url)
            logger.debug("%s %s", method.upper(), target)
            if with_body:
                result = await send_fn(target, self._try_serialize(body), **config)
            else:
                result = await send_fn(target, **config)
            return self._try_deserialize(result, options.deserialize_to)

        return ApiCall(send)

    def _try_serialize(self, data: Any) -> Any:
        if self._serializer is not None:
            return self._serializer.serialize(data)
        return data

    def _encode_params(self, params: Optional[dict]) -> Any:
        if params is None:
            return None
        return encode_params(self._try_serialize(params))

    def _try_deserialize(self, data: Any, deserialize_to: Optional[Callable[..., Any]]) -> Any:
        if self._serializer is not None and callable(deserialize_to):
            logger.debug("deserializing response to %s",
                         getattr(deserialize_to, "__name__", deserialize_to))
            return self._serializer.deserialize(data, deserialize_to)
        return data
