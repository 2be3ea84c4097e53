from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

import httpx
import pytest

from simply_api import ApiOptions, DataclassSerializer, ResponseType, SimplyApi


class RecordingHttp:
    """Fake HttpClient that records each call and echoes the body (or returns a canned result)."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.calls: list[dict[str, Any]] = []
        self._result = result
        self._error = error

    async def _record(self, method: str, url: str, body: Any, config: dict[str, Any]) -> Any:
        self.calls.append({"method": method, "url": url, "body": body, **config})
        if self._error is not None:
            raise self._error
        if self._result is not None:
            return self._result
        return body

    async def get(self, url: str, **config: Any) -> Any:
        return await self._record("get", url, None, config)

    async def post(self, url: str, body: Any, **config: Any) -> Any:
        return await self._record("post", url, body, config)

    async def put(self, url: str, body: Any, **config: Any) -> Any:
        return await self._record("put", url, body, config)

    async def delete(self, url: str, **config: Any) -> Any:
        return await self._record("delete", url, None, config)


class TaggingSerializer:
    """Serializer that wraps payloads so tests can see it ran."""

    def serialize(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: f"s:{v}" for k, v in data.items()}
        return {"wrapped": data}

    def deserialize(self, data: Any, target_type: type) -> Any:
        return target_type(data["wrapped"])


@dataclass
class User:
    name: str
    age: int


def run(awaitable):
    async def _await():
        return await awaitable
    return asyncio.run(_await())


def test_build_url_keeps_absolute_urls():
    api = SimplyApi(RecordingHttp(), endpoint="https://api.example.com/")
    assert api.build_url("http://other.example.com/x") == "http://other.example.com/x"
    assert api.build_url("https://other.example.com/x") == "https://other.example.com/x"


def test_build_url_concatenates_endpoint_without_separator():
    api = SimplyApi(RecordingHttp(), endpoint="https://api.example.com/")
    assert api.build_url("users") == "https://api.example.com/users"
    assert SimplyApi(RecordingHttp(), endpoint="https://api.example.com").build_url("users") == \
        "https://api.example.comusers"


def test_build_url_without_endpoint_passes_through():
    api = SimplyApi(RecordingHttp())
    assert api.build_url("users") == "users"
    assert SimplyApi(RecordingHttp(), endpoint="").build_url("users") == "users"


def test_build_url_empty_url_gets_endpoint():
    api = SimplyApi(RecordingHttp(), endpoint="https://api.example.com/")
    assert api.build_url("") == "https://api.example.com/"


def test_get_defaults_to_json_without_params_or_headers():
    http = RecordingHttp(result={"ok": True})
    api = SimplyApi(http, endpoint="https://api.example.com/")
    assert run(api.get("users")) == {"ok": True}
    assert run(api.get("users", ApiOptions(response_type=ResponseType.JSON))) == {"ok": True}
    assert http.calls[0] == http.calls[1] == {
        "method": "get",
        "url": "https://api.example.com/users",
        "body": None,
        "params": None,
        "headers": None,
        "response_type": ResponseType.JSON,
    }


def test_params_are_encoded_as_strings():
    http = RecordingHttp(result=[])
    api = SimplyApi(http)
    run(api.get("https://api.example.com/users", ApiOptions(params={"a": 1, "b": "x"})))
    params = http.calls[0]["params"]
    assert isinstance(params, httpx.QueryParams)
    assert dict(params) == {"a": "1", "b": "x"}


def test_params_go_through_serializer():
    http = RecordingHttp(result=[])
    api = SimplyApi(http, serializer=TaggingSerializer())
    run(api.delete("items/1", ApiOptions(params={"force": 1})))
    assert dict(http.calls[0]["params"]) == {"force": "s:1"}


def test_headers_and_response_type_are_forwarded():
    http = RecordingHttp(result="plain")
    api = SimplyApi(http)
    opts = ApiOptions(headers={"X-Token": "abc"}, response_type=ResponseType.TEXT)
    assert run(api.put("notes/1", "body", opts)) == "plain"
    call = http.calls[0]
    assert call["headers"] == {"X-Token": "abc"}
    assert call["response_type"] is ResponseType.TEXT
    assert call["body"] == "body"


def test_without_serializer_body_and_result_pass_through():
    http = RecordingHttp()
    api = SimplyApi(http)
    body = {"name": "ada", "age": 36}
    result = run(api.post("users", body, ApiOptions(deserialize_to=User)))
    assert http.calls[0]["body"] is body
    assert result is body


def test_serializer_round_trip():
    api = SimplyApi(RecordingHttp(), serializer=DataclassSerializer())
    user = User(name="ada", age=36)
    result = run(api.post("users", user, ApiOptions(deserialize_to=User)))
    assert result == user
    assert result is not user


def test_serializer_runs_on_body_without_deserialize_target():
    http = RecordingHttp()
    api = SimplyApi(http, serializer=TaggingSerializer())
    assert run(api.post("things", 5)) == {"wrapped": 5}
    assert http.calls[0]["body"] == {"wrapped": 5}


def test_non_class_deserialize_target_is_ignored():
    http = RecordingHttp(result={"wrapped": 3})
    api = SimplyApi(http, serializer=TaggingSerializer())
    opts = ApiOptions(deserialize_to="User")  # type: ignore[arg-type]
    assert run(api.get("things/3", opts)) == {"wrapped": 3}


def test_deserialize_to_class():
    api = SimplyApi(RecordingHttp(result={"wrapped": "7"}), serializer=TaggingSerializer())
    assert run(api.get("things/7", ApiOptions(deserialize_to=int))) == 7


def test_calls_are_cold():
    http = RecordingHttp(result={})
    api = SimplyApi(http)
    call = api.get("users")
    api.post("users", {"a": 1})
    assert http.calls == []
    run(call)
    assert len(http.calls) == 1
    run(call)
    assert len(http.calls) == 2


def test_client_errors_propagate():
    request = httpx.Request("GET", "https://api.example.com/users")
    error = httpx.HTTPStatusError(
        "boom", request=request, response=httpx.Response(500, request=request))
    api = SimplyApi(RecordingHttp(error=error))
    with pytest.raises(httpx.HTTPStatusError):
        run(api.get("users"))


def test_serializer_errors_propagate():
    class Broken:
        def serialize(self, data):
            raise ValueError("bad payload")

        def deserialize(self, data, target_type):
            return data

    http = RecordingHttp()
    api = SimplyApi(http, serializer=Broken())
    call = api.put("users/1", {"a": 1})
    with pytest.raises(ValueError, match="bad payload"):
        run(call)
    assert http.calls == []


def test_api_call_works_with_gather():
    http = RecordingHttp(result={"n": 1})
    api = SimplyApi(http)

    async def both():
        return await asyncio.gather(api.get("a"), api.get("b"))

    assert asyncio.run(both()) == [{"n": 1}, {"n": 1}]
    assert [c["url"] for c in http.calls] == ["a", "b"]


def test_factory_function_as_deserialize_target():
    api = SimplyApi(RecordingHttp(result={"name": "ada", "age": 36}),
                    serializer=DataclassSerializer())
    opts = ApiOptions(deserialize_to=lambda data: User(**data))
    result = run(api.get("users/1", opts))
    assert isinstance(result, User)
    assert result == User(name="ada", age=36)


def test_non_callable_deserialize_target_with_dataclass_serializer():
    http = RecordingHttp(result={"name": "ada", "age": 36})
    api = SimplyApi(http, serializer=DataclassSerializer())
    opts = ApiOptions(deserialize_to="User")  # type: ignore[arg-type]
    assert run(api.get("users/1", opts)) == {"name": "ada", "age": 36}


def test_start_runs_under_asyncio_run():
    http = RecordingHttp(result={"ok": True})
    call = SimplyApi(http).get("health")
    assert http.calls == []
    assert asyncio.run(call.start()) == {"ok": True}
    assert asyncio.run(call.start()) == {"ok": True}
    assert len(http.calls) == 2


@dataclass
class Address:
    street: str


@dataclass
class Person:
    name: str
    address: Address
    previous: list[Address]
    mailing: Optional[Address] = None


def test_serializer_round_trip_with_nested_models():
    api = SimplyApi(RecordingHttp(), serializer=DataclassSerializer())
    person = Person("ada", Address("Main"), [Address("Old"), Address("Older")], Address("PO"))
    result = run(api.post("people", person, ApiOptions(deserialize_to=Person)))
    assert result == person
    assert isinstance(result.address, Address)
    assert all(isinstance(a, Address) for a in result.previous)
