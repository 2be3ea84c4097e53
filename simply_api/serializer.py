"""
Serializers that turn domain objects into wire payloads and back.

Classes:
    Serializer: Protocol the facade expects from an injected serializer.

    DataclassSerializer: Converts dataclass models to plain JSON-ready structures and
        rebuilds them from decoded responses. Optionally renames snake_case fields to
        camelCase on the wire.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import dataclasses
import re
import types
from datetime import date, datetime
from enum import Enum
from typing import (
    Any, Callable, Dict, Mapping, Protocol, Type, TypeVar, Union,
    get_args, get_origin, get_type_hints,
)

T = TypeVar("T")

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


class Serializer(Protocol):
    def serialize(self, data: Any) -> Any:
        ...

    def deserialize(self, data: Any, target_type: Type[T]) -> T:
        ...


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


def _identity(name: str) -> str:
    return name


class DataclassSerializer:
    def __init__(self, key_transform: str | None = None):
        if key_transform not in (None, "camel"):
            raise ValueError(f"unknown key transform {key_transform!r}")
        self._outgoing: Callable[[str], str] = to_camel if key_transform else _identity
        self._incoming: Callable[[str], str] = to_snake if key_transform else _identity

    def serialize(self, data: Any) -> Any:
        if dataclasses.is_dataclass(data) and not isinstance(data, type):
            return {
                self._outgoing(f.name): self.serialize(getattr(data, f.name))
                for f in dataclasses.fields(data)
            }
        if isinstance(data, Mapping):
            return {k: self.serialize(v) for k, v in data.items()}
        if isinstance(data, (list, tuple)):
            return [self.serialize(item) for item in data]
        if isinstance(data, Enum):
            return data.value
        if isinstance(data, (datetime, date)):
            return data.isoformat()
        return data

    def deserialize(self, data: Any, target_type: Type[T]) -> Any:
        if isinstance(data, list):
            return [self.deserialize(item, target_type) for item in data]
        if not dataclasses.is_dataclass(target_type):
            return target_type(data)
        if not isinstance(data, Mapping):
            raise TypeError(
                f"cannot build {target_type.__name__} from {type(data).__name__}")
        known = {f.name for f in dataclasses.fields(target_type) if f.init}
        hints = get_type_hints(target_type)
        fields: Dict[str, Any] = {}
        for key, value in data.items():
            name = self._incoming(key)
            if name in known:
                fields[name] = self._rebuild(value, hints.get(name, Any))
        return target_type(**fields)

    def _rebuild(self, value: Any, hint: Any) -> Any:
        """Turn a decoded field value back into the type its annotation names."""
        if value is None:
            return None
        origin = get_origin(hint)
        if origin in (Union, types.UnionType):
            members = [arg for arg in get_args(hint) if arg is not type(None)]
            return self._rebuild(value, members[0]) if len(members) == 1 else value
        if origin in (list, tuple, set, frozenset) and isinstance(value, list):
            args = get_args(hint)
            if origin is tuple and args and args[-1] is not Ellipsis:
                return tuple(self._rebuild(v, a) for v, a in zip(value, args))
            item_hint = args[0] if args else Any
            return origin(self._rebuild(v, item_hint) for v in value)
        if origin is dict and isinstance(value, Mapping):
            args = get_args(hint)
            item_hint = args[1] if len(args) == 2 else Any
            return {k: self._rebuild(v, item_hint) for k, v in value.items()}
        if not isinstance(hint, type):
            return value
        if dataclasses.is_dataclass(hint) and isinstance(value, Mapping):
            return self.deserialize(value, hint)
        if issubclass(hint, Enum):
            return hint(value)
        if issubclass(hint, datetime) and isinstance(value, str):
            return datetime.fromisoformat(value)
        if issubclass(hint, date) and isinstance(value, str):
            return date.fromisoformat(value)
        return value
