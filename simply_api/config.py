"""
This module provides configuration management for the API facade.

Classes:
    ApiConfig: Endpoint, timeout, default headers and serializer choice for one API.

    ConfigError: Raised when a configuration file cannot be used.

Functions:
    load_config(path: Path | None = None) -> ApiConfig:
        Loads an API configuration from a YAML file (defaults when path is None).
        SIMPLY_API_ENDPOINT overrides the configured endpoint.

    build_serializer(name: str | None):
        Returns the serializer registered under name, or None.

    build_api(config: ApiConfig, http=None) -> SimplyApi:
        Builds a SimplyApi from a configuration, backed by http or a new HttpxClient.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from .client import HttpxClient
from .facade import SimplyApi
from .serializer import DataclassSerializer

ENDPOINT_ENV = "SIMPLY_API_ENDPOINT"


class ConfigError(ValueError):
    pass


@dataclass
class ApiConfig:
    endpoint: str | None = None
    timeout: int = 10
    headers: Dict[str, str] | None = None
    serializer: str | None = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ApiConfig":
        serializer = data.get("serializer")
        if serializer not in (None, "dataclass", "camel"):
            raise ConfigError(f"Unknown serializer {serializer!r}")
        try:
            timeout = int(data.get("timeout") or 10)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout {data.get('timeout')!r}") from e
        return ApiConfig(
            endpoint=data.get("endpoint"),
            timeout=timeout,
            headers=data.get("headers"),
            serializer=serializer,
        )


def load_config(path: Path | None = None) -> ApiConfig:
    raw: Any = {}
    if path is not None:
        try:
            with path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping")
    config = ApiConfig.from_dict(raw)
    env_endpoint = os.environ.get(ENDPOINT_ENV)
    if env_endpoint:
        config.endpoint = env_endpoint
    return config


def build_serializer(name: str | None) -> Optional[DataclassSerializer]:
    if name == "dataclass":
        return DataclassSerializer()
    if name == "camel":
        return DataclassSerializer(key_transform="camel")
    return None


def build_api(config: ApiConfig, http: Any = None) -> SimplyApi:
    if http is None:
        http = HttpxClient(timeout=config.timeout, headers=config.headers)
    return SimplyApi(http, endpoint=config.endpoint,
                     serializer=build_serializer(config.serializer))
