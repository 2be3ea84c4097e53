"""
Main module for the simply-api command line.

This module issues a single GET/POST/PUT/DELETE call through SimplyApi and prints the
result. The endpoint, timeout, default headers and serializer come from an optional YAML
config file, the SIMPLY_API_ENDPOINT environment variable and command-line flags (in
increasing order of precedence).

Functions:
    parse_args(argv=None):
        Parses command-line arguments.

    configure_logging(log_file: str | None, verbosity: int):
        Configures logging handlers and verbosity levels.

    log_event(event: str, **fields):
        Logs structured events as JSON records.

    print_result(result):
        Prints a response body: JSON pretty-printed, text as-is, bytes as a size summary.

    main(argv=None):
        Entry point for the CLI. Returns 0 on success and 1 on config, HTTP or transport errors.

Usage:
    simply-api get users --endpoint https://api.example.com/ --param page=2

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List
import httpx
from rich.console import Console
from rich.markup import escape

from . import __version__
from .client import HttpxClient
from .config import ApiConfig, ConfigError, build_api, load_config
from .options import ApiOptions, ResponseType


console = Console()


def _split_pairs(parser: argparse.ArgumentParser, items: List[str], sep: str, flag: str) -> Dict[str, str] | None:
    if not items:
        return None
    pairs: Dict[str, str] = {}
    for item in items:
        key, found, value = item.partition(sep)
        if not found or not key.strip():
            parser.error(f"{flag} expects KEY{sep}VALUE, got {item!r}")
        pairs[key.strip()] = value.strip()
    return pairs


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="simply-api",
        description="simply-api - Send a single request through the API facade and print the response")
    parser.add_argument("method", type=str.lower,
                        choices=["get", "post", "put", "delete"],
                        help="HTTP method")
    parser.add_argument("url", help="Absolute URL or path relative to the endpoint")
    parser.add_argument("--config", default=None,
                        help="Set path to YAML config file")
    parser.add_argument("--endpoint", default=None,
                        help="Set base endpoint prefixed to relative URLs")
    parser.add_argument("--timeout", type=int, default=None,
                        help="Set request timeout (in seconds)")
    parser.add_argument("--data", default=None,
                        help="JSON request body (post/put)")
    parser.add_argument("--param", action="append", default=[],
                        help="Query parameter as KEY=VALUE (repeatable)")
    parser.add_argument("--header", action="append", default=[],
                        help="Request header as NAME:VALUE (repeatable)")
    parser.add_argument("--response-type", default=ResponseType.JSON.value,
                        choices=[t.value for t in ResponseType],
                        help="How to decode the response body")
    parser.add_argument("--log-file", default=None,
                        help="Set path to log file")
    parser.add_argument("-v", "--verbose", action="count",
                        default=0, help="Verbose output")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)
    args.params = _split_pairs(parser, args.param, "=", "--param")
    args.headers = _split_pairs(parser, args.header, ":", "--header")
    return args


def configure_logging(log_file: str | None, verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        handlers.append(fh)
    logging.basicConfig(level=level, handlers=handlers, format="%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_event(event: str, **fields):
    record = {"event": event, **fields}
    logging.getLogger(__name__).info(json.dumps(record, ensure_ascii=False, default=str))


def print_result(result: Any):
    if result is None:
        return
    if isinstance(result, (bytes, bytearray)):
        console.print(f"<{len(result)} bytes>", style="cyan")
    elif isinstance(result, str):
        console.print(result, markup=False, highlight=False)
    else:
        console.print_json(data=result, default=str)


async def _send(config: ApiConfig, args, body: Any) -> int:
    options = ApiOptions(
        headers=args.headers,
        params=args.params,
        response_type=ResponseType(args.response_type),
    )
    async with HttpxClient(timeout=config.timeout, headers=config.headers) as http:
        api = build_api(config, http)
        target = api.build_url(args.url)
        if args.method in ("post", "put"):
            call = getattr(api, args.method)(args.url, body, options)
        else:
            call = getattr(api, args.method)(args.url, options)
        try:
            result = await call
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            console.print(
                f"[red]{args.method.upper()} {status}[/red] {target}: {escape(e.response.text)}")
            log_event("error", method=args.method, url=target,
                      status=status, response=e.response.text)
            return 1
        except httpx.HTTPError as e:
            console.print(f"[red]Request failed[/red]: {escape(str(e))}")
            log_event("exception", method=args.method, url=target, error=str(e))
            return 1
    log_event("sent", method=args.method, url=target, params=args.params)
    print_result(result)
    return 0


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_file, args.verbose)
    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        log_event("config_error", error=str(e))
        return 1
    if args.endpoint:
        config.endpoint = args.endpoint
    if args.timeout:
        config.timeout = args.timeout

    body = None
    if args.data is not None:
        try:
            body = json.loads(args.data)
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid JSON body[/red]: {e}")
            return 1

    log_event("startup", version=__version__, method=args.method,
              endpoint=config.endpoint)
    return asyncio.run(_send(config, args, body))


if __name__ == "__main__":
    raise SystemExit(main())
