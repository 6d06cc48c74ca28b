#!/usr/bin/env python3
"""Command line entry point for one-off REST, GraphQL and upload calls."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

import httpx
from dotenv import find_dotenv, load_dotenv

from service_handler.clients import GraphQLClient, RestClient
from service_handler.config import http_config
from service_handler.exceptions import ConfigurationError, ServiceHandlerError
from service_handler.models import HttpMethod, MediaFile

logger = logging.getLogger(__name__)


def _parse_pairs(values: Optional[List[str]], separator: str, option: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for value in values or []:
        key, sep, rest = value.partition(separator)
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"{option} expects KEY{separator}VALUE, got {value!r}")
        pairs[key.strip()] = rest.strip() if separator == ":" else rest
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="service-handler",
        description="Issue a single REST, GraphQL or upload request and print the response.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (env SERVICE_HANDLER_LOG_LEVEL, default WARNING)",
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="Request timeout in seconds (env SERVICE_HANDLER_TIMEOUT)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    methods = [method.value for method in HttpMethod]

    rest = subparsers.add_parser("rest", help="Send a REST request and print the decoded JSON")
    rest.add_argument("base_url")
    rest.add_argument("endpoint")
    rest.add_argument("-X", "--method", choices=methods, default=HttpMethod.GET.value)
    rest.add_argument("-H", "--header", action="append", help="Header as 'Name: value'")
    rest.add_argument("-q", "--query-param", action="append", help="Query parameter as key=value")
    rest.add_argument("-d", "--data", help="JSON request body")

    graphql = subparsers.add_parser("graphql", help="Run a GraphQL query and print its data")
    graphql.add_argument("endpoint")
    graphql.add_argument("query")
    graphql.add_argument("--variables", help="Variables as a JSON object")
    graphql.add_argument("-X", "--method", choices=methods, default=HttpMethod.POST.value)
    graphql.add_argument("-H", "--header", action="append", help="Header as 'Name: value'")
    graphql.add_argument("-q", "--query-param", action="append", help="Query parameter as key=value")

    upload = subparsers.add_parser("upload", help="Upload files as multipart/form-data")
    upload.add_argument("base_url")
    upload.add_argument("endpoint")
    upload.add_argument("--file", action="append", required=True, help="File part as field=path")
    upload.add_argument("--field", action="append", help="Form field as key=value")
    upload.add_argument("-X", "--method", default=HttpMethod.POST.value)
    upload.add_argument("-H", "--header", action="append", help="Header as 'Name: value'")

    return parser


async def run(args: argparse.Namespace) -> Any:
    """Execute the parsed command and return what should be printed."""
    logger.debug("Running %s command", args.command)
    headers = _parse_pairs(args.header, ":", "--header")

    if args.command == "rest":
        client = RestClient(args.base_url, timeout=args.timeout)
        body = args.data.encode("utf-8") if args.data else None
        return await client.perform_request(
            args.endpoint,
            args.method,
            Any,
            headers=headers,
            query_params=_parse_pairs(args.query_param, "=", "--query-param"),
            body=body,
        )

    if args.command == "graphql":
        variables = json.loads(args.variables) if args.variables else None
        if variables is not None and not isinstance(variables, dict):
            raise argparse.ArgumentTypeError("--variables must be a JSON object")
        client = GraphQLClient(args.endpoint, timeout=args.timeout)
        return await client.perform_query(
            args.query,
            Any,
            variables=variables,
            method=args.method,
            headers=headers,
            query_params=_parse_pairs(args.query_param, "=", "--query-param"),
        )

    media = [
        MediaFile.from_path(field, path)
        for field, path in _parse_pairs(args.file, "=", "--file").items()
    ]
    client = RestClient(args.base_url, timeout=args.timeout)
    return await client.upload_media(
        args.endpoint,
        media,
        method=args.method,
        headers=headers,
        additional_fields=_parse_pairs(args.field, "=", "--field"),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the service-handler CLI."""
    # Load .env from the working directory before reading any settings
    load_dotenv(find_dotenv(usecwd=True))

    parser = build_parser()
    args = parser.parse_args(argv)

    # Precedence: CLI flag > env var (including .env) > HttpConfig default
    log_level = args.log_level or os.getenv("SERVICE_HANDLER_LOG_LEVEL", http_config.LOG_LEVEL)
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        print(f"error: unknown log level {log_level!r}", file=sys.stderr)
        return 1
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.timeout is None and os.getenv("SERVICE_HANDLER_TIMEOUT"):
            args.timeout = float(os.environ["SERVICE_HANDLER_TIMEOUT"])
    except ValueError as exc:
        print(f"error: invalid SERVICE_HANDLER_TIMEOUT: {exc}", file=sys.stderr)
        return 1

    try:
        result = asyncio.run(run(args))
    except (ServiceHandlerError, ConfigurationError, httpx.HTTPError, argparse.ArgumentTypeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"error: invalid JSON: {exc}", file=sys.stderr)
        return 1

    if isinstance(result, bytes):
        sys.stdout.buffer.write(result)
        sys.stdout.flush()
    else:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
