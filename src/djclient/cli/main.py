# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""djclient CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..http import HttpClient, HttpResponse, create_default_http_client
from ..log import setup_logging
from ..tree import check_django_error

CLI_TEXT_TRUNCATION_BYTES = 4096
METHODS = ("get", "post", "put", "delete", "tree")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="djclient: query a Django-style JSON API")
    parser.add_argument("method", choices=METHODS, help="HTTP verb, or 'tree' to decode a JSON response")
    parser.add_argument("url", help="Target URL")
    parser.add_argument("--data", help="Request body for post/put (form data for 'tree')")
    parser.add_argument(
        "--content-type",
        default="application/json",
        help="Content-Type for post/put bodies (default: application/json)",
    )
    parser.add_argument("--user", help="Basic auth user name")
    parser.add_argument("--password", default="", help="Basic auth password")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output a JSON record instead of a human-friendly summary",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", help="Logging level (default: DJCLIENT_LOG_LEVEL or WARNING)")
    return parser


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max_bytes - len(suffix.encode("utf-8"))
    if keep <= 0:
        return suffix
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def _response_record(response: HttpResponse) -> dict[str, Any]:
    return {
        "code": response.code,
        "headers": dict(response.headers),
        "body": _truncate_text_bytes(response.text, CLI_TEXT_TRUNCATION_BYTES),
    }


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(response: HttpResponse) -> None:
    print(f"[djclient] Status: {response.code}")
    for name, value in response.headers.items():
        print(f"{name}: {value}")
    print()
    print(_truncate_text_bytes(response.text, CLI_TEXT_TRUNCATION_BYTES))


def _run_verb(client: HttpClient, args: argparse.Namespace) -> HttpResponse:
    if args.method == "get":
        return client.get(args.url)
    if args.method == "post":
        return client.post(args.url, args.content_type, args.data or "")
    if args.method == "put":
        return client.put(args.url, args.content_type, args.data or "")
    return client.delete(args.url)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: HttpSettings = load_http_settings()
    if args.insecure:
        settings.verify_ssl = False

    with create_default_http_client(settings) as client:
        if args.user:
            client.set_auth(args.user, args.password)

        if args.method == "tree":
            try:
                if args.data is None:
                    tree = client.get_property_tree(args.url)
                else:
                    tree = client.post_property_tree(args.url, args.data)
            except ValueError as exc:
                print(f"[djclient] Response from {args.url} is not JSON: {exc}", file=sys.stderr)
                return 1
            _print_json(tree)
            return 1 if check_django_error(tree) else 0

        response = _run_verb(client, args)

    if args.json:
        _print_json(_response_record(response))
    else:
        _pretty_print(response)

    return 0 if 200 <= response.code < 400 else 1


if __name__ == "__main__":
    raise SystemExit(main())
