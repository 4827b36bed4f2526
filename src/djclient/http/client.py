# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Blocking httpx-backed HTTP client with a JSON property tree layer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from ..config import DEFAULT_USER_AGENT, HttpSettings, load_http_settings
from ..errors import TransportInitError, describe_transport_failure
from ..tree import PropertyTree, parse_property_tree
from .models import HttpResponse, ResponseAccumulator, UploadState

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _header_bytes(value: str) -> bytes:
    # Caller-supplied header values go out as given, non-ASCII included.
    return value.encode("utf-8")


class HttpClient:
    """
    One reusable transport handle issuing GET/POST/PUT/DELETE requests.

    Every call blocks until the exchange completes. The handle is not reentrant:
    use one instance per thread. Credentials set with ``set_auth`` are the only
    state kept between calls.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._user_pass = ""
        if client is not None:
            self._client: httpx.Client | None = client
            return
        try:
            self._client = httpx.Client(
                follow_redirects=self.settings.allow_redirects,
                timeout=self.settings.timeout,
                verify=self.settings.verify_ssl,
                trust_env=self.settings.trust_env,
            )
        except Exception as exc:  # noqa: BLE001
            raise TransportInitError(f"could not create transport handle: {exc}") from exc

    # Auth

    def clear_auth(self) -> None:
        self._user_pass = ""

    def set_auth(self, user: str, password: str) -> None:
        self._user_pass = f"{user}:{password}"

    @property
    def has_auth(self) -> bool:
        return bool(self._user_pass)

    # Verbs

    def get(self, url: str) -> HttpResponse:
        return self._perform("GET", url)

    def post(self, url: str, ctype: str, data: bytes | str) -> HttpResponse:
        body = _as_bytes(data)
        return self._perform("POST", url, content=body, headers={"Content-Type": _header_bytes(ctype)})

    def put(self, url: str, ctype: str, data: bytes | str) -> HttpResponse:
        body = _as_bytes(data)
        headers = {"Content-Type": _header_bytes(ctype), "Content-Length": str(len(body))}
        return self._perform("PUT", url, content=UploadState(body), headers=headers)

    def delete(self, url: str) -> HttpResponse:
        return self._perform("DELETE", url)

    # JSON property trees

    def get_property_tree(self, url: str) -> PropertyTree:
        """GET ``url`` and decode the JSON body; non-200 yields an ``error`` tree."""
        return parse_property_tree(self.get(url), url)

    def post_property_tree(self, url: str, data: bytes | str | Mapping[str, Any]) -> PropertyTree:
        """POST form data to ``url`` and decode the JSON body; non-200 yields an ``error`` tree."""
        if isinstance(data, Mapping):
            data = urlencode(data, doseq=True)
        return parse_property_tree(self.post(url, FORM_CONTENT_TYPE, data), url)

    # Transport

    def _handle(self) -> httpx.Client:
        if self._client is None:
            raise RuntimeError("HttpClient is closed")
        return self._client

    def _basic_auth(self) -> httpx.BasicAuth | None:
        if not self._user_pass:
            return None
        user, _, password = self._user_pass.partition(":")
        return httpx.BasicAuth(user, password)

    def _perform(
        self,
        method: str,
        url: str,
        *,
        content: bytes | UploadState | None = None,
        headers: dict[str, str | bytes] | None = None,
    ) -> HttpResponse:
        handle = self._handle()
        accumulator = ResponseAccumulator()
        request_headers: dict[str, str | bytes] = {"User-Agent": DEFAULT_USER_AGENT, "Accept-Encoding": "identity"}
        request_headers.update(headers or {})

        logger.debug("%s %s", method, url)
        try:
            with handle.stream(
                method,
                url,
                headers=request_headers,
                content=content,
                auth=self._basic_auth(),
            ) as resp:
                _deliver_headers(resp, accumulator)
                for chunk in resp.iter_bytes():
                    accumulator.write_body(chunk)
                code = resp.status_code
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError) as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            return accumulator.fail(describe_transport_failure(exc))
        finally:
            self._reset()

        logger.debug("%s %s -> %s", method, url, code)
        return accumulator.finish(code)

    def _reset(self) -> None:
        if self._client is not None:
            self._client.cookies.clear()

    # Lifecycle

    def close(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            client.close()

    @property
    def closed(self) -> bool:
        return self._client is None

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def _deliver_headers(resp: httpx.Response, accumulator: ResponseAccumulator) -> None:
    """Replay the received header block line by line, status line first."""
    status_line = f"{resp.http_version} {resp.status_code} {resp.reason_phrase}\r\n"
    accumulator.write_header(status_line.encode("ascii", errors="replace"))
    for name, value in resp.headers.raw:
        accumulator.write_header(name + b": " + value + b"\r\n")
    accumulator.write_header(b"\r\n")


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    return HttpClient(settings or load_http_settings())


__all__ = ["FORM_CONTENT_TYPE", "HttpClient", "create_default_http_client"]
