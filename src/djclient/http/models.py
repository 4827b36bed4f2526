# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP response and upload data models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .headers import parse_header_line

Headers = dict[str, str]

TRANSPORT_FAILURE_CODE = -1


@dataclass(frozen=True)
class HttpResponse:
    """Result of one request: status code, raw body and received headers."""

    code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only snapshot; the caller cannot edit what was received.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def ok(self) -> bool:
        return self.code == 200

    @property
    def transport_failed(self) -> bool:
        return self.code == TRANSPORT_FAILURE_CODE

    @property
    def text(self) -> str:
        """Body decoded as UTF-8, undecodable bytes replaced."""
        return self.body.decode("utf-8", errors="replace")


class ResponseAccumulator:
    """
    Collects a response as the transport pushes it.

    ``write_body`` and ``write_header`` return the number of bytes consumed, which is
    always the full size of what was delivered.
    """

    def __init__(self) -> None:
        self._body = bytearray()
        self.headers: Headers = {}

    def write_body(self, chunk: bytes) -> int:
        self._body.extend(chunk)
        return len(chunk)

    def write_header(self, line: bytes | str) -> int:
        return parse_header_line(line, self.headers)

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def finish(self, code: int) -> HttpResponse:
        return HttpResponse(code=code, body=self.body, headers=self.headers)

    def fail(self, message: str) -> HttpResponse:
        """Replace whatever was received with a transport failure record."""
        return HttpResponse(
            code=TRANSPORT_FAILURE_CODE,
            body=message.encode("utf-8"),
            headers=self.headers,
        )


class UploadState:
    """
    Read cursor over a request body, pulled by the transport during a PUT.

    httpx treats any object with ``read`` as a file-like stream and calls it until
    it returns an empty chunk.
    """

    CHUNK_SIZE = 65_536

    def __init__(self, data: bytes):
        self._data = memoryview(data)
        self.offset = 0
        self.remaining = len(data)

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            size = self.remaining
        copy_size = min(size, self.remaining)
        chunk = self._data[self.offset : self.offset + copy_size].tobytes()
        self.offset += copy_size
        self.remaining -= copy_size
        return chunk

    def __iter__(self) -> Iterator[bytes]:
        chunk = self.read(self.CHUNK_SIZE)
        while chunk:
            yield chunk
            chunk = self.read(self.CHUNK_SIZE)


__all__ = [
    "Headers",
    "HttpResponse",
    "ResponseAccumulator",
    "TRANSPORT_FAILURE_CODE",
    "UploadState",
]
