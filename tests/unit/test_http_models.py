# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import dataclasses

import pytest

from djclient.http.models import HttpResponse, ResponseAccumulator, UploadState


@pytest.mark.parametrize(
    "chunks",
    [
        [b"hello world"],
        [b"he", b"llo", b" ", b"world"],
        [b"h", b"", b"ello w", b"orld"],
    ],
)
def test_accumulator_body_preserves_order(chunks):
    acc = ResponseAccumulator()
    consumed = [acc.write_body(chunk) for chunk in chunks]
    assert consumed == [len(chunk) for chunk in chunks]
    assert acc.finish(200).body == b"hello world"


def test_accumulator_collects_header_lines():
    acc = ResponseAccumulator()
    for line in (b"HTTP/1.1 201 Created\r\n", b"X-Id: 7\r\n", b"\r\n"):
        assert acc.write_header(line) == len(line)
    response = acc.finish(201)
    assert response.code == 201
    assert response.headers == {"HTTP/1.1 201 Created": "present", "X-Id": "7"}


def test_accumulator_fail_builds_transport_failure():
    acc = ResponseAccumulator()
    acc.write_body(b"partial")
    response = acc.fail("Failed to query. CURL error: Timeout was reached: DETAIL: slow")
    assert response.code == -1
    assert response.transport_failed is True
    assert response.text.startswith("Failed to query. CURL error: ")


def test_http_response_is_frozen():
    response = HttpResponse(code=200, body=b"{}")
    assert response.ok is True
    with pytest.raises(dataclasses.FrozenInstanceError):
        response.code = 500  # type: ignore[misc]


def test_http_response_text_replaces_invalid_utf8():
    assert HttpResponse(code=200, body=b"ok\xff").text == "ok�"


@pytest.mark.parametrize(
    "sizes",
    [
        [1] * 20,
        [3, 7, 100],
        [1000],
        [0, 5, 0, 50],
    ],
)
def test_upload_state_transfers_exact_bytes(sizes):
    data = bytes(range(13)) + b"\x00tail"
    upload = UploadState(data)
    received = bytearray()
    for size in sizes:
        chunk = upload.read(size)
        assert len(chunk) == min(size, len(data) - len(received))
        received.extend(chunk)
    while True:
        chunk = upload.read(4)
        if not chunk:
            break
        received.extend(chunk)
    assert bytes(received) == data
    assert upload.remaining == 0
    assert upload.offset == len(data)
    assert upload.read(10) == b""


def test_upload_state_iterates_in_chunks(monkeypatch):
    monkeypatch.setattr(UploadState, "CHUNK_SIZE", 4)
    upload = UploadState(b"abcdefghij")
    assert list(upload) == [b"abcd", b"efgh", b"ij"]


def test_http_response_snapshots_headers():
    source = {"X-Id": "7"}
    response = HttpResponse(code=200, headers=source)
    source["X-Id"] = "8"
    assert response.headers == {"X-Id": "7"}
    with pytest.raises(TypeError):
        response.headers["X-New"] = "1"  # type: ignore[index]
