# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response header line parsing.

Header lines are delivered one at a time, exactly as framed on the wire: the status
line, every ``Name: value`` field and the blank line that ends the header block.
Names are stored as received (case-sensitive).
"""

from __future__ import annotations

from collections.abc import MutableMapping

PRESENT_MARKER = "present"
HEADER_ENCODING = "latin-1"


def parse_header_line(line: bytes | str, headers: MutableMapping[str, str]) -> int:
    """
    Record one raw header line into ``headers`` and return the number of bytes consumed.

    - blank lines are ignored
    - ``Name: value`` is split on the first colon, both sides trimmed, last value wins
    - anything else (e.g. ``HTTP/1.1 200 OK``) is stored as ``line -> "present"``

    The full line length is always reported as consumed.
    """
    if isinstance(line, (bytes, bytearray, memoryview)):
        raw = bytes(line)
        consumed = len(raw)
        text = raw.decode(HEADER_ENCODING)
    else:
        text = line
        consumed = len(line.encode(HEADER_ENCODING, errors="replace"))

    name, sep, value = text.partition(":")
    if not sep:
        stripped = text.strip()
        if stripped:
            headers[stripped] = PRESENT_MARKER
        return consumed

    headers[name.strip()] = value.strip()
    return consumed


__all__ = ["HEADER_ENCODING", "PRESENT_MARKER", "parse_header_line"]
