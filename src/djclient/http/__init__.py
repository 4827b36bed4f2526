# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .client import FORM_CONTENT_TYPE, HttpClient, create_default_http_client
from .headers import PRESENT_MARKER, parse_header_line
from .models import (
    TRANSPORT_FAILURE_CODE,
    Headers,
    HttpResponse,
    ResponseAccumulator,
    UploadState,
)

__all__ = [
    "FORM_CONTENT_TYPE",
    "Headers",
    "HttpClient",
    "HttpResponse",
    "PRESENT_MARKER",
    "ResponseAccumulator",
    "TRANSPORT_FAILURE_CODE",
    "UploadState",
    "create_default_http_client",
    "parse_header_line",
]
