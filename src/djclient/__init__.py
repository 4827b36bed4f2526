# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
djclient package entrypoint.

A small blocking HTTP client for Django-style JSON APIs. Requests go through a
single httpx transport handle per client; JSON bodies are decoded into plain
property trees that callers inspect with the helpers in ``djclient.tree``.
"""

from .config import DEFAULT_USER_AGENT, HttpSettings, load_http_settings
from .errors import DjclientError, ErrorCategory, TransportInitError, TreeCoercionError
from .http import HttpClient, HttpResponse, create_default_http_client
from .log import setup_logging
from .tree import (
    check_django_error,
    parse_property_tree,
    ptree_has_child,
    ptree_vector,
)
from .version import __version__

__all__ = [
    "DEFAULT_USER_AGENT",
    "DjclientError",
    "ErrorCategory",
    "HttpClient",
    "HttpResponse",
    "HttpSettings",
    "TransportInitError",
    "TreeCoercionError",
    "check_django_error",
    "create_default_http_client",
    "load_http_settings",
    "parse_property_tree",
    "ptree_has_child",
    "ptree_vector",
    "setup_logging",
    "__version__",
]
