# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for djclient."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"djclient/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """Transport handle defaults."""

    timeout: float = 30.0
    verify_ssl: bool = True
    allow_redirects: bool = False
    trust_env: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("DJCLIENT_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            verify_ssl=_bool_env("DJCLIENT_HTTP_VERIFY_SSL", cls.verify_ssl),
            allow_redirects=_bool_env("DJCLIENT_HTTP_REDIRECTS", cls.allow_redirects),
            trust_env=_bool_env("DJCLIENT_HTTP_TRUST_ENV", cls.trust_env),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
