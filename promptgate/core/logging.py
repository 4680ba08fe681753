from __future__ import annotations

import logging
import sys
from typing import Optional

from promptgate.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Upstream SDKs log every request and retry decision at INFO/DEBUG.
SDK_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def quiet_sdk_loggers(app_level: int) -> None:
    """Keep provider SDK loggers at WARNING or above, whatever the app level."""
    for name in SDK_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, app_level))


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger for the gateway.

    The level comes from ``level`` or LOG_LEVEL. The stdout handler is only
    attached once, so calling this again from a new app factory just updates
    the levels.
    """
    settings = get_settings()
    root = logging.getLogger()
    root.setLevel((level or settings.log_level or "INFO").upper())

    if not any(getattr(h, "_promptgate", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._promptgate = True
        root.addHandler(handler)

    quiet_sdk_loggers(root.level)
