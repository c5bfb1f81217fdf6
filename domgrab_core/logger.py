#!/usr/bin/env python3
"""
Per-request debug logging.

Step-by-step tracing (launch, navigation, extraction, cleanup) is only
written when the request asked for ``debug`` or the service runs in
development mode. Errors always reach the log.
"""

import logging
from typing import Any, Optional

logger = logging.getLogger("domgrab")


class DebugLog:
    """Logger facade gated on the request's debug flag"""

    def __init__(self, enabled: bool = False, base: Optional[logging.Logger] = None):
        self.enabled = bool(enabled)
        self.base = base or logger

    def debug(self, message: str, *args: Any) -> None:
        if self.enabled:
            self.base.info(message, *args)

    def warning(self, message: str, *args: Any) -> None:
        if self.enabled:
            self.base.warning(message, *args)

    def error(self, message: str, *args: Any, exc_info: bool = False) -> None:
        self.base.error(message, *args, exc_info=exc_info)