"""
Per-request resource finalizer.

Resources are registered as they are acquired and released in reverse
order (element handle, page, browser session) exactly once, whatever
happened in between. A failing step is logged and recorded; the next
step still runs and nothing propagates to the caller.
"""

import logging
from typing import Any, List, Optional

from .browser_setup import BrowserSession, destroy_session
from .logger import DebugLog

logger = logging.getLogger(__name__)


class CleanupCoordinator:
    def __init__(self, log: Optional[DebugLog] = None):
        self.log = log or DebugLog()
        self.handle: Any = None
        self.page: Any = None
        self.session: Optional[BrowserSession] = None
        self.errors: List[str] = []
        self.finished = False

    def track_session(self, session: BrowserSession) -> None:
        self.session = session

    def track_page(self, page: Any) -> None:
        self.page = page

    def track_handle(self, handle: Any) -> None:
        self.handle = handle

    async def dispose_handle(self) -> None:
        handle, self.handle = self.handle, None
        if handle is None:
            return
        try:
            await handle.dispose()
        except Exception as e:
            self._record("dispose element handle", e)

    async def run(self) -> List[str]:
        if self.finished:
            return self.errors
        self.finished = True
        self.log.debug("[CLEANUP] Closing resources...")

        await self.dispose_handle()

        page, self.page = self.page, None
        if page is not None:
            try:
                await page.close()
                self.log.debug("[CLEANUP] Page closed.")
            except Exception as e:
                self._record("close page", e)

        session, self.session = self.session, None
        if session is not None:
            try:
                await destroy_session(session, self.log)
            except Exception as e:
                self._record("destroy session", e)
            self.errors.extend(session.cleanup_errors)

        self.log.debug("[CLEANUP] Cleanup finished.")
        return self.errors

    def _record(self, step: str, error: Exception) -> None:
        self.errors.append(f"{step}: {error}")
        logger.warning(f"[CLEANUP] Error during {step}: {error}")

    async def __aenter__(self) -> 'CleanupCoordinator':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.run()
        return False
