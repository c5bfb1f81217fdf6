#!/usr/bin/env python3
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from .browser_setup import create_session
from .cleanup import CleanupCoordinator
from .config import Config, config as default_config
from .error_handler import create_error_response, create_success_response, format_error_for_logging
from .errors import ValidationError
from .extraction import extract_css, extract_xpath
from .logger import DebugLog
from .models import ExtractionMethod, ScrapeRequest, ScrapeResponse, is_truthy
from .navigation import maybe_trigger_side_effect, navigate, settle
from .stealth import StealthConfig

logger = logging.getLogger(__name__)

_loop_exception_handler: Optional[Callable[[asyncio.AbstractEventLoop, Dict[str, Any]], None]] = None


def set_loop_exception_handler(handler) -> None:
    """Handler installed on every per-request event loop (see run_scrape)."""
    global _loop_exception_handler
    _loop_exception_handler = handler


class ScrapeExecutor:
    """Runs one scrape request end to end on its own browser"""
    def __init__(self, config: Optional[Config] = None, stealth_config: Optional[StealthConfig] = None):
        self.config = config or default_config
        self.stealth_config = stealth_config or StealthConfig()

    async def scrape(self, payload: Any) -> ScrapeResponse:
        try:
            request = ScrapeRequest.from_payload(payload)
        except ValidationError as e:
            debug = isinstance(payload, dict) and is_truthy(payload.get("debug", False))
            if debug:
                logger.warning(f"[REQUEST] Bad Request: {e}")
            status, body = create_error_response(e, include_stack=debug)
            return ScrapeResponse(status=status, body=body)
        return await self.execute(request)

    async def execute(self, request: ScrapeRequest) -> ScrapeResponse:
        log = DebugLog(request.debug or self.config.development)
        log.debug(
            "[REQUEST] Processing scrape request: url=%s, selector=%r, method=%s, debug=%s",
            request.url, request.selector, request.method.value, request.debug,
        )
        cleanup = CleanupCoordinator(log)
        try:
            session = await create_session(self.config, self.stealth_config, log)
            cleanup.track_session(session)

            log.debug("[NAVIGATE] Creating new page...")
            page = await session.context.new_page()
            cleanup.track_page(page)

            await navigate(page, request.url, self.config, log)
            await maybe_trigger_side_effect(page, session.context, request.url, self.config, log)
            await settle(request.method, self.config, log)

            if request.method == ExtractionMethod.XPATH:
                result = await extract_xpath(page, request.selector, log)
            else:
                result = await extract_css(page, request.selector, self.config, log, cleanup)

            log.debug("[RESPONSE] Sending extracted data to client.")
            return create_success_response(request.method, result, self.config.xpath_legacy_scalar)
        except Exception as e:
            logger.error(format_error_for_logging(e, request.url), exc_info=True)
            status, body = create_error_response(e, include_stack=request.debug)
            return ScrapeResponse(status=status, body=body)
        finally:
            cleanup_errors = await cleanup.run()
            if cleanup_errors:
                logger.warning(
                    f"[CLEANUP] {len(cleanup_errors)} cleanup step(s) failed for {request.url}: "
                    + "; ".join(cleanup_errors)
                )


def run_scrape(executor: ScrapeExecutor, payload: Any) -> ScrapeResponse:
    """Run one scrape on a fresh event loop (one per request)."""
    loop = asyncio.new_event_loop()
    if _loop_exception_handler is not None:
        loop.set_exception_handler(_loop_exception_handler)
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(executor.scrape(payload))
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            asyncio.set_event_loop(None)
            loop.close()
