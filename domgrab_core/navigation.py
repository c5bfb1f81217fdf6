import asyncio
import logging
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlparse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import Config
from .errors import NavigationError, NavigationTimeoutError
from .extension_protocol import duplicate_current_tab
from .logger import DebugLog
from .models import ExtractionMethod
from .stealth import StealthConfig

logger = logging.getLogger(__name__)


async def _sleep_ms(delay_ms: int) -> None:
    if delay_ms and delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000.0)


async def navigate(page, url: str, config: Config, log: Optional[DebugLog] = None) -> None:
    log = log or DebugLog()
    log.debug("[NAVIGATE] Setting User-Agent...")
    user_agent = config.user_agent or StealthConfig().get_user_agent()
    await page.set_extra_http_headers({"User-Agent": user_agent})

    if config.pre_navigation_delay_ms:
        log.debug("[DELAY] Waiting %d ms before navigating...", config.pre_navigation_delay_ms)
        await _sleep_ms(config.pre_navigation_delay_ms)

    log.debug("[NAVIGATE] Loading URL: %s", url)
    try:
        await page.goto(url, wait_until="networkidle", timeout=config.navigation_timeout_ms)
    except PlaywrightTimeoutError as e:
        raise NavigationTimeoutError(
            f"Navigation timeout of {config.navigation_timeout_ms} ms exceeded for {url}"
        ) from e
    except PlaywrightError as e:
        raise NavigationError(f"Navigation failed for {url}: {e.message}") from e
    log.debug("[NAVIGATE] Page loaded successfully: %s", url)


async def settle(method: ExtractionMethod, config: Config, log: Optional[DebugLog] = None) -> None:
    """Fixed waits for late scripts and anti-bot checks; xpath waits longer."""
    log = log or DebugLog()
    extra = config.xpath_delay_ms if method == ExtractionMethod.XPATH else config.css_delay_ms
    log.debug("[DELAY] Settling %d ms + %d ms (%s)", config.settle_delay_ms, extra, method.value)
    await _sleep_ms(config.settle_delay_ms)
    await _sleep_ms(extra)


def matches_side_effect_domain(url: str, domains: Iterable[str]) -> bool:
    host = (urlparse(url).hostname or "").lower()
    if not host:
        return False
    for domain in domains:
        d = domain.strip().lower().lstrip(".")
        if d and (host == d or host.endswith("." + d)):
            return True
    return False


async def maybe_trigger_side_effect(
    page,
    context: Any,
    url: str,
    config: Config,
    log: Optional[DebugLog] = None,
) -> Optional[Dict[str, Any]]:
    """Duplicate the tab through the extension for configured domains.

    Never raises: a failure is logged and scraping continues on ``page``.
    """
    log = log or DebugLog()
    if not matches_side_effect_domain(url, config.duplicate_tab_domains):
        return None
    log.debug("[EXTENSION] %s matches a duplicate-tab domain", url)
    try:
        await page.bring_to_front()
        return await duplicate_current_tab(
            context,
            config.extension_identity,
            identify_timeout=config.identify_timeout_ms / 1000.0,
            command_timeout=config.command_timeout_ms / 1000.0,
            log=log,
        )
    except Exception as e:
        logger.warning(f"[EXTENSION] Tab duplication skipped for {url}: {e}")
        return None
