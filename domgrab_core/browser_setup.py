#!/usr/bin/env python3
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from playwright.async_api import async_playwright

from .config import Config
from .errors import BrowserLaunchError
from .logger import DebugLog
from .stealth import StealthConfig, VIEWPORT


@dataclass
class BrowserSession:
    """One browser process plus its disposable profile directory.

    Owned by exactly one request; ``destroy_session`` releases it once.
    """
    playwright: Any
    context: Any
    profile_dir: Path
    closed: bool = False
    close_attempts: int = 0
    remove_attempts: int = 0
    cleanup_errors: List[str] = field(default_factory=list)


def build_launch_args(config: Config, stealth_config: Optional[StealthConfig] = None) -> List[str]:
    stealth_config = stealth_config or StealthConfig()
    args = stealth_config.get_chrome_args()
    args.extend(stealth_config.get_extension_args(config.extension_paths))
    return args


def make_profile_dir(config: Config) -> Path:
    root = str(config.profile_root) if config.profile_root else None
    return Path(tempfile.mkdtemp(prefix=config.profile_prefix, dir=root))


def _remove_profile_dir(profile_dir: Path) -> None:
    if profile_dir.exists():
        shutil.rmtree(profile_dir)


async def create_session(
    config: Config,
    stealth_config: Optional[StealthConfig] = None,
    log: Optional[DebugLog] = None,
) -> BrowserSession:
    stealth_config = stealth_config or StealthConfig()
    log = log or DebugLog()
    args = build_launch_args(config, stealth_config)
    if config.extension_paths:
        log.debug("[LAUNCH] Preparing extensions from: %s", ",".join(config.extension_paths))

    profile_dir = make_profile_dir(config)
    log.debug("[LAUNCH] Created temporary user data dir: %s", profile_dir)

    playwright = None
    try:
        log.debug("[LAUNCH] Initializing browser instance...")
        playwright = await async_playwright().start()
        launch_args = {
            "user_data_dir": str(profile_dir),
            "headless": bool(config.headless),
            "args": args,
            "viewport": dict(VIEWPORT),
            "user_agent": config.user_agent or stealth_config.get_user_agent(),
            "timeout": config.launch_timeout_ms,
        }
        if config.executable_path:
            launch_args["executable_path"] = config.executable_path
        if config.extension_paths:
            # Playwright passes --disable-extensions by default
            launch_args["ignore_default_args"] = ["--disable-extensions"]
        context = await playwright.chromium.launch_persistent_context(**launch_args)
    except Exception as e:
        log.error("[LAUNCH] Browser failed to start: %s", e)
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as stop_err:
                log.warning("[LAUNCH] Error stopping Playwright after failed launch: %s", stop_err)
        try:
            _remove_profile_dir(profile_dir)
        except Exception as rm_err:
            log.warning("[LAUNCH] Failed to remove user data dir %s: %s", profile_dir, rm_err)
        raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

    log.debug("[LAUNCH] Browser launched successfully.")
    return BrowserSession(playwright=playwright, context=context, profile_dir=profile_dir)


async def destroy_session(session: Optional[BrowserSession], log: Optional[DebugLog] = None) -> None:
    """Close the browser and remove its profile dir; never raises."""
    if session is None or session.closed:
        return
    log = log or DebugLog()
    session.closed = True

    session.close_attempts += 1
    try:
        await session.context.close()
        log.debug("[CLEANUP] Browser closed.")
    except Exception as e:
        session.cleanup_errors.append(f"close browser: {e}")
        log.warning("[CLEANUP] Error closing browser: %s", e)
    try:
        await session.playwright.stop()
    except Exception as e:
        session.cleanup_errors.append(f"stop playwright: {e}")
        log.warning("[CLEANUP] Error stopping Playwright: %s", e)

    session.remove_attempts += 1
    log.debug("[CLEANUP] Removing user data dir: %s", session.profile_dir)
    try:
        _remove_profile_dir(session.profile_dir)
        log.debug("[CLEANUP] User data dir removed.")
    except Exception as e:
        session.cleanup_errors.append(f"remove profile dir: {e}")
        log.warning("[CLEANUP] Failed to remove user data dir %s: %s", session.profile_dir, e)


async def browser_version(session: BrowserSession) -> str:
    page = await session.context.new_page()
    try:
        cdp = await session.context.new_cdp_session(page)
        info = await cdp.send("Browser.getVersion")
        return str(info.get("product", "unknown"))
    finally:
        await page.close()
