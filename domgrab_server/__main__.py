"""Main entry point for domgrab server"""

import argparse
import asyncio
import logging
import os
import sys

from domgrab_core.browser_setup import browser_version, create_session, destroy_session
from domgrab_core.config import config
from domgrab_core.logger import DebugLog
from domgrab_server import fault_boundary

logger = logging.getLogger(__name__)


def log_startup(port: int) -> None:
    logger.info(f"[SERVER] Service started. Running on port {port}")
    logger.info(f"[CHROMIUM] Using executable path: {config.executable_path}")
    if config.executable_path and not os.path.exists(config.executable_path):
        logger.warning(f"[WARNING] Chromium executable not found at specified path: {config.executable_path}")
    if config.extension_paths:
        logger.info(f"[CHROMIUM] Attempting to load extensions from: {','.join(config.extension_paths)}")
    else:
        logger.info("[CHROMIUM] No extensions configured to load.")
    if config.duplicate_tab_domains:
        logger.info(f"[CHROMIUM] Tab duplication enabled for: {', '.join(config.duplicate_tab_domains)}")


async def check_browser() -> str:
    """Launch one browser with the service's settings, report its version, tear it down"""
    session = await create_session(config, log=DebugLog(True))
    try:
        return await browser_version(session)
    finally:
        await destroy_session(session, DebugLog(True))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="domgrab", description="Per-request browser scraping service")
    parser.add_argument("--host", default=config.api_host, help="Interface to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=config.api_port, help="Port to listen on (default: %(default)s)")
    parser.add_argument("--check-browser", action="store_true",
                        help="Launch the configured browser once, print its version and exit")
    args = parser.parse_args(argv)

    if args.check_browser:
        try:
            version = asyncio.run(check_browser())
        except Exception as e:
            logger.error(f"FAILURE: {e}", exc_info=True)
            return 1
        logger.info(f"Success: {version}")
        return 0

    from domgrab_server.app import app

    fault_boundary.install()
    log_startup(args.port)
    app.run(host=args.host, port=args.port, debug=False, use_reloader=False, threaded=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
