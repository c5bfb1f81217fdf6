"""
domgrab_core package: the scrape-request lifecycle

One request = one browser: a fresh profile directory and browser process
are provisioned, the page is loaded and an element is extracted by CSS
selector or XPath, then everything is torn down again.

Usage:
    from domgrab_core import ScrapeExecutor, run_scrape

    response = run_scrape(ScrapeExecutor(), {"url": "https://example.com", "selector": "h1"})
"""
from .config import Config, config
from .errors import (
    ErrorKind,
    ScrapeError,
    ValidationError,
    BrowserLaunchError,
    NavigationTimeoutError,
    NavigationError,
    SelectorNotFoundError,
    XPathEvaluationError,
    ExtensionProtocolError,
    ExtensionNotFoundError,
)
from .models import ExtractionMethod, ScrapeRequest, ScrapeResponse, ErrorOutcome
from .browser_setup import BrowserSession, create_session, destroy_session
from .cleanup import CleanupCoordinator
from .executor import ScrapeExecutor, run_scrape

__all__ = [
    "Config",
    "config",
    "ErrorKind",
    "ScrapeError",
    "ValidationError",
    "BrowserLaunchError",
    "NavigationTimeoutError",
    "NavigationError",
    "SelectorNotFoundError",
    "XPathEvaluationError",
    "ExtensionProtocolError",
    "ExtensionNotFoundError",
    "ExtractionMethod",
    "ScrapeRequest",
    "ScrapeResponse",
    "ErrorOutcome",
    "BrowserSession",
    "create_session",
    "destroy_session",
    "CleanupCoordinator",
    "ScrapeExecutor",
    "run_scrape",
]
