"""
Scrape error taxonomy.

Every error raised by the scrape lifecycle carries a ``kind`` so the
classifier in ``error_handler`` can map it to a status code without
guessing from the message.
"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    LAUNCH = "launch"
    TIMEOUT = "timeout"
    SELECTOR_NOT_FOUND = "selector_not_found"
    NAVIGATION = "navigation"
    XPATH = "xpath"
    EXTENSION = "extension"
    INTERNAL = "internal"


class ScrapeError(Exception):
    """Base class for errors raised while handling a scrape request"""
    kind = ErrorKind.INTERNAL


class ValidationError(ScrapeError):
    """Request is missing url/selector or carries an unknown method"""
    kind = ErrorKind.VALIDATION


class BrowserLaunchError(ScrapeError):
    """Browser process did not start within the launch window"""
    kind = ErrorKind.LAUNCH


class NavigationTimeoutError(ScrapeError):
    """Page did not settle within the navigation window"""
    kind = ErrorKind.TIMEOUT


class NavigationError(ScrapeError):
    """Network-level navigation failure (DNS, refused, net::ERR_*)"""
    kind = ErrorKind.NAVIGATION


class SelectorNotFoundError(ScrapeError):
    """CSS selector never appeared within the selector window"""
    kind = ErrorKind.SELECTOR_NOT_FOUND


class XPathEvaluationError(ScrapeError):
    """XPath expression failed to evaluate in the page"""
    kind = ErrorKind.XPATH


class ExtensionProtocolError(ScrapeError):
    """Identity handshake or command round-trip with an extension failed"""
    kind = ErrorKind.EXTENSION


class ExtensionNotFoundError(ExtensionProtocolError):
    """No extension worker answered with the wanted identity"""
