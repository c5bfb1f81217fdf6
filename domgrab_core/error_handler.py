"""
Scrape Error Classifier.

Maps a failed scrape to an HTTP status and a JSON error body. Errors
raised by the core carry a ``kind``; anything else (Playwright errors that
escaped, programming errors) is classified by message patterns.
"""

import logging
import math
import traceback
from typing import Any, Dict, Tuple

from .errors import ErrorKind
from .models import ErrorOutcome, ExtractionMethod, ScrapeResponse

logger = logging.getLogger(__name__)


STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.XPATH: 400,
    ErrorKind.SELECTOR_NOT_FOUND: 404,
    ErrorKind.LAUNCH: 500,
    ErrorKind.EXTENSION: 500,
    ErrorKind.INTERNAL: 500,
    ErrorKind.NAVIGATION: 502,
    ErrorKind.TIMEOUT: 504,
}


# Checked in order, first match wins. Each entry: (kind, any-of patterns, all-of patterns)
ERROR_PATTERNS = [
    (ErrorKind.TIMEOUT, ["timeout", "exceeded"], []),
    (ErrorKind.SELECTOR_NOT_FOUND, ["not found", "failed to find element"], ["selector"]),
    (ErrorKind.NAVIGATION, ["navigation failed", "net::err_"], []),
    (ErrorKind.XPATH, ["xpath evaluation failed"], []),
]


def get_error_kind(error: BaseException) -> ErrorKind:
    """
    Classify an error.

    Returns:
        The error's own ``kind`` when it has one, otherwise the first
        matching entry of ERROR_PATTERNS, otherwise ``ErrorKind.INTERNAL``.
    """
    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind

    if type(error).__name__ == "TimeoutError":
        return ErrorKind.TIMEOUT
    error_str = str(error).lower()
    for candidate, any_of, all_of in ERROR_PATTERNS:
        if any(p in error_str for p in any_of) and all(p in error_str for p in all_of):
            logger.debug(f"Classified {type(error).__name__} as {candidate.value} by message")
            return candidate
    return ErrorKind.INTERNAL


def get_status_code(kind: ErrorKind) -> int:
    return STATUS_CODES.get(kind, 500)


def build_error_outcome(error: BaseException, include_stack: bool = False) -> ErrorOutcome:
    stack = None
    if include_stack:
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return ErrorOutcome(
        message=str(error),
        kind=get_error_kind(error),
        error_type=type(error).__name__,
        stack=stack,
    )


def create_error_response(error: BaseException, include_stack: bool = False) -> Tuple[int, Dict[str, Any]]:
    """
    Create the error response for the HTTP layer.

    Args:
        error: The exception that ended the scrape
        include_stack: Whether the caller asked for verbose diagnostics

    Returns:
        (status code, JSON body)
    """
    outcome = build_error_outcome(error, include_stack)
    title = outcome.message if outcome.kind == ErrorKind.VALIDATION else "Scraping failed"
    return get_status_code(outcome.kind), outcome.to_dict(title)


def format_error_for_logging(error: BaseException, context: str = "") -> str:
    outcome = build_error_outcome(error)
    lines = [
        f"[ERROR] Scraping failed: {outcome.message}",
        f"[ERROR] Kind: {outcome.kind.value} ({outcome.error_type}) -> HTTP {get_status_code(outcome.kind)}",
    ]
    if context:
        lines.insert(0, f"[ERROR] Context: {context}")
    return "\n".join(lines)


def _json_value(value: Any) -> Any:
    # NaN and Infinity have no JSON form
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def create_success_response(method: ExtractionMethod, result: Any, legacy_scalar: bool = False) -> ScrapeResponse:
    """CSS -> raw HTML; XPath -> JSON list (one value unwrapped only for legacy callers)."""
    if method == ExtractionMethod.CSS:
        return ScrapeResponse(status=200, body=result, content_type="text/html; charset=utf-8")
    values = [_json_value(v) for v in (result if isinstance(result, list) else [result])]
    if legacy_scalar and len(values) == 1:
        return ScrapeResponse(status=200, body=values[0])
    return ScrapeResponse(status=200, body=values)
