#!/usr/bin/env python3
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ErrorKind, ValidationError

MISSING_FIELDS_MESSAGE = "Missing required fields: url and selector"


class ExtractionMethod(str, Enum):
    CSS = "css"
    XPATH = "xpath"


def is_truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ["true", "1", "yes"]
    return bool(value)


@dataclass(frozen=True)
class ScrapeRequest:
    """Immutable scrape input, validated before any browser work starts"""
    url: str
    selector: str
    method: ExtractionMethod = ExtractionMethod.CSS
    debug: bool = False

    @classmethod
    def from_payload(cls, data: Any) -> 'ScrapeRequest':
        if not isinstance(data, dict):
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        url = data.get("url")
        selector = data.get("selector")
        if not isinstance(url, str) or not url.strip() or not isinstance(selector, str) or not selector.strip():
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        raw_method = data.get("method") or ExtractionMethod.CSS.value
        try:
            method = ExtractionMethod(str(raw_method).strip().lower())
        except ValueError:
            raise ValidationError(f"Unsupported method: {raw_method!r} (expected 'css' or 'xpath')")
        return cls(
            url=url.strip(),
            selector=selector,
            method=method,
            debug=is_truthy(data.get("debug", False)),
        )


@dataclass
class ErrorOutcome:
    message: str
    kind: ErrorKind
    error_type: str
    stack: Optional[str] = None

    def to_dict(self, title: str = "Scraping failed") -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "error": title,
            "details": self.message,
            "type": self.kind.value,
        }
        if self.stack:
            body["stack"] = self.stack
        return body


@dataclass
class ScrapeResponse:
    """What the HTTP layer sends back: status, payload and content type"""
    status: int
    body: Any
    content_type: str = "application/json"

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
