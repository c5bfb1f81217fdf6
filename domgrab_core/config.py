#!/usr/bin/env python3
from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


def _env(name: str, *fallbacks: str, default: str = "") -> str:
    for key in (name,) + fallbacks:
        value = os.getenv(key)
        if value is not None and value != "":
            return value
    return default


def _env_bool(name: str, default: str = "false") -> bool:
    return _env(name, default=default).lower() in ["true", "1", "yes"]


def _env_list(name: str, *fallbacks: str) -> List[str]:
    raw = _env(name, *fallbacks)
    return [p.strip() for p in raw.split(",") if p.strip()]


def _profile_root() -> Optional[Path]:
    raw = _env("DOMGRAB_PROFILE_ROOT")
    return Path(raw) if raw else None


@dataclass
class Config:
    """Application configuration"""
    # Browser
    executable_path: str = _env("DOMGRAB_EXECUTABLE_PATH", "EXECUTABLE_PATH", default="/usr/lib/chromium/chromium")
    extension_paths: List[str] = field(default_factory=lambda: _env_list("DOMGRAB_EXTENSION_PATHS", "EXTENSION_PATHS"))
    # Extensions only load in a headed browser
    headless: bool = _env_bool("DOMGRAB_HEADLESS", "false")
    user_agent: str = _env("DOMGRAB_USER_AGENT")
    profile_root: Optional[Path] = field(default_factory=_profile_root)
    profile_prefix: str = _env("DOMGRAB_PROFILE_PREFIX", default="domgrab-profile-")

    # HTTP
    api_host: str = _env("DOMGRAB_API_HOST", default="0.0.0.0")
    api_port: int = int(_env("DOMGRAB_API_PORT", "PORT", default="5555"))

    # Bounded waits (milliseconds)
    launch_timeout_ms: int = int(_env("DOMGRAB_LAUNCH_TIMEOUT_MS", default="60000"))
    navigation_timeout_ms: int = int(_env("DOMGRAB_NAVIGATION_TIMEOUT_MS", default="45000"))
    selector_timeout_ms: int = int(_env("DOMGRAB_SELECTOR_TIMEOUT_MS", default="15000"))
    identify_timeout_ms: int = int(_env("DOMGRAB_IDENTIFY_TIMEOUT_MS", default="1000"))
    command_timeout_ms: int = int(_env("DOMGRAB_COMMAND_TIMEOUT_MS", default="5000"))

    # Settle delays (milliseconds)
    pre_navigation_delay_ms: int = int(_env("DOMGRAB_PRE_NAVIGATION_DELAY_MS", default="3000"))
    settle_delay_ms: int = int(_env("DOMGRAB_SETTLE_DELAY_MS", default="1000"))
    css_delay_ms: int = int(_env("DOMGRAB_CSS_DELAY_MS", default="500"))
    xpath_delay_ms: int = int(_env("DOMGRAB_XPATH_DELAY_MS", default="2000"))

    # Site-conditional tab duplication
    duplicate_tab_domains: List[str] = field(default_factory=lambda: _env_list("DOMGRAB_DUPLICATE_TAB_DOMAINS"))
    extension_identity: str = _env("DOMGRAB_EXTENSION_IDENTITY", default="tab-duplicator")

    # Responses and logging
    development: bool = _env("DOMGRAB_ENV", "NODE_ENV").lower() == "development"
    xpath_legacy_scalar: bool = _env_bool("DOMGRAB_XPATH_LEGACY_SCALAR", "false")
    log_level: str = _env("DOMGRAB_LOG_LEVEL", default="INFO").upper()

    def __post_init__(self):
        if self.profile_root is not None:
            self.profile_root = Path(self.profile_root)
            self.profile_root.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_env(cls) -> 'Config':
        """Rebuild the config from the current environment"""
        return cls(
            executable_path=_env("DOMGRAB_EXECUTABLE_PATH", "EXECUTABLE_PATH", default="/usr/lib/chromium/chromium"),
            extension_paths=_env_list("DOMGRAB_EXTENSION_PATHS", "EXTENSION_PATHS"),
            headless=_env_bool("DOMGRAB_HEADLESS", "false"),
            user_agent=_env("DOMGRAB_USER_AGENT"),
            profile_root=_profile_root(),
            profile_prefix=_env("DOMGRAB_PROFILE_PREFIX", default="domgrab-profile-"),
            api_host=_env("DOMGRAB_API_HOST", default="0.0.0.0"),
            api_port=int(_env("DOMGRAB_API_PORT", "PORT", default="5555")),
            launch_timeout_ms=int(_env("DOMGRAB_LAUNCH_TIMEOUT_MS", default="60000")),
            navigation_timeout_ms=int(_env("DOMGRAB_NAVIGATION_TIMEOUT_MS", default="45000")),
            selector_timeout_ms=int(_env("DOMGRAB_SELECTOR_TIMEOUT_MS", default="15000")),
            identify_timeout_ms=int(_env("DOMGRAB_IDENTIFY_TIMEOUT_MS", default="1000")),
            command_timeout_ms=int(_env("DOMGRAB_COMMAND_TIMEOUT_MS", default="5000")),
            pre_navigation_delay_ms=int(_env("DOMGRAB_PRE_NAVIGATION_DELAY_MS", default="3000")),
            settle_delay_ms=int(_env("DOMGRAB_SETTLE_DELAY_MS", default="1000")),
            css_delay_ms=int(_env("DOMGRAB_CSS_DELAY_MS", default="500")),
            xpath_delay_ms=int(_env("DOMGRAB_XPATH_DELAY_MS", default="2000")),
            duplicate_tab_domains=_env_list("DOMGRAB_DUPLICATE_TAB_DOMAINS"),
            extension_identity=_env("DOMGRAB_EXTENSION_IDENTITY", default="tab-duplicator"),
            development=_env("DOMGRAB_ENV", "NODE_ENV").lower() == "development",
            xpath_legacy_scalar=_env_bool("DOMGRAB_XPATH_LEGACY_SCALAR", "false"),
            log_level=_env("DOMGRAB_LOG_LEVEL", default="INFO").upper(),
        )

config = Config()
