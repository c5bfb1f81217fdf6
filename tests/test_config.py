from pathlib import Path

from domgrab_core.config import Config

_VARS = [
    "DOMGRAB_EXECUTABLE_PATH", "EXECUTABLE_PATH",
    "DOMGRAB_EXTENSION_PATHS", "EXTENSION_PATHS",
    "DOMGRAB_API_PORT", "PORT",
    "DOMGRAB_ENV", "NODE_ENV",
    "DOMGRAB_PROFILE_ROOT", "DOMGRAB_DUPLICATE_TAB_DOMAINS",
    "DOMGRAB_HEADLESS", "DOMGRAB_SELECTOR_TIMEOUT_MS", "DOMGRAB_XPATH_LEGACY_SCALAR",
]


def _clean(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clean(monkeypatch)

    cfg = Config.from_env()

    assert cfg.executable_path == "/usr/lib/chromium/chromium"
    assert cfg.extension_paths == []
    assert cfg.api_port == 5555
    assert cfg.headless is False
    assert cfg.navigation_timeout_ms == 45000
    assert cfg.selector_timeout_ms == 15000
    assert cfg.development is False
    assert cfg.xpath_legacy_scalar is False
    assert cfg.profile_root is None


def test_prefixed_variables(monkeypatch, tmp_path):
    _clean(monkeypatch)
    monkeypatch.setenv("DOMGRAB_EXECUTABLE_PATH", "/opt/chrome/chrome")
    monkeypatch.setenv("DOMGRAB_EXTENSION_PATHS", "/ext/a, /ext/b,,")
    monkeypatch.setenv("DOMGRAB_API_PORT", "8080")
    monkeypatch.setenv("DOMGRAB_HEADLESS", "1")
    monkeypatch.setenv("DOMGRAB_SELECTOR_TIMEOUT_MS", "2500")
    monkeypatch.setenv("DOMGRAB_DUPLICATE_TAB_DOMAINS", "paywalled.example,news.example")
    monkeypatch.setenv("DOMGRAB_PROFILE_ROOT", str(tmp_path / "profiles"))

    cfg = Config.from_env()

    assert cfg.executable_path == "/opt/chrome/chrome"
    assert cfg.extension_paths == ["/ext/a", "/ext/b"]
    assert cfg.api_port == 8080
    assert cfg.headless is True
    assert cfg.selector_timeout_ms == 2500
    assert cfg.duplicate_tab_domains == ["paywalled.example", "news.example"]
    assert cfg.profile_root == tmp_path / "profiles"
    assert cfg.profile_root.is_dir()


def test_unprefixed_fallbacks(monkeypatch):
    _clean(monkeypatch)
    monkeypatch.setenv("EXECUTABLE_PATH", "/usr/bin/chromium-browser")
    monkeypatch.setenv("EXTENSION_PATHS", "/ext/dup")
    monkeypatch.setenv("PORT", "3000")
    monkeypatch.setenv("NODE_ENV", "development")

    cfg = Config.from_env()

    assert cfg.executable_path == "/usr/bin/chromium-browser"
    assert cfg.extension_paths == ["/ext/dup"]
    assert cfg.api_port == 3000
    assert cfg.development is True


def test_prefixed_wins_over_fallback(monkeypatch):
    _clean(monkeypatch)
    monkeypatch.setenv("DOMGRAB_API_PORT", "9000")
    monkeypatch.setenv("PORT", "3000")

    assert Config.from_env().api_port == 9000


def test_profile_root_is_created(tmp_path):
    root = tmp_path / "nested" / "profiles"

    cfg = Config(profile_root=str(root))

    assert isinstance(cfg.profile_root, Path)
    assert root.is_dir()
