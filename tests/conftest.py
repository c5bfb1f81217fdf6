"""Pytest fixtures shared by the domgrab tests"""

import pytest

from domgrab_core.config import Config
from fakes import FakeContext, FakePage, FakePlaywright, FakePlaywrightFactory


@pytest.fixture
def test_config(tmp_path):
    """Config with no delays and profiles under tmp_path"""
    return Config(
        executable_path="",
        extension_paths=[],
        headless=True,
        profile_root=tmp_path / "profiles",
        pre_navigation_delay_ms=0,
        settle_delay_ms=0,
        css_delay_ms=0,
        xpath_delay_ms=0,
        navigation_timeout_ms=1000,
        selector_timeout_ms=500,
        identify_timeout_ms=200,
        command_timeout_ms=200,
        duplicate_tab_domains=[],
        development=False,
        xpath_legacy_scalar=False,
    )


@pytest.fixture
def fake_page():
    return FakePage(elements={"h1": "<h1>Example Domain</h1>"})


@pytest.fixture
def fake_context(fake_page):
    return FakeContext(page=fake_page)


@pytest.fixture
def fake_playwright(monkeypatch, fake_context):
    playwright = FakePlaywright(context=fake_context)
    factory = FakePlaywrightFactory(playwright)
    monkeypatch.setattr("domgrab_core.browser_setup.async_playwright", factory)
    return factory
