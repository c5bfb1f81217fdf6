import json

import pytest

from domgrab_core.executor import ScrapeExecutor
from domgrab_core.models import MISSING_FIELDS_MESSAGE
from domgrab_server.app import create_app
from fakes import profile_dirs


@pytest.fixture
def client(test_config, fake_playwright):
    app = create_app(ScrapeExecutor(test_config))
    app.config['TESTING'] = True
    return app.test_client()


def test_css_returns_raw_html(client, test_config):
    resp = client.post('/scrape', json={"url": "https://example.com", "selector": "h1"})

    assert resp.status_code == 200
    assert resp.content_type == "text/html; charset=utf-8"
    assert resp.get_data(as_text=True) == "<h1>Example Domain</h1>"
    assert profile_dirs(test_config) == []


def test_xpath_returns_json_array(client, fake_page):
    fake_page.xpath_outcome = {"kind": "nodes", "value": ["a", "b", "c"]}

    resp = client.post('/scrape', json={"url": "https://example.com", "selector": "//li/text()", "method": "xpath"})

    assert resp.status_code == 200
    assert resp.is_json
    assert resp.get_json() == ["a", "b", "c"]


def test_xpath_scalar_is_array(client, fake_page):
    fake_page.xpath_outcome = {"kind": "scalar", "value": 3}

    resp = client.post('/scrape', json={"url": "https://example.com", "selector": "count(//li)", "method": "xpath"})

    assert resp.get_json() == [3]


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_xpath_number_is_null(client, fake_page, value):
    fake_page.xpath_outcome = {"kind": "scalar", "value": value}

    resp = client.post('/scrape', json={"url": "https://example.com", "selector": "number(//h1)", "method": "xpath"})

    def reject(constant):
        raise ValueError(f"non-JSON constant {constant}")

    assert resp.status_code == 200
    assert json.loads(resp.get_data(as_text=True), parse_constant=reject) == [None]


def test_missing_fields(client, fake_playwright):
    resp = client.post('/scrape', json={"url": "https://example.com"})

    assert resp.status_code == 400
    assert resp.get_json() == {
        "error": MISSING_FIELDS_MESSAGE,
        "details": MISSING_FIELDS_MESSAGE,
        "type": "validation",
    }
    assert fake_playwright.start_calls == 0


def test_non_json_body(client, fake_playwright):
    resp = client.post('/scrape', data="url=https://example.com&selector=h1", content_type="text/plain")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == MISSING_FIELDS_MESSAGE
    assert fake_playwright.start_calls == 0


def test_selector_miss_body(client):
    resp = client.post('/scrape', json={"url": "https://example.com", "selector": "h2"})

    assert resp.status_code == 404
    body = resp.get_json()
    assert list(body) == ["error", "details", "type"]
    assert body["error"] == "Scraping failed"
    assert 'CSS selector "h2" not found' in body["details"]


def test_debug_adds_stack(client):
    resp = client.post('/scrape', json={"url": "https://example.com", "selector": "h2", "debug": "true"})

    assert resp.status_code == 404
    assert "stack" in resp.get_json()


def test_get_is_not_allowed(client):
    assert client.get('/scrape').status_code == 405


def test_cors_headers(client):
    resp = client.post(
        '/scrape',
        json={"url": "https://example.com", "selector": "h1"},
        headers={"Origin": "https://dashboard.example"},
    )

    assert resp.headers.get("Access-Control-Allow-Origin") in ("*", "https://dashboard.example")
