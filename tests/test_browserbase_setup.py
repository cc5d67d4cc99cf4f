"""Browserbase session creation tests (HTTP mocked, no browser)."""

from unittest.mock import MagicMock

import pytest
import requests

import browserbase_setup
from config import Settings
from errors import SessionSetupFailure


def _settings(**overrides):
    values = dict(browserbase_api_key="bb-key", browserbase_project_id="proj-1")
    values.update(overrides)
    return Settings(**values)


def _response(status=200, payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload if payload is not None else {}
    resp.text = str(payload)
    return resp


@pytest.mark.parametrize(
    "overrides, missing",
    [
        ({"browserbase_api_key": ""}, "BROWSERBASE_API_KEY"),
        ({"browserbase_project_id": ""}, "BROWSERBASE_PROJECT_ID"),
    ],
)
def test_missing_credentials(monkeypatch, overrides, missing):
    request = MagicMock()
    monkeypatch.setattr(browserbase_setup.requests, "request", request)
    with pytest.raises(SessionSetupFailure, match=missing):
        browserbase_setup.create_session(_settings(**overrides))
    request.assert_not_called()


def test_create_session_posts_config(monkeypatch):
    request = MagicMock(
        return_value=_response(payload={"id": "sess-1", "connectUrl": "wss://connect.example"})
    )
    monkeypatch.setattr(browserbase_setup.requests, "request", request)

    data = browserbase_setup.create_session(_settings())

    assert data["id"] == "sess-1"
    method, url = request.call_args.args
    kwargs = request.call_args.kwargs
    assert (method, url) == ("POST", "https://api.browserbase.com/v1/sessions")
    assert kwargs["headers"]["X-BB-API-Key"] == "bb-key"
    assert kwargs["json"]["projectId"] == "proj-1"
    assert kwargs["json"]["proxies"][0]["geolocation"] == {
        "city": "SAN_FRANCISCO",
        "state": "CA",
        "country": "US",
    }
    assert kwargs["timeout"] == 30


def test_http_error(monkeypatch):
    monkeypatch.setattr(
        browserbase_setup.requests,
        "request",
        MagicMock(return_value=_response(status=401, payload={"error": "unauthorized"})),
    )
    with pytest.raises(SessionSetupFailure, match="HTTP 401"):
        browserbase_setup.create_session(_settings())


def test_connection_refused(monkeypatch):
    monkeypatch.setattr(
        browserbase_setup.requests,
        "request",
        MagicMock(side_effect=requests.exceptions.ConnectionError("refused")),
    )
    with pytest.raises(SessionSetupFailure, match="request failed"):
        browserbase_setup.create_session(_settings())


def test_payload_without_connect_url(monkeypatch):
    monkeypatch.setattr(
        browserbase_setup.requests,
        "request",
        MagicMock(return_value=_response(payload={"id": "sess-1"})),
    )
    with pytest.raises(SessionSetupFailure, match="connectUrl"):
        browserbase_setup.create_session(_settings())


def test_setup_browser_does_not_start_playwright_without_session(monkeypatch):
    started = MagicMock()
    monkeypatch.setattr(browserbase_setup, "sync_playwright", started)
    with pytest.raises(SessionSetupFailure):
        browserbase_setup.setup_browser(_settings(browserbase_api_key=""))
    started.assert_not_called()


def test_setup_browser_connects_over_cdp(monkeypatch):
    monkeypatch.setattr(
        browserbase_setup.requests,
        "request",
        MagicMock(return_value=_response(payload={"id": "sess-9", "connectUrl": "wss://cdp"})),
    )
    playwright = MagicMock()
    monkeypatch.setattr(
        browserbase_setup, "sync_playwright", MagicMock(return_value=MagicMock(start=lambda: playwright))
    )
    browser = playwright.chromium.connect_over_cdp.return_value
    context = MagicMock()
    pw_page = MagicMock()
    context.pages = [pw_page]
    browser.contexts = [context]

    handles = browserbase_setup.setup_browser(_settings())

    playwright.chromium.connect_over_cdp.assert_called_once_with("wss://cdp")
    pw_page.add_init_script.assert_called_once_with(browserbase_setup.WEBRTC_BLOCK_SCRIPT)
    assert handles.session_id == "sess-9"
    assert handles.replay_url == "https://browserbase.com/sessions/sess-9"
    assert handles.page.page is pw_page

    handles.close()
    browser.close.assert_called_once()
    playwright.stop.assert_called_once()
