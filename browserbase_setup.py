"""Remote browser setup: a Browserbase session driven over CDP with Playwright."""

from __future__ import annotations

import requests
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from browser_setup import BrowserHandles
from errors import SessionSetupFailure
from log_utils import get_logger, log_error
from page_handle import PlaywrightPage

logger = get_logger("BrowserbaseSetup")

REPLAY_URL = "https://browserbase.com/sessions/{session_id}"

# Stops WebRTC from leaking the real IP behind the proxy.
WEBRTC_BLOCK_SCRIPT = """
(() => {
  const OriginalRTCPeerConnection = window.RTCPeerConnection;
  if (!OriginalRTCPeerConnection) return;
  window.RTCPeerConnection = function (...args) {
    const pc = new OriginalRTCPeerConnection(...args);
    pc.createDataChannel = () => { throw new Error('Blocked'); };
    return pc;
  };
})();
"""


def _headers(api_key):
    return {"X-BB-API-Key": api_key, "Content-Type": "application/json"}


def _request(method, url, **kwargs):
    timeout = kwargs.setdefault("timeout", 30)
    try:
        return requests.request(method, url, **kwargs)
    except requests.exceptions.Timeout as exc:
        raise SessionSetupFailure(f"Browserbase request timed out after {timeout}s: {url}") from exc
    except requests.exceptions.RequestException as exc:
        raise SessionSetupFailure(f"Browserbase request failed: {url}") from exc


def session_config(settings):
    return {
        "projectId": settings.browserbase_project_id,
        "browserSettings": {"viewport": {"width": 1920, "height": 1080}},
        "proxies": [
            {
                "type": "browserbase",
                "geolocation": {
                    "city": settings.proxy_city,
                    "state": settings.proxy_state,
                    "country": settings.proxy_country,
                },
            }
        ],
    }


def create_session(settings):
    """Create a Browserbase session and return its JSON payload (id, connectUrl, ...)."""
    if not settings.browserbase_api_key:
        raise SessionSetupFailure("BROWSERBASE_API_KEY environment variable is not set")
    if not settings.browserbase_project_id:
        raise SessionSetupFailure("BROWSERBASE_PROJECT_ID environment variable is not set")

    logger.info("Creating Browserbase session...")
    logger.debug(
        f"Session config: residential proxy in {settings.proxy_city}, "
        f"{settings.proxy_state}, {settings.proxy_country}"
    )
    resp = _request(
        "POST",
        f"{settings.browserbase_api_url}/sessions",
        headers=_headers(settings.browserbase_api_key),
        json=session_config(settings),
    )
    if resp.status_code >= 400:
        raise SessionSetupFailure(
            f"Browserbase session create failed: HTTP {resp.status_code} {resp.text[:200]}"
        )
    try:
        data = resp.json()
    except ValueError as exc:
        raise SessionSetupFailure("Browserbase returned a non-JSON session payload") from exc
    if not data.get("id") or not data.get("connectUrl"):
        raise SessionSetupFailure(f"Browserbase session payload missing id/connectUrl: {data}")
    return data


def setup_browser(settings) -> BrowserHandles:
    logger.info("Initializing Browserbase remote browser setup...")
    try:
        session = create_session(settings)
    except SessionSetupFailure as exc:
        log_error(logger, "Failed to setup Browserbase browser", exc)
        raise

    session_id = session["id"]
    replay_url = REPLAY_URL.format(session_id=session_id)
    logger.success(f"Browserbase session created: {session_id}")
    logger.info(f"Session replay will be available at: {replay_url}")

    playwright = sync_playwright().start()
    try:
        logger.info("Connecting to remote browser...")
        browser = playwright.chromium.connect_over_cdp(session["connectUrl"])
        context = browser.contexts[0] if browser.contexts else browser.new_context()
        page = context.pages[0] if context.pages else context.new_page()
        page.add_init_script(WEBRTC_BLOCK_SCRIPT)
    except PlaywrightError as exc:
        playwright.stop()
        log_error(logger, "Failed to connect to Browserbase browser", exc)
        raise SessionSetupFailure(f"CDP connection to Browserbase failed: {exc}") from exc

    logger.success("Remote browser configured with WebRTC blocking")

    def close():
        try:
            browser.close()
        finally:
            playwright.stop()

    return BrowserHandles(
        page=PlaywrightPage(page),
        close=close,
        session_id=session_id,
        replay_url=replay_url,
    )
