"""Fixtures: fake page handle, fake clock, quiet delays."""

import sys

import pytest
from loguru import logger

import chat_selectors
import utils
from errors import ElementNotFound


class FakePage:
    """In-memory PageHandle that records every call."""

    def __init__(self, present=(), missing=(), stop_button=(), snapshot=None, fail_on=None):
        self.present = set(present)
        self.missing = set(missing)
        self.stop_button = list(stop_button)
        self.snapshot = snapshot
        self.fail_on = fail_on or {}
        self.calls = []

    def _maybe_fail(self, action, selector):
        hook = self.fail_on.get((action, selector))
        if hook is not None:
            hook()

    def goto(self, url, timeout=60):
        self.calls.append(("goto", url))

    def wait_for_selector(self, selector, visible=True, timeout=30):
        self.calls.append(("wait", selector, visible, timeout))
        if selector in self.missing:
            raise ElementNotFound(selector, timeout)

    def click(self, selector):
        self.calls.append(("click", selector))
        self._maybe_fail("click", selector)

    def type(self, selector, text, delay=0.0):
        self.calls.append(("type", selector, text))

    def query_selector(self, selector):
        self.calls.append(("query", selector))
        if selector == chat_selectors.STOP_BUTTON and self.stop_button:
            return self.stop_button.pop(0)
        return selector in self.present

    def evaluate(self, script):
        self.calls.append(("evaluate",))
        return self.snapshot

    def screenshot(self, path):
        self.calls.append(("screenshot", path))

    def actions(self, kind):
        return [c for c in self.calls if c[0] == kind]


class FakeClock:
    """Callable clock whose ``sleep`` advances time and records durations."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def snapshot(blocks=(), citations=(), fallback="", found=True):
    return {
        "found": found,
        "blocks": [
            {"kind": kind, "text": text, "nested": nested} for kind, text, nested in blocks
        ],
        "citations": list(citations),
        "fallback": fallback,
    }


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def quiet_runtime(tmp_path):
    """No human-like jitter; screenshots land in the test's tmp dir."""
    utils.configure(human_delays=False, screenshot_dir=tmp_path / "screenshots")
    yield
    utils.configure()
    logger.remove()
    logger.add(sys.stderr)
