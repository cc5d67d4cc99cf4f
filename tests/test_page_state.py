"""Popup dismissal and chat UI readiness tests."""

import chat_selectors
from conftest import FakePage
from is_pages.is_chat_ui import is_chat_ui_visible
from is_pages.is_pop_ups import dismiss_popups


class PopupPage(FakePage):
    """Popups disappear once clicked."""

    def click(self, selector):
        super().click(selector)
        self.present.discard(selector)


def test_dismiss_popups_clicks_visible_ones():
    close_btn = chat_selectors.POPUP_DISMISS_SELECTORS[0]
    not_now = 'button[aria-label="Not now"]'
    page = PopupPage(present=[close_btn, not_now])
    assert dismiss_popups(page, timeout=5) is True
    assert page.actions("click") == [("click", close_btn), ("click", not_now)]
    assert not page.present


def test_dismiss_popups_stay_logged_out_link():
    stay_logged_out = '//a[contains(normalize-space(.), "Stay logged out")]'
    assert stay_logged_out in chat_selectors.POPUP_DISMISS_SELECTORS
    page = PopupPage(present=[stay_logged_out])
    assert dismiss_popups(page) is True
    assert page.actions("click") == [("click", stay_logged_out)]


def test_dismiss_popups_nothing_to_close():
    page = FakePage()
    assert dismiss_popups(page) is False
    assert page.actions("click") == []


def test_chat_ui_visible():
    page = FakePage()
    assert is_chat_ui_visible(page) is True
    assert ("wait", chat_selectors.PROMPT_TEXTAREA, True, 12) in page.calls


def test_chat_ui_not_visible_takes_screenshot():
    page = FakePage(missing=[chat_selectors.PROMPT_TEXTAREA])
    assert is_chat_ui_visible(page) is False
    assert page.actions("screenshot")
