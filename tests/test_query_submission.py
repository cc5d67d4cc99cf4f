"""Query dispatch tests."""

import pytest

import chat_selectors
from conftest import FakePage
from errors import ElementNotFound
from query_submission import (
    click_search_button,
    submit_query,
    submit_query_workflow,
    type_query,
)


def _interactions(page):
    return [c for c in page.calls if c[0] in ("wait", "click", "type")]


def test_workflow_order():
    page = FakePage()
    submit_query_workflow(page, "What is new?")
    assert _interactions(page) == [
        ("wait", chat_selectors.SEARCH_BUTTON, True, 30),
        ("click", chat_selectors.SEARCH_BUTTON),
        ("wait", chat_selectors.PROMPT_TEXTAREA, True, 30),
        ("click", chat_selectors.PROMPT_TEXTAREA),
        ("type", chat_selectors.PROMPT_TEXTAREA, "What is new?"),
        ("wait", chat_selectors.SUBMIT_BUTTON, True, 10),
        ("click", chat_selectors.SUBMIT_BUTTON),
    ]


def test_missing_search_button_aborts_everything():
    page = FakePage(missing=[chat_selectors.SEARCH_BUTTON])
    with pytest.raises(ElementNotFound) as info:
        submit_query_workflow(page, "q")
    assert info.value.selector == chat_selectors.SEARCH_BUTTON
    assert info.value.timeout == 30
    assert page.actions("click") == []
    assert page.actions("type") == []
    assert page.actions("screenshot")


def test_missing_textarea_stops_before_submit():
    page = FakePage(missing=[chat_selectors.PROMPT_TEXTAREA])
    with pytest.raises(ElementNotFound):
        submit_query_workflow(page, "q")
    assert page.actions("click") == [("click", chat_selectors.SEARCH_BUTTON)]
    assert page.actions("type") == []


def test_missing_submit_button_uses_short_timeout():
    page = FakePage(missing=[chat_selectors.SUBMIT_BUTTON])
    with pytest.raises(ElementNotFound) as info:
        submit_query(page)
    assert info.value.timeout == 10
    assert page.actions("click") == []


def test_click_error_propagates():
    def boom():
        raise RuntimeError("detached")

    page = FakePage(fail_on={("click", chat_selectors.SEARCH_BUTTON): boom})
    with pytest.raises(RuntimeError, match="detached"):
        click_search_button(page)


def test_type_query_types_full_text():
    page = FakePage()
    query = "multi word query with punctuation?!"
    type_query(page, query)
    assert page.actions("type") == [("type", chat_selectors.PROMPT_TEXTAREA, query)]
