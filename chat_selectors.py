"""
chat_selectors.py -- ChatGPT DOM selectors and timing constants.

ChatGPT changes its frontend often. When automation breaks, update the
selectors here; the dispatch and extraction code reads them from this module.
"""

CHATGPT_URL = "https://chatgpt.com/"

# --- Query dispatch ---
SEARCH_BUTTON = '[data-testid="composer-button-search"]'
PROMPT_TEXTAREA = "#prompt-textarea"
SUBMIT_BUTTON = '[id="composer-submit-button"]'

# --- Response detection ---
STOP_BUTTON = '[data-testid="stop-button"]'
CONVERSATION_TURN = 'article[data-testid^="conversation-turn-"]'
CITATION_PILL = 'span[data-testid="webpage-citation-pill"]'

# Elements whose text makes up a rendered reply, in the order they are walked.
TEXT_ELEMENTS = "p, h1, h2, h3, h4, h5, h6, li, span, code, pre"
# A text element directly inside one of these is already covered by its parent.
BLOCK_PARENT_TAGS = ("p", "h1", "h2", "h3", "h4", "h5", "h6", "li")

# --- Overlays that sit on top of the composer ---
POPUP_DISMISS_SELECTORS = [
    'button[data-testid="close-button"]',
    'button[aria-label="Dismiss Codex app banner"]',
    'button[aria-label="Close"]',
    'button[aria-label="Dismiss"]',
    'button[aria-label="Not now"]',
    'button[aria-label="Maybe later"]',
    # Text match; both page adapters treat a leading // as XPath.
    '//a[contains(normalize-space(.), "Stay logged out")]',
    '//button[contains(normalize-space(.), "Stay logged out")]',
]

# --- Timeouts (seconds) ---
NAVIGATION_TIMEOUT = 60
SEARCH_BUTTON_TIMEOUT = 30
PROMPT_TEXTAREA_TIMEOUT = 30
SUBMIT_BUTTON_TIMEOUT = 10
CONVERSATION_TURN_TIMEOUT = 10
CHAT_UI_TIMEOUT = 12

# --- Completion polling (seconds) ---
CHECK_INTERVAL = 1.0
CONFIRM_GONE_DELAY = 0.5
SETTLE_DELAY = 2.0
