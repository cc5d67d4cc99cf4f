import chat_selectors
from errors import ElementNotFound
from log_utils import get_logger
from utils import save_ss
from .is_pop_ups import dismiss_popups

logger = get_logger("ChatUI")


def is_chat_ui_visible(page, timeout=chat_selectors.CHAT_UI_TIMEOUT):
    """True once the prompt composer is visible, after clearing any popups."""
    dismiss_popups(page)
    try:
        page.wait_for_selector(chat_selectors.PROMPT_TEXTAREA, visible=True, timeout=timeout)
    except ElementNotFound:
        save_ss(page, "chat_ui_not_visible")
        return False
    logger.debug(f"[CHAT-UI] Textarea found ({chat_selectors.PROMPT_TEXTAREA})")
    return True
