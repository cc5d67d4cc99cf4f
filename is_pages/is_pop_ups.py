import random
import time
from contextlib import suppress

import chat_selectors
from log_utils import get_logger
from utils import save_ss, sleep_dbg

logger = get_logger("PopUps")


def dismiss_popups(page, timeout=6, selectors=None):
    """Click away overlay prompts (banners, "Not now", close buttons) that cover the composer.

    Loops until a full pass finds nothing to close or ``timeout`` seconds pass.
    Returns True if at least one popup was closed.
    """
    selectors = selectors or chat_selectors.POPUP_DISMISS_SELECTORS
    t0 = time.monotonic()
    closed_any = False
    while time.monotonic() - t0 < timeout:
        closed_this_round = False
        for sel in selectors:
            with suppress(Exception):
                if page.query_selector(sel):
                    page.click(sel)
                    closed_any = True
                    closed_this_round = True
                    save_ss(page, "popup_closed")
                    logger.warning(f"[POP UP] Closed popup/button using selector: {sel}")
                    # Follow-up popups tend to appear right after one is closed.
                    sleep_dbg(1, 2, label="after_popup_close")
                    break
        if not closed_this_round:
            break
        time.sleep(random.uniform(0.2, 0.4))
    return closed_any
