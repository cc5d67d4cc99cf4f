import random
import re
import time
from contextlib import suppress
from pathlib import Path

from log_utils import get_logger

logger = get_logger("Utils")

# Human-like jitter between UI actions. Turned off with HUMAN_DELAYS=0.
HUMAN_DELAYS = True
SCREENSHOT_DIR = Path("screenshots")

_unsafe_filename_re = re.compile(r"[^A-Za-z0-9]")


def configure(human_delays=True, screenshot_dir="screenshots"):
    global HUMAN_DELAYS, SCREENSHOT_DIR
    HUMAN_DELAYS = bool(human_delays)
    SCREENSHOT_DIR = Path(screenshot_dir)


def sleep_dbg(a=0.5, b=1.5, label=None):
    """Sleep a random interval in [a, b] seconds and return it."""
    if not HUMAN_DELAYS:
        return 0.0
    secs = random.uniform(a, b)
    if label:
        logger.debug(f"Adding human-like delay ({label}): {int(secs * 1000)}ms")
    else:
        logger.debug(f"Adding human-like delay: {int(secs * 1000)}ms")
    time.sleep(secs)
    return secs


def typing_delay(a=0.03, b=0.08):
    # Per-keystroke pause handed to PageHandle.type().
    if not HUMAN_DELAYS:
        return 0.0
    return random.uniform(a, b)


def save_ss(page, name="screenshot"):
    """Best-effort screenshot into SCREENSHOT_DIR; returns the path or None."""
    path = SCREENSHOT_DIR / f"{_step_label_to_filename(name)}.png"
    with suppress(Exception):
        path.parent.mkdir(parents=True, exist_ok=True)
        page.screenshot(str(path))
        logger.debug(f"[SHOT] {path}")
        return str(path)
    logger.debug(f"Could not save screenshot {path}")
    return None


def _step_label_to_filename(label):
    cleaned = re.sub(r"[^a-zA-Z0-9_-]+", "_", str(label or "")).strip("_")
    return cleaned or "screenshot"


def sanitize_query(query, max_len=50):
    """Filesystem-safe token: first ``max_len`` chars, non-alphanumerics to ``_``, lowercased."""
    return _unsafe_filename_re.sub("_", query[:max_len]).lower()
