"""Scoped ownership of the one browser session a run is allowed to hold."""

import signal

from errors import SessionInterrupted
from log_utils import get_logger, log_error

logger = get_logger("Session")

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class BrowserSession:
    """
    Owns a BrowserHandles for the duration of a ``with`` block.

    Entering installs SIGINT/SIGTERM handlers that release the browser and
    raise SessionInterrupted; leaving releases the browser (if still held) and
    puts the previous handlers back. ``release`` is idempotent, so an
    interrupt followed by the normal exit closes the browser once.
    """

    def __init__(self, handles, close_fn, signals=HANDLED_SIGNALS):
        self.handles = handles
        self._close_fn = close_fn
        self._signals = signals
        self._previous = {}
        self.released = False

    @property
    def page(self):
        return self.handles.page

    def __enter__(self):
        for sig in self._signals:
            self._previous[sig] = signal.signal(sig, self._on_signal)
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.release()
        finally:
            self._restore_handlers()
        return False

    def _on_signal(self, signum, frame):
        name = signal.Signals(signum).name
        logger.warning(f"{name} received - cleaning up browser session...")
        try:
            self.release()
            logger.success("Browser cleanup completed")
        except Exception as exc:
            log_error(logger, "Error during interrupt cleanup", exc)
        raise SessionInterrupted(signum, name)

    def _restore_handlers(self):
        for sig, previous in self._previous.items():
            signal.signal(sig, previous if previous is not None else signal.SIG_DFL)
        self._previous = {}

    def release(self):
        if self.released:
            return False
        # Mark first so a second signal during close does not close twice.
        self.released = True
        self._close_fn(self.handles)
        return True
