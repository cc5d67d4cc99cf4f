"""Error types raised by the scraper pipeline."""


# Text returned instead of raising when a turn has no recoverable content.
EMPTY_RESPONSE_TEXT = "Error: Empty response extracted"
MISSING_ARTICLE_TEXT = "Error: Could not find assistant response article"


class ScraperError(RuntimeError):
    pass


class ElementNotFound(ScraperError):
    """A required selector did not show up within its timeout."""

    def __init__(self, selector, timeout):
        self.selector = selector
        self.timeout = timeout
        super().__init__(f"Element not found after {timeout}s: {selector}")


class SessionSetupFailure(ScraperError):
    pass


class PersistenceFailure(ScraperError):
    pass


class CompletionTimeout(ScraperError):
    def __init__(self, waited, max_wait):
        self.waited = waited
        self.max_wait = max_wait
        super().__init__(
            f"Response still generating after {waited:.1f}s (max_wait={max_wait}s)"
        )


class SessionInterrupted(ScraperError):
    """Raised out of a signal handler once the browser session is released."""

    def __init__(self, signum, signame=None):
        self.signum = signum
        self.signame = signame or str(signum)
        super().__init__(f"{self.signame} received")
