import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

import chat_selectors


PROVIDERS = ("browserbase", "local")


@dataclass(frozen=True)
class Settings:
    chatgpt_url: str = chat_selectors.CHATGPT_URL
    browser_provider: str = "browserbase"
    browserbase_api_key: str = ""
    browserbase_project_id: str = ""
    browserbase_api_url: str = "https://api.browserbase.com/v1"
    proxy_city: str = "SAN_FRANCISCO"
    proxy_state: str = "CA"
    proxy_country: str = "US"
    headless: bool = False
    proxy: Optional[str] = None
    check_interval: float = chat_selectors.CHECK_INTERVAL
    max_wait: Optional[float] = None
    output_dir: str = "output"
    human_delays: bool = True
    keep_open_secs: float = 5.0
    log_level: str = "DEBUG"
    screenshot_dir: str = "screenshots"


def _env_str(env, key, default=""):
    return (env.get(key, "") or "").strip() or default


def _env_bool(env, key, default):
    raw = _env_str(env, key)
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def _env_float(env, key, default):
    raw = _env_str(env, key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


def load_settings(env=None, dotenv_path=".env"):
    """Build Settings from ``env`` (default: os.environ after loading .env)."""
    if env is None:
        load_dotenv(dotenv_path, override=False)
        env = os.environ

    provider = _env_str(env, "BROWSER_PROVIDER", "browserbase").lower()
    if provider not in PROVIDERS:
        raise ValueError(f"BROWSER_PROVIDER must be one of {PROVIDERS}, got {provider!r}")

    check_interval = _env_float(env, "CHECK_INTERVAL", chat_selectors.CHECK_INTERVAL)
    if check_interval <= 0:
        raise ValueError("CHECK_INTERVAL must be greater than 0")
    max_wait = _env_float(env, "RESPONSE_MAX_WAIT", None)
    if max_wait is not None and max_wait <= 0:
        max_wait = None

    return Settings(
        chatgpt_url=_env_str(env, "CHATGPT_URL", chat_selectors.CHATGPT_URL),
        browser_provider=provider,
        browserbase_api_key=_env_str(env, "BROWSERBASE_API_KEY"),
        browserbase_project_id=_env_str(env, "BROWSERBASE_PROJECT_ID"),
        browserbase_api_url=_env_str(
            env, "BROWSERBASE_API_URL", "https://api.browserbase.com/v1"
        ).rstrip("/"),
        proxy_city=_env_str(env, "BROWSERBASE_PROXY_CITY", "SAN_FRANCISCO"),
        proxy_state=_env_str(env, "BROWSERBASE_PROXY_STATE", "CA"),
        proxy_country=_env_str(env, "BROWSERBASE_PROXY_COUNTRY", "US"),
        headless=_env_bool(env, "HEADLESS", False),
        proxy=_env_str(env, "CHATGPT_PROXY") or None,
        check_interval=check_interval,
        max_wait=max_wait,
        output_dir=_env_str(env, "OUTPUT_DIR", "output"),
        human_delays=_env_bool(env, "HUMAN_DELAYS", True),
        keep_open_secs=max(0.0, _env_float(env, "KEEP_OPEN_SECS", 5.0)),
        log_level=_env_str(env, "LOG_LEVEL", "DEBUG").upper(),
        screenshot_dir=_env_str(env, "SCREENSHOT_DIR", "screenshots"),
    )
