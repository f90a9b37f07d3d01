"""
Centralized configuration for the task notifications service.

Settings are read from the environment once, at process start, into a
NotifierConfig that is passed to every client that needs it.
"""

import os
from dataclasses import dataclass


DEFAULT_ONESIGNAL_API_URL = "https://api.onesignal.com/notifications"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("true", "1", "yes")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class NotifierConfig:
    """Everything the reconciler and its clients need to talk to the outside world."""

    onesignal_app_id: str
    onesignal_api_key: str
    supabase_url: str
    supabase_service_key: str
    onesignal_api_url: str = DEFAULT_ONESIGNAL_API_URL
    utc_offset_hours: float = 2
    timezone_name: str | None = None
    http_timeout: float = 10.0
    reconcile_concurrently: bool = True
    sentry_dsn: str | None = None
    log_level: str = "INFO"

    @property
    def rest_url(self) -> str:
        """Base URL of the Supabase PostgREST API."""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"


def load_config() -> NotifierConfig:
    """Build a NotifierConfig from environment variables."""
    return NotifierConfig(
        onesignal_app_id=os.environ.get("ONESIGNAL_APP_ID", ""),
        onesignal_api_key=os.environ.get("ONESIGNAL_REST_API_KEY", ""),
        onesignal_api_url=os.environ.get(
            "ONESIGNAL_API_URL", DEFAULT_ONESIGNAL_API_URL
        ).rstrip("/"),
        supabase_url=os.environ.get("SUPABASE_URL", ""),
        supabase_service_key=os.environ.get("SUPABASE_SERVICE_ROLE_KEY", ""),
        utc_offset_hours=_env_float("REMINDER_UTC_OFFSET_HOURS", 2),
        timezone_name=os.environ.get("REMINDER_TIMEZONE") or None,
        http_timeout=_env_float("HTTP_TIMEOUT_SECONDS", 10.0),
        reconcile_concurrently=_env_bool("RECONCILE_CONCURRENTLY", True),
        sentry_dsn=os.environ.get("SENTRY_DSN") or None,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )


# Required environment variables
# Format: (name, description)
REQUIRED_ENV_VARS = [
    ("ONESIGNAL_APP_ID", "OneSignal application ID"),
    ("ONESIGNAL_REST_API_KEY", "OneSignal REST API key"),
    ("SUPABASE_URL", "Supabase project URL"),
    ("SUPABASE_SERVICE_ROLE_KEY", "Supabase service role key"),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, missing): Tuple of success flag and list of warning messages
    """
    missing = []
    for name, description in REQUIRED_ENV_VARS:
        if not os.environ.get(name):
            missing.append(f"  ⚠ {name}: Not set ({description})")
    return not missing, missing
