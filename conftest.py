"""Root pytest configuration."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from core.config import NotifierConfig

# Load environment variables before tests run
_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)


@pytest.fixture
def notifier_config():
    """Config pointing at fake hosts; never used for real network calls."""
    return NotifierConfig(
        onesignal_app_id="test-app",
        onesignal_api_key="test-key",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        onesignal_api_url="https://onesignal.test/notifications",
    )
