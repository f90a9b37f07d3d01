"""Tests for the OneSignal push channel."""

import json
from datetime import datetime

import httpx
import pytest

from core.notifications.channels.onesignal import OneSignalProvider

NOW = datetime.fromisoformat("2025-06-01T10:00:00+00:00")


def _provider(notifier_config, handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OneSignalProvider(notifier_config, http, clock=lambda: NOW)


class TestScheduleAt:
    @pytest.mark.asyncio
    async def test_posts_scheduled_notification(self, notifier_config):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"id": "abc-123"})

        provider = _provider(notifier_config, handler)
        send_at = datetime.fromisoformat("2025-06-01T16:30:00+00:00")

        notification_id = await provider.schedule_at("heading", "body", send_at)

        assert notification_id == "abc-123"
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://onesignal.test/notifications"
        assert request.headers["Authorization"] == "Key test-key"
        assert json.loads(request.content) == {
            "app_id": "test-app",
            "included_segments": ["All"],
            "headings": {"en": "heading"},
            "contents": {"en": "body"},
            "send_after": "2025-06-01T16:30:00+00:00",
        }

    @pytest.mark.asyncio
    async def test_past_send_time_is_rejected_without_request(self, notifier_config):
        def handler(request):
            raise AssertionError("should not call OneSignal")

        provider = _provider(notifier_config, handler)

        assert await provider.schedule_at("h", "b", NOW) is None

    @pytest.mark.asyncio
    async def test_response_without_id_means_not_scheduled(self, notifier_config, caplog):
        def handler(request):
            return httpx.Response(400, json={"errors": ["Invalid app_id"]})

        provider = _provider(notifier_config, handler)
        send_at = datetime.fromisoformat("2025-06-02T08:00:00+00:00")

        assert await provider.schedule_at("h", "b", send_at) is None
        assert any("OneSignal error" in r.message for r in caplog.records)

    @pytest.mark.asyncio
    async def test_transport_error_returns_none(self, notifier_config):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        provider = _provider(notifier_config, handler)
        send_at = datetime.fromisoformat("2025-06-02T08:00:00+00:00")

        assert await provider.schedule_at("h", "b", send_at) is None

    @pytest.mark.asyncio
    async def test_malformed_json_returns_none(self, notifier_config):
        def handler(request):
            return httpx.Response(200, content=b"<html>gateway error</html>")

        provider = _provider(notifier_config, handler)
        send_at = datetime.fromisoformat("2025-06-02T08:00:00+00:00")

        assert await provider.schedule_at("h", "b", send_at) is None


class TestSendNow:
    @pytest.mark.asyncio
    async def test_posts_without_send_after(self, notifier_config):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"id": "now-1"})

        provider = _provider(notifier_config, handler)

        await provider.send_now("כל הכבוד 🥳", "סיימתם laundry!")

        assert "send_after" not in bodies[0]
        assert bodies[0]["contents"] == {"en": "סיימתם laundry!"}

    @pytest.mark.asyncio
    async def test_failure_is_not_raised(self, notifier_config):
        def handler(request):
            raise httpx.ReadTimeout("timed out")

        provider = _provider(notifier_config, handler)

        await provider.send_now("h", "b")


class TestCancel:
    @pytest.mark.asyncio
    async def test_deletes_by_id_with_app_id(self, notifier_config):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"success": True})

        provider = _provider(notifier_config, handler)

        await provider.cancel("abc-123")

        request = requests[0]
        assert request.method == "DELETE"
        assert request.url.path == "/notifications/abc-123"
        assert request.url.params["app_id"] == "test-app"
        assert request.headers["Authorization"] == "Key test-key"

    @pytest.mark.asyncio
    async def test_http_error_status_is_logged_not_raised(self, notifier_config, caplog):
        def handler(request):
            return httpx.Response(404, json={"errors": ["not found"]})

        provider = _provider(notifier_config, handler)

        await provider.cancel("gone")

        assert any("gone" in r.message for r in caplog.records)

    @pytest.mark.asyncio
    async def test_transport_error_is_not_raised(self, notifier_config):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        provider = _provider(notifier_config, handler)

        await provider.cancel("abc-123")
