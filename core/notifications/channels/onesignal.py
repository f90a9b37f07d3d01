"""OneSignal push notification channel."""

import logging
from collections.abc import Callable
from datetime import datetime

import httpx
import sentry_sdk

from core.config import NotifierConfig
from core.timezone import utc_now

logger = logging.getLogger(__name__)


class OneSignalProvider:
    """
    Schedules, sends and cancels push notifications for all subscribers.

    Every operation is best-effort: failures are logged and reported to
    Sentry, never raised, so one failed call can't abort a reconciliation.
    """

    def __init__(
        self,
        config: NotifierConfig,
        http: httpx.AsyncClient,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._config = config
        self._http = http
        self._clock = clock

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Key {self._config.onesignal_api_key}",
        }

    def _build_payload(
        self, heading: str, body: str, send_at: datetime | None = None
    ) -> dict:
        payload = {
            "app_id": self._config.onesignal_app_id,
            "included_segments": ["All"],
            "headings": {"en": heading},
            "contents": {"en": body},
        }
        if send_at is not None:
            payload["send_after"] = send_at.isoformat()
        return payload

    async def _create(self, payload: dict) -> str | None:
        """POST a notification. Returns the provider id or None on any failure."""
        try:
            response = await self._http.post(
                self._config.onesignal_api_url,
                json=payload,
                headers=self._get_headers(),
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to send notification: {e}")
            sentry_sdk.capture_exception(e)
            return None

        notification_id = data.get("id") if isinstance(data, dict) else None
        if not notification_id:
            logger.error(f"OneSignal error (HTTP {response.status_code}): {data}")
            return None
        return str(notification_id)

    async def schedule_at(
        self, heading: str, body: str, send_at: datetime
    ) -> str | None:
        """
        Schedule a notification for later delivery.

        Args:
            heading: Notification title
            body: Notification text
            send_at: Aware datetime to deliver at

        Returns:
            Provider notification id, or None if send_at is not in the future
            or the provider rejected the request
        """
        if send_at <= self._clock():
            logger.info(f"Not scheduling {heading!r}: send time {send_at} already passed")
            return None

        notification_id = await self._create(self._build_payload(heading, body, send_at))
        if notification_id:
            logger.info(f"Scheduled notification {notification_id} for {send_at}")
        return notification_id

    async def send_now(self, heading: str, body: str) -> None:
        """Send a notification immediately."""
        notification_id = await self._create(self._build_payload(heading, body))
        if notification_id:
            logger.info(f"Sent notification {notification_id}")

    async def cancel(self, notification_id: str) -> None:
        """Cancel a scheduled notification by id."""
        url = f"{self._config.onesignal_api_url}/{notification_id}"
        try:
            response = await self._http.delete(
                url,
                params={"app_id": self._config.onesignal_app_id},
                headers={"Authorization": f"Key {self._config.onesignal_api_key}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to cancel notification {notification_id}: {e}")
            sentry_sdk.capture_exception(e)
            return

        if response.status_code >= 300:
            logger.warning(
                f"Cancel of notification {notification_id} returned HTTP {response.status_code}"
            )
        else:
            logger.info(f"Cancelled notification {notification_id}")
