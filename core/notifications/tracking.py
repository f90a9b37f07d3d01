"""
Tracking of scheduled notification IDs in the `task_notifications` table.

Each row maps a scheduling key ("<date>:<tag>") to the provider's
notification id. It is the only way to cancel a notification later.
"""

import logging
from dataclasses import dataclass
from datetime import date

import sentry_sdk

from core.constants import KEY_SEPARATOR, TRACKING_TABLE
from core.enums import ReminderTag
from core.supabase import SupabaseClient, SupabaseError

logger = logging.getLogger(__name__)


@dataclass
class TrackingRecord:
    """One row of the tracking table."""

    notification_id: str
    key: str


def make_key(due_date: date, tag: ReminderTag) -> str:
    """Build the scheduling key for a (date, tag) pair."""
    return f"{due_date.isoformat()}{KEY_SEPARATOR}{tag.value}"


def parse_key(key: str) -> tuple[date, ReminderTag]:
    """
    Split a scheduling key back into (date, tag).

    Raises:
        ValueError: If the key is not "<YYYY-MM-DD>:<tag>"
    """
    date_part, sep, tag_part = key.partition(KEY_SEPARATOR)
    if not sep:
        raise ValueError(f"Invalid tracking key: {key!r}")
    return date.fromisoformat(date_part), ReminderTag(tag_part)


def _date_filter(due_date: date) -> dict[str, str]:
    # PostgREST `like` uses * or % as wildcard; httpx percent-encodes the %
    return {"tag": f"like.{due_date.isoformat()}%"}


class SupabaseTrackingStore:
    """Tracking table access through PostgREST."""

    def __init__(self, client: SupabaseClient):
        self._client = client

    async def record_sent(self, key: str, notification_id: str) -> None:
        try:
            await self._client.request(
                "POST",
                TRACKING_TABLE,
                json={
                    "task_id": 0,  # legacy column, tracking is by key now
                    "notification_id": notification_id,
                    "tag": key,
                },
            )
        except SupabaseError as e:
            logger.error(f"Failed to record notification {notification_id} for {key}: {e}")
            sentry_sdk.capture_exception(e)

    async def list_for_date(self, due_date: date) -> list[TrackingRecord]:
        """
        List tracking records for a date.

        Failures and unexpected shapes are treated as "no rows".
        """
        try:
            rows = await self._client.select(
                TRACKING_TABLE,
                params={**_date_filter(due_date), "select": "notification_id,tag"},
            )
        except SupabaseError as e:
            logger.error(f"Failed to list notifications for {due_date}: {e}")
            sentry_sdk.capture_exception(e)
            return []

        records = []
        for row in rows:
            if not isinstance(row, dict) or not row.get("notification_id"):
                logger.warning(f"Ignoring malformed tracking row: {row!r}")
                continue
            key = str(row.get("tag", ""))
            try:
                key_date, _ = parse_key(key)
            except ValueError:
                logger.warning(f"Ignoring tracking row with malformed key: {row!r}")
                continue
            if key_date != due_date:
                logger.warning(f"Ignoring tracking row for another date: {row!r}")
                continue
            records.append(
                TrackingRecord(notification_id=str(row["notification_id"]), key=key)
            )
        return records

    async def delete_for_date(self, due_date: date) -> bool:
        """
        Delete all tracking records for a date.

        Returns:
            True if the records were cleared, False if the delete failed
        """
        try:
            await self._client.request(
                "DELETE", TRACKING_TABLE, params=_date_filter(due_date)
            )
        except SupabaseError as e:
            logger.error(f"Failed to delete tracking records for {due_date}: {e}")
            sentry_sdk.capture_exception(e)
            return False
        return True
