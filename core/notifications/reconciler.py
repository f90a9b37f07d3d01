"""
Date-level reconciliation of scheduled reminders.

For each affected due date the reconciler cancels every notification it
previously scheduled for that date, re-reads the active tasks, and schedules
a fresh set of reminders. The tracking table is the only memory of what was
scheduled; cancelling everything first is what keeps it at one live record
per (date, tag).
"""

import asyncio
import logging
import weakref
from datetime import date, timedelta

import httpx
import sentry_sdk

from core.config import NotifierConfig
from core.constants import REMINDER_SLOTS
from core.notifications.channels.onesignal import OneSignalProvider
from core.notifications.events import ChangeEvent, affected_dates, completed_task
from core.notifications.ports import NotificationProvider, TaskSource, TrackingStore
from core.notifications.summary import completion_texts, reminder_texts, summarize
from core.notifications.tracking import SupabaseTrackingStore, make_key
from core.supabase import SupabaseClient
from core.tasks import SupabaseTaskSource
from core.timezone import local_datetime

logger = logging.getLogger(__name__)


class ReminderReconciler:
    def __init__(
        self,
        config: NotifierConfig,
        provider: NotificationProvider,
        store: TrackingStore,
        task_source: TaskSource,
    ):
        self._config = config
        self._provider = provider
        self._store = store
        self._task_source = task_source
        # Serializes reconciliations of the same date within this process
        self._locks: weakref.WeakValueDictionary[date, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, due_date: date) -> asyncio.Lock:
        lock = self._locks.get(due_date)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[due_date] = lock
        return lock

    async def handle(self, event: ChangeEvent) -> set[date]:
        """
        Apply immediate side effects of an event and return its affected dates.

        A task flipping to complete gets a "well done" notification right away.
        """
        task = completed_task(event)
        if task is not None:
            heading, body = completion_texts(task)
            await self._provider.send_now(heading, body)
            logger.info(f"Sent completion notification for task {task.id}")

        return affected_dates(event)

    async def process(self, event: ChangeEvent) -> dict[str, dict]:
        """
        Handle an event and reconcile every date it affects.

        Returns:
            Dict of ISO date -> reconcile result
        """
        dates = sorted(await self.handle(event))
        if not dates:
            return {}

        if self._config.reconcile_concurrently:
            results = await asyncio.gather(*(self.reconcile(d) for d in dates))
        else:
            results = [await self.reconcile(d) for d in dates]

        return {d.isoformat(): result for d, result in zip(dates, results)}

    async def reconcile(self, due_date: date) -> dict:
        """
        Replace all scheduled reminders for one date with a fresh set.

        Steps run strictly in order: cancel old, re-read tasks, build summary,
        schedule new, record ids. Errors are logged and returned, not raised,
        so other dates in the same batch still get reconciled.

        Returns:
            Dict with cancelled count, scheduled/skipped tag lists, and an
            error key on failure
        """
        result = {"cancelled": 0, "scheduled": [], "skipped": []}

        async with self._lock_for(due_date):
            try:
                result["cancelled"], cleared = await self._cancel_all_for_date(due_date)
                if not cleared:
                    # New records would sit next to the old ones for the same keys
                    message = f"Could not clear tracking records for {due_date}"
                    logger.error(f"{message}, not scheduling new reminders")
                    sentry_sdk.capture_message(message, level="error")
                    result["error"] = message
                    return result

                tasks = await self._task_source.get_active_tasks_for_date(due_date)
                if not tasks:
                    logger.info(f"No active tasks on {due_date}, nothing to schedule")
                    return result

                summary = summarize(tasks)

                for tag, slot in REMINDER_SLOTS.items():
                    send_at = local_datetime(
                        due_date + timedelta(days=slot["day_offset"]),
                        slot["hour"],
                        slot["minute"],
                        utc_offset_hours=self._config.utc_offset_hours,
                        tz_name=self._config.timezone_name,
                    )
                    heading, body = reminder_texts(slot["message_template"], summary)

                    notification_id = await self._provider.schedule_at(
                        heading, body, send_at
                    )
                    if not notification_id:
                        result["skipped"].append(tag.value)
                        continue

                    await self._store.record_sent(make_key(due_date, tag), notification_id)
                    result["scheduled"].append(tag.value)

                logger.info(
                    f"Reconciled {due_date}: {len(tasks)} tasks, "
                    f"scheduled {result['scheduled']}, skipped {result['skipped']}"
                )

            except Exception as e:
                logger.error(f"Failed to reconcile reminders for {due_date}: {e}")
                sentry_sdk.capture_exception(e)
                result["error"] = str(e)

        return result

    async def _cancel_all_for_date(self, due_date: date) -> tuple[int, bool]:
        """
        Cancel and forget every tracked notification for a date.

        Returns:
            (cancelled count, whether the tracking records were cleared)
        """
        records = await self._store.list_for_date(due_date)
        if not records:
            return 0, True

        await asyncio.gather(
            *(self._provider.cancel(r.notification_id) for r in records)
        )
        cleared = await self._store.delete_for_date(due_date)
        return len(records), cleared


def create_reconciler(config: NotifierConfig, http: httpx.AsyncClient) -> ReminderReconciler:
    """Wire a reconciler to OneSignal and Supabase over a shared httpx client."""
    supabase = SupabaseClient(config, http)
    return ReminderReconciler(
        config,
        provider=OneSignalProvider(config, http),
        store=SupabaseTrackingStore(supabase),
        task_source=SupabaseTaskSource(supabase),
    )
