"""Pytest fixtures for notification tests.

In-memory stand-ins for OneSignal, the tracking table and the tasks table,
so reconciliation can be tested without any network access.
"""

from datetime import date, datetime

import pytest

from core.notifications.tracking import TrackingRecord
from core.tasks import Task


def _make_task(**overrides) -> Task:
    """Build a Task with sensible defaults."""
    fields = {
        "id": 1,
        "title": "buy milk",
        "notes": "",
        "assignee": "noam",
        "due_date": "2099-06-01",
        "is_complete": False,
        "created_at": "2025-01-01T00:00:00+00:00",
    }
    fields.update(overrides)
    return Task.model_validate(fields)


class FakeProvider:
    """Notification provider that keeps scheduled notifications in memory."""

    def __init__(self, now: datetime):
        self.now = now
        self.live: dict[str, dict] = {}
        self.sent_now: list[tuple[str, str]] = []
        self.cancelled: list[str] = []
        self._counter = 0

    async def schedule_at(self, heading, body, send_at):
        if send_at <= self.now:
            return None
        self._counter += 1
        notification_id = f"notif-{self._counter}"
        self.live[notification_id] = {
            "heading": heading,
            "body": body,
            "send_at": send_at,
        }
        return notification_id

    async def send_now(self, heading, body):
        self.sent_now.append((heading, body))

    async def cancel(self, notification_id):
        self.cancelled.append(notification_id)
        self.live.pop(notification_id, None)


class FakeTrackingStore:
    """Tracking store backed by a list."""

    def __init__(self):
        self.records: list[TrackingRecord] = []

    async def record_sent(self, key, notification_id):
        self.records.append(TrackingRecord(notification_id=notification_id, key=key))

    async def list_for_date(self, due_date):
        prefix = due_date.isoformat()
        return [r for r in self.records if r.key.startswith(prefix)]

    async def delete_for_date(self, due_date):
        prefix = due_date.isoformat()
        self.records = [r for r in self.records if not r.key.startswith(prefix)]
        return True

    def keys_for(self, due_date: date) -> set[str]:
        prefix = due_date.isoformat()
        return {r.key for r in self.records if r.key.startswith(prefix)}


class FakeTaskSource:
    """Task source that filters an in-memory list like the real query does."""

    def __init__(self, tasks: list[Task] | None = None):
        self.tasks = list(tasks or [])

    async def get_active_tasks_for_date(self, due_date):
        return [
            t for t in self.tasks if t.due_date == due_date and not t.is_complete
        ]


@pytest.fixture
def make_task():
    """Factory for Task rows: make_task(title="x", due_date="2099-06-01")."""
    return _make_task


@pytest.fixture
def provider():
    # Well before any date used in these tests
    return FakeProvider(now=datetime.fromisoformat("2025-01-01T00:00:00+00:00"))


@pytest.fixture
def store():
    return FakeTrackingStore()


@pytest.fixture
def task_source():
    return FakeTaskSource()


@pytest.fixture
def reconciler(notifier_config, provider, store, task_source):
    from core.notifications.reconciler import ReminderReconciler

    return ReminderReconciler(
        notifier_config,
        provider=provider,
        store=store,
        task_source=task_source,
    )
