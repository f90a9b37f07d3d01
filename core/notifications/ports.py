"""
Capabilities the reconciler depends on.

The reconciler only sees these Protocols, so OneSignal/Supabase can be
swapped for in-memory fakes in tests.
"""

from datetime import date, datetime
from typing import Protocol

from core.notifications.tracking import TrackingRecord
from core.tasks import Task


class NotificationProvider(Protocol):
    async def schedule_at(
        self, heading: str, body: str, send_at: datetime
    ) -> str | None: ...

    async def send_now(self, heading: str, body: str) -> None: ...

    async def cancel(self, notification_id: str) -> None: ...


class TrackingStore(Protocol):
    async def record_sent(self, key: str, notification_id: str) -> None: ...

    async def list_for_date(self, due_date: date) -> list[TrackingRecord]: ...

    async def delete_for_date(self, due_date: date) -> bool: ...


class TaskSource(Protocol):
    async def get_active_tasks_for_date(self, due_date: date) -> list[Task]: ...
