"""
Row-change events from the `tasks` database webhook.

The webhook payload is parsed into one of three event types, and
`affected_dates` maps an event to the due dates whose reminders are stale.
Everything here is pure; I/O happens in the reconciler.
"""

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, ConfigDict

from core.enums import ChangeType
from core.tasks import Task


class WebhookPayload(BaseModel):
    """Body of a Supabase database webhook request."""

    model_config = ConfigDict(extra="ignore")

    type: ChangeType
    table: str
    record: Task | None = None
    old_record: Task | None = None


@dataclass(frozen=True)
class InsertEvent:
    record: Task


@dataclass(frozen=True)
class UpdateEvent:
    record: Task
    # None when the webhook could not provide the previous row
    old_record: Task | None


@dataclass(frozen=True)
class DeleteEvent:
    old_record: Task


ChangeEvent = InsertEvent | UpdateEvent | DeleteEvent


def parse_event(payload: WebhookPayload) -> ChangeEvent:
    """
    Turn a webhook payload into a typed change event.

    Raises:
        ValueError: If the snapshots required by the change type are missing
            or an update's snapshots refer to different tasks
    """
    if payload.type == ChangeType.insert:
        if payload.record is None:
            raise ValueError("INSERT event without record")
        return InsertEvent(record=payload.record)

    if payload.type == ChangeType.update:
        if payload.record is None:
            raise ValueError("UPDATE event without record")
        old = payload.old_record
        if old is not None and old.id != payload.record.id:
            raise ValueError(
                f"UPDATE event snapshots disagree on id ({old.id} != {payload.record.id})"
            )
        return UpdateEvent(record=payload.record, old_record=old)

    if payload.old_record is None:
        raise ValueError("DELETE event without old_record")
    return DeleteEvent(old_record=payload.old_record)


def completed_task(event: ChangeEvent) -> Task | None:
    """
    The task if this event marks it complete, else None.

    Without a previous snapshot a complete record counts as newly completed.
    """
    if not isinstance(event, UpdateEvent) or not event.record.is_complete:
        return None
    if event.old_record is None or not event.old_record.is_complete:
        return event.record
    return None


def _update_dates(record: Task, old: Task | None) -> set[date]:
    dates: set[date] = set()

    if old is None:
        # Nothing to diff against: refresh the current date whatever its state
        if record.due_date:
            dates.add(record.due_date)
        return dates

    # Completed: its date's summaries must drop it
    if record.is_complete and not old.is_complete and record.due_date:
        dates.add(record.due_date)

    # Uncompleted: task re-enters its date
    if not record.is_complete and old.is_complete and record.due_date:
        dates.add(record.due_date)

    # Moved: both the old and the new date change
    if record.due_date != old.due_date:
        if old.due_date:
            dates.add(old.due_date)
        if record.is_active:
            dates.add(record.due_date)

    # Renamed or reassigned: summary text changes
    if record.is_active and (
        record.title != old.title or record.assignee != old.assignee
    ):
        dates.add(record.due_date)

    return dates


def affected_dates(event: ChangeEvent) -> set[date]:
    """
    Due dates whose reminder schedule may be stale after this event.

    Several rules can fire for one event; the result is deduplicated so each
    date is reconciled once.
    """
    if isinstance(event, InsertEvent):
        return {event.record.due_date} if event.record.is_active else set()

    if isinstance(event, UpdateEvent):
        return _update_dates(event.record, event.old_record)

    if event.old_record.due_date:
        return {event.old_record.due_date}
    return set()
