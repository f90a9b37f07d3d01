"""
Push notification reminders for tasks.

Public API:
    ReminderReconciler - handle(event), reconcile(date), process(event)
    OneSignalProvider - schedule_at / send_now / cancel
    SupabaseTrackingStore - record_sent / list_for_date / delete_for_date

Pure helpers:
    parse_event(payload), affected_dates(event) - change events to stale dates
    summarize(tasks) - summary sentence for one date
"""

from .channels.onesignal import OneSignalProvider
from .events import (
    ChangeEvent,
    DeleteEvent,
    InsertEvent,
    UpdateEvent,
    WebhookPayload,
    affected_dates,
    completed_task,
    parse_event,
)
from .reconciler import ReminderReconciler, create_reconciler
from .summary import summarize
from .tracking import SupabaseTrackingStore, TrackingRecord, make_key, parse_key

__all__ = [
    # Engine
    "ReminderReconciler",
    "create_reconciler",
    # Clients
    "OneSignalProvider",
    "SupabaseTrackingStore",
    "TrackingRecord",
    "make_key",
    "parse_key",
    # Events
    "ChangeEvent",
    "InsertEvent",
    "UpdateEvent",
    "DeleteEvent",
    "WebhookPayload",
    "parse_event",
    "affected_dates",
    "completed_task",
    # Text
    "summarize",
]
