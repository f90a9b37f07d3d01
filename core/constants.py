"""
Shared constants used across the service.
"""

from core.enums import Assignee, ReminderTag


# =============================================================================
# Reminder slots - SINGLE SOURCE OF TRUTH
# =============================================================================

# day_offset is relative to the task due date; hour/minute are local wall-clock.
# message_template is a key into core/notifications/messages.yaml.
REMINDER_SLOTS = {
    ReminderTag.evening_before: {
        "day_offset": -1,
        "hour": 21,
        "minute": 0,
        "message_template": "reminder_evening_before",
    },
    ReminderTag.morning_of: {
        "day_offset": 0,
        "hour": 10,
        "minute": 0,
        "message_template": "reminder_morning_of",
    },
    ReminderTag.evening_of: {
        "day_offset": 0,
        "hour": 18,
        "minute": 30,
        "message_template": "reminder_evening_of",
    },
}

# Order in which assignee groups appear in a summary
ASSIGNEE_ORDER = [
    Assignee.omer,
    Assignee.noam,
    Assignee.both,
]

# Tables exposed through the Supabase REST API
TASKS_TABLE = "tasks"
TRACKING_TABLE = "task_notifications"

# Separator between date and tag in tracking keys ("2025-06-01:morning-of")
KEY_SEPARATOR = ":"
