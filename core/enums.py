"""Enum definitions shared by the task and notification modules."""

import enum


class Assignee(str, enum.Enum):
    noam = "noam"
    omer = "omer"
    both = "both"


class ChangeType(str, enum.Enum):
    """Row-change type tag sent by the database webhook."""

    insert = "INSERT"
    update = "UPDATE"
    delete = "DELETE"


class ReminderTag(str, enum.Enum):
    evening_before = "evening-before"
    morning_of = "morning-of"
    evening_of = "evening-of"
