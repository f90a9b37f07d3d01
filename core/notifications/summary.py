"""
Human-readable texts for reminder and completion notifications.

All functions here are pure: the same tasks always produce the same text,
which reconciliation relies on for idempotence.
"""

from collections.abc import Iterable

from core.constants import ASSIGNEE_ORDER
from core.notifications.templates import get_message, get_text
from core.tasks import Task


def join_titles(titles: list[str]) -> str:
    """
    Join task titles into one phrase.

    One title is returned as is; two become "A and B"; three or more become
    "A, B and C" (connective words come from messages.yaml).
    """
    if not titles:
        return ""
    if len(titles) == 1:
        return titles[0]
    separator = get_text("summary", "title_separator")
    last_connective = get_text("summary", "last_title_connective")
    return f"{separator.join(titles[:-1])}{last_connective}{titles[-1]}"


def summarize(tasks: Iterable[Task]) -> str:
    """
    Build the summary sentence for all tasks due on one date.

    Tasks are grouped by assignee; each non-empty group renders as
    "<assignee> <verb> <titles>" and groups are joined with the connective.
    """
    tasks = list(tasks)
    parts = []
    for assignee in ASSIGNEE_ORDER:
        titles = [t.title for t in tasks if t.assignee == assignee]
        if titles:
            parts.append(
                get_message("summary", assignee.value, {"titles": join_titles(titles)})
            )
    return get_text("summary", "group_connective").join(parts)


def reminder_texts(message_type: str, summary: str) -> tuple[str, str]:
    """Heading and body for one reminder slot."""
    heading = get_text(message_type, "heading")
    body = get_message(message_type, "body", {"summary": summary})
    return heading, body


def completion_texts(task: Task) -> tuple[str, str]:
    """Heading and assignee-specific body for a task-completed notification."""
    heading = get_text("task_completed", "heading")
    body = get_message("task_completed", task.assignee.value, {"title": task.title})
    return heading, body
