"""
Localized notification texts.

All user-facing strings live in messages.yaml, keyed by message type
("reminder_morning_of", "task_completed", "summary", ...) and then by part
("heading", "body", or an assignee value).
"""

from pathlib import Path

import yaml

MESSAGES_PATH = Path(__file__).parent / "messages.yaml"

_templates: dict | None = None


def load_templates() -> dict:
    """Read messages.yaml once and keep it for the life of the process."""
    global _templates
    if _templates is None:
        _templates = yaml.safe_load(MESSAGES_PATH.read_text(encoding="utf-8"))
    return _templates


def get_text(message_type: str, key: str) -> str:
    """
    Look up a raw template string.

    Raises:
        KeyError: If messages.yaml has no such type/key
    """
    section = load_templates().get(message_type)
    if section is None or key not in section:
        raise KeyError(f"No message text for {message_type}.{key}")
    return section[key]


def render_message(template: str, context: dict) -> str:
    """
    Substitute {placeholders} in a template.

    Values are inserted verbatim; braces inside a task title are not
    interpreted.

    Raises:
        KeyError: If a placeholder has no value in context
    """
    return template.format(**context)


def get_message(message_type: str, key: str, context: dict) -> str:
    """
    Look up and render one message part.

    Args:
        message_type: e.g., "reminder_morning_of", "task_completed"
        key: e.g., "heading", "body", "omer"
        context: Placeholder values (e.g., {"summary": ...})

    Returns:
        Rendered text
    """
    return render_message(get_text(message_type, key), context)
