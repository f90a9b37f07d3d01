"""
Task rows and read access to the `tasks` table.

Tasks are created and edited by the front end; this service only reads them.
"""

import logging
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, ValidationError

from core.constants import TASKS_TABLE
from core.enums import Assignee
from core.supabase import SupabaseClient

logger = logging.getLogger(__name__)


class Task(BaseModel):
    """A row of the `tasks` table."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    notes: str | None = None
    assignee: Assignee
    due_date: date | None = None  # None means "someday"
    is_complete: bool = False
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        """Not complete and scheduled on a date."""
        return not self.is_complete and self.due_date is not None


class SupabaseTaskSource:
    """Reads current task data through PostgREST."""

    def __init__(self, client: SupabaseClient):
        self._client = client

    async def get_active_tasks_for_date(self, due_date: date) -> list[Task]:
        """
        Get all non-complete tasks due on a specific date.

        Rows that fail validation are skipped with a warning.
        """
        rows = await self._client.select(
            TASKS_TABLE,
            params={
                "due_date": f"eq.{due_date.isoformat()}",
                "is_complete": "eq.false",
                "select": "*",
                "order": "id.asc",
            },
        )

        tasks = []
        for row in rows:
            try:
                tasks.append(Task.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed task row {row!r}: {e}")
        return tasks
