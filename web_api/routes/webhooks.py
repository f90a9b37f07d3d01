"""
Database webhook routes.

Endpoints:
- POST /webhooks/tasks - Row-change event from the `tasks` table webhook
- POST /webhooks/tasks/reconcile/{due_date} - Rebuild reminders for one date
"""

import logging
from datetime import date

import sentry_sdk
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.notifications import ReminderReconciler, WebhookPayload, parse_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks/tasks", tags=["webhooks"])


def get_reconciler(request: Request) -> ReminderReconciler:
    """The reconciler built in the app lifespan."""
    return request.app.state.reconciler


@router.post("")
async def task_changed(
    request: Request,
    reconciler: ReminderReconciler = Depends(get_reconciler),
):
    """
    Handle one INSERT/UPDATE/DELETE event on the tasks table.

    Request body (Supabase database webhook):
    - type: "INSERT" | "UPDATE" | "DELETE"
    - table: Table name
    - record: New row (INSERT/UPDATE)
    - old_record: Previous row (UPDATE/DELETE)

    Returns {"success": true} once every affected date is reconciled, or
    500 {"error": "..."} if the payload can't be parsed or dispatch fails.
    """
    try:
        payload = WebhookPayload.model_validate(await request.json())
        event = parse_event(payload)
        results = await reconciler.process(event)
    except Exception as e:
        logger.error(f"Task webhook error: {e}")
        sentry_sdk.capture_exception(e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    logger.info(f"Processed {payload.type.value} on {payload.table}: {results}")
    return {"success": True}


@router.post("/reconcile/{due_date}")
async def reconcile_date(
    due_date: date,
    reconciler: ReminderReconciler = Depends(get_reconciler),
):
    """
    Rebuild the reminders for one date on demand.

    Useful after a provider outage left a date without reminders.
    """
    result = await reconciler.reconcile(due_date)
    status_code = 500 if "error" in result else 200
    return JSONResponse(
        status_code=status_code,
        content={"date": due_date.isoformat(), **result},
    )
