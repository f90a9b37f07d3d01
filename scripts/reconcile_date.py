#!/usr/bin/env python3
"""
Rebuild scheduled task reminders for one or more due dates.

Use after a OneSignal outage or a manual edit of the tasks table that
bypassed the webhook.

Usage:
    python scripts/reconcile_date.py 2025-06-01 [2025-06-02 ...] [--dry-run]
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env.local")
load_dotenv()

import httpx

from core.config import check_required_env_vars, load_config
from core.notifications import SupabaseTrackingStore, create_reconciler, summarize
from core.supabase import SupabaseClient
from core.tasks import SupabaseTaskSource


async def show_date(store: SupabaseTrackingStore, tasks: SupabaseTaskSource, due_date: date):
    """Print what is tracked and what would be scheduled for a date."""
    records = await store.list_for_date(due_date)
    active = await tasks.get_active_tasks_for_date(due_date)

    print(f"{due_date}: {len(records)} tracked notifications, {len(active)} active tasks")
    for record in records:
        print(f"  - {record.key} -> {record.notification_id}")
    if active:
        print(f"  summary: {summarize(active)}")


async def main(dates: list[date], dry_run: bool) -> int:
    ok, missing = check_required_env_vars()
    if not ok:
        print("Missing configuration:")
        for line in missing:
            print(line)
        return 1

    config = load_config()
    failed = 0

    async with httpx.AsyncClient(timeout=config.http_timeout) as http:
        if dry_run:
            supabase = SupabaseClient(config, http)
            store = SupabaseTrackingStore(supabase)
            tasks = SupabaseTaskSource(supabase)
            for due_date in dates:
                await show_date(store, tasks, due_date)
            return 0

        reconciler = create_reconciler(config, http)
        for due_date in dates:
            result = await reconciler.reconcile(due_date)
            if "error" in result:
                failed += 1
                print(f"{due_date}: FAILED - {result['error']}")
            else:
                print(
                    f"{due_date}: cancelled {result['cancelled']}, "
                    f"scheduled {result['scheduled']}, skipped {result['skipped']}"
                )

    return 1 if failed else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("dates", nargs="+", type=date.fromisoformat, help="YYYY-MM-DD")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only show tracked notifications and active tasks",
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(main(args.dates, args.dry_run)))
