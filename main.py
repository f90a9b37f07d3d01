"""
Task notifications service entry point.

One Python process, one asyncio event loop, one FastAPI app. The app
receives database webhooks for the `tasks` table and keeps the scheduled
push reminders for each due date in sync with it.

The lifespan builds the configuration, the shared HTTP client and the
reconciler once at startup; routes get the reconciler through a dependency.

Run with: python main.py [--port PORT]
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

# Set up import paths before any local imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")  # Local overrides (gitignored)
load_dotenv()  # Fallback to .env

import httpx
import sentry_sdk
from fastapi import FastAPI

from core.config import check_required_env_vars, load_config
from core.notifications import create_reconciler
from web_api.routes.webhooks import router as webhooks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Builds the reconciler and its clients around one shared httpx client,
    and closes the client on shutdown.
    """
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ok, missing = check_required_env_vars()
    if not ok:
        print("Warning: missing configuration, notifications will fail:")
        for line in missing:
            print(line)

    if config.sentry_dsn:
        sentry_sdk.init(dsn=config.sentry_dsn)

    http = httpx.AsyncClient(timeout=config.http_timeout)
    app.state.reconciler = create_reconciler(config, http)
    logger.info("Task notifications service started")

    yield

    await http.aclose()
    logger.info("Task notifications service stopped")


app = FastAPI(
    title="Task Notifications",
    lifespan=lifespan,
)

app.include_router(webhooks_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Task notifications webhook server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("API_PORT", "8000")),
        help="Port to run the server on (default: 8000)",
    )
    args = parser.parse_args()

    # Pass app object directly (not string) to avoid module reimport issues
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
    )
