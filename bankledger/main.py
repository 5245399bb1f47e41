"""bankledger FastAPI application entry point."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from bankledger.accounts.router import get_account_service
from bankledger.accounts.router import router as accounts_router
from bankledger.accounts.service import AccountService
from bankledger.events.errors import LedgerError
from bankledger.events.projector import AccountProjector
from bankledger.events.store import EventStore

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

DEFAULT_EVENTS_DIR = "events"

_STATUS_BY_KIND = {
    "bad_request": 400,
    "conflict": 409,
    "internal_error": 500,
}

LANDING_PAGE = """
<style>
  html { font-family: sans-serif; }
  body { padding: 4rem; line-height: 1.5; }
</style>

<h1>bankledger</h1>

<p>Bank accounts kept as an append-only log of events and projected on demand.</p>

<p>Have a look at <a href="/accounts/12060626">a sample account</a>, or its
<a href="/accounts/12060626/events">event log</a>.</p>
"""


def events_dir_from_env() -> Path:
    """Storage root for the event log, from BANKLEDGER_EVENTS_DIR."""
    return Path(os.environ.get("BANKLEDGER_EVENTS_DIR", DEFAULT_EVENTS_DIR))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Resolve configuration and wire the account service."""
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")

    events_dir = events_dir_from_env()
    logger.info("Using event storage at %s", events_dir)

    store = EventStore(events_dir)
    service = AccountService(store, AccountProjector())
    app.dependency_overrides[get_account_service] = lambda: service

    app.state.store = store
    yield

    app.dependency_overrides.pop(get_account_service, None)


app = FastAPI(
    title="bankledger",
    description="Event-sourced bank accounts stored as one file per event",
    version=VERSION,
    lifespan=lifespan,
)

app.include_router(accounts_router)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Translate core failure kinds to HTTP responses. Messages are already generic."""
    return JSONResponse(
        status_code=_STATUS_BY_KIND.get(exc.kind, 500),
        content={"detail": str(exc)},
    )


@app.get("/", response_class=HTMLResponse)
async def index() -> str:
    return LANDING_PAGE


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "version": VERSION}
