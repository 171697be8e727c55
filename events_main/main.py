from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from events_main.core.delivery import deliver_notices
from events_main.core.notifications import added_notice, deleted_notice, load_failed_notice
from events_main.core.submission import Submitter
from events_main.events_calendar.calendar import EventStore
from events_main.events_calendar.errors import (
    CorruptStateError, EventValidationError, SubmissionPendingError,
)
from events_main.events_calendar.validation import validate_event
from events_main.utils.debug import configure_logging

router = APIRouter()


# ---------- App state accessors ----------
async def get_store(request: Request) -> EventStore:
    store: EventStore = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Event store not initialized")
    return store


async def get_submitter(request: Request) -> Submitter:
    return request.app.state.submitter


# ---------- Schemas ----------
class CreateEventBody(BaseModel):
    # Field rules and messages live in validate_event
    name: Any = None
    date: Any = None


def _listing(request: Request, store: EventStore) -> dict:
    # The load warning is shown once
    warning = request.app.state.load_warning
    request.app.state.load_warning = None
    return {
        "count": len(store),
        "events": [ev.model_dump() for ev in store.events],
        "warning": warning,
    }


# ---------- Routes ----------
# Routes that touch the store are async: the store has one writer, the event loop.
@router.get("/")
def index():
    return RedirectResponse(url="/events")


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/events")
async def events_page(request: Request, store: EventStore = Depends(get_store)):
    return _listing(request, store)


@router.get("/api/events")
async def list_events(request: Request, store: EventStore = Depends(get_store)):
    return _listing(request, store)


@router.post("/api/events", status_code=201)
async def add_event(body: CreateEventBody, submitter: Submitter = Depends(get_submitter)):
    try:
        validated = validate_event(body.model_dump())
    except EventValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.field_errors})
    try:
        ev = await submitter.submit(validated)
    except SubmissionPendingError as e:
        raise HTTPException(status_code=409, detail=e.message)
    notice = added_notice(ev)
    deliver_notices([notice])
    return {"event": ev.model_dump(), "notice": notice}


@router.delete("/api/events/{event_id}")
async def delete_event(event_id: str, store: EventStore = Depends(get_store)):
    ev = store.get(event_id)
    if ev is None or not store.delete(event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    notice = deleted_notice(ev)
    deliver_notices([notice])
    return {"deleted": True, "notice": notice}


# ---------- App factory ----------
def create_app(store: Optional[EventStore] = None,
               submitter: Optional[Submitter] = None) -> FastAPI:
    store = store if store is not None else EventStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            store.load()
        except CorruptStateError:
            notice = load_failed_notice()
            deliver_notices([notice])
            app.state.load_warning = notice
        yield

    app = FastAPI(title="Event Manager API", lifespan=lifespan)
    app.state.store = store
    app.state.submitter = submitter if submitter is not None else Submitter(store)
    app.state.load_warning = None
    app.include_router(router)
    return app


configure_logging()
app = create_app()
