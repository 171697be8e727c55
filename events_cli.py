# Minimal CLI for the event manager: add / list / delete

import argparse
import asyncio
import sys

from events_main.core.delivery import deliver_notices
from events_main.core.notifications import added_notice, deleted_notice, load_failed_notice
from events_main.core.submission import Submitter
from events_main.events_calendar.calendar import EventStore
from events_main.events_calendar.errors import CorruptStateError, EventValidationError
from events_main.events_calendar.validation import validate_event
from events_main.models.records import format_long_date
from events_main.utils.debug import configure_logging
from events_main.utils.persistance import open_slot


def _confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def _open_store(args) -> EventStore:
    store = EventStore(open_slot(args.backend))
    try:
        store.load()
    except CorruptStateError:
        deliver_notices([load_failed_notice()])
    return store


def cmd_add(args) -> int:
    try:
        validated = validate_event({"name": args.name, "date": args.date})
    except EventValidationError as e:
        for field, msg in e.field_errors.items():
            print(f"{field}: {msg}", file=sys.stderr)
        return 1
    if not args.yes and not _confirm("Are you sure you want to create this event?"):
        print("Cancelled.")
        return 0
    store = _open_store(args)
    submitter = Submitter(store, delay_ms=0 if args.no_delay else None)
    print("Adding Event...")
    ev = asyncio.run(submitter.submit(validated))
    deliver_notices([added_notice(ev)])
    print(f"(id={ev.id})")
    return 0


def cmd_list(args) -> int:
    store = _open_store(args)
    print(f"Events ({len(store)})")
    if not len(store):
        print("No events yet")
        print("Add your first event to get started!")
        return 0
    for e in store.events:
        print(f"{e.date} | {format_long_date(e.date)} | {e.name} id={e.id}")
    return 0


def cmd_delete(args) -> int:
    store = _open_store(args)
    ev = store.get(args.id)
    if ev is None:
        print(f"No event with id {args.id}")
        return 0
    if not args.yes and not _confirm(
        f'Are you sure you want to delete "{ev.name}"? This action cannot be undone.'
    ):
        print("Cancelled.")
        return 0
    store.delete(ev.id)
    deliver_notices([deleted_notice(ev)])
    return 0


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Event Manager CLI")
    p.add_argument("--backend", choices=["file", "sql", "memory"],
                   help="Storage backend (defaults to config)")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    sub = p.add_subparsers(required=True)

    sp = sub.add_parser("add", help="Add an event")
    sp.add_argument("name")
    sp.add_argument("date", help="YYYY-MM-DD, e.g., 2024-05-01")
    sp.add_argument("--no-delay", action="store_true", help="Skip the submit delay")
    sp.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    sp.set_defaults(func=cmd_add)

    sp = sub.add_parser("list", help="List all events (date order)")
    sp.set_defaults(func=cmd_list)

    sp = sub.add_parser("delete", help="Delete an event by id")
    sp.add_argument("id")
    sp.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    sp.set_defaults(func=cmd_delete)

    args = p.parse_args(argv)
    configure_logging(debug=True if args.debug else None)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
