#!/usr/bin/env python3
"""
Communication Log CLI - call and SMS records from the terminal.

Runs the same pipeline as the HTTP API directly against Google Calendar.

Commands:
  events          Calls and SMS in a date range (--start/--end or --date)
  day DATE        Calls and SMS on a single day
  search QUERY    Search calls and SMS (last 30 days by default)
  calendars       List calendars of the account

Usage:
  commlog events --start 2024-05-01 --end 2024-05-31 --json
  commlog day 2024-05-01
  commlog search "jan novak" --type call --json --compact
  commlog calendars --json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional, Sequence

from commlog.core.config import Config
from commlog.core.errors import CommlogError
from commlog.core.logging_setup import configure_logging
from commlog.communications.service import CommunicationService, EventsResult


# =============================================================================
# OUTPUT UTILITIES
# =============================================================================

def emit_json(payload: Any, compact: bool = False) -> None:
    """Emit JSON output, optionally compact."""
    if compact:
        print(json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str))
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def print_events(result: EventsResult) -> None:
    header = f"Search '{result.query}'" if result.query is not None else result.date_range.label()
    print(f"{header} ({result.total}):")
    for event in result.events:
        line = f"  {event.date} {event.time}  {event.type.upper():4}  {event.contact}"
        if event.phone:
            line += f"  {event.phone}"
        if event.duration:
            line += f"  [{event.duration}]"
        print(line)


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_events(args: argparse.Namespace, service: CommunicationService) -> int:
    result = service.list_events(
        start_date=args.start,
        end_date=args.end,
        single_date=args.date,
        calendar_id=args.calendar,
    )
    if args.json:
        emit_json(result.to_dict(), compact=args.compact)
    else:
        print_events(result)
    return 0


def cmd_day(args: argparse.Namespace, service: CommunicationService) -> int:
    result = service.list_events(single_date=args.date, calendar_id=args.calendar)
    if args.json:
        emit_json(result.to_dict(), compact=args.compact)
    else:
        print_events(result)
    return 0


def cmd_search(args: argparse.Namespace, service: CommunicationService) -> int:
    result = service.search(
        args.query,
        start_date=args.start,
        end_date=args.end,
        type_filter=args.type,
        calendar_id=args.calendar,
    )
    if args.json:
        emit_json(result.to_dict(), compact=args.compact)
    else:
        print_events(result)
    return 0


def cmd_calendars(args: argparse.Namespace, service: CommunicationService) -> int:
    calendars = service.list_calendars()
    if args.json:
        emit_json({"calendars": [c.to_dict() for c in calendars]}, compact=args.compact)
    else:
        print(f"Calendars ({len(calendars)}):")
        for cal in calendars:
            marker = "*" if cal.primary else " "
            print(f"  {marker} {cal.name or '(no name)'}  <{cal.id}>")
    return 0


COMMANDS = {
    "events": cmd_events,
    "day": cmd_day,
    "search": cmd_search,
    "calendars": cmd_calendars,
}


# =============================================================================
# ARGUMENTS
# =============================================================================

def add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Output as JSON.")
    parser.add_argument("--compact", action="store_true", help="Minify JSON output.")


def add_calendar_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--calendar", help="Calendar ID (default: configured calendar)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commlog",
        description="Call and SMS records kept in Google Calendar.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log pipeline progress")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    p_events = subparsers.add_parser("events", help="Calls and SMS in a date range")
    p_events.add_argument("--start", help="First day (YYYY-MM-DD)")
    p_events.add_argument("--end", help="Last day (YYYY-MM-DD)")
    p_events.add_argument("--date", help="Single day (YYYY-MM-DD), overrides --start/--end")
    add_calendar_arg(p_events)
    add_output_args(p_events)

    p_day = subparsers.add_parser("day", help="Calls and SMS on a single day")
    p_day.add_argument("date", help="Day (YYYY-MM-DD)")
    add_calendar_arg(p_day)
    add_output_args(p_day)

    p_search = subparsers.add_parser("search", help="Search calls and SMS")
    p_search.add_argument("query", help="Search query, every word must match")
    p_search.add_argument("--start", help="First day (default: 30 days ago)")
    p_search.add_argument("--end", help="Last day (default: today)")
    p_search.add_argument("--type", choices=["call", "sms", "all"], help="Restrict to one type")
    add_calendar_arg(p_search)
    add_output_args(p_search)

    p_calendars = subparsers.add_parser("calendars", help="List calendars")
    add_output_args(p_calendars)

    return parser


# =============================================================================
# MAIN
# =============================================================================

def main(argv: Optional[Sequence[str]] = None, service: Optional[CommunicationService] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging("INFO" if args.verbose else "WARNING")

    if service is None:
        config = Config()
        # Lazy import: the google client libraries are slow to load
        from commlog.integrations.google_calendar import GoogleCalendarClient
        service = CommunicationService.from_config(GoogleCalendarClient.from_config(config), config)

    try:
        return COMMANDS[args.command](args, service)
    except CommlogError as e:
        if getattr(args, "json", False):
            emit_json(e.to_dict(), compact=getattr(args, "compact", False))
        else:
            message = f"Error: {e.message}"
            if e.details:
                message += f" ({e.details})"
            print(message, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
