"""tripboard CLI: search places, print a stored session, walk through a demo trip, or serve the API."""

from __future__ import annotations

import argparse
import json
import sys

from dotenv import load_dotenv

from tripboard.application import intents as it
from tripboard.application.discovery import search_places
from tripboard.application.reducer import apply_intents
from tripboard.application.session import TripSession, new_session
from tripboard.services.export_formatter import export_markdown

load_dotenv()


def _cmd_search(args: argparse.Namespace) -> int:
    candidates = search_places(args.query, args.near, max_results=args.limit)
    if args.json:
        print(json.dumps([c.model_dump(mode="json") for c in candidates], ensure_ascii=False, indent=2))
        return 0
    for index, candidate in enumerate(candidates):
        hint = f"  ({candidate.estimated_time})" if candidate.estimated_time else ""
        print(f"[{index}] {candidate.name}{hint}")
        if candidate.description:
            print(f"    {candidate.description}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    from tripboard.infrastructure.session_store import get_session_store

    payload = get_session_store().get(args.session_id)
    if payload is None:
        print(f"Unknown session: {args.session_id}", file=sys.stderr)
        return 1
    print(export_markdown(TripSession.from_store(payload)))
    return 0


def build_demo_session() -> TripSession:
    session = new_session(participants=["Alice", "Bob", "Carol"])
    candidates = search_places("Taipei")
    day_one = session.itinerary.days[0].id
    steps: list[it.Intent] = [it.SetSearchResultsIntent(candidates=candidates)]
    steps += [
        it.MovePlaceIntent(source_location="search", source_index=i, dest_location=day_one, dest_index=i)
        for i in range(min(3, len(candidates)))
    ]
    if len(candidates) > 3:
        steps.append(it.AddPlaceIntent(search_index=3))
    steps += [
        it.UpdatePlaceIntent(day_id=day_one, index=0, fields={"stay_minutes": 120, "transport_to_next": "WALK"}),
        it.AddExpenseIntent(description="Dinner", amount=90, payer="Alice", involved=["Alice", "Bob", "Carol"]),
        it.AddExpenseIntent(description="Taxi", amount=30, payer="Bob", involved=["Bob", "Carol"]),
    ]
    return apply_intents(session, steps)


def _cmd_demo(args: argparse.Namespace) -> int:
    print(export_markdown(build_demo_session()))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("tripboard.api.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tripboard", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="search candidate places")
    search.add_argument("query")
    search.add_argument("--near", default=None, help="name of a place to search around")
    search.add_argument("--limit", type=int, default=5)
    search.add_argument("--json", action="store_true", help="print raw JSON")
    search.set_defaults(func=_cmd_search)

    show = sub.add_parser("show", help="print a stored session as Markdown")
    show.add_argument("session_id")
    show.set_defaults(func=_cmd_show)

    demo = sub.add_parser("demo", help="build a sample trip and print it")
    demo.set_defaults(func=_cmd_demo)

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
