"""packit CLI entry point: author a packing plan, show or list saved trips."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv

from packit.application.context import AppContext, make_app_context
from packit.application.wizard import PackingWizard
from packit.domain.constants import SUITCASE_SIZES
from packit.domain.enums import Category, TravelClass
from packit.domain.models import Item
from packit.services.trip_presenter import format_trip_summary, present_trip_summary, trip_card_line
from packit.services.trip_service import list_trips, load_trip_summary

load_dotenv()


def parse_item(raw: str) -> Item:
    """``name[:quantity[:category]]``, e.g. ``Jacket:2:Clothing``."""
    parts = [p.strip() for p in raw.split(":")]
    name = parts[0]
    if not name:
        raise argparse.ArgumentTypeError(f"item needs a name: {raw!r}")
    quantity = 1
    if len(parts) > 1 and parts[1]:
        try:
            quantity = max(1, int(parts[1]))
        except ValueError:
            raise argparse.ArgumentTypeError(f"bad quantity in {raw!r}") from None
    category = Category.coerce(parts[2]) if len(parts) > 2 else Category.OTHER
    return Item(name=name, quantity=quantity, category=category)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="packit", description="Packing-plan wizard")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="run the wizard end to end and save the trip")
    new.add_argument("--destination", required=True)
    new.add_argument("--start", required=True, help="start date, YYYY-MM-DD")
    new.add_argument("--end", required=True, help="end date, YYYY-MM-DD")
    new.add_argument("--airline", default="")
    new.add_argument("--travel-class", default=TravelClass.ECONOMY.value, choices=[c.value for c in TravelClass])
    new.add_argument("--purpose", default="Vacation")
    new.add_argument("--limit", type=float, default=None, help="baggage limit in kg")
    new.add_argument("--item", action="append", type=parse_item, default=[], help="name[:qty[:category]]")
    new.add_argument("--suitcase", type=int, choices=SUITCASE_SIZES, default=None, help="suitcase size in litres")
    new.add_argument("--dims", default=None, help="suitcase LxWxD in cm")
    new.add_argument("--luggage", default=None, help="look up a suitcase by model name")
    new.add_argument("--accept", action="append", default=[], help="suggestion text to accept")
    new.add_argument("--accept-all", action="store_true")
    new.add_argument("--custom", action="append", default=[], help="extra suggestion to add")

    show = sub.add_parser("show", help="print a saved trip")
    show.add_argument("trip_id")

    sub.add_parser("list", help="list saved trips")
    return parser


def _fail(wizard: PackingWizard) -> int:
    print(f"\n[{wizard.step.value}] {wizard.error or 'wizard did not advance'}", file=sys.stderr)
    return 1


def _apply_suitcase(wizard: PackingWizard, args: argparse.Namespace) -> None:
    if args.suitcase:
        wizard.set_suitcase_size(args.suitcase)
    if args.dims:
        sides = [s.strip() for s in args.dims.lower().replace("×", "x").split("x")]
        if len(sides) != 3:
            raise SystemExit(f"--dims expects LxWxD, got {args.dims!r}")
        for side, value in zip(("length_cm", "width_cm", "depth_cm"), sides):
            wizard.set_suitcase_dim(side, value)


def _select_suggestions(wizard: PackingWizard, args: argparse.Namespace) -> None:
    wanted = {text.strip().lower() for text in args.accept}
    for suggestion in wizard.draft.suggestions:
        if args.accept_all or suggestion.text.lower() in wanted:
            wizard.toggle_suggestion(suggestion.id, True)
    for text in args.custom:
        wizard.add_custom_suggestion(text)


async def _run_new(ctx: AppContext, args: argparse.Namespace) -> int:
    wizard = ctx.new_wizard()
    details = dict(
        destination=args.destination,
        start_date=args.start,
        end_date=args.end,
        airline=args.airline,
        travel_class=args.travel_class,
        purpose=args.purpose,
    )
    if args.limit is not None:
        details["airline_limit"] = args.limit
    wizard.update_details(**details)
    if not await wizard.next():
        return _fail(wizard)

    for item in args.item:
        wizard.add_item(item)
    if not await wizard.next() or wizard.error:
        return _fail(wizard)

    print("Suggestions:")
    for suggestion in wizard.draft.suggestions:
        reason = f"  ({suggestion.reason})" if suggestion.reason else ""
        print(f"  - {suggestion.text} [{suggestion.category}]{reason}")
    _select_suggestions(wizard, args)

    if args.luggage:
        await wizard.lookup_luggage(args.luggage)
        if wizard.error:
            print(wizard.error, file=sys.stderr)
    _apply_suitcase(wizard, args)

    if not await wizard.next() or wizard.error:
        return _fail(wizard)
    status = wizard.weight_status()
    print(f"\nWeight: {wizard.draft.total_weight:.2f} / {wizard.draft.airline_limit:.0f} kg ({status.percentage:.0f}%)")
    if wizard.draft.optimization is not None:
        dropped = ", ".join(item.name for item in wizard.draft.optimization.drop) or "nothing"
        print(f"Over the limit. Consider leaving behind: {dropped}")
    elif status.is_near_limit:
        print("Close to the limit.")

    if not await wizard.next() or wizard.error:
        return _fail(wizard)
    if not await wizard.next():
        return _fail(wizard)

    trip = await load_trip_summary(ctx=ctx, trip_id=wizard.saved_trip_id or "")
    if trip is not None:
        print("\n" + format_trip_summary(present_trip_summary(trip)))
    print(f"\nSaved trip {wizard.saved_trip_id}")
    return 0


async def _run_show(ctx: AppContext, trip_id: str) -> int:
    trip = await load_trip_summary(ctx=ctx, trip_id=trip_id)
    if trip is None:
        print(f"Trip not found: {trip_id}", file=sys.stderr)
        return 1
    print(format_trip_summary(present_trip_summary(trip)))
    return 0


async def _run_list(ctx: AppContext) -> int:
    trips = await list_trips(ctx=ctx)
    if not trips:
        print("No trips yet.")
        return 0
    for trip in trips:
        print(trip_card_line(trip))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    ctx = make_app_context()
    if args.command == "new":
        return asyncio.run(_run_new(ctx, args))
    if args.command == "show":
        return asyncio.run(_run_show(ctx, args.trip_id))
    return asyncio.run(_run_list(ctx))


if __name__ == "__main__":
    sys.exit(main())
