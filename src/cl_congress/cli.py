"""Command-line interface for the Chamber of Deputies client and hemicycle."""

import argparse
from pathlib import Path

from cl_congress.affiliations import consolidate, current_membership, is_current, most_recent_first
from cl_congress.client import CamaraClient
from cl_congress.composition import print_composition
from cl_congress.config import DEFAULT_DIAMETER, DEFAULT_OUTPUT_DIR, REQUEST_DELAY
from cl_congress.errors import CongressError
from cl_congress.hemicycle import layout
from cl_congress.output import save_csvs
from cl_congress.plot import plot_hemicycle
from cl_congress.search import filter_legislators, vote_outcome


def _banner(text: str) -> None:
    print("=" * 60)
    print(text)
    print("=" * 60)


def _fmt_date(value) -> str:
    return value.date().isoformat() if value else "vigente"


# -- Commands ------------------------------------------------------------------


def cmd_hemicycle(client: CamaraClient, args: argparse.Namespace) -> None:
    _banner("Hemicycle: current Chamber of Deputies")
    legislators = client.current_legislators()
    hemicycle = layout(legislators, diameter=args.diameter)
    print_composition(hemicycle)

    save_csvs(args.output, "camara", legislators, layout=hemicycle)
    if not args.no_plot:
        plot_hemicycle(hemicycle, args.output / "camara_hemicycle.png")


def cmd_history(client: CamaraClient, args: argparse.Namespace) -> None:
    legislator = client.legislator(args.legislator_id)
    if legislator is None:
        print(f"Legislator {args.legislator_id} not found")
        raise SystemExit(1)

    merged = consolidate(legislator.memberships)
    current = current_membership(legislator.memberships)
    _banner(f"{legislator.full_name}: party history ({len(merged)})")
    for entry in most_recent_first(merged):
        flags = []
        if is_current(entry, current):
            flags.append("ACTUAL")
        if entry.period_count > 1:
            flags.append(f"{entry.period_count} períodos")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        print(
            f"  {entry.key:8s} {_fmt_date(entry.start_date)} - {_fmt_date(entry.end_date)}"
            f"  {entry.party_name}{suffix}"
        )


def cmd_legislators(client: CamaraClient, args: argparse.Namespace) -> None:
    legislators = client.current_legislators()
    matches = filter_legislators(legislators, args.search or "")
    _banner(f"{len(matches)} de {len(legislators)} legisladores")
    for leg in sorted(matches, key=lambda x: (x.paternal_surname, x.first_name)):
        membership = current_membership(leg.memberships)
        party = membership.key if membership else "IND"
        print(f"  {leg.id:>6s}  {party:8s} {leg.full_name}  {leg.region}")


def cmd_votes(client: CamaraClient, args: argparse.Namespace) -> None:
    votes = client.votes_by_year(args.year)
    if args.details:
        votes = client.vote_details([v.id for v in votes])
    _banner(f"{len(votes)} votaciones en {args.year}")
    for vote in votes:
        print(
            f"  {vote.id:>7s} {_fmt_date(vote.date)} [{vote_outcome(vote.result):8s}]"
            f" {vote.yes_count:3d}/{vote.no_count:3d}/{vote.abstention_count:3d}"
            f"  {vote.description[:80]}"
        )
    if args.details:
        save_csvs(args.output, f"votaciones_{args.year}", [], votes=votes)


def cmd_committees(client: CamaraClient, args: argparse.Namespace) -> None:
    committees = client.active_committees()
    _banner(f"{len(committees)} comisiones activas")
    for committee in committees:
        kind = f" ({committee.committee_type})" if committee.committee_type else ""
        print(f"  {committee.id:>5s}  {committee.name}{kind}")


# -- Entry point ---------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cl-congress",
        description="Explore the Chilean Chamber of Deputies open data web service.",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=REQUEST_DELAY,
        help=f"Seconds between requests (default: {REQUEST_DELAY})",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Cache XML responses in this directory (default: no cache)",
    )
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="Clear cached responses before running",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("hemicycle", help="Seat layout of the current Chamber")
    p.add_argument(
        "--diameter",
        type=float,
        default=DEFAULT_DIAMETER,
        help=f"Hemicycle diameter in layout units (default: {DEFAULT_DIAMETER})",
    )
    p.add_argument("--output", "-o", type=Path, default=DEFAULT_OUTPUT_DIR, help="Output directory")
    p.add_argument("--no-plot", action="store_true", help="Skip the PNG rendering")
    p.set_defaults(func=cmd_hemicycle)

    p = sub.add_parser("history", help="Consolidated party history of one legislator")
    p.add_argument("legislator_id", help="Deputy id (Diputado/Id)")
    p.set_defaults(func=cmd_history)

    p = sub.add_parser("legislators", help="List current legislators")
    p.add_argument("--search", "-s", default=None, help="Filter by name, party or region")
    p.set_defaults(func=cmd_legislators)

    p = sub.add_parser("votes", help="Votes of a year")
    p.add_argument("year", type=int)
    p.add_argument("--details", action="store_true", help="Fetch ballots and export CSV")
    p.add_argument("--output", "-o", type=Path, default=DEFAULT_OUTPUT_DIR, help="Output directory")
    p.set_defaults(func=cmd_votes)

    p = sub.add_parser("committees", help="List active committees")
    p.set_defaults(func=cmd_committees)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    client = CamaraClient(delay=args.delay, cache_dir=args.cache_dir)
    if args.clear_cache:
        client.clear_cache()

    try:
        args.func(client, args)
    except CongressError as e:
        print(f"Error: {e}")
        raise SystemExit(1) from e
    finally:
        stats = client.stats
        if stats.total:
            print(
                f"\n  {stats.total} requests, {stats.failed} failed"
                f" ({stats.success_rate:.1f}% ok)"
            )
