"""CSV output for legislators, affiliation history, seats and votes."""

import csv
from dataclasses import asdict, fields
from datetime import datetime
from pathlib import Path
from typing import Optional

from cl_congress.affiliations import consolidate, current_membership
from cl_congress.models import Ballot, HemicycleLayout, Legislator, Seat, Vote

LEGISLATOR_FIELDS = [
    "id", "full_name", "sex", "birth_date", "region", "district", "email",
    "party_id", "party_name",
]
AFFILIATION_FIELDS = [
    "legislator_id", "party_id", "party_alias", "party_name",
    "start_date", "end_date", "period_count",
]
VOTE_FIELDS = [
    "id", "date", "description", "vote_type", "result", "quorum",
    "yes_count", "no_count", "abstention_count", "dispensed_count", "total_votes",
]


def _iso(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else ""


def legislator_row(legislator: Legislator, now: Optional[datetime] = None) -> dict:
    membership = current_membership(legislator.memberships, now)
    return {
        "id": legislator.id,
        "full_name": legislator.full_name,
        "sex": legislator.sex,
        "birth_date": _iso(legislator.birth_date),
        "region": legislator.region,
        "district": legislator.district,
        "email": legislator.email,
        "party_id": membership.key if membership else "",
        "party_name": membership.party_name if membership else "",
    }


def save_csvs(
    output_dir: Path,
    output_name: str,
    legislators: list[Legislator],
    layout: HemicycleLayout | None = None,
    votes: list[Vote] | None = None,
    now: Optional[datetime] = None,
) -> None:
    """Save collected data to CSV files; seat and vote files only when given."""
    print("\n" + "=" * 60)
    print("Saving CSV files...")
    print("=" * 60)
    output_dir.mkdir(parents=True, exist_ok=True)

    # Legislators
    legislators_file = output_dir / f"{output_name}_legislators.csv"
    with open(legislators_file, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=LEGISLATOR_FIELDS)
        writer.writeheader()
        for leg in sorted(legislators, key=lambda x: x.id):
            writer.writerow(legislator_row(leg, now))
    print(f"  {legislators_file} ({len(legislators)} rows)")

    # Consolidated affiliation history
    affiliations_file = output_dir / f"{output_name}_affiliations.csv"
    n_affiliations = 0
    with open(affiliations_file, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=AFFILIATION_FIELDS)
        writer.writeheader()
        for leg in sorted(legislators, key=lambda x: x.id):
            for merged in consolidate(leg.memberships):
                writer.writerow({
                    "legislator_id": leg.id,
                    "party_id": merged.party_id,
                    "party_alias": merged.party_alias,
                    "party_name": merged.party_name,
                    "start_date": _iso(merged.start_date),
                    "end_date": _iso(merged.end_date),
                    "period_count": merged.period_count,
                })
                n_affiliations += 1
    print(f"  {affiliations_file} ({n_affiliations} rows)")

    if layout is not None:
        seats_file = output_dir / f"{output_name}_seats.csv"
        with open(seats_file, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=[fld.name for fld in fields(Seat)])
            writer.writeheader()
            for seat in layout.seats:
                writer.writerow(asdict(seat))
        print(f"  {seats_file} ({len(layout.seats)} rows)")

    if votes is not None:
        votes_file = output_dir / f"{output_name}_votes.csv"
        with open(votes_file, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=VOTE_FIELDS)
            writer.writeheader()
            for vote in votes:
                row = {k: getattr(vote, k) for k in VOTE_FIELDS}
                row["date"] = _iso(vote.date)
                writer.writerow(row)
        print(f"  {votes_file} ({len(votes)} rows)")

        ballots_file = output_dir / f"{output_name}_ballots.csv"
        n_ballots = 0
        with open(ballots_file, "w", newline="", encoding="utf-8") as f:
            fieldnames = ["vote_id"] + [fld.name for fld in fields(Ballot)]
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for vote in votes:
                for ballot in vote.ballots:
                    writer.writerow({"vote_id": vote.id, **asdict(ballot)})
                    n_ballots += 1
        print(f"  {ballots_file} ({n_ballots} rows)")
