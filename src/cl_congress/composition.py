"""Chamber composition tables for a hemicycle layout."""

import polars as pl

from cl_congress.models import HemicycleLayout
from cl_congress.parties import ALIGNMENTS

_PARTY_SCHEMA = {
    "party_id": pl.Utf8,
    "display_name": pl.Utf8,
    "alignment": pl.Utf8,
    "color": pl.Utf8,
    "seats": pl.Int64,
}


def party_composition(layout: HemicycleLayout) -> pl.DataFrame:
    """One row per party in legend order, with its seat share."""
    df = pl.DataFrame(
        [
            (g.party_id, g.display_name, g.alignment, g.color, g.seat_count)
            for g in layout.legend
        ],
        schema=_PARTY_SCHEMA,
        orient="row",
    )
    total = float(df["seats"].sum()) if df.height else 0.0
    if total == 0:
        return df.with_columns(pl.lit(0.0).alias("seat_share"))
    return df.with_columns((pl.col("seats") / total).alias("seat_share"))


def effective_number_of_parties(layout: HemicycleLayout) -> float:
    """Laakso-Taagepera ENP: 1 / sum of squared seat shares (0.0 for an empty chamber)."""
    shares = party_composition(layout)["seat_share"]
    hhi = float((shares**2).sum()) if len(shares) else 0.0
    return 1.0 / hhi if hhi > 0 else 0.0


def bloc_composition(layout: HemicycleLayout) -> pl.DataFrame:
    """Seats and parties per alignment bloc, always left, center, right."""
    parties = party_composition(layout)
    blocs = parties.group_by("alignment").agg(
        pl.col("seats").sum().alias("seats"),
        pl.len().alias("parties"),
    )
    frame = pl.DataFrame({"alignment": list(ALIGNMENTS)}).with_row_index("order")
    return (
        frame.join(blocs, on="alignment", how="left")
        .sort("order")
        .drop("order")
        .with_columns(
            pl.col("seats").fill_null(0).cast(pl.Int64),
            pl.col("parties").fill_null(0).cast(pl.Int64),
        )
    )


def print_composition(layout: HemicycleLayout) -> None:
    enp = effective_number_of_parties(layout)
    print(f"  {layout.total_seats} diputados, ENP (seats) = {enp:.3f}")
    for row in party_composition(layout).iter_rows(named=True):
        print(
            f"    {row['party_id']:8s} {row['seats']:4d} seats ({row['seat_share']:.3f})"
            f"  {row['alignment']:6s}  {row['display_name']}"
        )
    for row in bloc_composition(layout).iter_rows(named=True):
        print(f"  {row['alignment']:6s} bloc: {row['seats']} seats, {row['parties']} parties")
