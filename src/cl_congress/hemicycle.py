"""Hemicycle seat layout for the Chamber of Deputies.

Seats are laid out on concentric half rings, pooled, and swept from the
left edge (angle pi) to the right edge (angle 0). Parties are handed out
along that sweep in contiguous blocks, ordered left wing, center, right
wing, with the largest left party at the far left and the largest right
party at the far right.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from cl_congress.affiliations import current_membership
from cl_congress.config import (
    DEFAULT_DIAMETER,
    HEMICYCLE_ROWS,
    ROW_BASE_SEATS,
    ROW_RADIUS_START,
    ROW_RADIUS_STEP,
    ROW_SEAT_INCREMENT,
)
from cl_congress.models import HemicycleLayout, Legislator, PartyGroup, Seat
from cl_congress.parties import (
    CENTER,
    DEFAULT_COLOR,
    INDEPENDENT_ID,
    INDEPENDENT_NAME,
    LEFT,
    PARTY_ALIGNMENTS,
    PARTY_COLORS,
    RIGHT,
    alignment_for,
    color_for,
)


@dataclass(frozen=True)
class _Position:
    x: float
    y: float
    angle: float


def seat_angle(index: int, seats_in_row: int) -> float:
    """Angle of the ``index``-th seat of a row, pi (left) down to 0 (right)."""
    if seats_in_row == 1:
        return math.pi / 2
    return math.pi * (1 - index / (seats_in_row - 1))


class SeatLayoutEngine:
    """Turns a set of legislators into hemicycle seats and a legend.

    Party colors and alignments are injected so callers (and tests) can
    supply their own party universe.
    """

    def __init__(
        self,
        colors: Mapping[str, str] = PARTY_COLORS,
        alignments: Mapping[str, str] = PARTY_ALIGNMENTS,
        default_color: str = DEFAULT_COLOR,
        rows: int = HEMICYCLE_ROWS,
        base_seats: int = ROW_BASE_SEATS,
        seat_increment: int = ROW_SEAT_INCREMENT,
    ):
        if rows < 1:
            raise ValueError(f"a hemicycle needs at least one row, got {rows}")
        self.colors = colors
        self.alignments = alignments
        self.default_color = default_color
        self.rows = rows
        self.base_seats = base_seats
        self.seat_increment = seat_increment

    # -- Parties ---------------------------------------------------------------

    def group_parties(
        self,
        legislators: Sequence[Legislator],
        now: Optional[datetime] = None,
    ) -> list[PartyGroup]:
        """Count seats per current party, in order of first appearance."""
        counts: dict[str, int] = {}
        names: dict[str, str] = {}
        for legislator in legislators:
            membership = current_membership(legislator.memberships, now)
            if membership is None:
                party_id, name = INDEPENDENT_ID, INDEPENDENT_NAME
            else:
                party_id, name = membership.key, membership.party_name or membership.key
            if party_id not in counts:
                counts[party_id] = 0
                names[party_id] = name
            counts[party_id] += 1

        return [
            PartyGroup(
                party_id=party_id,
                display_name=names[party_id],
                color=color_for(party_id, self.colors, self.default_color),
                alignment=alignment_for(party_id, self.alignments),
                seat_count=count,
            )
            for party_id, count in counts.items()
        ]

    @staticmethod
    def order_parties(groups: Sequence[PartyGroup]) -> list[PartyGroup]:
        """Left bloc, then center, then right bloc reversed.

        Each bloc is sorted by descending seat count (stable), so the
        biggest parties end up on the two wings.
        """
        buckets: dict[str, list[PartyGroup]] = {LEFT: [], CENTER: [], RIGHT: []}
        for group in groups:
            buckets[group.alignment].append(group)
        for alignment in buckets:
            buckets[alignment].sort(key=lambda g: -g.seat_count)
        return buckets[LEFT] + buckets[CENTER] + buckets[RIGHT][::-1]

    # -- Geometry --------------------------------------------------------------

    def seats_per_row(self, total: int) -> list[int]:
        """Nominal ``base + r * increment`` seats per row, corrected on the outer row.

        The difference between ``total`` and the nominal sum goes to the
        outermost row. When that would leave it with fewer than zero seats
        the remaining deficit is taken from the next row inward.
        """
        counts = [self.base_seats + row * self.seat_increment for row in range(self.rows)]
        counts[-1] += total - sum(counts)
        for row in range(len(counts) - 1, 0, -1):
            if counts[row] >= 0:
                break
            counts[row - 1] += counts[row]
            counts[row] = 0
        counts[0] = max(counts[0], 0)
        return counts

    def positions(self, total: int, diameter: float) -> list[_Position]:
        """All seat positions, swept left to right across rows."""
        center = diameter / 2
        pooled: list[_Position] = []
        for row, seats_in_row in enumerate(self.seats_per_row(total)):
            radius = center * (ROW_RADIUS_START + row * ROW_RADIUS_STEP)
            for index in range(seats_in_row):
                angle = seat_angle(index, seats_in_row)
                pooled.append(
                    _Position(
                        x=center + radius * math.cos(angle),
                        y=center - radius * math.sin(angle),
                        angle=angle,
                    )
                )
        pooled.sort(key=lambda p: -p.angle)
        return pooled

    # -- Layout ----------------------------------------------------------------

    def layout(
        self,
        legislators: Sequence[Legislator],
        diameter: float = DEFAULT_DIAMETER,
        now: Optional[datetime] = None,
    ) -> HemicycleLayout:
        legend = self.order_parties(self.group_parties(legislators, now))
        positions = iter(self.positions(len(legislators), diameter))

        seats: list[Seat] = []
        for group in legend:
            for _ in range(group.seat_count):
                position = next(positions)
                seats.append(
                    Seat(x=position.x, y=position.y, color=group.color, party_id=group.party_id)
                )

        return HemicycleLayout(seats=tuple(seats), legend=tuple(legend), diameter=diameter)


_DEFAULT_ENGINE = SeatLayoutEngine()


def layout(
    legislators: Sequence[Legislator],
    diameter: float = DEFAULT_DIAMETER,
    now: Optional[datetime] = None,
) -> HemicycleLayout:
    """Lay out ``legislators`` with the Chilean party tables."""
    return _DEFAULT_ENGINE.layout(legislators, diameter, now)
