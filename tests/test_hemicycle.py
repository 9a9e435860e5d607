"""
Tests for the hemicycle seat layout in hemicycle.py.

Uses synthetic legislators whose only relevant attribute is the party
membership active at a fixed reference date, so every expected seat count,
party order and coordinate is hand-verifiable.

Run: uv run pytest tests/test_hemicycle.py -v
"""

import math
from datetime import datetime
from itertools import groupby

import pytest

from cl_congress.hemicycle import SeatLayoutEngine, layout, seat_angle
from cl_congress.models import Legislator, PartyMembershipInterval
from cl_congress.parties import DEFAULT_COLOR, PARTY_COLORS

NOW = datetime(2024, 6, 1)

# ── Fixtures ─────────────────────────────────────────────────────────────────


def _leg(party: str | None, n: int, name: str | None = None) -> Legislator:
    """A deputy whose current party is ``party`` (None = no current membership)."""
    if party is None:
        memberships = (
            PartyMembershipInterval(
                party_id="PS", party_name="Partido Socialista", party_alias="PS",
                start_date=datetime(2010, 3, 11), end_date=datetime(2014, 3, 10),
            ),
        )
    else:
        memberships = (
            PartyMembershipInterval(
                party_id=party, party_name=name or f"Partido {party}", party_alias=party,
                start_date=datetime(2022, 3, 11), end_date=datetime(2026, 3, 10),
            ),
        )
    return Legislator(id=str(n), first_name="Nombre", paternal_surname=f"Apellido{n}",
                      memberships=memberships)


def _chamber(*parties: tuple[str | None, int]) -> list[Legislator]:
    legislators = []
    for party, count in parties:
        for _ in range(count):
            legislators.append(_leg(party, len(legislators)))
    return legislators


def _runs(hemicycle) -> list[tuple[str, int]]:
    """Consecutive (party_id, length) blocks along the seat sequence."""
    return [(pid, len(list(g))) for pid, g in groupby(s.party_id for s in hemicycle.seats)]


def _angle(seat, diameter: float) -> float:
    c = diameter / 2
    return math.atan2(c - seat.y, seat.x - c)


# ── Seat counts ──────────────────────────────────────────────────────────────


class TestSeatCounts:
    """Seat count always equals the number of legislators."""

    @pytest.mark.parametrize("total", [0, 1, 2, 3, 20, 50, 127, 128, 129, 155, 180, 250])
    def test_seats_equal_legislators(self, total):
        hemicycle = layout(_chamber(("PS", total)), diameter=300, now=NOW)
        assert len(hemicycle.seats) == total

    @pytest.mark.parametrize("total", [0, 7, 129, 155, 200])
    def test_legend_sums_to_total(self, total):
        half = total // 2
        legs = _chamber(("PS", half), ("RN", total - half - total // 5), ("DC", total // 5))
        hemicycle = layout(legs, diameter=300, now=NOW)
        assert sum(g.seat_count for g in hemicycle.legend) == len(legs)

    @pytest.mark.parametrize("total", [0, 1, 3, 60, 127, 128, 155, 400])
    def test_rows_sum_to_total(self, total):
        counts = SeatLayoutEngine().seats_per_row(total)
        assert sum(counts) == total
        assert all(c >= 0 for c in counts)

    def test_nominal_allocation(self):
        """180 legislators need no adjustment: 20, 28, 36, 44, 52."""
        assert SeatLayoutEngine().seats_per_row(180) == [20, 28, 36, 44, 52]

    def test_adjustment_on_outer_row(self):
        """155 deputies: outer row absorbs the -25 adjustment."""
        assert SeatLayoutEngine().seats_per_row(155) == [20, 28, 36, 44, 27]

    def test_positive_adjustment(self):
        assert SeatLayoutEngine().seats_per_row(200) == [20, 28, 36, 44, 72]

    def test_deficit_carries_inward(self):
        assert SeatLayoutEngine().seats_per_row(100) == [20, 28, 36, 16, 0]

    def test_empty_chamber(self):
        hemicycle = layout([], diameter=300, now=NOW)
        assert hemicycle.seats == ()
        assert hemicycle.legend == ()


# ── Geometry ─────────────────────────────────────────────────────────────────


class TestGeometry:
    """Angles, radii and cartesian coordinates."""

    def test_seat_angle_ends(self):
        assert seat_angle(0, 5) == pytest.approx(math.pi)
        assert seat_angle(4, 5) == pytest.approx(0.0)
        assert seat_angle(2, 5) == pytest.approx(math.pi / 2)

    def test_single_seat_angle(self):
        assert seat_angle(0, 1) == pytest.approx(math.pi / 2)

    def test_single_seat_row_no_division_error(self):
        """129 legislators leave exactly one seat in the outer row."""
        engine = SeatLayoutEngine()
        assert engine.seats_per_row(129)[-1] == 1
        d = 200.0
        positions = engine.positions(129, d)
        outer_radius = (d / 2) * (0.5 + 4 * 0.12)
        outer = [
            p for p in positions
            if math.hypot(p.x - d / 2, p.y - d / 2) == pytest.approx(outer_radius)
        ]
        assert len(outer) == 1
        assert outer[0].angle == pytest.approx(math.pi / 2)
        assert outer[0].x == pytest.approx(d / 2)
        assert outer[0].y == pytest.approx(d / 2 - outer_radius)

    def test_inner_row_endpoints(self):
        d = 100.0
        positions = SeatLayoutEngine().positions(180, d)
        r0 = (d / 2) * 0.5
        leftmost = positions[0]
        assert leftmost.angle == pytest.approx(math.pi)
        # All five rows start at angle pi; the inner row sorts first among ties.
        assert leftmost.x == pytest.approx(d / 2 - r0)
        assert leftmost.y == pytest.approx(d / 2)

    def test_positions_sorted_by_descending_angle(self):
        positions = SeatLayoutEngine().positions(155, 300)
        angles = [p.angle for p in positions]
        assert angles == sorted(angles, reverse=True)

    def test_seats_in_upper_half(self):
        d = 300
        hemicycle = layout(_chamber(("PS", 155)), diameter=d, now=NOW)
        for seat in hemicycle.seats:
            assert 0 <= seat.x <= d
            assert seat.y <= d / 2 + 1e-9

    def test_diameter_scales_linearly(self):
        legs = _chamber(("PS", 80), ("RN", 75))
        small = layout(legs, diameter=100, now=NOW)
        large = layout(legs, diameter=300, now=NOW)
        for a, b in zip(small.seats, large.seats):
            assert (b.x - 150) == pytest.approx(3 * (a.x - 50))
            assert (b.y - 150) == pytest.approx(3 * (a.y - 50))


# ── Party ordering ───────────────────────────────────────────────────────────


class TestPartyOrdering:
    """Left bloc, center bloc, then right bloc reversed."""

    def test_left_center_right(self):
        legs = _chamber(("RN", 5), ("DC", 3), ("PC", 10))
        hemicycle = layout(legs, diameter=300, now=NOW)
        assert [g.party_id for g in hemicycle.legend] == ["PC", "DC", "RN"]
        assert _runs(hemicycle) == [("PC", 10), ("DC", 3), ("RN", 5)]

    def test_blocks_sweep_left_to_right(self):
        d = 300
        legs = _chamber(("RN", 5), ("DC", 3), ("PC", 10))
        hemicycle = layout(legs, diameter=d, now=NOW)
        angles = [_angle(s, d) for s in hemicycle.seats]
        assert all(a >= b - 1e-9 for a, b in zip(angles, angles[1:]))

    def test_left_bucket_descending(self):
        legs = _chamber(("PS", 3), ("PC", 7))
        hemicycle = layout(legs, diameter=300, now=NOW)
        assert [g.party_id for g in hemicycle.legend] == ["PC", "PS"]

    def test_right_bucket_largest_on_outer_edge(self):
        legs = _chamber(("RN", 5), ("UDI", 8), ("PS", 4))
        hemicycle = layout(legs, diameter=300, now=NOW)
        assert [g.party_id for g in hemicycle.legend] == ["PS", "RN", "UDI"]

    def test_ties_keep_first_encounter_order(self):
        legs = _chamber(("PPD", 2), ("PS", 2))
        hemicycle = layout(legs, diameter=300, now=NOW)
        assert [g.party_id for g in hemicycle.legend] == ["PPD", "PS"]

    def test_blocks_contiguous(self):
        legs = _chamber(("UDI", 23), ("PS", 13), ("RN", 25), ("PC", 12), ("DC", 8), ("FA", 21))
        hemicycle = layout(legs, diameter=340, now=NOW)
        runs = _runs(hemicycle)
        assert [pid for pid, _ in runs] == [g.party_id for g in hemicycle.legend]
        assert [n for _, n in runs] == [g.seat_count for g in hemicycle.legend]

    def test_idempotent(self):
        legs = _chamber(("UDI", 23), ("PS", 13), ("RN", 25), ("DC", 8))
        assert layout(legs, 340, NOW) == layout(legs, 340, NOW)


# ── Classification and colors ────────────────────────────────────────────────


class TestClassification:
    """Fallbacks for independents and unknown parties."""

    def test_no_current_membership_is_independent(self):
        hemicycle = layout(_chamber((None, 3)), diameter=300, now=NOW)
        (group,) = hemicycle.legend
        assert group.party_id == "IND"
        assert group.display_name == "Independiente"
        assert group.alignment == "center"
        assert group.color == PARTY_COLORS["IND"]

    def test_unknown_party_defaults(self):
        hemicycle = layout(_chamber(("XYZ", 2)), diameter=300, now=NOW)
        (group,) = hemicycle.legend
        assert group.alignment == "center"
        assert group.color == DEFAULT_COLOR
        assert all(s.color == DEFAULT_COLOR for s in hemicycle.seats)

    def test_display_name_from_membership(self):
        legs = [_leg("PS", 0, name="Partido Socialista de Chile")]
        hemicycle = layout(legs, diameter=300, now=NOW)
        assert hemicycle.legend[0].display_name == "Partido Socialista de Chile"

    def test_seat_colors_match_party(self):
        hemicycle = layout(_chamber(("PS", 4), ("RN", 4)), diameter=300, now=NOW)
        for seat in hemicycle.seats:
            assert seat.color == PARTY_COLORS[seat.party_id]


# ── Injected party universe ──────────────────────────────────────────────────


class TestInjectedTables:
    """Synthetic color/alignment tables replace the Chilean defaults."""

    def test_custom_tables(self):
        engine = SeatLayoutEngine(
            colors={"A": "#111111", "B": "#222222"},
            alignments={"A": "right", "B": "left"},
            default_color="#000000",
        )
        legs = _chamber(("A", 4), ("B", 2), ("C", 1))
        hemicycle = engine.layout(legs, diameter=100, now=NOW)
        assert [g.party_id for g in hemicycle.legend] == ["B", "C", "A"]
        assert [g.color for g in hemicycle.legend] == ["#222222", "#000000", "#111111"]

    def test_invalid_alignment_falls_back_to_center(self):
        engine = SeatLayoutEngine(alignments={"A": "far-left"})
        hemicycle = engine.layout(_chamber(("A", 1)), diameter=100, now=NOW)
        assert hemicycle.legend[0].alignment == "center"

    def test_custom_rows(self):
        engine = SeatLayoutEngine(rows=2, base_seats=5, seat_increment=5)
        assert engine.seats_per_row(15) == [5, 10]
        assert len(engine.layout(_chamber(("PS", 15)), 100, NOW).seats) == 15

    def test_zero_rows_rejected(self):
        with pytest.raises(ValueError):
            SeatLayoutEngine(rows=0)
