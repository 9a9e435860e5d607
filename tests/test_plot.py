"""
Tests for hemicycle rendering in plot.py.

Run: uv run pytest tests/test_plot.py -v
"""

from datetime import datetime

from cl_congress.hemicycle import layout
from cl_congress.models import Legislator, PartyMembershipInterval
from cl_congress.plot import plot_hemicycle, seat_size


def _chamber(n: int) -> list[Legislator]:
    parties = ["PS", "RN", "DC", "UDI", "PC"]
    return [
        Legislator(
            id=str(i), first_name="N", paternal_surname=f"A{i}",
            memberships=(
                PartyMembershipInterval(
                    party_id=parties[i % 5], party_name=parties[i % 5], party_alias=parties[i % 5],
                    start_date=datetime(2022, 3, 11), end_date=datetime(2026, 3, 10),
                ),
            ),
        )
        for i in range(n)
    ]


class TestSeatSize:
    def test_clamped(self):
        assert seat_size(100) == 6.0
        assert seat_size(340) == 8.5
        assert seat_size(1000) == 12.0


class TestPlotHemicycle:
    def test_writes_png(self, tmp_path):
        path = tmp_path / "hemicycle.png"
        plot_hemicycle(layout(_chamber(155), diameter=340, now=datetime(2024, 6, 1)), path)
        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_empty_layout(self, tmp_path):
        path = tmp_path / "empty.png"
        plot_hemicycle(layout([], diameter=340), path)
        assert path.exists()
