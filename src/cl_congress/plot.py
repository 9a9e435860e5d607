"""Render a hemicycle layout to PNG."""

from pathlib import Path

import matplotlib

# Use non-interactive backend so rendering works headless.
# Must be called before importing pyplot.
matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from cl_congress.models import HemicycleLayout


def seat_size(diameter: float) -> float:
    """Seat marker diameter in layout units, clamped to 6..12."""
    return max(6.0, min(12.0, diameter / 40))


def plot_hemicycle(
    layout: HemicycleLayout,
    path: Path,
    title: str = "Composición de la Cámara",
) -> None:
    """Draw every seat as a dot and a legend of parties with seat counts."""
    d = layout.diameter
    fig, ax = plt.subplots(figsize=(10, 6.5))
    size = seat_size(d)
    # Marker area is in points^2; scale layout units to the 10-inch canvas.
    points_per_unit = 10 * 72 / max(d, 1)
    area = (size * points_per_unit * 0.9) ** 2

    if layout.seats:
        ax.scatter(
            [s.x for s in layout.seats],
            [s.y for s in layout.seats],
            c=[s.color for s in layout.seats],
            s=area,
            edgecolors="white",
            linewidths=0.5,
        )

    ax.set_xlim(-size, d + size)
    ax.set_ylim(d / 2 + size, -size)  # y grows downward in layout coordinates
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(f"{title}\n{layout.total_seats} Diputados")

    handles = [
        Patch(
            facecolor=g.color, edgecolor="black", linewidth=0.3,
            label=f"{g.party_id} ({g.seat_count})",
        )
        for g in layout.legend
    ]
    if handles:
        ax.legend(
            handles=handles,
            loc="upper center",
            bbox_to_anchor=(0.5, 0.02),
            ncol=min(len(handles), 6),
            frameon=False,
            fontsize=9,
        )

    fig.savefig(path, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  {path}")
