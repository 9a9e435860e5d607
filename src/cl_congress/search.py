"""Search filters for legislator lists and vote outcome classification."""

import unicodedata
from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from cl_congress.affiliations import current_membership
from cl_congress.models import Legislator

APPROVED = "approved"
REJECTED = "rejected"
OTHER = "other"

OUTCOME_COLORS = {
    APPROVED: "#4CAF50",
    REJECTED: "#F44336",
    OTHER: "#FFC107",
}


def fold(text: str) -> str:
    """Lowercase and strip accents, so 'Región' matches 'region'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


def _haystack(legislator: Legislator, now: Optional[datetime]) -> list[str]:
    fields = [legislator.full_name, legislator.region]
    membership = current_membership(legislator.memberships, now)
    if membership is not None:
        fields += [membership.party_name, membership.key]
    return [fold(f) for f in fields if f]


def filter_legislators(
    legislators: Sequence[Legislator],
    query: str,
    now: Optional[datetime] = None,
) -> list[Legislator]:
    """Legislators whose name, current party or region contains ``query``.

    A blank query matches everyone.
    """
    needle = fold(query.strip())
    if not needle:
        return list(legislators)
    return [
        leg for leg in legislators
        if any(needle in field for field in _haystack(leg, now))
    ]


def vote_outcome(result: str) -> str:
    """Classify a vote result label such as 'Aprobado' or 'Rechazada'."""
    label = fold(result or "")
    if "aprobad" in label:
        return APPROVED
    if "rechazad" in label:
        return REJECTED
    return OTHER
