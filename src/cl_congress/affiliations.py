"""Party membership history: current-party lookup and tenure consolidation.

The Chamber publishes one Militancia per legislative period, so a deputy
re-elected three times under the same party shows up as three back-to-back
memberships. ``consolidate`` collapses those into one continuous tenure:

    PS 2014-03-11 .. 2018-03-10
    PS 2018-03-11 .. 2022-03-10    ->    PS 2014-03-11 .. 2026-03-10 (3 periods)
    PS 2022-03-11 .. 2026-03-10

Everything here is a pure function of its arguments.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Optional

from cl_congress.config import MERGE_GAP
from cl_congress.models import MergedAffiliation, PartyMembershipInterval


def normalize_memberships(value) -> tuple[PartyMembershipInterval, ...]:
    """Coerce the feed's one-or-many membership field into a tuple.

    The web service emits a bare Militancia when there is only one and a
    list otherwise; callers past the parser only ever see a tuple.
    """
    if value is None:
        return ()
    if isinstance(value, PartyMembershipInterval):
        return (value,)
    return tuple(value)


def current_membership(
    intervals: Iterable[PartyMembershipInterval],
    now: Optional[datetime] = None,
) -> Optional[PartyMembershipInterval]:
    """Return the first membership whose date range contains ``now``."""
    moment = now or datetime.now()
    for interval in intervals:
        if interval.contains(moment):
            return interval
    return None


def _is_sequential(last: MergedAffiliation, interval: PartyMembershipInterval) -> bool:
    # An open-ended tenure overlaps whatever follows it.
    if last.end_date is None:
        return True
    # Negative gaps are overlapping upstream records; merge them anyway.
    return interval.start_date - last.end_date <= MERGE_GAP


def consolidate(intervals: Iterable[PartyMembershipInterval]) -> list[MergedAffiliation]:
    """Merge consecutive same-party memberships into continuous tenures.

    Memberships are sorted by start date (stable, so equal starts keep
    their input order) and scanned once. A membership extends the previous
    tenure when the party id matches and it starts no more than one day
    after the tenure ends; otherwise it opens a new tenure.

    Returns tenures oldest first.
    """
    ordered = sorted(intervals, key=lambda m: m.start_date)

    merged: list[MergedAffiliation] = []
    for interval in ordered:
        last = merged[-1] if merged else None
        same_party = last is not None and last.party_id == interval.party_id
        if same_party and _is_sequential(last, interval):
            last.end_date = interval.end_date
            last.period_count += 1
            last.source_intervals.append(interval)
        else:
            merged.append(MergedAffiliation.from_interval(interval))

    return merged


def most_recent_first(merged: Sequence[MergedAffiliation]) -> list[MergedAffiliation]:
    return sorted(merged, key=lambda m: m.start_date, reverse=True)


def reaffiliations(merged: Iterable[MergedAffiliation]) -> list[MergedAffiliation]:
    """Tenures that span more than one consecutive period."""
    return [m for m in merged if m.period_count > 1]


def is_current(merged: MergedAffiliation, current: Optional[PartyMembershipInterval]) -> bool:
    """Whether ``current`` falls inside one of the tenure's source memberships."""
    if current is None:
        return False
    for source in merged.source_intervals:
        if source.party_id != current.party_id or current.start_date < source.start_date:
            continue
        if source.end_date is None:
            return True
        if current.end_date is not None and current.end_date <= source.end_date:
            return True
    return False
