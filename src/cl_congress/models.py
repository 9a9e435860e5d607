"""Data classes for legislators, party memberships, votes, committees and seats."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PartyMembershipInterval:
    """One raw party membership (Militancia) as published by the Chamber."""
    party_id: str
    party_name: str
    start_date: datetime
    end_date: Optional[datetime]  # None = open-ended
    party_alias: str = ""

    @property
    def key(self) -> str:
        """Short code used for colors and grouping, e.g. 'PS'."""
        return self.party_alias or self.party_id

    def contains(self, moment: datetime) -> bool:
        if moment < self.start_date:
            return False
        return self.end_date is None or moment <= self.end_date


@dataclass
class MergedAffiliation:
    """Consecutive memberships in the same party collapsed into one tenure."""
    party_id: str
    party_name: str
    party_alias: str
    start_date: datetime
    end_date: Optional[datetime]
    period_count: int = 1
    source_intervals: list[PartyMembershipInterval] = field(default_factory=list)

    @classmethod
    def from_interval(cls, interval: PartyMembershipInterval) -> "MergedAffiliation":
        return cls(
            party_id=interval.party_id,
            party_name=interval.party_name,
            party_alias=interval.party_alias,
            start_date=interval.start_date,
            end_date=interval.end_date,
            period_count=1,
            source_intervals=[interval],
        )

    @property
    def key(self) -> str:
        return self.party_alias or self.party_id


@dataclass(frozen=True)
class Legislator:
    """A deputy with the membership history attached to one legislative period."""
    id: str
    first_name: str
    paternal_surname: str
    maternal_surname: str = ""
    second_name: str = ""
    birth_date: Optional[datetime] = None
    rut: str = ""
    rut_dv: str = ""
    sex: str = ""
    memberships: tuple[PartyMembershipInterval, ...] = ()
    region: str = ""
    district: str = ""
    email: str = ""
    period_id: str = ""

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.second_name, self.paternal_surname, self.maternal_surname]
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class PartyGroup:
    """Legend entry: one party and the number of seats it holds."""
    party_id: str
    display_name: str
    color: str
    alignment: str  # left, center, right
    seat_count: int


@dataclass(frozen=True)
class Seat:
    """One rendered seat of the hemicycle."""
    x: float
    y: float
    color: str
    party_id: str


@dataclass(frozen=True)
class HemicycleLayout:
    """Seats (one per legislator) and legend, both in left-to-right order."""
    seats: tuple[Seat, ...]
    legend: tuple[PartyGroup, ...]
    diameter: float

    @property
    def total_seats(self) -> int:
        return len(self.seats)


@dataclass(frozen=True)
class Ballot:
    """One deputy's option on one vote."""
    legislator_id: str
    option: str  # Afirmativo, En Contra, Abstención, Dispensado, ...


@dataclass
class Vote:
    """Summary of one floor vote (Votacion)."""
    id: str
    description: str
    date: Optional[datetime]
    vote_type: str = ""
    result: str = ""
    quorum: str = ""
    yes_count: int = 0
    no_count: int = 0
    abstention_count: int = 0
    dispensed_count: int = 0
    ballots: list[Ballot] = field(default_factory=list)

    @property
    def total_votes(self) -> int:
        return self.yes_count + self.no_count + self.abstention_count + self.dispensed_count


@dataclass(frozen=True)
class CommitteeMember:
    legislator_id: str
    role: str  # Presidente, Miembro
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass
class Committee:
    """A standing or special committee (Comision)."""
    id: str
    name: str
    committee_type: str = ""
    president_id: Optional[str] = None
    members: list[CommitteeMember] = field(default_factory=list)
