"""XML parsing for the Chamber of Deputies web service.

Responses use the default namespace ``http://opendata.camara.cl/camaradiputados/v1``.
BeautifulSoup's XML builder exposes those tags under their local names, so
lookups below use plain names such as ``DiputadoPeriodo`` or ``Militancia``.

Parsing is lenient: missing optional fields become empty strings or None,
and a membership without a usable start date is dropped.
"""

from datetime import datetime
from typing import Optional

from bs4 import BeautifulSoup, Tag

from cl_congress.affiliations import normalize_memberships
from cl_congress.errors import XMLParseError
from cl_congress.models import (
    Ballot,
    Committee,
    CommitteeMember,
    Legislator,
    PartyMembershipInterval,
    Vote,
)

_SEX_BY_VALUE = {"0": "Femenino", "1": "Masculino"}


def _soup(xml: str | bytes) -> BeautifulSoup:
    soup = BeautifulSoup(xml, "xml")
    if soup.find(True) is None:
        raise XMLParseError("response contains no XML elements")
    return soup


def _child(tag: Optional[Tag], name: str) -> Optional[Tag]:
    if tag is None:
        return None
    return tag.find(name, recursive=False)


def _is_nil(tag: Tag) -> bool:
    return tag.get("xsi:nil") == "true" or tag.get("nil") == "true"


def _text(tag: Optional[Tag], name: str) -> str:
    """Stripped text of a direct child, or '' when absent or nil."""
    child = _child(tag, name)
    if child is None or _is_nil(child):
        return ""
    return child.get_text(strip=True)


def _int(tag: Optional[Tag], name: str) -> int:
    try:
        return int(_text(tag, name))
    except ValueError:
        return 0


def parse_datetime(text: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime; timezone info is dropped."""
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


# -- Legislators ---------------------------------------------------------------


def parse_membership(tag: Tag) -> Optional[PartyMembershipInterval]:
    start = parse_datetime(_text(tag, "FechaInicio"))
    if start is None:
        return None
    party = _child(tag, "Partido")
    return PartyMembershipInterval(
        party_id=_text(party, "Id"),
        party_name=_text(party, "Nombre"),
        party_alias=_text(party, "Alias"),
        start_date=start,
        end_date=parse_datetime(_text(tag, "FechaTermino")),
    )


def parse_memberships(diputado: Tag) -> tuple[PartyMembershipInterval, ...]:
    """All Militancia entries of a Diputado, whether one or many."""
    container = _child(diputado, "Militancias")
    if container is None:
        return ()
    parsed = (parse_membership(tag) for tag in container.find_all("Militancia", recursive=False))
    return normalize_memberships(m for m in parsed if m is not None)


def _sex(diputado: Tag) -> str:
    tag = _child(diputado, "Sexo")
    if tag is None:
        return ""
    return tag.get_text(strip=True) or _SEX_BY_VALUE.get(tag.get("Valor", ""), "")


def _district(period: Optional[Tag]) -> str:
    tag = _child(period, "Distrito")
    if tag is not None:
        return tag.get("Numero") or _text(tag, "Numero") or tag.get_text(strip=True)
    return _text(_child(period, "Circunscripcion"), "Nombre")


def parse_legislator(diputado: Tag, period: Optional[Tag] = None) -> Legislator:
    """Build a Legislator from a Diputado element and its enclosing DiputadoPeriodo."""
    return Legislator(
        id=_text(diputado, "Id"),
        first_name=_text(diputado, "Nombre"),
        second_name=_text(diputado, "Nombre2"),
        paternal_surname=_text(diputado, "ApellidoPaterno"),
        maternal_surname=_text(diputado, "ApellidoMaterno"),
        birth_date=parse_datetime(_text(diputado, "FechaNacimiento")),
        rut=_text(diputado, "RUT"),
        rut_dv=_text(diputado, "RUTDV"),
        sex=_sex(diputado),
        memberships=parse_memberships(diputado),
        region=_text(_child(period, "Region"), "Nombre"),
        district=_district(period),
        email=_text(period, "Email"),
        period_id=_text(period, "IdPeriodo"),
    )


def parse_legislators(xml: str | bytes) -> list[Legislator]:
    """Parse a DiputadoPeriodo collection (or a bare Diputado collection)."""
    soup = _soup(xml)
    legislators = []
    periods = soup.find_all("DiputadoPeriodo")
    if periods:
        for period in periods:
            diputado = _child(period, "Diputado")
            if diputado is not None:
                legislators.append(parse_legislator(diputado, period))
        return legislators

    root = soup.find(True)
    for diputado in root.find_all("Diputado", recursive=False):
        legislators.append(parse_legislator(diputado))
    return legislators


def parse_legislator_detail(xml: str | bytes) -> Optional[Legislator]:
    soup = _soup(xml)
    period = soup.find("DiputadoPeriodo")
    diputado = _child(period, "Diputado") if period is not None else soup.find("Diputado")
    if diputado is None:
        return None
    return parse_legislator(diputado, period)


# -- Votes -----------------------------------------------------------------------


def parse_vote(tag: Tag) -> Vote:
    vote = Vote(
        id=_text(tag, "Id"),
        description=_text(tag, "Descripcion"),
        date=parse_datetime(_text(tag, "Fecha")),
        vote_type=_text(tag, "Tipo"),
        result=_text(tag, "Resultado"),
        quorum=_text(tag, "Quorum"),
        yes_count=_int(tag, "TotalSi") or _int(tag, "TotalAfirmativos"),
        no_count=_int(tag, "TotalNo") or _int(tag, "TotalNegativos"),
        abstention_count=_int(tag, "TotalAbstencion") or _int(tag, "TotalAbstenciones"),
        dispensed_count=_int(tag, "TotalDispensado") or _int(tag, "TotalDispensados"),
    )
    votos = _child(tag, "Votos")
    if votos is not None:
        for voto in votos.find_all("Voto", recursive=False):
            vote.ballots.append(
                Ballot(
                    legislator_id=_text(_child(voto, "Diputado"), "Id"),
                    option=_text(voto, "OpcionVoto"),
                )
            )
    return vote


def parse_votes(xml: str | bytes) -> list[Vote]:
    soup = _soup(xml)
    tags = soup.find_all("Votacion") or soup.find_all("VotacionProyectoLey")
    return [parse_vote(tag) for tag in tags]


def parse_vote_detail(xml: str | bytes) -> Vote:
    soup = _soup(xml)
    root = soup.find("Votacion") or soup.find(True)
    return parse_vote(root)


# -- Committees ------------------------------------------------------------------


def parse_committee(tag: Tag) -> Committee:
    president = _child(_child(tag, "Presidente"), "Diputado")
    president_id = _text(president, "Id") or None
    committee = Committee(
        id=_text(tag, "Id"),
        name=_text(tag, "Nombre"),
        committee_type=_text(tag, "Tipo"),
        president_id=president_id,
    )
    integrantes = _child(tag, "Integrantes")
    if integrantes is not None:
        for member in integrantes.find_all("DiputadoIntegrante", recursive=False):
            legislator_id = _text(_child(member, "Diputado"), "Id") or _text(member, "Id")
            if not legislator_id:
                continue
            committee.members.append(
                CommitteeMember(
                    legislator_id=legislator_id,
                    role="Presidente" if legislator_id == president_id else "Miembro",
                    start_date=parse_datetime(_text(member, "FechaInicio")),
                    end_date=parse_datetime(_text(member, "FechaTermino")),
                )
            )
    return committee


def parse_committees(xml: str | bytes) -> list[Committee]:
    soup = _soup(xml)
    return [parse_committee(tag) for tag in soup.find_all("Comision")]


def parse_committee_detail(xml: str | bytes) -> Committee:
    soup = _soup(xml)
    root = soup.find("Comision") or soup.find(True)
    return parse_committee(root)
