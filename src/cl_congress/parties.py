"""Chilean party colors and left/center/right alignment.

Alignment is only used to order the hemicycle (left wing on the left,
right wing on the right); it is not published by the Chamber.
"""

from types import MappingProxyType

INDEPENDENT_ID = "IND"
INDEPENDENT_NAME = "Independiente"
DEFAULT_COLOR = "#A9A9A9"  # dark gray

LEFT = "left"
CENTER = "center"
RIGHT = "right"
ALIGNMENTS = (LEFT, CENTER, RIGHT)

PARTY_COLORS = MappingProxyType({
    # Right
    "PNL": "#00008B",  # Partido Nacional Libertario
    "PREP": "#0066CC",  # Partido Republicano
    "UDI": "#1E90FF",  # Unión Demócrata Independiente
    "RN": "#0080FF",  # Renovación Nacional
    "EVOP": "#4169E1",  # Evópoli
    "PSC": "#FF8C00",  # Partido Social Cristiano
    # Center
    "DEM": "#87CEEB",  # Demócratas
    "DC": "#FFA500",  # Democracia Cristiana
    "AMA": "#FFFF00",  # Amarillos por Chile
    # Center-left
    "PPD": "#FF6347",  # Partido por la Democracia
    "PS": "#DC143C",  # Partido Socialista
    "PR": "#FF4500",  # Partido Radical
    "LIBERAL": "#C71585",  # Partido Liberal
    "PAH": "#FF69B4",  # Acción Humanista
    "PH": "#FF1493",  # Partido Humanista
    # Left
    "PC": "#B22222",  # Partido Comunista
    "FA": "#9932CC",  # Frente Amplio
    "CS": "#8B008B",  # Comunes
    "PEV": "#4B0082",  # Partido Ecologista Verde
    "FRVS": "#228B22",  # Federación Regionalista Verde Social
    INDEPENDENT_ID: "#808080",
})

PARTY_ALIGNMENTS = MappingProxyType({
    "PC": LEFT,
    "FA": LEFT,
    "CS": LEFT,
    "PEV": LEFT,
    "FRVS": LEFT,
    "PH": LEFT,
    "PAH": LEFT,
    "PS": LEFT,
    "PPD": LEFT,
    "PR": LEFT,
    "LIBERAL": LEFT,
    "DC": CENTER,
    "DEM": CENTER,
    "AMA": CENTER,
    INDEPENDENT_ID: CENTER,
    "RN": RIGHT,
    "UDI": RIGHT,
    "EVOP": RIGHT,
    "PREP": RIGHT,
    "PNL": RIGHT,
    "PSC": RIGHT,
})


def color_for(party_id: str, colors=PARTY_COLORS, default: str = DEFAULT_COLOR) -> str:
    return colors.get(party_id, default)


def alignment_for(party_id: str, alignments=PARTY_ALIGNMENTS) -> str:
    """Unknown parties sit in the center."""
    alignment = alignments.get(party_id, CENTER)
    return alignment if alignment in ALIGNMENTS else CENTER
