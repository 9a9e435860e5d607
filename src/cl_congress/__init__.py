"""Chilean Chamber of Deputies - hemicycle layout and party history from opendata.camara.cl."""

__version__ = "0.1.0"

from cl_congress.affiliations import consolidate as consolidate
from cl_congress.client import CamaraClient as CamaraClient
from cl_congress.hemicycle import SeatLayoutEngine as SeatLayoutEngine
from cl_congress.hemicycle import layout as layout
from cl_congress.models import HemicycleLayout as HemicycleLayout
from cl_congress.models import Legislator as Legislator
from cl_congress.models import MergedAffiliation as MergedAffiliation
from cl_congress.models import PartyMembershipInterval as PartyMembershipInterval
