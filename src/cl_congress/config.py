"""Configuration constants for the Chilean Chamber of Deputies client and hemicycle."""

from datetime import timedelta
from pathlib import Path

BASE_URL = "https://opendata.camara.cl/camaradiputados/WServices"
XML_NAMESPACE = "http://opendata.camara.cl/camaradiputados/v1"

REQUEST_DELAY = 0.2  # seconds between requests (rate-limited via lock)
REQUEST_TIMEOUT = 30  # seconds
MAX_RETRIES = 3
RETRY_DELAY = 5  # seconds between retries
MAX_WORKERS = 4  # concurrent fetch threads

USER_AGENT = "CongresoChileApp/1.0 (public open data client; opendata.camara.cl)"

DEFAULT_OUTPUT_DIR = Path("data")

# Hemicycle geometry. Changing any of these changes the rendered seat art.
DEFAULT_DIAMETER = 340
HEMICYCLE_ROWS = 5
ROW_BASE_SEATS = 20  # seats in the innermost row
ROW_SEAT_INCREMENT = 8  # extra seats per row moving outward
ROW_RADIUS_START = 0.5  # innermost radius as a fraction of diameter / 2
ROW_RADIUS_STEP = 0.12

# Same-party memberships separated by at most this gap are one continuous tenure.
MERGE_GAP = timedelta(days=1)
