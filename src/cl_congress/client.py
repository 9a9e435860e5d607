"""HTTP client for the Chamber of Deputies open data web service.

Every endpoint is a GET on ``{BASE_URL}/{Service}.asmx/{method}`` returning
XML. The client rate-limits and retries requests, optionally caches
response bodies on disk, and hands the XML to ``cl_congress.parsing``.
"""

import random
import shutil
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from tqdm import tqdm

from cl_congress.config import (
    BASE_URL,
    MAX_RETRIES,
    MAX_WORKERS,
    REQUEST_DELAY,
    REQUEST_TIMEOUT,
    RETRY_DELAY,
    USER_AGENT,
)
from cl_congress.errors import CamaraAPIError
from cl_congress.models import Committee, Legislator, Vote
from cl_congress.parsing import (
    parse_committee_detail,
    parse_committees,
    parse_legislator_detail,
    parse_legislators,
    parse_vote_detail,
    parse_votes,
)


@dataclass(frozen=True)
class FetchResult:
    """Result of an HTTP fetch attempt."""

    url: str
    body: bytes | None
    status_code: int | None = None
    error_type: str | None = None  # permanent, transient, timeout, connection
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.body is not None


@dataclass
class RequestStats:
    """Request counters, shared by whoever passes the same instance around."""

    total: int = 0
    failed: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, ok: bool) -> None:
        with self._lock:
            self.total += 1
            if not ok:
                self.failed += 1

    @property
    def success_rate(self) -> float:
        """Percentage of successful requests (0.0 before any request)."""
        if self.total == 0:
            return 0.0
        return (self.total - self.failed) / self.total * 100


class CamaraClient:
    """Fetches legislators, votes and committees from opendata.camara.cl."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        delay: float = REQUEST_DELAY,
        cache_dir: Path | None = None,
        stats: RequestStats | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.delay = delay
        self.cache_dir = cache_dir
        self.stats = stats if stats is not None else RequestStats()
        self.http = requests.Session()
        self.http.headers.update({"User-Agent": USER_AGENT})

        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=MAX_WORKERS)
        self.http.mount("https://", adapter)
        self.http.mount("http://", adapter)

        # Thread-safe rate limiting
        self._rate_lock = threading.Lock()
        self._last_request_time = 0.0

        if self.cache_dir is not None:
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    # -- HTTP helpers ----------------------------------------------------------

    def url_for(self, service: str, method: str) -> str:
        return f"{self.base_url}/{service}.asmx/{method}"

    def clear_cache(self) -> None:
        """Delete all cached responses."""
        if self.cache_dir is not None and self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            print(f"  Cleared cache: {self.cache_dir}")

    def _cache_file(self, url: str, params: dict[str, str]) -> Path | None:
        if self.cache_dir is None:
            return None
        query = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
        key = f"{url}?{query}".replace("/", "_").replace(":", "_").replace("?", "_")
        return self.cache_dir / f"{key[-200:]}.xml"

    def _rate_limit(self) -> None:
        """Apply thread-safe rate limiting before an HTTP request."""
        with self._rate_lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self.delay:
                time.sleep(self.delay - elapsed)
            self._last_request_time = time.monotonic()

    def _get(self, url: str, params: dict[str, str] | None = None) -> FetchResult:
        """Fetch a URL with retries, caching, and rate limiting.

        Retry strategy varies by error type:
        - 404: max 2 attempts (one retry), no backoff
        - 5xx: exponential backoff (5s, 10s, 20s)
        - Timeout: exponential backoff
        - Connection error: fixed 5s delay
        - Other 4xx: no retry
        """
        params = params or {}
        cache_file = self._cache_file(url, params)
        if cache_file is not None and cache_file.exists():
            return FetchResult(url=url, body=cache_file.read_bytes())

        last_error = ""
        last_status: int | None = None
        last_error_type: str | None = None
        max_attempts = MAX_RETRIES
        retry_delay = RETRY_DELAY
        attempt = 0

        while attempt < max_attempts:
            try:
                self._rate_limit()
                started = time.monotonic()
                resp = self.http.get(url, params=params, timeout=REQUEST_TIMEOUT)
                resp.raise_for_status()
                body = resp.content
                self.stats.record(ok=True)

                if cache_file is not None:
                    try:
                        cache_file.write_bytes(body)
                    except OSError:
                        pass  # cache write failure is non-fatal
                elapsed = time.monotonic() - started
                print(f"  GET {url} ({len(body)} bytes, {elapsed:.2f}s)")
                return FetchResult(url=url, body=body, status_code=resp.status_code)

            except requests.HTTPError as e:
                self.stats.record(ok=False)
                last_status = e.response.status_code if e.response is not None else None
                last_error = str(e)
                if last_status == 404:
                    last_error_type = "permanent"
                    max_attempts = min(max_attempts, 2)
                    retry_delay = RETRY_DELAY
                elif last_status is not None and last_status >= 500:
                    last_error_type = "transient"
                    retry_delay = RETRY_DELAY * (2**attempt) * (1 + random.uniform(0, 0.5))
                else:
                    # Other 4xx, no retry
                    last_error_type = "permanent"
                    print(f"  Failed: {url}: {e}")
                    break

            except requests.Timeout as e:
                self.stats.record(ok=False)
                last_error = str(e)
                last_error_type = "timeout"
                last_status = None
                retry_delay = RETRY_DELAY * (2**attempt) * (1 + random.uniform(0, 0.5))

            except requests.RequestException as e:
                self.stats.record(ok=False)
                last_error = str(e)
                last_error_type = "connection"
                last_status = None
                retry_delay = RETRY_DELAY

            attempt += 1
            if attempt < max_attempts:
                print(f"  Retry {attempt}/{max_attempts} for {url}: {last_error}")
                time.sleep(retry_delay)
            else:
                print(f"  Failed after {max_attempts} attempts: {url}: {last_error}")

        return FetchResult(
            url=url,
            body=None,
            status_code=last_status,
            error_type=last_error_type,
            error_message=last_error,
        )

    def _request(self, service: str, method: str, **params: str) -> bytes:
        """GET an endpoint and return its XML body, raising on failure."""
        url = self.url_for(service, method)
        result = self._get(url, params)
        if not result.ok:
            raise CamaraAPIError(
                url=url,
                error_type=result.error_type or "connection",
                message=result.error_message or "",
                status_code=result.status_code,
            )
        return result.body

    # -- Legislators -----------------------------------------------------------

    def current_legislators(self) -> list[Legislator]:
        body = self._request("WSDiputado", "retornarDiputadosPeriodoActual")
        return parse_legislators(body)

    def legislator(self, legislator_id: str | int) -> Legislator | None:
        body = self._request("WSDiputado", "retornarDiputado", prmDiputadoId=str(legislator_id))
        return parse_legislator_detail(body)

    def legislators_by_period(self, period_id: str | int) -> list[Legislator]:
        body = self._request("WSDiputado", "retornarDiputadosXPeriodo", prmPeriodoId=str(period_id))
        return parse_legislators(body)

    # -- Votes -----------------------------------------------------------------

    def votes_by_year(self, year: int) -> list[Vote]:
        body = self._request("WSLegislativo", "retornarVotacionesXAnno", prmAnno=str(year))
        return parse_votes(body)

    def votes_by_bill(self, bulletin: str) -> list[Vote]:
        """Votes on a bill, by bulletin number such as '12345-07'."""
        body = self._request(
            "WSLegislativo", "retornarVotacionesXProyectoLey", prmNumeroBoletin=bulletin
        )
        return parse_votes(body)

    def vote_detail(self, vote_id: str | int) -> Vote:
        body = self._request("WSLegislativo", "retornarVotacionDetalle", prmVotacionId=str(vote_id))
        return parse_vote_detail(body)

    def vote_details(self, vote_ids: list[str]) -> list[Vote]:
        """Fetch several vote details concurrently.

        Votes whose fetch fails are skipped (the failure is printed);
        results come back in the order of ``vote_ids``.
        """
        url = self.url_for("WSLegislativo", "retornarVotacionDetalle")
        results: dict[str, FetchResult] = {}
        with ThreadPoolExecutor(max_workers=MAX_WORKERS) as executor:
            future_to_id = {
                executor.submit(self._get, url, {"prmVotacionId": str(vote_id)}): vote_id
                for vote_id in vote_ids
            }
            for future in tqdm(
                as_completed(future_to_id),
                total=len(future_to_id),
                desc="Fetching votes",
                unit="vote",
            ):
                results[future_to_id[future]] = future.result()

        votes = []
        for vote_id in vote_ids:
            result = results[vote_id]
            if not result.ok:
                print(f"  FAILED: vote {vote_id} ({result.error_type}: {result.error_message})")
                continue
            votes.append(parse_vote_detail(result.body))
        return votes

    # -- Committees ------------------------------------------------------------

    def active_committees(self) -> list[Committee]:
        body = self._request("WSComision", "retornarComisionesVigentes")
        return parse_committees(body)

    def committee(self, committee_id: str | int) -> Committee:
        body = self._request("WSComision", "retornarComision", prmComisionId=str(committee_id))
        return parse_committee_detail(body)
