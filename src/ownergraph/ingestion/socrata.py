"""
Socrata Open Data (SODA) client for NYC Open Data.

Issues SoQL queries against ``{base_url}/{dataset}.json``. All transport
and payload failures surface as SourceError.
"""

import logging
from typing import Any, Iterable, Optional

import httpx

from ownergraph.config import settings
from ownergraph.ingestion.base_adapter import SourceError
from ownergraph.ingestion.rate_limiter import (
    RateLimitConfig,
    RateLimitedClient,
    RateLimitExhausted,
    RateLimiter,
)

logger = logging.getLogger(__name__)


def soql_literal(value: Any) -> str:
    """Quote a value as a SoQL string literal."""
    return "'" + str(value).replace("'", "''") + "'"


def soql_in(values: Iterable[Any]) -> str:
    """Comma-separated literal list for ``IN (...)``."""
    return ",".join(soql_literal(v) for v in values)


def soql_like_contains(value: str) -> str:
    """
    Literal for ``LIKE`` matching ``value`` anywhere.

    SoQL has no ``ESCAPE`` clause, so a ``%`` in ``value`` is narrowed to
    ``_``: each wildcard in the input matches exactly one character.
    """
    escaped = str(value).replace("'", "''").replace("%", "_")
    return f"'%{escaped}%'"


def default_rate_limiter() -> RateLimiter:
    return RateLimiter(
        RateLimitConfig(
            requests_per_window=settings.socrata_requests_per_window,
            window_seconds=settings.socrata_window_seconds,
            max_retry_attempts=settings.socrata_max_retry_attempts,
        )
    )


class SocrataClient:
    """Thin SoQL query client."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        app_token: Optional[str] = None,
        timeout: Optional[float] = None,
        rate_limiter: Optional[RateLimiter] = None,
        client: Optional[httpx.AsyncClient] = None,
        source_name: str = "socrata",
    ):
        """
        Args:
            base_url: SODA resource root (defaults to settings)
            app_token: Socrata app token (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            rate_limiter: Shared limiter; one is created when omitted
            client: Pre-built httpx client (useful for testing)
            source_name: Name used in SourceError messages
        """
        self.base_url = (base_url or settings.socrata_base_url).rstrip("/")
        self.source_name = source_name
        token = app_token if app_token is not None else settings.socrata_app_token
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["X-App-Token"] = token

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout or settings.socrata_timeout_seconds,
        )
        self._http = RateLimitedClient(self._client, rate_limiter or default_rate_limiter())

    async def query(
        self,
        dataset: str,
        where: str,
        *,
        select: Optional[str] = None,
        order: Optional[str] = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """
        Run a SoQL query and return the decoded rows.

        Raises:
            SourceError: on transport errors, non-2xx responses, throttling
                that outlasts retries, or a payload that is not a JSON list
        """
        params = {"$where": where, "$limit": str(limit)}
        if select:
            params["$select"] = select
        if order:
            params["$order"] = order

        url = f"{self.base_url}/{dataset}.json"
        try:
            response = await self._http.get(url, params=params, headers=self._headers)
            rows = response.json()
        except (httpx.HTTPError, RateLimitExhausted) as e:
            raise SourceError(self.source_name, f"{dataset} query failed: {e}") from e
        except ValueError as e:
            raise SourceError(self.source_name, f"{dataset} returned invalid JSON") from e

        if not isinstance(rows, list):
            raise SourceError(self.source_name, f"{dataset} returned {type(rows).__name__}, expected list")

        logger.debug(f"{dataset}: {len(rows)} rows for {where}")
        return [r for r in rows if isinstance(r, dict)]

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()
