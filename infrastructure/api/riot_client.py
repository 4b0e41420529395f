"""Riot Games API client."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote

import httpx

from config.settings import settings
from domain.enums import LadderTier, LadderQueue
from domain.errors import RiotAPIError, RetryBudgetExhaustedError
from .retry_after import parse_retry_after, rate_limit_backoff, server_error_backoff

logger = logging.getLogger(__name__)

REGIONAL = "regional"
PLATFORM = "platform"

USER_AGENT = "riot-meta-pipeline (meta build crawler)"

Sleeper = Callable[[float], Awaitable[Any]]


class RiotAPIClient:
    """Asynchronous Riot API client with bounded retries.

    Requests are issued one at a time by the caller; the client itself only
    paces retries. 429 honours ``Retry-After`` (seconds or HTTP-date), 5xx
    and transport errors use a short linear backoff, every other non-2xx
    raises immediately with the response body attached.
    """

    def __init__(
        self,
        api_key: str,
        *,
        regional_host: Optional[str] = None,
        platform_host: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        request_gap_ms: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.api_key        = api_key
        self.regional_host  = regional_host or settings.RIOT_REGION
        self.platform_host  = platform_host or settings.RIOT_PLATFORM
        self.timeout        = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self.max_retries    = settings.MAX_RETRIES if max_retries is None else max_retries
        self.request_gap_ms = settings.REQUEST_GAP_MS if request_gap_ms is None else request_gap_ms
        self.session: Optional[httpx.AsyncClient] = None
        self.last_status_code: Optional[int] = None
        self.requests_made = 0
        self._transport = transport
        self._sleep = sleep

    async def __aenter__(self):
        self.session = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"X-Riot-Token": self.api_key, "User-Agent": USER_AGENT},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        if self.session:
            await self.session.aclose()
            self.session = None

    def base_url(self, partition: str) -> str:
        host = self.platform_host if partition == PLATFORM else self.regional_host
        return f"https://{host}.api.riotgames.com"

    async def fetch_with_retry(
        self,
        url: str,
        partition: str = REGIONAL,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if self.session is None:
            raise RuntimeError("RiotAPIClient must be used as an async context manager")

        last_status: Optional[int] = None
        for attempt in range(self.max_retries + 1):
            retries_left = attempt < self.max_retries
            try:
                self.requests_made += 1
                response = await self.session.get(url, params=params)
            except httpx.TransportError as exc:
                if not retries_left:
                    raise RetryBudgetExhaustedError(
                        f"{partition} fetch failed after {self.max_retries} retries: {url} ({exc})",
                        url=url,
                        partition=partition,
                    ) from exc
                wait = server_error_backoff(attempt)
                logger.warning(f"network error ({partition}): {exc}; waiting {wait:.1f}s")
                await self._sleep(wait)
                continue

            status = response.status_code
            self.last_status_code = status
            last_status = status

            if status == 429:
                if not retries_left:
                    break
                wait = parse_retry_after(response.headers.get("Retry-After"))
                if wait is None:
                    wait = rate_limit_backoff(attempt)
                logger.warning(f"429 rate limited ({partition}); waiting {wait:.1f}s then retrying")
                await self._sleep(wait)
                continue

            if status >= 500:
                if not retries_left:
                    break
                wait = server_error_backoff(attempt)
                logger.warning(f"{status} server error ({partition}); waiting {wait:.1f}s then retrying")
                await self._sleep(wait)
                continue

            if not response.is_success:
                raise RiotAPIError(
                    f"{partition} fetch failed: {status} {url}",
                    status_code=status,
                    url=url,
                    partition=partition,
                    body=response.text,
                )

            if self.request_gap_ms > 0:
                await self._sleep(self.request_gap_ms / 1000.0)

            try:
                return response.json()
            except ValueError as exc:
                raise RiotAPIError(
                    f"{partition} returned non-JSON body: {url}",
                    status_code=status,
                    url=url,
                    partition=partition,
                    body=response.text,
                ) from exc

        raise RetryBudgetExhaustedError(
            f"{partition} fetch failed after {self.max_retries} retries: {last_status} {url}",
            status_code=last_status,
            url=url,
            partition=partition,
        )

    # ── Match API (regional) ───────────────────────────────────────────

    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        start: int = 0,
        count: int = 20,
        start_time: Optional[int] = None,
    ) -> List[str]:
        url = f"{self.base_url(REGIONAL)}/lol/match/v5/matches/by-puuid/{quote(puuid, safe='')}/ids"
        params: Dict[str, Any] = {"start": start, "count": min(count, 100)}
        if start_time:
            params["startTime"] = start_time
        result = await self.fetch_with_retry(url, REGIONAL, params)
        return [str(m) for m in result] if isinstance(result, list) else []

    async def get_match(self, match_id: str) -> Dict[str, Any]:
        url = f"{self.base_url(REGIONAL)}/lol/match/v5/matches/{quote(match_id, safe='')}"
        return await self.fetch_with_retry(url, REGIONAL)

    async def get_timeline(self, match_id: str) -> Dict[str, Any]:
        url = f"{self.base_url(REGIONAL)}/lol/match/v5/matches/{quote(match_id, safe='')}/timeline"
        return await self.fetch_with_retry(url, REGIONAL)

    # ── League / Summoner API (platform) ───────────────────────────────

    async def get_apex_league(self, tier: LadderTier, queue: LadderQueue) -> Dict[str, Any]:
        url = f"{self.base_url(PLATFORM)}/lol/league/v4/{tier.endpoint_segment}/by-queue/{queue.value}"
        return await self.fetch_with_retry(url, PLATFORM)

    async def get_summoner_by_id(self, summoner_id: str) -> Dict[str, Any]:
        url = f"{self.base_url(PLATFORM)}/lol/summoner/v4/summoners/{quote(summoner_id, safe='')}"
        return await self.fetch_with_retry(url, PLATFORM)

    async def get_summoner_by_name(self, name: str) -> Dict[str, Any]:
        url = f"{self.base_url(PLATFORM)}/lol/summoner/v4/summoners/by-name/{quote(name, safe='')}"
        return await self.fetch_with_retry(url, PLATFORM)
