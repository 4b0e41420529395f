from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from domain.enums import LadderTier, LadderQueue
from domain.errors import LadderBootstrapError, PipelineError
from domain.interfaces import IMatchRepository, ISummonerRepository
from infrastructure.api import RiotAPIClient

logger = logging.getLogger(__name__)

MATCH_ID_RE = re.compile(r"([A-Z]{2,4}1?_\d{6,})")

_PUUID_KEYS = ("puuid", "playerPuuid", "player_puuid")
_SUMMONER_ID_KEYS = (
    "summonerId", "summonerID", "encryptedSummonerId", "summoner_id",
    "playerOrTeamId", "id",
)
_SUMMONER_NAME_KEYS = ("summonerName", "summoner_name", "playerOrTeamName", "name")


def _first_string(entry: dict, keys: Iterable[str]) -> str:
    for key in keys:
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _dedupe(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for v in values:
        if v and v not in seen:
            seen.add(v)
            ordered.append(v)
    return ordered


def parse_match_ids_from_urls(urls: Iterable[str]) -> List[str]:
    """Pull ``NA1_1234567``-shaped ids out of match-history URLs."""
    found = []
    for url in urls:
        found.extend(MATCH_ID_RE.findall(url or ""))
    return _dedupe(found)


class LadderBootstrapService:
    """
    Seeds the crawl frontier from the top of an apex ladder.

    Entries are ordered by league points, the top ``max_players`` are kept,
    and each one is resolved to a PUUID: a PUUID on the entry is used as is,
    otherwise the summoner id (or, lacking one, the summoner name) is looked
    up. Lookups run one at a time; a failed lookup is logged and skipped.
    """

    def __init__(
        self,
        api_client: RiotAPIClient,
        summoner_repo: ISummonerRepository,
        tier: LadderTier = LadderTier.CHALLENGER,
        queue: LadderQueue = LadderQueue.RANKED_SOLO_5x5,
        max_players: int = 250,
    ) -> None:
        self.api_client = api_client
        self.summoner_repo = summoner_repo
        self.tier = tier
        self.queue = queue
        self.max_players = max_players

    async def bootstrap_puuids(self) -> List[str]:
        league = await self.api_client.get_apex_league(self.tier, self.queue)
        entries = [e for e in (league or {}).get("entries") or [] if isinstance(e, dict)]
        entries.sort(key=lambda e: int(e.get("leaguePoints") or 0), reverse=True)
        top = entries[: max(0, self.max_players)]
        logger.info(
            f"ladder {self.tier.value} {self.queue.value}: entries={len(entries)}, using={len(top)} (top LP)"
        )

        puuids: List[str] = []
        failed = missing = by_name = 0
        for entry in top:
            direct = _first_string(entry, _PUUID_KEYS)
            if direct:
                puuids.append(direct)
                continue

            summoner_id = _first_string(entry, _SUMMONER_ID_KEYS)
            summoner_name = _first_string(entry, _SUMMONER_NAME_KEYS)
            if not summoner_id and not summoner_name:
                missing += 1
                continue

            try:
                if summoner_id:
                    summoner = await self.summoner_repo.get_summoner_by_id(summoner_id)
                else:
                    by_name += 1
                    summoner = await self.summoner_repo.get_summoner_by_name(summoner_name)
            except PipelineError as exc:
                failed += 1
                logger.warning(f"ladder: summoner resolve failed for {summoner_name or summoner_id}: {exc}")
                continue

            if summoner is None:
                failed += 1
                continue
            puuids.append(summoner.puuid)

        unique = _dedupe(puuids)
        logger.info(
            f"ladder puuids resolved: ok={len(puuids)} fail={failed} missing={missing} "
            f"by_name={by_name} unique={len(unique)}"
        )
        if not unique:
            raise LadderBootstrapError(
                f"ladder bootstrap produced 0 PUUIDs from {len(top)} {self.tier.value} entries"
            )
        return unique

    @staticmethod
    async def puuids_from_seed_matches(
        match_repo: IMatchRepository,
        match_ids: Iterable[str],
    ) -> List[str]:
        """Participants of explicitly seeded matches. Seeds are not cached."""
        puuids: List[str] = []
        for match_id in _dedupe(match_ids):
            try:
                match = await match_repo.get_match(match_id, cache_write=False)
            except PipelineError as exc:
                logger.warning(f"seed match {match_id} failed: {exc}")
                continue
            puuids.extend(p.puuid for p in match.participants if p.puuid)
        unique = _dedupe(puuids)
        logger.info(f"seed matches contributed {len(unique)} puuids")
        return unique


def seed_match_ids(ids: Iterable[str], urls: Iterable[str]) -> List[str]:
    return _dedupe(list(ids) + parse_match_ids_from_urls(urls))


__all__ = [
    "LadderBootstrapService",
    "parse_match_ids_from_urls",
    "seed_match_ids",
    "MATCH_ID_RE",
]
