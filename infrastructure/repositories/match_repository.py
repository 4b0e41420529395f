"""Match repository implementation."""
import logging
from typing import Optional, List

from domain.entities import Match, Participant, Timeline, PurchaseEvent
from domain.errors import MatchShapeError
from domain.interfaces import IMatchRepository
from infrastructure.api import RiotAPIClient
from infrastructure.cache import MatchCache

logger = logging.getLogger(__name__)

ITEM_SLOTS = 7  # item0..item6
ITEM_PURCHASED = "ITEM_PURCHASED"


class MatchRepository(IMatchRepository):
    """Repository for match data: Riot API behind the on-disk match cache."""

    def __init__(self, api_client: RiotAPIClient, cache: MatchCache):
        """
        Initialize match repository.

        Args:
            api_client: Riot API client instance (match id pages are never cached)
            cache: Read-through cache for match and timeline documents
        """
        self.api_client = api_client
        self.cache = cache

    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        start: int = 0,
        count: int = 20,
        start_time: Optional[int] = None,
    ) -> List[str]:
        """Get one page of match IDs, newest first."""
        return await self.api_client.get_match_ids_by_puuid(
            puuid=puuid,
            start=start,
            count=count,
            start_time=start_time,
        )

    async def get_match(self, match_id: str, cache_write: bool = True) -> Match:
        """
        Get a single match by ID.

        Args:
            match_id: Match identifier
            cache_write: Persist a freshly fetched document immediately. The
                crawl passes False and calls ``store_match`` once the match
                passes its filters.

        Raises:
            RiotAPIError: the fetch failed
            MatchShapeError: the document has no ``info`` section
        """
        data = await self.cache.get_match(match_id, cache_write=cache_write)
        return parse_match(data, match_id)

    def store_match(self, match: Match) -> bool:
        return self.cache.write_match(match.match_id, match.raw)

    async def get_timeline(self, match_id: str) -> Timeline:
        data = await self.cache.get_timeline(match_id)
        return parse_timeline(data, match_id)


def _int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_participant(p_data: dict) -> Participant:
    """Parse raw participant data into Participant entity."""
    return Participant(
        puuid=str(p_data.get('puuid') or ''),
        participant_id=_int(p_data.get('participantId')),
        champion_id=_int(p_data.get('championId')),
        team_position=str(p_data.get('teamPosition') or ''),
        win=bool(p_data.get('win', False)),
        items=tuple(_int(p_data.get(f'item{slot}')) for slot in range(ITEM_SLOTS)),
        summoner1_id=_int(p_data.get('summoner1Id')),
        summoner2_id=_int(p_data.get('summoner2Id')),
    )


def parse_match(data: dict, match_id: Optional[str] = None) -> Match:
    """Parse raw API match data into Match entity.

    ``match_id`` is the id the document was requested under; it wins over
    ``metadata.matchId`` so a cache file is always addressable by its name.
    """
    if not isinstance(data, dict):
        raise MatchShapeError(f"match {match_id}: document is not an object")
    info = data.get('info')
    if not isinstance(info, dict):
        raise MatchShapeError(f"match {match_id}: missing info section")
    metadata = data.get('metadata') if isinstance(data.get('metadata'), dict) else {}

    participants = [
        parse_participant(p)
        for p in info.get('participants') or []
        if isinstance(p, dict)
    ]

    bans = []
    for team in info.get('teams') or []:
        for ban in (team.get('bans') if isinstance(team, dict) else None) or []:
            champion_id = _int(ban.get('championId')) if isinstance(ban, dict) else 0
            if champion_id > 0:
                bans.append(champion_id)

    return Match(
        match_id=match_id or str(metadata.get('matchId') or ''),
        queue_id=_int(info.get('queueId')),
        game_version=str(info.get('gameVersion') or ''),
        game_creation=_int(info.get('gameCreation')),
        participants=participants,
        bans=bans,
        raw=data,
    )


def parse_timeline(data: dict, match_id: Optional[str] = None) -> Timeline:
    """Flatten ``info.frames[].events[]`` to the purchase events."""
    if not isinstance(data, dict) or not isinstance(data.get('info'), dict):
        raise MatchShapeError(f"timeline {match_id}: missing info section")
    metadata = data.get('metadata') if isinstance(data.get('metadata'), dict) else {}

    purchases = []
    for frame in data['info'].get('frames') or []:
        for event in (frame.get('events') if isinstance(frame, dict) else None) or []:
            if not isinstance(event, dict) or event.get('type') != ITEM_PURCHASED:
                continue
            purchases.append(PurchaseEvent(
                timestamp=_int(event.get('timestamp')),
                participant_id=_int(event.get('participantId')),
                item_id=_int(event.get('itemId')),
            ))

    return Timeline(
        match_id=match_id or str(metadata.get('matchId') or ''),
        participant_puuids=[str(p) for p in metadata.get('participants') or []],
        purchases=purchases,
    )
