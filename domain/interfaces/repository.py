"""Repository interfaces for data access."""
from abc import ABC, abstractmethod
from typing import Optional, List
from ..entities import Match, Summoner, Timeline


class IMatchRepository(ABC):
    """Interface for match data repository."""

    @abstractmethod
    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        start: int = 0,
        count: int = 20,
        start_time: Optional[int] = None,
    ) -> List[str]:
        """Get one page of match IDs for a player."""
        pass

    @abstractmethod
    async def get_match(self, match_id: str, cache_write: bool = True) -> Match:
        """Get a single match by ID, reading through the cache."""
        pass

    @abstractmethod
    async def get_timeline(self, match_id: str) -> Timeline:
        """Get the timeline of a match, reading through the cache."""
        pass


class ISummonerRepository(ABC):
    """Interface for summoner data repository."""

    @abstractmethod
    async def get_summoner_by_id(self, summoner_id: str) -> Optional[Summoner]:
        """Resolve an encrypted ladder summoner id."""
        pass

    @abstractmethod
    async def get_summoner_by_name(self, summoner_name: str) -> Optional[Summoner]:
        """Resolve a summoner name (legacy ladder entries)."""
        pass
