"""Summoner repository implementation."""
import logging
from typing import Optional

from domain.entities import Summoner
from domain.interfaces import ISummonerRepository
from infrastructure.api import RiotAPIClient

logger = logging.getLogger(__name__)


class SummonerRepository(ISummonerRepository):
    """Repository for summoner data using Riot API."""

    def __init__(self, api_client: RiotAPIClient):
        self.api_client = api_client

    async def get_summoner_by_id(self, summoner_id: str) -> Optional[Summoner]:
        """
        Resolve an encrypted summoner id to its PUUID.

        Returns:
            Summoner entity, or None when the response carries no PUUID
        """
        summoner_data = await self.api_client.get_summoner_by_id(summoner_id)
        return self._to_summoner(summoner_data, summoner_id=summoner_id)

    async def get_summoner_by_name(self, summoner_name: str) -> Optional[Summoner]:
        summoner_data = await self.api_client.get_summoner_by_name(summoner_name)
        return self._to_summoner(summoner_data, summoner_name=summoner_name)

    @staticmethod
    def _to_summoner(data, summoner_id: str = "", summoner_name: str = "") -> Optional[Summoner]:
        if not isinstance(data, dict) or not data.get('puuid'):
            return None
        return Summoner(
            puuid=str(data['puuid']),
            summoner_id=str(data.get('id') or summoner_id),
            summoner_name=str(data.get('name') or summoner_name),
        )
