"""Summoner entity representing a player account."""
from dataclasses import dataclass


@dataclass
class Summoner:
    """The subset of summoner-v4 ``SummonerDTO`` the ladder bootstrap needs."""

    puuid: str
    summoner_id: str = ""
    summoner_name: str = ""
