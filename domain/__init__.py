"""Domain layer - Business entities, enums, and interfaces."""
from .entities import (
    Match, Participant, Timeline, PurchaseEvent, Summoner, Build,
    AggregationKey, AggregationBucket, BuildEntry, ChampionTierRow,
)
from .enums import Region, QueueType, LadderTier, LadderQueue, Role
from .interfaces import IMatchRepository, ISummonerRepository

__all__ = [
    # Entities
    'Match',
    'Participant',
    'Timeline',
    'PurchaseEvent',
    'Summoner',
    'Build',
    'AggregationKey',
    'AggregationBucket',
    'BuildEntry',
    'ChampionTierRow',
    # Enums
    'Region',
    'QueueType',
    'LadderTier',
    'LadderQueue',
    'Role',
    # Interfaces
    'IMatchRepository',
    'ISummonerRepository',
]
