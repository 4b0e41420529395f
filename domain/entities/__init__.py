"""Domain entities."""
from .participant import Participant
from .match import Match
from .timeline import Timeline, PurchaseEvent
from .summoner import Summoner
from .build import Build, build_signature
from .aggregation import AggregationKey, AggregationBucket
from .output import BuildEntry, ChampionTierRow

__all__ = [
    'Participant',
    'Match',
    'Timeline',
    'PurchaseEvent',
    'Summoner',
    'Build',
    'build_signature',
    'AggregationKey',
    'AggregationBucket',
    'BuildEntry',
    'ChampionTierRow',
]
