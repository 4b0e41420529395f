"""Infrastructure layer - API clients, cache, durable state and repositories."""
from .api import RiotAPIClient, DataDragonClient
from .cache import MatchCache
from .repositories import MatchRepository, SummonerRepository
from .state import FrontierStore, AggregationStore
from .static import ItemCatalog

__all__ = [
    'RiotAPIClient',
    'DataDragonClient',
    'MatchCache',
    'MatchRepository',
    'SummonerRepository',
    'FrontierStore',
    'AggregationStore',
    'ItemCatalog',
]
