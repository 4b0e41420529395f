"""Infrastructure API module."""
from .riot_client import RiotAPIClient, REGIONAL, PLATFORM
from .ddragon_client import DataDragonClient
from .retry_after import parse_retry_after

__all__ = [
    'RiotAPIClient',
    'DataDragonClient',
    'REGIONAL',
    'PLATFORM',
    'parse_retry_after',
]
