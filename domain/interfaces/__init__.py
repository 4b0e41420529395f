"""Domain interfaces."""
from .repository import IMatchRepository, ISummonerRepository

__all__ = [
    'IMatchRepository',
    'ISummonerRepository',
]
