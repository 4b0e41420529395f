"""Match/timeline cache."""
from .match_cache import MatchCache

__all__ = ['MatchCache']
