"""Domain enumerations."""
from .region import Region
from .queue_type import QueueType
from .ladder import LadderTier, LadderQueue
from .role import Role

__all__ = [
    'Region',
    'QueueType',
    'LadderTier',
    'LadderQueue',
    'Role',
]
