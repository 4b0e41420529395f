"""Aggregation key and bucket for the incremental build counters."""
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

from ..enums import Role


class AggregationKey(NamedTuple):
    """Composite key (patch, queue, champion, role, build signature)."""

    patch: str
    queue_id: int
    champion_id: int
    role: Role
    signature: str


@dataclass
class AggregationBucket:
    """Counters for one key. ``wins <= games`` always holds."""

    games: int = 0
    wins: int = 0
    boots: Optional[int] = None
    core: list[int] = field(default_factory=list)
    last_seen_at: int = 0  # epoch milliseconds

    @property
    def winrate(self) -> float:
        return self.wins / self.games if self.games else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            'games': self.games,
            'wins': self.wins,
            'boots': self.boots,
            'core': list(self.core),
            'lastSeenAt': self.last_seen_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'AggregationBucket':
        games = int(data.get('games', 0) or 0)
        wins = min(int(data.get('wins', 0) or 0), games)
        boots = data.get('boots')
        return cls(
            games=games,
            wins=wins,
            boots=int(boots) if boots else None,
            core=[int(i) for i in data.get('core') or []],
            last_seen_at=int(data.get('lastSeenAt', 0) or 0),
        )
