"""Participant entity representing a player in a match."""
from dataclasses import dataclass, field
from typing import Optional
from ..enums import Role

INVENTORY_SLOTS = 6


@dataclass(frozen=True)
class Participant:
    """One player's line in a match-v5 ``info.participants`` array.

    Only the fields the aggregation needs are kept; the raw document stays
    in the match cache verbatim.
    """

    puuid: str
    participant_id: int
    champion_id: int
    team_position: str
    win: bool = False

    # Items (slots 0-6, 0 = empty; slot 6 is the trinket)
    items: tuple[int, ...] = field(default_factory=tuple)

    summoner1_id: int = 0
    summoner2_id: int = 0

    @property
    def role(self) -> Optional[Role]:
        """Normalized lane, or None when the position is unrecognized."""
        return Role.from_team_position(self.team_position)

    @property
    def final_items(self) -> list[int]:
        """Non-empty item slots in slot order."""
        return [i for i in self.items if i > 0]

    @property
    def inventory_items(self) -> list[int]:
        """Non-empty slots 0-5, trinket excluded."""
        return [i for i in self.items[:INVENTORY_SLOTS] if i > 0]

    @property
    def summoner_spells(self) -> list[int]:
        """Summoner spell ids, sorted, empties dropped."""
        return sorted(s for s in (self.summoner1_id, self.summoner2_id) if s > 0)
