"""Timeline entity: the purchase events of one match."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class PurchaseEvent:
    """An ``ITEM_PURCHASED`` event."""

    timestamp: int
    participant_id: int
    item_id: int


@dataclass(frozen=True)
class Timeline:
    """Frames flattened into the purchase events the build extractor replays.

    ``participant_puuids`` is ``metadata.participants``: position ``i`` holds
    the PUUID of in-game participant ``i + 1``.
    """

    match_id: str
    participant_puuids: list[str] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)

    def participant_id_for(self, puuid: str) -> Optional[int]:
        if not puuid:
            return None
        try:
            return self.participant_puuids.index(puuid) + 1
        except ValueError:
            return None

    def purchases_for(self, participant_id: int) -> list[PurchaseEvent]:
        """That participant's purchases in chronological order."""
        own = [e for e in self.purchases if e.participant_id == participant_id]
        return sorted(own, key=lambda e: e.timestamp)
