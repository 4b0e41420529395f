"""Match entity representing a complete match."""
import re
from dataclasses import dataclass, field
from typing import Any, Optional
from .participant import Participant
from ..enums import QueueType

_MAJOR_RE = re.compile(r"^(\d+)\.")


@dataclass(frozen=True)
class Match:
    """Represents a League of Legends match as fetched from match-v5."""

    match_id: str
    queue_id: int
    game_version: str
    game_creation: int  # Unix timestamp milliseconds, 0 when absent

    participants: list[Participant] = field(default_factory=list)

    # Champion ids banned by either team
    bans: list[int] = field(default_factory=list)

    # The match-v5 document as received; written to the cache verbatim
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def queue_type(self) -> Optional[QueueType]:
        """Tracked queue, or None for every queue the pipeline ignores."""
        try:
            return QueueType(self.queue_id)
        except ValueError:
            return None

    @property
    def patch_version(self) -> str:
        """Extract patch version (e.g., '14.3' from '14.3.512.1234')."""
        parts = self.game_version.split('.')
        if len(parts) >= 2:
            return f"{parts[0]}.{parts[1]}"
        return self.game_version or "unknown"

    @property
    def patch_major(self) -> Optional[int]:
        """Leading number of the game version, or None if unparseable."""
        m = _MAJOR_RE.match(self.game_version or "")
        return int(m.group(1)) if m else None

    def patch_key(self, major_minor_only: bool = True) -> str:
        """Patch bucket used by the incremental aggregate."""
        if not self.game_version.strip():
            return "unknown"
        return self.patch_version if major_minor_only else self.game_version.strip()
