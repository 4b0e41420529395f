"""Role/Position enumeration."""
from enum import Enum
from typing import Optional


class Role(Enum):
    """League of Legends lane roles/positions."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"  # Support

    @property
    def short_name(self) -> str:
        """Get short position name."""
        short_names = {
            "TOP": "top",
            "JUNGLE": "jg",
            "MIDDLE": "mid",
            "BOTTOM": "adc",
            "UTILITY": "sup"
        }
        return short_names[self.value]

    @classmethod
    def all_roles(cls) -> list['Role']:
        """Get all roles."""
        return list(cls)

    @classmethod
    def from_team_position(cls, position: Optional[str]) -> Optional['Role']:
        """Map a match-v5 ``teamPosition`` to a Role.

        Unrecognized or empty positions return None; callers drop those
        participants rather than guessing a lane.
        """
        value = (position or "").strip().upper()
        if not value:
            return None
        try:
            return cls[value]
        except KeyError:
            mappings = {
                "MID": cls.MIDDLE,
                "BOT": cls.BOTTOM,
                "SUPPORT": cls.UTILITY,
            }
            return mappings.get(value)
