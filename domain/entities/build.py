"""Build: boots plus up to three core items."""
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class Build:
    """Derived boots + core of one participant.

    ``core`` keeps the order the extractor produced (ascending for
    final-items extraction, purchase order for timeline extraction);
    ``signature`` always lists the core ids ascending so both orders
    collapse to one aggregation key.
    """

    boots: Optional[int]
    core: tuple[int, ...]

    @property
    def signature(self) -> str:
        return build_signature(self.boots, self.core)

    @property
    def items(self) -> list[int]:
        """Display order: boots first, then core."""
        return ([self.boots] if self.boots else []) + list(self.core)

    @property
    def is_empty(self) -> bool:
        return not self.boots and not self.core


def build_signature(boots: Optional[int], core: Iterable[int]) -> str:
    """``b=<boots|0>|c=<core ids ascending, comma-joined>``."""
    b = str(boots) if boots else "0"
    c = ",".join(str(i) for i in sorted(core))
    return f"b={b}|c={c}"
