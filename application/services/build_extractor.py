"""Boots + core extraction from a participant's items or purchase timeline."""
from typing import AbstractSet, Iterable, Optional

from domain.entities import Build, Participant, Timeline

CORE_SIZE = 3

# Hardcoded boots set used while crawling. The meta-builds finalizer derives
# its boots set from item metadata tags instead; the two can disagree when a
# new boots item ships.
BOOT_IDS = frozenset({1001, 3006, 3009, 3020, 3047, 3111, 3158, 2422, 3117})

# Consumables, elixirs and trinkets
CONSUMABLE_BLACKLIST = frozenset({2003, 2031, 2055, 2140, 3364, 3363, 3340, 2138, 2139})


def boots_from_items(items: Iterable[int], boots_ids: AbstractSet[int] = BOOT_IDS) -> Optional[int]:
    for item in items:
        if item in boots_ids:
            return item
    return None


def core_from_items(items: Iterable[int], boots: Optional[int]) -> list[int]:
    """Non-boots, non-consumable ids, deduplicated, ascending, at most three."""
    clean = {i for i in items if i > 0 and i != boots and i not in CONSUMABLE_BLACKLIST}
    return sorted(clean)[:CORE_SIZE]


def build_from_final_items(items: Iterable[int], boots_ids: AbstractSet[int] = BOOT_IDS) -> Build:
    items = [i for i in items if i > 0]
    boots = boots_from_items(items, boots_ids)
    return Build(boots=boots, core=tuple(core_from_items(items, boots)))


def build_from_timeline(participant: Participant, timeline: Optional[Timeline]) -> Build:
    """Replay the participant's purchases: first boots, first three core items.

    Stops as soon as three core items are found. A short replay is
    backfilled from the final items without repeating a core id. Without a
    usable timeline or participant mapping this is plain final-items
    extraction.
    """
    participant_id = timeline.participant_id_for(participant.puuid) if timeline else None
    if participant_id is None:
        return build_from_final_items(participant.final_items)

    boots: Optional[int] = None
    core: list[int] = []
    for event in timeline.purchases_for(participant_id):
        item = event.item_id
        if item <= 0 or item in CONSUMABLE_BLACKLIST:
            continue
        if item in BOOT_IDS:
            if boots is None:
                boots = item
            continue
        if item not in core:
            core.append(item)
            if len(core) >= CORE_SIZE:
                return Build(boots=boots, core=tuple(core))

    final_items = participant.final_items
    if boots is None:
        boots = boots_from_items(final_items)
    for item in core_from_items(final_items, boots):
        if len(core) >= CORE_SIZE:
            break
        if item not in core:
            core.append(item)
    return Build(boots=boots, core=tuple(core))


def extract_build(
    participant: Participant,
    timeline: Optional[Timeline] = None,
    use_timeline: bool = False,
) -> Build:
    if use_timeline and timeline is not None:
        return build_from_timeline(participant, timeline)
    return build_from_final_items(participant.final_items)
