"""Presentation CLI exports."""
from .build_meta_builds_command import BuildMetaBuildsCommand
from .finalize_meta_builds_command import FinalizeMetaBuildsCommand
from .finalize_champion_tiers_command import FinalizeChampionTiersCommand

__all__ = [
    "BuildMetaBuildsCommand",
    "FinalizeMetaBuildsCommand",
    "FinalizeChampionTiersCommand",
]
