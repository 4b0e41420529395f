"""Presentation layer - command-line entry points."""
from .cli import BuildMetaBuildsCommand, FinalizeMetaBuildsCommand, FinalizeChampionTiersCommand

__all__ = [
    "BuildMetaBuildsCommand",
    "FinalizeMetaBuildsCommand",
    "FinalizeChampionTiersCommand",
]
