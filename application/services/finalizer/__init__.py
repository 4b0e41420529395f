from .meta_builds_finalizer import MetaBuildsFinalizer, FinalizeConfig, FinalizeStats
from .champion_tiers_finalizer import ChampionTiersFinalizer, score_rows, tally_matches

__all__ = [
    "MetaBuildsFinalizer",
    "FinalizeConfig",
    "FinalizeStats",
    "ChampionTiersFinalizer",
    "score_rows",
    "tally_matches",
]
