"""Application use cases."""
from .build_meta_builds import BuildMetaBuildsUseCase
from .finalize_meta_builds import FinalizeMetaBuildsUseCase
from .finalize_champion_tiers import FinalizeChampionTiersUseCase

__all__ = [
    'BuildMetaBuildsUseCase',
    'FinalizeMetaBuildsUseCase',
    'FinalizeChampionTiersUseCase',
]
