"""Application layer - Services and use cases."""
from .services import CrawlService, MetaBuildsFinalizer, ChampionTiersFinalizer
from .use_cases import BuildMetaBuildsUseCase, FinalizeMetaBuildsUseCase, FinalizeChampionTiersUseCase

__all__ = [
    'CrawlService',
    'MetaBuildsFinalizer',
    'ChampionTiersFinalizer',
    'BuildMetaBuildsUseCase',
    'FinalizeMetaBuildsUseCase',
    'FinalizeChampionTiersUseCase',
]
