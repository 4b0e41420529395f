"""Application services root exports."""
from .build_extractor import extract_build, build_from_final_items, build_from_timeline
from .crawl import CrawlService, CrawlConfig, CrawlStats
from .ladder import LadderBootstrapService
from .finalizer import MetaBuildsFinalizer, FinalizeConfig, ChampionTiersFinalizer

__all__ = [
    "extract_build",
    "build_from_final_items",
    "build_from_timeline",
    "CrawlService",
    "CrawlConfig",
    "CrawlStats",
    "LadderBootstrapService",
    "MetaBuildsFinalizer",
    "FinalizeConfig",
    "ChampionTiersFinalizer",
]
