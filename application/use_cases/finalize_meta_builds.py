"""Use case for rebuilding the meta-build artifacts."""
from __future__ import annotations

import logging
from typing import Tuple

from config.settings import settings
from infrastructure import ItemCatalog, MatchCache
from application.services.finalizer import MetaBuildsFinalizer, FinalizeConfig, FinalizeStats

logger = logging.getLogger(__name__)


class FinalizeMetaBuildsUseCase:
    def __init__(self, s=settings):
        self.s = s
        self.stats: FinalizeStats | None = None

    def execute(self) -> Tuple[dict, dict]:
        s = self.s
        catalog = ItemCatalog.load(s.ITEMS_JSON_PATH)
        finalizer = MetaBuildsFinalizer(
            MatchCache(s.MATCHES_DIR, s.TIMELINES_DIR),
            catalog,
            FinalizeConfig.from_settings(s),
        )
        documents = finalizer.run(s.OUT_RANKED_PATH, s.OUT_CASUAL_PATH)
        self.stats = finalizer.stats
        if finalizer.stats.unparseable:
            logger.warning(f"skipped {finalizer.stats.unparseable} unreadable cache files")
        return documents
