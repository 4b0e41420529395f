"""Use case for one incremental crawl run."""
from __future__ import annotations

import logging
import signal
from typing import List

import httpx

from config.settings import settings
from domain.enums import LadderTier, LadderQueue
from domain.errors import PipelineError
from infrastructure import (
    RiotAPIClient,
    MatchCache,
    MatchRepository,
    SummonerRepository,
    FrontierStore,
    AggregationStore,
)
from application.services.crawl import CrawlService, CrawlConfig, CrawlStats
from application.services.ladder import LadderBootstrapService, seed_match_ids

logger = logging.getLogger(__name__)


class BuildMetaBuildsUseCase:
    """
    Load state → bootstrap the frontier → crawl → save state.

    Resets requested through ``RESET_*`` are applied while loading. State is
    written at the end of the run (and at checkpoints); the match cache is
    written as each match is accepted. SIGINT/SIGTERM stop the crawl before
    its next unit and the state is still saved.
    """

    def __init__(self, api_client: RiotAPIClient, s=settings, progress_callback=None):
        self.api_client = api_client
        self.s = s
        self.progress_cb = progress_callback
        self.frontier: FrontierStore | None = None
        self.aggregate: AggregationStore | None = None

    async def _bootstrap(self, match_repo: MatchRepository) -> List[str]:
        s = self.s
        ladder = LadderBootstrapService(
            self.api_client,
            SummonerRepository(self.api_client),
            tier=LadderTier.from_string(s.LADDER_TIER),
            queue=LadderQueue.from_string(s.LADDER_QUEUE),
            max_players=s.LADDER_MAX_PLAYERS,
        )
        puuids: List[str] = []
        try:
            puuids.extend(await ladder.bootstrap_puuids())
        except (PipelineError, httpx.HTTPError) as exc:
            logger.warning(f"ladder bootstrap failed, continuing with seeds only: {exc}")

        seeds = seed_match_ids(s.SEED_MATCH_IDS, s.SEED_MATCH_URLS)
        if seeds:
            logger.info(f"fetching {len(seeds)} seed matches")
            puuids.extend(await LadderBootstrapService.puuids_from_seed_matches(match_repo, seeds))
        return puuids

    async def execute(self) -> CrawlStats:
        s = self.s
        self.frontier = FrontierStore.load(
            s.STATE_DIR,
            reset_seen_matches=s.RESET_SEEN_MATCHES,
            reset_seen_puuids=s.RESET_SEEN_PUUIDS,
            reset_cursors=s.RESET_CURSORS,
        )
        self.aggregate = AggregationStore.load(s.STATE_DIR, reset=s.RESET_AGGREGATE)
        match_repo = MatchRepository(
            self.api_client,
            MatchCache(s.MATCHES_DIR, s.TIMELINES_DIR, self.api_client),
        )

        bootstrap_puuids = await self._bootstrap(match_repo)
        if not bootstrap_puuids:
            logger.warning("no bootstrap players resolved; the crawl queue starts empty")

        service = CrawlService(
            match_repo,
            self.frontier,
            self.aggregate,
            config=CrawlConfig.from_settings(s),
            progress_callback=self.progress_cb,
        )
        previous = self._install_signal_handlers(service)
        try:
            stats = await service.run(bootstrap_puuids)
        finally:
            self._restore_signal_handlers(previous)
        service.persist("end")
        return stats

    @staticmethod
    def _install_signal_handlers(service: CrawlService) -> dict:
        previous = {}
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                previous[sig] = signal.signal(sig, lambda *_: service.request_shutdown())
            except ValueError:
                # not on the main thread
                pass
        return previous

    @staticmethod
    def _restore_signal_handlers(previous: dict) -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
