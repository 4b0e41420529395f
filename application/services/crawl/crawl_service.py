"""Crawl service - one bounded breadth-first pass over the player frontier."""
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import asdict, dataclass
from typing import Callable, Deque, Iterable, Optional, Set

import httpx

from config.settings import settings
from core.logging.context import context
from core.logging.logger import traceable
from domain.entities import Match, Timeline
from domain.enums import QueueType
from domain.errors import MatchShapeError, PipelineError
from infrastructure.repositories import MatchRepository
from infrastructure.state import AggregationStore, FrontierStore
from application.services.build_extractor import extract_build

logger = logging.getLogger(__name__)

DAY_MS = 86_400_000

# Per-unit failures the loop recovers from
RECOVERABLE = (PipelineError, httpx.HTTPError)


@dataclass(frozen=True)
class CrawlConfig:
    max_matches_per_run: int = 2500
    max_new_puuids_per_run: int = 250
    matches_per_puuid: int = 20
    match_max_age_days: int = 0
    use_timeline: bool = False
    patch_major_minor_only: bool = True
    reprocess_bootstrap: bool = False
    checkpoint_every: int = 0

    @classmethod
    def from_settings(cls, s=settings) -> "CrawlConfig":
        return cls(
            max_matches_per_run=s.MAX_MATCHES_PER_RUN,
            max_new_puuids_per_run=s.MAX_NEW_PUUIDS_PER_RUN,
            matches_per_puuid=s.MATCHES_PER_PUUID,
            match_max_age_days=s.MATCH_MAX_AGE_DAYS,
            use_timeline=s.USE_TIMELINE,
            patch_major_minor_only=s.PATCH_MAJOR_MINOR_ONLY,
            reprocess_bootstrap=s.REPROCESS_BOOTSTRAP,
            checkpoint_every=s.CHECKPOINT_EVERY,
        )


@dataclass
class CrawlStats:
    players_drained: int = 0
    players_skipped_seen: int = 0
    player_failures: int = 0
    matches_processed: int = 0
    new_puuids_added: int = 0
    skipped_seen: int = 0
    skipped_no_info: int = 0
    skipped_no_game_creation: int = 0
    skipped_too_old: int = 0
    skipped_untracked_queue: int = 0
    skipped_no_participants: int = 0
    match_failures: int = 0
    timeline_failures: int = 0
    cached_written: int = 0
    participants_counted: int = 0
    participants_skipped: int = 0
    checkpoints: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class CrawlService:
    """
    Drains a FIFO of PUUIDs until it is empty or the match budget is spent.

    Design:
    - Everything is sequential: one player, one match-id page, one match.
    - A player is marked seen before its page is fetched, a match before
      it is fetched, so a permanently failing id is never retried.
    - Each player's cursor moves one page forward per drain, whatever the
      page held.
    - Participants of every processed match are enqueued, up to
      ``max_new_puuids_per_run`` per run.
    - State is saved by ``persist``; the caller decides when (end of run,
      and every ``checkpoint_every`` matches when that is set).
    """

    def __init__(
        self,
        match_repo: MatchRepository,
        frontier: FrontierStore,
        aggregate: AggregationStore,
        config: Optional[CrawlConfig] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.match_repo  = match_repo
        self.frontier    = frontier
        self.aggregate   = aggregate
        self.config      = config or CrawlConfig.from_settings()
        self.progress_cb = progress_callback
        self._clock      = clock

        self.stats = CrawlStats()
        self._queue: Deque[str] = deque()
        self._queued: Set[str] = set()
        self._drained: Set[str] = set()
        self._bootstrap: Set[str] = set()
        self._shutdown_requested = False
        self._last_checkpoint = 0

    # ------------------------------------------------------------------ #
    # Public entry points
    # ------------------------------------------------------------------ #

    def request_shutdown(self) -> None:
        """Stop before the next player or match; in-flight work finishes."""
        if not self._shutdown_requested:
            logger.warning("shutdown requested; stopping after the current unit")
        self._shutdown_requested = True

    @property
    def budget_spent(self) -> bool:
        return self.stats.matches_processed >= self.config.max_matches_per_run

    def _should_stop(self) -> bool:
        return self._shutdown_requested or self.budget_spent

    @traceable
    async def run(self, bootstrap_puuids: Iterable[str]) -> CrawlStats:
        """Crawl from ``bootstrap_puuids``. Returns the run's tallies."""
        for puuid in bootstrap_puuids:
            if puuid and puuid not in self._queued:
                self._bootstrap.add(puuid)
                self._enqueue(puuid)
        logger.info(f"crawl queue initialized with {len(self._queue)} puuids")

        while self._queue:
            if self._should_stop():
                break
            puuid = self._queue.popleft()
            if not self._should_drain(puuid):
                continue
            self._drained.add(puuid)
            with context(puuid=puuid[:12]):
                await self._drain_player(puuid)

        if self.budget_spent:
            logger.info(f"match budget reached ({self.config.max_matches_per_run}); {len(self._queue)} puuids left queued")
        elif not self._shutdown_requested:
            logger.info("crawl queue drained")
        logger.info(f"crawl tallies: {self.stats.to_dict()}")
        return self.stats

    def persist(self, reason: str) -> None:
        """Write frontier and aggregate state atomically."""
        self.frontier.save()
        self.aggregate.save()
        logger.info(f"state saved ({reason}): matches_seen={len(self.frontier.seen_match_ids)} "
                    f"buckets={len(self.aggregate)}")

    # ------------------------------------------------------------------ #
    # Per-player / per-match work
    # ------------------------------------------------------------------ #

    def _enqueue(self, puuid: str) -> None:
        self._queue.append(puuid)
        self._queued.add(puuid)

    def _should_drain(self, puuid: str) -> bool:
        if puuid in self._drained:
            return False
        if puuid not in self.frontier.seen_puuids:
            return True
        if puuid in self._bootstrap and self.config.reprocess_bootstrap:
            return True
        self.stats.players_skipped_seen += 1
        return False

    def _start_time(self) -> Optional[int]:
        """Epoch seconds for the match-id ``startTime`` filter, if enabled."""
        if self.config.match_max_age_days <= 0:
            return None
        return int(self._clock()) - self.config.match_max_age_days * 86_400

    def _cutoff_ms(self) -> int:
        if self.config.match_max_age_days <= 0:
            return 0
        return int(self._clock() * 1000) - self.config.match_max_age_days * DAY_MS

    async def _drain_player(self, puuid: str) -> None:
        page = self.config.matches_per_puuid
        start = self.frontier.cursor_for(puuid)
        self.frontier.seen_puuids.add(puuid)
        try:
            match_ids = await self.match_repo.get_match_ids_by_puuid(
                puuid, start=start, count=page, start_time=self._start_time()
            )
        except RECOVERABLE as exc:
            self.stats.player_failures += 1
            logger.warning(f"match ids failed for puuid {puuid[:8]}: {exc}")
            return

        self.frontier.advance_cursor(puuid, page)
        self.stats.players_drained += 1
        logger.debug(f"puuid {puuid[:8]}: {len(match_ids)} ids at offset {start}")

        for match_id in match_ids:
            if self._should_stop():
                break
            if match_id in self.frontier.seen_match_ids:
                self.stats.skipped_seen += 1
                continue
            self.frontier.seen_match_ids.add(match_id)
            with context(match_id=match_id):
                await self._process_match(match_id)

    async def _process_match(self, match_id: str) -> None:
        try:
            match = await self.match_repo.get_match(match_id, cache_write=False)
        except MatchShapeError:
            self.stats.skipped_no_info += 1
            return
        except RECOVERABLE as exc:
            self.stats.match_failures += 1
            logger.warning(f"match {match_id} failed: {exc}")
            return

        if not self._passes_filters(match):
            return

        if self.match_repo.store_match(match):
            self.stats.cached_written += 1

        timeline = await self._timeline_for(match_id)
        self._aggregate(match, timeline)
        self.stats.matches_processed += 1

        if self.progress_cb:
            self.progress_cb(self.stats.matches_processed, self.config.max_matches_per_run)
        self._maybe_checkpoint()
        self._harvest(match)

    def _passes_filters(self, match: Match) -> bool:
        cutoff = self._cutoff_ms()
        if cutoff:
            if not match.game_creation:
                self.stats.skipped_no_game_creation += 1
                return False
            if match.game_creation < cutoff:
                self.stats.skipped_too_old += 1
                return False
        if not QueueType.is_tracked(match.queue_id):
            self.stats.skipped_untracked_queue += 1
            return False
        if not match.participants:
            self.stats.skipped_no_participants += 1
            return False
        return True

    async def _timeline_for(self, match_id: str) -> Optional[Timeline]:
        if not self.config.use_timeline:
            return None
        try:
            return await self.match_repo.get_timeline(match_id)
        except RECOVERABLE as exc:
            self.stats.timeline_failures += 1
            logger.warning(f"timeline {match_id} failed, using final items: {exc}")
            return None

    def _aggregate(self, match: Match, timeline: Optional[Timeline]) -> None:
        patch = match.patch_key(self.config.patch_major_minor_only)
        now_ms = int(self._clock() * 1000)
        for participant in match.participants:
            role = participant.role
            if participant.champion_id <= 0 or role is None:
                self.stats.participants_skipped += 1
                continue
            build = extract_build(participant, timeline, self.config.use_timeline)
            if not build.core:
                self.stats.participants_skipped += 1
                continue
            self.aggregate.increment(
                patch,
                match.queue_id,
                participant.champion_id,
                role,
                build.signature,
                build.boots,
                build.core,
                participant.win,
                now_ms=now_ms,
            )
            self.stats.participants_counted += 1

    def _harvest(self, match: Match) -> None:
        cap = self.config.max_new_puuids_per_run
        for participant in match.participants:
            if self.stats.new_puuids_added >= cap:
                return
            puuid = participant.puuid
            if not puuid or puuid in self._queued or puuid in self.frontier.seen_puuids:
                continue
            self._enqueue(puuid)
            self.stats.new_puuids_added += 1

    def _maybe_checkpoint(self) -> None:
        every = self.config.checkpoint_every
        if every <= 0 or self.stats.matches_processed - self._last_checkpoint < every:
            return
        self._last_checkpoint = self.stats.matches_processed
        self.stats.checkpoints += 1
        self.persist(f"every:{every}")
