from __future__ import annotations

from config.settings import settings
from core.logging.logger import get_logger
from infrastructure import RiotAPIClient
from application.use_cases import BuildMetaBuildsUseCase
from application.services.crawl import CrawlStats


class BuildMetaBuildsCommand:
    """Incremental crawl: bootstrap, drain the frontier, save state."""

    def __init__(self, s=settings) -> None:
        self.s = s
        self._log = get_logger(__name__, service="crawl-cli")

    def _print_banner(self) -> None:
        print("""
╔═════════════════════════════════════════╗
║   LOL META BUILDS - INCREMENTAL CRAWL   ║
╚═════════════════════════════════════════╝
        """)

    def _print_summary(self, stats: CrawlStats) -> None:
        print("\n" + "=" * 57)
        print("CRAWL SUMMARY")
        print("=" * 57)
        print(f"Players drained:   {stats.players_drained} (failed {stats.player_failures})")
        print(f"Matches processed: {stats.matches_processed} (budget {self.s.MAX_MATCHES_PER_RUN})")
        print(f"New PUUIDs queued: {stats.new_puuids_added} (cap {self.s.MAX_NEW_PUUIDS_PER_RUN})")
        print(f"Cache writes:      {stats.cached_written}")
        print("=" * 57)

    def _progress(self, current: int, total: int) -> None:
        width = 30
        filled = int(width * min(current, total) / total) if total else 0
        bar = "█" * filled + "-" * (width - filled)
        print(f"\rMatches | {bar} | {current}/{total}", end="", flush=True)

    async def run(self) -> CrawlStats:
        self.s.validate()
        self.s.create_directories()
        self._log.info(lambda: f"start {self.s.describe()}")
        self._print_banner()

        async with RiotAPIClient(self.s.RIOT_API_KEY) as api:
            stats = await BuildMetaBuildsUseCase(api, self.s, progress_callback=self._progress).execute()
            self._log.info(f"requests made: {api.requests_made}")

        print("")
        self._print_summary(stats)
        self._log.success(f"crawl done: {stats.matches_processed} matches")
        return stats
