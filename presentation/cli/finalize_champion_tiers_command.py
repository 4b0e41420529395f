from __future__ import annotations

from collections import Counter

from config.settings import settings
from core.logging.logger import get_logger
from application.use_cases import FinalizeChampionTiersUseCase


class FinalizeChampionTiersCommand:
    def __init__(self, s=settings) -> None:
        self.s = s
        self._log = get_logger(__name__, service="tiers-cli")

    async def run(self) -> None:
        self.s.create_directories()
        rows = await FinalizeChampionTiersUseCase(self.s).execute()
        tiers = Counter(r.tier for r in rows)
        print(f"\nChampion tiers: {len(rows)} champions -> {self.s.OUT_CHAMPION_TIERS_PATH}")
        if rows:
            print("  " + "  ".join(f"{t}={tiers.get(t, 0)}" for t in ("S", "A", "B", "C", "D")))
        self._log.success(f"champion tiers finalized ({len(rows)} rows)")
