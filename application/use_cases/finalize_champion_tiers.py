"""Use case for rebuilding ``champion_tiers.json``."""
from __future__ import annotations

from typing import List, Optional

import httpx

from config.settings import settings
from domain.entities import ChampionTierRow
from infrastructure import DataDragonClient, MatchCache
from application.services.finalizer import ChampionTiersFinalizer


class FinalizeChampionTiersUseCase:
    def __init__(self, s=settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.s = s
        self._transport = transport

    async def execute(self) -> List[ChampionTierRow]:
        s = self.s
        async with DataDragonClient(s.DDRAGON_BASE_URL, timeout=s.REQUEST_TIMEOUT, transport=self._transport) as ddragon:
            finalizer = ChampionTiersFinalizer(MatchCache(s.MATCHES_DIR, s.TIMELINES_DIR), ddragon)
            return await finalizer.run(s.OUT_CHAMPION_TIERS_PATH)
