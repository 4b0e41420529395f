"""Champion tier list from the match cache."""
from __future__ import annotations

import json
import logging
import math
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

from core.logging.logger import traceable
from domain.entities import ChampionTierRow
from domain.errors import MatchShapeError
from infrastructure.api import DataDragonClient
from infrastructure.cache import MatchCache
from infrastructure.repositories import parse_match
from infrastructure.state import write_json_atomic
from application.services.scoring import (
    TIER_ORDER,
    UNRANKED_TIER,
    assign_tiers,
    champion_score,
    slugify,
    zscores,
)
from .meta_builds_finalizer import utc_timestamp

logger = logging.getLogger(__name__)


@dataclass
class ChampionTally:
    picks: Counter
    wins: Counter
    bans: Counter
    matches_seen: int = 0
    unparseable: int = 0


def tally_matches(match_cache: MatchCache) -> ChampionTally:
    """Picks and wins per champion, bans from ``teams[].bans[]``."""
    tally = ChampionTally(picks=Counter(), wins=Counter(), bans=Counter())
    for path in match_cache.list_match_files():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            tally.unparseable += 1
            continue
        try:
            match = parse_match(data, path.stem)
        except MatchShapeError:
            continue
        tally.matches_seen += 1
        tally.bans.update(match.bans)
        for participant in match.participants:
            if participant.champion_id <= 0:
                continue
            tally.picks[participant.champion_id] += 1
            if participant.win:
                tally.wins[participant.champion_id] += 1
    return tally


def score_rows(rows: List[ChampionTierRow]) -> List[ChampionTierRow]:
    """Z-score log picks, winrate and banrate, then tier by rank percentile."""
    if not rows:
        return rows
    z_pick = zscores([math.log1p(r.picks) for r in rows])
    z_win = zscores([r.winrate for r in rows])
    z_ban = zscores([r.banrate for r in rows])
    for row, zp, zw, zb in zip(rows, z_pick, z_win, z_ban):
        row.score = champion_score(zp, zw, zb)
    tiers = assign_tiers({r.champion_id: r.score for r in rows})
    for row in rows:
        row.tier = tiers.get(row.champion_id, UNRANKED_TIER)
    return sorted(rows, key=lambda r: (TIER_ORDER.get(r.tier, 9), -r.score, r.champion_id))


class ChampionTiersFinalizer:
    def __init__(
        self,
        match_cache: MatchCache,
        ddragon: DataDragonClient,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.match_cache = match_cache
        self.ddragon = ddragon
        self._clock = clock

    def build_rows(self, tally: ChampionTally, names: Dict[int, str], version: str, generated_at: str) -> List[ChampionTierRow]:
        rows = []
        for champion_id in sorted(tally.picks):
            picks = tally.picks[champion_id]
            if picks <= 0:
                continue
            name = names.get(champion_id) or f"Champion{champion_id}"
            bans = tally.bans.get(champion_id, 0)
            rows.append(ChampionTierRow(
                champion_id=champion_id,
                name=name,
                slug=slugify(name),
                picks=picks,
                wins=tally.wins.get(champion_id, 0),
                bans=bans,
                winrate=tally.wins.get(champion_id, 0) / picks,
                banrate=bans / tally.matches_seen if tally.matches_seen else 0.0,
                matches_seen=tally.matches_seen,
                ddragon_version=version,
                generated_at=generated_at,
            ))
        return score_rows(rows)

    @traceable
    async def run(self, out_path: Path) -> List[ChampionTierRow]:
        tally = tally_matches(self.match_cache)
        if tally.unparseable:
            logger.warning(f"champion tiers: skipped {tally.unparseable} unreadable cache files")
        if not tally.picks:
            write_json_atomic(out_path, [])
            logger.warning(f"champion tiers: no usable matches; wrote empty {out_path.name}")
            return []

        version = await self.ddragon.latest_version()
        names = await self.ddragon.champion_names(version)
        rows = self.build_rows(tally, names, version, utc_timestamp(self._clock()))
        write_json_atomic(out_path, [r.to_dict() for r in rows])
        logger.info(
            f"champion tiers: wrote {len(rows)} champions to {out_path.name} "
            f"(matches={tally.matches_seen}, ddragon={version})"
        )
        return rows
