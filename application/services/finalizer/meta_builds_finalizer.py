"""Recompute the ranked meta-build artifacts from the full match cache."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from config.settings import settings
from core.logging.logger import traceable
from domain.entities import BuildEntry, Match
from domain.enums import QueueType
from domain.errors import MatchShapeError
from infrastructure.cache import MatchCache
from infrastructure.repositories import parse_match
from infrastructure.state import write_json_atomic
from infrastructure.static import ItemCatalog
from application.services.build_extractor import build_from_final_items
from application.services.scoring import bayes_score

logger = logging.getLogger(__name__)

TOP_BUILDS = 10

RANKED_QUEUES = tuple(q.queue_id for q in QueueType.ranked_queues())
CASUAL_QUEUES = tuple(q.queue_id for q in QueueType.casual_queues())

# (patch bucket, champion id, role, signature)
LeafKey = Tuple[str, int, str, str]


@dataclass(frozen=True)
class FinalizeConfig:
    min_sample: int = 200
    min_display_sample: int = 10
    bayes_k: float = 100.0
    prior_winrate: float = 0.5
    min_patch_major: int = 16

    @classmethod
    def from_settings(cls, s=settings) -> "FinalizeConfig":
        return cls(
            min_sample=s.MIN_SAMPLE,
            min_display_sample=s.MIN_DISPLAY_SAMPLE,
            bayes_k=s.BAYES_K,
            prior_winrate=s.PRIOR_WINRATE,
            min_patch_major=s.MIN_PATCH_MAJOR,
        )

    @property
    def patch_bucket(self) -> str:
        return f"{self.min_patch_major}+"


@dataclass
class FinalizeStats:
    files_seen: int = 0
    unparseable: int = 0
    skipped_no_info: int = 0
    skipped_untracked_queue: int = 0
    skipped_old_patch: int = 0
    matches_counted: int = 0
    participants_counted: int = 0
    participants_skipped: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class _Leaf:
    games: int = 0
    wins: int = 0
    boots: Optional[int] = None
    core: List[int] = field(default_factory=list)
    summoners: List[int] = field(default_factory=list)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MetaBuildsFinalizer:
    """
    Full rescan of the match cache into ``meta_builds_ranked.json`` and
    ``meta_builds_casual.json``.

    Incremental crawl state is ignored. Boots are recognized through the
    item catalog's ``Boots`` tag, not the crawl's hardcoded set. Every
    cached file is visited in sorted order and ties are broken on the
    signature, so reruns over an unchanged cache differ only in
    ``generatedAt``.
    """

    def __init__(
        self,
        match_cache: MatchCache,
        item_catalog: ItemCatalog,
        config: Optional[FinalizeConfig] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.match_cache = match_cache
        self.item_catalog = item_catalog
        self.config = config or FinalizeConfig.from_settings()
        self._clock = clock
        self.stats = FinalizeStats()

    # ── scan ───────────────────────────────────────────────────────────

    def _load(self, path: Path) -> Optional[Match]:
        self.stats.files_seen += 1
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self.stats.unparseable += 1
            logger.debug(f"unparseable cache file {path.name}: {exc}")
            return None
        try:
            return parse_match(data, path.stem)
        except MatchShapeError:
            self.stats.skipped_no_info += 1
            return None

    def scan(self) -> Tuple[Dict[LeafKey, _Leaf], Dict[LeafKey, _Leaf]]:
        """Aggregate every cached match into (ranked, casual) leaves."""
        self.stats = FinalizeStats()
        ranked: Dict[LeafKey, _Leaf] = {}
        casual: Dict[LeafKey, _Leaf] = {}
        bucket = self.config.patch_bucket

        for path in self.match_cache.list_match_files():
            match = self._load(path)
            if match is None:
                continue
            if match.queue_id in RANKED_QUEUES:
                target = ranked
            elif match.queue_id in CASUAL_QUEUES:
                target = casual
            else:
                self.stats.skipped_untracked_queue += 1
                continue
            major = match.patch_major
            if major is None or major < self.config.min_patch_major:
                self.stats.skipped_old_patch += 1
                continue

            self.stats.matches_counted += 1
            for participant in match.participants:
                role = participant.role
                if participant.champion_id <= 0 or role is None:
                    self.stats.participants_skipped += 1
                    continue
                build = build_from_final_items(participant.inventory_items, self.item_catalog.boots_ids)
                if build.is_empty:
                    self.stats.participants_skipped += 1
                    continue
                key = (bucket, participant.champion_id, role.value, build.signature)
                leaf = target.get(key)
                if leaf is None:
                    leaf = target[key] = _Leaf(
                        boots=build.boots,
                        core=list(build.core),
                        summoners=participant.summoner_spells,
                    )
                leaf.games += 1
                if participant.win:
                    leaf.wins += 1
                self.stats.participants_counted += 1

        logger.info(f"finalize scan: {self.stats.to_dict()}")
        return ranked, casual

    # ── scoring ────────────────────────────────────────────────────────

    def rank(self, leaves: Dict[LeafKey, _Leaf]) -> Dict[str, Dict[str, Dict[str, list]]]:
        """patches → champion → role → top builds, every level in sorted order."""
        grouped: Dict[Tuple[str, int, str], List[BuildEntry]] = {}
        for (patch, champion_id, role, sig), leaf in leaves.items():
            if leaf.games < self.config.min_display_sample:
                continue
            score = bayes_score(leaf.wins, leaf.games, self.config.bayes_k, self.config.prior_winrate)
            grouped.setdefault((patch, champion_id, role), []).append(BuildEntry(
                build_sig=sig,
                boots=leaf.boots,
                core=list(leaf.core),
                items=([leaf.boots] if leaf.boots else []) + list(leaf.core),
                summoners=list(leaf.summoners),
                games=leaf.games,
                wins=leaf.wins,
                winrate=round(leaf.wins / leaf.games, 4) if leaf.games else 0.0,
                score=round(score, 6),
            ))

        patches: Dict[str, Dict[str, Dict[str, list]]] = {}
        for patch, champion_id, role in sorted(grouped):
            entries = sorted(grouped[(patch, champion_id, role)], key=lambda e: (-e.games, -e.score, e.build_sig))
            (patches
                .setdefault(patch, {})
                .setdefault(str(champion_id), {}))[role] = [e.to_dict() for e in entries[:TOP_BUILDS]]
        return patches

    def document(self, leaves: Dict[LeafKey, _Leaf], queues: Tuple[int, ...], generated_at: str) -> dict:
        c = self.config
        return {
            "generatedAt": generated_at,
            "queues": list(queues),
            # final items only, one "<N>+" patch bucket
            "useTimeline": False,
            "patchMajorMinorOnly": False,
            "minSample": c.min_sample,
            "minDisplaySample": c.min_display_sample,
            "bayesK": c.bayes_k,
            "priorWinrate": c.prior_winrate,
            "minPatchMajor": c.min_patch_major,
            "patches": self.rank(leaves),
        }

    @traceable
    def run(self, ranked_path: Path, casual_path: Path) -> Tuple[dict, dict]:
        """Scan, score and write both artifacts. Outputs are written even when empty."""
        ranked, casual = self.scan()
        generated_at = utc_timestamp(self._clock())
        ranked_doc = self.document(ranked, RANKED_QUEUES, generated_at)
        casual_doc = self.document(casual, CASUAL_QUEUES, generated_at)
        write_json_atomic(ranked_path, ranked_doc)
        write_json_atomic(casual_path, casual_doc)
        logger.info(f"wrote {ranked_path.name} ({len(ranked)} signatures) and "
                    f"{casual_path.name} ({len(casual)} signatures)")
        return ranked_doc, casual_doc
