"""Frontier state: seen matches, seen players, per-player cursors."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Set

from .json_files import read_json, write_json_atomic

logger = logging.getLogger(__name__)

SEEN_MATCH_IDS_FILE = "seen_match_ids.json"
SEEN_PUUIDS_FILE = "seen_puuids.json"
PUUID_CURSORS_FILE = "puuid_cursors.json"


@dataclass
class FrontierStore:
    """Three independent durable collections, loaded once and saved explicitly.

    File formats::

        seen_match_ids.json  {"ids": [...]}
        seen_puuids.json     {"puuids": [...]}
        puuid_cursors.json   {"<puuid>": <offset>, ...}

    Single writer only: concurrent runs against one state dir are unsafe.
    """

    state_dir: Path
    seen_match_ids: Set[str] = field(default_factory=set)
    seen_puuids: Set[str] = field(default_factory=set)
    cursors: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def load(
        cls,
        state_dir: Path,
        *,
        reset_seen_matches: bool = False,
        reset_seen_puuids: bool = False,
        reset_cursors: bool = False,
    ) -> "FrontierStore":
        store = cls(state_dir=state_dir)

        if reset_seen_matches:
            logger.warning("RESET_SEEN_MATCHES set: starting with an empty seen-match set")
        else:
            data = read_json(state_dir / SEEN_MATCH_IDS_FILE, {"ids": []}) or {}
            store.seen_match_ids = {str(i) for i in data.get("ids", [])}

        if reset_seen_puuids:
            logger.warning("RESET_SEEN_PUUIDS set: starting with an empty seen-player set")
        else:
            data = read_json(state_dir / SEEN_PUUIDS_FILE, {"puuids": []}) or {}
            store.seen_puuids = {str(p) for p in data.get("puuids", [])}

        if reset_cursors:
            logger.warning("RESET_CURSORS set: every player restarts at offset 0")
        else:
            data = read_json(state_dir / PUUID_CURSORS_FILE, {}) or {}
            store.cursors = {str(k): int(v) for k, v in data.items() if int(v) >= 0}

        logger.info(
            f"frontier loaded: matches={len(store.seen_match_ids)} "
            f"puuids={len(store.seen_puuids)} cursors={len(store.cursors)}"
        )
        return store

    def save(self) -> None:
        write_json_atomic(self.state_dir / SEEN_MATCH_IDS_FILE, {"ids": sorted(self.seen_match_ids)})
        write_json_atomic(self.state_dir / SEEN_PUUIDS_FILE, {"puuids": sorted(self.seen_puuids)})
        write_json_atomic(self.state_dir / PUUID_CURSORS_FILE, dict(sorted(self.cursors.items())))

    def cursor_for(self, puuid: str) -> int:
        return self.cursors.get(puuid, 0)

    def advance_cursor(self, puuid: str, page_size: int) -> int:
        """Move the cursor one page forward; it never rewinds."""
        current = self.cursor_for(puuid)
        self.cursors[puuid] = current + max(0, page_size)
        return self.cursors[puuid]
