"""Incremental build counters keyed by (patch, queue, champion, role, signature)."""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, Iterator, Optional, Sequence, Tuple

from domain.entities import AggregationKey, AggregationBucket
from domain.enums import Role
from .json_files import read_json, write_json_atomic

logger = logging.getLogger(__name__)

AGG_STATE_FILE = "agg_state.json"


class AggregationStore:
    """Flat map of composite keys to counters.

    Persisted nested (patch → queue → champion → role → signature) so the
    file stays readable. ``increment`` is the only mutator.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self._buckets: Dict[AggregationKey, AggregationBucket] = {}

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, key: AggregationKey) -> bool:
        return key in self._buckets

    def get(self, key: AggregationKey) -> Optional[AggregationBucket]:
        return self._buckets.get(key)

    def items(self) -> Iterator[Tuple[AggregationKey, AggregationBucket]]:
        return iter(self._buckets.items())

    def increment(
        self,
        patch: str,
        queue_id: int,
        champion_id: int,
        role: Role,
        signature: str,
        boots: Optional[int],
        core: Sequence[int],
        win: bool,
        *,
        now_ms: Optional[int] = None,
    ) -> AggregationBucket:
        """Count one participant. Replaying a match counts it again."""
        key = AggregationKey(patch, int(queue_id), int(champion_id), role, signature)
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = self._buckets[key] = AggregationBucket()
        bucket.games += 1
        if win:
            bucket.wins += 1
        bucket.boots = boots
        bucket.core = list(core)
        bucket.last_seen_at = int(time.time() * 1000) if now_ms is None else now_ms
        return bucket

    # ── persistence ────────────────────────────────────────────────────

    def to_nested(self) -> dict:
        nested: dict = {}
        for key in sorted(self._buckets, key=lambda k: (k.patch, k.queue_id, k.champion_id, k.role.value, k.signature)):
            (nested
                .setdefault(key.patch, {})
                .setdefault(str(key.queue_id), {})
                .setdefault(str(key.champion_id), {})
                .setdefault(key.role.value, {}))[key.signature] = self._buckets[key].to_dict()
        return nested

    @classmethod
    def from_nested(cls, data: dict, path: Optional[Path] = None) -> "AggregationStore":
        store = cls(path)
        dropped = 0
        for patch, queues in (data or {}).items():
            for queue_id, champions in queues.items():
                for champion_id, roles in champions.items():
                    for role_name, signatures in roles.items():
                        role = Role.from_team_position(role_name)
                        if role is None or not str(champion_id).isdigit() or not str(queue_id).isdigit():
                            dropped += len(signatures)
                            continue
                        for signature, bucket in signatures.items():
                            key = AggregationKey(patch, int(queue_id), int(champion_id), role, signature)
                            store._buckets[key] = AggregationBucket.from_dict(bucket)
        if dropped:
            logger.warning(f"aggregate: dropped {dropped} buckets with unreadable keys")
        return store

    @classmethod
    def load(cls, state_dir: Path, *, reset: bool = False) -> "AggregationStore":
        path = state_dir / AGG_STATE_FILE
        if reset:
            logger.warning("RESET_AGGREGATE set: starting with an empty aggregate")
            return cls(path)
        store = cls.from_nested(read_json(path, {}) or {}, path)
        logger.info(f"aggregate loaded: buckets={len(store)}")
        return store

    def save(self) -> None:
        if self.path is None:
            raise ValueError("AggregationStore has no path to save to")
        write_json_atomic(self.path, self.to_nested())
