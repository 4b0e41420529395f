"""Content-addressed on-disk store for raw match and timeline documents."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from infrastructure.api import RiotAPIClient
from infrastructure.state.json_files import write_json_atomic

logger = logging.getLogger(__name__)


class MatchCache:
    """Read-through cache in front of the match-v5 endpoints.

    One file per match id (``<dir>/<matchId>.json``), written verbatim and
    never rewritten unless the stored copy no longer parses. There is no
    eviction; the finalizers rescan this directory as the permanent corpus.
    """

    def __init__(self, matches_dir: Path, timelines_dir: Path, api_client: Optional[RiotAPIClient] = None):
        self.matches_dir = matches_dir
        self.timelines_dir = timelines_dir
        self.api_client = api_client
        self.fetches = 0
        self.hits = 0

    def match_path(self, match_id: str) -> Path:
        return self.matches_dir / f"{match_id}.json"

    def timeline_path(self, match_id: str) -> Path:
        return self.timelines_dir / f"{match_id}.json"

    def has_match(self, match_id: str) -> bool:
        return self.match_path(match_id).is_file()

    async def get_match(self, match_id: str, cache_write: bool = True) -> Dict[str, Any]:
        path = self.match_path(match_id)
        cached = self._read(path)
        if cached is not None:
            self.hits += 1
            return cached
        data = await self._api().get_match(match_id)
        self.fetches += 1
        if cache_write:
            # an existing file here did not parse; replace it
            self.write_match(match_id, data, force=path.is_file())
        return data

    async def get_timeline(self, match_id: str) -> Dict[str, Any]:
        path = self.timeline_path(match_id)
        cached = self._read(path)
        if cached is not None:
            self.hits += 1
            return cached
        data = await self._api().get_timeline(match_id)
        self.fetches += 1
        write_json_atomic(path, data, indent=None)
        return data

    def write_match(self, match_id: str, data: Dict[str, Any], force: bool = False) -> bool:
        """Persist a match document; False when a readable copy is already cached.

        An unreadable entry is overwritten, as is any entry when ``force`` is set.
        """
        path = self.match_path(match_id)
        if not force and path.is_file() and self._read(path, quiet=True) is not None:
            return False
        write_json_atomic(path, data, indent=None)
        return True

    def list_match_files(self) -> List[Path]:
        """Every cached match file below ``matches_dir``, sorted for stable scans."""
        if not self.matches_dir.is_dir():
            return []
        return sorted(p for p in self.matches_dir.rglob("*.json") if p.is_file())

    def _api(self) -> RiotAPIClient:
        if self.api_client is None:
            raise RuntimeError("MatchCache has no API client; cache-only mode cannot fetch")
        return self.api_client

    @staticmethod
    def _read(path: Path, quiet: bool = False) -> Optional[Dict[str, Any]]:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            if not quiet:
                logger.warning(f"unreadable cache entry {path.name}; fetching again")
            return None
