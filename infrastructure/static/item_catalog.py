"""Item metadata (Data Dragon ``item.json`` layout)."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet

from domain.errors import ItemCatalogError

logger = logging.getLogger(__name__)

BOOTS_TAG = "Boots"


@dataclass(frozen=True)
class ItemCatalog:
    boots_ids: FrozenSet[int]

    @classmethod
    def from_payload(cls, payload: dict) -> "ItemCatalog":
        boots = set()
        for id_str, item in (payload.get("data") or {}).items():
            if not str(id_str).isdigit() or int(id_str) <= 0:
                continue
            tags = item.get("tags") if isinstance(item, dict) else None
            if isinstance(tags, list) and BOOTS_TAG in tags:
                boots.add(int(id_str))
        return cls(boots_ids=frozenset(boots))

    @classmethod
    def load(cls, path: Path) -> "ItemCatalog":
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ItemCatalogError(f"item metadata not found at {path}") from exc
        except ValueError as exc:
            raise ItemCatalogError(f"item metadata at {path} is not valid JSON") from exc
        catalog = cls.from_payload(payload)
        logger.info(f"item catalog: {len(catalog.boots_ids)} boots ids from {path.name}")
        return catalog
