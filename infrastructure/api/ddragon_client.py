"""Data Dragon client: static champion metadata."""
import logging
from typing import Dict, Optional

import httpx

from config.settings import settings

logger = logging.getLogger(__name__)


class DataDragonClient:
    """Resolves the latest game data version and champion id → canonical name."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.DDRAGON_BASE_URL).rstrip("/")
        self.timeout  = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self.session: Optional[httpx.AsyncClient] = None
        self._transport = transport

    async def __aenter__(self):
        self.session = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self

    async def __aexit__(self, *_):
        if self.session:
            await self.session.aclose()
            self.session = None

    async def _get_json(self, url: str):
        response = await self.session.get(url)
        response.raise_for_status()
        return response.json()

    async def latest_version(self) -> str:
        versions = await self._get_json(f"{self.base_url}/api/versions.json")
        version = str(versions[0]) if isinstance(versions, list) and versions else ""
        if not version:
            raise ValueError("Could not determine Data Dragon version")
        return version

    async def champion_names(self, version: str) -> Dict[int, str]:
        """Map numeric champion id to the canonical id used for images (``KhaZix``)."""
        url = f"{self.base_url}/cdn/{version}/data/en_US/championFull.json"
        payload = await self._get_json(url)
        names: Dict[int, str] = {}
        for key, champ in (payload.get("data") or {}).items():
            key_str = str(champ.get("key", "")).strip()
            name = str(champ.get("id") or champ.get("name") or key).strip()
            if key_str.isdigit() and name:
                names[int(key_str)] = name
        logger.debug(f"ddragon {version}: {len(names)} champions")
        return names
