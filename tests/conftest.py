from __future__ import annotations

import json
from typing import Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest

from infrastructure.api import RiotAPIClient
from infrastructure.cache import MatchCache
from infrastructure.repositories import MatchRepository, SummonerRepository
from infrastructure.state import AggregationStore, FrontierStore

ROLES = ["TOP", "JUNGLE", "MIDDLE", "BOTTOM", "UTILITY"]


def participant_json(
    puuid: str,
    champion_id: int = 1,
    position: str = "TOP",
    win: bool = True,
    items: Optional[List[int]] = None,
    spells: tuple = (4, 14),
    participant_id: int = 1,
) -> dict:
    items = list(items if items is not None else [3006, 3031, 3072, 3094, 0, 0, 3340])
    items += [0] * (7 - len(items))
    data = {
        "puuid": puuid,
        "participantId": participant_id,
        "championId": champion_id,
        "teamPosition": position,
        "win": win,
        "summoner1Id": spells[0],
        "summoner2Id": spells[1],
    }
    for slot, item in enumerate(items[:7]):
        data[f"item{slot}"] = item
    return data


def match_json(
    match_id: str,
    participants: List[dict],
    queue_id: int = 420,
    game_version: str = "16.1.512.1234",
    game_creation: int = 1_700_000_000_000,
    bans: Optional[List[int]] = None,
) -> dict:
    return {
        "metadata": {"matchId": match_id, "participants": [p["puuid"] for p in participants]},
        "info": {
            "queueId": queue_id,
            "gameVersion": game_version,
            "gameCreation": game_creation,
            "participants": participants,
            "teams": [
                {"teamId": 100, "bans": [{"championId": c, "pickTurn": i + 1} for i, c in enumerate(bans or [])]},
                {"teamId": 200, "bans": [{"championId": -1, "pickTurn": 6}]},
            ],
        },
    }


def ten_player_match(match_id: str, prefix: str, queue_id: int = 420, **kwargs) -> dict:
    participants = [
        participant_json(
            f"{prefix}-{i}",
            champion_id=100 + i,
            position=ROLES[i % 5],
            win=i < 5,
            participant_id=i + 1,
        )
        for i in range(10)
    ]
    return match_json(match_id, participants, queue_id=queue_id, **kwargs)


class FakeRiot:
    """In-memory match-v5 / league-v4 / summoner-v4 behind ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.match_ids: Dict[str, List[str]] = {}
        self.matches: Dict[str, dict] = {}
        self.timelines: Dict[str, dict] = {}
        self.league: dict = {"entries": []}
        self.summoners_by_id: Dict[str, dict] = {}
        self.summoners_by_name: Dict[str, dict] = {}
        self.fail: Dict[str, int] = {}  # path fragment -> status
        self.requests: List[httpx.Request] = []

    def paths(self) -> List[str]:
        return [unquote(r.url.path) for r in self.requests]

    def _json(self, data, status: int = 200) -> httpx.Response:
        return httpx.Response(status, content=json.dumps(data).encode(), headers={"Content-Type": "application/json"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = unquote(request.url.path)
        for fragment, status in self.fail.items():
            if fragment in path:
                return httpx.Response(status, text=f"forced {status}")

        if path.startswith("/lol/match/v5/matches/by-puuid/"):
            puuid = path.split("/")[6]
            start = int(request.url.params.get("start", 0))
            count = int(request.url.params.get("count", 20))
            return self._json(self.match_ids.get(puuid, [])[start:start + count])
        if path.startswith("/lol/match/v5/matches/"):
            parts = path.split("/")
            match_id = parts[5]
            if len(parts) > 6 and parts[6] == "timeline":
                doc = self.timelines.get(match_id)
            else:
                doc = self.matches.get(match_id)
            return self._json(doc) if doc is not None else httpx.Response(404, text="not found")
        if path.startswith("/lol/league/v4/"):
            return self._json(self.league)
        if path.startswith("/lol/summoner/v4/summoners/by-name/"):
            doc = self.summoners_by_name.get(path.rsplit("/", 1)[1])
            return self._json(doc) if doc else httpx.Response(404, text="not found")
        if path.startswith("/lol/summoner/v4/summoners/"):
            doc = self.summoners_by_id.get(path.rsplit("/", 1)[1])
            return self._json(doc) if doc else httpx.Response(404, text="not found")
        return httpx.Response(404, text="no route")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_riot() -> FakeRiot:
    return FakeRiot()


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_client(fake_riot, sleeps):
    def _make(max_retries: int = 2, **kwargs) -> RiotAPIClient:
        return RiotAPIClient(
            "RGAPI-test",
            regional_host="americas",
            platform_host="na1",
            timeout=5,
            max_retries=max_retries,
            request_gap_ms=0,
            transport=fake_riot.transport(),
            sleep=sleeps,
            **kwargs,
        )
    return _make


@pytest.fixture
def data_dirs(tmp_path):
    dirs = {
        "matches": tmp_path / "cache" / "matches",
        "timelines": tmp_path / "cache" / "timelines",
        "state": tmp_path / "cache" / "state",
        "output": tmp_path / "output",
    }
    for d in dirs.values():
        d.mkdir(parents=True, exist_ok=True)
    return dirs


@pytest.fixture
def stores(data_dirs):
    frontier = FrontierStore.load(data_dirs["state"])
    aggregate = AggregationStore.load(data_dirs["state"])
    return frontier, aggregate


def make_match_repo(client: RiotAPIClient, data_dirs) -> MatchRepository:
    return MatchRepository(client, MatchCache(data_dirs["matches"], data_dirs["timelines"], client))


def make_summoner_repo(client: RiotAPIClient) -> SummonerRepository:
    return SummonerRepository(client)


def write_cached_match(matches_dir, doc: dict) -> None:
    match_id = doc["metadata"]["matchId"]
    (matches_dir / f"{match_id}.json").write_text(json.dumps(doc), encoding="utf-8")
