import asyncio

import pytest

from domain.enums import LadderTier
from domain.errors import LadderBootstrapError
from application.services.ladder import LadderBootstrapService, parse_match_ids_from_urls, seed_match_ids
from conftest import make_match_repo, make_summoner_repo, ten_player_match


def _bootstrap(make_client, max_players=3, tier=LadderTier.CHALLENGER):
    async def go():
        async with make_client(max_retries=0) as client:
            service = LadderBootstrapService(client, make_summoner_repo(client), tier=tier, max_players=max_players)
            return await service.bootstrap_puuids()
    return asyncio.run(go())


def test_top_lp_entries_resolved_in_order(fake_riot, make_client):
    fake_riot.league = {"entries": [
        {"summonerId": "s-low", "leaguePoints": 900},
        {"summonerId": "s-top", "leaguePoints": 1800},
        {"summonerId": "s-mid", "leaguePoints": 1200},
        {"summonerId": "s-cut", "leaguePoints": 100},
    ]}
    for sid in ("s-low", "s-top", "s-mid", "s-cut"):
        fake_riot.summoners_by_id[sid] = {"id": sid, "puuid": f"puuid-{sid}"}

    assert _bootstrap(make_client) == ["puuid-s-top", "puuid-s-mid", "puuid-s-low"]
    assert "/lol/league/v4/challengerleagues/by-queue/RANKED_SOLO_5x5" in fake_riot.paths()
    assert "/lol/summoner/v4/summoners/s-cut" not in fake_riot.paths()


def test_failed_resolution_is_skipped(fake_riot, make_client):
    fake_riot.league = {"entries": [
        {"summonerId": "ok", "leaguePoints": 3},
        {"summonerId": "gone", "leaguePoints": 2},
        {"puuid": "direct", "leaguePoints": 1},
    ]}
    fake_riot.summoners_by_id["ok"] = {"id": "ok", "puuid": "p-ok"}

    assert _bootstrap(make_client) == ["p-ok", "direct"]


def test_name_fallback_and_dedupe(fake_riot, make_client):
    fake_riot.league = {"entries": [
        {"summonerName": "Faker", "leaguePoints": 2},
        {"puuid": "p-faker", "leaguePoints": 1},
    ]}
    fake_riot.summoners_by_name["Faker"] = {"puuid": "p-faker"}

    assert _bootstrap(make_client, tier=LadderTier.MASTER) == ["p-faker"]
    assert "/lol/league/v4/masterleagues/by-queue/RANKED_SOLO_5x5" in fake_riot.paths()


def test_zero_resolved_raises(fake_riot, make_client):
    fake_riot.league = {"entries": [{"summonerId": "gone", "leaguePoints": 1}, {"leaguePoints": 0}]}
    with pytest.raises(LadderBootstrapError):
        _bootstrap(make_client)


def test_match_ids_from_urls():
    urls = [
        "https://www.leagueofgraphs.com/match/na/NA1_5012345678",
        "https://example.com/EUW1_7000000001#participant3",
        "https://example.com/KR_1234",
        "https://example.com/NA1_5012345678",
    ]
    assert parse_match_ids_from_urls(urls) == ["NA1_5012345678", "EUW1_7000000001"]
    assert seed_match_ids(["NA1_1", "EUW1_7000000001"], urls) == ["NA1_1", "EUW1_7000000001", "NA1_5012345678"]


def test_seed_match_participants_are_not_cached(fake_riot, make_client, data_dirs):
    fake_riot.matches["NA1_42"] = ten_player_match("NA1_42", "seed")

    async def go():
        async with make_client(max_retries=0) as client:
            repo = make_match_repo(client, data_dirs)
            return await LadderBootstrapService.puuids_from_seed_matches(repo, ["NA1_42", "NA1_404"])

    puuids = asyncio.run(go())
    assert puuids == [f"seed-{i}" for i in range(10)]
    assert list(data_dirs["matches"].iterdir()) == []
