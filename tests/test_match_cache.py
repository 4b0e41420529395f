import asyncio
import json

import pytest

from domain.enums import QueueType, Role
from domain.errors import MatchShapeError
from infrastructure.cache import MatchCache
from infrastructure.repositories import parse_match, parse_timeline
from conftest import match_json, participant_json, ten_player_match, make_match_repo


def test_read_through_fetches_once(fake_riot, make_client, data_dirs):
    fake_riot.matches["NA1_100"] = ten_player_match("NA1_100", "a")

    async def go():
        async with make_client() as client:
            cache = MatchCache(data_dirs["matches"], data_dirs["timelines"], client)
            first = await cache.get_match("NA1_100")
            second = await cache.get_match("NA1_100")
            return cache, first, second

    cache, first, second = asyncio.run(go())
    assert first == second
    assert len(fake_riot.requests) == 1
    assert cache.fetches == 1 and cache.hits == 1
    assert json.loads((data_dirs["matches"] / "NA1_100.json").read_text()) == first


def test_cache_write_can_be_deferred(fake_riot, make_client, data_dirs):
    fake_riot.matches["NA1_7"] = ten_player_match("NA1_7", "a")

    async def go():
        async with make_client() as client:
            cache = MatchCache(data_dirs["matches"], data_dirs["timelines"], client)
            doc = await cache.get_match("NA1_7", cache_write=False)
            assert not cache.has_match("NA1_7")
            assert cache.write_match("NA1_7", doc) is True
            assert cache.write_match("NA1_7", {"other": 1}) is False
            return cache

    cache = asyncio.run(go())
    assert json.loads(cache.match_path("NA1_7").read_text())["metadata"]["matchId"] == "NA1_7"


def test_unreadable_entry_is_replaced_after_refetch(fake_riot, make_client, data_dirs):
    fake_riot.matches["NA1_9"] = ten_player_match("NA1_9", "a")
    (data_dirs["matches"] / "NA1_9.json").write_text("{trunc", encoding="utf-8")

    async def go():
        async with make_client() as client:
            cache = MatchCache(data_dirs["matches"], data_dirs["timelines"], client)
            await cache.get_match("NA1_9")
            await cache.get_match("NA1_9")
            return cache

    cache = asyncio.run(go())
    assert len(fake_riot.requests) == 1
    assert cache.fetches == 1 and cache.hits == 1
    assert json.loads(cache.match_path("NA1_9").read_text())["metadata"]["matchId"] == "NA1_9"


def test_deferred_write_replaces_unreadable_entry(data_dirs):
    cache = MatchCache(data_dirs["matches"], data_dirs["timelines"])
    cache.match_path("NA1_4").write_text("{trunc", encoding="utf-8")
    assert cache.write_match("NA1_4", {"metadata": {"matchId": "NA1_4"}}) is True
    assert cache.write_match("NA1_4", {"other": 1}) is False
    assert json.loads(cache.match_path("NA1_4").read_text()) == {"metadata": {"matchId": "NA1_4"}}


def test_cached_entry_needs_no_client(data_dirs):
    doc = ten_player_match("NA1_5", "a")
    (data_dirs["matches"] / "NA1_5.json").write_text(json.dumps(doc))
    cache = MatchCache(data_dirs["matches"], data_dirs["timelines"])
    assert asyncio.run(cache.get_match("NA1_5")) == doc
    with pytest.raises(RuntimeError):
        asyncio.run(cache.get_match("NA1_6"))


def test_timelines_are_cached(fake_riot, make_client, data_dirs):
    fake_riot.timelines["NA1_9"] = {"metadata": {"participants": ["p"]}, "info": {"frames": []}}

    async def go():
        async with make_client() as client:
            cache = MatchCache(data_dirs["matches"], data_dirs["timelines"], client)
            await cache.get_timeline("NA1_9")
            await cache.get_timeline("NA1_9")

    asyncio.run(go())
    assert len(fake_riot.requests) == 1
    assert (data_dirs["timelines"] / "NA1_9.json").is_file()


def test_list_match_files_sorted_and_recursive(data_dirs):
    (data_dirs["matches"] / "sub").mkdir()
    for name in ("NA1_3.json", "NA1_1.json", "sub/NA1_2.json", "notes.txt"):
        (data_dirs["matches"] / name).write_text("{}")
    cache = MatchCache(data_dirs["matches"], data_dirs["timelines"])
    names = [p.relative_to(data_dirs["matches"]).as_posix() for p in cache.list_match_files()]
    assert names == ["NA1_1.json", "NA1_3.json", "sub/NA1_2.json"]


def test_parse_match_reads_the_fields_aggregation_needs():
    doc = match_json(
        "NA1_1",
        [participant_json("p", champion_id=99, position="UTILITY", win=False, items=[3158, 0, 3853, 0, 0, 0, 3364], spells=(14, 4))],
        queue_id=430,
        game_version="16.3.1.2",
        bans=[157, -1, 0],
    )
    match = parse_match(doc)
    assert match.match_id == "NA1_1"
    assert match.queue_type is QueueType.NORMAL_BLIND
    assert match.patch_key() == "16.3"
    assert match.patch_key(major_minor_only=False) == "16.3.1.2"
    assert match.patch_major == 16
    assert match.bans == [157]
    p = match.participants[0]
    assert p.role is Role.UTILITY
    assert p.final_items == [3158, 3853, 3364]
    assert p.inventory_items == [3158, 3853]
    assert p.summoner_spells == [4, 14]
    assert match.raw is doc


def test_parse_match_without_info():
    with pytest.raises(MatchShapeError):
        parse_match({"metadata": {"matchId": "NA1_1"}}, "NA1_1")


def test_parse_timeline_keeps_only_purchases():
    doc = {
        "metadata": {"matchId": "NA1_1", "participants": ["a", "b"]},
        "info": {"frames": [
            {"events": [
                {"type": "ITEM_PURCHASED", "timestamp": 10, "participantId": 2, "itemId": 1055},
                {"type": "ITEM_SOLD", "timestamp": 11, "participantId": 2, "itemId": 1055},
            ]},
            {"events": [{"type": "ITEM_PURCHASED", "timestamp": 900, "participantId": 1, "itemId": 3006}]},
        ]},
    }
    timeline = parse_timeline(doc)
    assert timeline.participant_id_for("b") == 2
    assert [e.item_id for e in timeline.purchases_for(2)] == [1055]
    assert len(timeline.purchases) == 2


def test_repository_store_match(fake_riot, make_client, data_dirs):
    fake_riot.matches["NA1_1"] = ten_player_match("NA1_1", "a")

    async def go():
        async with make_client() as client:
            repo = make_match_repo(client, data_dirs)
            match = await repo.get_match("NA1_1", cache_write=False)
            return repo.store_match(match)

    assert asyncio.run(go()) is True
    assert (data_dirs["matches"] / "NA1_1.json").is_file()
