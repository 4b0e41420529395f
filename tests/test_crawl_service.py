import asyncio

from domain.entities import AggregationKey
from domain.enums import Role
from infrastructure.state import FrontierStore, read_json
from application.services.crawl import CrawlConfig, CrawlService
from conftest import make_match_repo, match_json, participant_json, ten_player_match


def _crawl(make_client, data_dirs, stores, bootstrap, config=None, max_retries=0):
    frontier, aggregate = stores

    async def go():
        async with make_client(max_retries=max_retries) as client:
            service = CrawlService(
                make_match_repo(client, data_dirs),
                frontier,
                aggregate,
                config=config or CrawlConfig(),
                clock=lambda: 1_700_000_100.0,
            )
            stats = await service.run(bootstrap)
            service.persist("end")
            return service, stats

    return asyncio.run(go())


def _seed_player(fake_riot, puuid, n, prefix="NA1_"):
    ids = [f"{prefix}{1000 + i}" for i in range(n)]
    fake_riot.match_ids[puuid] = ids
    for i, match_id in enumerate(ids):
        fake_riot.matches[match_id] = ten_player_match(match_id, f"{puuid}-m{i}")
    return ids


def test_budget_stops_after_exact_match_count(fake_riot, make_client, data_dirs, stores):
    ids = _seed_player(fake_riot, "p0", 20)
    config = CrawlConfig(max_matches_per_run=5, matches_per_puuid=20)

    service, stats = _crawl(make_client, data_dirs, stores, ["p0"], config)

    assert stats.matches_processed == 5
    frontier, _ = stores
    assert frontier.seen_match_ids == set(ids[:5])
    assert frontier.cursor_for("p0") == 20
    assert read_json(data_dirs["state"] / "seen_match_ids.json") == {"ids": sorted(ids[:5])}
    assert read_json(data_dirs["state"] / "puuid_cursors.json") == {"p0": 20}
    assert len(list(data_dirs["matches"].iterdir())) == 5
    # participants were queued but never drained
    assert stats.new_puuids_added > 0
    assert stats.players_drained == 1


def test_unknown_role_skips_only_that_participant(fake_riot, make_client, data_dirs, stores):
    fake_riot.match_ids["p0"] = ["NA1_1"]
    fake_riot.matches["NA1_1"] = match_json("NA1_1", [
        participant_json("a", champion_id=10, position="Invalid", items=[3006, 3031]),
        participant_json("b", champion_id=11, position="JUNGLE", items=[3047, 6692], win=False),
        participant_json("c", champion_id=0, position="TOP", items=[3047, 6692]),
        participant_json("d", champion_id=12, position="TOP", items=[3047]),
    ])

    _, stats = _crawl(make_client, data_dirs, stores, ["p0"])

    _, aggregate = stores
    assert stats.matches_processed == 1
    assert stats.participants_counted == 1
    assert stats.participants_skipped == 3
    assert len(aggregate) == 1
    bucket = aggregate.get(AggregationKey("16.1", 420, 11, Role.JUNGLE, "b=3047|c=6692"))
    assert (bucket.games, bucket.wins) == (1, 0)


def test_player_failure_does_not_stop_the_run(fake_riot, make_client, data_dirs, stores):
    fake_riot.fail["/by-puuid/bad/"] = 403
    _seed_player(fake_riot, "good", 2)

    _, stats = _crawl(make_client, data_dirs, stores, ["bad", "good"], CrawlConfig(max_new_puuids_per_run=0))

    frontier, _ = stores
    assert stats.player_failures == 1
    assert stats.matches_processed == 2
    assert {"bad", "good"} <= frontier.seen_puuids
    assert "bad" not in frontier.cursors


def test_failed_match_is_marked_seen_and_skipped(fake_riot, make_client, data_dirs, stores, sleeps):
    ids = _seed_player(fake_riot, "p0", 3)
    fake_riot.fail[f"/matches/{ids[1]}"] = 500

    _, stats = _crawl(make_client, data_dirs, stores, ["p0"], CrawlConfig(max_new_puuids_per_run=0), max_retries=1)

    frontier, _ = stores
    assert stats.match_failures == 1
    assert stats.matches_processed == 2
    assert ids[1] in frontier.seen_match_ids
    assert len(sleeps.calls) == 1


def test_untracked_queue_and_seen_matches_are_skipped(fake_riot, make_client, data_dirs, stores):
    fake_riot.match_ids["p0"] = ["NA1_1", "NA1_2", "NA1_3"]
    fake_riot.matches["NA1_1"] = ten_player_match("NA1_1", "x", queue_id=450)
    fake_riot.matches["NA1_2"] = match_json("NA1_2", [])
    fake_riot.matches["NA1_3"] = ten_player_match("NA1_3", "y")
    frontier, _ = stores
    frontier.seen_match_ids.add("NA1_3")

    _, stats = _crawl(make_client, data_dirs, stores, ["p0"])

    assert stats.skipped_untracked_queue == 1
    assert stats.skipped_no_participants == 1
    assert stats.skipped_seen == 1
    assert stats.matches_processed == 0
    assert list(data_dirs["matches"].iterdir()) == []
    assert "/lol/match/v5/matches/NA1_3" not in fake_riot.paths()


def test_harvest_respects_cap(fake_riot, make_client, data_dirs, stores):
    _seed_player(fake_riot, "p0", 2)

    _, stats = _crawl(make_client, data_dirs, stores, ["p0"], CrawlConfig(max_new_puuids_per_run=3))

    assert stats.new_puuids_added == 3
    # the three harvested players were drained (they have no match ids)
    assert stats.players_drained == 4


def test_seen_bootstrap_player_needs_reprocess_flag(fake_riot, make_client, data_dirs, stores):
    _seed_player(fake_riot, "p0", 30)
    frontier, _ = stores
    frontier.seen_puuids.add("p0")
    frontier.cursors["p0"] = 20

    _, stats = _crawl(make_client, data_dirs, stores, ["p0"], CrawlConfig(max_new_puuids_per_run=0))
    assert stats.players_skipped_seen == 1
    assert fake_riot.requests == []

    _, stats = _crawl(
        make_client, data_dirs, stores, ["p0"],
        CrawlConfig(max_new_puuids_per_run=0, reprocess_bootstrap=True),
    )
    assert stats.players_drained == 1
    assert stats.matches_processed == 10
    assert fake_riot.requests[0].url.params["start"] == "20"
    assert frontier.cursor_for("p0") == 40


def test_incremental_runs_never_double_count(fake_riot, make_client, data_dirs, stores):
    _seed_player(fake_riot, "p0", 4)
    config = CrawlConfig(max_new_puuids_per_run=0, reprocess_bootstrap=True, matches_per_puuid=2)

    _crawl(make_client, data_dirs, stores, ["p0"], config)
    _, aggregate = stores
    first = sum(b.games for _, b in aggregate.items())

    reloaded = (FrontierStore.load(data_dirs["state"]), aggregate)
    _crawl(make_client, data_dirs, reloaded, ["p0"], config)
    _crawl(make_client, data_dirs, reloaded, ["p0"], config)
    total = sum(b.games for _, b in aggregate.items())

    assert first == 20
    assert total == 40
    assert reloaded[0].cursor_for("p0") == 6


def test_recency_window(fake_riot, make_client, data_dirs, stores):
    now_ms = 1_700_000_100_000
    fake_riot.match_ids["p0"] = ["NA1_1", "NA1_2", "NA1_3"]
    fake_riot.matches["NA1_1"] = ten_player_match("NA1_1", "a", game_creation=now_ms - 1000)
    fake_riot.matches["NA1_2"] = ten_player_match("NA1_2", "b", game_creation=now_ms - 40 * 86_400_000)
    fake_riot.matches["NA1_3"] = ten_player_match("NA1_3", "c", game_creation=0)

    _, stats = _crawl(
        make_client, data_dirs, stores, ["p0"],
        CrawlConfig(max_new_puuids_per_run=0, match_max_age_days=30),
    )

    assert stats.matches_processed == 1
    assert stats.skipped_too_old == 1
    assert stats.skipped_no_game_creation == 1
    assert fake_riot.requests[0].url.params["startTime"] == str(1_700_000_100 - 30 * 86_400)


def test_timeline_mode_uses_purchase_order(fake_riot, make_client, data_dirs, stores):
    fake_riot.match_ids["p0"] = ["NA1_1"]
    fake_riot.matches["NA1_1"] = match_json("NA1_1", [
        participant_json("a", champion_id=10, position="MIDDLE", items=[3020, 3089, 4645, 6655]),
    ])
    fake_riot.timelines["NA1_1"] = {
        "metadata": {"participants": ["a"]},
        "info": {"frames": [{"events": [
            {"type": "ITEM_PURCHASED", "timestamp": 1, "participantId": 1, "itemId": 6655},
            {"type": "ITEM_PURCHASED", "timestamp": 2, "participantId": 1, "itemId": 3020},
            {"type": "ITEM_PURCHASED", "timestamp": 3, "participantId": 1, "itemId": 3157},
            {"type": "ITEM_PURCHASED", "timestamp": 4, "participantId": 1, "itemId": 3089},
        ]}]},
    }

    _crawl(make_client, data_dirs, stores, ["p0"], CrawlConfig(use_timeline=True, max_new_puuids_per_run=0))

    _, aggregate = stores
    [(key, bucket)] = list(aggregate.items())
    assert key.signature == "b=3020|c=3089,3157,6655"
    assert bucket.core == [6655, 3157, 3089]
    assert (data_dirs["timelines"] / "NA1_1.json").is_file()


def test_checkpoints_write_state_mid_run(fake_riot, make_client, data_dirs, stores):
    _seed_player(fake_riot, "p0", 4)

    _, stats = _crawl(make_client, data_dirs, stores, ["p0"], CrawlConfig(max_new_puuids_per_run=0, checkpoint_every=2))

    assert stats.checkpoints == 2
    assert (data_dirs["state"] / "agg_state.json").is_file()


def test_shutdown_request_stops_before_new_work(fake_riot, make_client, data_dirs, stores):
    _seed_player(fake_riot, "p0", 5)
    frontier, aggregate = stores

    async def go():
        async with make_client(max_retries=0) as client:
            service = CrawlService(
                make_match_repo(client, data_dirs), frontier, aggregate,
                config=CrawlConfig(max_new_puuids_per_run=0),
                progress_callback=lambda done, total: service.request_shutdown() if done == 2 else None,
            )
            return await service.run(["p0"])

    stats = asyncio.run(go())
    assert stats.matches_processed == 2
