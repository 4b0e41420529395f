import logging

import pytest

from config.settings import Settings, _default_region
from domain.errors import ConfigurationError
from scripts.build_meta_builds import main


def test_validate_requires_key(monkeypatch):
    monkeypatch.setattr(Settings, "RIOT_API_KEY", "")
    with pytest.raises(ConfigurationError):
        Settings.validate()


def test_validate_rejects_malformed_key(monkeypatch):
    monkeypatch.setattr(Settings, "RIOT_API_KEY", "not-a-riot-key")
    with pytest.raises(ConfigurationError):
        Settings.validate()


def test_validate_accepts_prefixed_key(monkeypatch):
    monkeypatch.setattr(Settings, "RIOT_API_KEY", "RGAPI-00000000-aaaa")
    Settings.validate()


def test_describe_never_contains_the_key(monkeypatch):
    monkeypatch.setattr(Settings, "RIOT_API_KEY", "RGAPI-secret-value")
    summary = Settings.describe()
    assert "RGAPI-secret-value" not in str(summary)
    assert summary["api_key"] == "present len=18"


@pytest.mark.parametrize("platform,region", [
    ("na1", "americas"), ("EUW1", "europe"), ("kr", "asia"), ("oc1", "sea"), ("nowhere", "americas"),
])
def test_default_region(platform, region):
    assert _default_region(platform) == region


def test_create_directories(monkeypatch, tmp_path):
    for attr, sub in [
        ("MATCHES_DIR", "cache/matches"), ("TIMELINES_DIR", "cache/timelines"), ("STATE_DIR", "cache/state"),
        ("OUTPUT_DIR", "output"), ("LOG_DIR", "logs"),
    ]:
        monkeypatch.setattr(Settings, attr, tmp_path / sub)
    Settings.create_directories()
    assert (tmp_path / "cache" / "state").is_dir()
    assert (tmp_path / "logs").is_dir()


def test_crawl_entry_point_aborts_before_creating_directories(tmp_path, monkeypatch):
    class NoKeySettings(Settings):
        RIOT_API_KEY = ""
        DATA_DIR = tmp_path / "data"
        LOG_DIR = DATA_DIR / "logs"
        STATE_DIR = DATA_DIR / "cache" / "state"

    monkeypatch.setenv("LOG_CONSOLE", "false")
    try:
        assert main(NoKeySettings) == 1
    finally:
        logging.getLogger().handlers.clear()
    assert not (tmp_path / "data").exists()
