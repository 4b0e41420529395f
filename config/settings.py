"""Application settings and configuration."""
import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

from domain.enums import Region
from domain.errors import ConfigurationError

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes')


def _csv(name: str) -> List[str]:
    return [s.strip() for s in os.getenv(name, '').split(',') if s.strip()]


def _default_region(platform: str) -> str:
    region = Region.from_platform(platform)
    return region.regional_route if region else 'americas'


class Settings:
    """
    Every knob is an environment variable with a safe default; the crawl and
    finalize entry points have no flags or subcommands.

    Two host partitions:
      RIOT_REGION   → match-v5 (americas / europe / asia / sea)
      RIOT_PLATFORM → league-v4 + summoner-v4 (na1, euw1, kr, ...)
    """

    API_KEY_PREFIX: str = 'RGAPI-'
    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '').strip()

    # ── Hosts ──────────────────────────────────────────────────────────────
    RIOT_PLATFORM: str = os.getenv('RIOT_PLATFORM', 'na1').strip()
    RIOT_REGION:   str = os.getenv('RIOT_REGION', '').strip() or _default_region(RIOT_PLATFORM)

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: int = int(os.getenv('REQUEST_TIMEOUT', '30'))
    MAX_RETRIES:     int = int(os.getenv('MAX_RETRIES', '5'))
    REQUEST_GAP_MS:  int = int(os.getenv('REQUEST_GAP_MS', '0'))

    # ── Crawl budgets ──────────────────────────────────────────────────────
    MAX_MATCHES_PER_RUN:    int = int(os.getenv('MAX_MATCHES_PER_RUN', '2500'))
    MAX_NEW_PUUIDS_PER_RUN: int = int(os.getenv('MAX_NEW_PUUIDS_PER_RUN', '250'))
    MATCHES_PER_PUUID:      int = int(os.getenv('MATCHES_PER_PUUID', '20'))
    MATCH_MAX_AGE_DAYS:     int = int(os.getenv('MATCH_MAX_AGE_DAYS', '0'))
    CHECKPOINT_EVERY:       int = int(os.getenv('CHECKPOINT_EVERY', '0'))

    # ── Extraction ─────────────────────────────────────────────────────────
    USE_TIMELINE:           bool = _flag('USE_TIMELINE')
    PATCH_MAJOR_MINOR_ONLY: bool = _flag('PATCH_MAJOR_MINOR_ONLY', '1')

    # ── Scoring ────────────────────────────────────────────────────────────
    MIN_SAMPLE:         int   = int(os.getenv('MIN_SAMPLE', '200'))
    MIN_DISPLAY_SAMPLE: int   = int(os.getenv('MIN_DISPLAY_SAMPLE', '10'))
    BAYES_K:            float = float(os.getenv('BAYES_K', '100'))
    PRIOR_WINRATE:      float = float(os.getenv('PRIOR_WINRATE', '0.5'))
    MIN_PATCH_MAJOR:    int   = int(os.getenv('MIN_PATCH_MAJOR', '16'))

    # ── Ladder bootstrap ───────────────────────────────────────────────────
    LADDER_TIER:         str  = os.getenv('LADDER_TIER', 'challenger').strip().lower()
    LADDER_QUEUE:        str  = os.getenv('LADDER_QUEUE', 'RANKED_SOLO_5x5').strip()
    LADDER_MAX_PLAYERS:  int  = int(os.getenv('LADDER_MAX_PLAYERS', '250'))
    REPROCESS_BOOTSTRAP: bool = _flag('REPROCESS_BOOTSTRAP')

    SEED_MATCH_IDS:  List[str] = _csv('SEED_MATCH_IDS')
    SEED_MATCH_URLS: List[str] = _csv('SEED_MATCH_URLS')

    # ── Destructive resets (applied when state is loaded) ──────────────────
    RESET_SEEN_MATCHES: bool = _flag('RESET_SEEN_MATCHES')
    RESET_SEEN_PUUIDS:  bool = _flag('RESET_SEEN_PUUIDS')
    RESET_CURSORS:      bool = _flag('RESET_CURSORS')
    RESET_AGGREGATE:    bool = _flag('RESET_AGGREGATE')

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR:       Path = Path(__file__).resolve().parent.parent
    DATA_DIR:       Path = Path(os.getenv('DATA_DIR', '') or BASE_DIR / 'data')
    CACHE_DIR:      Path = DATA_DIR / 'cache'
    MATCHES_DIR:    Path = CACHE_DIR / 'matches'
    TIMELINES_DIR:  Path = CACHE_DIR / 'timelines'
    STATE_DIR:      Path = CACHE_DIR / 'state'
    OUTPUT_DIR:     Path = DATA_DIR / 'output'
    LOG_DIR:        Path = DATA_DIR / 'logs'
    ITEMS_JSON_PATH: Path = Path(os.getenv('ITEMS_JSON_PATH', '') or DATA_DIR / 'static' / 'items.json')

    OUT_RANKED_PATH:         Path = OUTPUT_DIR / 'meta_builds_ranked.json'
    OUT_CASUAL_PATH:         Path = OUTPUT_DIR / 'meta_builds_casual.json'
    OUT_CHAMPION_TIERS_PATH: Path = OUTPUT_DIR / 'champion_tiers.json'

    DDRAGON_BASE_URL: str = os.getenv('DDRAGON_BASE_URL', 'https://ddragon.leagueoflegends.com').rstrip('/')

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if not cls.RIOT_API_KEY:
            raise ConfigurationError("RIOT_API_KEY must be set in config/.env or the environment")
        if not cls.RIOT_API_KEY.startswith(cls.API_KEY_PREFIX):
            raise ConfigurationError(
                f"RIOT_API_KEY is malformed (expected prefix {cls.API_KEY_PREFIX}...)"
            )

    @classmethod
    def create_directories(cls) -> None:
        for d in (cls.MATCHES_DIR, cls.TIMELINES_DIR, cls.STATE_DIR, cls.OUTPUT_DIR, cls.LOG_DIR):
            d.mkdir(parents=True, exist_ok=True)

    @classmethod
    def describe(cls) -> dict:
        """Loggable summary; never includes the key itself."""
        key = cls.RIOT_API_KEY
        return {
            'api_key': f"present len={len(key)}" if key else "MISSING",
            'region': cls.RIOT_REGION,
            'platform': cls.RIOT_PLATFORM,
            'ladder': f"{cls.LADDER_TIER}/{cls.LADDER_QUEUE}/{cls.LADDER_MAX_PLAYERS}",
            'budgets': f"matches={cls.MAX_MATCHES_PER_RUN} new_puuids={cls.MAX_NEW_PUUIDS_PER_RUN} "
                       f"page={cls.MATCHES_PER_PUUID}",
            'use_timeline': cls.USE_TIMELINE,
            'seed_match_ids': len(cls.SEED_MATCH_IDS),
            'seed_match_urls': len(cls.SEED_MATCH_URLS),
        }


settings = Settings()
