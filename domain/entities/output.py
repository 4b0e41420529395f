"""Rows of the finalized output artifacts."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class BuildEntry:
    """One ranked build for a (patch bucket, champion, role)."""

    build_sig: str
    boots: Optional[int]
    core: list[int]
    items: list[int]
    summoners: list[int]
    games: int
    wins: int
    winrate: float
    score: float

    def to_dict(self) -> dict:
        return {
            'buildSig': self.build_sig,
            'boots': self.boots,
            'core': list(self.core),
            'items': list(self.items),
            'summoners': list(self.summoners),
            'games': self.games,
            'wins': self.wins,
            'winrate': self.winrate,
            'score': self.score,
        }


@dataclass
class ChampionTierRow:
    """One champion in ``champion_tiers.json``."""

    champion_id: int
    name: str
    slug: str
    picks: int
    wins: int
    bans: int
    winrate: float
    banrate: float
    score: float = 0.0
    tier: str = "—"
    matches_seen: int = 0
    ddragon_version: str = ""
    generated_at: str = ""

    def to_dict(self) -> dict:
        return {
            'championId': self.champion_id,
            'name': self.name,
            'slug': self.slug,
            'picks': self.picks,
            'wins': self.wins,
            'bans': self.bans,
            'winrate': round(self.winrate, 4),
            'banrate': round(self.banrate, 4),
            'score': round(self.score, 6),
            'tier': self.tier,
            'matchesSeen': self.matches_seen,
            'ddragonVersion': self.ddragon_version,
            'generatedAt': self.generated_at,
        }
