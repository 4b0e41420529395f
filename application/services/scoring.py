"""Bayesian build scoring and champion tier math."""
import math
import re
from typing import Dict, List, Sequence, Tuple

TIER_ORDER = {"S": 0, "A": 1, "B": 2, "C": 3, "D": 4, "—": 9}
UNRANKED_TIER = "—"

# (percentile floor, tier), checked top-down
TIER_CUTOFFS = ((0.9, "S"), (0.7, "A"), (0.4, "B"), (0.15, "C"))

W_PICK = 0.40
W_WIN = 0.50
W_BAN = 0.10


def bayes_score(wins: int, games: int, k: float, prior: float) -> float:
    """Win rate shrunk toward ``prior`` with the weight of ``k`` pseudo-games."""
    denominator = games + k
    if denominator <= 0:
        return prior
    return (wins + k * prior) / denominator


def mean(xs: Sequence[float]) -> float:
    return sum(xs) / len(xs) if xs else 0.0


def std(xs: Sequence[float], mu: float) -> float:
    """Population standard deviation; 1 when it would be degenerate."""
    if len(xs) < 2:
        return 1.0
    out = math.sqrt(sum((x - mu) ** 2 for x in xs) / len(xs))
    return out if out > 1e-9 else 1.0


def zscores(xs: Sequence[float]) -> List[float]:
    mu = mean(xs)
    sd = std(xs, mu)
    return [(x - mu) / sd for x in xs]


def champion_score(z_pick: float, z_win: float, z_ban: float) -> float:
    return W_PICK * z_pick + W_WIN * z_win + W_BAN * z_ban


def percentile(rank: int, n: int) -> float:
    """``rank`` is 0 for the best score."""
    return 1.0 if n <= 1 else 1.0 - rank / (n - 1)


def tier_from_percentile(p: float) -> str:
    for floor, tier in TIER_CUTOFFS:
        if p >= floor:
            return tier
    return "D"


def assign_tiers(scores: Dict[int, float]) -> Dict[int, str]:
    """Map each id to a tier by its rank among ``scores`` (highest first)."""
    ranked: List[Tuple[int, float]] = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))
    n = len(ranked)
    return {key: tier_from_percentile(percentile(i, n)) for i, (key, _) in enumerate(ranked)}


def slugify(name: str) -> str:
    s = name.strip().lower()
    s = re.sub(r"['\"]", "", s)
    s = s.replace("&", "and")
    s = re.sub(r"[^a-z0-9]+", "-", s)
    return s.strip("-")
