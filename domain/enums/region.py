"""Platform enumeration and its regional routing."""
from enum import Enum
from typing import Optional


_REGIONAL_ROUTES = {
    "na1": "americas", "br1": "americas", "la1": "americas", "la2": "americas",
    "euw1": "europe", "eun1": "europe", "tr1": "europe", "ru": "europe", "me1": "europe",
    "kr": "asia", "jp1": "asia",
    "oc1": "sea", "ph2": "sea", "sg2": "sea", "th2": "sea", "tw2": "sea", "vn2": "sea",
}


class Region(Enum):
    """League of Legends platforms.

    league-v4 and summoner-v4 live on the platform host (``na1``), match-v5
    lives on the regional host (``americas``); ``regional_route`` maps one to
    the other.
    """

    NA1 = "na1"
    BR1 = "br1"
    LA1 = "la1"
    LA2 = "la2"
    EUW1 = "euw1"
    EUN1 = "eun1"
    TR1 = "tr1"
    RU = "ru"
    ME1 = "me1"
    KR = "kr"
    JP1 = "jp1"
    OC1 = "oc1"
    PH2 = "ph2"
    SG2 = "sg2"
    TH2 = "th2"
    TW2 = "tw2"
    VN2 = "vn2"

    @property
    def platform_route(self) -> str:
        return self.value

    @property
    def regional_route(self) -> str:
        return _REGIONAL_ROUTES.get(self.value, "americas")

    @classmethod
    def from_platform(cls, code: str) -> Optional['Region']:
        try:
            return cls(code.strip().lower())
        except ValueError:
            return None
