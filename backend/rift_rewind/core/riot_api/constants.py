"""Riot API constants, routing tables and enum definitions."""

from enum import Enum
from typing import Dict, List


class Region(str, Enum):
    """Riot API regions for regional routing."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API platforms (the "region" a player picks in the client)."""

    BR1 = "BR1"
    EUN1 = "EUN1"
    EUW1 = "EUW1"
    JP1 = "JP1"
    KR = "KR"
    LA1 = "LA1"
    LA2 = "LA2"
    NA1 = "NA1"
    OC1 = "OC1"
    PH2 = "PH2"
    RU = "RU"
    SG2 = "SG2"
    TH2 = "TH2"
    TR1 = "TR1"
    TW2 = "TW2"
    VN2 = "VN2"


# Account and match-v5 endpoints are served from the regional cluster.
PLATFORM_ROUTING: Dict[str, Region] = {
    Platform.NA1.value: Region.AMERICAS,
    Platform.BR1.value: Region.AMERICAS,
    Platform.LA1.value: Region.AMERICAS,
    Platform.LA2.value: Region.AMERICAS,
    Platform.EUW1.value: Region.EUROPE,
    Platform.EUN1.value: Region.EUROPE,
    Platform.TR1.value: Region.EUROPE,
    Platform.RU.value: Region.EUROPE,
    Platform.KR.value: Region.ASIA,
    Platform.JP1.value: Region.ASIA,
    Platform.OC1.value: Region.SEA,
    Platform.PH2.value: Region.SEA,
    Platform.SG2.value: Region.SEA,
    Platform.TH2.value: Region.SEA,
    Platform.TW2.value: Region.SEA,
    Platform.VN2.value: Region.SEA,
}

DEFAULT_ROUTING = Region.AMERICAS

# Tag lines players most often keep from account creation, tried in order
# when a Riot ID is typed without its "#tag" part.
COMMON_TAG_LINES: Dict[str, List[str]] = {
    "KR": ["KR1", "KR", "kr1"],
    "NA1": ["NA1", "NA", "na1"],
    "EUW1": ["EUW", "EUW1", "euw"],
    "EUNE": ["EUNE", "EUN1", "eune"],
    "EUN1": ["EUNE", "EUN1", "eune"],
    "JP1": ["JP1", "JP", "jp1"],
    "BR1": ["BR1", "BR", "br1"],
    "LA1": ["LA1", "LAN", "lan"],
    "LA2": ["LA2", "LAS", "las"],
    "OC1": ["OCE", "OC1", "oce"],
    "TR1": ["TR1", "TR", "tr1"],
    "RU": ["RU", "RU1", "ru"],
}

RIOT_ID_SEPARATOR = "#"

# match-v5 ids endpoint refuses counts above this
MAX_MATCH_IDS_PER_CALL = 100


def routing_for_platform(platform: str) -> Region:
    """Regional routing value serving a platform; unknown platforms go to americas."""
    return PLATFORM_ROUTING.get(platform.upper(), DEFAULT_ROUTING)
