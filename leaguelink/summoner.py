"""Summoners, their rankings and champion masteries as reported by the lobby client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike

from .api import JsonDocument, LobbyClientAPI, Transport
from .ranking import Ranking, division_from_string, tier_from_string
from .textutil import to_lower

log = logging.getLogger(__name__)

_SUMMONER_BY_ID_URI = "lol-summoner/v1/summoners/{}"
_SUMMONER_BY_PUUID_URI = "lol-summoner/v2/summoners/puuid/{}"
_CURRENT_SUMMONER_URI = "lol-summoner/v1/current-summoner"
_RANK_BY_PUUID_URI = "lol-ranked/v1/ranked-stats/{}"
_SUMMONER_BY_NAME_URI = "lol-summoner/v1/summoners?name={}"
_ALL_MASTERIES_URI = "lol-champion-mastery/v1/{}/champion-mastery"
_SOLO_QUEUE = "RANKED_SOLO_5x5"
_DEFAULT_TAG = "EUW"

_UINT64_MASK = (1 << 64) - 1


def _equals_ignore_case(left: str, right: str) -> bool:
    return to_lower(left) == to_lower(right)


def _as_signed64(value: int) -> int:
    value &= _UINT64_MASK
    return value - (1 << 64) if value >= 1 << 63 else value


@dataclass(frozen=True)
class ChampionMastery:
    """Mastery points a player has on one champion."""

    summoner_puuid: str = ""
    champion_id: int = 0
    mastery_amount: int = 0


@dataclass
class Summoner:
    """A player account known to the client."""

    puuid: str
    account_id: int
    summoner_id: int
    account_name: str
    rank: Ranking = field(default_factory=Ranking)


def summoner_from_json(document: JsonDocument) -> Summoner:
    """Build a summoner from the client's summoner document.

    The tag line is appended as ``#tag`` unless it is the default region tag.
    """
    name = document["gameName"]
    tag_line = document["tagLine"]
    if not _equals_ignore_case(tag_line, _DEFAULT_TAG):
        name = f"{name}#{tag_line}"
    return Summoner(
        puuid=document["puuid"],
        account_id=int(document["accountId"]),
        summoner_id=int(document["summonerId"]),
        account_name=name,
    )


def ranking_from_json(document: JsonDocument) -> Ranking:
    """The solo queue ranking from a ranked-stats document; unranked if absent."""
    for entry in document["queues"]:
        if _equals_ignore_case(entry["queueType"], _SOLO_QUEUE):
            return Ranking(
                tier_from_string(entry["tier"]),
                division_from_string(entry["division"]),
                int(entry["leaguePoints"]),
            )
    return Ranking()


def escape_summoner_name(name: str) -> str:
    """Percent-encode a summoner name for a query, adding the default tag if none is given.

    ASCII letters and digits stay as they are; every other UTF-8 byte becomes
    ``%xx`` in lower-case hex.
    """
    if "#" not in name:
        name += f"#{_DEFAULT_TAG}"
    parts = []
    for byte in name.encode("utf-8"):
        char = chr(byte)
        if byte < 0x80 and char.isascii() and char.isalnum():
            parts.append(char)
        else:
            parts.append(f"%{byte:02x}")
    return "".join(parts)


def _masteries(document: JsonDocument, puuid: str) -> list[ChampionMastery]:
    return [
        ChampionMastery(puuid, int(entry["championId"]), int(entry["championPoints"]))
        for entry in document
    ]


def masteries_by_champion(document: JsonDocument, puuid: str) -> dict[int, ChampionMastery]:
    """Masteries keyed by champion id; the first entry for a champion wins."""
    result: dict[int, ChampionMastery] = {}
    for mastery in _masteries(document, puuid):
        result.setdefault(mastery.champion_id, mastery)
    return result


def masteries_by_points(document: JsonDocument, puuid: str) -> dict[int, ChampionMastery]:
    """Masteries keyed by points, highest first; the first entry for equal points wins."""
    result: dict[int, ChampionMastery] = {}
    for mastery in _masteries(document, puuid):
        result.setdefault(mastery.mastery_amount, mastery)
    return dict(sorted(result.items(), key=lambda item: item[0], reverse=True))


class SummonerAPI(LobbyClientAPI):
    """Summoner, ranking and mastery queries against the lobby client."""

    def __init__(
        self, league_directory: str | PathLike[str], transport: Transport | None = None
    ) -> None:
        super().__init__(league_directory, transport)
        self._by_puuid: dict[str, Summoner] = {}

    def _summoner_from(self, uri: str) -> Summoner | None:
        document = self.get(uri)
        if isinstance(document, dict):
            return summoner_from_json(document)
        log.warning("Summoner lookup came up empty; possibly a bot account")
        return None

    def current_summoner(self) -> Summoner | None:
        """The summoner logged in to the client."""
        return self._summoner_from(_CURRENT_SUMMONER_URI)

    def find_by_summoner_id(self, summoner_id: int) -> Summoner | None:
        log.debug("Requesting summoner for id %d", summoner_id)
        return self._summoner_from(_SUMMONER_BY_ID_URI.format(_as_signed64(summoner_id)))

    def find_by_puuid(self, puuid: str) -> Summoner | None:
        """Look up a summoner by PUUID; found summoners are remembered."""
        cached = self._by_puuid.get(puuid)
        if cached is not None:
            return cached
        log.debug("Requesting summoner for PUUID %s", puuid)
        summoner = self._summoner_from(_SUMMONER_BY_PUUID_URI.format(puuid))
        if summoner is not None:
            self._by_puuid[puuid] = summoner
        return summoner

    def find_by_name(self, name: str) -> Summoner | None:
        log.debug("Requesting summoner for name %s", name)
        return self._summoner_from(_SUMMONER_BY_NAME_URI.format(escape_summoner_name(name)))

    def ranking_for_puuid(self, puuid: str) -> Ranking:
        log.debug("Requesting ranking for PUUID %s", puuid)
        document = self.get(_RANK_BY_PUUID_URI.format(puuid))
        if isinstance(document, dict):
            return ranking_from_json(document)
        return Ranking()

    def masteries_for_puuid(self, puuid: str) -> dict[int, ChampionMastery]:
        """All champion masteries of a player keyed by champion id."""
        if not puuid:
            log.debug("Mastery query for an empty PUUID; returning nothing")
            return {}
        document = self.get(_ALL_MASTERIES_URI.format(puuid))
        if isinstance(document, list):
            return masteries_by_champion(document, puuid)
        return {}

    def masteries_sorted_by_points(self, puuid: str) -> dict[int, ChampionMastery]:
        """All champion masteries of a player keyed by points, highest first."""
        document = self.get(_ALL_MASTERIES_URI.format(puuid))
        if isinstance(document, list):
            return masteries_by_points(document, puuid)
        return {}