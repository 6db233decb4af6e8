"""Finding the watched game and fetching its post-match data."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from os import PathLike

import psutil

from .api import IngameAPI, JsonDocument, LobbyClientAPI, Transport

log = logging.getLogger(__name__)

INVALID_GAME_ID = (1 << 64) - 1
_UINT64_MASK = (1 << 64) - 1

_SESSION_URI = "lol-gameflow/v1/session"
_GAME_URI = "lol-match-history/v1/games/{}"
_TIMELINE_URI = "lol-match-history/v1/game-timelines/{}"
_HISTORY_URI = "lol-match-history/v1/products/lol/{}/matches?begIndex=2&endIndex=2"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class SpectateType(IntEnum):
    INVALID = 0
    MYSELF_INGAME = 1
    LIVE_SPECTATE = 2
    THIRDPARTY_SITE_SPECTATE = 3
    REPLAY_SPECTATE = 4

    def __str__(self) -> str:
        return self.name


class Locale(IntEnum):
    WESTERN = 0
    KOREAN = 1


@dataclass(frozen=True)
class GameSpectateInfo:
    """Which game is being watched and how; the locale takes no part in equality."""

    game_id: int = INVALID_GAME_ID
    spectate_type: SpectateType = SpectateType.INVALID
    locale: Locale = field(default=Locale.WESTERN, compare=False)

    def __str__(self) -> str:
        return f"[GameId: {self.game_id}, SpectateType: {self.spectate_type}]"


DEFAULT_INVALID_SPECTATE = GameSpectateInfo()


def _to_uint64(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) & _UINT64_MASK if match else 0


def _as_signed64(value: int) -> int:
    value &= _UINT64_MASK
    return value - (1 << 64) if value >= 1 << 63 else value


def game_id_from_start_parameters(parameters: Iterable[str]) -> tuple[int, SpectateType]:
    """Find a game id in the game's start parameters.

    A ``-GameID`` parameter names a game watched through a third-party site;
    a ``.rofl`` path names a replay. Without either, the id is INVALID_GAME_ID.
    """
    game_id = INVALID_GAME_ID
    spectate_type = SpectateType.INVALID
    for param in parameters:
        if "-GameID" in param:
            for token in (part for part in param.split(" ") if part):
                game_id = _to_uint64(token)
                if game_id:
                    log.debug("Third-party game id found: %d", game_id)
                    spectate_type = SpectateType.THIRDPARTY_SITE_SPECTATE
                    break
            if game_id:
                break
        if ".rofl" in param:
            log.debug("Replay parameter found: %s", param)
            path = param[param.rfind("/") + 1:]
            path = path[path.find("-") + 1:]
            spectate_type = SpectateType.REPLAY_SPECTATE
            game_id = _to_uint64(path)
            break
    return game_id, spectate_type


def locale_from_start_parameters(parameters: Iterable[str]) -> Locale:
    """Korean when the first ``-Locale`` parameter mentions KR, else western."""
    for param in parameters:
        if "-Locale" in param:
            return Locale.KOREAN if "KR" in param else Locale.WESTERN
    return Locale.WESTERN


def find_ingame_process_arguments() -> list[str] | None:
    """Command line of the running game process, or None if it is not running."""
    wanted = IngameAPI.CLIENT_EXE_NAME.casefold()
    for process in psutil.process_iter(["name", "cmdline"]):
        name = process.info.get("name") or ""
        if name.casefold() == wanted:
            return list(process.info.get("cmdline") or [])
    return None


def _session_game_id(document: JsonDocument | None) -> int:
    if not isinstance(document, dict):
        return 0
    game_data = document.get("gameData")
    if not isinstance(game_data, dict):
        return 0
    value = game_data.get("gameId")
    return value if isinstance(value, int) and value > 0 else 0


def _server_ip(document: dict) -> str:
    client = document.get("gameClient")
    if not isinstance(client, dict):
        return ""
    value = client.get("serverIp")
    return value if isinstance(value, str) else ""


class PostMatchAPI(LobbyClientAPI):
    """Game session and match-history queries against the lobby client."""

    def __init__(
        self,
        league_directory: str | PathLike[str],
        transport: Transport | None = None,
        process_arguments: Callable[[], Sequence[str] | None] = find_ingame_process_arguments,
    ) -> None:
        super().__init__(league_directory, transport)
        self._process_arguments = process_arguments

    def current_spectate_info(self) -> GameSpectateInfo:
        """Work out the current game from the client session or the game process."""
        document = self.get(_SESSION_URI, log_error=False)
        arguments = self._process_arguments()
        game_id = _session_game_id(document)
        if game_id <= 0:
            if arguments is None:
                game_id, spectate_type = 0, SpectateType.INVALID
            else:
                game_id, spectate_type = game_id_from_start_parameters(arguments)
        else:
            self_playing = len(_server_ip(document)) > 5
            spectate_type = (
                SpectateType.MYSELF_INGAME if self_playing else SpectateType.LIVE_SPECTATE
            )
        locale = (
            locale_from_start_parameters(arguments) if arguments is not None else Locale.WESTERN
        )
        return GameSpectateInfo(game_id, spectate_type, locale)

    def post_match_documents(
        self, game_id: int
    ) -> tuple[JsonDocument, JsonDocument] | None:
        """The game document and its event timeline, or None if either is missing."""
        log.debug("Requesting post-match data for game %d", game_id)
        signed_id = _as_signed64(game_id)
        game = self.get(_GAME_URI.format(signed_id))
        if game is None:
            log.debug("Post-match document for game %d is empty", game_id)
            return None
        events = self.get(_TIMELINE_URI.format(signed_id))
        if events is None:
            log.debug("Post-match timeline for game %d is empty", game_id)
            return None
        return game, events

    def match_history_for_puuid(self, puuid: str) -> JsonDocument | None:
        """The recent match history of a player."""
        log.debug("Requesting match history for %s", puuid)
        return self.get(_HISTORY_URI.format(puuid))