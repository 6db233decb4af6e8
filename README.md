# leaguelink

Helpers for talking to a League of Legends client running on the local
machine, plus a few small threading utilities used by overlay tools.

## Installation

```
pip install leaguelink
```

## Modules

- `leaguelink.lockfile`: `read_lockfile(directory)` reads the client's
  `lockfile` and `parse_lockfile(content)` parses its text. Both return a
  `LockFile` with `is_valid`, `port` and `secret`. A missing or unreadable
  file gives an invalid `LockFile` (port `0`, empty secret).
- `leaguelink.base64auth`: `encode_base64(text)` and
  `basic_auth_header(user, secret)`, which builds the
  `Authorization: Basic ...` header line the lobby client expects. A
  trailing partial group is filled with `A` characters rather than `=`.
- `leaguelink.api`: `RiotAPI` sends GET and POST requests to
  `https://127.0.0.1:<port>/...` through a transport (by default
  `HttpTransport`, which accepts the client's self-signed certificate and
  times out after 0.2 seconds). `get()` and `post()` return the decoded JSON
  document, or `None` for an empty body, unparsable JSON, a failed request or
  an error object carrying `errorCode` and `httpStatus`. `IngameAPI` uses
  port 2999; `LobbyClientAPI` takes the port and credentials from the
  lockfile in the given directory. `to_json_string(document)` pretty-prints
  a document.
- `leaguelink.summoner`: `SummonerAPI` looks up the current summoner and
  summoners by id, PUUID (cached) or name, the solo-queue `Ranking` of a
  PUUID, and champion masteries keyed by champion id
  (`masteries_for_puuid`) or by points, highest first
  (`masteries_sorted_by_points`). Results are `Summoner` and
  `ChampionMastery` objects. The parsing helpers `summoner_from_json`,
  `ranking_from_json`, `masteries_by_champion`, `masteries_by_points` and
  `escape_summoner_name` are usable on their own.
- `leaguelink.postmatch`: `PostMatchAPI.current_spectate_info()` works out
  the current game as a `GameSpectateInfo` (game id, `SpectateType`,
  `Locale`) from the client session or, failing that, from the running
  game's command line (found with `find_ingame_process_arguments()`).
  `post_match_documents(game_id)` returns the game document and its event
  timeline; `match_history_for_puuid(puuid)` returns the recent match
  history. `game_id_from_start_parameters` and
  `locale_from_start_parameters` parse a command line directly.
- `leaguelink.ranking`: `RankedTier`, `Ranking` (with
  `to_display_string()`, e.g. `Gold2 (45LP)`), `tier_from_string`,
  `division_from_string` and `tier_name`.
- `leaguelink.timed_task`: `TimeCycledTask` calls a function at most once
  per cycle of milliseconds until it returns `TaskStatus.FINISHED`.
- `leaguelink.thread_handler`: `ThreadHandler` repeats background tasks on a
  worker pool until they report `ThreadTaskStatus.RUNNING_FINISHED` or the
  handler stops; `get_instance()` and `shutdown_instance()` manage a shared
  handler. `DataListener` hands data to every registered callback.
- `leaguelink.blocks`: `Blocks` splits an index range into nearly equal
  consecutive blocks.
- `leaguelink.multi_future`: `MultiFuture`, a list of futures that can be
  waited on and collected together.
- `leaguelink.textutil`: small string helpers (`to_lower`,
  `remove_characters`, `to_ascii`, UTF-8 encode/decode) and
  `is_future_ready`.

## Example

```python
from leaguelink.lockfile import read_lockfile
from leaguelink.summoner import SummonerAPI

directory = r"C:\Riot Games\League of Legends"
if read_lockfile(directory).is_valid:
    api = SummonerAPI(directory)
    me = api.current_summoner()
    if me is not None:
        print(me.account_name, api.ranking_for_puuid(me.puuid).to_display_string())
```

Splitting work into blocks and collecting the results:

```python
from concurrent.futures import ThreadPoolExecutor

from leaguelink.blocks import Blocks
from leaguelink.multi_future import MultiFuture

with ThreadPoolExecutor(3) as executor:
    futures = MultiFuture(
        executor.submit(sum, range(start, end)) for start, end in Blocks(0, 10, 3)
    )
    print(futures.get())  # [6, 15, 24]
```

## What it does not do

- There is no command-line program; the package is a library only.
- Post-match and match-history data come back as plain JSON documents
  (dicts and lists); there are no classes modelling matches, dragons or
  epic monsters.
- There is no general-purpose thread pool of its own; `Blocks` and
  `MultiFuture` are meant to be used with `concurrent.futures`.

## Running the tests

```
pip install "leaguelink[test]"
pytest
```