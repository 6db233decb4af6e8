"""HTTP access to the game client's local JSON endpoints."""

from __future__ import annotations

import json
import logging
import ssl
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import Any, Protocol

from .base64auth import basic_auth_header
from .lockfile import LockFile, read_lockfile

log = logging.getLogger(__name__)

JsonDocument = Any


class TransportError(OSError):
    """A request could not be carried out."""


class Transport(Protocol):
    def request(
        self, method: str, url: str, headers: list[str], body: str | None
    ) -> str: ...


def to_json_string(document: JsonDocument) -> str:
    """Render a JSON document with four-space indentation."""
    return json.dumps(document, indent=4, ensure_ascii=False)


class HttpTransport:
    """Sends requests over HTTP(S); the client's self-signed certificate is accepted."""

    def __init__(self, timeout: float = 0.2) -> None:
        self.timeout = timeout
        self._context = ssl.create_default_context()
        self._context.check_hostname = False
        self._context.verify_mode = ssl.CERT_NONE

    def request(
        self,
        method: str,
        url: str,
        headers: Iterable[str] = (),
        body: str | None = None,
    ) -> str:
        """Send one request and return the response body, also for error statuses.

        Headers are given as ``"Name: value"`` lines. Raises TransportError
        when no response arrives.
        """
        header_map: dict[str, str] = {}
        for line in headers:
            name, sep, value = line.partition(":")
            if sep:
                header_map[name.strip()] = value.strip()
        data = body.encode("utf-8") if body is not None else None
        if data is not None:
            header_map.setdefault("Content-Type", "application/json")
        request = urllib.request.Request(
            url, data=data, headers=header_map, method=method
        )
        try:
            with urllib.request.urlopen(
                request, timeout=self.timeout, context=self._context
            ) as response:
                payload = response.read()
        except urllib.error.HTTPError as error:
            payload = error.read()
        except (urllib.error.URLError, OSError) as error:
            raise TransportError(f"{method} {url} failed: {error}") from error
        return payload.decode("utf-8", errors="replace")


class RiotAPI:
    """Base for the client endpoints listening on a local port."""

    def __init__(self, port: int, transport: Transport | None = None) -> None:
        self.template_url = f"https://127.0.0.1:{port}/"
        self.transport: Transport = transport if transport is not None else HttpTransport()
        self.headers: list[str] = []
        self.dump_path = Path("api_response.json")
        self.last_error = ""
        self._dump_next = False

    def url_for(self, uri: str) -> str:
        return self.template_url + uri

    def get(self, uri: str, log_error: bool = True) -> JsonDocument | None:
        """GET a JSON document; None when there is no usable document."""
        return self._exchange("GET", uri, None, log_error)

    def post(self, uri: str, payload: Any) -> JsonDocument | None:
        """POST a JSON payload (a string is sent as is) and return the reply document."""
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return self._exchange("POST", uri, body, True)

    def add_headers(self, headers: Iterable[str]) -> None:
        self.headers.extend(headers)

    def escape_url(self, text: str) -> str:
        """Percent-encode everything except unreserved URL characters."""
        return urllib.parse.quote(text, safe="")

    def dump_next_response(self) -> None:
        """Write the body of the next non-empty response to ``dump_path``."""
        self._dump_next = True

    def _exchange(
        self, method: str, uri: str, body: str | None, log_error: bool
    ) -> JsonDocument | None:
        url = self.url_for(uri)
        try:
            text = self.transport.request(method, url, list(self.headers), body)
        except TransportError as error:
            self.last_error = str(error)
            if log_error:
                log.warning("Request failed: %s", error)
            return None
        self.last_error = ""
        if not text:
            return None
        if self._dump_next:
            self._dump_next = False
            self.dump_path.write_text(text, encoding="utf-8")
        try:
            document = json.loads(text)
        except ValueError:
            return None
        if isinstance(document, dict) and "errorCode" in document and "httpStatus" in document:
            return None
        return document


class IngameAPI(RiotAPI):
    """The live game's data endpoint."""

    DEFAULT_PORT = 2999
    CLIENT_EXE_NAME = "League Of Legends.exe"

    def __init__(self, transport: Transport | None = None) -> None:
        super().__init__(self.DEFAULT_PORT, transport)


class LobbyClientAPI(RiotAPI):
    """The lobby client's endpoint, authenticated from its lockfile."""

    CLIENT_EXE_NAME = "LeagueClientUX.exe"

    def __init__(
        self, league_directory: str | PathLike[str], transport: Transport | None = None
    ) -> None:
        lockfile: LockFile = read_lockfile(league_directory)
        super().__init__(lockfile.port, transport)
        self.lockfile = lockfile
        self.league_directory = league_directory
        self.add_headers(
            [basic_auth_header("riot", lockfile.secret), "Accept: application/json"]
        )

    @property
    def is_available(self) -> bool:
        return self.lockfile.is_valid