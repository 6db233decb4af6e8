import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from leaguelink.api import (
    HttpTransport,
    IngameAPI,
    LobbyClientAPI,
    RiotAPI,
    TransportError,
    to_json_string,
)
from leaguelink.base64auth import basic_auth_header


class FakeTransport:
    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    def request(self, method, url, headers, body):
        self.calls.append((method, url, list(headers), body))
        if self.error is not None:
            raise self.error
        return self.responses.get(url, "")


class _Handler(BaseHTTPRequestHandler):
    def _reply(self, status, text):
        data = text.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def do_GET(self):
        if self.path == "/missing":
            self._reply(404, json.dumps({"errorCode": "RPC_ERROR", "httpStatus": 404}))
            return
        self._reply(200, json.dumps({"method": "GET", "accept": self.headers.get("Accept")}))

    def do_POST(self):
        length = int(self.headers["Content-Length"])
        body = self.rfile.read(length).decode("utf-8")
        self._reply(200, json.dumps({"method": "POST", "body": body}))

    def log_message(self, *args):
        pass


@pytest.fixture
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def _write_lockfile(directory, content):
    (directory / "lockfile").write_text(content, encoding="utf-8")


def test_template_url_uses_port():
    assert RiotAPI(2999, FakeTransport()).template_url == "https://127.0.0.1:2999/"


def test_ingame_api_uses_default_port():
    transport = FakeTransport()
    api = IngameAPI(transport)
    api.get("liveclientdata/allgamedata")
    assert transport.calls[0][1] == "https://127.0.0.1:2999/liveclientdata/allgamedata"


def test_get_parses_document():
    transport = FakeTransport({"https://127.0.0.1:1/a": '{"x": [1, 2]}'})
    api = RiotAPI(1, transport)
    assert api.get("a") == {"x": [1, 2]}
    assert transport.calls[0][0] == "GET"
    assert transport.calls[0][3] is None


def test_get_empty_body_gives_none():
    assert RiotAPI(1, FakeTransport()).get("a") is None


def test_get_invalid_json_gives_none():
    transport = FakeTransport({"https://127.0.0.1:1/a": "{not json"})
    assert RiotAPI(1, transport).get("a") is None


def test_error_object_gives_none():
    body = json.dumps({"errorCode": "RPC_ERROR", "httpStatus": 404, "message": "m"})
    transport = FakeTransport({"https://127.0.0.1:1/a": body})
    assert RiotAPI(1, transport).get("a") is None


def test_object_with_only_error_code_is_kept():
    transport = FakeTransport({"https://127.0.0.1:1/a": '{"errorCode": "E"}'})
    assert RiotAPI(1, transport).get("a") == {"errorCode": "E"}


def test_transport_error_recorded():
    api = RiotAPI(1, FakeTransport(error=TransportError("refused")))
    assert api.get("a", log_error=False) is None
    assert "refused" in api.last_error


def test_post_serialises_payload():
    transport = FakeTransport({"https://127.0.0.1:1/p": "[true]"})
    api = RiotAPI(1, transport)
    assert api.post("p", {"k": "v"}) == [True]
    method, _, _, body = transport.calls[0]
    assert method == "POST"
    assert json.loads(body) == {"k": "v"}


def test_post_passes_string_unchanged():
    transport = FakeTransport()
    RiotAPI(1, transport).post("p", '{"raw":1}')
    assert transport.calls[0][3] == '{"raw":1}'


def test_headers_sent_with_requests():
    transport = FakeTransport()
    api = RiotAPI(1, transport)
    api.add_headers(["A: b", "C: d"])
    api.get("x")
    assert transport.calls[0][2] == ["A: b", "C: d"]


def test_escape_url_round_trip():
    from urllib.parse import unquote

    api = RiotAPI(1, FakeTransport())
    original = "Name With Space#EUW/ü"
    escaped = api.escape_url(original)
    assert " " not in escaped and "#" not in escaped and "/" not in escaped
    assert unquote(escaped) == original
    assert api.escape_url("abc-._~") == "abc-._~"


def test_dump_next_response_writes_once(tmp_path):
    transport = FakeTransport({"https://127.0.0.1:1/a": '{"v": 1}'})
    api = RiotAPI(1, transport)
    api.dump_path = tmp_path / "dump.json"
    api.dump_next_response()
    api.get("a")
    assert api.dump_path.read_text(encoding="utf-8") == '{"v": 1}'
    api.dump_path.unlink()
    api.get("a")
    assert not api.dump_path.exists()


def test_to_json_string_round_trip_and_indent():
    document = {"a": 1, "b": ["x", {"c": None}]}
    text = to_json_string(document)
    assert json.loads(text) == document
    assert to_json_string({"a": 1}) == '{\n    "a": 1\n}'


def test_lobby_client_reads_lockfile(tmp_path):
    _write_lockfile(tmp_path, "LeagueClient:1234:54321:secret:https")
    transport = FakeTransport()
    api = LobbyClientAPI(tmp_path, transport)
    assert api.is_available
    assert api.template_url == "https://127.0.0.1:54321/"
    assert api.headers == [basic_auth_header("riot", "secret"), "Accept: application/json"]
    assert api.league_directory == tmp_path


def test_lobby_client_without_lockfile(tmp_path):
    api = LobbyClientAPI(tmp_path, FakeTransport())
    assert not api.is_available
    assert api.template_url == "https://127.0.0.1:0/"


def test_http_transport_get(server_url):
    transport = HttpTransport(timeout=2)
    text = transport.request("GET", server_url + "/x", ["Accept: application/json"], None)
    assert json.loads(text) == {"method": "GET", "accept": "application/json"}


def test_http_transport_post(server_url):
    transport = HttpTransport(timeout=2)
    text = transport.request("POST", server_url + "/x", [], '{"q": 1}')
    assert json.loads(text) == {"method": "POST", "body": '{"q": 1}'}


def test_http_transport_returns_error_body(server_url):
    transport = HttpTransport(timeout=2)
    text = transport.request("GET", server_url + "/missing", [], None)
    assert json.loads(text)["httpStatus"] == 404


def test_http_transport_connection_refused():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    with pytest.raises(TransportError):
        HttpTransport(timeout=2).request("GET", f"http://127.0.0.1:{port}/", [], None)