import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import Mock

import pytest
import requests

from sitecrawl.exceptions import HttpFetchError
from sitecrawl.services.http_service import HttpService


def _client_returning(status_code, chunks, encoding="utf-8"):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.encoding = encoding
    mock_response.iter_content.return_value = iter(chunks)
    return Mock(return_value=mock_response), mock_response


def test_fetch_success():
    mock_http_client, _ = _client_returning(200, [b'hello ', b'world'])
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com')
    assert response.status_code == 200
    assert response.text == 'hello world'


def test_fetch_streams_with_user_agent_and_timeout_once():
    mock_http_client, mock_response = _client_returning(200, [b''])
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client, timeout=3)
    http.fetch('http://example.com')
    mock_http_client.assert_called_once_with(
        'http://example.com', headers={'User-Agent': 'TestAgent'}, timeout=3, stream=True
    )
    mock_response.close.assert_called_once()


def test_fetch_returns_non_success_status_without_raising():
    mock_http_client, _ = _client_returning(404, [b'<html>missing</html>'])
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    response = http.fetch('http://example.com/missing')
    assert response.status_code == 404
    assert response.text == '<html>missing</html>'
    assert not response.is_success


def test_fetch_decodes_with_response_encoding():
    mock_http_client, _ = _client_returning(200, ['café'.encode('latin-1')], encoding='ISO-8859-1')
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    assert http.fetch('http://example.com').text == 'café'


def test_fetch_defaults_to_utf8_for_missing_or_unknown_encoding():
    for encoding in (None, 'no-such-codec'):
        mock_http_client, _ = _client_returning(200, ['naïve'.encode('utf-8')], encoding=encoding)
        http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
        assert http.fetch('http://example.com').text == 'naïve'


@pytest.mark.parametrize("error", [
    requests.exceptions.Timeout("timed out"),
    requests.exceptions.ConnectionError("connection refused"),
    requests.exceptions.SSLError("bad certificate"),
])
def test_fetch_wraps_transport_errors(error):
    mock_http_client = Mock()
    mock_http_client.side_effect = error
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError) as exc:
        http.fetch('http://example.com')
    assert "http://example.com" in str(exc.value)
    assert exc.value.original is error
    assert mock_http_client.call_count == 1


def test_fetch_wraps_errors_raised_while_reading_body():
    mock_http_client, mock_response = _client_returning(200, [])
    mock_response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("connection reset")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError):
        http.fetch('http://example.com')
    mock_response.close.assert_called_once()


def test_fetch_returns_full_body():
    body = b'x' * 50_000
    chunks = [body[i:i + 8192] for i in range(0, len(body), 8192)]
    mock_http_client, _ = _client_returning(200, chunks)
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    assert http.fetch('http://example.com').text == body.decode()


def test_fetch_bubbles_unexpected_exceptions():
    """Verify that non-requests exceptions while reading are NOT swallowed."""
    mock_http_client, mock_response = _client_returning(200, [])
    mock_response.iter_content.side_effect = RuntimeError("Real bug in iter_content()")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(RuntimeError, match="Real bug"):
        http.fetch('http://example.com')


class _TricklingHandler(BaseHTTPRequestHandler):
    """Sends headers at once, then the 8-byte body one byte every half second."""

    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.send_header("Content-Length", "8")
        self.end_headers()
        try:
            for _ in range(8):
                self.wfile.write(b"x")
                self.wfile.flush()
                time.sleep(0.5)
        except OSError:
            pass

    def log_message(self, format, *args):
        pass


class _FastHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        body = b"<title>ok</title>"
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_server():
    servers = []

    def start(handler):
        server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
        server.daemon_threads = True
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_address[1]}/"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


def test_fetch_enforces_overall_deadline_on_trickling_body(local_server):
    url = local_server(_TricklingHandler)
    http = HttpService(user_agent='TestAgent', http_client=requests.get, timeout=1)

    started = time.monotonic()
    with pytest.raises(HttpFetchError) as exc:
        http.fetch(url)
    elapsed = time.monotonic() - started

    assert isinstance(exc.value.original, requests.exceptions.Timeout)
    assert elapsed < 2.5


def test_fetch_reads_real_response(local_server):
    url = local_server(_FastHandler)
    http = HttpService(user_agent='TestAgent', http_client=requests.get, timeout=5)

    response = http.fetch(url)
    assert response.status_code == 200
    assert response.text == "<title>ok</title>"
