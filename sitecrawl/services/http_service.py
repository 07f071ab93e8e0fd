import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import Callable

import requests

from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import HttpFetchError

CHUNK_SIZE = 8192


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection.
    This enables easy testing without patching and allows swapping HTTP libraries.
    Exactly one request per call; no retries. `timeout` bounds the whole
    fetch (connect, headers and body), not just the gap between reads.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """Fetch URL and return response with status code and full body text.

        Non-2xx responses are returned as-is; only transport failures (including
        running past `timeout`) raise `HttpFetchError`.
        """
        deadline = time.monotonic() + self.timeout
        cancelled = threading.Event()
        # the download runs on its own thread so a server trickling bytes cannot hold the caller
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sitecrawl-fetch")
        try:
            future = pool.submit(self._download, url, deadline, cancelled)
            try:
                return future.result(timeout=self.timeout)
            except FuturesTimeoutError:
                cancelled.set()
                raise HttpFetchError(
                    url, requests.exceptions.Timeout(f"no complete response within {self.timeout}s")
                ) from None
            except requests.exceptions.RequestException as e:
                raise HttpFetchError(url, e) from e
        finally:
            pool.shutdown(wait=False)

    def _download(self, url: str, deadline: float, cancelled: threading.Event) -> HttpResponse:
        headers = {"User-Agent": self.user_agent}
        resp = self.http_client(url, headers=headers, timeout=self.timeout, stream=True)
        try:
            chunks = []
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if cancelled.is_set() or time.monotonic() > deadline:
                    raise requests.exceptions.Timeout(f"body not received within {self.timeout}s")
                chunks.append(chunk)
            return HttpResponse(resp.status_code, _decode(b"".join(chunks), resp.encoding))
        finally:
            resp.close()


def _decode(raw: bytes, encoding) -> str:
    try:
        return raw.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")
