"""fetcher.py — Retrieve page markup over HTTP."""

import requests

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)


class FetchError(Exception):
    """A page could not be retrieved: non-success status or transport failure."""

    def __init__(self, url: str, status_code: int | None = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            message = f"Failed to fetch: {reason}"
        else:
            message = f"Failed to fetch: {status_code} {reason}".rstrip()
        super().__init__(message)


class PageFetcher:
    """
    One GET per fetch() call. No retries, and no timeout unless one is given:
    a hung request hangs the crawl.
    """

    def __init__(self, session=None, timeout: float | None = None, headers: dict | None = None):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.headers = {"User-Agent": USER_AGENT}
        if headers:
            self.headers.update(headers)

    def fetch(self, url: str) -> str:
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(url, reason=str(e)) from e

        if not response.ok:
            raise FetchError(url, status_code=response.status_code, reason=response.reason or "")

        content_type = response.headers.get("Content-Type", "")
        if "charset" not in content_type.lower():
            response.encoding = response.apparent_encoding
        return response.text
