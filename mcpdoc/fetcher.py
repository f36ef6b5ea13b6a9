"""Retrieve raw documentation content from the network or the filesystem."""

import asyncio
import re
from dataclasses import dataclass
from urllib.parse import urljoin

import httpx

from mcpdoc.config import ServerSettings
from mcpdoc.log import get_logger
from mcpdoc.urls import is_http_or_https, normalize_path

logger = get_logger("fetcher")

# <meta http-equiv="refresh" content="0; url=https://example.com/docs">
META_REFRESH_RE = re.compile(
    r"""<meta\s+http-equiv=["']refresh["']\s+content=["'][^;"']*;\s*url=([^"'>]+)["']""",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class FetchResult:
    """Raw content of one retrieval."""

    text: str
    final_url: str
    status_code: int


class FetchError(Exception):
    """Base class for retrieval failures."""


class FetchTimeoutError(FetchError):
    pass


class HttpStatusError(FetchError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class RequestFailedError(FetchError):
    """Transport-level failure: DNS, refused connection, bad protocol."""


class TooManyRedirectsError(FetchError):
    pass


class LocalFileNotFoundError(FetchError):
    pass


class LocalReadError(FetchError):
    """Permission, directory or decoding error while reading a local file."""


def find_meta_refresh(html: str) -> str | None:
    """Return the target of the first meta-refresh tag in ``html``, if any."""
    match = META_REFRESH_RE.search(html)
    if match is None:
        return None
    return match.group(1).strip()


class ContentFetcher:
    """Fetch documents with an end-to-end timeout and bounded redirects.

    Every call is independent: there is no retry and no cache.
    """

    def __init__(
        self,
        settings: ServerSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._client = httpx.AsyncClient(
            follow_redirects=settings.follow_redirects,
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, location: str) -> FetchResult:
        """Fetch a URL or read a local file.

        Raises:
            FetchError: If the content could not be retrieved.
        """
        if not is_http_or_https(location):
            return self.read_local(location)

        try:
            return await asyncio.wait_for(
                self._fetch_remote(location), timeout=self.settings.timeout
            )
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(
                f"Request timeout after {self.settings.timeout}s: {location}"
            ) from e

    async def _fetch_remote(self, url: str) -> FetchResult:
        hops = 0
        while True:
            response = await self._get(url)
            result = FetchResult(response.text, str(response.url), response.status_code)
            if not self.settings.follow_redirects:
                return result

            target = find_meta_refresh(result.text)
            if target is None:
                return result

            hops += 1
            if hops > self.settings.max_redirects:
                raise TooManyRedirectsError(
                    f"Exceeded {self.settings.max_redirects} meta-refresh redirects "
                    f"starting from {url}"
                )
            url = urljoin(result.final_url, target)
            logger.debug("Following meta-refresh from %s to %s", result.final_url, url)

    async def _get(self, url: str) -> httpx.Response:
        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(f"Request timeout: {url}") from e
        except httpx.RequestError as e:
            raise RequestFailedError(f"Request to {url} failed: {e!r}") from e

        if not response.is_success:
            raise HttpStatusError(
                response.status_code,
                f"HTTP {response.status_code} {response.reason_phrase} for url {url}",
            )
        return response

    def read_local(self, location: str) -> FetchResult:
        """Read a local file as UTF-8 text."""
        path = normalize_path(location)
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError as e:
            raise LocalFileNotFoundError(f"File not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise LocalReadError(str(e)) from e
        return FetchResult(text, f"file://{path}", 200)
