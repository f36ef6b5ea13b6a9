"""The list_doc_sources and fetch_docs operations."""

from dataclasses import dataclass

from mcpdoc.allowlist import AllowList
from mcpdoc.catalog import SourceCatalog
from mcpdoc.convert import to_markdown
from mcpdoc.fetcher import ContentFetcher, FetchError
from mcpdoc.log import get_logger
from mcpdoc.urls import is_http_or_https, normalize_path

logger = get_logger("service")


class MissingParameterError(ValueError):
    """A required tool argument was not supplied."""

    def __init__(self, parameter: str) -> None:
        super().__init__(f"Missing required parameter: {parameter}")
        self.parameter = parameter


@dataclass(frozen=True)
class ToolResult:
    """Text returned to the agent; ``is_error`` flags a failed fetch."""

    text: str
    is_error: bool = False


def _error(text: str) -> ToolResult:
    return ToolResult(text=text, is_error=True)


class DocRetrievalService:
    """Check requests against the allow-list, then fetch and convert them."""

    def __init__(
        self,
        catalog: SourceCatalog,
        allow_list: AllowList,
        fetcher: ContentFetcher,
    ) -> None:
        self.catalog = catalog
        self.allow_list = allow_list
        self.fetcher = fetcher

    def list_sources(self) -> str:
        return self.catalog.render()

    async def fetch_docs(self, url: str | None) -> ToolResult:
        """Fetch a URL or local file and convert it to markdown.

        Denials and fetch failures come back as error results. Only a missing
        ``url`` raises.

        Raises:
            MissingParameterError: If ``url`` is empty or None.
        """
        if not url:
            raise MissingParameterError("url")

        try:
            url = url.strip()
            if not is_http_or_https(url):
                return await self._fetch_local(url)
            return await self._fetch_remote(url)
        except Exception as e:
            logger.exception("Unexpected error fetching %s", url)
            return _error(f"Unexpected error: {e}")

    async def _fetch_local(self, path: str) -> ToolResult:
        abs_path = normalize_path(path)
        if not self.allow_list.is_local_path_allowed(abs_path):
            logger.warning("Denied local file %s", abs_path)
            allowed = ", ".join(sorted(self.allow_list.local_files))
            return _error(
                f"Error: Local file not allowed: {abs_path}. Allowed files: {allowed}"
            )

        try:
            result = await self.fetcher.fetch(abs_path)
        except FetchError as e:
            logger.warning("Failed to read %s: %s", abs_path, e)
            return _error(f"Error reading local file: {e}")
        return ToolResult(to_markdown(result.text))

    async def _fetch_remote(self, url: str) -> ToolResult:
        if not self.allow_list.is_domain_allowed(url):
            logger.warning("Denied URL %s", url)
            allowed = ", ".join(sorted(self.allow_list.domains))
            return _error(
                f"Error: URL not allowed: {url}. "
                f"Must start with one of the following domains: {allowed}"
            )

        try:
            result = await self.fetcher.fetch(url)
        except FetchError as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            return _error(f"Encountered an HTTP error: {e}")
        logger.info("Fetched %s (final url %s)", url, result.final_url)
        return ToolResult(to_markdown(result.text))
