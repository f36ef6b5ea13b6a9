"""The configured documentation sources."""

from collections.abc import Iterable, Iterator

from typing_extensions import NotRequired, TypedDict

from mcpdoc.urls import extract_domain, is_http_or_https, normalize_path


class ConfigError(Exception):
    """Raised when the documentation sources cannot be configured."""


class DocSource(TypedDict):
    """A source of documentation for a library or a package."""

    name: NotRequired[str]
    """Name of the documentation source (optional)."""

    llms_txt: str
    """URL to the llms.txt file or documentation source."""

    description: NotRequired[str]
    """Description of the documentation source (optional)."""


def display_name(entry: DocSource) -> str:
    """Configured name, else the domain of a URL or the absolute path of a file."""
    if entry.get("name"):
        return entry["name"]
    if is_http_or_https(entry["llms_txt"]):
        return extract_domain(entry["llms_txt"])
    return normalize_path(entry["llms_txt"])


class SourceCatalog:
    """Ordered, read-only list of documentation sources."""

    def __init__(self, doc_sources: Iterable[DocSource]) -> None:
        sources = tuple(doc_sources)
        if not sources:
            raise ConfigError("No documentation sources configured.")
        for entry in sources:
            if not isinstance(entry, dict) or not entry.get("llms_txt"):
                raise ConfigError("Each doc source must have a llms_txt field")
        self._sources = sources

    def __iter__(self) -> Iterator[DocSource]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    @property
    def remote(self) -> list[DocSource]:
        return [e for e in self._sources if is_http_or_https(e["llms_txt"])]

    @property
    def local(self) -> list[DocSource]:
        return [e for e in self._sources if not is_http_or_https(e["llms_txt"])]

    def render(self) -> str:
        """Render the sources as ``name`` / ``URL:`` or ``Path:`` blocks."""
        content = ""
        for entry in self._sources:
            url_or_path = entry["llms_txt"]
            if is_http_or_https(url_or_path):
                content += f"{display_name(entry)}\nURL: {url_or_path}\n\n"
            else:
                path = normalize_path(url_or_path)
                content += f"{display_name(entry)}\nPath: {path}\n\n"
        return content
