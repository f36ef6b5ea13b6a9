"""Allow-list of remote domains and local files that may be fetched."""

from collections.abc import Iterable

from mcpdoc.catalog import SourceCatalog
from mcpdoc.urls import extract_domain, normalize_path

WILDCARD = "*"


class AllowList:
    """Domains and local paths that ``fetch_docs`` may read from.

    Every remote source allows its own domain. Local sources allow exactly
    their own file and nothing else, not even files linked from it.
    """

    def __init__(
        self,
        catalog: SourceCatalog,
        allowed_domains: Iterable[str] | None = None,
    ) -> None:
        domains = {extract_domain(entry["llms_txt"]) for entry in catalog.remote}
        if allowed_domains:
            domains.update(allowed_domains)
        self.domains: frozenset[str] = frozenset(domains)
        self.local_files: frozenset[str] = frozenset(
            normalize_path(entry["llms_txt"]) for entry in catalog.local
        )

    @property
    def allows_all_domains(self) -> bool:
        return WILDCARD in self.domains

    def is_domain_allowed(self, url: str) -> bool:
        """Prefix-match ``url`` against the allowed ``scheme://host/`` entries."""
        if self.allows_all_domains:
            return True
        return any(url.startswith(domain) for domain in self.domains)

    def is_local_path_allowed(self, path: str) -> bool:
        """Exact match of an already normalized path."""
        return path in self.local_files
