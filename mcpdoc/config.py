"""Server settings and loading of documentation sources from config files."""

import json
from dataclasses import dataclass

import yaml

from mcpdoc.catalog import ConfigError, DocSource

DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_REDIRECTS = 10


@dataclass(frozen=True)
class ServerSettings:
    """Fetch behaviour shared by every tool call.

    Attributes:
        follow_redirects: Follow HTTP redirects and HTML meta-refresh tags.
        timeout: Seconds allowed for a whole fetch, redirect hops included.
        allowed_domains: Extra domains to allow, ``["*"]`` allows all of them.
        max_redirects: Maximum number of meta-refresh hops.
    """

    follow_redirects: bool = False
    timeout: float = DEFAULT_TIMEOUT
    allowed_domains: tuple[str, ...] | None = None
    max_redirects: int = DEFAULT_MAX_REDIRECTS


def load_config_file(file_path: str, file_format: str) -> list[DocSource]:
    """Load doc sources from a YAML or JSON file.

    The file must contain a list of mappings, each with a ``llms_txt`` key.

    Args:
        file_path: Path to the config file
        file_format: Format of the config file ("yaml" or "json")

    Returns:
        List of doc source configurations

    Raises:
        ConfigError: If the file is missing, unparsable, or malformed.
    """
    file_format = file_format.lower()
    if file_format not in ("yaml", "json"):
        raise ConfigError(f"Unsupported file format: {file_format}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            if file_format == "yaml":
                config = yaml.safe_load(f)
            else:
                config = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {file_path}") from e
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error loading config file: {e}") from e

    if not isinstance(config, list):
        raise ConfigError("Config file must contain a list of doc sources")

    doc_sources: list[DocSource] = []
    for entry in config:
        if not isinstance(entry, dict) or not entry.get("llms_txt"):
            raise ConfigError("Each doc source must have a llms_txt field")
        source: DocSource = {"llms_txt": str(entry["llms_txt"])}
        if entry.get("name"):
            source["name"] = str(entry["name"])
        if entry.get("description"):
            source["description"] = str(entry["description"])
        doc_sources.append(source)
    return doc_sources


def create_doc_sources_from_urls(urls: list[str]) -> list[DocSource]:
    """Create doc sources from a list of URLs or file paths with optional names.

    Args:
        urls: Entries of the form 'url_or_path' or 'name:url_or_path'

    Returns:
        List of DocSource objects
    """
    doc_sources: list[DocSource] = []
    for entry in urls:
        entry = entry.strip()
        if not entry:
            continue
        if ":" in entry and not entry.startswith(("http:", "https:", "file:")):
            name, _, url = entry.partition(":")
            doc_sources.append({"name": name, "llms_txt": url})
        else:
            doc_sources.append({"llms_txt": entry})
    return doc_sources
