#!/usr/bin/env python3
"""Command-line interface for the MCP LLMS-TXT server."""

import argparse
import os
import sys

from mcpdoc._version import __version__
from mcpdoc.catalog import ConfigError, DocSource
from mcpdoc.config import (
    DEFAULT_TIMEOUT,
    create_doc_sources_from_urls,
    load_config_file,
)
from mcpdoc.log import get_logger, setup_logging
from mcpdoc.main import create_server
from mcpdoc.splash import SPLASH

logger = get_logger("cli")

EPILOG = """
Examples:
  # Directly specifying llms.txt URLs with optional names
  mcpdoc --urls LangGraph:https://langchain-ai.github.io/langgraph/llms.txt

  # Using a local file (absolute or relative path)
  mcpdoc --urls LocalDocs:/path/to/llms.txt --allowed-domains '*'

  # Using a YAML config file
  mcpdoc --yaml sample_config.yaml

  # Using a JSON config file
  mcpdoc --json sample_config.json

  # Combining multiple documentation sources
  mcpdoc --yaml sample_config.yaml --json sample_config.json --urls LangGraph:https://langchain-ai.github.io/langgraph/llms.txt

  # Using SSE transport with default host (127.0.0.1) and port (8000)
  mcpdoc --yaml sample_config.yaml --transport sse

  # Allow fetching from additional domains
  mcpdoc --yaml sample_config.yaml --allowed-domains https://example.com/ https://another-example.org/
"""  # noqa: E501


class CustomFormatter(
    argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter
):
    pass


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="MCP LLMS-TXT Documentation Server",
        formatter_class=CustomFormatter,
        epilog=EPILOG,
    )

    parser.add_argument(
        "--yaml", "-y", type=str, help="Path to YAML config file with doc sources"
    )
    parser.add_argument(
        "--json", "-j", type=str, help="Path to JSON config file with doc sources"
    )
    parser.add_argument(
        "--urls",
        "-u",
        type=str,
        nargs="+",
        help="List of llms.txt URLs or file paths with optional names "
        "(format: 'url_or_path' or 'name:url_or_path')",
    )
    parser.add_argument(
        "--follow-redirects",
        action="store_true",
        help="Whether to follow HTTP and meta-refresh redirects",
    )
    parser.add_argument(
        "--allowed-domains",
        type=str,
        nargs="*",
        help="Additional allowed domains to fetch documentation from. "
        "Use '*' to allow all domains.",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT, help="HTTP request timeout in seconds"
    )
    parser.add_argument(
        "--transport",
        type=str,
        default="stdio",
        choices=["stdio", "sse"],
        help="Transport protocol for MCP server",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.environ.get("MCPDOC_LOG_LEVEL", "INFO"),
        help="Log level (only used with SSE transport, otherwise WARNING)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind the server to (only used with SSE transport)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind the server to (only used with SSE transport)",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"mcpdoc {__version__}",
        help="Show version information and exit",
    )

    return parser.parse_args(argv)


def load_doc_sources(args: argparse.Namespace) -> list[DocSource]:
    """Merge doc sources from the YAML file, the JSON file and ``--urls``."""
    doc_sources: list[DocSource] = []
    if args.yaml:
        doc_sources.extend(load_config_file(args.yaml, "yaml"))
    if args.json:
        doc_sources.extend(load_config_file(args.json, "json"))
    if args.urls:
        doc_sources.extend(create_doc_sources_from_urls(args.urls))
    if not doc_sources:
        raise ConfigError(
            "No documentation sources configured. Use --yaml, --json, or --urls."
        )
    return doc_sources


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    if argv is None and len(sys.argv) == 1:
        # No arguments, show help
        parse_args(["--help"])
        return

    args = parse_args(argv)

    # The stdio transport owns stdout, keep stdio logging quiet
    setup_logging(args.log_level if args.transport == "sse" else "WARNING")

    try:
        doc_sources = load_doc_sources(args)
        settings = {
            "host": args.host,
            "port": args.port,
            "log_level": args.log_level.upper(),
        }
        server = create_server(
            doc_sources,
            follow_redirects=args.follow_redirects,
            timeout=args.timeout,
            settings=settings,
            allowed_domains=args.allowed_domains,
        )
    except (ConfigError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.transport == "sse":
        print(SPLASH)
        print(
            f"Launching MCPDOC server with {len(doc_sources)} doc sources "
            f"on http://{args.host}:{args.port}/sse"
        )
    logger.info("Starting server with %s transport", args.transport)
    server.run(transport=args.transport)


if __name__ == "__main__":
    main()
