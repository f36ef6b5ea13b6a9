"""MCP Llms-txt server for docs."""

import os
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.shared.exceptions import McpError

from mcpdoc.allowlist import AllowList
from mcpdoc.catalog import DocSource, SourceCatalog
from mcpdoc.config import DEFAULT_TIMEOUT, ServerSettings
from mcpdoc.fetcher import ContentFetcher
from mcpdoc.log import get_logger
from mcpdoc.service import DocRetrievalService, MissingParameterError, ToolResult
from mcpdoc.urls import extract_domain, is_http_or_https, normalize_path

__all__ = ["DocSource", "create_server"]

logger = get_logger("main")

CallToolHandler = Callable[[types.CallToolRequest], Awaitable[types.ServerResult]]


def _get_fetch_description(has_local_sources: bool) -> str:
    """Get fetch docs tool description."""
    description = [
        "Fetch and parse documentation from a given URL or local file.",
        "",
        "Use this tool after list_doc_sources to:",
        "1. First fetch the llms.txt file from a documentation source",
        "2. Analyze the URLs listed in the llms.txt file",
        "3. Then fetch specific documentation pages relevant to the user's question",
        "",
    ]

    if has_local_sources:
        description.extend(
            [
                "Args:",
                "    url: The URL or file path to fetch documentation from. Can be:",
                "        - URL from an allowed domain",
                "        - A local file path (absolute or relative)",
                "        - A file:// URL (e.g., file:///path/to/llms.txt)",
            ]
        )
    else:
        description.extend(
            [
                "Args:",
                "    url: The URL to fetch documentation from.",
            ]
        )

    description.extend(
        [
            "",
            "Returns:",
            "    The fetched documentation content converted to markdown, or an error message",  # noqa: E501
            "    if the request fails or the URL is not from an allowed domain.",
        ]
    )

    return "\n".join(description)


def _get_server_instructions(doc_sources: list[DocSource]) -> str:
    """Generate server instructions with available documentation source names."""
    source_names = []
    for entry in doc_sources:
        if entry.get("name"):
            source_names.append(entry["name"])
        elif is_http_or_https(entry["llms_txt"]):
            domain = extract_domain(entry["llms_txt"])
            source_names.append(domain.split("://", 1)[1].rstrip("/"))
        else:
            source_names.append(os.path.basename(entry["llms_txt"]))

    instructions = [
        "Use the list_doc_sources tool to see available documentation sources.",
        "This tool will return a URL for each documentation source.",
    ]
    if len(source_names) == 1:
        instructions.append(
            f"Documentation URLs are available from this tool for {source_names[0]}."
        )
    elif source_names:
        names = ", ".join(source_names[:-1]) + f", and {source_names[-1]}"
        instructions.append(
            f"Documentation URLs are available from this tool for {names}."
        )

    instructions.extend(
        [
            "",
            "Once you have a source documentation URL, use the fetch_docs tool "
            "to get the documentation contents. ",
            "If the documentation contents contains a URL for additional documentation "
            "that is relevant to your task, you can use the fetch_docs tool to "
            "fetch documentation from that URL next.",
        ]
    )
    return "\n".join(instructions)


def _protocol_error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


def make_call_tool_handler(service: DocRetrievalService) -> CallToolHandler:
    """Build the ``tools/call`` handler.

    Bad arguments, unknown tools and dispatch failures are raised as JSON-RPC
    errors. Everything ``fetch_docs`` reports (denials, fetch errors) is a
    normal result with ``isError`` set.
    """

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        arguments = req.params.arguments or {}
        try:
            if name == "list_doc_sources":
                result = ToolResult(service.list_sources())
            elif name == "fetch_docs":
                url = arguments.get("url")
                if url is not None and not isinstance(url, str):
                    raise _protocol_error(
                        types.INVALID_PARAMS, "Parameter url must be a string"
                    )
                result = await service.fetch_docs(url)
            else:
                raise _protocol_error(types.METHOD_NOT_FOUND, f"Unknown tool: {name}")
        except McpError:
            raise
        except MissingParameterError as e:
            raise _protocol_error(types.INVALID_PARAMS, str(e)) from e
        except Exception as e:
            logger.exception("Error executing tool %s", name)
            raise _protocol_error(
                types.INTERNAL_ERROR, f"Error executing tool: {e}"
            ) from e

        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=result.text)],
                isError=result.is_error,
            )
        )

    return handle_call_tool


def fetcher_lifespan(
    fetcher: ContentFetcher,
) -> Callable[[FastMCP], AbstractAsyncContextManager[None]]:
    """Build a FastMCP lifespan that closes the fetcher's HTTP client on shutdown."""

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await fetcher.aclose()

    return lifespan


def create_server(
    doc_sources: list[DocSource],
    *,
    follow_redirects: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
    settings: dict | None = None,
    allowed_domains: list[str] | None = None,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    """Create the server and generate documentation retrieval tools.

    Args:
        doc_sources: List of documentation sources to make available
        follow_redirects: Whether to follow HTTP redirects when fetching docs
        timeout: HTTP request timeout in seconds
        settings: Additional settings to pass to FastMCP
        allowed_domains: Additional domains to allow fetching from.
            Use ['*'] to allow all domains
            The domain hosting the llms.txt file is always appended to the list
            of allowed domains.
        http_transport: Optional httpx transport, used by tests.

    Returns:
        A FastMCP server instance configured with documentation tools
    """
    catalog = SourceCatalog(doc_sources)

    # Let's verify that all local sources exist
    for entry in catalog.local:
        abs_path = normalize_path(entry["llms_txt"])
        if not os.path.exists(abs_path):
            raise FileNotFoundError(f"Local file not found: {abs_path}")

    server_settings = ServerSettings(
        follow_redirects=follow_redirects,
        timeout=timeout,
        allowed_domains=tuple(allowed_domains) if allowed_domains else None,
    )
    allow_list = AllowList(catalog, server_settings.allowed_domains)
    fetcher = ContentFetcher(server_settings, transport=http_transport)
    service = DocRetrievalService(catalog, allow_list, fetcher)

    server = FastMCP(
        name="llms-txt",
        instructions=_get_server_instructions(list(catalog)),
        lifespan=fetcher_lifespan(fetcher),
        **(settings or {}),
    )

    @server.tool()
    def list_doc_sources() -> str:
        """List all available documentation sources.

        This is the first tool you should call in the documentation workflow.
        It provides URLs to llms.txt files or local file paths that the user has made available.

        Returns:
            A string containing a formatted list of documentation sources with their URLs or file paths
        """  # noqa: E501
        return service.list_sources()

    @server.tool(description=_get_fetch_description(bool(catalog.local)))
    async def fetch_docs(url: str) -> str:
        result = await service.fetch_docs(url)
        if result.is_error:
            raise ToolError(result.text)
        return result.text

    # The tools above are what FastMCP lists and what its own call_tool runs.
    # FastMCP turns every tool exception into an isError result, so tools/call
    # requests go through a handler that keeps parameter and dispatch errors
    # as JSON-RPC errors.
    server._mcp_server.request_handlers[types.CallToolRequest] = (
        make_call_tool_handler(service)
    )

    logger.info(
        "Serving %d doc source(s); allowed domains: %s",
        len(catalog),
        ", ".join(sorted(allow_list.domains)) or "(none)",
    )
    return server
