"""Helpers for building services against a fake documentation site."""

import httpx

from mcpdoc.allowlist import AllowList
from mcpdoc.catalog import SourceCatalog
from mcpdoc.config import ServerSettings
from mcpdoc.fetcher import ContentFetcher
from mcpdoc.service import DocRetrievalService

REDIRECT_PAGE = (
    "<html><head>"
    '<meta http-equiv="refresh" content="0; url=/target">'
    "</head><body><p>Redirecting</p></body></html>"
)


def docs_handler(request: httpx.Request) -> httpx.Response:
    """Serve a tiny documentation site."""
    path = request.url.path
    if path == "/llms.txt":
        return httpx.Response(200, text="# Foo\n\n- [Guide](https://foo.com/guide)")
    if path == "/guide":
        return httpx.Response(200, text="<h1>Guide</h1><p>Read <b>this</b>.</p>")
    if path == "/start":
        return httpx.Response(200, text=REDIRECT_PAGE)
    if path == "/target":
        return httpx.Response(200, text="<h1>Target</h1><p>Final page</p>")
    if path == "/loop":
        return httpx.Response(
            200, text='<meta http-equiv="refresh" content="0; url=/loop">'
        )
    if path == "/moved":
        return httpx.Response(302, headers={"Location": "https://foo.com/guide"})
    return httpx.Response(404, text="not found")


def make_settings(**kwargs) -> ServerSettings:
    kwargs.setdefault("timeout", 5.0)
    return ServerSettings(**kwargs)


def make_fetcher(handler=docs_handler, **kwargs) -> ContentFetcher:
    return ContentFetcher(make_settings(**kwargs), transport=httpx.MockTransport(handler))


def make_service(doc_sources, *, handler=docs_handler, **kwargs) -> DocRetrievalService:
    settings = make_settings(**kwargs)
    catalog = SourceCatalog(doc_sources)
    fetcher = ContentFetcher(settings, transport=httpx.MockTransport(handler))
    return DocRetrievalService(
        catalog, AllowList(catalog, settings.allowed_domains), fetcher
    )
