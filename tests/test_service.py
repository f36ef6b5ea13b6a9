"""Tests for the list_doc_sources and fetch_docs operations."""

import asyncio
import os

import httpx
import pytest

from mcpdoc.service import MissingParameterError
from tests.utils import make_service

REMOTE = [{"name": "Foo", "llms_txt": "https://foo.com/llms.txt"}]


def test_list_sources_preserves_order(docs_dir):
    service = make_service(
        [
            {"llms_txt": "https://foo.com/llms.txt"},
            {"name": "Local docs", "llms_txt": "./docs/llms.txt"},
            {"name": "Bar", "llms_txt": "https://bar.com/docs/llms.txt"},
            {"llms_txt": "file://docs/llms.txt"},
        ]
    )

    local_path = os.path.join(docs_dir, "llms.txt")
    assert service.list_sources() == (
        "https://foo.com/\nURL: https://foo.com/llms.txt\n\n"
        f"Local docs\nPath: {local_path}\n\n"
        "Bar\nURL: https://bar.com/docs/llms.txt\n\n"
        f"{local_path}\nPath: {local_path}\n\n"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", None])
async def test_missing_url_raises(url):
    service = make_service(REMOTE)

    with pytest.raises(MissingParameterError):
        await service.fetch_docs(url)


@pytest.mark.asyncio
async def test_fetch_allowed_url():
    service = make_service(REMOTE)

    result = await service.fetch_docs("  https://foo.com/guide\n")

    assert not result.is_error
    assert "# Guide" in result.text
    assert "**this**" in result.text


@pytest.mark.asyncio
async def test_fetch_denied_url():
    service = make_service(REMOTE, allowed_domains=("https://bar.com/",))

    result = await service.fetch_docs("https://evil.com/x")

    assert result.is_error
    assert "https://evil.com/x" in result.text
    assert "https://foo.com/" in result.text
    assert "https://bar.com/" in result.text


@pytest.mark.asyncio
async def test_wildcard_allows_any_domain():
    service = make_service(REMOTE, allowed_domains=("*",))

    result = await service.fetch_docs("https://other.org/guide")

    assert not result.is_error
    assert "# Guide" in result.text


@pytest.mark.asyncio
async def test_http_error_is_error_result():
    service = make_service(REMOTE)

    result = await service.fetch_docs("https://foo.com/missing")

    assert result.is_error
    assert "404" in result.text


@pytest.mark.asyncio
async def test_timeout_is_error_result():
    async def slow(request):
        await asyncio.sleep(5)
        return httpx.Response(200, text="too late")

    service = make_service(REMOTE, handler=slow, timeout=0.05)

    result = await asyncio.wait_for(service.fetch_docs("https://foo.com/llms.txt"), 2)

    assert result.is_error
    assert "timeout" in result.text.lower()


@pytest.mark.asyncio
async def test_meta_refresh_converts_target_page():
    service = make_service(REMOTE, follow_redirects=True)

    result = await service.fetch_docs("https://foo.com/start")

    assert "# Target" in result.text
    assert "Redirecting" not in result.text


@pytest.mark.asyncio
async def test_meta_refresh_page_converted_when_not_following():
    service = make_service(REMOTE, follow_redirects=False)

    result = await service.fetch_docs("https://foo.com/start")

    assert not result.is_error
    assert "Redirecting" in result.text


@pytest.mark.asyncio
async def test_local_relative_and_file_url_are_equivalent(docs_dir):
    service = make_service([{"llms_txt": "./docs/llms.txt"}])

    by_path = await service.fetch_docs("docs/llms.txt")
    by_url = await service.fetch_docs("file://" + os.path.join(docs_dir, "llms.txt"))

    assert not by_path.is_error
    assert by_path == by_url
    assert "## Section" in by_url.text


@pytest.mark.asyncio
async def test_local_sibling_is_denied(docs_dir):
    service = make_service([{"llms_txt": "./docs/llms.txt"}])

    result = await service.fetch_docs("./docs/secret.txt")

    assert result.is_error
    assert os.path.join(docs_dir, "secret.txt") in result.text
    assert os.path.join(docs_dir, "llms.txt") in result.text
    assert "do not read" not in result.text


@pytest.mark.asyncio
async def test_local_wildcard_does_not_open_filesystem(docs_dir):
    service = make_service([{"llms_txt": "./docs/llms.txt"}], allowed_domains=("*",))

    result = await service.fetch_docs("/etc/passwd")

    assert result.is_error
    assert "not allowed" in result.text


@pytest.mark.asyncio
async def test_local_read_error_is_error_result(docs_dir):
    service = make_service([{"llms_txt": "./docs/llms.txt"}])
    os.remove(os.path.join(docs_dir, "llms.txt"))

    result = await service.fetch_docs("docs/llms.txt")

    assert result.is_error
    assert "Error reading local file" in result.text


@pytest.mark.asyncio
async def test_unexpected_error_is_error_result():
    service = make_service(REMOTE)

    class BrokenFetcher:
        async def fetch(self, location):
            raise RuntimeError("kaboom")

    service.fetcher = BrokenFetcher()

    result = await service.fetch_docs("https://foo.com/llms.txt")

    assert result.is_error
    assert result.text == "Unexpected error: kaboom"
