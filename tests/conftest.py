"""Shared fixtures for mcpdoc tests."""

import os

import pytest


@pytest.fixture
def docs_dir(tmp_path, monkeypatch):
    """Working directory holding docs/llms.txt and an unlisted sibling file."""
    monkeypatch.chdir(tmp_path)
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "llms.txt").write_text("# Local\n\n<h2>Section</h2>", encoding="utf-8")
    (docs / "secret.txt").write_text("do not read", encoding="utf-8")
    return os.path.join(os.getcwd(), "docs")
