"""Shared pytest fixtures for atlassian-wiki-mcp tests."""

import io
import tempfile

import pytest

from wiki.events import Flavor
from wiki.markdown_events import MarkdownEventSource
from wiki.renderer import render


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def event_source():
    return MarkdownEventSource()


@pytest.fixture
def render_markdown(event_source):
    """Render Markdown through the real parser and return the markup."""

    def _render(markdown: str, heading_shift: int = 0, flavor: Flavor = Flavor.JIRA) -> str:
        sink = io.StringIO()
        render(event_source.events(markdown), sink, heading_shift=heading_shift, flavor=flavor)
        return sink.getvalue()

    return _render


@pytest.fixture
def render_events():
    """Render a hand-built event list and return the markup."""

    def _render(events, heading_shift: int = 0, flavor: Flavor = Flavor.JIRA) -> str:
        sink = io.StringIO()
        render(events, sink, heading_shift=heading_shift, flavor=flavor)
        return sink.getvalue()

    return _render


@pytest.fixture
def env_override(monkeypatch):
    """Helper to override environment variables."""

    def _override(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return _override


CONFIG_ENV_VARS = (
    "ATLASSIAN_WIKI_FLAVOR",
    "ATLASSIAN_WIKI_HEADING_SHIFT",
    "ATLASSIAN_WIKI_TOC",
    "ATLASSIAN_WIKI_BASE_DIR",
    "ATLASSIAN_WIKI_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_wiki_config(monkeypatch):
    """Start every test from default settings and a fresh config singleton."""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("core.config._wiki_config", None)
