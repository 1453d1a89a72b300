"""Shared fixtures: an in-memory tab provider standing in for the browser."""

import pytest

from browser_controller.tab_selector import TabCandidate


class FakeTabs:
    """TabProvider that records effects instead of touching a browser."""

    def __init__(self, tabs):
        self._tabs = list(tabs)
        self.activated = []
        self.navigated = []
        self.list_calls = 0

    def list_tabs(self):
        self.list_calls += 1
        return list(self._tabs)

    def activate_tab(self, tab_id, window_id):
        self.activated.append((tab_id, window_id))

    def navigate_tab(self, tab_id, url):
        self.navigated.append((tab_id, url))
        return TabCandidate(id=tab_id or 1, title="", url=url, window_id=0)

    def active_tab(self):
        return None


@pytest.fixture
def sample_tabs():
    """Three tabs across two windows, as a browser would enumerate them."""
    return [
        TabCandidate(id=1, title="GitHub - Pull Requests", url="https://github.com/pulls", window_id=10),
        TabCandidate(id=2, title="YouTube", url="https://www.youtube.com/", window_id=20),
        TabCandidate(id=3, title="Inbox (3) - Gmail", url="https://mail.google.com/mail/u/0/", window_id=10),
    ]


@pytest.fixture
def fake_tabs(sample_tabs):
    """Create an in-memory provider over sample_tabs."""
    return FakeTabs(sample_tabs)


@pytest.fixture
def engine_settings():
    """Settings for an engine that never reads the settings file."""
    return {
        "tab_match_threshold": 30,
        "search_engine_url": "https://www.google.com/search?q={query}",
        "block_private_hosts": False,
    }
