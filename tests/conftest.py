"""
Pytest configuration and page fixtures for Focus Firewall tests.
"""

import pytest

from focusfirewall.classify import ScanCoordinator
from focusfirewall.page import EngineConfig, HostDocument


def video_item(title, tag="ytd-rich-item-renderer", thumbnail=True, title_attr_only=False):
    """Markup of one video entry in the layout the default selectors expect."""
    thumb = (
        '<ytd-thumbnail><a href="/watch"><img src="thumb.jpg"></a></ytd-thumbnail>'
        if thumbnail else ""
    )

    if title is None:
        heading = '<div id="meta"><span class="views">1K views</span></div>'
    elif title_attr_only:
        heading = f'<h3><a id="video-title" title="{title}"></a></h3>'
    else:
        heading = f'<h3><a id="video-title" href="/watch">{title}</a></h3>'

    return f'<{tag}><div id="content">{thumb}<div id="details">{heading}</div></div></{tag}>'


def page_html(*items):
    """Full page markup with the given item markups inside the feed."""
    return (
        "<html><head><title>Feed</title></head><body>"
        f'<div id="contents">{"".join(items)}</div>'
        "</body></html>"
    )


@pytest.fixture
def fast_config():
    """Engine config with short timing windows for async tests."""
    return EngineConfig(debounce_ms=40, poll_ms=20, state_timeout_ms=100)


@pytest.fixture
def feed_document():
    """A feed with one relevant and one irrelevant video for the goal "rust"."""
    return HostDocument(
        page_html(
            video_item("Rust ownership explained"),
            video_item("Cute cat compilation"),
        ),
        url="https://www.youtube.com/",
    )


@pytest.fixture
def coordinator(feed_document):
    return ScanCoordinator(feed_document)
