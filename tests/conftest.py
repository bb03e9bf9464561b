"""Shared fixtures for exporter tests."""

from datetime import datetime, timezone

import pytest

from models import RawRecord


class FakeSource:
    """Query source returning a fixed list of records."""

    def __init__(self, records):
        self.records = records
        self.calls = []

    def fetch_records(self, post_types, limit):
        self.calls.append((list(post_types), limit))
        return self.records[:limit]


@pytest.fixture
def make_record():
    """Factory for RawRecords with sensible defaults."""
    def _make(**overrides):
        values = {
            'id': 42,
            'post_type': 'post',
            'title': 'Hello World',
            'slug': 'hello-world',
            'permalink_url': 'https://example.org/2023/11/14/hello-world/',
            'published_at': datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
            'body_html': '<!-- wp:paragraph --><p>Hi</p><!-- /wp:paragraph -->',
            'excerpt': 'A short summary',
            'thumbnail_url': None,
            'meta': {},
        }
        values.update(overrides)
        return RawRecord(**values)

    return _make


@pytest.fixture
def make_movie(make_record):
    """Factory for movie records."""
    def _make(**overrides):
        values = {
            'id': 7,
            'post_type': 'evans_movie',
            'title': 'Alien',
            'slug': 'alien',
            'permalink_url': 'https://evans.example.org/movie/alien/',
            'body_html': '<p>In space no one can hear you scream.</p>',
            'thumbnail_url': 'https://evans.example.org/wp-content/uploads/foo/bar.jpg',
            'meta': {'_evans_showtime': [1700000000]},
        }
        values.update(overrides)
        return make_record(**values)

    return _make


@pytest.fixture
def fake_source():
    return FakeSource


def _split_document(content):
    assert content.startswith('---\n')
    _, header, body = content.split('---\n', 2)
    return header, body


@pytest.fixture
def split_document():
    """Split an exported file into (front matter text, body)."""
    return _split_document
