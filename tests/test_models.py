"""Tests for record models."""

from datetime import datetime, timedelta, timezone

import pytest

from models import RawRecord, RecordType, parse_gmt


class TestRecordType:

    def test_layouts(self):
        assert RecordType.ARTICLE.layout == 'article'
        assert RecordType.PAGE.layout == 'page'
        assert RecordType.MOVIE.layout == 'movie'

    def test_from_post_type(self):
        assert RecordType.from_post_type('evans_movie') is RecordType.MOVIE
        assert RecordType.from_post_type('attachment') is None


class TestParseGmt:

    def test_naive_iso_is_utc(self):
        assert parse_gmt('2023-11-14T22:13:20') == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_offset_is_converted(self):
        parsed = parse_gmt('2023-11-14T23:13:20+01:00')
        assert parsed.tzinfo == timezone.utc
        assert parsed.hour == 22

    def test_unix_seconds(self):
        assert parse_gmt(1700000000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_aware_datetime(self):
        local = datetime(2023, 11, 14, 17, 13, 20, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_gmt(local) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_garbage(self):
        with pytest.raises(ValueError):
            parse_gmt('yesterday')


class TestRawRecord:

    def test_meta_accessors(self, make_record):
        record = make_record(meta={'list': ['a', 'b'], 'scalar': 'x', 'none': None})

        assert record.meta_values('list') == ['a', 'b']
        assert record.meta_values('scalar') == ['x']
        assert record.meta_values('none') == []
        assert record.meta_values('absent') == []
        assert record.meta_value('list') == 'a'
        assert record.meta_value('absent') == ''

    def test_meta_values_returns_copy(self, make_record):
        record = make_record(meta={'list': ['a']})
        record.meta_values('list').append('b')
        assert record.meta == {'list': ['a']}

    def test_record_type(self, make_record, make_movie):
        assert make_record().record_type is RecordType.ARTICLE
        assert make_movie().record_type is RecordType.MOVIE
        assert make_record(post_type='revision').record_type is None

    def test_dict_form(self, make_movie):
        record = make_movie()
        data = record.to_dict()

        assert data['type'] == 'evans_movie'
        assert data['date_gmt'] == '2023-11-14T22:13:20+00:00'
        assert RawRecord.from_dict(data) == record

    def test_from_dict_defaults(self):
        record = RawRecord.from_dict({
            'id': 1,
            'type': 'page',
            'slug': 'about',
            'date_gmt': '2020-01-01T00:00:00',
            'content': None,
            'meta': None,
        })

        assert record.title == ''
        assert record.body_html == ''
        assert record.thumbnail_url is None
        assert record.meta == {}
