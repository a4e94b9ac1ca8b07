"""Tests for the analysis service."""

from datetime import datetime

import pytest

from photo_curator.analysis import PhotoAnalyzer
from photo_curator.models import PhotoRecord
from tests.conftest import make_photo


@pytest.fixture
def analyzer():
    return PhotoAnalyzer()


@pytest.mark.parametrize("metadata,expected", [
    ({'scores': {'overall': 88}}, 88.0),
    ({'scores': {'overall': None}, 'overall_score': '71.5'}, 71.5),
    ({'score': 40}, 40.0),
    ({'score': True}, 0.0),
    ({}, 0.0),
    ('{"overall_score": 55}', 55.0),
    (None, 0.0),
])
def test_overall_score(analyzer, metadata, expected) -> None:
    assert analyzer.overall_score(PhotoRecord(id='x', metadata=metadata)) == expected


def test_photo_tags(analyzer) -> None:
    record = make_photo('a', scene='Sunset at the beach', tags=['Travel', ' ', 3, 'beach'])

    assert analyzer.photo_tags(record) == ['travel', 'beach', 'sunset']


def test_album_title_uses_most_common_tag(analyzer) -> None:
    records = [
        make_photo('a', scene='mountain landscape'),
        make_photo('b', scene='landscape at dusk'),
        make_photo('c', scene='city street'),
    ]

    title = analyzer.album_title(records, when=datetime(2024, 3, 4))

    assert title == "Landscape Collection - March 4"


def test_album_title_without_tags(analyzer) -> None:
    title = analyzer.album_title([make_photo('a')], when=datetime(2024, 11, 23))

    assert title == "Photo Album - November 23"


@pytest.mark.parametrize("score,opening", [
    (90, "A stunning collection of 2"),
    (75, "A beautiful selection of 2"),
    (70, "A curated collection of 2"),
])
def test_album_description_tiers(analyzer, score, opening) -> None:
    records = [make_photo('a', score=score), make_photo('b', score=score)]

    assert analyzer.album_description(records).startswith(opening)


def test_album_description_empty(analyzer) -> None:
    assert analyzer.album_description([]) == "An empty album."
