"""Tests for record parsing and the album model."""

import dataclasses
import json

import pytest

from photo_curator.models import Album, CurationAlgorithm, PhotoCharacteristics, PhotoRecord
from tests.conftest import make_photo


def test_from_dict_reads_data_column_as_json_string() -> None:
    record = PhotoRecord.from_dict({
        'id': 'abc',
        'name': 'beach.jpg',
        'url': 'https://storage.example/beach.jpg',
        'data': json.dumps({'scene': 'Beach', 'people_count': 2, 'dominant_colors': ['blue']}),
    })

    char = PhotoCharacteristics.from_record(record)

    assert record.id == 'abc'
    assert char.scene == 'Beach'
    assert char.scene_lower == 'beach'
    assert char.people_count == 2
    assert char.dominant_colors == ('blue',)
    assert char.filename == 'beach.jpg'


def test_from_dict_falls_back_to_name_for_id() -> None:
    record = PhotoRecord.from_dict({'name': 'IMG_0001.jpg'})

    assert record.id == 'IMG_0001.jpg'
    assert record.metadata is None


@pytest.mark.parametrize("metadata", [None, "{not json", "[1, 2]", 17, ["red"]])
def test_unusable_payload_degrades_to_defaults(metadata) -> None:
    char = PhotoCharacteristics.from_record(PhotoRecord(id='x', name='x.jpg', metadata=metadata))

    assert char.dominant_colors == ()
    assert char.scene == ""
    assert char.people_count == 0
    assert char.description is None
    assert char.filename == 'x.jpg'


@pytest.mark.parametrize("value,expected", [
    (3, 3), ("4", 4), (2.9, 2), (-3, 0), ("many", 0), (True, 0), (None, 0), (float('nan'), 0),
])
def test_people_count_is_coerced(value, expected) -> None:
    record = PhotoRecord(id='x', metadata={'people_count': value})

    assert PhotoCharacteristics.from_record(record).people_count == expected


def test_malformed_fields_are_dropped() -> None:
    record = PhotoRecord(id='x', metadata={
        'dominant_colors': 'red',
        'scene': ['beach'],
        'description': '',
        'filename': 12,
    })

    char = PhotoCharacteristics.from_record(record)

    assert char.dominant_colors == ()
    assert char.scene == ""
    assert char.description is None


def test_non_string_colors_are_skipped() -> None:
    char = PhotoCharacteristics.from_record(make_photo('x', colors=['red', None, 5, '#fff']))

    assert char.dominant_colors == ('red', '#fff')


@pytest.mark.parametrize("value,expected", [
    ("color-story", CurationAlgorithm.COLOR_STORY),
    ("ARTISTIC_FLOW", CurationAlgorithm.ARTISTIC_FLOW),
    (" best-shots ", CurationAlgorithm.BEST_SHOTS),
    (CurationAlgorithm.CHRONOLOGICAL, CurationAlgorithm.CHRONOLOGICAL),
])
def test_algorithm_parse(value, expected) -> None:
    assert CurationAlgorithm.parse(value) == expected


@pytest.mark.parametrize("value", ["custom", "", None, 3])
def test_algorithm_parse_rejects_unknown(value) -> None:
    with pytest.raises(ValueError):
        CurationAlgorithm.parse(value)


def test_album_to_dict() -> None:
    photos = [make_photo('a'), make_photo('b')]
    album = Album(name='Coast Collection', photos=photos,
                  algorithm_used=CurationAlgorithm.COLOR_STORY, max_photos=10)

    data = album.to_dict()

    assert album.id.startswith('album_')
    assert album.cover_photo is photos[0]
    assert album.updated_at == album.created_at
    assert data['coverPhotoId'] == 'a'
    assert data['algorithmUsed'] == 'color-story'
    assert [p['id'] for p in data['photos']] == ['a', 'b']
    assert 'base_color' not in data['photos'][0]


def test_empty_album_has_no_cover() -> None:
    album = Album(name='Empty', photos=[], algorithm_used=CurationAlgorithm.BEST_SHOTS, max_photos=5)

    assert album.cover_photo is None
    assert album.to_dict()['coverPhotoId'] is None


def test_album_is_immutable() -> None:
    photos = [make_photo('a'), make_photo('b')]
    album = Album(name='Coast Collection', photos=photos,
                  algorithm_used=CurationAlgorithm.ARTISTIC_FLOW, max_photos=10)

    photos.append(make_photo('c'))

    assert album.photos == (photos[0], photos[1])
    with pytest.raises(dataclasses.FrozenInstanceError):
        album.name = 'Renamed'
