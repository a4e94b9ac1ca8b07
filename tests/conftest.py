"""Shared test fixtures."""

import pytest

from photo_curator.colors import first_parseable_color
from photo_curator.models import EnrichedPhoto, PhotoCharacteristics, PhotoRecord


def make_photo(photo_id, colors=(), scene=None, people_count=0, description=None,
               name=None, **extra) -> PhotoRecord:
    """Photo record with an analysis payload shaped like the vision output."""
    metadata = {'dominant_colors': list(colors), 'people_count': people_count}
    if scene is not None:
        metadata['scene'] = scene
    if description is not None:
        metadata['description'] = description
    metadata.update(extra)
    return PhotoRecord(
        id=photo_id,
        name=name or f"{photo_id}.jpg",
        url=f"https://storage.example/{photo_id}.jpg",
        metadata=metadata,
    )


def make_enriched(photo_id, rgb=None, score=0.0, role=None, **photo_kwargs) -> EnrichedPhoto:
    """Enriched photo with an explicit color, score and role."""
    record = make_photo(photo_id, **photo_kwargs)
    characteristics = PhotoCharacteristics.from_record(record)
    if rgb is None and characteristics.dominant_colors:
        rgb = first_parseable_color(characteristics.dominant_colors)
    return EnrichedPhoto(
        record=record,
        characteristics=characteristics,
        base_color=rgb,
        role=role,
        score=score,
    )


@pytest.fixture
def black_and_white_photos():
    return [
        make_photo('black', colors=['#000000']),
        make_photo('near-black', colors=['#010101']),
        make_photo('white', colors=['#ffffff']),
        make_photo('near-white', colors=['#fefefe']),
    ]


@pytest.fixture
def trip_photos():
    """Twelve photos of a coastal trip covering every narrative role."""
    return [
        make_photo('p01', ['sky blue', 'white'], 'coastal landscape at sunrise', 0,
                   'Waves rolling onto an empty beach under a pale morning sky, seen from the cliffs.'),
        make_photo('p02', ['green', 'brown'], 'nature trail', 0, 'Forest path'),
        make_photo('p03', ['#3b82f6'], 'coast', 0),
        make_photo('p04', ['orange', 'dark navy'], 'city night walk', 0, 'Neon signs after dark'),
        make_photo('p05', ['#f97316', '#eab308'], 'sunset over the harbor', 0),
        make_photo('p06', ['soft white', 'beige'], 'portrait session', 8,
                   'A large family portrait on the pier, everyone laughing at the same joke.'),
        make_photo('p07', ['red'], 'people dancing', 3, 'Street festival'),
        make_photo('p08', ['gray'], 'subway escalator', 2),
        make_photo('p09', ['muted green'], 'indoor cafe', 1, 'Coffee break'),
        make_photo('p10', ['gold', 'black', 'white'], 'wedding crowd', 12),
        make_photo('p11', ['teal'], 'market', 0),
        make_photo('p12', [], None, 0),
    ]
