"""Tests for the JSON API."""

import json

import pytest

from app import app


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def _photo(photo_id, **data):
    return {'id': photo_id, 'name': f'{photo_id}.jpg', 'url': f'https://storage.example/{photo_id}.jpg',
            'data': json.dumps(data)}


def test_health(client) -> None:
    response = client.get('/api/health')

    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_algorithms(client) -> None:
    body = client.get('/api/algorithms').get_json()

    assert [a['id'] for a in body['algorithms']] == ['best-shots', 'chronological', 'color-story', 'artistic-flow']
    assert body['defaultMaxPhotos'] == app.config['CURATOR_MAX_PHOTOS']


def test_curate_color_story(client) -> None:
    photos = [
        _photo('black', dominant_colors=['black']),
        _photo('near-black', dominant_colors=['#010101']),
        _photo('white', dominant_colors=['white']),
        _photo('near-white', dominant_colors=['#fefefe']),
    ]

    response = client.post('/api/curate', json={'photos': photos, 'algorithm': 'color-story', 'maxPhotos': 2})

    assert response.status_code == 200
    body = response.get_json()
    assert body['algorithmUsed'] == 'color-story'
    assert len(body['albums']) == 2
    for album in body['albums']:
        assert album['id'].startswith('album_')
        assert album['coverPhotoId'] == album['photos'][0]['id']
        assert album['maxPhotos'] == 2


def test_curate_defaults_to_best_shots(client) -> None:
    photos = [_photo('a', score=10), _photo('b', score=90)]

    body = client.post('/api/curate', json={'photos': photos}).get_json()

    assert body['algorithmUsed'] == 'best-shots'
    assert [p['id'] for p in body['albums'][0]['photos']] == ['b', 'a']


def test_curate_empty(client) -> None:
    body = client.post('/api/curate', json={'photos': [], 'algorithm': 'artistic-flow'}).get_json()

    assert body['albums'] == []


@pytest.mark.parametrize("payload", [
    [1, 2],
    {'algorithm': 'color-story'},
    {'photos': {}, 'algorithm': 'color-story'},
    {'photos': [], 'algorithm': 'random'},
    {'photos': [], 'maxPhotos': 'ten'},
    {'photos': [], 'maxPhotos': True},
    {'photos': [], 'colorThreshold': None},
    {'photos': [], 'order': 'rainbow'},
])
def test_curate_rejects_bad_requests(client, payload) -> None:
    response = client.post('/api/curate', json=payload)

    assert response.status_code == 400
    assert 'error' in response.get_json()


@pytest.mark.parametrize("body", [
    '{"photos": [], "maxPhotos": Infinity}',
    '{"photos": [], "maxPhotos": -Infinity}',
    '{"photos": [], "colorThreshold": NaN}',
    '{"photos": [], "colorThreshold": 1' + '0' * 400 + '}',
])
def test_curate_rejects_non_finite_numbers(client, body) -> None:
    response = client.post('/api/curate', data=body, content_type='application/json')

    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_curate_requires_json(client) -> None:
    response = client.post('/api/curate', data='photos', content_type='text/plain')

    assert response.status_code == 400
