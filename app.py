"""
Album Curation Web API
Flask JSON endpoints in front of the curation pipeline.
The application layer posts analyzed photos and persists the albums it gets back.
"""

import math

from flask import Flask, jsonify, request

from photo_curator.config import load_app_settings
from photo_curator.curator import AlbumCurator
from photo_curator.models import CurationAlgorithm, PhotoRecord
from photo_curator.sequencing import COLOR_ORDERS

app = Flask(__name__)

# Configuration
app.config.update(load_app_settings())

ALGORITHM_DESCRIPTIONS = {
    CurationAlgorithm.BEST_SHOTS: 'Highest rated photos first',
    CurationAlgorithm.CHRONOLOGICAL: 'Photos in the order they were taken',
    CurationAlgorithm.COLOR_STORY: 'Albums grouped by harmonious color palettes',
    CurationAlgorithm.ARTISTIC_FLOW: 'Albums that tell a story from opening to finale',
}


def _number(payload, key, default, cast):
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"'{key}' must be a finite number")
    return cast(value)


@app.route('/api/health')
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/algorithms')
def list_algorithms():
    """List available curation algorithms."""
    return jsonify({
        'algorithms': [
            {'id': algorithm.value, 'description': ALGORITHM_DESCRIPTIONS[algorithm]}
            for algorithm in CurationAlgorithm
        ],
        'defaultMaxPhotos': app.config['CURATOR_MAX_PHOTOS']
    })


@app.route('/api/curate', methods=['POST'])
def curate_album():
    """Curate posted photos into albums, best album first."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({'error': 'Expected a JSON object'}), 400

    photos = payload.get('photos')
    if not isinstance(photos, list):
        return jsonify({'error': "'photos' must be a list"}), 400

    order = payload.get('order', 'cluster')
    if order not in COLOR_ORDERS:
        return jsonify({'error': f"'order' must be one of {list(COLOR_ORDERS)}"}), 400

    try:
        algorithm = CurationAlgorithm.parse(payload.get('algorithm', CurationAlgorithm.BEST_SHOTS.value))
        max_photos = _number(payload, 'maxPhotos', app.config['CURATOR_MAX_PHOTOS'], int)
        color_threshold = _number(payload, 'colorThreshold', app.config['CURATOR_COLOR_THRESHOLD'], float)
    except (ValueError, OverflowError) as e:
        return jsonify({'error': str(e)}), 400

    records = [PhotoRecord.from_dict(item) for item in photos if isinstance(item, dict)]

    curator = AlbumCurator(color_threshold=color_threshold, color_order=order)
    albums = curator.curate(records, algorithm, max_photos)

    return jsonify({
        'albums': [album.to_dict() for album in albums],
        'algorithmUsed': algorithm.value
    })


if __name__ == '__main__':
    print("""
    ============================================
        ALBUM CURATION API
        POST http://localhost:5000/api/curate
    ============================================
    """)
    app.run(debug=True, host='0.0.0.0', port=5000)
