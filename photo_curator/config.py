"""
Curation tunables.
Tune these without touching the clustering and scoring logic.
"""

import os

# --- Album size ---
DEFAULT_MAX_PHOTOS = 50

# --- Color story clustering (Euclidean distance on 0-255 RGB) ---
DEFAULT_COLOR_THRESHOLD = 80.0
RELAXED_THRESHOLD_FACTOR = 1.5     # Second pass: 50% more lenient
MIN_COLOR_CLUSTER_RATIO = 0.5      # Keep clusters of at least half of max_photos...
MIN_COLOR_CLUSTER_SIZE = 2         # ...and never fewer than 2 photos
SIMILAR_COLOR_DISTANCE = 60.0      # "Similar color" radius for the uniqueness bonus

# --- Artistic flow clustering ---
# Target share of each narrative role in an album
ROLE_TARGETS = {
    'intro': 0.2,
    'transition': 0.3,
    'climax': 0.3,
    'closing': 0.2,
}
LOOSE_ADMISSION_RATIO = 0.8        # Admit any role until the cluster is 80% full
MIN_ROLE_CLUSTER_SIZE = 5
MIN_ROLE_CLUSTER_RATIO = 0.3

# --- Cluster scores ---
SIZE_BONUS_MAX = 100.0
SMALL_CLUSTER_PENALTY = -50.0
HARMONY_BONUS_MAX = 50.0
HARMONY_VARIANCE_WEIGHT = 0.5
ROLE_FIT_POINTS = 30.0             # Per role, for matching the ideal distribution
ARTISTIC_SIZE_WEIGHT = 0.5

# --- Color adjustments (CIE Lab units) ---
DARKEN_AMOUNT = 18.0
BRIGHTEN_AMOUNT = 18.0 * 0.8
DESATURATE_AMOUNT = 18.0

# --- Web app ---
MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB of JSON


def _env_number(name: str, default, cast=float):
    """Read a numeric override from the environment, keeping the default on junk."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        print(f"Warning: ignoring invalid {name}={raw!r}")
        return default


def load_app_settings() -> dict:
    """Settings for the Flask app, with environment overrides applied."""
    return {
        'CURATOR_MAX_PHOTOS': _env_number('CURATOR_MAX_PHOTOS', DEFAULT_MAX_PHOTOS, int),
        'CURATOR_COLOR_THRESHOLD': _env_number('CURATOR_COLOR_THRESHOLD', DEFAULT_COLOR_THRESHOLD),
        'MAX_CONTENT_LENGTH': _env_number('CURATOR_MAX_CONTENT_LENGTH', MAX_CONTENT_LENGTH, int),
    }
