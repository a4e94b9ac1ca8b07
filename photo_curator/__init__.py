"""
Photo curation: partition analyzed photos into ordered albums.
"""

from .analysis import PhotoAnalyzer
from .colors import parse_color
from .curator import AlbumCurator, curate
from .models import Album, CurationAlgorithm, NarrativeRole, PhotoRecord
from .roles import classify_role

__all__ = [
    'Album',
    'AlbumCurator',
    'CurationAlgorithm',
    'NarrativeRole',
    'PhotoAnalyzer',
    'PhotoRecord',
    'classify_role',
    'curate',
    'parse_color',
]
