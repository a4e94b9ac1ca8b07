"""
Order photos inside a finished album.
"""

from typing import Dict, List, Sequence

from .colors import color_family
from .models import EnrichedPhoto, PhotoRecord
from .roles import role_order
from .utils import capture_time

COLOR_ORDERS = ('cluster', 'score', 'color_family')


def sequence_artistic_flow(cluster: Sequence[EnrichedPhoto]) -> List[EnrichedPhoto]:
    """Narrative arc: intro -> transition -> climax -> closing, best photos first within a role."""
    return sorted(cluster, key=lambda p: (role_order(p.role), -p.score))


def sequence_color_story(cluster: Sequence[EnrichedPhoto], mode: str = 'cluster') -> List[EnrichedPhoto]:
    """
    Order a color album.

    Args:
        cluster: Photos in clustering order (seed first)
        mode: "cluster" keeps clustering order, "score" sorts best first,
              "color_family" groups hue families, strongest family first

    Returns:
        Ordered photos
    """
    if mode == 'cluster':
        return list(cluster)

    if mode == 'score':
        return sorted(cluster, key=lambda p: -p.score)

    if mode == 'color_family':
        families: Dict[str, List[EnrichedPhoto]] = {}
        for photo in sorted(cluster, key=lambda p: -p.score):
            family = color_family(photo.base_color) if photo.base_color is not None else 'neutral'
            families.setdefault(family, []).append(photo)
        # Dict keeps insertion order, so families are already ranked by their best photo
        return [photo for group in families.values() for photo in group]

    raise ValueError(f"Unknown color story order: {mode}")


def sequence_best_shots(records: Sequence[PhotoRecord], overall_score) -> List[PhotoRecord]:
    """Highest overall analysis score first. overall_score: record -> float."""
    return sorted(records, key=lambda r: -overall_score(r))


def sequence_chronological(records: Sequence[PhotoRecord]) -> List[PhotoRecord]:
    """
    Oldest first when every photo carries a capture time; otherwise fall back
    to name order, which only approximates shooting order.
    """
    times = [capture_time(r) for r in records]

    if records and all(t is not None for t in times):
        order = sorted(range(len(records)), key=lambda i: (times[i], records[i].name, records[i].id))
        return [records[i] for i in order]

    return sorted(records, key=lambda r: (r.name, r.id))
