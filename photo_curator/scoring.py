"""
Score photos and clusters for album curation.

Per-photo scores are strategy specific and only comparable within one
strategy:
- Color story (0-100): vibrancy, palette richness, color uniqueness,
  scene and caption quality
- Artistic flow: fit for the photo's narrative role, people presence,
  scene keywords, caption and palette richness

Cluster scores combine the mean photo score with size and cohesion
(color harmony or role distribution) and decide album order.
"""

import math
from typing import Callable, List, Optional, Sequence

import numpy as np
from sklearn.metrics import pairwise_distances

from .colors import parse_color, rgb_to_hsl
from .config import (ARTISTIC_SIZE_WEIGHT, HARMONY_BONUS_MAX, HARMONY_VARIANCE_WEIGHT,
                     MIN_COLOR_CLUSTER_RATIO, ROLE_FIT_POINTS, ROLE_TARGETS,
                     SIMILAR_COLOR_DISTANCE, SIZE_BONUS_MAX, SMALL_CLUSTER_PENALTY)
from .models import EnrichedPhoto, NarrativeRole, PhotoCharacteristics
from .roles import mentions

COLORLESS_SCORE = 5.0


def _description_bonus(description: Optional[str], tiers) -> float:
    """Points for caption length. tiers: ((min_length, points), ...) longest first."""
    if not description:
        return 0.0
    for min_length, points in tiers:
        if len(description) > min_length:
            return points
    return 5.0


def color_matrix(photos: Sequence[EnrichedPhoto]) -> np.ndarray:
    """Stack base colors into an (n, 3) float array."""
    return np.array([p.base_color for p in photos], dtype=np.float64).reshape(-1, 3)


class ColorStoryScorer:
    """Score photos on how much they contribute to a color-driven album."""

    def __init__(self, similar_distance: float = SIMILAR_COLOR_DISTANCE):
        self.similar_distance = similar_distance

    def vibrancy_score(self, characteristics: PhotoCharacteristics) -> float:
        """Up to 30 points: saturation (20) plus a preference for mid-tones (10)."""
        primary = parse_color(characteristics.dominant_colors[0]) if characteristics.dominant_colors else None
        if primary is None:
            return COLORLESS_SCORE

        _, saturation, lightness = rgb_to_hsl(primary)
        vibrancy = saturation * 20
        mid_tone = (1 - abs(lightness - 0.5) * 2) * 10
        return vibrancy + mid_tone

    def uniqueness_score(self, similar_count: int) -> float:
        """Up to 25 points, minus 2 for every other photo of a similar color."""
        return max(0.0, 25.0 - (similar_count - 1) * 2)

    def scene_score(self, characteristics: PhotoCharacteristics) -> float:
        scene = characteristics.scene_lower
        score = 0.0
        if mentions(scene, ('portrait', 'people')):
            score += 8
        if mentions(scene, ('landscape', 'nature')):
            score += 7
        if mentions(scene, ('coast', 'beach')):
            score += 6
        if characteristics.people_count > 0:
            score += 5
        return score

    def score_photo(self, photo: EnrichedPhoto, similar_count: int) -> float:
        """
        Calculate the color story score for one photo.

        Args:
            photo: Enriched photo
            similar_count: Photos in the pool (this one included) within
                           the similar-color radius

        Returns:
            Score rounded to one decimal
        """
        if photo.base_color is None:
            return COLORLESS_SCORE

        char = photo.characteristics
        score = self.vibrancy_score(char)
        score += min(len(char.dominant_colors) * 5, 20)
        score += self.uniqueness_score(similar_count)
        score += self.scene_score(char)
        score += _description_bonus(char.description, ((50, 10.0),))
        return round(score, 1)

    def score_photos(self, photos: Sequence[EnrichedPhoto]) -> List[float]:
        """Score every photo against the others in the same pool."""
        colored = [p for p in photos if p.base_color is not None]
        similar_counts = {}
        if colored:
            distances = pairwise_distances(color_matrix(colored), metric='euclidean')
            counts = (distances < self.similar_distance).sum(axis=1)
            similar_counts = {p.id: int(c) for p, c in zip(colored, counts)}

        return [self.score_photo(p, similar_counts.get(p.id, 1)) for p in photos]


class ArtisticFlowScorer:
    """Score photos on how well they serve their narrative role."""

    def role_fit_score(self, characteristics: PhotoCharacteristics, role: NarrativeRole) -> float:
        """Base points for role appropriateness (up to 30)."""
        scene = characteristics.scene_lower
        people = characteristics.people_count

        if role == NarrativeRole.INTRO:
            if mentions(scene, ('coast', 'landscape', 'nature')):
                return 25
            return 15 if people == 0 else 5

        if role == NarrativeRole.TRANSITION:
            if 0 < people <= 3:
                return 20
            return 15 if people == 0 else 10

        if role == NarrativeRole.CLIMAX:
            if people > 5:
                return 30
            if mentions(scene, ('portrait', 'people')):
                return 25
            return 20 if people > 0 else 5

        if role == NarrativeRole.CLOSING:
            if mentions(scene, ('night', 'sunset', 'dusk')):
                return 30
            if people == 0 and mentions(scene, ('landscape', 'nature')):
                return 20
            return 15 if people == 0 else 5

        return 0

    def people_score(self, characteristics: PhotoCharacteristics, role: NarrativeRole) -> float:
        scene = characteristics.scene_lower
        people = characteristics.people_count

        if people > 0:
            score = min(people * 3, 20)
            if 'portrait' in scene:
                score += 5
            return score

        # Empty scenes suit the opening and the ending
        if role in (NarrativeRole.INTRO, NarrativeRole.CLOSING):
            return 15
        return 10

    def scene_score(self, characteristics: PhotoCharacteristics) -> float:
        scene = characteristics.scene_lower
        score = 0.0
        if 'portrait' in scene:
            score += 10
        if mentions(scene, ('landscape', 'nature')):
            score += 8
        if mentions(scene, ('coast', 'beach')):
            score += 7
        if mentions(scene, ('night', 'sunset')):
            score += 6
        if mentions(scene, ('indoor', 'subway', 'escalator')):
            score += 5
        return score

    def palette_score(self, characteristics: PhotoCharacteristics) -> float:
        count = len(characteristics.dominant_colors)
        if count >= 3:
            return 10
        if count >= 2:
            return 5
        return 0

    def score_photo(self, characteristics: PhotoCharacteristics, role: NarrativeRole) -> float:
        score = self.role_fit_score(characteristics, role)
        score += self.people_score(characteristics, role)
        score += self.scene_score(characteristics)
        score += _description_bonus(characteristics.description, ((100, 15.0), (50, 10.0)))
        score += self.palette_score(characteristics)
        return round(score, 1)


class ClusterScorer:
    """Rank clusters; the best one becomes the primary album."""

    @staticmethod
    def mean_photo_score(cluster: Sequence[EnrichedPhoto]) -> float:
        return sum(p.score for p in cluster) / len(cluster)

    def color_harmony(self, cluster: Sequence[EnrichedPhoto]) -> float:
        """Bonus for a tight palette: low mean squared distance from the mean color."""
        colored = [p for p in cluster if p.base_color is not None]
        if len(colored) <= 1:
            return 0.0

        colors = color_matrix(colored)
        centroid = np.mean(colors, axis=0)
        variance = float(np.mean(np.sum((colors - centroid) ** 2, axis=1)))
        return max(0.0, HARMONY_BONUS_MAX - variance * HARMONY_VARIANCE_WEIGHT)

    def color_story_score(self, cluster: Sequence[EnrichedPhoto], max_photos: int) -> float:
        if not cluster:
            return 0.0

        size_bonus = len(cluster) / max(1, max_photos) * SIZE_BONUS_MAX
        size_penalty = SMALL_CLUSTER_PENALTY if len(cluster) < math.ceil(max_photos * MIN_COLOR_CLUSTER_RATIO) else 0.0

        return self.mean_photo_score(cluster) + size_bonus + size_penalty + self.color_harmony(cluster)

    def role_distribution_score(self, cluster: Sequence[EnrichedPhoto]) -> float:
        """Up to 30 points per role for matching the ideal narrative distribution."""
        total = len(cluster)
        score = 0.0
        for role in NarrativeRole:
            actual = sum(1 for p in cluster if p.role == role) / total
            ideal = ROLE_TARGETS[role.value]
            score += (1 - abs(ideal - actual)) * ROLE_FIT_POINTS
        return score

    def artistic_flow_score(self, cluster: Sequence[EnrichedPhoto]) -> float:
        if not cluster:
            return 0.0

        return (self.mean_photo_score(cluster)
                + len(cluster) * ARTISTIC_SIZE_WEIGHT
                + self.role_distribution_score(cluster))

    def rank(self, clusters: List[List[EnrichedPhoto]],
             score_fn: Callable[[List[EnrichedPhoto]], float]) -> List[List[EnrichedPhoto]]:
        """Sort clusters by score, best first. Equal scores keep clustering order."""
        scored = [(score_fn(cluster), i) for i, cluster in enumerate(clusters)]
        scored.sort(key=lambda x: (-x[0], x[1]))
        return [clusters[i] for _, i in scored]
