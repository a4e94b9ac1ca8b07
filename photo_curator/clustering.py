"""
Cluster photos into album-sized groups.

Two greedy seeded-growth clusterers share the same shape: walk photos best
score first, grow a cluster around each unused seed up to max_photos, and
keep it only if it is large enough to stand as an album. Photos of a
discarded cluster go back to the pool for later seeds.

- ColorClusterer: members join on RGB distance (strict, relaxed, then
  nearest-fill passes)
- RoleClusterer: members join while their narrative role is under quota
"""

import math
from collections import Counter
from typing import List, Sequence

import numpy as np
from sklearn.metrics import pairwise_distances

from .config import (DEFAULT_COLOR_THRESHOLD, LOOSE_ADMISSION_RATIO, MIN_COLOR_CLUSTER_RATIO,
                     MIN_COLOR_CLUSTER_SIZE, MIN_ROLE_CLUSTER_RATIO, MIN_ROLE_CLUSTER_SIZE,
                     RELAXED_THRESHOLD_FACTOR, ROLE_TARGETS)
from .models import EnrichedPhoto, NarrativeRole
from .scoring import color_matrix

Cluster = List[EnrichedPhoto]


def rank_by_score(photos: Sequence[EnrichedPhoto]) -> List[EnrichedPhoto]:
    """Best score first; equal scores keep input order."""
    return sorted(photos, key=lambda p: -p.score)


class ColorClusterer:
    """Group photos whose dominant colors are close in RGB space."""

    def __init__(self, relaxed_factor: float = RELAXED_THRESHOLD_FACTOR,
                 min_cluster_ratio: float = MIN_COLOR_CLUSTER_RATIO,
                 min_cluster_size: int = MIN_COLOR_CLUSTER_SIZE,
                 verbose: bool = False):
        """
        Initialize clusterer.

        Args:
            relaxed_factor: Threshold multiplier for the second pass
            min_cluster_ratio: Keep clusters of at least this share of max_photos
            min_cluster_size: Absolute floor for a viable cluster
            verbose: Print per-run clustering summary
        """
        self.relaxed_factor = relaxed_factor
        self.min_cluster_ratio = min_cluster_ratio
        self.min_cluster_size = min_cluster_size
        self.verbose = verbose

    def min_viable_size(self, max_photos: int) -> int:
        return max(self.min_cluster_size, math.ceil(max_photos * self.min_cluster_ratio))

    def cluster(self, photos: Sequence[EnrichedPhoto], max_photos: int,
                color_threshold: float = DEFAULT_COLOR_THRESHOLD) -> List[Cluster]:
        """
        Cluster photos by color similarity into groups of at most max_photos.

        Args:
            photos: Enriched photos; those without a base color are ignored
            max_photos: Cluster capacity
            color_threshold: Distance below which a photo joins a cluster

        Returns:
            Viable clusters in creation order, or a single fallback cluster of
            the best photos when none is viable. Empty if no photo has a color.
        """
        ranked = rank_by_score([p for p in photos if p.base_color is not None])
        if not ranked:
            return []

        n = len(ranked)
        distances = pairwise_distances(color_matrix(ranked), metric='euclidean')
        used = np.zeros(n, dtype=bool)
        min_size = self.min_viable_size(max_photos)
        clusters = []
        discarded = 0

        for seed in range(n):
            if used[seed]:
                continue

            members = self._grow(seed, distances, used, max_photos, color_threshold)

            if len(members) >= min_size:
                used[members] = True
                clusters.append([ranked[i] for i in members])
            else:
                discarded += 1

        if not clusters:
            fallback = [ranked[i] for i in range(n) if not used[i]][:max_photos]
            if self.verbose:
                print(f"  -> No viable color clusters (min size {min_size}), "
                      f"falling back to top {len(fallback)} photos")
            return [fallback]

        if self.verbose:
            print(f"  -> Color clusters: {[len(c) for c in clusters]} "
                  f"({discarded} discarded, threshold {color_threshold})")

        return clusters

    def _grow(self, seed: int, distances: np.ndarray, used: np.ndarray,
              max_photos: int, color_threshold: float) -> List[int]:
        members = [seed]
        in_cluster = used.copy()
        in_cluster[seed] = True

        # Strict pass, then a more lenient one
        for threshold in (color_threshold, color_threshold * self.relaxed_factor):
            for candidate in range(len(distances)):
                if len(members) >= max_photos:
                    return members
                if in_cluster[candidate]:
                    continue
                if np.any(distances[candidate, members] < threshold):
                    members.append(candidate)
                    in_cluster[candidate] = True

        # Still not full: take the closest remaining photos
        if len(members) < max_photos:
            remaining = np.where(~in_cluster)[0]
            if len(remaining):
                nearest = distances[np.ix_(remaining, members)].min(axis=1)
                order = np.argsort(nearest, kind='stable')[:max_photos - len(members)]
                members.extend(int(remaining[i]) for i in order)

        return members


class RoleClusterer:
    """Group photos so that each album follows a balanced narrative arc."""

    def __init__(self, role_targets: dict = None,
                 loose_admission_ratio: float = LOOSE_ADMISSION_RATIO,
                 min_cluster_size: int = MIN_ROLE_CLUSTER_SIZE,
                 min_cluster_ratio: float = MIN_ROLE_CLUSTER_RATIO,
                 verbose: bool = False):
        """
        Initialize clusterer.

        Args:
            role_targets: Role value -> target share of an album
            loose_admission_ratio: Below this share of max_photos any role is admitted
            min_cluster_size: Keep clusters of at least this many photos...
            min_cluster_ratio: ...or this share of max_photos, whichever is smaller
            verbose: Print per-run clustering summary
        """
        self.role_targets = role_targets or ROLE_TARGETS
        self.loose_admission_ratio = loose_admission_ratio
        self.min_cluster_size = min_cluster_size
        self.min_cluster_ratio = min_cluster_ratio
        self.verbose = verbose

    def role_quotas(self, max_photos: int) -> dict:
        return {
            role: math.ceil(max_photos * self.role_targets[role.value])
            for role in NarrativeRole
        }

    def min_viable_size(self, max_photos: int) -> float:
        return min(self.min_cluster_size, max_photos * self.min_cluster_ratio)

    def cluster(self, photos: Sequence[EnrichedPhoto], max_photos: int) -> List[Cluster]:
        """
        Cluster photos into narrative albums of at most max_photos.

        Args:
            photos: Enriched photos with roles and artistic flow scores

        Returns:
            Viable clusters in creation order (possibly empty)
        """
        ranked = rank_by_score([p for p in photos if p.role is not None])
        quotas = self.role_quotas(max_photos)
        loose_limit = max_photos * self.loose_admission_ratio
        min_size = self.min_viable_size(max_photos)

        used = [False] * len(ranked)
        clusters = []
        discarded = 0

        for seed, seed_photo in enumerate(ranked):
            if used[seed]:
                continue

            members = [seed]
            role_counts = Counter({seed_photo.role: 1})

            for candidate, photo in enumerate(ranked):
                if len(members) >= max_photos:
                    break
                if used[candidate] or candidate in members:
                    continue

                if role_counts[photo.role] < quotas[photo.role] or len(members) < loose_limit:
                    members.append(candidate)
                    role_counts[photo.role] += 1

            if len(members) >= min_size:
                for i in members:
                    used[i] = True
                clusters.append([ranked[i] for i in members])
            else:
                discarded += 1

        if self.verbose:
            print(f"  -> Narrative clusters: {[len(c) for c in clusters]} ({discarded} discarded)")

        return clusters
