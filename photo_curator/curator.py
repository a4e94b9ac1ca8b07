"""
Main Album Curation Pipeline
Turns a collection of analyzed photos into one or more ordered albums

Strategies:
- best-shots: highest overall analysis score first
- chronological: capture time (or name) order
- color-story: cluster by dominant color, rank clusters by quality and harmony
- artistic-flow: cluster for a balanced narrative arc, sequence by role
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .analysis import PhotoAnalyzer
from .clustering import ColorClusterer, RoleClusterer, rank_by_score
from .colors import first_parseable_color
from .config import DEFAULT_COLOR_THRESHOLD, DEFAULT_MAX_PHOTOS
from .models import Album, CurationAlgorithm, EnrichedPhoto, PhotoCharacteristics, PhotoRecord
from .roles import classify_role
from .scoring import ArtisticFlowScorer, ClusterScorer, ColorStoryScorer
from .sequencing import (COLOR_ORDERS, sequence_artistic_flow, sequence_best_shots,
                         sequence_chronological, sequence_color_story)


class AlbumCurator:
    """
    Curate albums from analyzed photos.

    Holds configuration and stateless collaborators only: every curate()
    call builds its own enrichment table, so one curator can serve
    concurrent requests.
    """

    def __init__(self,
                 analyzer: PhotoAnalyzer = None,
                 color_threshold: float = DEFAULT_COLOR_THRESHOLD,
                 color_order: str = 'cluster',
                 verbose: bool = False):
        """
        Initialize curator.

        Args:
            analyzer: Analysis service (scores, tags, album copy)
            color_threshold: RGB distance for the color story strict pass
            color_order: Order inside color albums: "cluster", "score" or "color_family"
            verbose: Print progress for each step
        """
        if color_order not in COLOR_ORDERS:
            raise ValueError(f"Unknown color story order: {color_order}")

        self.analyzer = analyzer or PhotoAnalyzer()
        self.color_threshold = color_threshold
        self.color_order = color_order
        self.verbose = verbose

        self.color_scorer = ColorStoryScorer()
        self.flow_scorer = ArtisticFlowScorer()
        self.cluster_scorer = ClusterScorer()
        self.color_clusterer = ColorClusterer(verbose=verbose)
        self.role_clusterer = RoleClusterer(verbose=verbose)

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def curate(self, photos: Sequence[PhotoRecord],
               algorithm=CurationAlgorithm.BEST_SHOTS,
               max_photos: int = DEFAULT_MAX_PHOTOS) -> List[Album]:
        """
        Run the curation pipeline.

        Args:
            photos: Photo records; never modified
            algorithm: CurationAlgorithm or its name ("color-story", ...)
            max_photos: Maximum photos per album (values below 1 count as 1)

        Returns:
            Albums, best first. Empty only when photos is empty.

        Raises:
            ValueError: if the algorithm is unknown
        """
        algorithm = CurationAlgorithm.parse(algorithm)
        max_photos = max(1, int(max_photos))
        photos = list(photos)

        if not photos:
            return []

        self._log(f"\n[CURATE] {algorithm.value}: {len(photos)} photos, max {max_photos} per album")

        if algorithm == CurationAlgorithm.BEST_SHOTS:
            groups = [sequence_best_shots(photos, self.analyzer.overall_score)[:max_photos]]
        elif algorithm == CurationAlgorithm.CHRONOLOGICAL:
            groups = [sequence_chronological(photos)[:max_photos]]
        elif algorithm == CurationAlgorithm.COLOR_STORY:
            groups = self.curate_color_story(photos, max_photos)
        else:
            groups = self.curate_artistic_flow(photos, max_photos)

        albums = self._build_albums(groups, algorithm, max_photos)
        self._log(f"  -> {len(albums)} album(s): {[len(a.photos) for a in albums]}")
        return albums

    def enrich(self, photos: Sequence[PhotoRecord]) -> Dict[str, EnrichedPhoto]:
        """Side table of per-run enrichment keyed by photo id. Later duplicates of an id are ignored."""
        table = {}
        for record in photos:
            if record.id in table:
                continue
            characteristics = PhotoCharacteristics.from_record(record)
            table[record.id] = EnrichedPhoto(
                record=record,
                characteristics=characteristics,
                base_color=first_parseable_color(characteristics.dominant_colors),
            )
        return table

    def curate_color_story(self, photos: Sequence[PhotoRecord], max_photos: int) -> List[List[PhotoRecord]]:
        """
        Color story: one album per color-coherent cluster.

        Returns:
            Ordered photo groups, best cluster first
        """
        enriched = list(self.enrich(photos).values())
        colored = [p for p in enriched if p.base_color is not None]
        self._log(f"  Parsed colors for {len(colored)} of {len(enriched)} photos")

        if not colored:
            return [list(photos[:max_photos])]

        for photo, score in zip(colored, self.color_scorer.score_photos(colored)):
            photo.score = score

        clusters = self.color_clusterer.cluster(colored, max_photos, self.color_threshold)
        ranked = self.cluster_scorer.rank(
            clusters, lambda c: self.cluster_scorer.color_story_score(c, max_photos)
        )

        return [
            [p.record for p in sequence_color_story(cluster, self.color_order)]
            for cluster in ranked
        ]

    def curate_artistic_flow(self, photos: Sequence[PhotoRecord], max_photos: int) -> List[List[PhotoRecord]]:
        """
        Artistic flow: albums balanced across narrative roles, each sequenced as a story arc.

        Returns:
            Ordered photo groups, best cluster first
        """
        enriched = list(self.enrich(photos).values())
        for photo in enriched:
            photo.role = classify_role(photo.characteristics)
            photo.score = self.flow_scorer.score_photo(photo.characteristics, photo.role)

        clusters = self.role_clusterer.cluster(enriched, max_photos)
        if not clusters:
            self._log("  -> No viable narrative clusters, using top photos")
            clusters = [rank_by_score(enriched)[:max_photos]]

        ranked = self.cluster_scorer.rank(clusters, self.cluster_scorer.artistic_flow_score)

        return [[p.record for p in sequence_artistic_flow(cluster)] for cluster in ranked]

    def _build_albums(self, groups: List[List[PhotoRecord]],
                      algorithm: CurationAlgorithm, max_photos: int) -> List[Album]:
        now = datetime.now(timezone.utc)
        albums = []
        for i, records in enumerate(g for g in groups if g):
            name = self.analyzer.album_title(records, when=now)
            if i > 0:
                name = f"{name} ({i + 1})"
            albums.append(Album(
                name=name,
                description=self.analyzer.album_description(records),
                photos=records,
                algorithm_used=algorithm,
                max_photos=max_photos,
                created_at=now,
            ))
        return albums


def curate(photos: Sequence[PhotoRecord],
           algorithm=CurationAlgorithm.BEST_SHOTS,
           max_photos: int = DEFAULT_MAX_PHOTOS,
           analyzer: Optional[PhotoAnalyzer] = None,
           color_threshold: float = DEFAULT_COLOR_THRESHOLD,
           color_order: str = 'cluster',
           verbose: bool = False) -> List[Album]:
    """
    Convenience function to run the curation pipeline.

    Args:
        photos: Photo records
        algorithm: "best-shots", "chronological", "color-story" or "artistic-flow"
        max_photos: Maximum photos per album
        analyzer: Analysis service (default: a fresh PhotoAnalyzer)
        color_threshold: RGB distance for the color story strict pass
        color_order: Order inside color albums
        verbose: Print progress

    Returns:
        Albums, best first
    """
    curator = AlbumCurator(
        analyzer=analyzer,
        color_threshold=color_threshold,
        color_order=color_order,
        verbose=verbose
    )
    return curator.curate(photos, algorithm, max_photos)
