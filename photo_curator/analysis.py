"""
Read-only access to the upstream AI analysis of each photo.

The vision step that produces scores and tags runs elsewhere; this service
only reads its output from the photo payload and derives album titles and
descriptions from it. It holds no per-request state, so one instance can
serve concurrent curation runs.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .models import PhotoCharacteristics, PhotoRecord, payload_dict

SCENE_TAGS = (
    'portrait', 'landscape', 'nature', 'coast', 'beach', 'night', 'sunset',
    'dusk', 'indoor', 'outdoor', 'city', 'street', 'people',
)


def _as_score(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class PhotoAnalyzer:
    """Derive scores, tags and album copy from per-photo analysis payloads."""

    def overall_score(self, record: PhotoRecord) -> float:
        """Overall quality score from the analysis ('scores.overall', 'overall_score' or 'score'); 0 if absent."""
        data = payload_dict(record.metadata)

        scores = data.get('scores')
        if isinstance(scores, dict):
            score = _as_score(scores.get('overall'))
            if score is not None:
                return score

        for key in ('overall_score', 'score'):
            score = _as_score(data.get(key))
            if score is not None:
                return score

        return 0.0

    def photo_tags(self, record: PhotoRecord) -> List[str]:
        """Analysis tags plus scene keywords found in the scene text."""
        data = payload_dict(record.metadata)
        raw_tags = data.get('tags')
        if not isinstance(raw_tags, (list, tuple)):
            raw_tags = []
        tags = [t.strip().lower() for t in raw_tags if isinstance(t, str) and t.strip()]

        scene = PhotoCharacteristics.from_record(record).scene_lower
        tags.extend(tag for tag in SCENE_TAGS if tag in scene and tag not in tags)
        return tags

    def album_title(self, records: Sequence[PhotoRecord], when: datetime = None) -> str:
        """
        Title an album after its most common tag.

        Args:
            records: Photos in the album
            when: Date shown in the title (default: now, UTC)

        Returns:
            e.g. "Landscape Collection - March 4"
        """
        when = when or datetime.now(timezone.utc)
        date = f"{when.strftime('%B')} {when.day}"

        tag_counts = Counter(tag for record in records for tag in self.photo_tags(record))
        if tag_counts:
            top_tag = tag_counts.most_common(1)[0][0]
            return f"{top_tag[0].upper() + top_tag[1:]} Collection - {date}"

        return f"Photo Album - {date}"

    def album_description(self, records: Sequence[PhotoRecord]) -> str:
        count = len(records)
        if count == 0:
            return "An empty album."

        avg_score = sum(self.overall_score(r) for r in records) / count

        if avg_score > 85:
            return (f"A stunning collection of {count} carefully curated photographs showcasing "
                    f"exceptional composition, lighting, and artistic vision.")
        elif avg_score > 70:
            return (f"A beautiful selection of {count} photographs that capture memorable moments "
                    f"with great attention to detail and visual appeal.")
        return f"A curated collection of {count} photographs that tell a compelling visual story."
