"""
Data model for photo curation.

PhotoRecord is owned by the caller and never mutated. Everything the pipeline
derives for a single run (parsed color, narrative role, score) lives on
EnrichedPhoto, which is discarded once albums are built.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

RGB = Tuple[int, int, int]


class NarrativeRole(Enum):
    """Storytelling position of a photo inside an album."""
    INTRO = "intro"
    TRANSITION = "transition"
    CLIMAX = "climax"
    CLOSING = "closing"


class CurationAlgorithm(Enum):
    """Available curation strategies."""
    BEST_SHOTS = "best-shots"
    CHRONOLOGICAL = "chronological"
    COLOR_STORY = "color-story"
    ARTISTIC_FLOW = "artistic-flow"

    @classmethod
    def parse(cls, value) -> "CurationAlgorithm":
        """
        Resolve an algorithm from an enum member, its value or its name.

        Raises:
            ValueError: if the value names no known algorithm
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace('_', '-')
            for member in cls:
                if member.value == key:
                    return member
        raise ValueError(f"Unknown curation algorithm: {value!r}")


@dataclass(frozen=True)
class PhotoRecord:
    """A photo as supplied by the application, with its opaque analysis payload."""
    id: str
    name: str = ""
    url: str = ""
    metadata: Any = None

    @classmethod
    def from_dict(cls, data: Dict) -> "PhotoRecord":
        """Build a record from an API/JSON dict. The payload may sit under 'metadata' or 'data'."""
        payload = data.get('metadata')
        if payload is None:
            payload = data.get('data')
        photo_id = data.get('id') or data.get('photo_id') or data.get('name') or data.get('filename')
        return cls(
            id=str(photo_id) if photo_id is not None else uuid.uuid4().hex,
            name=str(data.get('name') or data.get('filename') or ""),
            url=str(data.get('url') or ""),
            metadata=payload,
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'url': self.url,
            'metadata': self.metadata,
        }


def payload_dict(metadata: Any) -> Dict:
    """Return the payload as a dict; anything unusable becomes an empty dict."""
    if isinstance(metadata, (str, bytes)):
        try:
            metadata = json.loads(metadata)
        except (ValueError, TypeError):
            return {}
    return metadata if isinstance(metadata, dict) else {}


def _as_count(value) -> int:
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, count)


@dataclass(frozen=True)
class PhotoCharacteristics:
    """Defensively parsed view of a photo's analysis payload."""
    filename: str = ""
    dominant_colors: Tuple[str, ...] = ()
    scene: str = ""
    people_count: int = 0
    description: Optional[str] = None

    @property
    def scene_lower(self) -> str:
        return self.scene.lower()

    @classmethod
    def from_record(cls, record: PhotoRecord) -> "PhotoCharacteristics":
        data = payload_dict(record.metadata)

        colors = data.get('dominant_colors')
        if not isinstance(colors, (list, tuple)):
            colors = []

        scene = data.get('scene')
        description = data.get('description')
        filename = data.get('filename')

        return cls(
            filename=filename if isinstance(filename, str) and filename else record.name,
            dominant_colors=tuple(c for c in colors if isinstance(c, str)),
            scene=scene if isinstance(scene, str) else "",
            people_count=_as_count(data.get('people_count')),
            description=description if isinstance(description, str) and description else None,
        )


@dataclass
class EnrichedPhoto:
    """A record plus everything one curation run derives for it."""
    record: PhotoRecord
    characteristics: PhotoCharacteristics
    base_color: Optional[RGB] = None
    role: Optional[NarrativeRole] = None
    score: float = 0.0

    @property
    def id(self) -> str:
        return self.record.id


def new_album_id() -> str:
    return f"album_{uuid.uuid4().hex[:8]}"


@dataclass(frozen=True)
class Album:
    """A finished, ordered group of photos. Enrichment is never carried here."""
    name: str
    photos: Tuple[PhotoRecord, ...]
    algorithm_used: CurationAlgorithm
    max_photos: int
    description: str = ""
    id: str = field(default_factory=new_album_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, 'photos', tuple(self.photos))
        if self.updated_at is None:
            object.__setattr__(self, 'updated_at', self.created_at)

    @property
    def cover_photo(self) -> Optional[PhotoRecord]:
        return self.photos[0] if self.photos else None

    def to_dict(self) -> Dict:
        cover = self.cover_photo
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'photos': [p.to_dict() for p in self.photos],
            'coverPhotoId': cover.id if cover else None,
            'algorithmUsed': self.algorithm_used.value,
            'maxPhotos': self.max_photos,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat(),
        }
