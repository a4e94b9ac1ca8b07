"""
Narrative roles for the artistic flow algorithm.
Each photo gets a coarse storytelling position from its scene text and
people count: calm opening -> rising action -> peak -> resolution.
"""

from typing import Optional

from .models import NarrativeRole, PhotoCharacteristics

INTRO_SCENES = ('coast', 'landscape', 'nature')
CLOSING_SCENES = ('night', 'sunset', 'dusk')
CLIMAX_SCENES = ('portrait', 'people')
CROWD_SIZE = 5

ROLE_ORDER = {
    NarrativeRole.INTRO: 0,
    NarrativeRole.TRANSITION: 1,
    NarrativeRole.CLIMAX: 2,
    NarrativeRole.CLOSING: 3,
}


def mentions(scene: str, keywords) -> bool:
    """True if the (lowercased) scene text contains any of the keywords."""
    return any(keyword in scene for keyword in keywords)


def classify_role(characteristics: PhotoCharacteristics) -> NarrativeRole:
    """Assign a storytelling role. Pure: same scene and people count, same role."""
    scene = characteristics.scene_lower
    people = characteristics.people_count

    if people == 0:
        if mentions(scene, INTRO_SCENES):
            return NarrativeRole.INTRO
        if mentions(scene, CLOSING_SCENES):
            return NarrativeRole.CLOSING
        return NarrativeRole.TRANSITION

    if people > CROWD_SIZE or mentions(scene, CLIMAX_SCENES):
        return NarrativeRole.CLIMAX
    return NarrativeRole.TRANSITION


def role_order(role: Optional[NarrativeRole]) -> int:
    """Sequencing position of a role; unknown roles sit with transitions."""
    return ROLE_ORDER.get(role, 1)
