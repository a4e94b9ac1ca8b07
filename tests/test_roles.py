"""Tests for narrative role classification."""

import pytest

from photo_curator.models import NarrativeRole, PhotoCharacteristics
from photo_curator.roles import classify_role, role_order


def _char(scene, people_count):
    return PhotoCharacteristics(scene=scene, people_count=people_count)


@pytest.mark.parametrize("scene,people,role", [
    ("coastal sunrise", 0, NarrativeRole.INTRO),
    ("portrait session", 8, NarrativeRole.CLIMAX),
    ("city night walk", 0, NarrativeRole.CLOSING),
    ("Mountain LANDSCAPE", 0, NarrativeRole.INTRO),
    ("nature at dusk", 0, NarrativeRole.INTRO),
    ("sunset", 0, NarrativeRole.CLOSING),
    ("kitchen", 0, NarrativeRole.TRANSITION),
    ("", 0, NarrativeRole.TRANSITION),
    ("market", 6, NarrativeRole.CLIMAX),
    ("market", 5, NarrativeRole.TRANSITION),
    ("people on a bench", 2, NarrativeRole.CLIMAX),
    ("portrait", 1, NarrativeRole.CLIMAX),
    ("coastal walk", 2, NarrativeRole.TRANSITION),
    ("night out", 3, NarrativeRole.TRANSITION),
])
def test_classify_role(scene, people, role) -> None:
    assert classify_role(_char(scene, people)) == role


def test_classify_role_is_deterministic() -> None:
    char = _char("sunset over the harbor", 0)

    assert {classify_role(char) for _ in range(5)} == {NarrativeRole.CLOSING}


def test_role_order() -> None:
    assert [role_order(r) for r in NarrativeRole] == [0, 1, 2, 3]
    assert role_order(None) == 1
