"""
Color parsing and color math for the color story algorithm.

Vision analysis describes colors in free text ("soft white", "dark gray",
"#3b82f6"). parse_color turns those into RGB triples, trying a strict CSS
parse first and falling back to a small vocabulary of base colors with
tone adjectives.
"""

import math
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import ImageColor

from .config import BRIGHTEN_AMOUNT, DARKEN_AMOUNT, DESATURATE_AMOUNT
from .models import RGB

# Vocabulary for descriptions that are not valid CSS colors
BASE_COLORS = {
    'black': '#000000',
    'dark gray': '#4a4a4a',
    'dark grey': '#4a4a4a',
    'gray': '#808080',
    'grey': '#808080',
    'light gray': '#d3d3d3',
    'light grey': '#d3d3d3',
    'white': '#ffffff',
    'soft white': '#f5f5f5',
    'off white': '#f8f8f2',
    'ivory': '#fffff0',
    'beige': '#f5f5dc',
    'cream': '#fffdd0',
    'red': '#ff0000',
    'blue': '#0000ff',
    'green': '#008000',
    'yellow': '#ffff00',
    'orange': '#ffa500',
    'purple': '#800080',
    'pink': '#ffc0cb',
    'brown': '#8b4513',
    'teal': '#008080',
    'cyan': '#00ffff',
    'magenta': '#ff00ff',
    'maroon': '#800000',
    'navy': '#000080',
    'indigo': '#4b0082',
    'violet': '#ee82ee',
    'gold': '#ffd700',
    'silver': '#c0c0c0',
    'bronze': '#cd7f32',
}

TONE_ADJECTIVES = {'soft', 'dark', 'light', 'muted', 'deep', 'rich', 'bright', 'pale', 'warm', 'cool'}

BRIGHTENING_ADJECTIVES = ('light', 'soft', 'pale')


def _hex_to_rgb(value: str) -> RGB:
    # getrgb does not clamp rgb()/hsl() components
    r, g, b = np.clip(np.rint(ImageColor.getrgb(value)[:3]), 0, 255).astype(int)
    return (int(r), int(g), int(b))


def _rgb_to_lab(rgb: RGB) -> np.ndarray:
    pixel = np.array([[rgb]], dtype=np.float32) / 255.0
    return cv2.cvtColor(pixel, cv2.COLOR_RGB2Lab)[0, 0].astype(np.float64)


def _lab_to_rgb(lab: np.ndarray) -> RGB:
    pixel = np.array([[lab]], dtype=np.float32)
    rgb = cv2.cvtColor(pixel, cv2.COLOR_Lab2RGB)[0, 0]
    rgb = np.clip(np.rint(rgb * 255.0), 0, 255).astype(int)
    return (int(rgb[0]), int(rgb[1]), int(rgb[2]))


def darken(rgb: RGB, amount: float = DARKEN_AMOUNT) -> RGB:
    """Lower Lab lightness by `amount`."""
    lab = _rgb_to_lab(rgb)
    lab[0] -= amount
    return _lab_to_rgb(lab)


def brighten(rgb: RGB, amount: float = BRIGHTEN_AMOUNT) -> RGB:
    return darken(rgb, -amount)


def desaturate(rgb: RGB, amount: float = DESATURATE_AMOUNT) -> RGB:
    """Lower LCh chroma by `amount` (never below zero), keeping hue and lightness."""
    lightness, a, b = _rgb_to_lab(rgb)
    chroma = max(0.0, math.hypot(a, b) - amount)
    hue = math.atan2(b, a)
    return _lab_to_rgb(np.array([lightness, chroma * math.cos(hue), chroma * math.sin(hue)]))


def _adjust_for_tone(rgb: RGB, words: Sequence[str]) -> RGB:
    # At most one adjustment, in priority order
    if 'dark' in words:
        return darken(rgb)
    if any(word in words for word in BRIGHTENING_ADJECTIVES):
        return brighten(rgb)
    if 'muted' in words:
        return desaturate(rgb)
    return rgb


def parse_color(text: Optional[str]) -> Optional[RGB]:
    """
    Convert a free-text color description into an RGB triple.

    Args:
        text: CSS name, hex/rgb()/hsl() expression, or a description such
              as "soft white" or "dark navy"

    Returns:
        (r, g, b) with components in 0-255, or None if nothing matched
    """
    if not isinstance(text, str):
        return None

    value = text.strip().lower()
    if not value:
        return None

    try:
        return _hex_to_rgb(value)
    except ValueError:
        pass

    if value in BASE_COLORS:
        return _hex_to_rgb(BASE_COLORS[value])

    words = value.split()
    remaining = [word for word in words if word not in TONE_ADJECTIVES]

    candidates = [' '.join(remaining)] + remaining
    for candidate in candidates:
        if candidate in BASE_COLORS:
            return _adjust_for_tone(_hex_to_rgb(BASE_COLORS[candidate]), words)

    return None


def first_parseable_color(descriptions: Sequence[str]) -> Optional[RGB]:
    """Return the first description in the list that parses to a color."""
    for description in descriptions:
        rgb = parse_color(description)
        if rgb is not None:
            return rgb
    return None


def color_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two RGB vectors (raw 0-255 components, unweighted)."""
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


def rgb_to_hsl(rgb: RGB) -> Tuple[float, float, float]:
    """
    Convert RGB to HSL.

    Returns:
        (hue in degrees 0-360, saturation 0-1, lightness 0-1)
    """
    pixel = np.array([[rgb]], dtype=np.float32) / 255.0
    hue, lightness, saturation = cv2.cvtColor(pixel, cv2.COLOR_RGB2HLS)[0, 0]
    return float(hue), float(saturation), float(lightness)


def color_family(rgb: RGB) -> str:
    """Coarse hue family name used to group photos inside a color album."""
    hue, saturation, lightness = rgb_to_hsl(rgb)

    if saturation < 0.15 or lightness < 0.1 or lightness > 0.92:
        return 'neutral'

    if hue < 15 or hue >= 345:
        return 'red'
    elif hue < 45:
        return 'orange'
    elif hue < 70:
        return 'yellow'
    elif hue < 165:
        return 'green'
    elif hue < 195:
        return 'cyan'
    elif hue < 255:
        return 'blue'
    elif hue < 320:
        return 'purple'
    return 'pink'
