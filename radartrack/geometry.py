"""Small geometric and colour helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .models import BoxAndRect, Rect


def f_min(x: float, y: float) -> float:
    """Floor of the smaller of two numbers."""
    return float(math.floor((x + y - abs(x - y)) / 2))


def f_max(x: float, y: float) -> float:
    """Floor of the larger of two numbers."""
    return float(math.floor((x + y + abs(x - y)) / 2))


def make_rect_safe(rect: Rect, width: int, height: int) -> Rect:
    """Clip a rectangle to an image of the given size."""
    return rect.intersect(Rect(0, 0, width, height))


def rect_center_scale(rect: Rect, width: int, height: int) -> Rect:
    """Grow a rectangle by the given size while keeping its centre."""
    shift_x = round(width / 2.0)
    shift_y = round(height / 2.0)
    return Rect(
        rect.x - shift_x,
        rect.y - shift_y,
        rect.width + width,
        rect.height + height,
    )


def remap_rect(rect: Rect, block_width: int, block_height: int) -> Rect:
    """Scale a rectangle from block coordinates to pixel coordinates."""
    return Rect(
        rect.x * block_width,
        rect.y * block_height,
        rect.width * block_width,
        rect.height * block_height,
    )


def sum_conf_average(items: Iterable[BoxAndRect]) -> float:
    """Mean armour confidence of the items, 0.0 when there are none."""
    confs = [item.armor.conf for item in items]
    return sum(confs) / len(confs) if confs else 0.0


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def hsv_to_bgr(h: int, s: int, v: int) -> tuple[int, int, int]:
    """Convert an HSV colour with all channels in 0..255 to (b, g, r)."""
    h = max(0, min(255, h))
    s = max(0, min(255, s))
    v = max(0, min(255, v))

    hh = h / 42.5
    sector = math.floor(hh)
    f = hh - sector
    p = v * (1.0 - s / 255.0)
    q = v * (1.0 - s / 255.0 * f)
    t = v * (1.0 - s / 255.0 * (1.0 - f))

    # A hue of 255 lands exactly on the full turn and wraps to the first sector.
    b, g, r = {
        0: (p, t, v),
        1: (p, v, q),
        2: (t, v, p),
        3: (v, q, p),
        4: (v, p, t),
        5: (q, p, v),
    }[sector % 6]
    return _round_half_away(b), _round_half_away(g), _round_half_away(r)