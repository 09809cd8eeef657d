# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Data-visualization color scales in OKLCH.

Uses up to three input colors: the first drives every single-hue scale,
the first and third make the diverging scale, the first and second the
bivariate grid. Missing colors default to blue, red and green.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from palettekit.color.colorspace import hex_to_oklch, lerp, lerp_hue, oklch_to_hex_safe
from palettekit.color.hexcodes import colors_or_defaults
from palettekit.generators.common import check_count, ramp

LCH = tuple[float, float, float]

DEFAULT_COLORS = ("#0000ff", "#ff0000", "#00ff00")

SCALES = ("sequential", "diverging", "qualitative", "bivariate", "cyclical", "spectral", "stepped")

_SPECTRAL_HUES = (0, 30, 60, 120, 180, 240, 280)
_SPECTRAL_LIGHTNESS = (0.45, 0.60, 0.80, 0.72, 0.62, 0.50, 0.42)


def _hex(lch: LCH) -> str:
    return oklch_to_hex_safe(*lch)


def _lerp_lch(a: LCH, b: LCH, t: float) -> LCH:
    return (lerp(a[0], b[0], t), lerp(a[1], b[1], t), lerp_hue(a[2], b[2], t))


def _through(stops: Sequence[LCH], t: float) -> LCH:
    """Piecewise OKLCH interpolation across ``stops`` at t in [0, 1]."""
    pos = t * (len(stops) - 1)
    lo = int(pos)
    hi = min(lo + 1, len(stops) - 1)
    return _lerp_lch(stops[lo], stops[hi], pos - lo)


def sequential(base: str, n: int) -> list[str]:
    """Single hue, light (L 0.92) to dark (L 0.25), base chroma."""
    _, C, H = hex_to_oklch(base)
    return [_hex((lerp(0.92, 0.25, t), C, H)) for t in ramp(n)]


def diverging(color_a: str, color_b: str, n: int) -> list[str]:
    """Dark A → near-white neutral → dark B."""
    _, Ca, Ha = hex_to_oklch(color_a)
    _, Cb, Hb = hex_to_oklch(color_b)
    neutral = (0.90, 0.02, Ha)
    start = (0.40, Ca, Ha)
    end = (0.40, Cb, Hb)

    out = []
    for t in ramp(n):
        if t <= 0.5:
            out.append(_hex(_lerp_lch(start, neutral, t * 2)))
        else:
            out.append(_hex(_lerp_lch(neutral, end, t * 2 - 1)))
    return out


def qualitative(base: str, n: int) -> list[str]:
    """Evenly spaced hues at fixed L 0.6 and C >= 0.12."""
    _, C, H = hex_to_oklch(base)
    C = max(C, 0.12)
    return [_hex((0.60, C, (H + 360.0 / n * i) % 360.0)) for i in range(n)]


def bivariate(color_a: str, color_b: str, n: int) -> list[str]:
    """
    Corners of a 2x2 bivariate grid, interpolated when n != 4.

    Order: light A, dark A, light B, dark mix of A and B.
    """
    _, Ca, Ha = hex_to_oklch(color_a)
    _, Cb, Hb = hex_to_oklch(color_b)
    corners = (
        (0.85, Ca * 0.5, Ha),
        (0.45, Ca, Ha),
        (0.85, Cb * 0.5, Hb),
        (0.45, max(Ca, Cb), lerp_hue(Ha, Hb, 0.5)),
    )
    return [_hex(_through(corners, t)) for t in ramp(n)]


def cyclical(base: str, n: int) -> list[str]:
    """
    Full hue wheel at constant L and C.

    Steps are 360/n apart, so the last swatch stops one step short of the
    first and the scale wraps cleanly.
    """
    L, C, H = hex_to_oklch(base)
    L = L if L > 0.7 else 0.62
    C = max(C, 0.12)
    return [_hex((L, C, (H + 360.0 * i / n) % 360.0)) for i in range(n)]


def spectral(base: str, n: int) -> list[str]:
    """Warm → cool rainbow arc, rotated so the first anchor sits 30° before the base hue."""
    _, C, H = hex_to_oklch(base)
    offset = (H - 30.0 + 360.0) % 360.0
    C = max(C, 0.14)
    stops = [
        (L, C, (hue + offset) % 360.0)
        for L, hue in zip(_SPECTRAL_LIGHTNESS, _SPECTRAL_HUES)
    ]
    return [_hex(_through(stops, t)) for t in ramp(n)]


def stepped(base: str, n: int) -> list[str]:
    """Discrete classes: band centers of [0.3, 0.88] split into n equal bands."""
    _, C, H = hex_to_oklch(base)
    step = (0.88 - 0.30) / n
    return [_hex((0.88 - step * (i + 0.5), C * 0.85, H)) for i in range(n)]


def generate_data_visuals(
    palette: Mapping[str, Sequence[str]],
    count: int = 4,
) -> dict[str, list[str]]:
    """
    All seven scales, ``count`` colors each.

    Uses the first non-empty array; an empty palette uses the defaults.
    """
    check_count(count)
    c0, c1, c2 = colors_or_defaults(palette, DEFAULT_COLORS)
    return {
        "sequential": sequential(c0, count),
        "diverging": diverging(c0, c2, count),
        "qualitative": qualitative(c0, count),
        "bivariate": bivariate(c0, c1, count),
        "cyclical": cyclical(c0, count),
        "spectral": spectral(c0, count),
        "stepped": stepped(c0, count),
    }
