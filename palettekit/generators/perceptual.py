# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Perceptual interpolation ramps.

Every technique walks the same piecewise path through the input colors
(a single color is paired with white) and differs only in the space the
blend happens in. Polar spaces interpolate hue along the shorter arc.

The hct, cam16, jzazbz and ipt ramps are approximations: a linear-light
blend with a small red lift at the middle of each segment.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import (
    cielab_to_srgb,
    hsl_to_rgb,
    hsv_to_rgb,
    lerp,
    lerp_hue,
    linear_to_srgb,
    oklab_to_oklch,
    oklab_to_srgb,
    oklch_to_hex_safe,
    rgb_to_hsl,
    rgb_to_hsv,
    srgb_to_cielab,
    srgb_to_linear,
    srgb_to_oklab,
)
from palettekit.color.hexcodes import first_color_array, hex_to_rgb, rgb_to_hex
from palettekit.errors import EmptyPaletteError
from palettekit.generators.common import check_count, ramp

Blend = Callable[[NDArray[np.float64], NDArray[np.float64], float], str]

TECHNIQUES = ("lab", "lch", "oklab", "oklch", "hct", "cam16", "hsl", "hsv", "jzazbz", "ipt")

# Red lift at segment midpoints for the linear-light approximations
_RED_LIFT = {"hct": 0.02, "cam16": 0.02, "ipt": 0.02, "jzazbz": 0.05}


def _polar(lab: NDArray[np.float64]) -> tuple[float, float, float]:
    L, C, H = oklab_to_oklch(lab)
    return float(L), float(C), float(H)


def _blend_lab(c1, c2, t):
    a, b = srgb_to_cielab(c1), srgb_to_cielab(c2)
    return rgb_to_hex(cielab_to_srgb(a + (b - a) * t))


def _blend_lch(c1, c2, t):
    # CIE LCh shares the polar math with OKLCH
    L1, C1, H1 = _polar(srgb_to_cielab(c1))
    L2, C2, H2 = _polar(srgb_to_cielab(c2))
    h = math.radians(lerp_hue(H1, H2, t))
    c = lerp(C1, C2, t)
    lab = np.array([lerp(L1, L2, t), c * math.cos(h), c * math.sin(h)])
    return rgb_to_hex(cielab_to_srgb(lab))


def _blend_oklab(c1, c2, t):
    a, b = srgb_to_oklab(c1), srgb_to_oklab(c2)
    return rgb_to_hex(oklab_to_srgb(a + (b - a) * t))


def _blend_oklch(c1, c2, t):
    L1, C1, H1 = _polar(srgb_to_oklab(c1))
    L2, C2, H2 = _polar(srgb_to_oklab(c2))
    return oklch_to_hex_safe(lerp(L1, L2, t), lerp(C1, C2, t), lerp_hue(H1, H2, t))


def _blend_hsl(c1, c2, t):
    h1, s1, l1 = rgb_to_hsl(c1)
    h2, s2, l2 = rgb_to_hsl(c2)
    return rgb_to_hex(hsl_to_rgb(lerp_hue(h1, h2, t), lerp(s1, s2, t), lerp(l1, l2, t)))


def _blend_hsv(c1, c2, t):
    h1, s1, v1 = rgb_to_hsv(c1)
    h2, s2, v2 = rgb_to_hsv(c2)
    return rgb_to_hex(hsv_to_rgb(lerp_hue(h1, h2, t), lerp(s1, s2, t), lerp(v1, v2, t)))


def _linear_light(lift: float) -> Blend:
    def blend(c1, c2, t):
        a, b = srgb_to_linear(c1), srgb_to_linear(c2)
        rgb = linear_to_srgb(a + (b - a) * t)
        rgb[0] = min(1.0, rgb[0] + math.sin(math.pi * t) * lift)
        return rgb_to_hex(rgb)

    return blend


_BLENDS: dict[str, Blend] = {
    "lab": _blend_lab,
    "lch": _blend_lch,
    "oklab": _blend_oklab,
    "oklch": _blend_oklch,
    "hsl": _blend_hsl,
    "hsv": _blend_hsv,
    **{name: _linear_light(lift) for name, lift in _RED_LIFT.items()},
}


def _segment(n_stops: int, t: float) -> tuple[int, float]:
    """Map global t in [0, 1] to (segment index, local t)."""
    scaled = t * (n_stops - 1)
    idx = min(int(math.floor(scaled)), n_stops - 2)
    return idx, scaled - idx


def interpolate(colors: Sequence[str], count: int, technique: str = "oklch") -> list[str]:
    """
    A ramp of ``count`` colors through ``colors`` in one space.

    Raises:
        ValueError: Unknown technique or count < 1
        EmptyPaletteError: ``colors`` is empty
    """
    if technique not in _BLENDS:
        raise ValueError(f"Unknown technique {technique!r}; expected one of {list(TECHNIQUES)}")
    check_count(count)
    if len(colors) == 0:
        raise EmptyPaletteError("interpolate needs at least one color")

    stops = [hex_to_rgb(c) for c in colors]
    if len(stops) == 1:
        stops.append(hex_to_rgb("#ffffff"))

    blend = _BLENDS[technique]
    result = []
    for t in ramp(count):
        idx, local_t = _segment(len(stops), t)
        result.append(blend(stops[idx], stops[idx + 1], local_t))
    return result


def generate_perceptual_palettes(
    palette: Mapping[str, Sequence[str]],
    count: int = 9,
) -> dict[str, list[str]]:
    """
    Ramps of ``count`` colors in each of the ten interpolation spaces.

    Uses every color of the first non-empty array as a stop.

    Raises:
        EmptyPaletteError: No array has any color
    """
    check_count(count)
    colors = first_color_array(palette)
    return {technique: interpolate(colors, count, technique) for technique in TECHNIQUES}
