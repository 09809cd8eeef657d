# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Algorithmic and generative palettes.

Eleven procedural series driven by the first input color (bezier uses up
to four). Everything is deterministic: the "random" and "noise" series
draw from a numpy Generator seeded with a hash of the base color.

References:
- Golden angle: Vogel, H. (1979). A better way to construct the sunflower head.
- Blackbody: Kang et al. (2002), Planckian locus polynomial in CIE xy.
- Cubehelix: Green, D.A. (2011). A colour scheme for the display of
  astronomical intensity images.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import (
    hex_to_oklab,
    hex_to_oklch,
    lerp,
    linear_to_srgb,
    oklab_to_oklch,
    oklch_to_hex_safe,
)
from palettekit.color.hexcodes import colors_or_defaults, rgb_to_hex, seed_from_hex
from palettekit.generators.common import check_count, clamp01, ramp

DEFAULT_COLORS = ("#0065ff", "#ff0000", "#00ff00", "#ffff00")

SERIES = (
    "random",
    "goldenRatio",
    "noise",
    "temperature",
    "bezierInterpolation",
    "easeInOut",
    "blackbody",
    "fibonacci",
    "harmonicSeries",
    "sinusoidal",
    "cubehelix",
)

GOLDEN_ANGLE = 137.50776405003785

# Valid range of the Kang et al. approximation
KELVIN_RANGE = (1667.0, 25000.0)

_NOISE_TABLE_SIZE = 256

# XYZ (D65) to linear sRGB, as used by the Kang et al. reference
_XYZ_TO_LINEAR = np.array([
    [3.2406, -1.5372, -0.4986],
    [-0.9689, 1.8758, 0.0415],
    [0.0557, -0.2040, 1.0570],
], dtype=np.float64)


def _hex(L: float, C: float, H: float) -> str:
    return oklch_to_hex_safe(L, C, H)


# =============================================================================
# Building blocks
# =============================================================================


def value_noise(seed: int) -> Callable[[float], float]:
    """
    1-D value noise in [0, 1].

    A 256-entry table of seeded uniforms, smoothstep-interpolated between
    integer lattice points.
    """
    table = np.random.default_rng(seed).random(_NOISE_TABLE_SIZE)

    def noise(x: float) -> float:
        xi = int(math.floor(x)) & (_NOISE_TABLE_SIZE - 1)
        xf = x - math.floor(x)
        smooth = xf * xf * (3 - 2 * xf)
        return float(lerp(table[xi], table[(xi + 1) & (_NOISE_TABLE_SIZE - 1)], smooth))

    return noise


def _bezier(points: NDArray[np.float64], t: float) -> NDArray[np.float64]:
    """Cubic Bezier through four (3,) control points."""
    mt = 1.0 - t
    return (
        mt ** 3 * points[0]
        + 3 * mt * mt * t * points[1]
        + 3 * mt * t * t * points[2]
        + t ** 3 * points[3]
    )


def _ease_in_out_cubic(t: float) -> float:
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def kelvin_to_rgb(kelvin: float) -> NDArray[np.float64]:
    """
    Blackbody color at ``kelvin`` as sRGB [0, 1].

    CIE xy from the Kang et al. cubic fit (clamped to 1667-25000 K),
    xy → XYZ at Y = 1, then to linear sRGB normalized so the brightest
    channel is 1.
    """
    K = min(max(float(kelvin), KELVIN_RANGE[0]), KELVIN_RANGE[1])

    if K <= 4000:
        x = -0.2661239e9 / K ** 3 - 0.234358e6 / K ** 2 + 0.8776956e3 / K + 0.179910
    else:
        x = -3.0258469e9 / K ** 3 + 2.1070379e6 / K ** 2 + 0.2226347e3 / K + 0.240390

    if K <= 2222:
        y = -1.1063814 * x ** 3 - 1.34811020 * x ** 2 + 2.18555832 * x - 0.20219683
    elif K <= 4000:
        y = -0.9549476 * x ** 3 - 1.37418593 * x ** 2 + 2.09137015 * x - 0.16748867
    else:
        y = 3.0817580 * x ** 3 - 5.87338670 * x ** 2 + 3.75112997 * x - 0.37001483

    y = max(y, 1e-6)
    xyz = np.array([x / y, 1.0, (1.0 - x - y) / y])
    linear = _XYZ_TO_LINEAR @ xyz
    linear = linear / max(float(linear.max()), 1e-6)
    return linear_to_srgb(linear)


def cubehelix_rgb(
    t: float,
    start: float = 0.5,
    rotations: float = -1.5,
    saturation: float = 1.2,
    gamma: float = 1.0,
) -> NDArray[np.float64]:
    """Green's cubehelix at fraction t; luminance rises monotonically with t."""
    angle = 2 * math.pi * (start / 3 + rotations * t)
    tg = t ** gamma
    amp = saturation * tg * (1 - tg) / 2
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    rgb = np.array([
        tg + amp * (-0.14861 * cos_a + 1.78277 * sin_a),
        tg + amp * (-0.29227 * cos_a - 0.90649 * sin_a),
        tg + amp * (1.97294 * cos_a),
    ])
    return np.clip(rgb, 0.0, 1.0)


# =============================================================================
# Series
# =============================================================================


def random_series(base: str, n: int) -> list[str]:
    """Seeded random hues with L in [0.35, 0.75] and C in [0.08, 0.2]."""
    rng = np.random.default_rng(seed_from_hex(base))
    out = []
    for _ in range(n):
        L = lerp(0.35, 0.75, rng.random())
        C = lerp(0.08, 0.20, rng.random())
        H = rng.random() * 360.0
        out.append(_hex(L, C, H))
    return out


def golden_ratio(base: str, n: int) -> list[str]:
    _, C, H = hex_to_oklch(base)
    return [
        _hex(lerp(0.45, 0.70, (i % 3) / 2), max(C, 0.10), (H + GOLDEN_ANGLE * i) % 360.0)
        for i in range(n)
    ]


def noise_series(base: str, n: int) -> list[str]:
    """L, C and H each driven by its own value-noise channel."""
    _, _, H = hex_to_oklch(base)
    seed = seed_from_hex(base)
    noise_l, noise_c, noise_h = (value_noise(seed + offset) for offset in range(3))
    return [
        _hex(
            clamp01(lerp(0.35, 0.80, noise_l(t * 3.5))),
            clamp01(lerp(0.06, 0.22, noise_c(t * 4.1 + 1))),
            (H + noise_h(t * 2.7 + 2) * 120 - 60) % 360.0,
        )
        for t in ramp(n)
    ]


def temperature(base: str, n: int) -> list[str]:
    """Warm (20°) to cool (220°) arc, rotated by the base hue, brightest mid-scale."""
    _, _, H = hex_to_oklch(base)
    offset = (H - 120.0 + 360.0) % 360.0
    return [
        _hex(
            0.35 + 0.45 * math.sin(t * math.pi),
            lerp(0.18, 0.12, abs(t - 0.5) * 2),
            (lerp(20.0, 220.0, t) + offset) % 360.0,
        )
        for t in ramp(n)
    ]


def bezier_interpolation(colors: Sequence[str], n: int) -> list[str]:
    """
    Cubic Bezier through up to four OKLab control points.

    Missing points repeat the last color. The two inner points are pulled
    35% toward the midpoint of the endpoints to smooth the curve.
    """
    labs = [hex_to_oklab(c) for c in list(colors)[:4]]
    while len(labs) < 4:
        labs.append(labs[-1].copy())
    points = np.array(labs)
    mid = (points[0] + points[3]) / 2
    points[1] = points[1] + (mid - points[1]) * 0.35
    points[2] = points[2] + (mid - points[2]) * 0.35

    out = []
    for t in ramp(n):
        L, C, H = oklab_to_oklch(_bezier(points, t))
        out.append(_hex(L, C, H))
    return out


def ease_in_out(base: str, n: int) -> list[str]:
    """Cubic-eased lightness ramp 0.28 → 0.88; chroma peaks mid-scale."""
    _, C, H = hex_to_oklch(base)
    return [
        _hex(lerp(0.28, 0.88, _ease_in_out_cubic(t)), C * (1 - 0.4 * abs(t - 0.5) * 2), H)
        for t in ramp(n)
    ]


def blackbody(base: str, n: int) -> list[str]:
    """Heated-metal ramp; the base hue shifts the Kelvin window."""
    _, _, H = hex_to_oklch(base)
    hue_offset = H / 360.0 * 3000.0
    k_min = max(900.0, 1500.0 + hue_offset)
    k_max = min(15000.0, 9000.0 + hue_offset)
    return [rgb_to_hex(kelvin_to_rgb(lerp(k_min, k_max, t))) for t in ramp(n)]


def fibonacci(base: str, n: int) -> list[str]:
    """Hue steps of fib(i) * 47 degrees."""
    _, C, H = hex_to_oklch(base)
    fibs = [1, 1]
    while len(fibs) < n:
        fibs.append(fibs[-1] + fibs[-2])
    return [
        _hex(lerp(0.40, 0.72, (i % 4) / 3), max(C, 0.10), (H + (fibs[i] * 47) % 360) % 360.0)
        for i in range(n)
    ]


def harmonic_series(base: str, n: int) -> list[str]:
    """Lightness follows 1/(i+1); darker swatches get more chroma."""
    _, C, H = hex_to_oklch(base)
    out = []
    for i in range(n):
        if n == 1:
            t = 1.0
        else:
            t = (1.0 / (i + 1) - 1.0 / n) / (1.0 - 1.0 / n)
        out.append(_hex(lerp(0.28, 0.88, t), clamp01(lerp(C * 1.3, C * 0.5, t)), H))
    return out


def sinusoidal(base: str, n: int) -> list[str]:
    """Independent sine oscillators on L, C and H."""
    _, C, H = hex_to_oklch(base)
    tau = 2 * math.pi
    return [
        _hex(
            clamp01(0.55 + 0.25 * math.sin(tau * t)),
            clamp01(C * (0.7 + 0.5 * math.sin(tau * t * 1.5 + math.pi / 3))),
            (H + 60 * math.sin(tau * t * 0.75 + math.pi / 6) + 360.0) % 360.0,
        )
        for t in ramp(n)
    ]


def cubehelix(base: str, n: int) -> list[str]:
    _, _, H = hex_to_oklch(base)
    start = (H / 120.0) % 3
    return [rgb_to_hex(cubehelix_rgb(t, start)) for t in ramp(n)]


def generate_algorithmic(
    palette: Mapping[str, Sequence[str]],
    count: int = 5,
) -> dict[str, list[str]]:
    """
    All eleven series, ``count`` colors each.

    Uses up to four colors of the first non-empty array, filling gaps
    from DEFAULT_COLORS.
    """
    check_count(count)
    colors = colors_or_defaults(palette, DEFAULT_COLORS)
    c0 = colors[0]
    return {
        "random": random_series(c0, count),
        "goldenRatio": golden_ratio(c0, count),
        "noise": noise_series(c0, count),
        "temperature": temperature(c0, count),
        "bezierInterpolation": bezier_interpolation(colors, count),
        "easeInOut": ease_in_out(c0, count),
        "blackbody": blackbody(c0, count),
        "fibonacci": fibonacci(c0, count),
        "harmonicSeries": harmonic_series(c0, count),
        "sinusoidal": sinusoidal(c0, count),
        "cubehelix": cubehelix(c0, count),
    }
