# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Color space conversions and gamut mapping.

Conversion chain: sRGB → Linear RGB → OKLab → OKLCH

References:
- OKLab: https://bottosson.github.io/posts/oklab/
- OKLCH: Cylindrical form of OKLab (Lightness, Chroma, Hue)
- CIE L*a*b* (D65) for the classic Lab/LCH interpolation spaces

Array functions accept shape (..., 3). Scalar helpers (hex_to_oklch,
oklch_to_hex_safe, ...) take and return plain floats.
"""

from __future__ import annotations

import colorsys
import itertools
import logging

import numpy as np
from numpy.typing import NDArray

from palettekit.color.hexcodes import hex_to_rgb, rgb_to_hex

logger = logging.getLogger(__name__)

# Unclipped channels inside [-tol, 1 + tol] count as in gamut
GAMUT_TOLERANCE = 0.001

# Chroma binary search steps; error bound is C / 2**24
GAMUT_SEARCH_STEPS = 24

# 8-bit snapping: cross-hue error weight, and the chroma below which hue is ignored
HUE_SNAP_WEIGHT = 16.0
SNAP_MIN_CHROMA = 0.02


# =============================================================================
# sRGB ↔ Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    linear = np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((np.maximum(srgb, 0.04045) + 0.055) / 1.055, 2.4)
    )
    return linear


def linear_to_srgb_unclipped(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to sRGB without clipping.

    Negative values stay on the linear segment, values above 1 follow the
    power curve past 1.0. Used for gamut membership tests, where a clipped
    value would always look "in gamut".
    """
    linear = np.asarray(linear, dtype=np.float64)
    return np.where(
        linear <= 0.0031308,
        linear * 12.92,
        1.055 * np.power(np.maximum(linear, 0.0031308), 1.0 / 2.4) - 0.055
    )


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to sRGB values [0,1].

    Inverse of srgb_to_linear. Output is clipped per channel.
    """
    return np.clip(linear_to_srgb_unclipped(linear), 0.0, 1.0)


# =============================================================================
# Linear RGB ↔ OKLab
# =============================================================================

# Matrices from https://bottosson.github.io/posts/oklab/

# Linear sRGB to LMS (cone responses)
_M1 = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
], dtype=np.float64)

# LMS to OKLab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

# Inverse matrices
_M1_INV = np.linalg.inv(_M1)
_M2_INV = np.linalg.inv(_M2)


def linear_rgb_to_oklab(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to OKLab.

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    rgb = np.asarray(rgb, dtype=np.float64)

    # RGB to LMS
    lms = np.einsum('...j,ij->...i', rgb, _M1)

    # Cube root (handle negative values for out-of-gamut colors)
    lms_cbrt = np.cbrt(lms)

    # LMS to OKLab
    return np.einsum('...j,ij->...i', lms_cbrt, _M2)


def oklab_to_linear_rgb(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to linear RGB.

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with linear RGB values, NOT clipped
    """
    lab = np.asarray(lab, dtype=np.float64)

    # OKLab to LMS (cubed)
    lms_cbrt = np.einsum('...j,ij->...i', lab, _M2_INV)

    # Cube
    lms = lms_cbrt ** 3

    # LMS to RGB
    return np.einsum('...j,ij->...i', lms, _M1_INV)


# =============================================================================
# OKLab ↔ OKLCH
# =============================================================================


def oklab_to_oklch(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to OKLCH (cylindrical coordinates).

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with OKLCH values (L, C, H)
        H is in degrees [0, 360)
    """
    lab = np.asarray(lab, dtype=np.float64)

    L = lab[..., 0]
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0
    # A tiny negative angle wraps to exactly 360.0 in float math
    H = np.where(H >= 360.0, 0.0, H)

    return np.stack([L, C, H], axis=-1)


def oklch_to_oklab(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLCH to OKLab.

    Args:
        lch: Array of shape (..., 3) with OKLCH values (L, C, H)
        H is in degrees

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    lch = np.asarray(lch, dtype=np.float64)

    L = lch[..., 0]
    C = lch[..., 1]
    H_rad = np.radians(lch[..., 2])

    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# Convenience: full chains
# =============================================================================


def srgb_to_oklab(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert sRGB [0,1] to OKLab (sRGB → Linear RGB → OKLab)."""
    return linear_rgb_to_oklab(srgb_to_linear(srgb))


def oklab_to_srgb(lab: NDArray[np.float64], clip: bool = True) -> NDArray[np.float64]:
    """
    Convert OKLab to sRGB.

    Args:
        lab: Array of shape (..., 3) with OKLab values
        clip: Clip channels to [0, 1]. Pass False for gamut tests.
    """
    srgb = linear_to_srgb_unclipped(oklab_to_linear_rgb(lab))
    if clip:
        return np.clip(srgb, 0.0, 1.0)
    return srgb


def srgb_to_oklch(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB [0,1] to OKLCH.

    Full chain: sRGB → Linear RGB → OKLab → OKLCH

    Returns:
        Array of shape (..., 3) with OKLCH values (L, C, H)
        - L: Lightness [0, 1]
        - C: Chroma [0, ~0.4 for sRGB gamut]
        - H: Hue in degrees [0, 360)
    """
    return oklab_to_oklch(srgb_to_oklab(srgb))


def oklch_to_srgb(lch: NDArray[np.float64], clip: bool = True) -> NDArray[np.float64]:
    """
    Convert OKLCH to sRGB.

    Full chain: OKLCH → OKLab → Linear RGB → sRGB

    With clip=True the channels are clipped independently, which can shift
    hue for out-of-gamut input. Use oklch_to_hex_safe when hue matters.
    """
    return oklab_to_srgb(oklch_to_oklab(lch), clip=clip)


def srgb_uint8_to_oklab(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """
    Convert uint8 sRGB pixels [0,255] to OKLab.

    Args:
        pixels: Array of shape (..., 3) with uint8 sRGB values [0, 255]
    """
    return srgb_to_oklab(np.asarray(pixels).astype(np.float64) / 255.0)


# =============================================================================
# CIE L*a*b* (D65)
# =============================================================================

# Linear sRGB to XYZ (D65)
_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
], dtype=np.float64)

_XYZ_INV = np.linalg.inv(_XYZ)

_D65_WHITE = np.array([0.95047, 1.0, 1.08883], dtype=np.float64)

_LAB_EPSILON = 216.0 / 24389.0
_LAB_KAPPA = 24389.0 / 27.0


def srgb_to_cielab(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB [0,1] to CIE L*a*b* (D65 white).

    Returns:
        Array of shape (..., 3) with L* in [0, 100] and a*, b* unbounded
    """
    xyz = np.einsum('...j,ij->...i', srgb_to_linear(srgb), _XYZ) / _D65_WHITE
    f = np.where(
        xyz > _LAB_EPSILON,
        np.cbrt(xyz),
        (_LAB_KAPPA * xyz + 16.0) / 116.0,
    )
    L = 116.0 * f[..., 1] - 16.0
    a = 500.0 * (f[..., 0] - f[..., 1])
    b = 200.0 * (f[..., 1] - f[..., 2])
    return np.stack([L, a, b], axis=-1)


def cielab_to_srgb(lab: NDArray[np.float64], clip: bool = True) -> NDArray[np.float64]:
    """Convert CIE L*a*b* (D65) to sRGB."""
    lab = np.asarray(lab, dtype=np.float64)
    fy = (lab[..., 0] + 16.0) / 116.0
    fx = fy + lab[..., 1] / 500.0
    fz = fy - lab[..., 2] / 200.0
    f = np.stack([fx, fy, fz], axis=-1)
    xyz = np.where(
        f ** 3 > _LAB_EPSILON,
        f ** 3,
        (116.0 * f - 16.0) / _LAB_KAPPA,
    ) * _D65_WHITE
    srgb = linear_to_srgb_unclipped(np.einsum('...j,ij->...i', xyz, _XYZ_INV))
    if clip:
        return np.clip(srgb, 0.0, 1.0)
    return srgb


# =============================================================================
# HSL / HSV (scalar, hue in degrees)
# =============================================================================


def rgb_to_hsl(rgb: NDArray[np.float64]) -> tuple[float, float, float]:
    """sRGB [0,1] → (H degrees, S [0,1], L [0,1])."""
    r, g, b = (float(c) for c in np.clip(rgb, 0.0, 1.0))
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return h * 360.0, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> NDArray[np.float64]:
    """(H degrees, S [0,1], L [0,1]) → sRGB [0,1]."""
    s = min(max(s, 0.0), 1.0)
    l = min(max(l, 0.0), 1.0)
    return np.array(colorsys.hls_to_rgb((h % 360.0) / 360.0, l, s), dtype=np.float64)


def rgb_to_hsv(rgb: NDArray[np.float64]) -> tuple[float, float, float]:
    """sRGB [0,1] → (H degrees, S [0,1], V [0,1])."""
    r, g, b = (float(c) for c in np.clip(rgb, 0.0, 1.0))
    h, s, v = colorsys.rgb_to_hsv(r, g, b)
    return h * 360.0, s, v


def hsv_to_rgb(h: float, s: float, v: float) -> NDArray[np.float64]:
    """(H degrees, S [0,1], V [0,1]) → sRGB [0,1]."""
    return np.array(colorsys.hsv_to_rgb((h % 360.0) / 360.0, s, v), dtype=np.float64)


# =============================================================================
# Hex ↔ OKLab / OKLCH
# =============================================================================


def hex_to_oklab(hex_color: str) -> NDArray[np.float64]:
    """Convert a hex color to an OKLab (3,) vector."""
    return srgb_to_oklab(hex_to_rgb(hex_color))


def hex_to_oklch(hex_color: str) -> tuple[float, float, float]:
    """
    Convert hex color string to OKLCH values.

    Args:
        hex_color: Hex string like "#3941c8", "3941C8" or "#fff"

    Returns:
        Tuple of (L, C, H). H is always a number in [0, 360); for
        achromatic colors it is numerically meaningless but stable.
    """
    L, C, H = srgb_to_oklch(hex_to_rgb(hex_color))
    return float(L), float(C), float(H)


def oklab_to_hex(lab: NDArray[np.float64]) -> str:
    """Convert an OKLab (3,) vector to hex, clipping channels."""
    return rgb_to_hex(oklab_to_srgb(lab))


def oklch_to_hex(L: float, C: float, H: float) -> str:
    """
    Convert OKLCH values to hex with plain per-channel clipping.

    Hue may drift for out-of-gamut input; prefer oklch_to_hex_safe.
    """
    return rgb_to_hex(oklch_to_srgb(np.array([L, C, H], dtype=np.float64)))


def is_in_gamut(srgb: NDArray[np.float64], tolerance: float = GAMUT_TOLERANCE) -> bool:
    """True if every unclipped sRGB channel is within [-tol, 1 + tol]."""
    srgb = np.asarray(srgb, dtype=np.float64)
    return bool(np.all((srgb >= -tolerance) & (srgb <= 1.0 + tolerance)))


def max_in_gamut_chroma(L: float, C: float, H: float) -> float:
    """
    Largest chroma in [0, C] that keeps (L, chroma, H) inside sRGB.

    Binary search on the UNCLIPPED conversion; L and H are fixed.
    """
    if is_in_gamut(oklch_to_srgb(np.array([L, C, H]), clip=False)):
        return float(C)

    lo, hi = 0.0, float(C)
    for _ in range(GAMUT_SEARCH_STEPS):
        mid = (lo + hi) / 2
        if is_in_gamut(oklch_to_srgb(np.array([L, mid, H]), clip=False)):
            lo = mid
        else:
            hi = mid
    return lo


def snap_to_8bit(L: float, C: float, H: float) -> str:
    """
    Encode an in-gamut OKLCH color as the 8-bit neighbour that best keeps its hue.

    Plain rounding moves each channel independently, which near black can
    swing the hue by a few degrees. The eight floor/ceil combinations are
    scored in OKLab with the cross-hue error weighted by HUE_SNAP_WEIGHT.
    Near-neutral colors are rounded as-is.
    """
    lch = np.array([L, C, H], dtype=np.float64)
    srgb = oklch_to_srgb(lch)
    if C < SNAP_MIN_CHROMA:
        return rgb_to_hex(srgb)

    lo = np.floor(srgb * 255.0)
    corners = np.clip(np.array(list(itertools.product(*zip(lo, lo + 1.0)))), 0.0, 255.0) / 255.0
    delta = srgb_to_oklab(corners) - oklch_to_oklab(lch)

    h = np.radians(H)
    along = delta[:, 1] * np.cos(h) + delta[:, 2] * np.sin(h)
    across = delta[:, 2] * np.cos(h) - delta[:, 1] * np.sin(h)
    score = delta[:, 0] ** 2 + along ** 2 + HUE_SNAP_WEIGHT * across ** 2
    return rgb_to_hex(corners[int(np.argmin(score))])


def oklch_to_hex_safe(L: float, C: float, H: float) -> str:
    """
    Gamut-safe OKLCH → hex.

    Naive clipping of an out-of-gamut color distorts hue (a dark orange
    with a negative blue channel turns red). Instead, chroma is reduced by
    binary search until the color fits, so lightness and hue survive and
    the result is the most vivid in-gamut color at that L/H. The 8-bit
    encoding goes through ``snap_to_8bit``.

    Args:
        L: Lightness [0, 1] (values outside are clipped)
        C: Chroma >= 0
        H: Hue in degrees

    Returns:
        Lowercase hex string like "#3941c8"
    """
    L = min(max(float(L), 0.0), 1.0)
    C = max(float(C), 0.0)
    H = float(H) % 360.0

    safe_c = max_in_gamut_chroma(L, C, H)
    if safe_c < C:
        logger.debug("Gamut-mapped L=%.3f H=%.1f: chroma %.4f -> %.4f", L, H, C, safe_c)
    return snap_to_8bit(L, safe_c, H)


# =============================================================================
# ΔE distance and hue helpers
# =============================================================================


def delta_e_oklab(lab1: NDArray[np.float64], lab2: NDArray[np.float64]) -> float:
    """
    Perceptual color difference: Euclidean distance in OKLab.

    Reference thresholds (OKLab Euclidean, 0-1 scale):
    - ΔE ≈ 0.02: barely perceptible (expert eye)
    - ΔE ≈ 0.04: noticeable difference
    - ΔE ≈ 0.08+: clearly different colors
    """
    delta = np.asarray(lab1, dtype=np.float64) - np.asarray(lab2, dtype=np.float64)
    return float(np.sqrt(np.sum(delta ** 2)))


def delta_e_oklab_batch(
    labs: NDArray[np.float64],
    reference: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Vectorized ΔE from each row of ``labs`` (N, 3) to ``reference`` (3,) or (N, 3).
    """
    delta = np.asarray(labs, dtype=np.float64) - np.asarray(reference, dtype=np.float64)
    return np.sqrt(np.sum(delta ** 2, axis=-1))


def hue_distance(h1: float, h2: float) -> float:
    """Shortest angular distance between two hues, in [0, 180]."""
    d = abs(h1 - h2) % 360.0
    return 360.0 - d if d > 180.0 else d


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_hue(h1: float, h2: float, t: float) -> float:
    """Interpolate hue along the shorter arc; result in [0, 360)."""
    d = h2 - h1
    if d > 180.0:
        d -= 360.0
    elif d < -180.0:
        d += 360.0
    return (h1 + d * t) % 360.0
