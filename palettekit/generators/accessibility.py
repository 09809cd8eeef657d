# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Contrast and accessibility palettes.

Seven outputs built in HSL around the first input color:

- contrastScale: monotone lightness ramp
- accessible: alternating foreground/background swatches, each >= 4.5:1
  against its pair
- wcag: AA/AAA tiers against white and black, drifting per cycle
- apca: APCA |Lc| 30 → 90 against white
- colorBlindSafe: hues pulled toward a safe table, checked under
  protanopia and deuteranopia
- colorTokenized: fixed design-token role table
- highContrast: 7:1 ramp where every slot searches from its own start

Two WCAG search strategies exist on purpose. adjust_to_wcag_ratio is the
fast default and returns a passing input unchanged.
force_wcag_ratio_from_lightness never early-returns and searches in one
direction from a caller-chosen lightness, so neighbouring slots cannot
collapse onto the same passing value.

Every candidate is scored after snapping to 8-bit channels, so the
guarantee still holds once the color is written out as hex.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Literal, Optional

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import hsl_to_rgb, lerp, lerp_hue, rgb_to_hsl
from palettekit.color.contrast import (
    apca_contrast,
    is_distinguishable_under_cvd,
    simulate_protanopia,
    wcag_ratio,
)
from palettekit.color.hexcodes import first_color_array, hex_to_rgb, quantize_rgb, rgb_to_hex
from palettekit.generators.common import check_count, clamp01, ramp

SEARCH_STEPS = 48

WCAG_AA = 4.5
WCAG_AAA = 7.0

_WHITE = np.ones(3)
_BLACK = np.zeros(3)

# (reference, target ratio, starting lightness); cycled through
_WCAG_TIERS = (
    (_WHITE, WCAG_AA, 0.20),
    (_WHITE, WCAG_AAA, 0.10),
    (_BLACK, WCAG_AA, 0.80),
    (_BLACK, WCAG_AAA, 0.90),
)

SAFE_HUES = (202, 27, 56, 180, 291, 343, 120, 240, 30)

# Lightness offsets tried, in order, when a swatch blurs into its neighbour
CVD_NUDGES = (0.15, 0.30, 0.45, -0.15, -0.30, -0.45)

# (role, lightness, saturation or None for the base's, fixed hue or None)
TOKEN_ROLES: tuple[tuple[str, float, Optional[float], Optional[float]], ...] = (
    ("background", 0.97, 0.08, None),
    ("surface", 0.93, 0.12, None),
    ("border", 0.80, 0.18, None),
    ("muted", 0.65, 0.25, None),
    ("default", 0.45, None, None),
    ("emphasis", 0.35, None, None),
    ("strong", 0.22, None, None),
    ("onColor", 0.98, 0.05, None),
    ("error", 0.40, 0.85, 0.0),
    ("success", 0.35, 0.60, 142.0),
)

OUTPUTS = (
    "contrastScale",
    "accessible",
    "wcag",
    "apca",
    "colorBlindSafe",
    "colorTokenized",
    "highContrast",
)


# =============================================================================
# WCAG search strategies
# =============================================================================


def _hsl_candidate(h: float, s: float, l: float) -> NDArray[np.float64]:
    return quantize_rgb(hsl_to_rgb(h, s, l))


def _extreme_fallback(reference: NDArray[np.float64]) -> NDArray[np.float64]:
    """Black or white, whichever contrasts more with ``reference``."""
    if wcag_ratio(_BLACK, reference) >= wcag_ratio(_WHITE, reference):
        return _BLACK.copy()
    return _WHITE.copy()


def adjust_to_wcag_ratio(
    rgb: NDArray[np.float64],
    reference: NDArray[np.float64],
    target: float,
    max_iter: int = SEARCH_STEPS,
) -> NDArray[np.float64]:
    """
    Move ``rgb`` along HSL lightness until it reaches ``target`` against ``reference``.

    Returns the (8-bit snapped) input unchanged if it already passes.
    Otherwise searches darker over [0, l], then lighter over [l, 1],
    keeping the passing candidate closest to the original lightness.
    Falls back to black or white.
    """
    color = quantize_rgb(rgb)
    if wcag_ratio(color, reference) >= target:
        return color

    h, s, l = rgb_to_hsl(color)

    best = None
    lo, hi = 0.0, l
    for _ in range(max_iter):
        mid = (lo + hi) / 2
        candidate = _hsl_candidate(h, s, mid)
        if wcag_ratio(candidate, reference) >= target:
            best = candidate
            hi = mid
        else:
            lo = mid
    if best is not None:
        return best

    lo, hi = l, 1.0
    for _ in range(max_iter):
        mid = (lo + hi) / 2
        candidate = _hsl_candidate(h, s, mid)
        if wcag_ratio(candidate, reference) >= target:
            best = candidate
            lo = mid
        else:
            hi = mid
    if best is not None:
        return best

    return _extreme_fallback(reference)


def force_wcag_ratio_from_lightness(
    hue: float,
    saturation: float,
    start_l: float,
    reference: NDArray[np.float64],
    target: float,
    direction: Literal["dark", "light"],
    max_iter: int = SEARCH_STEPS,
) -> NDArray[np.float64]:
    """
    Passing color closest to ``start_l``, searching one way only.

    "dark" searches [0, start_l], "light" searches [start_l, 1]. There is
    no early return: even a passing ``start_l`` goes through the search.
    Falls back to black or white.
    """
    if direction not in ("dark", "light"):
        raise ValueError(f"direction must be 'dark' or 'light', got {direction!r}")

    dark = direction == "dark"
    lo, hi = (0.0, start_l) if dark else (start_l, 1.0)
    best = None
    for _ in range(max_iter):
        mid = (lo + hi) / 2
        candidate = _hsl_candidate(hue, saturation, mid)
        passed = wcag_ratio(candidate, reference) >= target
        if passed:
            best = candidate
        # Converge toward start_l while passing
        if passed == dark:
            lo = mid
        else:
            hi = mid

    if best is not None:
        return best
    return _extreme_fallback(reference)


# =============================================================================
# Outputs
# =============================================================================


def _contrast_scale(h, s, l, n):
    return [rgb_to_hex(hsl_to_rgb(h, s, t ** 0.8)) for t in ramp(n)]


def _accessible(h, s, l, n):
    half = math.ceil(n / 2)
    out = []
    for i in range(n):
        if i % 2 == 0:
            light = lerp(0.05, 0.35, i / 2 / half)
            pair = hsl_to_rgb(h, s * 0.1, 0.96)
        else:
            light = lerp(0.88, 0.98, (i // 2) / half)
            pair = hsl_to_rgb(h, s * 0.8, 0.15)
        candidate = hsl_to_rgb(h, s * 0.6, light)
        out.append(rgb_to_hex(adjust_to_wcag_ratio(candidate, quantize_rgb(pair), WCAG_AA)))
    return out


def _wcag(h, s, l, n):
    out = []
    for i in range(n):
        reference, target, start_l = _WCAG_TIERS[i % len(_WCAG_TIERS)]
        cycle = i // len(_WCAG_TIERS)
        s_factor = clamp01(1.0 - 0.3 * cycle)
        shift = cycle * (0.08 if start_l < 0.5 else -0.08)
        candidate = hsl_to_rgb(h, s * s_factor, clamp01(start_l + shift))
        out.append(rgb_to_hex(adjust_to_wcag_ratio(candidate, reference, target)))
    return out


def _apca(h, s, l, n):
    out = []
    for t in ramp(n):
        target_lc = lerp(30.0, 90.0, t)
        lo, hi = 0.0, 1.0
        for _ in range(SEARCH_STEPS):
            mid = (lo + hi) / 2
            lc = abs(apca_contrast(hsl_to_rgb(h, s, mid), _WHITE))
            if lc > target_lc:
                lo = mid
            else:
                hi = mid
        out.append(rgb_to_hex(hsl_to_rgb(h, s, (lo + hi) / 2)))
    return out


def _color_blind_safe(h, s, l, n):
    out: list[str] = []
    for i, t in enumerate(ramp(n)):
        hue = lerp_hue(h, SAFE_HUES[i % len(SAFE_HUES)], 0.65)
        light = lerp(0.25, 0.75, t)
        swatch = quantize_rgb(hsl_to_rgb(hue, min(max(s, 0.4), 0.85), light))
        if out:
            swatch = _separate_under_cvd(swatch, hue, s, light, hex_to_rgb(out[-1]))
        out.append(rgb_to_hex(swatch))
    return out


def _separate_under_cvd(swatch, hue, s, light, prev):
    """Nudge lightness until ``swatch`` is told apart from ``prev``; black or white last."""
    if is_distinguishable_under_cvd(swatch, prev):
        return swatch
    for offset in CVD_NUDGES:
        candidate = quantize_rgb(hsl_to_rgb(hue, s, clamp01(light + offset)))
        if is_distinguishable_under_cvd(candidate, prev):
            return candidate
    # Simulation maps black and white to themselves; one is at least 0.87 away
    if np.linalg.norm(simulate_protanopia(prev)) > np.linalg.norm(1.0 - simulate_protanopia(prev)):
        return _BLACK
    return _WHITE


def _color_tokenized(h, s, l, n):
    out = []
    for i in range(n):
        _, role_l, role_s, role_h = TOKEN_ROLES[i % len(TOKEN_ROLES)]
        out.append(rgb_to_hex(hsl_to_rgb(
            h if role_h is None else role_h,
            s if role_s is None else role_s,
            role_l,
        )))
    return out


def _high_contrast(h, s, l, n):
    dark_slots = math.ceil(n / 2)
    light_slots = n - dark_slots
    out = []
    for i in range(n):
        if i < dark_slots:
            # Fading to grey makes 7:1 on white reachable for every hue
            t = i / max(dark_slots - 1, 1)
            start_l = lerp(0.05, 0.28, t)
            sat = clamp01(lerp(s, 0.0, t))
            rgb = force_wcag_ratio_from_lightness(h, sat, start_l, _WHITE, WCAG_AAA, "dark")
        else:
            t = (i - dark_slots) / max(light_slots - 1, 1)
            start_l = lerp(0.65, 0.98, t)
            sat = min(max(s * 0.7, 0.2), 0.8)
            rgb = force_wcag_ratio_from_lightness(h, sat, start_l, _BLACK, WCAG_AAA, "light")
        out.append(rgb_to_hex(rgb))
    return out


_BUILDERS = {
    "contrastScale": _contrast_scale,
    "accessible": _accessible,
    "wcag": _wcag,
    "apca": _apca,
    "colorBlindSafe": _color_blind_safe,
    "colorTokenized": _color_tokenized,
    "highContrast": _high_contrast,
}


def generate_contrast_palettes(
    palette: Mapping[str, Sequence[str]],
    count: int = 9,
) -> dict[str, list[str]]:
    """
    All seven accessibility palettes, ``count`` colors each.

    Raises:
        EmptyPaletteError: No array has any color
    """
    check_count(count)
    h, s, l = rgb_to_hsl(hex_to_rgb(first_color_array(palette)[0]))
    return {name: _BUILDERS[name](h, s, l, count) for name in OUTPUTS}
