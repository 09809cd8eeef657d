# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Radium: structure-preserving semantic recoloring.

Takes any palette map and returns the same keys with the same array
lengths, filled with new colors. Each key derives its base color from its
own first valid hex, never from a palette-wide base, so unrelated keys
keep their own hues.

Key names are normalized (letters only, lowercase) and drive the result:

- single-swatch keys go through SEMANTIC_RULES, an ordered table where the
  first match wins, so ``neutralLight`` is tested before ``neutral``
- multi-swatch keys become ramps, named harmony hue sets, or evenly
  spaced hues

Every color is encoded with oklch_to_hex_safe so a fixed target lightness
never drags the hue.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence

from palettekit.color.colorspace import hex_to_oklch, lerp, oklch_to_hex_safe
from palettekit.color.hexcodes import first_valid_hex, validate_palette_map
from palettekit.generators.common import clamp01, ramp

logger = logging.getLogger(__name__)

LCH = tuple[float, float, float]

FALLBACK_BASE = "#ff0000"

_NON_LETTERS = re.compile(r"[^a-z]")

HARMONY_OFFSETS: dict[str, tuple[int, ...]] = {
    "harmonypalette": (0, 150, 210),
    "analogous": (-30, 0, 30),
    "complementary": (0, 180),
    "splitcomplementary": (0, 150, 210),
    "triadic": (0, 120, 240),
    "tetradic": (0, 60, 180, 240),
    "square": (0, 90, 180, 270),
    "accentedanalogous": (-30, 0, 30, 180),
    "doublesplitcomplementary": (0, 30, 150, 180, 210, 330),
    "ambiguous": (15, 135, 255),
}

# Each repeat of an offset cycle is this much darker
_CYCLE_DARKEN = 0.08


def normalize_key(key: str) -> str:
    """Lowercase and strip everything but ASCII letters."""
    return _NON_LETTERS.sub("", str(key).lower())


# =============================================================================
# Single-swatch rule table
# =============================================================================

Rule = tuple[str, Callable[[str], bool], Callable[[LCH], LCH]]

SEMANTIC_RULES: tuple[Rule, ...] = (
    (
        "neutral-light",
        lambda k: "neutrallight" in k or ("neutral" in k and "light" in k),
        lambda c: (0.93, min(c[1] * 0.08, 0.015), c[2]),
    ),
    (
        "neutral-dark",
        lambda k: "neutraldark" in k or ("neutral" in k and "dark" in k),
        lambda c: (0.10, min(c[1] * 0.08, 0.015), c[2]),
    ),
    (
        "neutral",
        lambda k: "neutral" in k,
        lambda c: (0.55, min(c[1] * 0.06, 0.012), c[2]),
    ),
    (
        "shade",
        lambda k: k.endswith("shade") or "colorshade" in k,
        lambda c: (0.30, c[1], c[2]),
    ),
    (
        "dark",
        lambda k: k.endswith("dark"),
        lambda c: (0.22, c[1], c[2]),
    ),
    (
        "light",
        lambda k: k.endswith("light") or k.endswith("tint"),
        lambda c: (0.88, c[1] * 0.5, c[2]),
    ),
    (
        "accent",
        lambda k: k.startswith("accent"),
        lambda c: (0.62, max(c[1], 0.22), c[2]),
    ),
    (
        "main",
        lambda k: k.startswith(("main", "primary", "brand")),
        lambda c: (0.52, max(c[1], 0.22), c[2]),
    ),
    (
        "background",
        lambda k: k.startswith(("background", "bg")),
        lambda c: (0.97, min(c[1] * 0.08, 0.012), c[2]),
    ),
    (
        "surface",
        lambda k: k.startswith("surface"),
        lambda c: (0.91, min(c[1] * 0.18, 0.025), c[2]),
    ),
    (
        "foreground",
        lambda k: k.startswith(("foreground", "text", "on")),
        lambda c: (0.18, min(c[1] * 0.12, 0.02), c[2]),
    ),
)


def _fallback(lch: LCH) -> LCH:
    return (0.55, max(lch[1], 0.18), lch[2])


def resolve_semantic(key: str, lch: LCH) -> LCH:
    """Target OKLCH for a single-swatch key. Hue is always kept."""
    normalized = normalize_key(key)
    for _, matches, transform in SEMANTIC_RULES:
        if matches(normalized):
            return transform(lch)
    return _fallback(lch)


# =============================================================================
# Multi-swatch builders
# =============================================================================


def _hex(lch: LCH) -> str:
    return oklch_to_hex_safe(*lch)


def _from_offsets(lch: LCH, offsets: Sequence[int], n: int) -> list[str]:
    L, C, H = lch
    return [
        _hex((
            clamp01(L - (i // len(offsets)) * _CYCLE_DARKEN),
            C,
            (H + offsets[i % len(offsets)] + 360.0) % 360.0,
        ))
        for i in range(n)
    ]


def _evenly_spaced(lch: LCH, n: int) -> list[str]:
    L, C, H = lch
    return [_hex((L, C, (H + 360.0 / n * i) % 360.0)) for i in range(n)]


def _monochromatic(lch: LCH, n: int) -> list[str]:
    """Dark → light; chroma eases off away from L ~ 0.45."""
    _, C, H = lch
    return [
        _hex((lerp(0.12, 0.94, t), C * clamp01(1 - abs(t - 0.45) ** 2.5), H))
        for t in ramp(n)
    ]


def _tint_shade(lch: LCH, n: int) -> list[str]:
    """Power-curve lightness ramp with the chroma peak in the mid-dark zone."""
    _, C, H = lch
    out = []
    for t in ramp(n):
        if t < 0.5:
            curved = 0.5 * (t * 2) ** 1.6
        else:
            curved = 1 - 0.5 * ((1 - t) * 2) ** 1.4
        chroma = C * clamp01(1 - ((t - 0.4) / 0.7) ** 2 * 0.6)
        out.append(_hex((lerp(0.10, 0.96, curved), chroma, H)))
    return out


def radium_swatches(key: str, lch: LCH, n: int) -> list[str]:
    """
    ``n`` colors for one palette key.

    Dispatch for n > 1, first match wins: "tintshade" → tint-shade ramp,
    "monochromatic" → mono ramp, "tint"/"shade" → tint-shade ramp, a named
    harmony → its hue offsets, anything else → evenly spaced hues.
    """
    if n <= 0:
        return []
    if n == 1:
        return [_hex(resolve_semantic(key, lch))]

    k = normalize_key(key)
    if "tintshade" in k:
        return _tint_shade(lch, n)
    if "monochromatic" in k:
        return _monochromatic(lch, n)
    if "tint" in k or "shade" in k:
        return _tint_shade(lch, n)
    if k in HARMONY_OFFSETS:
        return _from_offsets(lch, HARMONY_OFFSETS[k], n)
    return _evenly_spaced(lch, n)


def generate_radium_colors(palette: Mapping[str, Sequence[str]]) -> dict[str, list[str]]:
    """
    Recolor ``palette`` keeping its exact shape.

    Invalid color strings are skipped when picking a key's base color;
    a key without any valid color uses red as its base.

    Returns:
        Dict with the same keys, in the same order, and the same array
        lengths as ``palette``

    Raises:
        ColorTypeError: ``palette`` is not a mapping of lists
    """
    palette = validate_palette_map(palette)
    output: dict[str, list[str]] = {}
    for key, colors in palette.items():
        base = first_valid_hex(colors)
        if base is None:
            if len(colors) > 0:
                logger.debug("No valid color under %r; using %s", key, FALLBACK_BASE)
            base = FALLBACK_BASE
        output[key] = radium_swatches(key, hex_to_oklch(base), len(colors))
    return output
