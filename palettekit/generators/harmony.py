# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Classic color-wheel harmonies in HSL.

Fixed harmonies return their natural number of colors regardless of the
requested count. Scalable harmonies (monochromatic ramps) return exactly
``count`` colors.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from palettekit.color.colorspace import hsl_to_rgb, rgb_to_hsl
from palettekit.color.hexcodes import first_color_array, hex_to_rgb, rgb_to_hex
from palettekit.generators.common import check_count, ramp

HSL = tuple[float, float, float]

# Hue offsets in degrees, output order as listed
FIXED_HARMONIES: tuple[tuple[str, tuple[int, ...]], ...] = (
    ("analogous", (-30, 0, 30)),
    ("complementary", (0, 180)),
    ("splitComplementary", (0, 150, 210)),
    ("triadic", (0, 120, 240)),
    ("tetradic", (0, 60, 180, 240)),
    ("square", (0, 90, 180, 270)),
    ("accentedAnalogous", (-30, 0, 30, 180)),
    ("doubleSplitComplementary", (0, 30, 150, 210, 180, 240)),
    ("ambiguous", (15, 85, 145)),
)

SCALABLE_HARMONIES = ("monochromatic", "monochromaticTintShade")

HARMONIES: tuple[str, ...] = tuple(name for name, _ in FIXED_HARMONIES) + SCALABLE_HARMONIES


def _hsl_to_hex(hsl: HSL) -> str:
    return rgb_to_hex(hsl_to_rgb(*hsl))


def _shift(hsl: HSL, degrees: float) -> HSL:
    h, s, l = hsl
    return ((h + degrees + 360.0) % 360.0, s, l)


def _monochromatic(hsl: HSL, n: int) -> list[HSL]:
    h, s, _ = hsl
    return [(h, s, min(max(0.15 + 0.70 * t, 0.05), 0.95)) for t in ramp(n)]


def _monochromatic_tint_shade(hsl: HSL, n: int) -> list[HSL]:
    # Saturation fades two points per step while lightness climbs
    h, s, _ = hsl
    return [
        (h, max(0.0, s - 0.02 * i), min(max(0.10 + 0.80 * t, 0.05), 0.95))
        for i, t in enumerate(ramp(n))
    ]


_SCALABLE = {
    "monochromatic": _monochromatic,
    "monochromaticTintShade": _monochromatic_tint_shade,
}


def _base_hsl(colors: Sequence[str]) -> HSL:
    return rgb_to_hsl(hex_to_rgb(colors[0]))


def _build(name: str, base: HSL, count: int) -> list[str]:
    for fixed_name, offsets in FIXED_HARMONIES:
        if fixed_name == name:
            return [_hsl_to_hex(_shift(base, offset)) for offset in offsets]
    return [_hsl_to_hex(hsl) for hsl in _SCALABLE[name](base, count)]


def generate_harmony_palettes(
    palette: Mapping[str, Sequence[str]],
    count: int = 9,
) -> dict[str, list[str]]:
    """
    Every harmony around the first color of the first non-empty array.

    Args:
        palette: Palette map; key names are ignored
        count: Length of the scalable ramps

    Returns:
        ``{"harmonyPalette": <normalized input array>, "analogous": [...],
        ..., "monochromaticTintShade": [...]}``

    Raises:
        EmptyPaletteError: No array has any color
        InvalidHexError / ColorTypeError: Bad color in the chosen array
    """
    check_count(count)
    colors = first_color_array(palette)
    base = _base_hsl(colors)

    output: dict[str, list[str]] = {"harmonyPalette": colors}
    for name in HARMONIES:
        output[name] = _build(name, base, count)
    return output


def harmony_palette(
    palette: Mapping[str, Sequence[str]],
    harmony: str,
    count: int = 9,
) -> list[str]:
    """
    A single named harmony.

    Raises:
        ValueError: Unknown harmony name
    """
    if harmony not in HARMONIES:
        raise ValueError(f"Unknown harmony {harmony!r}; expected one of {list(HARMONIES)}")
    check_count(count)
    return _build(harmony, _base_hsl(first_color_array(palette)), count)
