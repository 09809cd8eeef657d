# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Palette generators.

Every generator takes a palette map (key → list of hex colors) and
returns a new palette map. Generators are pure and independent; none
calls another.
"""

from palettekit.generators.accessibility import (
    adjust_to_wcag_ratio,
    force_wcag_ratio_from_lightness,
    generate_contrast_palettes,
)
from palettekit.generators.algorithmic import generate_algorithmic
from palettekit.generators.dataviz import generate_data_visuals
from palettekit.generators.harmony import (
    HARMONIES,
    generate_harmony_palettes,
    harmony_palette,
)
from palettekit.generators.perceptual import (
    TECHNIQUES,
    generate_perceptual_palettes,
    interpolate,
)
from palettekit.generators.radium import generate_radium_colors
from palettekit.generators.roles import select_60_30_10

__all__ = [
    # Harmony
    "HARMONIES",
    "generate_harmony_palettes",
    "harmony_palette",
    # Perceptual interpolation
    "TECHNIQUES",
    "generate_perceptual_palettes",
    "interpolate",
    # Accessibility
    "generate_contrast_palettes",
    "adjust_to_wcag_ratio",
    "force_wcag_ratio_from_lightness",
    # Data visualization / generative
    "generate_data_visuals",
    "generate_algorithmic",
    # Semantic tokens / roles
    "generate_radium_colors",
    "select_60_30_10",
]
