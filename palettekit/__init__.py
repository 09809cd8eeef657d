# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Palettekit -- Perceptual color palette engine.

Converts between sRGB, OKLab/OKLCH and CIE Lab, scores WCAG and APCA
contrast, quantizes decoded RGBA pixels into palettes, and derives new
palettes from existing ones.

Quick start::

    from palettekit import generate_harmony_palettes, select_60_30_10

    palette = {"primary": ["#3498db", "#fefefe", "#f72f68"]}
    generate_harmony_palettes(palette)["triadic"]
    select_60_30_10(palette).to_hex_list()
"""

from __future__ import annotations

import logging

__version__ = "1.0.0"

from palettekit.color import (
    apca_contrast,
    best_text_on,
    normalize_hex,
    oklch_to_hex_safe,
    wcag_contrast,
)
from palettekit.errors import (
    ColorTypeError,
    EmptyPaletteError,
    InvalidHexError,
    PaletteError,
)
from palettekit.generators import (
    generate_algorithmic,
    generate_contrast_palettes,
    generate_data_visuals,
    generate_harmony_palettes,
    generate_perceptual_palettes,
    generate_radium_colors,
    harmony_palette,
    select_60_30_10,
)
from palettekit.quantize import extract_image_palettes, extract_palette
from palettekit.runtime import to_css_vars, to_json
from palettekit.schema import ColorRole, OKLCHColor, RoleSelection, SelectOptions

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Generators
    "generate_harmony_palettes",
    "harmony_palette",
    "generate_perceptual_palettes",
    "generate_contrast_palettes",
    "generate_data_visuals",
    "generate_algorithmic",
    "generate_radium_colors",
    "select_60_30_10",
    # Image quantization
    "extract_image_palettes",
    "extract_palette",
    # Color math
    "normalize_hex",
    "oklch_to_hex_safe",
    "wcag_contrast",
    "apca_contrast",
    "best_text_on",
    # Types
    "OKLCHColor",
    "ColorRole",
    "RoleSelection",
    "SelectOptions",
    # Output
    "to_json",
    "to_css_vars",
    # Errors
    "PaletteError",
    "ColorTypeError",
    "InvalidHexError",
    "EmptyPaletteError",
    # Version
    "__version__",
]
