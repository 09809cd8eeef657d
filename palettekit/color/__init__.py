# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Color math shared by every generator: hex codec, color spaces, contrast.
"""

from palettekit.color.colorspace import (
    hex_to_oklab,
    hex_to_oklch,
    oklch_to_hex,
    oklch_to_hex_safe,
)
from palettekit.color.contrast import (
    apca_contrast,
    best_text_on,
    wcag_contrast,
    wcag_ratio,
)
from palettekit.color.hexcodes import normalize_hex

__all__ = [
    "normalize_hex",
    "hex_to_oklab",
    "hex_to_oklch",
    "oklch_to_hex",
    "oklch_to_hex_safe",
    "wcag_ratio",
    "wcag_contrast",
    "apca_contrast",
    "best_text_on",
]
