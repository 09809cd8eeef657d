# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Pixel clustering and quantization.

Turns an already-decoded RGBA buffer into palettes of exactly k colors
with ten interchangeable algorithms. No image decoding happens here.
"""

from palettekit.quantize.extract import (
    ALGORITHMS,
    extract_image_palettes,
    extract_palette,
    pixels_from_image,
)
from palettekit.quantize.sampling import pad_labs, pad_rgbs, sample_pixels

__all__ = [
    "ALGORITHMS",
    "extract_image_palettes",
    "extract_palette",
    "pixels_from_image",
    "sample_pixels",
    "pad_labs",
    "pad_rgbs",
]
