# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Image → palette extraction.

Main entry point: extract_image_palettes()

Runs any subset of the ten quantizers over one sampled pixel set and
returns ``{algorithm: [hex, ...]}``, every list exactly k long.

Example:
    >>> from palettekit.quantize import extract_image_palettes
    >>> rgba = bytes([255, 0, 0, 255] * 100)
    >>> extract_image_palettes(rgba, k=3, algorithms=["dominant"])
    {'dominant': ['#ff0000', ...]}
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import oklab_to_oklch, oklch_to_hex_safe
from palettekit.color.hexcodes import normalize_hex, rgb_to_hex
from palettekit.errors import ColorTypeError
from palettekit.quantize.boxes import dominant_colors, median_cut, octree_colors
from palettekit.quantize.distinct import farthest_point
from palettekit.quantize.kmeans import kmeans_palette, muted_palette, vibrant_palette
from palettekit.quantize.neural import neural_quant
from palettekit.quantize.sampling import (
    DEFAULT_MAX_PIXELS,
    PixelBuffer,
    sample_pixels,
    synthetic_pixels,
)
from palettekit.quantize.statistics import color_moments, hue_histogram

logger = logging.getLogger(__name__)

EMPTY_COLOR = "#000000"
DEFAULT_HINT_COLORS = ("#888888",)


def _labs_to_hex(labs: NDArray[np.float64]) -> list[str]:
    lch = oklab_to_oklch(labs).reshape(-1, 3)
    return [oklch_to_hex_safe(L, C, H) for L, C, H in lch]


def _rgbs_to_hex(rgbs: NDArray[np.float64]) -> list[str]:
    return [rgb_to_hex(row) for row in rgbs]


# name -> (input space, quantizer, accepts seed)
_ALGORITHMS: dict[str, tuple[str, Callable[..., NDArray[np.float64]], bool]] = {
    "kmeans": ("lab", kmeans_palette, True),
    "medianCut": ("rgb", median_cut, False),
    "dominant": ("rgb", dominant_colors, False),
    "vibrant": ("lab", vibrant_palette, True),
    "muted": ("lab", muted_palette, True),
    "octree": ("rgb", octree_colors, False),
    "colorMoments": ("lab", color_moments, False),
    "neuralQuant": ("lab", neural_quant, True),
    "histogram": ("lab", hue_histogram, False),
    "deltaE": ("lab", farthest_point, False),
}

ALGORITHMS: tuple[str, ...] = tuple(_ALGORITHMS)


def _resolve_algorithms(algorithms: Optional[Sequence[str]]) -> tuple[str, ...]:
    if algorithms is None:
        return ALGORITHMS
    if isinstance(algorithms, str):
        algorithms = [algorithms]
    unknown = [name for name in algorithms if name not in _ALGORITHMS]
    if unknown:
        raise ValueError(
            f"Unknown algorithm(s) {unknown}; expected any of {list(ALGORITHMS)}"
        )
    return tuple(dict.fromkeys(algorithms))


def extract_image_palettes(
    rgba: Optional[PixelBuffer] = None,
    k: int = 6,
    *,
    algorithms: Optional[Sequence[str]] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    hint_colors: Optional[Sequence[str]] = None,
    max_pixels: int = DEFAULT_MAX_PIXELS,
    seed: Optional[int] = 42,
) -> dict[str, list[str]]:
    """
    Extract one palette per quantization algorithm.

    Args:
        rgba: Decoded RGBA pixels (bytes-like, flat uint8 array, or
            (N, 4) / (H, W, 4) uint8 array). None builds synthetic
            pixels around ``hint_colors``.
        k: Colors per palette (>= 1)
        algorithms: Subset of ALGORITHMS to run, in output order
            (default: all ten)
        width, height: Optional image size, checked against the buffer
        hint_colors: Seed colors for the synthetic buffer
            (default ``["#888888"]``); ignored when ``rgba`` is given
        max_pixels: Sampling budget
        seed: Seed for the randomized quantizers

    Returns:
        Ordered dict ``{algorithm: [hex] * k}``. An empty or fully
        transparent buffer yields ``"#000000"`` k times for every algorithm.

    Raises:
        ValueError: k < 1, unknown algorithm name, or bad buffer shape
        ColorTypeError: Wrong buffer type
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    names = _resolve_algorithms(algorithms)

    if rgba is None:
        hints = [normalize_hex(c) for c in (hint_colors or DEFAULT_HINT_COLORS)]
        rgba = synthetic_pixels(hints)

    rgbs, labs = sample_pixels(rgba, max_pixels=max_pixels, width=width, height=height)

    if len(labs) == 0:
        logger.debug("No opaque pixels; returning black palettes")
        return {name: [EMPTY_COLOR] * k for name in names}

    result: dict[str, list[str]] = {}
    for name in names:
        space, quantize, seeded = _ALGORITHMS[name]
        kwargs: dict[str, Any] = {"seed": seed} if seeded else {}
        if space == "lab":
            result[name] = _labs_to_hex(quantize(labs, k, **kwargs))
        else:
            result[name] = _rgbs_to_hex(quantize(rgbs, k, **kwargs))
    return result


def extract_palette(
    rgba: PixelBuffer,
    k: int = 6,
    algorithm: str = "kmeans",
    **kwargs: Any,
) -> list[str]:
    """
    Extract a single palette with one algorithm.

    Convenience wrapper around extract_image_palettes(); extra keyword
    arguments (width, height, max_pixels, seed) are passed through.
    """
    return extract_image_palettes(rgba, k, algorithms=[algorithm], **kwargs)[algorithm]


def pixels_from_image(image: Any) -> NDArray[np.uint8]:
    """
    Convert an in-memory Pillow image to an (H, W, 4) uint8 RGBA array.

    No file or network I/O happens here; decode the image yourself
    (e.g. ``Image.open``) and pass the result.

    Raises:
        ImportError: Pillow is not installed
        ColorTypeError: ``image`` is not a Pillow image
    """
    try:
        from PIL import Image
    except ImportError as e:
        raise ImportError(
            "Pillow is required for image conversion. "
            "Install with: pip install palettekit[image]"
        ) from e

    if not isinstance(image, Image.Image):
        raise ColorTypeError(
            f"Expected a PIL.Image.Image, got {type(image).__name__}"
        )
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return np.asarray(image, dtype=np.uint8)
