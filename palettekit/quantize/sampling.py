# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Pixel buffer handling shared by every quantizer.

Input is an already-decoded RGBA buffer (4 bytes per pixel, row-major,
straight alpha). This module validates it, stride-samples it down to a
bounded number of opaque pixels, and pads short results to exactly k.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import oklab_to_srgb, srgb_to_oklab, srgb_uint8_to_oklab
from palettekit.color.hexcodes import hex_to_rgb, seed_from_hex
from palettekit.errors import ColorTypeError

logger = logging.getLogger(__name__)

PixelBuffer = Union[bytes, bytearray, memoryview, NDArray[np.uint8]]

# Pixels with alpha below this are treated as "not a color"
ALPHA_CUTOFF = 128

DEFAULT_MAX_PIXELS = 6000

# Lightness used to pad when no real color exists at all
_EMPTY_PAD_LAB = np.array([0.5, 0.0, 0.0], dtype=np.float64)


def as_rgba_pixels(
    rgba: PixelBuffer,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> NDArray[np.uint8]:
    """
    Validate a pixel buffer and view it as an (N, 4) uint8 array.

    Accepts raw bytes-like objects, flat uint8 arrays, (N, 4) / (H, W, 4)
    arrays, and (N, 3) / (H, W, 3) arrays which are treated as opaque.

    Raises:
        ColorTypeError: Wrong container type or dtype
        ValueError: Buffer length or shape does not describe RGBA pixels,
            or disagrees with width x height
    """
    if isinstance(rgba, (bytes, bytearray, memoryview)):
        pixels = np.frombuffer(rgba, dtype=np.uint8)
    elif isinstance(rgba, np.ndarray):
        if rgba.dtype != np.uint8:
            raise ColorTypeError(
                f"Expected uint8 pixel array, got dtype {rgba.dtype}"
            )
        pixels = rgba
    else:
        raise ColorTypeError(
            f"Expected RGBA bytes or numpy uint8 array, got {type(rgba).__name__}"
        )

    if pixels.ndim == 1:
        if pixels.size % 4 != 0:
            raise ValueError(
                f"RGBA buffer length {pixels.size} is not a multiple of 4"
            )
        pixels = pixels.reshape(-1, 4)
    elif pixels.ndim in (2, 3) and pixels.shape[-1] in (3, 4):
        pixels = pixels.reshape(-1, pixels.shape[-1])
    else:
        raise ValueError(
            f"Expected flat, (N, 4) or (H, W, 4) array, got shape {pixels.shape}"
        )

    if pixels.shape[1] == 3:
        alpha = np.full((len(pixels), 1), 255, dtype=np.uint8)
        pixels = np.concatenate([pixels, alpha], axis=1)

    if width is not None and height is not None:
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size {width}x{height}")
        if width * height != len(pixels):
            raise ValueError(
                f"Image size {width}x{height} does not match buffer "
                f"of {len(pixels)} pixels"
            )

    return pixels


def sample_pixels(
    rgba: PixelBuffer,
    max_pixels: int = DEFAULT_MAX_PIXELS,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Stride-sample a pixel buffer and drop transparent pixels.

    Every ``max(1, n // max_pixels)``-th pixel is kept, then pixels with
    alpha < 128 are discarded.

    Returns:
        (rgb, lab): float arrays of shape (M, 3), sRGB [0, 1] and OKLab.
        M may be 0.
    """
    if max_pixels < 1:
        raise ValueError(f"max_pixels must be >= 1, got {max_pixels}")

    pixels = as_rgba_pixels(rgba, width=width, height=height)
    step = max(1, len(pixels) // max_pixels)
    sampled = pixels[::step]
    opaque = sampled[sampled[:, 3] >= ALPHA_CUTOFF]

    rgb = opaque[:, :3].astype(np.float64) / 255.0
    lab = srgb_uint8_to_oklab(opaque[:, :3]).reshape(-1, 3)
    return rgb, lab


def synthetic_pixels(
    colors: Sequence[str],
    per_color: int = 800,
    noise: int = 15,
) -> NDArray[np.uint8]:
    """
    Build an opaque (N, 4) pixel buffer around a few hint colors.

    Each color expands to ``per_color`` pixels with uniform +/- ``noise``
    per-channel jitter. The jitter is seeded from the colors, so the same
    hints always produce the same buffer.
    """
    rng = np.random.default_rng(seed_from_hex(*colors))
    blocks = []
    for hex_color in colors:
        base = hex_to_rgb(hex_color) * 255.0
        jitter = rng.uniform(-noise, noise, size=(per_color, 3))
        rgb = np.clip(np.round(base + jitter), 0, 255).astype(np.uint8)
        alpha = np.full((per_color, 1), 255, dtype=np.uint8)
        blocks.append(np.concatenate([rgb, alpha], axis=1))
    if not blocks:
        return np.zeros((0, 4), dtype=np.uint8)
    return np.concatenate(blocks, axis=0)


# =============================================================================
# Padding
# =============================================================================


def pad_labs(labs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Return exactly k OKLab rows.

    Longer input is truncated. Shorter input is extended with lightness
    variants of the last real color: row i gets L = clip(0.2 + 0.6 * i / k),
    a and b unchanged. With no input at all the base is mid grey.
    """
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    if len(labs) >= k:
        return labs[:k].copy()

    logger.debug("Padding %d colors up to %d", len(labs), k)
    base = labs[-1] if len(labs) else _EMPTY_PAD_LAB
    padded = [row for row in labs]
    for i in range(len(labs), k):
        variant = base.copy()
        variant[0] = min(max(0.2 + 0.6 * i / k, 0.0), 1.0)
        padded.append(variant)
    return np.array(padded, dtype=np.float64).reshape(-1, 3)


def pad_rgbs(rgbs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Return exactly k sRGB rows.

    Same policy as pad_labs; the variants are built in OKLab from the
    last real color, so a padded red stays red rather than turning grey.
    """
    rgbs = np.asarray(rgbs, dtype=np.float64).reshape(-1, 3)
    if len(rgbs) >= k:
        return rgbs[:k].copy()

    padded = pad_labs(srgb_to_oklab(rgbs).reshape(-1, 3), k)
    extra = oklab_to_srgb(padded[len(rgbs):]).reshape(-1, 3)
    return np.concatenate([rgbs, extra], axis=0)
