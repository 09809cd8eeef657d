# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Hex color parsing and encoding.

Hex strings are the only external serialization. Everything leaving this
package is a lowercase ``#rrggbb`` string; on input the short ``#rgb`` form,
a missing ``#``, surrounding whitespace and upper case are accepted.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Mapping, Sequence
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from palettekit.errors import ColorTypeError, EmptyPaletteError, InvalidHexError

HEX_RE = re.compile(r"^#[0-9a-f]{6}$")

_SHORT_RE = re.compile(r"^[0-9a-f]{3}$")
_LONG_RE = re.compile(r"^[0-9a-f]{6}$")


def normalize_hex(raw: object) -> str:
    """
    Normalize any CSS hex string to lowercase ``#rrggbb``.

    Args:
        raw: ``"#rgb"``, ``"#rrggbb"``, ``"rgb"`` or ``"rrggbb"`` (any case)

    Returns:
        Normalized hex string

    Raises:
        ColorTypeError: If ``raw`` is not a string
        InvalidHexError: If ``raw`` is a string but not a hex color
    """
    if not isinstance(raw, str):
        raise ColorTypeError(
            f"Color must be a string, got {type(raw).__name__}: {raw!r}"
        )

    h = raw.strip().lower()
    if h.startswith("#"):
        h = h[1:]
    if _SHORT_RE.fullmatch(h):
        return "#" + "".join(ch * 2 for ch in h)
    if _LONG_RE.fullmatch(h):
        return "#" + h

    raise InvalidHexError(
        f'Invalid hex color: "{raw}" -- expected "#rgb" or "#rrggbb"'
    )


def is_hex(raw: object) -> bool:
    """True if ``raw`` can be normalized to a hex color."""
    try:
        normalize_hex(raw)
    except (ColorTypeError, InvalidHexError):
        return False
    return True


def first_valid_hex(colors: Sequence[object]) -> Optional[str]:
    """Return the first entry of ``colors`` that is a valid hex color, normalized."""
    for color in colors:
        if is_hex(color):
            return normalize_hex(color)
    return None


def hex_to_rgb(hex_color: str) -> NDArray[np.float64]:
    """
    Convert a hex color to sRGB floats.

    Returns:
        Array of shape (3,) with sRGB values [0, 1]
    """
    h = normalize_hex(hex_color)
    return np.array(
        [int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16)],
        dtype=np.float64,
    ) / 255.0


def rgb_to_hex(rgb: NDArray[np.float64]) -> str:
    """
    Encode sRGB floats [0, 1] as ``#rrggbb``.

    Channels are clipped to [0, 1] first; callers that care about hue
    fidelity must gamut-map before encoding (see ``oklch_to_hex_safe``).
    """
    srgb = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0)
    r, g, b = (srgb * 255).round().astype(int)
    return f"#{r:02x}{g:02x}{b:02x}"


def quantize_rgb(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Snap sRGB floats to the nearest 8-bit value (what hex encoding stores)."""
    srgb = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0)
    return (srgb * 255).round() / 255.0


def seed_from_hex(*colors: str) -> int:
    """
    Deterministic 32-bit seed for a set of colors.

    First 4 bytes (big-endian) of the SHA-256 of the normalized hex
    strings joined by commas.
    """
    text = ",".join(normalize_hex(c) for c in colors)
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big")


# =============================================================================
# Palette maps
# =============================================================================


def validate_palette_map(palette: object) -> Mapping[str, Sequence[object]]:
    """
    Check that ``palette`` is a mapping of key to list of colors.

    Individual colors are not validated here; generators decide whether a
    bad color is fatal (normalize_hex) or skipped (first_valid_hex).

    Raises:
        ColorTypeError: If ``palette`` is not a mapping, or a value is not
            a list/tuple
    """
    if not isinstance(palette, Mapping):
        raise ColorTypeError(
            f"Palette must be a mapping of key to hex list, got {type(palette).__name__}"
        )
    for key, colors in palette.items():
        if isinstance(colors, (str, bytes)) or not isinstance(colors, Sequence):
            raise ColorTypeError(
                f"Palette entry {key!r} must be a list of hex colors, "
                f"got {type(colors).__name__}"
            )
    return palette


def first_color_array(palette: object) -> list[str]:
    """
    Return the first non-empty color array of a palette map, normalized.

    Key names are ignored; only insertion order matters.

    Raises:
        ColorTypeError: If the palette or a color has the wrong type
        InvalidHexError: If a color in the chosen array is malformed
        EmptyPaletteError: If every array is empty
    """
    palette = validate_palette_map(palette)
    for colors in palette.values():
        if len(colors) > 0:
            return [normalize_hex(c) for c in colors]
    raise EmptyPaletteError("Palette must contain at least one non-empty color array")


def colors_or_defaults(palette: object, defaults: Sequence[str]) -> list[str]:
    """
    Colors of the first non-empty array, with missing slots filled from ``defaults``.

    An entirely empty palette yields ``defaults`` unchanged.
    """
    palette = validate_palette_map(palette)
    colors: list[str] = []
    for values in palette.values():
        if len(values) > 0:
            colors = [normalize_hex(c) for c in values]
            break
    filled = colors[: len(defaults)]
    filled.extend(defaults[len(filled):])
    return filled
