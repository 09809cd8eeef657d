# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Contrast metrics and color-vision-deficiency simulation.

WCAG 2.x:
    ratio = (Y_lighter + 0.05) / (Y_darker + 0.05), range [1, 21]
    4.5 = AA body text, 7.0 = AAA body text

APCA (W3 0.0.98G):
    Signed lightness contrast Lc, roughly [-108, 106]. Positive for dark
    text on a light background, negative for light text on dark.

All functions take sRGB floats in [0, 1] (shape (3,)) unless the name
says hex.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import linear_to_srgb, srgb_to_linear
from palettekit.color.hexcodes import hex_to_rgb

WHITE = "#ffffff"
TEXT_DARK = "#111111"

# Rec. 709 luminance weights
_WCAG_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


# =============================================================================
# WCAG
# =============================================================================


def relative_luminance(rgb: NDArray[np.float64]) -> float:
    """WCAG relative luminance Y of an sRGB color."""
    return float(np.dot(srgb_to_linear(rgb), _WCAG_WEIGHTS))


def wcag_ratio(rgb_a: NDArray[np.float64], rgb_b: NDArray[np.float64]) -> float:
    """WCAG contrast ratio between two sRGB colors. Symmetric."""
    ya = relative_luminance(rgb_a)
    yb = relative_luminance(rgb_b)
    return (max(ya, yb) + 0.05) / (min(ya, yb) + 0.05)


def wcag_contrast(hex_a: str, hex_b: str) -> float:
    """WCAG contrast ratio between two hex colors."""
    return wcag_ratio(hex_to_rgb(hex_a), hex_to_rgb(hex_b))


def best_text_on(bg_hex: str) -> str:
    """
    Pick the text color for a background.

    Returns ``#ffffff`` or ``#111111``, whichever has the higher WCAG
    ratio against ``bg_hex``. Ties go to white.
    """
    bg = hex_to_rgb(bg_hex)
    on_white = wcag_ratio(hex_to_rgb(WHITE), bg)
    on_dark = wcag_ratio(hex_to_rgb(TEXT_DARK), bg)
    return WHITE if on_white >= on_dark else TEXT_DARK


# =============================================================================
# APCA
# =============================================================================

_APCA_COEFFS = np.array([0.2126729, 0.7151522, 0.0721750], dtype=np.float64)

_BLACK_THRESHOLD = 0.022
_BLACK_CLAMP = 1.414
_DELTA_Y_MIN = 0.0005

_NORM_BG = 0.56
_NORM_TXT = 0.57
_REV_TXT = 0.62
_REV_BG = 0.65

_SCALE = 1.14
_LO_CLIP = 0.1
_OFFSET = 0.027


def _apca_luminance(rgb: NDArray[np.float64]) -> float:
    # APCA uses a simple 2.4 power, not the piecewise sRGB curve
    channels = np.power(np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0), 2.4)
    y = float(np.dot(channels, _APCA_COEFFS))
    if y < _BLACK_THRESHOLD:
        y += (_BLACK_THRESHOLD - y) ** _BLACK_CLAMP
    return y


def apca_contrast(text_rgb: NDArray[np.float64], bg_rgb: NDArray[np.float64]) -> float:
    """
    APCA lightness contrast Lc of text on a background.

    Not symmetric: swapping text and background changes the exponents.

    Returns:
        Lc, 0 inside the low-contrast deadband
    """
    y_txt = _apca_luminance(text_rgb)
    y_bg = _apca_luminance(bg_rgb)

    if abs(y_bg - y_txt) < _DELTA_Y_MIN:
        return 0.0

    if y_bg > y_txt:
        # Normal polarity: dark text on light background
        sapc = (y_bg ** _NORM_BG - y_txt ** _NORM_TXT) * _SCALE
        out = 0.0 if sapc < _LO_CLIP else sapc - _OFFSET
    else:
        # Reverse polarity: light text on dark background
        sapc = (y_bg ** _REV_BG - y_txt ** _REV_TXT) * _SCALE
        out = 0.0 if sapc > -_LO_CLIP else sapc + _OFFSET

    return out * 100.0


# =============================================================================
# Color vision deficiency
# =============================================================================

# Single-row approximations applied in linear RGB. The red and green rows
# collapse to one value; blue keeps its own channel.
_PROTAN_RG = (0.10889, 0.89111)
_PROTAN_B = (0.00452, -0.00452)

_DEUTAN_RG = (0.29031, 0.70969)
_DEUTAN_B = (-0.02197, 0.02197)

CVD_DISTINCT_THRESHOLD = 0.12


def _simulate(
    rgb: NDArray[np.float64],
    rg_row: tuple[float, float],
    b_row: tuple[float, float],
) -> NDArray[np.float64]:
    lr, lg, lb = srgb_to_linear(rgb)
    rg = rg_row[0] * lr + rg_row[1] * lg
    b = b_row[0] * lr + b_row[1] * lg + lb
    return linear_to_srgb(np.clip(np.array([rg, rg, b]), 0.0, 1.0))


def simulate_protanopia(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Approximate how a protanope sees an sRGB color."""
    return _simulate(rgb, _PROTAN_RG, _PROTAN_B)


def simulate_deuteranopia(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Approximate how a deuteranope sees an sRGB color."""
    return _simulate(rgb, _DEUTAN_RG, _DEUTAN_B)


def is_distinguishable_under_cvd(
    rgb_a: NDArray[np.float64],
    rgb_b: NDArray[np.float64],
    threshold: float = CVD_DISTINCT_THRESHOLD,
) -> bool:
    """
    True if the two colors stay apart under protanopia OR deuteranopia.

    Distance is Euclidean in simulated sRGB; either simulation exceeding
    ``threshold`` is enough.
    """
    for simulate in (simulate_protanopia, simulate_deuteranopia):
        d = np.linalg.norm(simulate(rgb_a) - simulate(rgb_b))
        if d > threshold:
            return True
    return False
