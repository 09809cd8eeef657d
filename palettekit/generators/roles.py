# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
60/30/10 role selection.

Maps an arbitrary palette onto five fixed design roles:

    neutralLight    60%  lightest near-neutral, else globally lightest
    mainColor       30%  most chromatic in the mid-lightness band,
                         else globally most chromatic
    accentColor     10%  most chromatic color far in hue from main
    neutralDark      —   darkest near-neutral, else synthesized from main
    mainColorShade   —   most chromatic color close in hue to main

Each pick narrows a candidate list, relaxes the constraint when nothing
qualifies, and synthesizes a color when nothing is left at all, so a
single-color palette still yields all five roles.

Candidate lists are always built fresh and ranked with sorted(); the
input is never reordered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import NamedTuple, Optional

from palettekit.color.colorspace import hex_to_oklch, hue_distance, oklch_to_hex_safe
from palettekit.color.contrast import best_text_on, wcag_contrast
from palettekit.color.hexcodes import first_color_array, normalize_hex
from palettekit.errors import ColorTypeError, EmptyPaletteError
from palettekit.schema.palette import ROLE_SPECS, ColorRole, OKLCHColor, RoleSelection, SelectOptions

logger = logging.getLogger(__name__)


class _Candidate(NamedTuple):
    hex: str
    L: float
    C: float
    H: float


def _candidate(hex_color: str) -> _Candidate:
    return _Candidate(hex_color, *hex_to_oklch(hex_color))


def _best(
    candidates: Sequence[_Candidate],
    key: Callable[[_Candidate], float],
) -> _Candidate:
    """Highest-scoring candidate; ties keep input order."""
    return sorted(candidates, key=key, reverse=True)[0]


def _palette_colors(palette: object) -> list[str]:
    """Normalized colors from a palette map (first non-empty array) or a hex list."""
    if isinstance(palette, Mapping):
        return first_color_array(palette)
    if isinstance(palette, (str, bytes)) or not isinstance(palette, Sequence):
        raise ColorTypeError(
            f"Palette must be a mapping or a list of hex colors, got {type(palette).__name__}"
        )
    if len(palette) == 0:
        raise EmptyPaletteError("Palette must contain at least one color")
    return [normalize_hex(c) for c in palette]


def select_60_30_10(
    palette: object,
    options: Optional[SelectOptions] = None,
) -> RoleSelection:
    """
    Select the five 60/30/10 roles from ``palette``.

    Args:
        palette: A palette map (its first non-empty array is used) or a
            plain list of hex colors
        options: Threshold overrides; defaults to SelectOptions()

    Returns:
        RoleSelection with all five roles, always

    Raises:
        ColorTypeError: Palette or a color has the wrong type
        InvalidHexError: A color is malformed
        EmptyPaletteError: No colors at all
    """
    opts = options if options is not None else SelectOptions()
    px = [_candidate(hex_color) for hex_color in _palette_colors(palette)]

    # neutralLight
    near_neutrals = [c for c in px if c.C < opts.neutral_chroma_max]
    light = _best(near_neutrals or px, key=lambda c: c.L)

    # mainColor
    mid_band = [
        c for c in px
        if opts.main_lightness_min <= c.L <= opts.main_lightness_max
    ]
    main = _best(mid_band or px, key=lambda c: c.C)

    # neutralDark
    dark_neutrals = [
        c for c in near_neutrals
        if c.L < opts.dark_neutral_lightness_max and c.hex != light.hex
    ]
    if dark_neutrals:
        dark_hex = _best(dark_neutrals, key=lambda c: -c.L).hex
        dark_derived = False
    else:
        dark_hex = oklch_to_hex_safe(opts.derived_dark_l, opts.derived_dark_c, main.H)
        dark_derived = True
        logger.debug("No dark neutral in palette; synthesized %s", dark_hex)

    # mainColorShade
    taken = {light.hex, main.hex}
    remaining = [c for c in px if c.hex not in taken]
    if remaining:
        same_hue = [
            c for c in remaining
            if hue_distance(c.H, main.H) < opts.shade_hue_tolerance
            and c.C > opts.shade_chroma_min
        ]
        shade_hex = _best(same_hue or remaining, key=lambda c: c.C).hex
        shade_derived = False
    else:
        shade_hex = oklch_to_hex_safe(max(0.05, main.L - 0.08), main.C * 0.92, main.H)
        shade_derived = True
        logger.debug("No color left for mainColorShade; synthesized %s", shade_hex)

    # accentColor
    taken.add(shade_hex)
    remaining = [c for c in px if c.hex not in taken]
    if remaining:
        far_hue = [
            c for c in remaining
            if hue_distance(c.H, main.H) >= opts.accent_hue_min
        ]
        accent_hex = _best(far_hue or remaining, key=lambda c: c.C).hex
        accent_derived = False
    else:
        accent_hex = oklch_to_hex_safe(0.72, min(main.C, 0.18), (main.H + 150.0) % 360.0)
        accent_derived = True
        logger.debug("No color left for accentColor; synthesized %s", accent_hex)

    picks = {
        "neutralLight": (light.hex, False),
        "neutralDark": (dark_hex, dark_derived),
        "mainColor": (main.hex, False),
        "mainColorShade": (shade_hex, shade_derived),
        "accentColor": (accent_hex, accent_derived),
    }
    roles = []
    for key, label, weight in ROLE_SPECS:
        hex_color, derived = picks[key]
        roles.append(ColorRole(
            hex=hex_color,
            role=key,
            label=label,
            weight=weight,
            lch=OKLCHColor.from_hex(hex_color),
            derived=derived,
            text_color=best_text_on(hex_color),
            contrast=round(wcag_contrast(hex_color, light.hex), 2),
        ))
    return RoleSelection(*roles)
