# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
JSON and flat-object serializers.

Palette maps serialize as-is (keys and order preserved). Role selections
serialize either in full (every ColorRole field) or flattened to
role → hex.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Union

from palettekit.color.hexcodes import normalize_hex, validate_palette_map
from palettekit.runtime.serializers.base import SerializerFormat, dump
from palettekit.schema import RoleSelection

Serializable = Union[RoleSelection, Mapping[str, Sequence[str]]]


def to_hex_array(selection: RoleSelection) -> list[str]:
    """
    The five role colors in canonical order.

    [neutralLight, neutralDark, mainColor, mainColorShade, accentColor]
    """
    return selection.to_hex_list()


def to_object(selection: RoleSelection) -> dict[str, str]:
    """
    Flat role → hex mapping.

    Example::

        {
          "neutralLight": "#fefefe",
          "neutralDark": "#1a1613",
          "mainColor": "#f72f68",
          "mainColorShade": "#c41e4f",
          "accentColor": "#97cd5c"
        }
    """
    return {role.role: role.hex for role in selection.roles()}


def to_json(
    source: Serializable,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    hex_only: bool = False,
) -> str:
    """Serialize a palette map or a RoleSelection as JSON.

    Args:
        source: Output of any generator, or of select_60_30_10.
        format: Output format (JSON or JSON_PRETTY).
        hex_only: For a RoleSelection, emit the flat role → hex object
            instead of every role field. Ignored for palette maps.

    Returns:
        JSON string.

    Raises:
        ColorTypeError: ``source`` is neither a RoleSelection nor a
            palette map of hex lists.
        InvalidHexError: A palette map holds a malformed color.
    """
    if isinstance(source, RoleSelection):
        data: object = to_object(source) if hex_only else source.to_dict()
    else:
        palette = validate_palette_map(source)
        data = {
            str(key): [normalize_hex(c) for c in colors]
            for key, colors in palette.items()
        }
    return dump(data, format)
