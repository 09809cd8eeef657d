# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Serializers for palette maps and role selections.

All serializers preserve colors exactly; they only change the shape.
"""

from palettekit.runtime.serializers.base import SerializerFormat
from palettekit.runtime.serializers.css import to_css_vars
from palettekit.runtime.serializers.tokens import to_hex_array, to_json, to_object

__all__ = [
    "SerializerFormat",
    "to_json",
    "to_hex_array",
    "to_object",
    "to_css_vars",
]
