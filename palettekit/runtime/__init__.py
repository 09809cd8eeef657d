# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Output runtime for palettekit.

Turns generator results into the forms a caller ships:

1. JSON -- palette maps or full role selections
2. Flat objects / arrays -- role → hex, or hex in canonical role order
3. CSS -- a ``:root`` block of custom properties
"""

from palettekit.runtime.serializers import (
    SerializerFormat,
    to_css_vars,
    to_hex_array,
    to_json,
    to_object,
)

__all__ = [
    "to_json",
    "to_hex_array",
    "to_object",
    "to_css_vars",
    "SerializerFormat",
]
