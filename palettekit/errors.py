# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Input validation errors.

Each class also derives from the builtin exception a caller would expect
(TypeError / ValueError), so ``except ValueError`` keeps working while the
specific subclass tells a wrong type apart from a wrong format or an empty
collection.

Degenerate data (too few pixels, no neutral candidate, ...) is never an
error: those paths pad or synthesize instead.
"""

from __future__ import annotations


class PaletteError(Exception):
    """Base class for all palettekit validation errors."""


class ColorTypeError(PaletteError, TypeError):
    """A color, palette or pixel buffer has the wrong Python type."""


class InvalidHexError(PaletteError, ValueError):
    """A string is not a valid ``#rgb`` or ``#rrggbb`` hex color."""


class EmptyPaletteError(PaletteError, ValueError):
    """A collection that must contain at least one color is empty."""
