# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Schema definitions for palettes and role selections.

All types in this module are immutable (frozen dataclasses).
"""

from palettekit.schema.palette import (
    ROLE_KEYS,
    ROLE_SPECS,
    ColorRole,
    OKLCHColor,
    RoleSelection,
    SelectOptions,
)

__all__ = [
    # Core types
    "OKLCHColor",
    # 60/30/10 roles
    "ROLE_KEYS",
    "ROLE_SPECS",
    "ColorRole",
    "RoleSelection",
    "SelectOptions",
]
