# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
CSS custom-property serializer.

Emits a ``:root`` block with one aligned declaration per color::

    :root {
      --color-neutral-light: #fefefe;
      --color-neutral-dark:  #1a1613;
      --color-main:          #f72f68;
      --color-main-shade:    #c41e4f;
      --color-accent:        #97cd5c;
    }

Palette maps use the kebab-cased key, with a 1-based suffix when a key
holds more than one color (``--color-triadic-1``). Empty arrays emit
nothing.
"""

from __future__ import annotations

import re

from palettekit.color.hexcodes import normalize_hex, validate_palette_map
from palettekit.runtime.serializers.tokens import Serializable
from palettekit.schema import RoleSelection

# Role key → CSS name; "Color" is dropped since the prefix already says it
ROLE_CSS_NAMES = {
    "neutralLight": "neutral-light",
    "neutralDark": "neutral-dark",
    "mainColor": "main",
    "mainColorShade": "main-shade",
    "accentColor": "accent",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_IDENT = re.compile(r"[^a-z0-9]+")


def css_name(key: str) -> str:
    """``splitComplementary`` / ``Split Complementary`` → ``split-complementary``."""
    kebab = _CAMEL_BOUNDARY.sub("-", str(key)).lower()
    return _NON_IDENT.sub("-", kebab).strip("-")


def _entries(source: Serializable) -> list[tuple[str, str]]:
    if isinstance(source, RoleSelection):
        return [(ROLE_CSS_NAMES[role.role], role.hex) for role in source.roles()]

    palette = validate_palette_map(source)
    entries = []
    for key, colors in palette.items():
        name = css_name(key)
        if len(colors) == 1:
            entries.append((name, normalize_hex(colors[0])))
        else:
            entries.extend(
                (f"{name}-{i}", normalize_hex(c)) for i, c in enumerate(colors, start=1)
            )
    return entries


def to_css_vars(source: Serializable, prefix: str = "--color") -> str:
    """Serialize as a CSS ``:root`` block.

    Args:
        source: A RoleSelection or a palette map.
        prefix: Custom-property prefix. A missing leading ``--`` is added.

    Returns:
        The ``:root { ... }`` block, without a trailing newline.

    Raises:
        ValueError: ``prefix`` is empty.
    """
    prefix = prefix.strip()
    if not prefix.strip("-"):
        raise ValueError("CSS variable prefix must not be empty")
    if not prefix.startswith("--"):
        prefix = "--" + prefix.lstrip("-")

    names = [(f"{prefix}-{name}", value) for name, value in _entries(source)]
    if not names:
        return ":root {\n}"
    width = max(len(name) for name, _ in names) + 1
    lines = [f"  {(name + ':').ljust(width)} {value};" for name, value in names]
    return ":root {\n" + "\n".join(lines) + "\n}"
