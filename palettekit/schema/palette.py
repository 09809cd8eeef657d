# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Palette schema types.

Design principles:
- Immutable: all types are frozen dataclasses
- Deterministic: same palette → same roles
- Serializable: JSON-ready dicts with camelCase keys, matching the palette
  map keys produced by the generators

OKLCH Color Space:
- L (Lightness): 0.0 = black, 1.0 = white
- C (Chroma): 0.0 = gray, ~0.32 = max saturation in sRGB
- H (Hue): 0-360 degrees (≈30=orange, ≈90=yellow, ≈145=green, ≈250=blue, ≈330=pink/red)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from palettekit.color.hexcodes import HEX_RE


# =============================================================================
# Core Color Type
# =============================================================================


@dataclass(frozen=True, slots=True)
class OKLCHColor:
    """
    A single color in OKLCH color space.

    Attributes:
        L: Lightness (0.0 = black, 1.0 = white)
        C: Chroma (0.0 = neutral gray, typical max ~0.32 for sRGB)
        H: Hue in degrees [0, 360). Meaningless but still present when C ≈ 0.
    """
    L: float
    C: float
    H: float = 0.0

    def __post_init__(self) -> None:
        """Validate color values are within expected ranges."""
        if not 0.0 <= self.L <= 1.0:
            raise ValueError(f"Lightness must be 0-1, got {self.L}")
        if self.C < 0.0:
            raise ValueError(f"Chroma must be >= 0, got {self.C}")
        if not 0.0 <= self.H < 360.0:
            raise ValueError(f"Hue must be 0-360, got {self.H}")

    @property
    def is_achromatic(self) -> bool:
        """True if the color has no perceptible hue (gray/white/black)."""
        return self.C < 0.02

    @property
    def hex(self) -> str:
        """
        Gamut-safe hex string.

        Out-of-gamut values lose chroma at constant L and H instead of
        being channel-clipped.
        """
        from palettekit.color.colorspace import oklch_to_hex_safe
        return oklch_to_hex_safe(self.L, self.C, self.H)

    @classmethod
    def from_hex(cls, hex_color: str) -> OKLCHColor:
        """
        Decode any accepted hex form.

        L is clamped to [0, 1] since float error can land white a hair
        above 1.0.
        """
        from palettekit.color.colorspace import hex_to_oklch
        L, C, H = hex_to_oklch(hex_color)
        return cls(L=min(max(L, 0.0), 1.0), C=max(C, 0.0), H=H)

    def to_dict(self, include_hex: bool = False) -> dict:
        """
        Serialize to dictionary.

        Args:
            include_hex: If True, include the gamut-safe hex value
        """
        d = {"L": self.L, "C": self.C, "H": self.H}
        if include_hex:
            d["hex"] = self.hex
        return d

    @classmethod
    def from_dict(cls, data: dict) -> OKLCHColor:
        """Deserialize from dictionary."""
        return cls(L=data["L"], C=data["C"], H=data.get("H", 0.0))


# =============================================================================
# Role Selection (60/30/10)
# =============================================================================


# (role key, label, weight) in canonical order
ROLE_SPECS: tuple[tuple[str, str, str], ...] = (
    ("neutralLight", "Neutral Light", "60%"),
    ("neutralDark", "Neutral Dark", "—"),
    ("mainColor", "Main Color", "30%"),
    ("mainColorShade", "Main Color Shade", "—"),
    ("accentColor", "Accent Color", "10%"),
)

ROLE_KEYS = tuple(key for key, _, _ in ROLE_SPECS)

_WEIGHTS = frozenset(weight for _, _, weight in ROLE_SPECS)


@dataclass(frozen=True, slots=True)
class ColorRole:
    """
    One of the five 60/30/10 roles.

    Attributes:
        hex: Normalized "#rrggbb"
        role: Role key, e.g. "neutralLight"
        label: Human label, e.g. "Neutral Light"
        weight: Design proportion: "60%", "30%", "10%" or "—"
        lch: OKLCH coordinates of ``hex``
        derived: True when synthesized rather than picked from the input
        text_color: "#ffffff" or "#111111", whichever reads better on ``hex``
        contrast: WCAG ratio against the neutralLight role, 2 decimals
    """
    hex: str
    role: str
    label: str
    weight: str
    lch: OKLCHColor
    derived: bool = False
    text_color: str = "#111111"
    contrast: float = 1.0

    def __post_init__(self) -> None:
        if not isinstance(self.hex, str) or not HEX_RE.fullmatch(self.hex):
            raise ValueError(f"hex must be lowercase #rrggbb, got {self.hex!r}")
        if self.role not in ROLE_KEYS:
            raise ValueError(f"Unknown role {self.role!r}; expected one of {list(ROLE_KEYS)}")
        if self.weight not in _WEIGHTS:
            raise ValueError(f"weight must be one of {sorted(_WEIGHTS)}, got {self.weight!r}")
        if self.contrast < 1.0:
            raise ValueError(f"WCAG contrast is always >= 1, got {self.contrast}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "hex": self.hex,
            "role": self.role,
            "label": self.label,
            "weight": self.weight,
            "lch": self.lch.to_dict(),
            "derived": self.derived,
            "textColor": self.text_color,
            "contrast": self.contrast,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ColorRole:
        """Deserialize from dictionary."""
        return cls(
            hex=data["hex"],
            role=data["role"],
            label=data["label"],
            weight=data["weight"],
            lch=OKLCHColor.from_dict(data["lch"]),
            derived=data.get("derived", False),
            text_color=data.get("textColor", "#111111"),
            contrast=data.get("contrast", 1.0),
        )


@dataclass(frozen=True, slots=True)
class RoleSelection:
    """
    The fixed five-role result of a 60/30/10 selection.

    Key set is always the same regardless of the input palette's keys.
    """
    neutral_light: ColorRole
    neutral_dark: ColorRole
    main_color: ColorRole
    main_color_shade: ColorRole
    accent_color: ColorRole

    def __post_init__(self) -> None:
        """Validate each slot carries its own role."""
        for key, role in zip(ROLE_KEYS, self._ordered()):
            if role.role != key:
                raise ValueError(f"Slot {key!r} holds role {role.role!r}")

    def _ordered(self) -> tuple[ColorRole, ...]:
        return (
            self.neutral_light,
            self.neutral_dark,
            self.main_color,
            self.main_color_shade,
            self.accent_color,
        )

    def roles(self) -> Iterator[ColorRole]:
        """Iterate roles in canonical order."""
        return iter(self._ordered())

    def to_hex_list(self) -> list[str]:
        """[neutralLight, neutralDark, mainColor, mainColorShade, accentColor]"""
        return [role.hex for role in self._ordered()]

    def to_dict(self) -> dict:
        """Serialize to dictionary keyed by camelCase role."""
        return {role.role: role.to_dict() for role in self._ordered()}

    @classmethod
    def from_dict(cls, data: dict) -> RoleSelection:
        """Deserialize from dictionary."""
        return cls(*(ColorRole.from_dict(data[key]) for key in ROLE_KEYS))


@dataclass(frozen=True, slots=True)
class SelectOptions:
    """
    Thresholds for 60/30/10 role selection.

    Use ``dataclasses.replace(SelectOptions(), accent_hue_min=90)`` to
    override individual values.

    Attributes:
        neutral_chroma_max: C ceiling to qualify as neutral
        main_lightness_min: L floor of the mainColor band
        main_lightness_max: L ceiling of the mainColor band
        shade_hue_tolerance: Max hue distance (deg) for the shade to match main
        shade_chroma_min: Min C for a same-hue shade candidate
        accent_hue_min: Min hue distance (deg) for the accent
        dark_neutral_lightness_max: L ceiling for a picked neutralDark
        derived_dark_l: L of a synthesized neutralDark
        derived_dark_c: C of a synthesized neutralDark
    """
    neutral_chroma_max: float = 0.06
    main_lightness_min: float = 0.40
    main_lightness_max: float = 0.72
    shade_hue_tolerance: float = 30.0
    shade_chroma_min: float = 0.10
    accent_hue_min: float = 100.0
    dark_neutral_lightness_max: float = 0.35
    derived_dark_l: float = 0.20
    derived_dark_c: float = 0.035

    def __post_init__(self) -> None:
        if self.main_lightness_min > self.main_lightness_max:
            raise ValueError(
                f"main_lightness_min ({self.main_lightness_min}) must not exceed "
                f"main_lightness_max ({self.main_lightness_max})"
            )
        for name in ("derived_dark_l", "main_lightness_min", "main_lightness_max"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be 0-1, got {value}")
        for name in ("neutral_chroma_max", "shade_chroma_min", "derived_dark_c"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        for name in ("shade_hue_tolerance", "accent_hue_min"):
            value = getattr(self, name)
            if not 0.0 <= value <= 180.0:
                raise ValueError(f"{name} must be 0-180 degrees, got {value}")
