# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""Small helpers shared by the palette generators."""

from __future__ import annotations


def check_count(count: int, name: str = "count") -> int:
    """Reject non-integer or < 1 color counts."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"{name} must be an int, got {type(count).__name__}")
    if count < 1:
        raise ValueError(f"{name} must be >= 1, got {count}")
    return count


def ramp(n: int) -> list[float]:
    """n evenly spaced positions in [0, 1]; a single step sits at 0."""
    return [i / max(n - 1, 1) for i in range(n)]


def clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)
