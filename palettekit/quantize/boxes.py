# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
RGB-space quantizers: median cut, dominant (7-level counting) and octree.

These work on gamma sRGB floats (N, 3) in [0, 1] and return (k, 3) sRGB
rows, most populated first.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from palettekit.quantize.sampling import pad_rgbs

logger = logging.getLogger(__name__)

DOMINANT_LEVELS = 7
OCTREE_DEPTH = 8


def median_cut(rgbs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Heckbert median cut.

    Repeatedly takes the most populated box, sorts it along its widest
    channel and splits it at the median pixel. Stops at k boxes or when
    the largest box holds fewer than 2 pixels. Each box yields its mean.
    """
    rgbs = np.asarray(rgbs, dtype=np.float64).reshape(-1, 3)
    if len(rgbs) == 0:
        return pad_rgbs(rgbs, k)

    boxes: list[NDArray[np.float64]] = [rgbs]
    while len(boxes) < k:
        largest = max(range(len(boxes)), key=lambda i: len(boxes[i]))
        box = boxes[largest]
        if len(box) < 2:
            break

        extent = box.max(axis=0) - box.min(axis=0)
        axis = int(np.argmax(extent))
        ordered = box[np.argsort(box[:, axis], kind="stable")]
        mid = len(ordered) // 2

        boxes.pop(largest)
        boxes.extend([ordered[:mid], ordered[mid:]])

    boxes.sort(key=len, reverse=True)
    means = np.array([box.mean(axis=0) for box in boxes], dtype=np.float64)
    return pad_rgbs(means, k)


def dominant_colors(rgbs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Most frequent colors after snapping each channel to 7 levels.

    Ties keep first-occurrence order.
    """
    rgbs = np.asarray(rgbs, dtype=np.float64).reshape(-1, 3)
    if len(rgbs) == 0:
        return pad_rgbs(rgbs, k)

    levels = np.round(rgbs * DOMINANT_LEVELS).astype(np.int64)
    unique, first_index, counts = np.unique(
        levels, axis=0, return_index=True, return_counts=True
    )
    order = np.lexsort((first_index, -counts))
    top = unique[order[:k]].astype(np.float64) / DOMINANT_LEVELS
    return pad_rgbs(top, k)


# =============================================================================
# Octree
# =============================================================================


class _Leaf:
    __slots__ = ("level", "key", "count", "total")

    def __init__(self, level: int, key: tuple[int, int, int], count: int, total: NDArray[np.int64]):
        self.level = level
        self.key = key
        self.count = count
        self.total = total

    def prefix(self, level: int) -> tuple[int, int, int]:
        """Node key of this leaf's ancestor at ``level``."""
        shift = self.level - level
        r, g, b = self.key
        return (r >> shift, g >> shift, b >> shift)


def octree_colors(rgbs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Gervautz-Purgathofer octree quantization.

    Pixels are inserted into a depth-8 tree, one bit per channel per level,
    so the initial leaves are the exact 8-bit colors. Reduction works from
    the deepest level up: at each level the nodes whose children are all
    leaves are folded, lowest pixel count first, skipping any fold that
    would drop the leaf count below k. If more than k leaves survive the
    root level, the k most populated are kept.

    Returns:
        (k, 3) sRGB rows, leaves ranked by pixel count
    """
    rgbs = np.asarray(rgbs, dtype=np.float64).reshape(-1, 3)
    if len(rgbs) == 0 or k < 1:
        return pad_rgbs(rgbs, max(k, 0))

    codes = np.round(np.clip(rgbs, 0.0, 1.0) * 255).astype(np.int64)
    unique, counts = np.unique(codes, axis=0, return_counts=True)
    leaves = [
        _Leaf(OCTREE_DEPTH, (int(r), int(g), int(b)), int(n), np.array([r, g, b]) * n)
        for (r, g, b), n in zip(unique, counts)
    ]

    for level in range(OCTREE_DEPTH - 1, -1, -1):
        if len(leaves) <= k:
            break

        groups: dict[tuple[int, int, int], list[_Leaf]] = {}
        for leaf in leaves:
            groups.setdefault(leaf.prefix(level), []).append(leaf)

        # Lowest population first; key breaks ties deterministically
        candidates = sorted(
            (node for node in groups.items() if len(node[1]) > 1),
            key=lambda node: (sum(leaf.count for leaf in node[1]), node[0]),
        )

        n_leaves = len(leaves)
        folded: dict[tuple[int, int, int], _Leaf] = {}
        for key, children in candidates:
            if n_leaves <= k:
                break
            if n_leaves - (len(children) - 1) < k:
                continue
            folded[key] = _Leaf(
                level,
                key,
                sum(leaf.count for leaf in children),
                sum(leaf.total for leaf in children),
            )
            n_leaves -= len(children) - 1

        if folded:
            leaves = [leaf for leaf in leaves if leaf.prefix(level) not in folded]
            leaves.extend(folded.values())

    leaves.sort(key=lambda leaf: (-leaf.count, leaf.level, leaf.key))
    if len(leaves) > k:
        logger.debug("Octree kept %d of %d leaves", k, len(leaves))
    colors = np.array(
        [leaf.total / leaf.count / 255.0 for leaf in leaves[:k]],
        dtype=np.float64,
    )
    return pad_rgbs(np.clip(colors, 0.0, 1.0), k)
