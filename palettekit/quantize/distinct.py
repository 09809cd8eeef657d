# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""Maximally distinct color selection (greedy farthest point in OKLab)."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import delta_e_oklab_batch
from palettekit.quantize.sampling import pad_labs

MAX_CANDIDATES = 2000


def farthest_point(labs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Greedy max-min ΔE selection.

    Seeds with the most chromatic candidate, then repeatedly adds the
    candidate whose ΔE to its nearest selected color is
    largest. Stops early once that distance is 0 (only duplicates left)
    and pads.
    """
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    if len(labs) == 0 or k < 1:
        return pad_labs(labs, max(k, 0))

    step = max(1, len(labs) // MAX_CANDIDATES)
    candidates = labs[::step]

    chroma = np.hypot(candidates[:, 1], candidates[:, 2])
    selected = [candidates[int(np.argmax(chroma))]]
    min_dist = delta_e_oklab_batch(candidates, selected[0])

    while len(selected) < k:
        idx = int(np.argmax(min_dist))
        if min_dist[idx] == 0:
            break
        selected.append(candidates[idx])
        min_dist = np.minimum(min_dist, delta_e_oklab_batch(candidates, candidates[idx]))

    return pad_labs(np.array(selected), k)
