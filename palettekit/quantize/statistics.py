# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Non-iterative quantizers driven by pixel statistics.

- color_moments: Stricker & Orengo moments (mean, sigma, skew) per OKLab
  channel, sampled along the statistical spread. O(n), no clustering.
- hue_histogram: 72-bin (5 degree) hue histogram peak picking.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from palettekit.quantize.sampling import pad_labs

logger = logging.getLogger(__name__)

HUE_BINS = 72

# Defaults for bins that received no pixels (synthetic padding bins)
_EMPTY_BIN_L = 0.5
_EMPTY_BIN_C = 0.12


def color_moments(labs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    k representative colors from the first three moments of each channel.

    Point i sits at t in [-1, +1] (t = 0 when k = 1):
        mean + t * sigma + (t^2 - 1/3) * skew * 0.3
    where skew is the cube root of the third central moment. Only L is
    clipped; a and b stay signed.
    """
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    if len(labs) == 0:
        return pad_labs(labs, k)

    mean = labs.mean(axis=0)
    centered = labs - mean
    sigma = np.sqrt(np.mean(centered ** 2, axis=0))
    skew = np.cbrt(np.mean(centered ** 3, axis=0))

    if k == 1:
        t = np.zeros(1)
    else:
        t = np.linspace(-1.0, 1.0, k)

    t = t[:, np.newaxis]
    points = mean + t * sigma + (t ** 2 - 1.0 / 3.0) * skew * 0.3
    points[:, 0] = np.clip(points[:, 0], 0.0, 1.0)
    return points


def hue_histogram(labs: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Peaks of a smoothed hue histogram.

    1. Bin every pixel by hue (5 degree bins), tracking mean L and C.
    2. Smooth counts with a circular 3-bin mean.
    3. Peaks are non-empty bins with smoothed count > left and >= right,
       ranked by smoothed count.
    4. Short of k: add the next highest non-empty bins, then synthetic
       bins every ``72 // k`` starting from bin 0.

    Each chosen bin becomes (mean L, mean C) at the bin's center hue.
    """
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)

    hue = np.degrees(np.arctan2(labs[:, 2], labs[:, 1])) % 360.0
    bins = np.floor(hue / (360.0 / HUE_BINS)).astype(np.int64) % HUE_BINS
    chroma = np.hypot(labs[:, 1], labs[:, 2])

    counts = np.bincount(bins, minlength=HUE_BINS)
    sum_l = np.bincount(bins, weights=labs[:, 0], minlength=HUE_BINS)
    sum_c = np.bincount(bins, weights=chroma, minlength=HUE_BINS)

    smooth = (np.roll(counts, 1) + counts + np.roll(counts, -1)) / 3.0
    left = np.roll(smooth, 1)
    right = np.roll(smooth, -1)

    peaks = np.flatnonzero((smooth > left) & (smooth >= right) & (counts > 0))
    peaks = peaks[np.argsort(-smooth[peaks], kind="stable")]
    chosen = [int(b) for b in peaks[:k]]

    for b in np.argsort(-smooth, kind="stable"):
        if len(chosen) >= k:
            break
        if counts[b] > 0 and int(b) not in chosen:
            chosen.append(int(b))

    if len(chosen) < k:
        logger.debug("Histogram found %d hue bins; adding synthetic bins", len(chosen))
    synth = 0
    while len(chosen) < k:
        chosen.append(synth % HUE_BINS)
        synth += HUE_BINS // k

    chosen_arr = np.array(chosen[:k], dtype=np.int64)
    filled = counts[chosen_arr] > 0
    safe_counts = np.where(filled, counts[chosen_arr], 1)
    L = np.where(filled, sum_l[chosen_arr] / safe_counts, _EMPTY_BIN_L)
    C = np.where(filled, sum_c[chosen_arr] / safe_counts, _EMPTY_BIN_C)
    H = np.radians(chosen_arr * (360.0 / HUE_BINS) + 360.0 / HUE_BINS / 2)

    return np.stack([L, C * np.cos(H), C * np.sin(H)], axis=-1).reshape(-1, 3)
