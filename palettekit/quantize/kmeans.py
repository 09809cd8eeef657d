# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Chroma-weighted k-means++ in OKLab, plus the vibrant/muted band filters.

Large muted areas (backgrounds, skies) dominate raw pixel counts. To keep a
small saturated region from being absorbed, pixels are pre-sampled with a
keep probability that rises with chroma, and clusters are ranked by
``count * (1 + 3 * chroma)`` instead of raw count.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from palettekit.quantize.sampling import pad_labs

logger = logging.getLogger(__name__)

MAX_ITER = 25

# (chroma upper bound, keep probability); chroma >= last bound keeps all
_KEEP_RATES = ((0.05, 0.2), (0.15, 0.6))

VIBRANT_MIN_CHROMA = 0.10
VIBRANT_LIGHTNESS = (0.25, 0.85)
MUTED_CHROMA = (0.02, 0.09)
MUTED_LIGHTNESS = (0.2, 0.9)


def _chroma(labs: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.hypot(labs[..., 1], labs[..., 2])


def _keep_probability(chroma: NDArray[np.float64]) -> NDArray[np.float64]:
    prob = np.ones_like(chroma)
    for bound, rate in reversed(_KEEP_RATES):
        prob[chroma < bound] = rate
    return prob


def _kmeans(
    data: NDArray[np.float64],
    k: int,
    rng: np.random.Generator,
    max_iter: int = MAX_ITER,
) -> tuple[NDArray[np.float64], NDArray[np.int64]]:
    """
    Vectorized k-means with k-means++ initialization.

    Seeding draws from the unique points so duplicates cannot be picked
    twice; k shrinks to the number of unique points.

    Returns:
        (centroids, labels): (k', D) centers and (N,) assignments
    """
    n, d = data.shape

    unique_data = np.unique(data, axis=0)
    n_unique = len(unique_data)
    k = min(k, n_unique)

    centroids = np.empty((k, d), dtype=np.float64)
    centroids[0] = unique_data[rng.integers(n_unique)]

    for i in range(1, k):
        dists = np.min(
            np.sum(
                (unique_data[:, np.newaxis, :] - centroids[np.newaxis, :i, :]) ** 2,
                axis=2,
            ),
            axis=1,
        )
        total = dists.sum()
        if total == 0:
            centroids[i] = unique_data[rng.integers(n_unique)]
        else:
            centroids[i] = unique_data[rng.choice(n_unique, p=dists / total)]

    labels = np.full(n, -1, dtype=np.int64)
    for _ in range(max_iter):
        dists = np.sum(
            (data[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2,
            axis=2,
        )
        new_labels = np.argmin(dists, axis=1)
        if np.array_equal(new_labels, labels):
            break
        labels = new_labels

        for j in range(k):
            mask = labels == j
            if np.any(mask):
                centroids[j] = data[mask].mean(axis=0)

    return centroids, labels


def kmeans_palette(
    labs: NDArray[np.float64],
    k: int,
    *,
    max_iter: int = MAX_ITER,
    seed: Optional[int] = 42,
) -> NDArray[np.float64]:
    """
    Cluster OKLab pixels into exactly k colors.

    Args:
        labs: (N, 3) OKLab pixels
        k: Number of colors
        max_iter: Iteration cap (stops earlier when assignments settle)
        seed: Seed for the pre-sample and k-means++ draws

    Returns:
        (k, 3) OKLab centroids, most significant first, padded when the
        input has fewer than k distinct colors
    """
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    if len(labs) == 0 or k < 1:
        return pad_labs(labs, max(k, 0))

    rng = np.random.default_rng(seed)

    keep = rng.random(len(labs)) <= _keep_probability(_chroma(labs))
    pool = labs[keep]
    if len(pool) < k:
        logger.debug(
            "Chroma pre-sample kept %d of %d pixels (< k=%d); using all pixels",
            len(pool), len(labs), k,
        )
        pool = labs

    centroids, labels = _kmeans(pool, k, rng, max_iter=max_iter)

    counts = np.bincount(labels, minlength=len(centroids))
    scores = counts * (1.0 + 3.0 * _chroma(centroids))
    order = np.argsort(-scores, kind="stable")
    return pad_labs(centroids[order], k)


def _band_filter(
    labs: NDArray[np.float64],
    mask: NDArray[np.bool_],
    k: int,
    name: str,
) -> NDArray[np.float64]:
    selected = labs[mask]
    if len(selected) < k:
        logger.debug(
            "%s filter kept %d pixels (< k=%d); clustering all pixels",
            name, len(selected), k,
        )
        return labs
    return selected


def vibrant_palette(
    labs: NDArray[np.float64],
    k: int,
    *,
    seed: Optional[int] = 42,
) -> NDArray[np.float64]:
    """k-means over saturated mid-lightness pixels (C > 0.10, 0.25 < L < 0.85)."""
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    lo, hi = VIBRANT_LIGHTNESS
    mask = (_chroma(labs) > VIBRANT_MIN_CHROMA) & (labs[:, 0] > lo) & (labs[:, 0] < hi)
    return kmeans_palette(_band_filter(labs, mask, k, "Vibrant"), k, seed=seed)


def muted_palette(
    labs: NDArray[np.float64],
    k: int,
    *,
    seed: Optional[int] = 42,
) -> NDArray[np.float64]:
    """k-means over desaturated pixels (0.02 <= C <= 0.09, 0.2 < L < 0.9)."""
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    c = _chroma(labs)
    c_lo, c_hi = MUTED_CHROMA
    l_lo, l_hi = MUTED_LIGHTNESS
    mask = (c >= c_lo) & (c <= c_hi) & (labs[:, 0] > l_lo) & (labs[:, 0] < l_hi)
    return kmeans_palette(_band_filter(labs, mask, k, "Muted"), k, seed=seed)
