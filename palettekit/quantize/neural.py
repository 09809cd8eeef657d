# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""
Neural quantization: a one-dimensional self-organizing map in OKLab.

Reference: Dekker, A.H. (1994). Kohonen neural networks for optimal
colour quantization.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from palettekit.color.colorspace import delta_e_oklab, delta_e_oklab_batch
from palettekit.quantize.kmeans import kmeans_palette
from palettekit.quantize.sampling import pad_labs

logger = logging.getLogger(__name__)

LEARN_RATE = 0.4
MAX_PRESENTATIONS = 4000

# Neurons closer than this (OKLab ΔE) collapse to one color
DEDUPE_DELTA_E = 0.0005 ** 0.5


def neural_quant(
    labs: NDArray[np.float64],
    k: int,
    *,
    seed: Optional[int] = 42,
) -> NDArray[np.float64]:
    """
    Competitive-learning quantizer.

    k neurons start on pixels spread evenly through the input. Each
    presentation moves the best-matching neuron and its index neighbors
    toward the pixel, with a Gaussian falloff. Learning rate and radius
    both decay linearly to the end of training. Converged neurons are
    deduplicated and the result padded back to k.

    With fewer pixels than k the pixels are clustered directly.
    """
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    n = len(labs)
    if n == 0:
        return pad_labs(labs, k)
    if n < k:
        return pad_labs(kmeans_palette(labs, n, seed=seed), k)

    neurons = labs[(np.arange(k) * n) // k].copy()
    index = np.arange(k)

    passes = min(n, MAX_PRESENTATIONS)
    step = max(1, n // passes)

    for p in range(passes):
        pixel = labs[(p * step) % n]
        decay = 1.0 - p / passes
        rate = LEARN_RATE * decay

        bmu = int(np.argmin(delta_e_oklab_batch(neurons, pixel)))
        radius = max(1, int(np.floor(k / 4 * decay + 0.5)))

        dist = np.abs(index - bmu)
        near = dist <= radius
        influence = rate * np.exp(-(dist[near] ** 2) / (2.0 * radius * radius))
        neurons[near] += influence[:, np.newaxis] * (pixel - neurons[near])

    unique: list[NDArray[np.float64]] = []
    for neuron in neurons:
        if all(delta_e_oklab(u, neuron) >= DEDUPE_DELTA_E for u in unique):
            unique.append(neuron)

    if len(unique) < k:
        logger.debug("Neural quantizer: %d of %d neurons distinct", len(unique), k)
    return pad_labs(np.array(unique), k)
