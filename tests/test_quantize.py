# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""Tests for pixel sampling, the ten quantizers, and image extraction."""

import numpy as np
import pytest

from palettekit.color.colorspace import hex_to_oklch, hue_distance, srgb_to_oklab, srgb_uint8_to_oklab
from palettekit.color.hexcodes import HEX_RE
from palettekit.errors import ColorTypeError
from palettekit.quantize import (
    ALGORITHMS,
    extract_image_palettes,
    extract_palette,
    pad_labs,
    pad_rgbs,
    pixels_from_image,
    sample_pixels,
)
from palettekit.quantize.boxes import dominant_colors, median_cut, octree_colors
from palettekit.quantize.distinct import farthest_point
from palettekit.quantize.kmeans import kmeans_palette, muted_palette, vibrant_palette
from palettekit.quantize.neural import neural_quant
from palettekit.quantize.sampling import as_rgba_pixels, synthetic_pixels
from palettekit.quantize.statistics import HUE_BINS, color_moments, hue_histogram


# =============================================================================
# Helpers
# =============================================================================


def _blocks(*specs: tuple[tuple[int, int, int], int]) -> np.ndarray:
    """Opaque (N, 4) buffer from ((r, g, b), count) blocks."""
    rows = [np.tile([*rgb, 255], (count, 1)) for rgb, count in specs]
    return np.concatenate(rows).astype(np.uint8)


RED = (230, 30, 40)
BLUE = (30, 60, 220)
GREEN = (40, 190, 60)
GRAY = (128, 128, 128)


@pytest.fixture
def three_color_pixels():
    """Three well-separated color blocks with a little noise."""
    base = _blocks((RED, 400), (BLUE, 300), (GREEN, 200))
    noise = np.random.default_rng(0).integers(-6, 7, size=(len(base), 3))
    base[:, :3] = np.clip(base[:, :3].astype(int) + noise, 0, 255).astype(np.uint8)
    return base


def _lab_of(rgb):
    return srgb_to_oklab(np.array(rgb, dtype=np.float64) / 255.0)


# =============================================================================
# Sampling
# =============================================================================


class TestPixelBuffers:
    """Accepted buffer forms and their validation."""

    def test_bytes(self):
        pixels = as_rgba_pixels(bytes([255, 0, 0, 255] * 10))
        assert pixels.shape == (10, 4)

    def test_image_shaped_array(self):
        img = np.zeros((4, 5, 4), dtype=np.uint8)
        assert as_rgba_pixels(img, width=5, height=4).shape == (20, 4)

    def test_rgb_array_gets_opaque_alpha(self):
        pixels = as_rgba_pixels(np.zeros((3, 3), dtype=np.uint8))
        np.testing.assert_array_equal(pixels[:, 3], [255, 255, 255])

    def test_length_not_multiple_of_four(self):
        with pytest.raises(ValueError, match="multiple of 4"):
            as_rgba_pixels(bytes(7))

    def test_size_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            as_rgba_pixels(bytes(16), width=3, height=3)

    def test_wrong_dtype(self):
        with pytest.raises(ColorTypeError, match="uint8"):
            as_rgba_pixels(np.zeros((4, 4), dtype=np.float32))

    def test_wrong_type(self):
        with pytest.raises(ColorTypeError):
            as_rgba_pixels([255, 0, 0, 255])

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            as_rgba_pixels(np.zeros((2, 2, 2, 4), dtype=np.uint8))


class TestSamplePixels:
    """Stride sampling and alpha filtering."""

    def test_transparent_dropped(self):
        pixels = np.array([[255, 0, 0, 255], [0, 255, 0, 0], [0, 0, 255, 127]], dtype=np.uint8)
        rgb, lab = sample_pixels(pixels)
        assert rgb.shape == (1, 3)
        assert lab.shape == (1, 3)
        np.testing.assert_allclose(rgb[0], [1.0, 0.0, 0.0])

    def test_stride_bounds_sample(self):
        pixels = _blocks((GRAY, 10_000))
        rgb, _ = sample_pixels(pixels, max_pixels=1000)
        assert len(rgb) == 1000

    def test_small_buffer_untouched(self):
        rgb, _ = sample_pixels(_blocks((GRAY, 50)), max_pixels=1000)
        assert len(rgb) == 50

    def test_invalid_budget(self):
        with pytest.raises(ValueError, match="max_pixels"):
            sample_pixels(_blocks((GRAY, 5)), max_pixels=0)

    def test_synthetic_is_deterministic(self):
        a = synthetic_pixels(["#ff0000", "#0000ff"])
        b = synthetic_pixels(["#ff0000", "#0000ff"])
        assert a.shape == (1600, 4)
        np.testing.assert_array_equal(a, b)

    def test_lab_matches_uint8_conversion(self):
        pixels = np.array(
            [[52, 152, 219, 255], [247, 47, 104, 200], [10, 10, 10, 0], [254, 254, 254, 128]],
            dtype=np.uint8,
        )
        rgb, lab = sample_pixels(pixels)
        np.testing.assert_allclose(lab, srgb_uint8_to_oklab(pixels[[0, 1, 3], :3]))
        np.testing.assert_allclose(lab, srgb_to_oklab(rgb), atol=1e-12)


class TestPadding:
    """Exact-k padding."""

    def test_pad_from_last_color(self):
        labs = np.array([[0.6, 0.1, 0.05]])
        padded = pad_labs(labs, 4)
        assert padded.shape == (4, 3)
        np.testing.assert_allclose(padded[0], labs[0])
        np.testing.assert_allclose(padded[1:, 1:], np.tile(labs[0, 1:], (3, 1)))
        np.testing.assert_allclose(padded[1:, 0], [0.2 + 0.6 * i / 4 for i in range(1, 4)])

    def test_pad_empty_is_gray(self):
        padded = pad_labs(np.zeros((0, 3)), 2)
        np.testing.assert_allclose(padded[:, 1:], 0.0)

    def test_truncate(self):
        assert pad_labs(np.zeros((5, 3)), 2).shape == (2, 3)

    def test_pad_does_not_alias_input(self):
        labs = np.array([[0.5, 0.0, 0.0], [0.6, 0.0, 0.0]])
        out = pad_labs(labs, 1)
        out[0, 0] = 0.9
        assert labs[0, 0] == 0.5

    def test_pad_rgbs_keeps_hue(self):
        padded = pad_rgbs(np.array([[1.0, 0.0, 0.0]]), 3)
        assert padded.shape == (3, 3)
        assert np.all(padded[:, 0] >= padded[:, 2])


# =============================================================================
# Quantizers
# =============================================================================


class TestKMeans:
    """Chroma-weighted k-means++."""

    def test_finds_three_clusters(self, three_color_pixels):
        _, labs = sample_pixels(three_color_pixels)
        centroids = kmeans_palette(labs, 3)
        assert centroids.shape == (3, 3)
        for rgb in (RED, BLUE, GREEN):
            dists = np.linalg.norm(centroids - _lab_of(rgb), axis=1)
            assert dists.min() < 0.05

    @pytest.mark.parametrize("k", [1, 2, 5, 12])
    def test_exact_k(self, three_color_pixels, k):
        _, labs = sample_pixels(three_color_pixels)
        assert kmeans_palette(labs, k).shape == (k, 3)

    def test_single_color_padded(self):
        _, labs = sample_pixels(_blocks((RED, 100)))
        assert kmeans_palette(labs, 6).shape == (6, 3)

    def test_deterministic(self, three_color_pixels):
        _, labs = sample_pixels(three_color_pixels)
        np.testing.assert_array_equal(kmeans_palette(labs, 4), kmeans_palette(labs, 4))

    def test_saturated_minority_survives(self):
        # A small saturated patch on a large gray field is still ranked
        _, labs = sample_pixels(_blocks((GRAY, 2000), (RED, 100)))
        centroids = kmeans_palette(labs, 2)
        dists = np.linalg.norm(centroids - _lab_of(RED), axis=1)
        assert dists.min() < 0.05

    def test_input_not_mutated(self, three_color_pixels):
        _, labs = sample_pixels(three_color_pixels)
        before = labs.copy()
        kmeans_palette(labs, 3)
        np.testing.assert_array_equal(labs, before)


class TestBandFilters:
    """Vibrant / muted pre-filters."""

    def test_vibrant_prefers_saturated(self):
        _, labs = sample_pixels(_blocks((GRAY, 500), (RED, 200), (BLUE, 200)))
        out = vibrant_palette(labs, 2)
        chroma = np.hypot(out[:, 1], out[:, 2])
        assert np.all(chroma > 0.10)

    def test_vibrant_falls_back(self):
        _, labs = sample_pixels(_blocks((GRAY, 100)))
        assert vibrant_palette(labs, 3).shape == (3, 3)

    def test_muted_prefers_soft(self):
        soft = (150, 115, 95)
        _, labs = sample_pixels(_blocks((RED, 500), (soft, 300)))
        out = muted_palette(labs, 1)
        assert np.hypot(out[0, 1], out[0, 2]) <= 0.09


class TestBoxes:
    """Median cut, dominant and octree in sRGB."""

    def test_median_cut_splits(self, three_color_pixels):
        rgbs, _ = sample_pixels(three_color_pixels)
        out = median_cut(rgbs, 4)
        assert out.shape == (4, 3)
        assert np.all((out >= 0.0) & (out <= 1.0))

    def test_median_cut_single_pixel(self):
        out = median_cut(np.array([[0.2, 0.4, 0.6]]), 3)
        assert out.shape == (3, 3)
        np.testing.assert_allclose(out[0], [0.2, 0.4, 0.6])

    def test_dominant_ranks_by_count(self):
        rgbs, _ = sample_pixels(_blocks((BLUE, 50), (RED, 300), (GREEN, 100)))
        out = dominant_colors(rgbs, 3)
        assert np.argmax(out[0]) == 0  # red first
        assert np.argmax(out[1]) == 1  # then green
        assert np.argmax(out[2]) == 2

    def test_octree_exact_k(self, three_color_pixels):
        rgbs, _ = sample_pixels(three_color_pixels)
        for k in (1, 3, 8):
            assert octree_colors(rgbs, k).shape == (k, 3)

    def test_octree_keeps_pure_colors(self):
        rgbs, _ = sample_pixels(_blocks((RED, 100), (BLUE, 100)))
        out = octree_colors(rgbs, 2)
        np.testing.assert_allclose(
            sorted(map(tuple, out)),
            sorted([tuple(np.array(RED) / 255), tuple(np.array(BLUE) / 255)]),
            atol=1e-9,
        )


class TestStatistics:
    """Moments and hue histogram."""

    def test_moments_single_is_mean(self, three_color_pixels):
        _, labs = sample_pixels(three_color_pixels)
        out = color_moments(labs, 1)
        mean = labs.mean(axis=0)
        centered = labs - mean
        skew = np.cbrt(np.mean(centered ** 3, axis=0))
        expected = mean - skew * 0.1
        expected[0] = np.clip(expected[0], 0.0, 1.0)
        np.testing.assert_allclose(out[0], expected, atol=1e-12)

    def test_moments_lightness_clipped(self):
        _, labs = sample_pixels(_blocks(((0, 0, 0), 50), ((255, 255, 255), 50)))
        out = color_moments(labs, 5)
        assert np.all((out[:, 0] >= 0.0) & (out[:, 0] <= 1.0))

    def test_histogram_peaks_follow_hues(self):
        _, labs = sample_pixels(_blocks((RED, 400), (BLUE, 300), (GREEN, 200)))
        out = hue_histogram(labs, 3)
        hues = np.degrees(np.arctan2(out[:, 2], out[:, 1])) % 360
        for rgb in (RED, BLUE, GREEN):
            target = np.degrees(np.arctan2(_lab_of(rgb)[2], _lab_of(rgb)[1])) % 360
            assert min(hue_distance(h, target) for h in hues) < 10.0

    def test_histogram_synthesizes_bins(self):
        _, labs = sample_pixels(_blocks((RED, 100)))
        out = hue_histogram(labs, 6)
        assert out.shape == (6, 3)
        assert HUE_BINS == 72


class TestNeuralAndDistinct:
    """Self-organizing map and farthest-point selection."""

    def test_neural_exact_k(self, three_color_pixels):
        _, labs = sample_pixels(three_color_pixels)
        assert neural_quant(labs, 5).shape == (5, 3)

    def test_neural_fewer_pixels_than_k(self):
        labs = np.array([[0.5, 0.1, 0.0], [0.7, -0.1, 0.0]])
        assert neural_quant(labs, 4).shape == (4, 3)

    def test_farthest_point_spreads(self, three_color_pixels):
        _, labs = sample_pixels(three_color_pixels)
        out = farthest_point(labs, 3)
        for rgb in (RED, BLUE, GREEN):
            assert np.linalg.norm(out - _lab_of(rgb), axis=1).min() < 0.06

    def test_farthest_point_duplicates_pad(self):
        labs = np.tile([0.6, 0.1, 0.1], (20, 1))
        assert farthest_point(labs, 4).shape == (4, 3)

    def test_neural_collapses_identical_neurons(self):
        labs = np.tile([0.6, 0.1, 0.05], (60, 1))
        out = neural_quant(labs, 3)
        np.testing.assert_allclose(out[0], [0.6, 0.1, 0.05])
        # One distinct neuron survives; the rest is padding
        np.testing.assert_allclose(out[1:, 0], [0.4, 0.6])
        np.testing.assert_allclose(out[1:, 1:], [[0.1, 0.05], [0.1, 0.05]])

    def test_farthest_point_max_min_order(self):
        labs = np.array([
            [0.5, 0.0, 0.0],
            [0.5, 0.01, 0.0],
            [0.5, 0.2, 0.0],
            [0.5, -0.2, 0.0],
        ])
        out = farthest_point(labs, 3)
        # Most chromatic first, then its opposite, then the point between them
        np.testing.assert_allclose(out, labs[[2, 3, 0]])


# =============================================================================
# Extraction
# =============================================================================


class TestExtractImagePalettes:
    """extract_image_palettes() over all algorithms."""

    def test_all_algorithms_exact_k(self, three_color_pixels):
        result = extract_image_palettes(three_color_pixels.tobytes(), k=5)
        assert tuple(result) == ALGORITHMS
        for name, colors in result.items():
            assert len(colors) == 5, name
            assert all(HEX_RE.match(c) for c in colors), name

    def test_k_one(self, three_color_pixels):
        result = extract_image_palettes(three_color_pixels, k=1)
        assert all(len(colors) == 1 for colors in result.values())

    def test_empty_buffer_is_black(self):
        result = extract_image_palettes(b"", k=4)
        assert all(colors == ["#000000"] * 4 for colors in result.values())

    def test_transparent_buffer_is_black(self):
        pixels = np.zeros((100, 4), dtype=np.uint8)
        result = extract_image_palettes(pixels, k=3, algorithms=["kmeans", "octree"])
        assert result == {"kmeans": ["#000000"] * 3, "octree": ["#000000"] * 3}

    def test_subset_order_and_dedupe(self, three_color_pixels):
        result = extract_image_palettes(
            three_color_pixels, k=2, algorithms=["octree", "kmeans", "octree"]
        )
        assert list(result) == ["octree", "kmeans"]

    def test_single_name_string(self, three_color_pixels):
        assert list(extract_image_palettes(three_color_pixels, algorithms="deltaE")) == ["deltaE"]

    def test_unknown_algorithm(self, three_color_pixels):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            extract_image_palettes(three_color_pixels, algorithms=["kmeans", "magic"])

    def test_invalid_k(self, three_color_pixels):
        with pytest.raises(ValueError, match="k must be"):
            extract_image_palettes(three_color_pixels, k=0)

    def test_deterministic(self, three_color_pixels):
        assert extract_image_palettes(three_color_pixels, k=4) == extract_image_palettes(
            three_color_pixels, k=4
        )

    def test_synthetic_from_hints(self):
        result = extract_image_palettes(None, k=2, hint_colors=["#ff0000"], algorithms=["kmeans"])
        _, _, H = hex_to_oklch(result["kmeans"][0])
        assert hue_distance(H, hex_to_oklch("#ff0000")[2]) < 10.0

    def test_extract_palette_wrapper(self, three_color_pixels):
        colors = extract_palette(three_color_pixels, k=3, algorithm="medianCut")
        assert len(colors) == 3


class TestPillowConversion:
    """In-memory Pillow images become RGBA arrays."""

    def test_rgb_image_converted(self):
        Image = pytest.importorskip("PIL.Image")
        img = Image.new("RGB", (4, 3), (255, 0, 0))
        pixels = pixels_from_image(img)
        assert pixels.shape == (3, 4, 4)
        np.testing.assert_array_equal(pixels[0, 0], [255, 0, 0, 255])

    def test_extract_from_image(self):
        Image = pytest.importorskip("PIL.Image")
        img = Image.new("RGBA", (10, 10), (0, 0, 255, 255))
        colors = extract_palette(pixels_from_image(img), k=2, algorithm="dominant")
        assert colors[0] == "#0000ff"

    def test_not_an_image(self):
        pytest.importorskip("PIL.Image")
        with pytest.raises(ColorTypeError):
            pixels_from_image(np.zeros((2, 2, 4), dtype=np.uint8))
