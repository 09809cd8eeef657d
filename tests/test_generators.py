# Copyright (c) 2026 Palettekit
# SPDX-License-Identifier: MIT

"""Tests for the harmony, perceptual, accessibility, dataviz and algorithmic generators."""

import numpy as np
import pytest

from palettekit.color.colorspace import hex_to_oklch, hsl_to_rgb, hue_distance, rgb_to_hsl
from palettekit.color.contrast import (
    is_distinguishable_under_cvd,
    relative_luminance,
    wcag_contrast,
    wcag_ratio,
)
from palettekit.color.hexcodes import HEX_RE, hex_to_rgb, quantize_rgb
from palettekit.errors import ColorTypeError, EmptyPaletteError
from palettekit.generators import (
    HARMONIES,
    TECHNIQUES,
    adjust_to_wcag_ratio,
    force_wcag_ratio_from_lightness,
    generate_algorithmic,
    generate_contrast_palettes,
    generate_data_visuals,
    generate_harmony_palettes,
    generate_perceptual_palettes,
    harmony_palette,
    interpolate,
)
from palettekit.generators.accessibility import OUTPUTS, WCAG_AA, WCAG_AAA
from palettekit.generators.algorithmic import SERIES, kelvin_to_rgb, value_noise
from palettekit.generators.common import check_count, ramp
from palettekit.generators.dataviz import DEFAULT_COLORS, SCALES

BLUE = {"primary": ["#3498db"]}

SAMPLE_COLORS = ["#3498db", "#ffff00", "#222222", "#f72f68", "#808080"]


def _all_hex(colors):
    return all(HEX_RE.match(c) for c in colors)


class TestCommon:
    """Count validation and ramps."""

    @pytest.mark.parametrize("bad", [2.5, "3", None, True])
    def test_count_type(self, bad):
        with pytest.raises(TypeError):
            check_count(bad)

    @pytest.mark.parametrize("bad", [0, -3])
    def test_count_value(self, bad):
        with pytest.raises(ValueError):
            check_count(bad)

    def test_ramp(self):
        assert ramp(1) == [0.0]
        assert ramp(3) == [0.0, 0.5, 1.0]


# =============================================================================
# Harmony
# =============================================================================


class TestHarmony:
    """HSL hue-offset harmonies."""

    @pytest.mark.parametrize("name,size", [
        ("complementary", 2),
        ("triadic", 3),
        ("square", 4),
        ("analogous", 3),
        ("doubleSplitComplementary", 6),
    ])
    @pytest.mark.parametrize("count", [1, 5, 9, 20])
    def test_fixed_sizes_ignore_count(self, name, size, count):
        assert len(harmony_palette(BLUE, name, count)) == size

    @pytest.mark.parametrize("count", [1, 2, 9])
    def test_scalable_sizes(self, count):
        assert len(harmony_palette(BLUE, "monochromatic", count)) == count
        assert len(harmony_palette(BLUE, "monochromaticTintShade", count)) == count

    def test_all_keys(self):
        result = generate_harmony_palettes(BLUE)
        assert list(result) == ["harmonyPalette", *HARMONIES]
        for colors in result.values():
            assert _all_hex(colors)

    def test_harmony_palette_is_normalized_input(self):
        result = generate_harmony_palettes({"x": [], "brand": ["#ABC", "#3498DB"]})
        assert result["harmonyPalette"] == ["#aabbcc", "#3498db"]

    def test_zero_offset_is_base(self):
        assert harmony_palette(BLUE, "complementary")[0] == "#3498db"

    def test_complement_hue(self):
        base, comp = harmony_palette(BLUE, "complementary")
        h1 = rgb_to_hsl(hex_to_rgb(base))[0]
        h2 = rgb_to_hsl(hex_to_rgb(comp))[0]
        assert hue_distance(h1, h2) == pytest.approx(180.0, abs=1.5)

    def test_monochromatic_lightness_rises(self):
        ramp_ = harmony_palette(BLUE, "monochromatic", 6)
        lightness = [rgb_to_hsl(hex_to_rgb(c))[2] for c in ramp_]
        assert lightness == sorted(lightness)
        assert lightness[0] == pytest.approx(0.15, abs=0.01)
        assert lightness[-1] == pytest.approx(0.85, abs=0.01)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown harmony"):
            harmony_palette(BLUE, "pentadic")

    def test_empty_palette(self):
        with pytest.raises(EmptyPaletteError):
            generate_harmony_palettes({"a": []})

    def test_not_a_mapping(self):
        with pytest.raises(ColorTypeError):
            generate_harmony_palettes(["#3498db"])


# =============================================================================
# Perceptual
# =============================================================================


class TestPerceptual:
    """Piecewise interpolation in ten spaces."""

    def test_all_techniques(self):
        result = generate_perceptual_palettes({"p": ["#ff0000", "#0000ff"]}, count=7)
        assert tuple(result) == TECHNIQUES
        for name, colors in result.items():
            assert len(colors) == 7, name
            assert _all_hex(colors), name

    @pytest.mark.parametrize("technique", ["lab", "oklab", "hsl", "hsv", "lch", "oklch"])
    def test_endpoints(self, technique):
        colors = interpolate(["#ff0000", "#00ff00", "#0000ff"], 5, technique)
        assert colors[0] == "#ff0000"
        assert colors[-1] == "#0000ff"

    def test_passes_through_middle_stop(self):
        colors = interpolate(["#ff0000", "#00ff00", "#0000ff"], 5, "oklab")
        assert colors[2] == "#00ff00"

    def test_single_color_pairs_with_white(self):
        colors = interpolate(["#3498db"], 4, "oklab")
        assert colors[0] == "#3498db"
        assert colors[-1] == "#ffffff"

    def test_oklch_short_arc(self):
        # Red (~29) to magenta (~328) should not pass through green
        colors = interpolate(["#ff0000", "#ff00ff"], 5, "oklch")
        for c in colors:
            _, _, H = hex_to_oklch(c)
            assert hue_distance(H, 140.0) > 90.0

    def test_red_lift_at_midpoint(self):
        plain = interpolate(["#000080", "#008000"], 3, "hct")
        jz = interpolate(["#000080", "#008000"], 3, "jzazbz")
        assert hex_to_rgb(jz[1])[0] > hex_to_rgb(plain[1])[0]

    def test_unknown_technique(self):
        with pytest.raises(ValueError, match="Unknown technique"):
            interpolate(["#fff"], 3, "cmyk")

    def test_empty(self):
        with pytest.raises(EmptyPaletteError):
            interpolate([], 3)
        with pytest.raises(EmptyPaletteError):
            generate_perceptual_palettes({})


# =============================================================================
# Accessibility
# =============================================================================


class TestWCAGSearch:
    """The two WCAG search strategies."""

    def test_adjust_returns_passing_input(self):
        navy = hex_to_rgb("#000080")
        out = adjust_to_wcag_ratio(navy, np.ones(3), WCAG_AA)
        np.testing.assert_allclose(out, navy)

    def test_adjust_darkens(self):
        out = adjust_to_wcag_ratio(hex_to_rgb("#87ceeb"), np.ones(3), WCAG_AA)
        assert wcag_ratio(out, np.ones(3)) >= WCAG_AA
        # Closest passing lightness, not black
        assert relative_luminance(out) > 0.1

    def test_adjust_lightens_when_dark_fails(self):
        out = adjust_to_wcag_ratio(hex_to_rgb("#404040"), np.zeros(3), WCAG_AAA)
        assert wcag_ratio(out, np.zeros(3)) >= WCAG_AAA

    def test_adjust_falls_back(self):
        # Nothing reaches 21:1 against mid gray
        gray = np.full(3, 0.5)
        out = adjust_to_wcag_ratio(gray, gray, 21.0)
        assert out.tolist() in ([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])

    def test_force_has_no_early_return(self):
        # start_l already passes, but the forced search still converges upward
        out = force_wcag_ratio_from_lightness(220.0, 0.6, 0.05, np.ones(3), WCAG_AAA, "dark")
        assert wcag_ratio(out, np.ones(3)) >= WCAG_AAA
        assert rgb_to_hsl(out)[2] <= 0.05 + 1 / 255

    def test_force_light(self):
        out = force_wcag_ratio_from_lightness(30.0, 0.5, 0.7, np.zeros(3), WCAG_AAA, "light")
        assert wcag_ratio(out, np.zeros(3)) >= WCAG_AAA
        assert rgb_to_hsl(out)[2] >= 0.7 - 1 / 255

    def test_force_bad_direction(self):
        with pytest.raises(ValueError, match="direction"):
            force_wcag_ratio_from_lightness(0.0, 0.5, 0.5, np.ones(3), 4.5, "up")

    def test_results_are_8_bit(self):
        out = adjust_to_wcag_ratio(hex_to_rgb("#87ceeb"), np.ones(3), WCAG_AA)
        np.testing.assert_allclose(out * 255, np.round(out * 255), atol=1e-9)


class TestContrastPalettes:
    """generate_contrast_palettes() guarantees."""

    @pytest.fixture(params=SAMPLE_COLORS)
    def result(self, request):
        return generate_contrast_palettes({"p": [request.param]}, count=9)

    def test_keys_and_sizes(self, result):
        assert tuple(result) == OUTPUTS
        for colors in result.values():
            assert len(colors) == 9
            assert _all_hex(colors)

    @pytest.mark.parametrize("base", SAMPLE_COLORS)
    def test_accessible_pairs(self, base):
        result = generate_contrast_palettes({"p": [base]}, count=9)
        h, s, _ = rgb_to_hsl(hex_to_rgb(base))
        for i, color in enumerate(result["accessible"]):
            if i % 2 == 0:
                pair = quantize_rgb(hsl_to_rgb(h, s * 0.1, 0.96))
            else:
                pair = quantize_rgb(hsl_to_rgb(h, s * 0.8, 0.15))
            assert wcag_ratio(hex_to_rgb(color), pair) >= WCAG_AA

    def test_wcag_tiers(self, result):
        tiers = (
            ("#ffffff", WCAG_AA),
            ("#ffffff", WCAG_AAA),
            ("#000000", WCAG_AA),
            ("#000000", WCAG_AAA),
        )
        for i, color in enumerate(result["wcag"]):
            reference, target = tiers[i % 4]
            assert wcag_contrast(color, reference) >= target

    def test_high_contrast(self, result):
        colors = result["highContrast"]
        for color in colors[:5]:
            assert wcag_contrast(color, "#ffffff") >= WCAG_AAA
        for color in colors[5:]:
            assert wcag_contrast(color, "#000000") >= WCAG_AAA

    def test_high_contrast_distinct(self, result):
        colors = result["highContrast"]
        assert len(set(colors)) == len(colors)

    @pytest.mark.parametrize("count", [2, 9, 20])
    @pytest.mark.parametrize("base", SAMPLE_COLORS + ["#0000ff", "#00ff00", "#ff0000"])
    def test_color_blind_neighbours_distinguishable(self, base, count):
        colors = generate_contrast_palettes({"p": [base]}, count=count)["colorBlindSafe"]
        for a, b in zip(colors, colors[1:]):
            assert is_distinguishable_under_cvd(hex_to_rgb(a), hex_to_rgb(b)), (a, b)

    def test_contrast_scale_monotone(self, result):
        lums = [relative_luminance(hex_to_rgb(c)) for c in result["contrastScale"]]
        assert lums == sorted(lums)

    def test_apca_rises(self, result):
        lums = [relative_luminance(hex_to_rgb(c)) for c in result["apca"]]
        # Higher |Lc| against white means darker
        assert lums[0] > lums[-1]

    def test_token_roles(self, result):
        tokens = result["colorTokenized"]
        # error role has a fixed red hue whatever the base
        h, s, l = rgb_to_hsl(hex_to_rgb(tokens[8]))
        assert hue_distance(h, 0.0) < 1.0
        assert l == pytest.approx(0.40, abs=0.01)
        assert rgb_to_hsl(hex_to_rgb(tokens[0]))[2] == pytest.approx(0.97, abs=0.01)

    def test_single_count(self):
        result = generate_contrast_palettes(BLUE, count=1)
        assert all(len(colors) == 1 for colors in result.values())
        assert wcag_contrast(result["highContrast"][0], "#ffffff") >= WCAG_AAA

    def test_empty(self):
        with pytest.raises(EmptyPaletteError):
            generate_contrast_palettes({"p": []})


# =============================================================================
# Data visualization
# =============================================================================


class TestDataViz:
    """Seven OKLCH scales."""

    def test_keys_and_sizes(self):
        result = generate_data_visuals(BLUE, count=6)
        assert tuple(result) == SCALES
        for colors in result.values():
            assert len(colors) == 6
            assert _all_hex(colors)

    def test_defaults_for_empty_palette(self):
        assert generate_data_visuals({}) == generate_data_visuals({"p": list(DEFAULT_COLORS)})

    def test_missing_colors_use_defaults(self):
        assert generate_data_visuals({"p": ["#0000ff"]}) == generate_data_visuals(
            {"p": list(DEFAULT_COLORS)}
        )

    def test_sequential_light_to_dark(self):
        lightness = [hex_to_oklch(c)[0] for c in generate_data_visuals(BLUE, 5)["sequential"]]
        assert lightness == sorted(lightness, reverse=True)
        assert lightness[0] == pytest.approx(0.92, abs=0.01)

    def test_diverging_midpoint_is_light(self):
        colors = generate_data_visuals({"p": ["#0000ff", "#00ff00", "#ff0000"]}, 5)["diverging"]
        assert hex_to_oklch(colors[2])[0] == pytest.approx(0.90, abs=0.01)
        assert hex_to_oklch(colors[2])[1] < 0.03

    def test_qualitative_hues_spread(self):
        colors = generate_data_visuals(BLUE, 4)["qualitative"]
        hues = [hex_to_oklch(c)[2] for c in colors]
        for a, b in zip(hues, hues[1:]):
            assert hue_distance(a, b) == pytest.approx(90.0, abs=3.0)

    def test_stepped_band_centers(self):
        colors = generate_data_visuals(BLUE, 2)["stepped"]
        lightness = [hex_to_oklch(c)[0] for c in colors]
        assert lightness[0] == pytest.approx(0.88 - 0.145, abs=0.01)
        assert lightness[1] == pytest.approx(0.30 + 0.145, abs=0.01)

    def test_bivariate_corners(self):
        colors = generate_data_visuals(BLUE, 4)["bivariate"]
        lightness = [hex_to_oklch(c)[0] for c in colors]
        np.testing.assert_allclose(lightness, [0.85, 0.45, 0.85, 0.45], atol=0.01)
        _, _, H = hex_to_oklch("#3498db")
        assert hue_distance(hex_to_oklch(colors[1])[2], H) < 3.0

    @pytest.mark.parametrize("count", [3, 4, 6])
    def test_cyclical_wraps(self, count):
        colors = generate_data_visuals(BLUE, count)["cyclical"]
        hues = [hex_to_oklch(c)[2] for c in colors]
        step = 360.0 / count
        # The closing gap back to the first swatch is one step, not zero
        for a, b in zip(hues, hues[1:] + hues[:1]):
            assert hue_distance(a, b) == pytest.approx(step, abs=4.0)
        assert colors[-1] != colors[0]

    def test_cyclical_constant_lightness(self):
        colors = generate_data_visuals(BLUE, 6)["cyclical"]
        for color in colors:
            assert hex_to_oklch(color)[0] == pytest.approx(0.62, abs=0.01)

    def test_spectral_starts_before_base_hue(self):
        colors = generate_data_visuals(BLUE, 7)["spectral"]
        _, _, H = hex_to_oklch("#3498db")
        assert hue_distance(hex_to_oklch(colors[0])[2], (H - 30.0) % 360.0) < 4.0
        lightness = [hex_to_oklch(c)[0] for c in colors]
        np.testing.assert_allclose(lightness, [0.45, 0.60, 0.80, 0.72, 0.62, 0.50, 0.42], atol=0.01)


# =============================================================================
# Algorithmic
# =============================================================================


class TestAlgorithmic:
    """Procedural series."""

    def test_keys_and_sizes(self):
        result = generate_algorithmic(BLUE, count=8)
        assert tuple(result) == SERIES
        for colors in result.values():
            assert len(colors) == 8
            assert _all_hex(colors)

    def test_single_count(self):
        result = generate_algorithmic(BLUE, count=1)
        assert all(len(colors) == 1 for colors in result.values())

    def test_deterministic(self):
        assert generate_algorithmic(BLUE) == generate_algorithmic(BLUE)

    def test_seed_follows_base_color(self):
        a = generate_algorithmic({"p": ["#3498db"]})
        b = generate_algorithmic({"p": ["#db3434"]})
        assert a["random"] != b["random"]
        assert a["noise"] != b["noise"]

    def test_empty_palette_uses_defaults(self):
        assert generate_algorithmic({}) == generate_algorithmic(
            {"p": ["#0065ff", "#ff0000", "#00ff00", "#ffff00"]}
        )

    def test_bezier_endpoints(self):
        colors = generate_algorithmic({"p": ["#ff0000", "#00ff00", "#0000ff", "#ffffff"]}, 5)
        assert colors["bezierInterpolation"][0] == "#ff0000"
        assert colors["bezierInterpolation"][-1] == "#ffffff"

    def test_golden_angle_steps(self):
        hues = [hex_to_oklch(c)[2] for c in generate_algorithmic(BLUE, 3)["goldenRatio"]]
        assert hue_distance(hues[0], hues[1]) == pytest.approx(137.5, abs=3.0)

    def test_value_noise_range(self):
        noise = value_noise(7)
        values = [noise(x / 10) for x in range(300)]
        assert min(values) >= 0.0
        assert max(values) <= 1.0
        assert noise(1.0) == value_noise(7)(1.0)

    def test_kelvin(self):
        warm = kelvin_to_rgb(1800)
        assert warm[0] > warm[2]
        daylight = kelvin_to_rgb(6500)
        assert daylight.min() > 0.85
        np.testing.assert_allclose(kelvin_to_rgb(100), kelvin_to_rgb(1667))
        np.testing.assert_allclose(kelvin_to_rgb(90000), kelvin_to_rgb(25000))

    def test_blackbody_warm_to_cool(self):
        colors = generate_algorithmic({"p": ["#ff0000"]}, 5)["blackbody"]
        first, last = hex_to_rgb(colors[0]), hex_to_rgb(colors[-1])
        assert first[0] - first[2] > last[0] - last[2]

    def test_cubehelix_dark_to_light(self):
        colors = generate_algorithmic(BLUE, 6)["cubehelix"]
        assert colors[0] == "#000000"
        assert colors[-1] == "#ffffff"

    def test_temperature_arc(self):
        colors = generate_algorithmic(BLUE, 5)["temperature"]
        _, _, H = hex_to_oklch("#3498db")
        offset = H - 120.0
        assert hue_distance(hex_to_oklch(colors[0])[2], (20.0 + offset) % 360.0) < 4.0
        assert hue_distance(hex_to_oklch(colors[-1])[2], (220.0 + offset) % 360.0) < 4.0

    def test_temperature_brightest_mid_scale(self):
        colors = generate_algorithmic(BLUE, 5)["temperature"]
        lightness = [hex_to_oklch(c)[0] for c in colors]
        assert int(np.argmax(lightness)) == 2
        assert lightness[2] == pytest.approx(0.80, abs=0.01)
        assert lightness[0] == pytest.approx(0.35, abs=0.01)
        assert lightness[-1] == pytest.approx(0.35, abs=0.01)

    def test_harmonic_series_darkens_and_saturates(self):
        colors = generate_algorithmic(BLUE, 5)["harmonicSeries"]
        lch = [hex_to_oklch(c) for c in colors]
        lightness = [L for L, _, _ in lch]
        chroma = [C for _, C, _ in lch]
        assert lightness[0] == pytest.approx(0.88, abs=0.01)
        assert lightness[-1] == pytest.approx(0.28, abs=0.01)
        assert all(a > b for a, b in zip(lightness, lightness[1:]))
        assert chroma[1] > chroma[0]
        assert chroma[-1] > chroma[0]

    def test_fibonacci_hue_steps(self):
        colors = generate_algorithmic(BLUE, 5)["fibonacci"]
        _, _, H = hex_to_oklch("#3498db")
        for color, fib in zip(colors, (1, 1, 2, 3, 5)):
            assert hue_distance(hex_to_oklch(color)[2], (H + fib * 47) % 360.0) < 4.0

    def test_sinusoidal_lightness_band(self):
        colors = generate_algorithmic(BLUE, 9)["sinusoidal"]
        lightness = [hex_to_oklch(c)[0] for c in colors]
        assert lightness[0] == pytest.approx(0.55, abs=0.01)
        assert min(lightness) >= 0.29
        assert max(lightness) <= 0.81
