"""Tests for coordinate formatting and visual hints."""

import pytest

from starnamer.astronomy.appearance import (
    DEFAULT_COLOR,
    brightness_for_magnitude,
    color_for_spectral_class,
    visual_hint,
)
from starnamer.astronomy.coordinates import (
    MINUS_SIGN,
    format_coordinates,
    format_declination,
    format_right_ascension,
    split_right_ascension,
)


class TestFormatCoordinates:
    """Test sexagesimal formatting."""

    def test_vega(self):
        """Reference star formats exactly."""
        assert format_coordinates(18.6156, 38.7836) == "18h 36m 56.2s +38° 47′ 01″"

    def test_zero(self):
        assert format_coordinates(0.0, 0.0) == "00h 00m 00.0s +00° 00′ 00″"

    def test_southern_uses_minus_sign(self):
        """Southern declinations use U+2212, not a hyphen."""
        text = format_declination(-16.7161)
        assert text.startswith(MINUS_SIGN)
        assert "-" not in text
        assert text == "−16° 42′ 58″"

    def test_poles(self):
        assert format_declination(90.0) == "+90° 00′ 00″"
        assert format_declination(-90.0) == "−90° 00′ 00″"

    def test_padding(self):
        assert format_right_ascension(1.0 + 1 / 60 + 1 / 3600) == "01h 01m 01.0s"

    def test_seconds_carry_into_minutes(self):
        """Seconds that round to 60 roll over rather than printing 60.0."""
        hours, minutes, seconds = split_right_ascension(1 + 59.99 / 3600)
        assert (hours, minutes, seconds) == (1, 1, 0.0)

    def test_right_ascension_wraps_at_24(self):
        assert format_right_ascension(23.99999999) == "00h 00m 00.0s"

    def test_declination_seconds_carry(self):
        assert format_declination(10 + 59.7 / 3600) == "+10° 01′ 00″"


class TestVisualHint:
    """Test brightness, size and color hints."""

    @pytest.mark.parametrize(
        "magnitude,expected",
        [(-1.44, 1.0), (0.03, 1.0), (6.0, 0.78), (20.0, 0.3)],
    )
    def test_brightness_clamped(self, magnitude: float, expected: float):
        assert brightness_for_magnitude(magnitude) == pytest.approx(expected)

    def test_spectral_colors(self):
        assert color_for_spectral_class("M2Ib") == "#FF6347"
        assert color_for_spectral_class("k1.5III") == "#FFA500"
        assert color_for_spectral_class("B8Ia") == "#B0C4DE"

    def test_unknown_spectral_class(self):
        assert color_for_spectral_class(None) == DEFAULT_COLOR
        assert color_for_spectral_class("") == DEFAULT_COLOR
        assert color_for_spectral_class("WC8") == DEFAULT_COLOR

    def test_visual_hint_ranges(self):
        hint = visual_hint(0.03, "A0V")
        assert hint.brightness == 1.0
        assert hint.size == 1.5
        assert hint.color == "#F8F8FF"

        dim = visual_hint(15.0, "M5V")
        assert dim.brightness == 0.3
        assert dim.size == 0.8
