"""Tests for brightness and color temperature conversions."""

import pytest

from lucia import units
from lucia.errors import InvalidRangeError


class TestBrightness:

    def test_bounds(self):
        assert units.to_device_brightness(0) == 0
        assert units.to_device_brightness(100) == 255
        assert units.to_device_brightness(50) == 128

    def test_range_and_monotonic(self):
        values = [units.to_device_brightness(p / 10) for p in range(0, 1001)]
        assert all(0 <= v <= 255 for v in values)
        assert values == sorted(values)

    @pytest.mark.parametrize("percent", [-0.1, 100.5, 255])
    def test_out_of_range_rejected(self, percent):
        with pytest.raises(InvalidRangeError):
            units.to_device_brightness(percent)

    def test_out_of_range_is_a_value_error(self):
        with pytest.raises(ValueError):
            units.to_device_brightness(101)

    def test_inverse_within_rounding(self):
        for percent in range(0, 101):
            back = units.from_device_brightness(units.to_device_brightness(percent))
            assert abs(back - percent) <= 100 / 255


class TestMired:

    def test_known_values(self):
        assert units.to_mired(2000) == 500
        assert units.to_mired(6500) == 154
        assert units.to_mired(4000) == 250

    def test_decreasing_over_lighting_range(self):
        values = [units.to_mired(k) for k in range(2000, 6501, 50)]
        assert all(154 <= v <= 500 for v in values)
        assert all(a > b for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("kelvin", [0, -100, 15])
    def test_invalid_kelvin_rejected(self, kelvin):
        with pytest.raises(InvalidRangeError):
            units.to_mired(kelvin)

    def test_smallest_representable_kelvin(self):
        assert units.to_mired(16) == 62500

    def test_inverse_within_rounding(self):
        for kelvin in (2000, 2700, 4000, 6500):
            assert abs(units.from_mired(units.to_mired(kelvin)) - kelvin) <= kelvin * 0.01
