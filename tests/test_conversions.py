"""Tests for dBm/Watt conversion and gauge percentage interpolation."""

import math

import pytest

from surfbeam_status.conversions import (
    MICRO_SIGN,
    PercentInterpolation,
    cable_attenuation_percent,
    clamp_percent,
    dbm_to_scaled_string,
    dbm_to_watts,
    rx_power_percent,
    rx_snr_percent,
    tx_if_power_percent,
    tx_rf_power_percent,
    watts_to_scaled_string,
)


@pytest.mark.unit
class TestPowerConversion:
    """Test dBm to Watt conversion."""

    def test_thirty_dbm_is_one_watt(self):
        assert dbm_to_watts(30.0) == pytest.approx(1.0)

    def test_zero_dbm_is_one_milliwatt(self):
        assert dbm_to_watts(0.0) == pytest.approx(1.0e-3)

    def test_negative_dbm(self):
        assert dbm_to_watts(-50.0) == pytest.approx(1.0e-8)

    def test_ten_db_steps_scale_by_ten(self):
        assert dbm_to_watts(20.0) / dbm_to_watts(10.0) == pytest.approx(10.0)

    @pytest.mark.parametrize(
        "lower,higher",
        [(-150.0, -149.9), (-72.6, -50.0), (-0.01, 0.0), (0.0, 0.01), (14.5, 28.0), (30.0, 60.0)],
    )
    def test_strictly_increasing(self, lower, higher):
        assert dbm_to_watts(lower) < dbm_to_watts(higher)


@pytest.mark.unit
class TestScaledWattString:
    """Test SI-prefixed Watt formatting."""

    @pytest.mark.parametrize(
        "watts,expected",
        [
            (1.0, "1.000 W"),
            (12.5, "12.500 W"),
            (0.001, "1.0 mW"),
            (0.0005, f"500.0 {MICRO_SIGN}W"),
            (2.5e-9, "2.5 nW"),
            (3.0e-12, "3.0 pW"),
            (4.0e-15, "4.0 fW"),
        ],
    )
    def test_tiers(self, watts, expected):
        assert watts_to_scaled_string(watts) == expected

    def test_micro_sign_is_latin1_micro(self):
        assert MICRO_SIGN == "µ"

    def test_below_femto_falls_back_to_plain_watts(self):
        assert watts_to_scaled_string(1.0e-18) == "1e-18 W"

    def test_zero_watts(self):
        assert watts_to_scaled_string(0.0) == "0 W"

    def test_negative_value_uses_magnitude_for_tier(self):
        assert watts_to_scaled_string(-0.5) == "-500.0 mW"

    def test_dbm_to_scaled_string(self):
        assert dbm_to_scaled_string(0.0) == "1.0 mW"
        assert dbm_to_scaled_string(-50.0) == "10.0 nW"
        assert dbm_to_scaled_string(30.0) == "1.000 W"


@pytest.mark.unit
class TestPercentInterpolation:
    """Test the gauge percentage polynomials and their calibration floors."""

    def test_rx_snr(self):
        assert rx_snr_percent(10.0) == pytest.approx(46.42859)

    def test_rx_snr_at_floor_is_zero(self):
        # The floor is inclusive and the line crosses zero there.
        assert rx_snr_percent(-3.0) == pytest.approx(0.0, abs=1e-6)

    def test_rx_snr_below_floor(self):
        assert rx_snr_percent(-3.5) == 0.0

    def test_rx_power(self):
        assert rx_power_percent(-50.0) == pytest.approx(37.16008)
        assert rx_power_percent(-80.0) == 0.0

    def test_tx_if_power(self):
        assert tx_if_power_percent(-20.0) == pytest.approx(60.19408)
        assert tx_if_power_percent(-36.0) == 0.0

    def test_tx_rf_power(self):
        assert tx_rf_power_percent(28.0) == pytest.approx(52.42732)
        assert tx_rf_power_percent(14.0) == 0.0

    def test_cable_attenuation(self):
        assert cable_attenuation_percent(6.0) == pytest.approx(39.99996)
        assert cable_attenuation_percent(0.0) == 0.0
        assert cable_attenuation_percent(-1.0) == 0.0

    def test_custom_interpolation(self):
        interpolation = PercentInterpolation(floor=1.0, offset=5.0, slope=2.0)

        assert interpolation(0.5) == 0.0
        assert interpolation(1.0) == 7.0
        assert interpolation(10.0) == 25.0


@pytest.mark.unit
class TestClampPercent:
    """Test rounding into the progress indicator range."""

    @pytest.mark.parametrize(
        "value,expected",
        [(46.43, 46), (254.6, 255), (300.0, 255), (-5.0, 0), (0.0, 0)],
    )
    def test_clamp(self, value, expected):
        assert clamp_percent(value) == expected

    def test_nan_is_zero(self):
        assert clamp_percent(math.nan) == 0

    def test_returns_int(self):
        assert isinstance(clamp_percent(12.2), int)
