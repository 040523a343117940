"""Tests for display values derived from decoded records."""

import pytest

from surfbeam_status import decode_modem, decode_outdoor_unit
from surfbeam_status.derived import (
    SignalGrade,
    format_byte_count,
    format_power,
    format_resistance,
    format_symbol_rate,
    format_temperature,
    snr_grade,
    summarize_modem,
    summarize_outdoor_unit,
)
from surfbeam_status.models import ModemRecord


@pytest.mark.unit
class TestFormatting:
    """Test the individual display formatters."""

    def test_power(self):
        assert format_power(-50.0) == "-50.0 dBm / 10.0 nW"
        assert format_power(0.0) == "0.0 dBm / 1.0 mW"

    def test_resistance(self):
        assert format_resistance(11.2) == "11.2 Ω"

    def test_temperature(self):
        assert format_temperature(42.5) == "42.5 °C"
        assert format_temperature(-5.0) == "-5 °C"

    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, "0 Bytes"),
            (1023, "1023 Bytes"),
            (1536, "1.500 kBytes"),
            (1024 * 1024, "1.000 MBytes"),
            (9876543210, "9.198 GBytes"),
        ],
    )
    def test_byte_count(self, count, expected):
        assert format_byte_count(count) == expected

    @pytest.mark.parametrize(
        "rate,expected",
        [
            (999, "999 Sym/s"),
            (625000, "625.000 kSym/s"),
            (20000000, "20.000 MSym/s"),
        ],
    )
    def test_symbol_rate(self, rate, expected):
        assert format_symbol_rate(rate) == expected

    @pytest.mark.parametrize(
        "snr,grade",
        [
            (12.5, SignalGrade.GREEN),
            (10.0, SignalGrade.GREEN),
            (9.9, SignalGrade.YELLOW),
            (7.0, SignalGrade.YELLOW),
            (4.0, SignalGrade.ORANGE),
            (3.9, SignalGrade.RED),
            (-2.0, SignalGrade.RED),
        ],
    )
    def test_snr_grade(self, snr, grade):
        assert snr_grade(snr) is grade


@pytest.mark.unit
class TestSummaries:
    """Test record summaries."""

    def test_modem_summary(self, modem_document):
        summary = summarize_modem(decode_modem(modem_document).record)

        assert summary["modem_state"] == "Online"
        assert summary["modem_state_step"] == 5
        assert summary["beam_color"] == "Blue"
        assert summary["rx_snr"] == "12.5 dB"
        assert summary["rx_snr_grade"] == "green"
        assert summary["rx_snr_gauge"] == 90
        assert summary["rx_snr_interpolated"] == 55
        assert summary["rx_power"] == "-50.0 dBm / 10.0 nW"
        assert summary["rx_power_gauge"] == 80
        assert summary["rx_power_interpolated"] == 37
        assert summary["cable_attenuation"] == "6.0 dB"
        assert summary["cable_attenuation_interpolated"] == 40
        assert summary["cable_resistance"] == "11.2 Ω"
        assert summary["tx_packets"] == "7654"
        assert summary["rx_packets"] == "1234567"
        assert summary["tx_bytes"] == "1.500 kBytes"
        assert summary["rx_bytes"] == "9.198 GBytes"
        assert summary["uplink_symbol_rate"] == "625.000 kSym/s"
        assert summary["downlink_symbol_rate"] == "20.000 MSym/s"

    def test_default_modem_summary(self):
        summary = summarize_modem(ModemRecord())

        assert summary["modem_state"] == "Unknown"
        assert summary["modem_state_step"] == 0
        assert summary["rx_snr_grade"] == "red"
        assert summary["rx_power_interpolated"] == 119

    def test_outdoor_unit_summary(self, outdoor_unit_document):
        summary = summarize_outdoor_unit(decode_outdoor_unit(outdoor_unit_document).record)

        assert summary["polarization"] == "Circular Left"
        assert summary["beam_color"] == "Orange"
        assert summary["temperature"] == "42.5 °C"
        assert summary["tx_if_power"] == "-20.0 dBm / 10.0 µW"
        assert summary["tx_if_power_gauge"] == 60
        assert summary["tx_if_power_interpolated"] == 60
        assert summary["tx_rf_power"] == "28.0 dBm / 631.0 mW"
        assert summary["tx_rf_power_interpolated"] == 52
