"""Tests for decoding ##-delimited status documents into records."""

import dataclasses

import pytest
from conftest import MODEM_FIELD_COUNT, OUTDOOR_UNIT_FIELD_COUNT, build_document

from surfbeam_status import (
    BeamColor,
    ModemRecord,
    ModemState,
    OutdoorUnitRecord,
    Polarization,
    SurfBeamFieldCountError,
    decode_modem,
    decode_outdoor_unit,
)
from surfbeam_status.client.decoder import StatusDocumentDecoder
from surfbeam_status.conversions import rx_snr_percent
from surfbeam_status.schema import MODEM_SCHEMA_UT_3_7_8_9_5, OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5


@pytest.mark.unit
class TestFieldSplitting:
    """Test the two-character delimiter handling."""

    def test_double_hash_separates_fields(self):
        assert StatusDocumentDecoder().split_fields("a##b##c") == ["a", "b", "c"]

    def test_single_hash_is_part_of_a_field(self):
        assert StatusDocumentDecoder().split_fields("a#b##c") == ["a#b", "c"]

    def test_empty_fields_are_counted(self):
        assert StatusDocumentDecoder().split_fields("####") == ["", "", ""]

    def test_bytes_are_decoded(self):
        assert StatusDocumentDecoder().split_fields(b"1.5##\xff") == ["1.5", "\ufffd"]


@pytest.mark.unit
class TestModemDecoding:
    """Test modem document decoding."""

    def test_minimal_document(self):
        raw = build_document({11: "12.5", 12: "90%", 14: "-50.0", 23: "Online"}, MODEM_FIELD_COUNT)

        result = decode_modem(raw)

        assert result.ok
        assert result.error is None
        assert result.field_count == 81
        record = result.record
        assert record.rx_snr_db == 12.5
        assert record.rx_snr_percent == 90
        assert record.rx_power_dbm == -50.0
        assert record.modem_state is ModemState.ONLINE
        assert record.beam_color is BeamColor.UNKNOWN
        assert record.ip_address == ""
        assert record.rx_bytes == 0
        assert rx_snr_percent(record.rx_snr_db) == pytest.approx(55.357165)

    def test_empty_numeric_fields_are_reported(self):
        raw = build_document({11: "12.5", 12: "90%", 14: "-50.0", 23: "Online"}, MODEM_FIELD_COUNT)

        result = decode_modem(raw)

        assert "rx_bytes" in result.coercion_failures
        assert "cable_resistance_ohm" in result.coercion_failures
        assert "rx_snr_db" not in result.coercion_failures
        # Text and category fields never fail.
        assert "ip_address" not in result.coercion_failures
        assert "beam_color" not in result.coercion_failures

    def test_full_document(self, modem_document):
        result = decode_modem(modem_document)

        assert result.ok
        assert result.coercion_failures == ()
        record = result.record
        assert isinstance(record, ModemRecord)
        assert record.ip_address == "192.168.100.1"
        assert record.mac_address == "00:A0:BC:12:34:56"
        assert record.status_label == "Online"
        assert record.rx_packets == 1234567
        assert record.rx_bytes == 9876543210
        assert record.tx_bytes == 1536
        assert record.online_time == "2 days 03:14:07"
        assert record.loss_of_sync_count == 3
        assert record.rx_power_percent == 80
        assert record.cable_resistance_ohm == 11.2
        assert record.cable_attenuation_db == 6.0
        assert record.beam_color is BeamColor.BLUE
        assert record.client_side_proxy_health == "Healthy"
        assert record.uplink_symbol_rate == 625000
        assert record.bdt_version == "BDT 4.2"
        assert record.vendor == "ViaSat"
        assert record.downlink_symbol_rate == 20000000
        assert record.downlink_modulation == "8PSK 3/4"

    def test_garbled_number_falls_back_to_zero(self, modem_values):
        modem_values[11] = "N/A"
        modem_values[12] = "300%"

        result = decode_modem(build_document(modem_values, MODEM_FIELD_COUNT))

        assert result.ok
        assert result.record.rx_snr_db == 0.0
        assert result.record.rx_snr_percent == 0
        assert result.record.rx_power_dbm == -50.0
        assert result.coercion_failures == ("rx_snr_db", "rx_snr_percent")

    def test_reserved_positions_are_ignored(self, modem_values):
        baseline = decode_modem(build_document(modem_values, MODEM_FIELD_COUNT)).record
        modem_values[25] = "reserved # value"
        modem_values[80] = "trailing"

        result = decode_modem(build_document(modem_values, MODEM_FIELD_COUNT))

        assert result.ok
        assert result.record == baseline

    def test_record_is_frozen(self, modem_document):
        record = decode_modem(modem_document).record

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.rx_snr_db = 1.0

    @pytest.mark.parametrize("field_count", [0, 1, 80, 82, 84])
    def test_wrong_field_count_rejected(self, field_count):
        raw = "##".join(["1"] * field_count) if field_count else ""

        result = decode_modem(raw)

        assert not result.ok
        assert result.record is None
        assert isinstance(result.error, SurfBeamFieldCountError)
        assert result.error.expected == 81
        assert result.field_count == max(field_count, 1)

    def test_trailing_delimiter_adds_a_field(self, modem_document):
        result = decode_modem(modem_document + "##")

        assert not result.ok
        assert result.error.actual == 82

    def test_rejection_details(self, short_document):
        result = decode_modem(short_document)

        assert result.error.actual == 80
        assert result.error.details["firmware"] == "UT_3.7.8.9.5"
        assert result.error.details["schema"] == "modem"
        assert "80 fields, expected 81" in str(result.error)

    def test_explicit_schema(self, modem_document):
        assert decode_modem(modem_document, MODEM_SCHEMA_UT_3_7_8_9_5).ok
        assert not StatusDocumentDecoder().decode(modem_document, OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5).ok


@pytest.mark.unit
class TestOutdoorUnitDecoding:
    """Test outdoor unit document decoding."""

    def test_full_document(self, outdoor_unit_document):
        result = decode_outdoor_unit(outdoor_unit_document)

        assert result.ok
        record = result.record
        assert isinstance(record, OutdoorUnitRecord)
        assert record.power_mode == "Normal"
        assert record.tx_if_power_dbm == -20.0
        assert record.temperature_celsius == 42.5
        assert record.serial_number == "TRIA-000123"
        assert record.tx_rf_power_dbm == 28.0
        assert record.fw_version == "TRIA_1.2.3"
        assert record.tx_if_power_percent == 60
        assert record.tx_rf_power_percent == 52
        assert record.beam_color is BeamColor.ORANGE
        assert record.vendor == "ViaSat"

    def test_polarization_is_classified(self, outdoor_unit_document):
        record = decode_outdoor_unit(outdoor_unit_document).record

        assert record.polarization_type == "Left Hand Circular"
        assert record.polarization is Polarization.CIRCULAR_LEFT

    def test_modem_document_rejected(self, modem_document):
        result = decode_outdoor_unit(modem_document)

        assert not result.ok
        assert result.error.expected == OUTDOOR_UNIT_FIELD_COUNT
        assert result.error.actual == MODEM_FIELD_COUNT

    def test_bytes_document(self, outdoor_unit_document):
        result = decode_outdoor_unit(outdoor_unit_document.encode("utf-8"))

        assert result.ok
        assert result.record.temperature_celsius == 42.5
