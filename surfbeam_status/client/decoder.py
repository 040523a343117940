"""
Status Document Decoder for SurfBeam Modem Status Client
========================================================

This module turns the raw ``##``-delimited status documents into typed
records, using the firmware-pinned tables from ``surfbeam_status.schema``.

Decoding is all-or-nothing on the field count and lenient per field: a
document with the wrong number of fields yields no record at all, while a
single unparseable number falls back to zero.

"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from surfbeam_status.exceptions import SurfBeamFieldCountError
from surfbeam_status.schema import (
    FIELD_DELIMITER,
    MODEM_SCHEMA_UT_3_7_8_9_5,
    OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5,
    Record,
    RecordSchema,
)

logger = logging.getLogger("surfbeam-status")

RawDocument = Union[str, bytes]


@dataclass(frozen=True)
class DecodeResult:
    """
    Outcome of decoding one status document.

    Exactly one of ``record`` and ``error`` is set.

    Attributes:
        schema: Schema the document was checked against
        field_count: Number of fields found in the document
        record: Decoded record, or None when rejected
        error: Field count mismatch, or None when decoded
        coercion_failures: Attributes that fell back to their default value
    """

    schema: RecordSchema
    field_count: int
    record: Optional[Record] = None
    error: Optional[SurfBeamFieldCountError] = None
    coercion_failures: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.record is not None


class StatusDocumentDecoder:
    """Decodes SurfBeam status documents into ModemRecord / OutdoorUnitRecord."""

    def split_fields(self, raw: RawDocument) -> list[str]:
        """
        Split a raw document on the two-character field delimiter.

        A lone '#' is padding inside a field and is kept as-is.
        """
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        return raw.split(FIELD_DELIMITER)

    def decode(self, raw: RawDocument, schema: RecordSchema) -> DecodeResult:
        """
        Decode a raw document with the given schema.

        Args:
            raw: Complete document as received from the endpoint
            schema: Firmware-pinned layout to validate and map against

        Returns:
            DecodeResult with either a record or a SurfBeamFieldCountError
        """
        fields = self.split_fields(raw)

        if len(fields) != schema.field_count:
            logger.warning(
                f"⚠️ Rejected {schema.name} document: {len(fields)} fields, "
                f"expected {schema.field_count} for firmware {schema.firmware}"
            )
            error = SurfBeamFieldCountError(
                f"{schema.name} document has {len(fields)} fields, expected {schema.field_count}",
                expected=schema.field_count,
                actual=len(fields),
                details={"schema": schema.name, "firmware": schema.firmware},
            )
            return DecodeResult(schema=schema, field_count=len(fields), error=error)

        values: dict[str, Any] = {}
        failures: list[str] = []

        for index, spec in schema.fields.items():
            raw_value = fields[index]
            try:
                values[spec.attribute] = spec.coerce(raw_value)
            except ValueError as e:
                logger.debug(f"{schema.name}[{index}] {spec.attribute}: {e}, using {spec.default!r}")
                values[spec.attribute] = spec.default
                failures.append(spec.attribute)

        record = schema.record_type(**values)
        logger.debug(f"Decoded {schema.name} document ({len(schema.fields)} mapped fields, {len(failures)} defaulted)")

        return DecodeResult(
            schema=schema,
            field_count=len(fields),
            record=record,
            coercion_failures=tuple(failures),
        )


_decoder = StatusDocumentDecoder()


def decode_modem(raw: RawDocument, schema: RecordSchema = MODEM_SCHEMA_UT_3_7_8_9_5) -> DecodeResult:
    """Decode a modem status document (``page=modemStatusData``)."""
    return _decoder.decode(raw, schema)


def decode_outdoor_unit(raw: RawDocument, schema: RecordSchema = OUTDOOR_UNIT_SCHEMA_UT_3_7_8_9_5) -> DecodeResult:
    """Decode an outdoor unit status document (``page=triaStatusData``)."""
    return _decoder.decode(raw, schema)


__all__ = ["DecodeResult", "StatusDocumentDecoder", "decode_modem", "decode_outdoor_unit"]
