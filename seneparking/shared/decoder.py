"""
Decoding of the document store's query response into ParkingLot records.

The response looks like::

    {"documents": [{"name": "projects/.../parkingLots/abc",
                    "fields": {"name": {"stringValue": "Lot A"},
                               "latitude": {"doubleValue": 4.6},
                               "availableSpots": {"integerValue": "3"},
                               ...}}]}

Every field is a typed wrapper: a one-key mapping from a type tag to the value.
A document missing any required wrapper is dropped as a whole; a wrapper whose
value is missing or malformed falls back to that field's default.
"""
import json
import logging
import math
import re
import uuid
from enum import Enum
from typing import Any, List, Optional, Union

import attr

from seneparking.shared.location import Location
from seneparking.shared.models import ParkingLot, NOT_AVAILABLE

logger = logging.getLogger('shared decoder')

REQUIRED_FIELDS = ('name', 'latitude', 'longitude', 'availableSpots', 'available_ev_spots',
                   'farePerDay', 'open_time', 'close_time')

# 64-bit integers have at most 19 digits
_INTEGER_RE = re.compile(r"[+-]?[0-9]{1,19}\Z")


class EnvelopeError(Enum):
    INVALID_JSON = 'body is not valid JSON'
    NOT_A_MAPPING = 'top level is not a mapping'
    MISSING_DOCUMENTS = 'no "documents" key'
    DOCUMENTS_NOT_A_LIST = '"documents" is not a list'


class DropReason(Enum):
    NOT_A_MAPPING = 'document is not a mapping'
    MISSING_FIELDS = 'no "fields" mapping'
    MISSING_WRAPPER = 'required field wrapper missing'


@attr.s(frozen=True)
class DroppedDocument:
    index: int = attr.ib()
    document_id: Optional[str] = attr.ib()
    reason: DropReason = attr.ib()
    field: Optional[str] = attr.ib(default=None)


@attr.s(frozen=True)
class DefaultedScalar:
    index: int = attr.ib()
    field: str = attr.ib()


@attr.s
class DecodeReport:
    """What happened to each part of a response while decoding it."""
    envelope_error: Optional[EnvelopeError] = attr.ib(default=None)
    total: int = attr.ib(default=0)
    decoded: int = attr.ib(default=0)
    dropped: List[DroppedDocument] = attr.ib(factory=list)
    defaulted: List[DefaultedScalar] = attr.ib(factory=list)


@attr.s(frozen=True)
class DecodeResult:
    lots: List[ParkingLot] = attr.ib()
    report: DecodeReport = attr.ib()


def string_value(wrapper: dict) -> Optional[str]:
    value = wrapper.get('stringValue')
    return value if isinstance(value, str) else None


def double_value(wrapper: dict) -> Optional[float]:
    value = wrapper.get('doubleValue')
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def integer_value(wrapper: dict) -> Optional[int]:
    """The document store sends 64-bit integers as decimal strings."""
    value = wrapper.get('integerValue')
    if not isinstance(value, str) or not _INTEGER_RE.match(value):
        return None
    return int(value)


def _count_value(wrapper: dict) -> Optional[int]:
    value = integer_value(wrapper)
    return value if value is not None and value >= 0 else None


def _parse_envelope(raw_body: Union[bytes, str], report: DecodeReport) -> Optional[list]:
    try:
        body = json.loads(raw_body)
    except (ValueError, TypeError, RecursionError) as e:
        report.envelope_error = EnvelopeError.INVALID_JSON
        logger.warning("Could not parse documents response: '%s'", e)
        return None

    if not isinstance(body, dict):
        report.envelope_error = EnvelopeError.NOT_A_MAPPING
    elif 'documents' not in body:
        report.envelope_error = EnvelopeError.MISSING_DOCUMENTS
    elif not isinstance(body['documents'], list):
        report.envelope_error = EnvelopeError.DOCUMENTS_NOT_A_LIST
    else:
        return body['documents']

    logger.warning("Unexpected documents response: %s", report.envelope_error.value)
    return None


def _decode_document(index: int, document: Any, report: DecodeReport) -> Optional[ParkingLot]:
    if not isinstance(document, dict):
        report.dropped.append(DroppedDocument(index, None, DropReason.NOT_A_MAPPING))
        logger.debug("Dropped document #%s: %s", index, DropReason.NOT_A_MAPPING.value)
        return None

    document_id = document.get('name')
    if not isinstance(document_id, str):
        document_id = None

    fields = document.get('fields')
    if not isinstance(fields, dict):
        report.dropped.append(DroppedDocument(index, document_id, DropReason.MISSING_FIELDS))
        logger.debug("Dropped document #%s (%s): %s", index, document_id, DropReason.MISSING_FIELDS.value)
        return None

    for field in REQUIRED_FIELDS:
        if not isinstance(fields.get(field), dict):
            report.dropped.append(DroppedDocument(index, document_id, DropReason.MISSING_WRAPPER, field))
            logger.debug("Dropped document #%s (%s): no '%s' wrapper", index, document_id, field)
            return None

    def scalar(field, read, default):
        value = read(fields[field])
        if value is None:
            report.defaulted.append(DefaultedScalar(index, field))
            logger.debug("Document #%s (%s): defaulted '%s'", index, document_id, field)
            return default
        return value

    return ParkingLot(
        id=document_id if document_id is not None else str(uuid.uuid4()),
        name=scalar('name', string_value, ''),
        coordinate=Location(scalar('latitude', double_value, 0.0), scalar('longitude', double_value, 0.0)),
        available_spots=scalar('availableSpots', _count_value, 0),
        available_ev_spots=scalar('available_ev_spots', _count_value, 0),
        fare_per_day=scalar('farePerDay', _count_value, 0),
        open_time=scalar('open_time', string_value, NOT_AVAILABLE),
        close_time=scalar('close_time', string_value, NOT_AVAILABLE),
    )


def decode_with_report(raw_body: Union[bytes, str]) -> DecodeResult:
    """Decode a documents response, recording every dropped document and defaulted value.

    Never raises: an unusable envelope gives no lots, a malformed document is skipped.
    """
    report = DecodeReport()
    lots: List[ParkingLot] = []

    documents = _parse_envelope(raw_body, report)
    if documents is None:
        return DecodeResult(lots, report)

    report.total = len(documents)
    for index, document in enumerate(documents):
        lot = _decode_document(index, document, report)
        if lot is not None:
            lots.append(lot)

    report.decoded = len(lots)
    if report.dropped:
        logger.info("Decoded %s of %s documents, dropped %s", report.decoded, report.total, len(report.dropped))
    return DecodeResult(lots, report)


def decode(raw_body: Union[bytes, str]) -> List[ParkingLot]:
    return decode_with_report(raw_body).lots
