import sys
from decimal import Decimal

import pytest

from iexpense.exceptions import DecodeError
from iexpense.models import Category, ExpenseRecord, decode_records, encode_records


def test_record_gets_unique_id(make_record):
    first, second = make_record(), make_record()
    assert first.id != second.id
    assert first.id and second.id


def test_record_is_immutable(make_record):
    record = make_record()
    with pytest.raises(AttributeError):
        record.name = "Dinner"


def test_round_trip_preserves_fields_and_order():
    records = [
        ExpenseRecord(name="Taxi", category=Category.BUSINESS, amount=Decimal("23.40")),
        ExpenseRecord(name="Café", category=Category.PERSONAL, amount=Decimal("3.125")),
        ExpenseRecord(name="Taxi", category=Category.BUSINESS, amount=Decimal("0")),
    ]
    assert decode_records(encode_records(records)) == records


def test_encoded_field_order(make_record):
    record = make_record(name="Book", category=Category.BUSINESS, amount="9.99")
    raw = encode_records([record]).decode("utf-8")
    positions = [raw.index(f'"{key}"') for key in ("id", "name", "category", "amount")]
    assert positions == sorted(positions)
    assert '"category": "Business"' in raw
    assert '"amount": "9.99"' in raw


def test_encode_empty_sequence():
    assert decode_records(encode_records([])) == []


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"not json",
        b"\xff\xfe",
        b'{"id": "1"}',
        b'[{"id": "1", "name": "x", "category": "Business"}]',
        b'[{"id": "1", "name": "x", "category": "Travel", "amount": "1"}]',
        b'[{"id": "1", "name": "x", "category": "Business", "amount": "-1"}]',
        b'[{"id": "1", "name": "x", "category": "Business", "amount": "abc"}]',
        b'[{"id": "", "name": "x", "category": "Business", "amount": "1"}]',
        b"[1, 2]",
        b"[" * 200000 + b"]" * 200000,
    ],
)
def test_decode_rejects_malformed_bytes(raw):
    with pytest.raises(DecodeError):
        decode_records(raw)


def test_decode_accepts_numeric_amount():
    raw = b'[{"id": "a", "name": "Tea", "category": "Personal", "amount": 2.5}]'
    (record,) = decode_records(raw)
    assert record.amount == Decimal("2.5")
    assert record.category is Category.PERSONAL


@pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits"), reason="no integer string conversion limit"
)
def test_decode_rejects_integer_over_conversion_limit():
    raw = b'[{"id": "a", "name": "x", "category": "Business", "amount": 1' + b"0" * 5000 + b"}]"
    with pytest.raises(DecodeError):
        decode_records(raw)
