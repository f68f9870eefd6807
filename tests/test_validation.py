"""Tests for identifier checks and field coercion."""

from datetime import datetime, timezone

import pytest

from transaction_api.errors import InvalidField
from transaction_api.validation import coerce_amount, coerce_date, is_valid_object_id


@pytest.mark.parametrize(
    "value",
    ["507f1f77bcf86cd799439011", "ABCDEF0123456789abcdef01", "000000000000000000000000"],
)
def test_is_valid_object_id_accepts_24_hex_chars(value) -> None:
    assert is_valid_object_id(value) is True


@pytest.mark.parametrize(
    "value",
    [
        "not-an-id",
        "507f1f77bcf86cd79943901",
        "507f1f77bcf86cd7994390111",
        "507f1f77bcf86cd79943901g",
        "",
        None,
        12345,
        "507f1f77bcf86cd799439011\n",
    ],
)
def test_is_valid_object_id_rejects_other_values(value) -> None:
    assert is_valid_object_id(value) is False


def test_coerce_amount_accepts_numbers_and_numeric_text() -> None:
    assert coerce_amount(42) == 42.0
    assert coerce_amount(-12.5) == -12.5
    assert coerce_amount("19.99") == 19.99
    assert coerce_amount(" 7 ") == 7.0
    assert coerce_amount("-.5") == -0.5
    assert coerce_amount("1e3") == 1000.0


@pytest.mark.parametrize(
    "value",
    ["abc", "", None, True, "nan", "inf", float("inf"), [1], 10 ** 400, "1_000", "\u0661\u0662", "1e999"],
)
def test_coerce_amount_rejects_non_numeric_input(value) -> None:
    with pytest.raises(InvalidField) as exc:
        coerce_amount(value)

    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid amount"


def test_coerce_date_parses_iso_strings_as_utc() -> None:
    assert coerce_date("2023-06-01") == datetime(2023, 6, 1, tzinfo=timezone.utc)
    assert coerce_date("2023-06-01T12:30:00.000Z") == datetime(2023, 6, 1, 12, 30, tzinfo=timezone.utc)
    assert coerce_date("2023-06-01T14:30:00+02:00") == datetime(2023, 6, 1, 12, 30, tzinfo=timezone.utc)


def test_coerce_date_reads_numbers_as_epoch_milliseconds() -> None:
    assert coerce_date(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert coerce_date(1672531200000) == datetime(2023, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value",
    [
        "yesterday",
        "2023-13-01",
        "",
        None,
        False,
        {"y": 2023},
        "9999-12-31T23:00:00-05:00",
        "0001-01-01T00:00:00+01:00",
        10 ** 400,
        float("nan"),
    ],
)
def test_coerce_date_rejects_unparseable_input(value) -> None:
    with pytest.raises(InvalidField) as exc:
        coerce_date(value)

    assert exc.value.message == "Invalid date"
