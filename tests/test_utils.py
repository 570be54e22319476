"""
Tests for shared value helpers.
"""

from apple_receipt_verify.utils import id_to_string, is_numeric, parse_int, to_epoch_ms


class TestIsNumeric:
    def test_numbers(self):
        assert is_numeric(3)
        assert is_numeric(2.5)
        assert is_numeric("1550000000000")
        assert is_numeric(" 42 ")

    def test_not_numbers(self):
        assert not is_numeric(True)
        assert not is_numeric("")
        assert not is_numeric("abc")
        assert not is_numeric(None)
        assert not is_numeric("nan")
        assert not is_numeric(["1"])
        assert not is_numeric("1_000")


class TestParseInt:
    def test_leading_digits(self):
        assert parse_int("12abc") == 12
        assert parse_int("1550000000000") == 1550000000000

    def test_float_truncated(self):
        assert parse_int(3.9) == 3

    def test_unparseable(self):
        assert parse_int("abc") is None
        assert parse_int(None) is None
        assert parse_int(False) is None


class TestIdToString:
    def test_int(self):
        assert id_to_string(12345) == "12345"

    def test_integral_float(self):
        assert id_to_string(12345.0) == "12345"

    def test_string_untouched(self):
        assert id_to_string("1000000512345678") == "1000000512345678"

    def test_none(self):
        assert id_to_string(None) == ""


class TestToEpochMs:
    def test_numeric_string(self):
        assert to_epoch_ms("1700000000000") == 1700000000000

    def test_apple_date(self):
        assert to_epoch_ms("2019-01-01 00:00:00 Etc/GMT") == 1546300800000

    def test_iso_date(self):
        assert to_epoch_ms("2019-01-01T00:00:00Z") == 1546300800000

    def test_unreadable(self):
        assert to_epoch_ms("soon") is None
        assert to_epoch_ms(None) is None
