"""
Tests for customer sheet CSV parsing
"""

import pytest

from order_report_proxy.domains.customers import (
    normalize_order_number,
    parse_customer_csv,
    split_csv_line,
)
from order_report_proxy.domains.customers.csv_parser import locate_columns

from .conftest import SHEET_CSV


class TestSplitCsvLine:
    def test_comma_inside_quotes_stays_in_one_field(self):
        assert split_csv_line('1001,"Doe, Jane",jane@x.com') == [
            "1001",
            "Doe, Jane",
            "jane@x.com",
        ]

    def test_plain_line(self):
        assert split_csv_line("a,b,,d") == ["a", "b", "", "d"]

    def test_empty_line(self):
        assert split_csv_line("") == []


class TestNormalizeOrderNumber:
    @pytest.mark.parametrize("raw", ["#1033", "1033", "Order 1033", " #10-33 "])
    def test_strips_non_digits(self, raw):
        assert normalize_order_number(raw) == "1033"

    def test_integer_input(self):
        assert normalize_order_number(1033) == "1033"

    def test_missing_value(self):
        assert normalize_order_number(None) == ""
        assert normalize_order_number("no digits") == ""


class TestLocateColumns:
    def test_fuzzy_case_insensitive_matching(self):
        columns = locate_columns(
            ["Order #Number", "Customer Email Address", "First", "LAST NAME", "Mobile Phone"]
        )
        assert columns["order_number"] == 0
        assert columns["email"] == 1
        assert columns["first_name"] == 2
        assert columns["last_name"] == 3
        assert columns["phone"] == 4
        # "Email Address" is never mistaken for the street address
        assert "address1" not in columns

    def test_order_column_is_first_id_number_or_name_header(self):
        columns = locate_columns(["Email", "Order ID", "Order Number"])
        assert columns["order_number"] == 1

    def test_address_columns(self):
        columns = locate_columns(
            ["Order", "Name", "Address 1", "Address 2", "City", "State", "Postal Code", "Country"]
        )
        assert columns["order_number"] == 1
        assert columns["address1"] == 2
        assert columns["address2"] == 3
        assert columns["city"] == 4
        assert columns["province"] == 5
        assert columns["zip"] == 6
        assert columns["country"] == 7


class TestParseCustomerCsv:
    def test_builds_mapping_keyed_by_normalized_order_number(self):
        entries = parse_customer_csv(SHEET_CSV)

        assert set(entries) == {"1001", "1002"}
        assert entries["1001"] == {
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane.sheet@example.com",
            "phone": "+15550001",
            "address1": "12 Main St, Apt 4",
            "city": "Springfield",
            "country": "US",
        }

    def test_empty_cells_are_omitted(self):
        entries = parse_customer_csv(SHEET_CSV)
        assert entries["1002"] == {"last_name": "Smithers"}

    def test_rows_without_order_number_are_skipped(self):
        text = "Order Number,Email\n,nobody@example.com\nN/A,other@example.com\n1005,ok@example.com\n"
        assert parse_customer_csv(text) == {"1005": {"email": "ok@example.com"}}

    def test_handles_byte_order_mark_and_crlf(self):
        text = "\ufeffOrder Number,Email\r\n1007,bom@example.com\r\n"
        assert parse_customer_csv(text) == {"1007": {"email": "bom@example.com"}}

    def test_short_rows_are_tolerated(self):
        text = "Order Number,Email,Phone\n1008\n1009,a@example.com\n"
        entries = parse_customer_csv(text)
        assert entries["1008"] == {}
        assert entries["1009"] == {"email": "a@example.com"}

    @pytest.mark.parametrize("text", ["", "   \n", "Email,Phone\nx@example.com,1\n"])
    def test_unusable_payload_gives_empty_mapping(self, text):
        assert parse_customer_csv(text) == {}
