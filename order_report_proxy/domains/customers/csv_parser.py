"""
Customer sheet CSV parsing

Turns the CSV export of the customer spreadsheet into a mapping keyed by
normalized order number. Columns are located by case-insensitive substring
matches against the header row, so the sheet's exact column titles do not
matter as long as they contain the expected words.
"""

import csv
import io
import re
from typing import Dict, List, Optional, Sequence

from order_report_proxy.core.logging import get_logger

logger = get_logger(__name__)

SheetEntry = Dict[str, str]

_NON_DIGITS = re.compile(r"\D")

# field name -> (header must contain one of, header must not contain any of)
COLUMN_MATCHERS: Dict[str, tuple] = {
    "email": (("email",), ()),
    "first_name": (("first",), ()),
    "last_name": (("last",), ()),
    "phone": (("phone",), ()),
    "company": (("company",), ()),
    "address2": (("address 2", "address2", "address line 2", "apartment"), ()),
    "address1": (("address",), ("email", "2")),
    "city": (("city",), ()),
    "province": (("province", "state"), ()),
    "zip": (("zip", "postal"), ()),
    "country": (("country",), ()),
}

ORDER_COLUMN_KEYWORDS = ("id", "number", "name")


def normalize_order_number(value) -> str:
    """Strip everything but digits: '#1033', '1033' and 'Order 1033' all become '1033'"""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def split_csv_line(line: str) -> List[str]:
    """Split one CSV line into fields, honouring double-quoted fields containing commas"""
    for row in csv.reader([line]):
        return row
    return []


def _find_column(
    headers: Sequence[str], include: Sequence[str], exclude: Sequence[str] = ()
) -> Optional[int]:
    """Index of the first header containing any include keyword and no exclude keyword"""
    for index, header in enumerate(headers):
        if any(word in header for word in include) and not any(
            word in header for word in exclude
        ):
            return index
    return None


def locate_columns(headers: Sequence[str]) -> Dict[str, int]:
    """Map field names to column indexes for a header row"""
    lowered = [header.strip().lower() for header in headers]
    columns: Dict[str, int] = {}

    order_index = _find_column(lowered, ORDER_COLUMN_KEYWORDS)
    if order_index is not None:
        columns["order_number"] = order_index

    for field_name, (include, exclude) in COLUMN_MATCHERS.items():
        index = _find_column(lowered, include, exclude)
        # A column already claimed as the order key is never reused
        if index is not None and index != order_index:
            columns[field_name] = index

    return columns


def parse_customer_csv(text: str) -> Dict[str, SheetEntry]:
    """
    Parse a customer sheet CSV export

    Returns:
        Mapping of normalized order number to the non-empty fields of that row.
        Rows without a usable order number are skipped; a later row for the
        same order number replaces an earlier one.
    """
    if not text or not text.strip():
        return {}

    rows = [row for row in csv.reader(io.StringIO(text.lstrip("\ufeff"))) if row]
    if not rows:
        return {}

    headers, data_rows = rows[0], rows[1:]
    columns = locate_columns(headers)

    order_column = columns.pop("order_number", None)
    if order_column is None:
        logger.warning("Customer sheet has no order number column", headers=headers)
        return {}

    entries: Dict[str, SheetEntry] = {}
    for row in data_rows:
        if order_column >= len(row):
            continue
        key = normalize_order_number(row[order_column])
        if not key:
            continue

        entry: SheetEntry = {}
        for field_name, index in columns.items():
            if index < len(row):
                value = row[index].strip()
                if value:
                    entry[field_name] = value
        entries[key] = entry

    logger.info(
        "Parsed customer sheet", rows=len(data_rows), entries=len(entries)
    )
    return entries
