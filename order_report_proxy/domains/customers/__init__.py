"""
Customer sheet domain: CSV parsing and the in-memory snapshot cache
"""

from .csv_parser import (
    SheetEntry,
    normalize_order_number,
    split_csv_line,
    parse_customer_csv,
)
from .sheet_cache import SheetSnapshot, CustomerSheetCache

__all__ = [
    "SheetEntry",
    "normalize_order_number",
    "split_csv_line",
    "parse_customer_csv",
    "SheetSnapshot",
    "CustomerSheetCache",
]
