"""Shared fixtures for Tablesight tests."""

import io
from typing import Dict, List, Sequence

import pytest
from openpyxl import Workbook

from tablesight.core.analytics.types import ColumnProfile, ColumnType, ProfiledTable


def build_workbook(sheets: Dict[str, List[Sequence]]) -> bytes:
    """Build an in-memory .xlsx with one sheet per entry, rows appended in order."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        sheet = workbook.create_sheet(title=title)
        for row in rows:
            sheet.append(list(row))

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _make_profile(name: str, column_type: ColumnType, distinct: int = 5) -> ColumnProfile:
    """Column profile with only the fields the suggester reads."""
    return ColumnProfile(
        name=name,
        type=column_type,
        null_percentage=0.0,
        distinct_count=distinct,
    )


def _make_table(name: str, *columns: ColumnProfile) -> ProfiledTable:
    """Profiled table over the given columns."""
    return ProfiledTable(name=name, row_count=10, columns=list(columns))


@pytest.fixture
def workbook_bytes():
    """Factory fixture returning .xlsx bytes for a {sheet: rows} mapping."""
    return build_workbook


@pytest.fixture
def sales_csv() -> bytes:
    """Twelve daily rows with a date, a low-cardinality region and a revenue."""
    regions = ["North", "South", "East"]
    lines = ["date,region,revenue"]
    for day in range(1, 13):
        lines.append(f"2024-01-{day:02d},{regions[day % 3]},{day * 100}")
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def make_profile():
    """Factory fixture for ColumnProfile."""
    return _make_profile


@pytest.fixture
def make_table():
    """Factory fixture for ProfiledTable."""
    return _make_table
