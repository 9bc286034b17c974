"""Column statistics and table profiling.

Computes null rate, distinct count and, for numeric columns, min / max /
mean / population standard deviation. Statistics that cannot be computed
are left as None rather than filled with a sentinel.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from .coercion import to_number
from .config import AnalyticsConfig
from .type_inference import ColumnTypeInferrer, distinct_count
from .types import (
    ColumnProfile,
    ColumnType,
    ProfiledTable,
    RawTable,
    Scalar,
)

logger = logging.getLogger(__name__)


def null_percentage(values: Sequence[Scalar]) -> float:
    """Percentage of None values; 0 for an empty column."""
    total = len(values)
    if total == 0:
        return 0.0
    nulls = sum(1 for v in values if v is None)
    return nulls / total * 100


def numeric_values(values: Sequence[Scalar]) -> List[float]:
    """Non-null values that have a numeric reading, as floats."""
    numbers = []
    for value in values:
        if value is None:
            continue
        number = to_number(value)
        if number is not None:
            numbers.append(number)
    return numbers


def profile_column(
    name: str,
    values: Sequence[Scalar],
    column_type: ColumnType,
) -> ColumnProfile:
    """Build the profile of one column.

    Numeric statistics are computed only for NUMERIC columns, over the
    values that actually parse as numbers.

    Args:
        name: Column name
        values: All values of the column, including None
        column_type: Type assigned by the inferrer

    Returns:
        ColumnProfile for the column
    """
    stats = {}
    if column_type == ColumnType.NUMERIC:
        numbers = numeric_values(values)
        if numbers:
            arr = np.sort(np.asarray(numbers, dtype=float))
            stats["min"] = float(arr[0])
            stats["max"] = float(arr[-1])
            # Rounding can push the mean just outside [min, max]
            stats["mean"] = min(max(float(np.mean(arr)), stats["min"]), stats["max"])
            if len(arr) > 1:
                if stats["min"] == stats["max"]:
                    stats["std_dev"] = 0.0
                else:
                    stats["std_dev"] = float(np.std(arr, ddof=0))

    return ColumnProfile(
        name=name,
        type=column_type,
        null_percentage=null_percentage(values),
        distinct_count=distinct_count(values),
        **stats,
    )


class DataProfiler:
    """Profiles every column of extracted tables."""

    def __init__(self, config: Optional[AnalyticsConfig] = None):
        """Initialize the profiler.

        Args:
            config: Analytics configuration. Defaults to AnalyticsConfig().
        """
        self.config = config or AnalyticsConfig()
        self._inferrer = ColumnTypeInferrer(self.config.inference)

    def profile_column(self, name: str, values: Sequence[Scalar]) -> ColumnProfile:
        """Infer the type of a column and compute its statistics."""
        column_type = self._inferrer.infer(values)
        logger.debug(f"Column '{name}' inferred as {column_type.value}")
        return profile_column(name, values, column_type)

    def profile(self, table: RawTable) -> ProfiledTable:
        """Profile a table column by column, in column order.

        Args:
            table: Extracted table

        Returns:
            ProfiledTable with one ColumnProfile per column and a copy of
            the first rows as a preview sample
        """
        columns = [
            self.profile_column(name, table.column_values(name))
            for name in table.columns
        ]

        sample_size = self.config.profiling.sample_size
        sample_rows = [dict(row) for row in table.rows[:sample_size]]

        logger.info(
            f"Profiled table '{table.name}' "
            f"({table.row_count} rows, {table.column_count} cols)"
        )

        return ProfiledTable(
            name=table.name,
            row_count=table.row_count,
            columns=columns,
            sample_rows=sample_rows,
        )


def profile_table(
    table: RawTable,
    config: Optional[AnalyticsConfig] = None,
) -> ProfiledTable:
    """Profile a table with the given (or default) configuration."""
    return DataProfiler(config).profile(table)
