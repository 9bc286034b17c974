"""Tests for column statistics and table profiling."""

import statistics

import pytest

from tablesight.core.analytics.config import AnalyticsConfig, ProfilingConfig
from tablesight.core.analytics.profiler import (
    DataProfiler,
    null_percentage,
    numeric_values,
    profile_column,
    profile_table,
)
from tablesight.core.analytics.types import ColumnProfile, ColumnType, RawTable


def _raw_table(columns, rows):
    return RawTable(
        name="Sheet1",
        columns=list(columns),
        rows=[dict(zip(columns, row)) for row in rows],
    )


class TestProfileColumn:
    """Tests for profile_column."""

    def test_numeric_scenario(self):
        """Test min/max/mean/null rate for numeric literals with a null."""
        values = ["10", "20", "30.5", None]

        profile = profile_column("amount", values, ColumnType.NUMERIC)

        assert profile.name == "amount"
        assert profile.type == ColumnType.NUMERIC
        assert profile.min == 10.0
        assert profile.max == 30.5
        assert profile.mean == pytest.approx(20.1666666667)
        assert profile.null_percentage == 25.0
        assert profile.distinct_count == 3

    def test_population_std_dev(self):
        """Test standard deviation divides by count, not count - 1."""
        numbers = [10.0, 20.0, 30.5]

        profile = profile_column("amount", numbers, ColumnType.NUMERIC)

        assert profile.std_dev == pytest.approx(statistics.pstdev(numbers))
        assert profile.std_dev != pytest.approx(statistics.stdev(numbers))

    def test_single_value_has_no_std_dev(self):
        """Test one numeric value leaves std_dev undefined, not zero."""
        profile = profile_column("x", [5, None], ColumnType.NUMERIC)

        assert profile.min == profile.max == profile.mean == 5.0
        assert profile.std_dev is None

    def test_no_parsable_numbers(self):
        """Test a NUMERIC label with nothing numeric leaves every statistic undefined."""
        profile = profile_column("x", ["n/a", None], ColumnType.NUMERIC)

        assert profile.min is None
        assert profile.max is None
        assert profile.mean is None
        assert profile.std_dev is None

    def test_unparsable_values_filtered(self):
        """Test non-numeric stragglers are ignored by the statistics."""
        profile = profile_column("x", ["1", "2", "3", "4", "oops"], ColumnType.NUMERIC)

        assert profile.min == 1.0
        assert profile.max == 4.0
        assert profile.mean == 2.5
        assert profile.distinct_count == 5

    def test_non_numeric_type_has_no_statistics(self):
        """Test numeric-looking values get no statistics under another type."""
        profile = profile_column("x", [1, 2, 3], ColumnType.CATEGORICAL)

        assert (profile.min, profile.max, profile.mean, profile.std_dev) == (None, None, None, None)

    def test_empty_column(self):
        """Test zero values gives a zero null rate instead of dividing by zero."""
        profile = profile_column("x", [], ColumnType.TEXT)

        assert profile.null_percentage == 0.0
        assert profile.distinct_count == 0

    def test_all_null(self):
        profile = profile_column("x", [None, None], ColumnType.TEXT)

        assert profile.null_percentage == 100.0
        assert profile.distinct_count == 0

    def test_booleans_not_averaged(self):
        """Test boolean values never feed numeric statistics."""
        profile = profile_column("x", [True, 2, 4], ColumnType.NUMERIC)

        assert profile.mean == 3.0

    def test_ordering_invariants(self):
        """Test min <= mean <= max and std_dev >= 0."""
        values = [3, -1, 7.25, 0, 12, None, "4"]

        profile = profile_column("x", values, ColumnType.NUMERIC)

        assert profile.min <= profile.mean <= profile.max
        assert profile.std_dev >= 0

    def test_constant_column_rounding(self):
        """Test a constant column whose float mean rounds off keeps min <= mean <= max."""
        profile = profile_column("x", [0.1, 0.1, 0.1], ColumnType.NUMERIC)

        assert profile.min <= profile.mean <= profile.max
        assert profile.mean == 0.1
        assert profile.std_dev == 0.0

    @pytest.mark.parametrize("values", [
        [0.1] * 10,
        [0.1, 0.2, 0.3] * 7,
        [1 / 3] * 9,
    ])
    def test_mean_within_bounds(self, values):
        profile = profile_column("x", values, ColumnType.NUMERIC)

        assert profile.min <= profile.mean <= profile.max
        assert profile.std_dev >= 0

    def test_null_count_consistency(self):
        """Test null and non-null counts add back up to the row count."""
        values = [1, None, "a", None, 2.5, None, None, "b"]

        profile = profile_column("x", values, ColumnType.TEXT)

        nulls = round(profile.null_percentage / 100 * len(values))
        non_null = len([v for v in values if v is not None])
        assert nulls + non_null == len(values)

    def test_helpers(self):
        assert null_percentage([None, 1, 2, 3]) == 25.0
        assert numeric_values([None, "1", True, "x", 2]) == [1.0, 2.0]


class TestColumnProfile:
    """Tests for the ColumnProfile dataclass."""

    def test_numeric_fields_rejected_on_other_types(self):
        """Test numeric statistics cannot be attached to non-numeric columns."""
        with pytest.raises(ValueError):
            ColumnProfile(
                name="x",
                type=ColumnType.TEXT,
                null_percentage=0.0,
                distinct_count=1,
                mean=1.0,
            )

    def test_immutable(self):
        profile = ColumnProfile(name="x", type=ColumnType.TEXT, null_percentage=0.0, distinct_count=1)

        with pytest.raises(AttributeError):
            profile.name = "y"

    def test_to_dict(self):
        """Test the persisted record uses camelCase keys."""
        profile = profile_column("amount", ["10", "20"], ColumnType.NUMERIC)

        assert profile.to_dict() == {
            "name": "amount",
            "type": "numeric",
            "nullPercentage": 0.0,
            "distinctCount": 2,
            "min": 10.0,
            "max": 20.0,
            "mean": 15.0,
            "stdDev": 5.0,
        }


class TestDataProfiler:
    """Tests for table-level profiling."""

    def test_profile_table(self):
        """Test every column is profiled in column order."""
        table = _raw_table(
            ["day", "amount", "region"],
            [
                ["2024-01-0%d" % (i + 1), i * 10, ["North", "South", "East"][i % 3]]
                for i in range(9)
            ],
        )

        profiled = DataProfiler().profile(table)

        assert profiled.name == "Sheet1"
        assert profiled.row_count == 9
        assert profiled.column_count == 3
        assert [c.name for c in profiled.columns] == ["day", "amount", "region"]
        assert [c.type for c in profiled.columns] == [
            ColumnType.DATE,
            ColumnType.NUMERIC,
            ColumnType.CATEGORICAL,
        ]

    def test_all_null_column(self):
        """Test a fully null column is TEXT with no distinct values."""
        table = _raw_table(["empty"], [[None]] * 4)

        profile = DataProfiler().profile(table).columns[0]

        assert profile.type == ColumnType.TEXT
        assert profile.distinct_count == 0
        assert profile.null_percentage == 100.0

    def test_deterministic(self):
        """Test profiling the same table twice gives identical profiles."""
        table = _raw_table(["a", "b"], [[1, "x"], [2.5, "y"], [None, "x"], [4, None]])
        profiler = DataProfiler()

        first = profiler.profile(table)
        second = profiler.profile(table)

        assert first.columns == second.columns
        assert [c.to_dict() for c in first.columns] == [c.to_dict() for c in second.columns]

    def test_sample_rows_limited_and_copied(self):
        """Test the preview sample honors the configured size and is a copy."""
        table = _raw_table(["a"], [[i] for i in range(10)])
        config = AnalyticsConfig(profiling=ProfilingConfig(sample_size=3))

        profiled = DataProfiler(config).profile(table)

        assert profiled.sample_rows == [{"a": 0}, {"a": 1}, {"a": 2}]
        profiled.sample_rows[0]["a"] = 99
        assert table.rows[0]["a"] == 0

    def test_empty_table(self):
        profiled = DataProfiler().profile(RawTable(name="Sheet1"))

        assert profiled.columns == []
        assert profiled.row_count == 0

    def test_profile_table_function(self):
        """Test the module-level helper matches the profiler."""
        table = _raw_table(["a"], [[1], [2], [3]])

        assert profile_table(table) == DataProfiler().profile(table)
