"""Type definitions for table analysis.

Defines the scalar cell model, the column type enumeration, and the
dataclasses passed between extraction, profiling and chart suggestion.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union


# Type aliases
Scalar = Optional[Union[str, int, float, bool]]
Record = Dict[str, Scalar]
ChartType = Literal["line", "bar", "stackedBar", "pie", "funnel"]


class TableFormat(str, Enum):
    """Format discriminator for an input buffer."""
    DELIMITED_TEXT = "delimited-text"
    SPREADSHEET_WORKBOOK = "spreadsheet-workbook"


class ColumnType(str, Enum):
    """Semantic type assigned to a column. Exactly one per column."""
    DATE = "date"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    CATEGORICAL = "categorical"
    TEXT = "text"


def is_number(value: Scalar) -> bool:
    """True for int/float values. Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def scalar_to_text(value: Scalar) -> str:
    """Canonical string form of a scalar, used for distinct counting."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class RawTable:
    """Rows and columns extracted from one file or sheet, before profiling.

    Attributes:
        name: Sheet name, or the fixed label for delimited text
        columns: Unique column names in header order
        rows: One record per data row, keyed by every column name
    """
    name: str
    columns: List[str] = field(default_factory=list)
    rows: List[Record] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column_values(self, column: str) -> List[Scalar]:
        """Values of one column in row order."""
        if column not in self.columns:
            raise KeyError(f"Unknown column: {column}")
        return [row.get(column) for row in self.rows]


@dataclass(frozen=True)
class ColumnProfile:
    """Inferred type and statistics for one column.

    Numeric statistics are only populated for numeric columns, and stay
    None when there are too few values to compute them.
    """
    name: str
    type: ColumnType
    null_percentage: float
    distinct_count: int
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    std_dev: Optional[float] = None

    def __post_init__(self):
        if self.type != ColumnType.NUMERIC and any(
            v is not None for v in (self.min, self.max, self.mean, self.std_dev)
        ):
            raise ValueError(
                f"Numeric statistics set on non-numeric column '{self.name}'"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Render the record stored by the persistence layer."""
        return {
            "name": self.name,
            "type": self.type.value,
            "nullPercentage": self.null_percentage,
            "distinctCount": self.distinct_count,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "stdDev": self.std_dev,
        }


@dataclass
class ProfiledTable:
    """A table reduced to its column profiles, in column order."""
    name: str
    row_count: int
    columns: List[ColumnProfile] = field(default_factory=list)
    sample_rows: List[Record] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def columns_of_type(self, *types: ColumnType) -> List[ColumnProfile]:
        """Profiles whose type is one of ``types``, in column order."""
        return [c for c in self.columns if c.type in types]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "columns": [c.to_dict() for c in self.columns],
            "sampleRows": [dict(row) for row in self.sample_rows],
        }


@dataclass
class ChartSuggestion:
    """A recommended chart: type plus field bindings, not a rendered chart."""
    chart_type: ChartType
    title: str
    x_field: str
    y_field: str
    series_field: Optional[str] = None
    config: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Downstream consumers read the bindings from config
        if not self.config:
            self.config = {"xField": self.x_field, "yField": self.y_field}
            if self.series_field is not None:
                self.config["seriesField"] = self.series_field

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "chartType": self.chart_type,
            "title": self.title,
            "xField": self.x_field,
            "yField": self.y_field,
            "config": dict(self.config),
        }
        if self.series_field is not None:
            result["seriesField"] = self.series_field
        return result


@dataclass
class AnalysisResult:
    """Profiled tables and chart suggestions for one input file."""
    tables: List[ProfiledTable] = field(default_factory=list)
    suggestions: List[ChartSuggestion] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": [t.to_dict() for t in self.tables],
            "suggestions": [s.to_dict() for s in self.suggestions],
        }
