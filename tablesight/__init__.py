"""Tablesight: tabular file profiling and chart suggestion."""

from .core.analytics import (
    AnalysisResult,
    AnalyticsConfig,
    AnalyticsService,
    ChartSuggestion,
    ColumnProfile,
    ColumnType,
    ProfiledTable,
    RawTable,
    TableFormat,
)
from .core.exceptions import (
    ConfigurationError,
    ExtractionError,
    TablesightError,
    UnsupportedFormatError,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "AnalyticsConfig",
    "AnalyticsService",
    "ChartSuggestion",
    "ColumnProfile",
    "ColumnType",
    "ProfiledTable",
    "RawTable",
    "TableFormat",
    "ConfigurationError",
    "ExtractionError",
    "TablesightError",
    "UnsupportedFormatError",
]
