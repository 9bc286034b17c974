"""Analytics module for tabular data profiling and chart suggestion.

Provides:
- Delimited-text and workbook extraction into raw tables
- Deterministic column type inference
- Column statistics (null rate, distinct count, numeric summary)
- Heuristic chart suggestions
"""

from .types import (
    Scalar,
    TableFormat,
    ColumnType,
    RawTable,
    ColumnProfile,
    ProfiledTable,
    ChartSuggestion,
    AnalysisResult,
)
from .config import AnalyticsConfig, DEFAULT_CONFIG
from .table_extractor import TableExtractorService
from .type_inference import ColumnTypeInferrer, infer_column_type
from .profiler import DataProfiler, profile_column, profile_table
from .chart_suggester import ChartSuggester, suggest_charts
from .service import AnalyticsService

__all__ = [
    # Types
    "Scalar",
    "TableFormat",
    "ColumnType",
    "RawTable",
    "ColumnProfile",
    "ProfiledTable",
    "ChartSuggestion",
    "AnalysisResult",
    # Config
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    # Services
    "TableExtractorService",
    "ColumnTypeInferrer",
    "infer_column_type",
    "DataProfiler",
    "profile_column",
    "profile_table",
    "ChartSuggester",
    "suggest_charts",
    "AnalyticsService",
]
