"""Analytics Service for tabular file analysis.

Orchestrates:
- Table extraction (delimited text / workbooks)
- Column type inference and statistics
- Chart suggestion
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .chart_suggester import ChartSuggester
from .config import AnalyticsConfig
from .profiler import DataProfiler
from .table_extractor import TableExtractorService
from .types import (
    AnalysisResult,
    ChartSuggestion,
    ProfiledTable,
    RawTable,
    TableFormat,
)

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Main service for table analysis.

    Holds no state between calls; one instance can serve any number of
    files, from any number of threads.
    """

    def __init__(self, config: Optional[AnalyticsConfig] = None):
        """Initialize the analytics service.

        Args:
            config: Analytics configuration. Loaded from
                config/tablesight.yaml when omitted.
        """
        if config is None:
            from tablesight.core.config.config_loader import load_analytics_config
            config = load_analytics_config()

        self.config = config
        self._extractor = TableExtractorService(config.extraction)
        self._profiler = DataProfiler(config)
        self._suggester = ChartSuggester(config.suggestion)

        logger.info("AnalyticsService initialized")

    def analyze(
        self,
        buffer: bytes,
        table_format: Optional[Union[TableFormat, str]] = None,
        file_name: Optional[Union[str, Path]] = None,
    ) -> AnalysisResult:
        """Extract, profile and suggest charts for one file.

        Args:
            buffer: File content
            table_format: Format of the buffer. Detected from file_name or
                the content when omitted.
            file_name: Original file name, used for format detection

        Returns:
            AnalysisResult with one ProfiledTable per extracted table and
            the capped suggestion list

        Raises:
            ExtractionError: If the buffer is malformed
            UnsupportedFormatError: If the format cannot be determined
        """
        if table_format is None:
            table_format = self._extractor.detect_format(file_name=file_name, buffer=buffer)
            logger.info(f"Detected format {table_format.value} for {file_name or 'buffer'}")

        raw_tables = self._extractor.extract(buffer, table_format)
        profiled = self.profile_tables(raw_tables)
        suggestions = self.suggest_charts(profiled)

        logger.info(
            f"Analysis complete: {len(profiled)} table(s), "
            f"{sum(t.column_count for t in profiled)} column(s), "
            f"{len(suggestions)} suggestion(s)"
        )
        return AnalysisResult(tables=profiled, suggestions=suggestions)

    def extract_tables(
        self,
        buffer: bytes,
        table_format: Union[TableFormat, str],
    ) -> List[RawTable]:
        """Extract raw tables only."""
        return self._extractor.extract(buffer, table_format)

    def profile_tables(self, raw_tables: Sequence[RawTable]) -> List[ProfiledTable]:
        """Profile every extracted table, in order."""
        return [self._profiler.profile(table) for table in raw_tables]

    def suggest_charts(self, tables: Sequence[ProfiledTable]) -> List[ChartSuggestion]:
        """Suggest charts for profiled tables."""
        return self._suggester.suggest(tables)
