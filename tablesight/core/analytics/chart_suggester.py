"""Heuristic chart suggestions from column profiles.

Proposes chart specifications (type plus field bindings) for profiled
tables. Titles are derived from field names only.

Per table, candidates are produced in this order:
- line charts of each metric over the first date column
- bar charts of metric by category
- one stacked bar of metric by category over time
- one funnel over a stage/status-like category
- one pie of the first metric by the first category

Candidates from every table are concatenated in table order and the list is
cut at the configured cap, so later kinds are dropped first.
"""

import logging
from typing import List, Optional, Sequence

from .config import SuggestionConfig
from .types import ChartSuggestion, ColumnProfile, ColumnType, ProfiledTable

logger = logging.getLogger(__name__)


class ChartSuggester:
    """Generates chart suggestions from profiled tables."""

    def __init__(self, config: Optional[SuggestionConfig] = None):
        """Initialize the suggester.

        Args:
            config: Limits and keywords. Defaults to SuggestionConfig().
        """
        self.config = config or SuggestionConfig()

    def suggest(self, tables: Sequence[ProfiledTable]) -> List[ChartSuggestion]:
        """Suggest charts for a set of profiled tables.

        Args:
            tables: Profiled tables, in the order their suggestions should rank

        Returns:
            At most ``max_suggestions`` chart suggestions
        """
        suggestions: List[ChartSuggestion] = []
        for table in tables:
            candidates = self.suggest_for_table(table)
            logger.debug(f"Table '{table.name}': {len(candidates)} chart candidates")
            suggestions.extend(candidates)

        limited = suggestions[: self.config.max_suggestions]
        logger.info(
            f"Suggested {len(limited)} chart(s) from {len(suggestions)} candidates "
            f"across {len(tables)} table(s)"
        )
        return limited

    def suggest_for_table(self, table: ProfiledTable) -> List[ChartSuggestion]:
        """All chart candidates for one table, uncapped, in generation order."""
        time_columns = table.columns_of_type(ColumnType.DATE)
        metric_columns = table.columns_of_type(ColumnType.NUMERIC)
        category_columns = [c for c in table.columns if self.is_category(c)]

        charts: List[ChartSuggestion] = []
        charts.extend(self._time_series(time_columns, metric_columns))
        charts.extend(self._category_breakdown(category_columns, metric_columns))
        charts.extend(self._stacked(time_columns, category_columns, metric_columns))
        charts.extend(self._funnel(category_columns))
        charts.extend(self._distribution(category_columns, metric_columns))
        return charts

    def is_category(self, column: ColumnProfile) -> bool:
        """Categorical columns, plus text columns with few distinct values."""
        if column.type == ColumnType.CATEGORICAL:
            return True
        return (
            column.type == ColumnType.TEXT
            and column.distinct_count < self.config.text_category_max_distinct
        )

    def _time_series(
        self,
        time_columns: List[ColumnProfile],
        metric_columns: List[ColumnProfile],
    ) -> List[ChartSuggestion]:
        if not time_columns or not metric_columns:
            return []

        x = time_columns[0].name
        return [
            ChartSuggestion(
                chart_type="line",
                title=f"{metric.name} Over Time",
                x_field=x,
                y_field=metric.name,
            )
            for metric in metric_columns[: self.config.max_time_series_metrics]
        ]

    def _category_breakdown(
        self,
        category_columns: List[ColumnProfile],
        metric_columns: List[ColumnProfile],
    ) -> List[ChartSuggestion]:
        if not category_columns or not metric_columns:
            return []

        return [
            ChartSuggestion(
                chart_type="bar",
                title=f"{metric.name} by {category.name}",
                x_field=category.name,
                y_field=metric.name,
            )
            for metric in metric_columns[: self.config.max_breakdown_metrics]
            for category in category_columns[: self.config.max_breakdown_categories]
        ]

    def _stacked(
        self,
        time_columns: List[ColumnProfile],
        category_columns: List[ColumnProfile],
        metric_columns: List[ColumnProfile],
    ) -> List[ChartSuggestion]:
        if not time_columns or not category_columns or not metric_columns:
            return []

        metric, category = metric_columns[0], category_columns[0]
        return [ChartSuggestion(
            chart_type="stackedBar",
            title=f"{metric.name} by {category.name} Over Time",
            x_field=time_columns[0].name,
            y_field=metric.name,
            series_field=category.name,
        )]

    def _funnel(self, category_columns: List[ColumnProfile]) -> List[ChartSuggestion]:
        keywords = [k.lower() for k in self.config.funnel_keywords]
        for column in category_columns:
            name = column.name.lower()
            if any(keyword in name for keyword in keywords):
                return [ChartSuggestion(
                    chart_type="funnel",
                    title=f"Pipeline: {column.name}",
                    x_field=column.name,
                    y_field=self.config.funnel_metric,
                )]
        return []

    def _distribution(
        self,
        category_columns: List[ColumnProfile],
        metric_columns: List[ColumnProfile],
    ) -> List[ChartSuggestion]:
        if not category_columns or not metric_columns:
            return []

        metric, category = metric_columns[0], category_columns[0]
        return [ChartSuggestion(
            chart_type="pie",
            title=f"Distribution: {metric.name} by {category.name}",
            x_field=category.name,
            y_field=metric.name,
        )]


def suggest_charts(
    tables: Sequence[ProfiledTable],
    config: Optional[SuggestionConfig] = None,
) -> List[ChartSuggestion]:
    """Suggest charts with the given (or default) limits."""
    return ChartSuggester(config).suggest(tables)
