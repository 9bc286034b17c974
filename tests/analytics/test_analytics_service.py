"""Tests for the end-to-end analytics service."""

import pytest

from tablesight.core.analytics.config import AnalyticsConfig, SuggestionConfig
from tablesight.core.analytics.service import AnalyticsService
from tablesight.core.analytics.types import ColumnType, TableFormat
from tablesight.core.exceptions import ExtractionError, UnsupportedFormatError


@pytest.fixture
def service():
    return AnalyticsService(AnalyticsConfig.default())


class TestAnalyze:
    """Tests for AnalyticsService.analyze."""

    def test_csv_end_to_end(self, service, sales_csv):
        """Test a sales CSV is profiled and gets time and category charts."""
        result = service.analyze(sales_csv, TableFormat.DELIMITED_TEXT)

        assert len(result.tables) == 1
        table = result.tables[0]
        assert table.name == "Sheet1"
        assert table.row_count == 12
        assert {c.name: c.type for c in table.columns} == {
            "date": ColumnType.DATE,
            "region": ColumnType.CATEGORICAL,
            "revenue": ColumnType.NUMERIC,
        }

        revenue = table.columns[2]
        assert revenue.min == 100.0
        assert revenue.max == 1200.0
        assert revenue.mean == 650.0
        assert revenue.null_percentage == 0.0

        assert [s.chart_type for s in result.suggestions] == ["line", "bar", "stackedBar", "pie"]
        assert result.suggestions[0].title == "revenue Over Time"
        assert result.suggestions[2].series_field == "region"

    def test_format_detected_from_file_name(self, service, workbook_bytes):
        """Test a workbook is recognized from its file name."""
        buffer = workbook_bytes({
            "Pipeline": [["Deal Stage", "Value"]] + [[s, i] for i, s in enumerate(["Lead", "Won", "Lost"] * 3)],
            "Notes": [["text"]],
        })

        result = service.analyze(buffer, file_name="deals.xlsx")

        assert [t.name for t in result.tables] == ["Pipeline"]
        assert [s.chart_type for s in result.suggestions] == ["bar", "funnel", "pie"]
        assert result.suggestions[1].title == "Pipeline: Deal Stage"

    def test_format_detected_from_content(self, service, sales_csv):
        result = service.analyze(sales_csv)

        assert result.tables[0].name == "Sheet1"

    def test_malformed_input_propagates(self, service):
        """Test extraction failures reach the caller unchanged."""
        with pytest.raises(ExtractionError):
            service.analyze(b"a,b\n1,2,3\n", TableFormat.DELIMITED_TEXT)

    def test_undetectable_format(self, service):
        with pytest.raises(UnsupportedFormatError):
            service.analyze(b"\x00\x00binary")

    def test_empty_input(self, service):
        """Test empty input yields an empty table and no suggestions."""
        result = service.analyze(b"", TableFormat.DELIMITED_TEXT)

        assert len(result.tables) == 1
        assert result.tables[0].columns == []
        assert result.suggestions == []

    def test_config_limits_applied(self, sales_csv):
        config = AnalyticsConfig(suggestion=SuggestionConfig(max_suggestions=2))

        result = AnalyticsService(config).analyze(sales_csv, TableFormat.DELIMITED_TEXT)

        assert [s.chart_type for s in result.suggestions] == ["line", "bar"]

    def test_to_dict(self, service, sales_csv):
        """Test the result renders as plain dictionaries."""
        data = service.analyze(sales_csv, TableFormat.DELIMITED_TEXT).to_dict()

        assert data["tables"][0]["rowCount"] == 12
        assert data["tables"][0]["columns"][0]["type"] == "date"
        assert len(data["tables"][0]["sampleRows"]) == 12
        assert data["suggestions"][0]["chartType"] == "line"


class TestStages:
    """Tests for the individual stage methods."""

    def test_stages_compose(self, service, sales_csv):
        raw = service.extract_tables(sales_csv, TableFormat.DELIMITED_TEXT)
        profiled = service.profile_tables(raw)
        charts = service.suggest_charts(profiled)

        assert charts == service.analyze(sales_csv, TableFormat.DELIMITED_TEXT).suggestions

    def test_default_config_loaded(self):
        """Test the service loads the bundled configuration when none is given."""
        service = AnalyticsService()

        assert service.config.suggestion.max_suggestions == 6
