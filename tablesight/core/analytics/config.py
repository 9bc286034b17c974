"""Analytics Configuration Constants.

Thresholds and limits for table extraction, column type inference and
chart suggestion. Defaults reproduce the stock behavior; overrides come
from the ``analytics`` section of config/tablesight.yaml.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

from tablesight.core.exceptions import ConfigurationError


@dataclass
class ExtractionConfig:
    """Configuration for reading delimited text and workbooks."""

    delimited_table_name: str = "Sheet1"  # Label of the single table from delimited text
    encodings: List[str] = field(default_factory=lambda: ["utf-8-sig", "cp1252", "latin-1"])
    delimiters: List[str] = field(default_factory=lambda: [",", ";", "\t", "|"])
    sniff_bytes: int = 64 * 1024  # Sample size for delimiter detection


@dataclass
class InferenceConfig:
    """Configuration for column type inference."""

    type_threshold: float = 0.8  # Share of non-null values a type test must reach
    categorical_max_distinct: int = 20  # Distinct values must stay below this
    categorical_max_ratio: float = 0.5  # ... and below this share of non-null values


@dataclass
class ProfilingConfig:
    """Configuration for table profiling."""

    sample_size: int = 100  # Raw rows kept on each profiled table


@dataclass
class SuggestionConfig:
    """Configuration for the chart suggestion heuristic."""

    max_suggestions: int = 6  # Cap across all tables
    max_time_series_metrics: int = 3  # Line charts per table
    max_breakdown_metrics: int = 2
    max_breakdown_categories: int = 2
    text_category_max_distinct: int = 20  # Text columns below this count as categories
    funnel_keywords: List[str] = field(default_factory=lambda: [
        "stage", "status", "phase", "step", "funnel"
    ])
    funnel_metric: str = "count"  # Synthetic metric for funnel charts


def _build_section(section_cls, data: Dict[str, Any]):
    """Build a section dataclass from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Section '{section_cls.__name__}' must be a mapping, got {type(data).__name__}"
        )
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class AnalyticsConfig:
    """Master configuration for table analysis."""

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    profiling: ProfilingConfig = field(default_factory=ProfilingConfig)
    suggestion: SuggestionConfig = field(default_factory=SuggestionConfig)

    @classmethod
    def default(cls) -> "AnalyticsConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyticsConfig":
        """Create configuration from the ``analytics`` YAML section.

        Missing sections and keys keep their defaults.

        Raises:
            ConfigurationError: If a value is out of range.
        """
        data = data or {}
        config = cls(
            extraction=_build_section(ExtractionConfig, data.get("extraction", {})),
            inference=_build_section(InferenceConfig, data.get("inference", {})),
            profiling=_build_section(ProfilingConfig, data.get("profiling", {})),
            suggestion=_build_section(SuggestionConfig, data.get("suggestion", {})),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigurationError: If any value is out of range.
        """
        errors: List[str] = []

        if not 0 < self.inference.type_threshold <= 1:
            errors.append("inference.type_threshold must be in (0, 1]")
        if not 0 < self.inference.categorical_max_ratio <= 1:
            errors.append("inference.categorical_max_ratio must be in (0, 1]")
        if self.inference.categorical_max_distinct < 1:
            errors.append("inference.categorical_max_distinct must be positive")
        if self.profiling.sample_size < 0:
            errors.append("profiling.sample_size must not be negative")

        for name in (
            "max_suggestions",
            "max_time_series_metrics",
            "max_breakdown_metrics",
            "max_breakdown_categories",
            "text_category_max_distinct",
        ):
            if getattr(self.suggestion, name) < 1:
                errors.append(f"suggestion.{name} must be positive")

        if not self.extraction.encodings:
            errors.append("extraction.encodings must not be empty")
        if any(len(d) != 1 for d in self.extraction.delimiters):
            errors.append("extraction.delimiters must be single characters")

        if errors:
            raise ConfigurationError("; ".join(errors), details={"errors": errors})


# Default configuration instance
DEFAULT_CONFIG = AnalyticsConfig.default()
