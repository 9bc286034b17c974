"""Column type inference.

Classifies a column into exactly one ColumnType by running the coercion
predicates in a fixed order. The first test that passes wins:

1. date        - share of date strings reaches the threshold
2. numeric     - share of numbers / numeric literals reaches the threshold
3. boolean     - share of booleans / "true"/"false" reaches the threshold
4. categorical - few distinct values, relative to the non-null count
5. text        - everything else

Dates are tested before numbers so that a column of epoch integers only
becomes numeric after the date test has rejected it.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .coercion import is_boolean_value, is_date_literal, is_numeric_value
from .config import InferenceConfig
from .types import ColumnType, Scalar, scalar_to_text

logger = logging.getLogger(__name__)

Predicate = Callable[[Scalar], bool]


def non_null(values: Sequence[Scalar]) -> List[Scalar]:
    """Values that are not None, in order."""
    return [v for v in values if v is not None]


def distinct_count(values: Sequence[Scalar]) -> int:
    """Number of distinct non-null values after string coercion."""
    return len({scalar_to_text(v) for v in values if v is not None})


def share_at_least(
    values: Sequence[Scalar],
    predicate: Predicate,
    threshold: float,
) -> bool:
    """True if at least ``threshold`` of ``values`` satisfy ``predicate``.

    Stops as soon as the outcome is decided either way.
    """
    total = len(values)
    if total == 0:
        return False

    # Tolerance keeps an exact 80% from failing on float rounding
    required = threshold * total - 1e-9
    allowed_misses = total - required
    hits = misses = 0

    for value in values:
        if predicate(value):
            hits += 1
            if hits >= required:
                return True
        else:
            misses += 1
            if misses > allowed_misses:
                return False

    return hits >= required


def is_categorical(
    values: Sequence[Scalar],
    max_distinct: int = 20,
    max_ratio: float = 0.5,
) -> bool:
    """Low-cardinality test over non-null values."""
    if not values:
        return False
    distinct = distinct_count(values)
    return distinct < max_distinct and distinct < len(values) * max_ratio


class ColumnTypeInferrer:
    """Deterministic column type classifier."""

    def __init__(self, config: Optional[InferenceConfig] = None):
        """Initialize the inferrer.

        Args:
            config: Thresholds. Defaults to InferenceConfig().
        """
        self.config = config or InferenceConfig()

    def _threshold_tests(self) -> List[Tuple[ColumnType, Predicate]]:
        # Order is significant, see module docstring
        return [
            (ColumnType.DATE, is_date_literal),
            (ColumnType.NUMERIC, is_numeric_value),
            (ColumnType.BOOLEAN, is_boolean_value),
        ]

    def infer(self, values: Sequence[Scalar]) -> ColumnType:
        """Classify a column.

        Args:
            values: All values of the column, including None

        Returns:
            The column type. An all-null or empty column is TEXT.
        """
        present = non_null(values)
        if not present:
            return ColumnType.TEXT

        for column_type, predicate in self._threshold_tests():
            if share_at_least(present, predicate, self.config.type_threshold):
                return column_type

        if is_categorical(
            present,
            max_distinct=self.config.categorical_max_distinct,
            max_ratio=self.config.categorical_max_ratio,
        ):
            return ColumnType.CATEGORICAL

        return ColumnType.TEXT


def infer_column_type(
    values: Sequence[Scalar],
    config: Optional[InferenceConfig] = None,
) -> ColumnType:
    """Classify a column with the given (or default) thresholds."""
    return ColumnTypeInferrer(config).infer(values)
