"""Domain exceptions for table analysis.

Callers catch these to mark the owning file or table as failed.

Usage:
    from tablesight.core.exceptions import ExtractionError

    try:
        tables = extractor.extract(buffer, TableFormat.DELIMITED_TEXT)
    except ExtractionError as e:
        mark_failed(data_source_id, e.to_dict())
"""

from typing import Any, Dict, Optional


class TablesightError(Exception):
    """Base exception for all Tablesight errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (optional)
    """

    default_message: str = "An error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for status reporting."""
        result = {
            "success": False,
            "error": self.message
        }
        if self.details:
            result["details"] = self.details
        return result


class ExtractionError(TablesightError):
    """Raised when a delimited-text or workbook buffer cannot be read.

    Examples:
        raise ExtractionError("Unterminated quoted field", table="Sheet1", row=4)
        raise ExtractionError("Workbook container is corrupt")
    """

    default_message = "Failed to extract tables"

    def __init__(
        self,
        message: Optional[str] = None,
        table: Optional[str] = None,
        row: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = dict(details or {})
        if table is not None:
            details["table"] = table
        if row is not None:
            details["row"] = row
        self.table = table
        self.row = row
        super().__init__(message, details)


class UnsupportedFormatError(TablesightError):
    """Raised when the input format cannot be determined or is not supported."""

    default_message = "Unsupported file format"


class ConfigurationError(TablesightError):
    """Raised when analytics configuration values are invalid.

    Examples:
        raise ConfigurationError("type_threshold must be in (0, 1]")
    """

    default_message = "Configuration error"
