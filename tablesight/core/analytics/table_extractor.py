"""Table extractor service for analytics module.

This module converts delimited-text and spreadsheet-workbook buffers into
RawTable objects: unique ordered column names plus one record per data row,
with numeric literals already coerced to numbers.
"""

import csv
import io
import logging
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from tablesight.core.exceptions import ExtractionError, UnsupportedFormatError

from .coercion import coerce_cell_text
from .config import ExtractionConfig
from .types import RawTable, Record, Scalar, TableFormat


class TableExtractorService:
    """Service for extracting raw tables from delimited text and workbooks.

    Delimited text always yields exactly one table. A workbook yields one
    table per sheet that has at least one data row below its header.

    Attributes:
        logger: Logger instance for operation tracking.
    """

    # Supported file extensions
    SUPPORTED_WORKBOOK_EXTENSIONS = {".xlsx", ".xlsm", ".xls"}
    SUPPORTED_DELIMITED_EXTENSIONS = {".csv", ".tsv", ".txt"}
    SUPPORTED_EXTENSIONS = SUPPORTED_WORKBOOK_EXTENSIONS | SUPPORTED_DELIMITED_EXTENSIONS

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        """Initialize the table extractor service.

        Args:
            config: Extraction settings. Defaults to ExtractionConfig().
        """
        self.config = config or ExtractionConfig()
        self._logger = logging.getLogger(self.__class__.__name__)
        self._logger.setLevel(logging.INFO)

    @property
    def logger(self) -> logging.Logger:
        """Access to the service logger."""
        return self._logger

    def extract(
        self,
        buffer: bytes,
        table_format: Union[TableFormat, str],
    ) -> List[RawTable]:
        """Extract raw tables from a file buffer.

        Args:
            buffer: File content as bytes.
            table_format: TableFormat (or its string value) of the buffer.

        Returns:
            List of RawTable, in sheet order. Empty for a workbook with no
            sheets or no sheet with data rows.

        Raises:
            ExtractionError: If the buffer is malformed. No partial result is
                returned.
            UnsupportedFormatError: If table_format is not recognized.
        """
        try:
            table_format = TableFormat(table_format)
        except ValueError:
            raise UnsupportedFormatError(
                f"Unknown table format: {table_format}",
                details={"supported": [f.value for f in TableFormat]},
            )

        self._log_operation("extract", table_format=table_format.value, size=len(buffer))

        try:
            if table_format == TableFormat.DELIMITED_TEXT:
                tables = [self.extract_delimited(buffer)]
            else:
                tables = self.extract_workbook(buffer)
        except ExtractionError as e:
            self._log_error("extract", e.message)
            raise

        self.logger.info(
            f"Extracted {len(tables)} table(s): "
            + ", ".join(f"{t.name} ({t.row_count} rows)" for t in tables)
        )
        return tables

    def detect_format(
        self,
        file_name: Optional[Union[str, Path]] = None,
        buffer: Optional[bytes] = None,
    ) -> TableFormat:
        """Detect the table format from a file name or the buffer content.

        The file extension wins when it is recognized; otherwise the first
        bytes of the buffer are inspected.

        Raises:
            UnsupportedFormatError: If the format cannot be determined.
        """
        if file_name:
            extension = Path(file_name).suffix.lower()
            if extension in self.SUPPORTED_WORKBOOK_EXTENSIONS:
                return TableFormat.SPREADSHEET_WORKBOOK
            if extension in self.SUPPORTED_DELIMITED_EXTENSIONS:
                return TableFormat.DELIMITED_TEXT

        if buffer is not None:
            return self._detect_format_from_bytes(buffer)

        raise UnsupportedFormatError(
            f"Unsupported file extension for {file_name}. "
            f"Supported: {', '.join(sorted(self.SUPPORTED_EXTENSIONS))}"
        )

    def _detect_format_from_bytes(self, file_bytes: bytes) -> TableFormat:
        """Detect the table format from content bytes.

        Raises:
            UnsupportedFormatError: If the format cannot be determined.
        """
        # XLSX/XLSM files are ZIP containers
        if file_bytes[:2] == b'PK':
            return TableFormat.SPREADSHEET_WORKBOOK
        # XLS files start with the OLE compound document signature
        if file_bytes[:8] == b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1':
            return TableFormat.SPREADSHEET_WORKBOOK

        if self._decode(file_bytes[:1000], strict=False) is not None:
            return TableFormat.DELIMITED_TEXT

        raise UnsupportedFormatError(
            "Could not determine file type from content. "
            "Please provide a file name with extension or valid workbook/text bytes."
        )

    # ------------------------------------------------------------------
    # Delimited text
    # ------------------------------------------------------------------

    def extract_delimited(self, buffer: bytes) -> RawTable:
        """Extract the single table of a delimited-text buffer.

        Raises:
            ExtractionError: On undecodable text, an unterminated quoted field
                or a row whose field count differs from the header.
        """
        name = self.config.delimited_table_name
        text = self._decode(buffer)
        if text is None:
            raise ExtractionError(
                f"Could not decode text with any supported encoding: {self.config.encodings}",
                table=name,
            )

        if not text.strip():
            return RawTable(name=name)

        delimiter = self._detect_delimiter(text)
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)

        header: Optional[List[str]] = None
        columns: List[str] = []
        rows: List[Record] = []

        try:
            for fields in reader:
                # Blank line
                if not fields:
                    continue

                if header is None:
                    header, columns = self._normalize_header(fields)
                    continue

                if len(fields) != len(header):
                    raise ExtractionError(
                        f"Line {reader.line_num} has {len(fields)} fields, "
                        f"expected {len(header)}",
                        table=name,
                        row=reader.line_num,
                    )

                rows.append(self._build_record(
                    header, columns, [coerce_cell_text(f) for f in fields]
                ))
        except csv.Error as e:
            raise ExtractionError(
                f"Malformed delimited text near line {reader.line_num}: {e}",
                table=name,
                row=reader.line_num,
            )

        return RawTable(name=name, columns=columns, rows=rows)

    def _decode(self, buffer: bytes, strict: bool = True) -> Optional[str]:
        """Decode bytes with the first encoding that succeeds.

        With ``strict=False`` only text-like content is accepted: a NUL byte
        means binary.
        """
        if not strict and b"\x00" in buffer:
            return None

        for encoding in self.config.encodings:
            try:
                return buffer.decode(encoding)
            except UnicodeDecodeError:
                continue
            except LookupError:
                self.logger.warning(f"Unknown encoding in config: {encoding}")
                continue
        return None

    def _detect_delimiter(self, text: str) -> str:
        """Pick the delimiter among the configured candidates.

        Falls back to a comma when the sample is ambiguous.
        """
        candidates = "".join(self.config.delimiters)
        if not candidates:
            return ","

        sample = text[: self.config.sniff_bytes]
        # Sniff whole lines only
        if len(text) > len(sample) and "\n" in sample:
            sample = sample[: sample.rfind("\n")]

        try:
            dialect = csv.Sniffer().sniff(sample, delimiters=candidates)
        except csv.Error:
            return ","
        return dialect.delimiter

    # ------------------------------------------------------------------
    # Workbooks
    # ------------------------------------------------------------------

    def extract_workbook(self, buffer: bytes) -> List[RawTable]:
        """Extract one table per non-empty sheet of a workbook buffer.

        Raises:
            ExtractionError: If the workbook container cannot be read.
        """
        try:
            excel_file = pd.ExcelFile(io.BytesIO(buffer))
        except (ValueError, zipfile.BadZipFile, KeyError, OSError) as e:
            raise ExtractionError(f"Could not read workbook: {e}")

        tables: List[RawTable] = []
        with excel_file:
            for sheet_name in excel_file.sheet_names:
                table = self._extract_sheet(excel_file, str(sheet_name))
                if table is None:
                    self.logger.debug(f"Skipping sheet '{sheet_name}': no data rows")
                    continue
                tables.append(table)

        return tables

    def _extract_sheet(self, excel_file: pd.ExcelFile, sheet_name: str) -> Optional[RawTable]:
        """Extract a single sheet, or None if it has no data rows."""
        try:
            df = excel_file.parse(
                sheet_name,
                header=None,
                dtype=object,
                keep_default_na=False,
            )
        except (ValueError, KeyError, OSError, zipfile.BadZipFile) as e:
            raise ExtractionError(f"Could not read sheet: {e}", table=sheet_name)

        grid = [
            [self._convert_workbook_cell(v) for v in row]
            for row in df.itertuples(index=False, name=None)
        ]
        grid = [row for row in grid if any(v is not None for v in row)]
        if len(grid) < 2:
            return None

        width = max(len(row) for row in grid)
        grid = [list(row) + [None] * (width - len(row)) for row in grid]

        header_cells, data = grid[0], grid[1:]

        # Drop columns with neither a header nor any data
        keep = [
            i for i in range(width)
            if header_cells[i] is not None or any(row[i] is not None for row in data)
        ]
        header, columns = self._normalize_header([
            "" if header_cells[i] is None else str(header_cells[i]) for i in keep
        ])
        rows = [self._build_record(header, columns, [row[i] for i in keep]) for row in data]

        return RawTable(name=sheet_name, columns=columns, rows=rows)

    def _convert_workbook_cell(self, value: Any) -> Scalar:
        """Convert a workbook cell to a Scalar.

        Booleans and numbers pass through typed, dates become ISO strings,
        text goes through the same numeric coercion as delimited text.
        """
        if value is None:
            return None
        if isinstance(value, np.generic):
            value = value.item()
        if isinstance(value, float) and np.isnan(value):
            return None
        if value is pd.NaT:
            return None
        if isinstance(value, (bool, int, float)):
            return value
        if isinstance(value, datetime):
            if value.time() == time(0, 0):
                return value.date().isoformat()
            return value.isoformat()
        if isinstance(value, (date, time)):
            return value.isoformat()
        if isinstance(value, str):
            return coerce_cell_text(value)
        return str(value)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _normalize_header(self, cells: Sequence[str]) -> Tuple[List[str], List[str]]:
        """Normalize header cells.

        Returns:
            Tuple of (name per source position, unique column names in order).
            A repeated name keeps its first position in the column list.
        """
        cleaned = [str(cell).strip().replace('\n', ' ').replace('\r', ' ') for cell in cells]
        taken = {name for name in cleaned if name}

        names: List[str] = []
        for i, name in enumerate(cleaned):
            if not name:
                # Generated names never collide with real headers
                name = f"column_{i}"
                suffix = 1
                while name in taken:
                    name = f"column_{i}_{suffix}"
                    suffix += 1
                taken.add(name)
            names.append(name)

        duplicates = len(names) - len(set(names))
        if duplicates:
            self.logger.warning(f"Header has {duplicates} duplicate column name(s); last value wins")

        return names, list(dict.fromkeys(names))

    def _build_record(
        self,
        header: Sequence[str],
        columns: Sequence[str],
        values: Sequence[Scalar],
    ) -> Record:
        """Map values to column names; for a repeated name the last value wins."""
        record: Dict[str, Scalar] = dict.fromkeys(columns)
        for name, value in zip(header, values):
            record[name] = value
        return record

    def _log_operation(self, operation: str, **kwargs: Any) -> None:
        """Log a service operation with context.

        Args:
            operation: Operation name.
            **kwargs: Additional context to log.
        """
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        self._logger.info(f"{operation}: {context}")

    def _log_error(self, operation: str, error: str) -> None:
        """Log an error with context.

        Args:
            operation: Operation that failed.
            error: Error message.
        """
        self._logger.error(f"{operation} failed: {error}")
