from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SpreadsheetSample:
    """First sheet of a workbook: header row, sampled records and the full record count."""

    sheet_name: str | None
    header: tuple[object, ...] = ()
    records: tuple[tuple[object, ...], ...] = field(default=())
    record_count: int = 0

    @property
    def has_sheet(self) -> bool:
        return self.sheet_name is not None

    @property
    def column_count(self) -> int:
        return sum(1 for cell in self.header if cell not in (None, ""))


class BaseSpreadsheetReader(ABC):
    """Contract for spreadsheet parsing adapters."""

    @abstractmethod
    def read(self, data: bytes, row_cap: int) -> SpreadsheetSample:
        """Parse the first worksheet of a workbook.

        Args:
            data: Raw workbook content.
            row_cap: Maximum number of records kept for cell statistics.

        Returns:
            SpreadsheetSample; ``sheet_name`` is None when the workbook has no sheets.

        Raises:
            ParseError: if the workbook cannot be read.
        """
