import io

import openpyxl

from preflight.analysis.exceptions import ParseError
from preflight.tabular.base import BaseSpreadsheetReader, SpreadsheetSample


def _is_blank(row: tuple[object, ...]) -> bool:
    return all(cell is None or cell == "" for cell in row)


def _fit(row: tuple[object, ...], width: int) -> tuple[object, ...]:
    record = tuple(row[:width])
    return record + (None,) * (width - len(record))


class OpenpyxlSpreadsheetReader(BaseSpreadsheetReader):
    """Reads .xlsx workbooks with openpyxl in read-only mode.

    The first row is the header; blank rows are skipped. Every record is
    counted but only the first ``row_cap`` are kept. Records are cut or
    padded with None to the header width.
    """

    def read(self, data: bytes, row_cap: int) -> SpreadsheetSample:
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except Exception as exc:
            raise ParseError(f"openpyxl could not open workbook: {exc}") from exc
        try:
            if not workbook.worksheets:
                return SpreadsheetSample(sheet_name=None)
            sheet = workbook.worksheets[0]
            header: tuple[object, ...] = ()
            records: list[tuple[object, ...]] = []
            record_count = 0
            for index, row in enumerate(sheet.iter_rows(values_only=True)):
                if index == 0:
                    header = tuple(row)
                    continue
                if _is_blank(row):
                    continue
                record_count += 1
                if len(records) < row_cap:
                    records.append(_fit(row, len(header)) if header else tuple(row))
            return SpreadsheetSample(
                sheet_name=sheet.title,
                header=header,
                records=tuple(records),
                record_count=record_count,
            )
        except Exception as exc:
            raise ParseError(f"openpyxl could not read worksheet: {exc}") from exc
        finally:
            workbook.close()
