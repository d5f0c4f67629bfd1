from unittest.mock import MagicMock, patch

import pytest

from preflight.analysis.exceptions import ParseError
from preflight.tabular.openpyxl_adapter import OpenpyxlSpreadsheetReader


def _workbook(*rows: tuple[object, ...]) -> MagicMock:
    sheet = MagicMock()
    sheet.title = "Results"
    sheet.iter_rows.return_value = iter(rows)
    workbook = MagicMock()
    workbook.worksheets = [sheet]
    return workbook


class TestOpenpyxlSpreadsheetReader:
    def test_short_records_are_padded_to_header(self) -> None:
        workbook = _workbook(
            ("Test", "Result", "Units"),
            ("Glucose", 5.4),
            ("Sodium",),
            ("Potassium", 4.1, "mmol/L", "extra"),
        )
        with patch(
            "preflight.tabular.openpyxl_adapter.openpyxl.load_workbook", return_value=workbook
        ):
            sample = OpenpyxlSpreadsheetReader().read(b"xlsx", row_cap=10)

        assert sample.records == (
            ("Glucose", 5.4, None),
            ("Sodium", None, None),
            ("Potassium", 4.1, "mmol/L"),
        )
        assert sample.record_count == 3
        workbook.close.assert_called_once()

    def test_row_error_is_wrapped_and_workbook_closed(self) -> None:
        workbook = _workbook()
        workbook.worksheets[0].iter_rows.side_effect = KeyError("sheet1.xml")
        with patch(
            "preflight.tabular.openpyxl_adapter.openpyxl.load_workbook", return_value=workbook
        ):
            with pytest.raises(ParseError, match="could not read worksheet"):
                OpenpyxlSpreadsheetReader().read(b"xlsx", row_cap=10)

        workbook.close.assert_called_once()
