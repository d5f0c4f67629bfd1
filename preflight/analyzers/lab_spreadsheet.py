from preflight.analysis.exceptions import PreflightError, ToolUnavailableError
from preflight.analysis.policy import SpreadsheetPolicy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analysis.tiering import Level, tier_at_most
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.tabular import stats
from preflight.tabular.base import BaseSpreadsheetReader, SpreadsheetSample

SPREADSHEET_REMINDER = "Check columns: Patient/ID, DateTime, Test, Result, Units, Reference Range."


def _sample_text(sample: SpreadsheetSample) -> str:
    cells = [*sample.header, *(cell for record in sample.records for cell in record)]
    return " ".join(str(cell) for cell in cells if cell is not None).lower()


class LabSpreadsheetAnalyzer(BaseAnalyzer):
    """Checks the first worksheet of an .xlsx lab export."""

    label = "XLSX"

    def __init__(
        self,
        reader: BaseSpreadsheetReader | None,
        policy: SpreadsheetPolicy,
        *,
        row_cap: int = 200,
        degraded_score: float = DEFAULT_DEGRADED_SCORE,
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._reader = reader
        self._policy = policy
        self._row_cap = row_cap

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        if self._reader is None:
            raise ToolUnavailableError("no spreadsheet engine configured")
        return self.score(self._reader.read(descriptor.read(), self._row_cap))

    def score(self, sample: SpreadsheetSample) -> AnalysisResult:
        policy = self._policy
        if not sample.has_sheet:
            return AnalysisResult.of(policy.no_sheets_score, messages=["No sheets found"])

        result = ResultBuilder()
        result.detail(f"Sheet: {sample.sheet_name}, Rows: {sample.record_count}")
        if sample.record_count >= policy.rows_min:
            result.add(policy.rows.high)
        else:
            result.add(policy.rows.low).advise(f"Too few rows: include >= {policy.rows_min}.")

        result.detail(f"Columns: {sample.column_count}")
        if sample.column_count:
            result.add(policy.columns_present)
        else:
            result.add(policy.columns_missing).advise("No header row: add column names.")

        empty_rate = stats.empty_cell_rate(sample.records)
        result.detail(f"Empty cells rate: {empty_rate * 100:.1f}%")
        points, level = tier_at_most(empty_rate, policy.empties_cuts, policy.empties)
        result.add(points)
        if level is Level.MID:
            result.advise("Many blanks: fill key fields.")
        elif level is Level.LOW:
            result.advise("High blank rate.")

        if stats.has_unit_tokens(_sample_text(sample)):
            result.add(policy.units_bonus)
        result.advise(SPREADSHEET_REMINDER)
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        if isinstance(exc, ToolUnavailableError):
            return "XLSX library not available, try again or save as CSV"
        return "Could not parse XLSX, save as CSV and retry"
