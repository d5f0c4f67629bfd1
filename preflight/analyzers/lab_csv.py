import csv
import json

from preflight.analysis.exceptions import ParseError, PreflightError
from preflight.analysis.policy import CsvPolicy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analysis.tiering import Level, tier_at_most
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.tabular import stats

CSV_REMINDER = "Ensure patient ID, collection date/time, units, and reference ranges are present."


class LabCsvAnalyzer(BaseAnalyzer):
    """Structural checks over a bounded sample of a delimited lab export.

    Only the first ``sample_bytes`` bytes and ``row_cap`` rows are read, which
    bounds the cost of huge exports.
    """

    label = "CSV"

    def __init__(
        self,
        policy: CsvPolicy,
        *,
        sample_bytes: int = 250_000,
        row_cap: int = 200,
        degraded_score: float = DEFAULT_DEGRADED_SCORE,
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._policy = policy
        self._sample_bytes = sample_bytes
        self._row_cap = row_cap

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        sample = stats.decode_sample(descriptor.read(), self._sample_bytes)
        delimiter = stats.detect_delimiter(sample)
        try:
            rows = stats.split_rows(sample, delimiter, self._row_cap)
        except csv.Error as exc:
            raise ParseError(f"CSV parse error: {exc}") from exc
        return self.score(rows, delimiter, stats.has_unit_tokens(sample))

    def score(self, rows: list[list[str]], delimiter: str, has_units: bool) -> AnalysisResult:
        policy = self._policy
        result = ResultBuilder()

        result.detail(f"Rows: {len(rows)}, Delim: {json.dumps(delimiter)}")
        if len(rows) >= policy.rows_min:
            result.add(policy.rows.high)
        else:
            result.add(policy.rows.low).advise(f"Very few rows: include >= {policy.rows_min}.")

        counts = [len(row) for row in rows]
        inconsistency = stats.inconsistency_rate(counts)
        result.detail(
            f"Inconsistency: {inconsistency * 100:.1f}% (mode {stats.mode(counts)} columns)"
        )
        points, level = tier_at_most(inconsistency, policy.consistency_cuts, policy.consistency)
        result.add(points)
        if level is Level.MID:
            result.advise("Irregular column counts: fix separators/quotes.")
        elif level is Level.LOW:
            result.advise("Highly inconsistent columns: clean CSV export.")

        empty_rate = stats.empty_cell_rate(rows)
        result.detail(f"Empty cells rate: {empty_rate * 100:.1f}%")
        points, level = tier_at_most(empty_rate, policy.empties_cuts, policy.empties)
        result.add(points)
        if level is Level.MID:
            result.advise("Many empty cells: fill key fields.")
        elif level is Level.LOW:
            result.advise("Too many empty cells.")

        result.detail(f"Units: {'yes' if has_units else 'no'}")
        if has_units:
            result.add(policy.units_bonus)
        result.advise(CSV_REMINDER)
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        return "Could not parse CSV, limited checks"
