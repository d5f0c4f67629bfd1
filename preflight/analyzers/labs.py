from preflight.analysis.result import AnalysisResult
from preflight.analyzers.base import BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.routing.predicates import FileFacts, facts


class LabsAnalyzer(BaseAnalyzer):
    """Dispatches lab files to the analyzer for their concrete format.

    Order: pdf, image, csv, xlsx, json, hl7.
    """

    label = "lab file"

    def __init__(
        self,
        *,
        pdf: BaseAnalyzer,
        image: BaseAnalyzer,
        csv: BaseAnalyzer,
        spreadsheet: BaseAnalyzer,
        fhir: BaseAnalyzer,
        hl7: BaseAnalyzer,
        unknown_score: float = 55,
    ) -> None:
        super().__init__()
        self._pdf = pdf
        self._image = image
        self._csv = csv
        self._spreadsheet = spreadsheet
        self._fhir = fhir
        self._hl7 = hl7
        self._unknown_score = unknown_score

    def select(self, f: FileFacts) -> BaseAnalyzer | None:
        if f.is_pdf:
            return self._pdf
        if f.is_image:
            return self._image
        if f.is_csv:
            return self._csv
        if f.is_xlsx:
            return self._spreadsheet
        if f.is_json:
            return self._fhir
        if f.is_hl7:
            return self._hl7
        return None

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        analyzer = self.select(facts(descriptor))
        if analyzer is None:
            return AnalysisResult.of(self._unknown_score, messages=["Unknown lab file format"])
        return analyzer.analyze(descriptor)
