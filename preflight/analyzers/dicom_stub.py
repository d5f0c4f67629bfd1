from preflight.analysis.result import AnalysisResult
from preflight.analyzers.base import BaseAnalyzer
from preflight.files.models import FileDescriptor

DICOM_STUB_MESSAGES = (
    "DICOM client stub: full checks should run server-side with a DICOM toolkit.",
    "Validate Modality (CT/MR/US), PixelSpacing, SliceThickness, Orientation, Series completeness.",
)


class DicomStubAnalyzer(BaseAnalyzer):
    """Placeholder for DICOM files: a fixed score, the content is never read."""

    label = "DICOM file"

    def __init__(self, score: float = 75) -> None:
        super().__init__()
        self._score = score

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        return AnalysisResult.of(
            self._score,
            messages=DICOM_STUB_MESSAGES,
            details=["Format: DICOM (.dcm)"],
        )
