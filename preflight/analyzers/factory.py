from preflight.analysis.families import Family
from preflight.analysis.policy import Policy
from preflight.analyzers.base import BaseAnalyzer
from preflight.analyzers.dicom_stub import DicomStubAnalyzer
from preflight.analyzers.documents import (
    DOCUMENT_REMINDER,
    DocumentAnalyzer,
    DocumentImageAnalyzer,
    DocxAnalyzer,
)
from preflight.analyzers.lab_csv import LabCsvAnalyzer
from preflight.analyzers.lab_fhir import LabFhirAnalyzer
from preflight.analyzers.lab_hl7 import LabHl7Analyzer
from preflight.analyzers.lab_image import LabImageAnalyzer
from preflight.analyzers.lab_spreadsheet import LabSpreadsheetAnalyzer
from preflight.analyzers.labs import LabsAnalyzer
from preflight.analyzers.pdf_report import PdfReportAnalyzer
from preflight.analyzers.scan_export import (
    MED_IMAGING_REMINDERS,
    XRAY_REMINDERS,
    ScanExportAnalyzer,
)
from preflight.analyzers.unrecognized import UnrecognizedAnalyzer
from preflight.config.settings import Settings
from preflight.imaging.base import BaseImageDecoder
from preflight.pdf.base import BasePdfRenderer
from preflight.tabular.base import BaseSpreadsheetReader


class AnalyzerFactory:
    """Builds one analyzer per family from settings, policy and collaborators."""

    @classmethod
    def create_all(
        cls,
        settings: Settings,
        policy: Policy,
        *,
        decoder: BaseImageDecoder,
        pdf_renderer: BasePdfRenderer,
        spreadsheet_reader: BaseSpreadsheetReader | None,
    ) -> dict[Family, BaseAnalyzer]:
        degraded = policy.degraded_score
        labs = LabsAnalyzer(
            pdf=PdfReportAnalyzer(
                pdf_renderer,
                policy.lab_pdf,
                scale=settings.pdf_render_scale,
                degraded_score=degraded,
            ),
            image=LabImageAnalyzer(decoder, policy.lab_image, degraded_score=degraded),
            csv=LabCsvAnalyzer(
                policy.csv,
                sample_bytes=settings.csv_sample_bytes,
                row_cap=settings.tabular_row_cap,
                degraded_score=degraded,
            ),
            spreadsheet=LabSpreadsheetAnalyzer(
                spreadsheet_reader,
                policy.spreadsheet,
                row_cap=settings.tabular_row_cap,
                degraded_score=degraded,
            ),
            fhir=LabFhirAnalyzer(policy.fhir, degraded_score=degraded),
            hl7=LabHl7Analyzer(policy.hl7, degraded_score=degraded),
            unknown_score=policy.unknown_format_score,
        )
        documents = DocumentAnalyzer(
            pdf=PdfReportAnalyzer(
                pdf_renderer,
                policy.document_pdf,
                scale=settings.pdf_render_scale,
                reminder=DOCUMENT_REMINDER,
                degraded_score=degraded,
            ),
            image=DocumentImageAnalyzer(decoder, policy.document_image, degraded_score=degraded),
            docx=DocxAnalyzer(policy.docx, degraded_score=degraded),
            unknown_score=policy.unknown_format_score,
        )
        return {
            Family.DICOM_STUB: DicomStubAnalyzer(score=policy.dicom_stub_score),
            Family.XRAY: ScanExportAnalyzer(
                decoder, policy.xray, reminders=XRAY_REMINDERS, degraded_score=degraded
            ),
            Family.MED_IMAGING: ScanExportAnalyzer(
                decoder,
                policy.med_imaging,
                reminders=MED_IMAGING_REMINDERS,
                degraded_score=degraded,
            ),
            Family.LABS: labs,
            Family.DOC_OCR: documents,
            Family.UNRECOGNIZED: UnrecognizedAnalyzer(score=policy.unrecognized_score),
        }
