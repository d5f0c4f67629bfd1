"""Scoring weight tables.

Tables are frozen and built once into ``DEFAULT_POLICY``; analyzers receive
the table they need at construction time. Point totals are not normalised
to 100, the final clamp in ``AnalysisResult.of`` absorbs bonuses and
penalties.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from preflight.analysis.families import Family
from preflight.analysis.verdict import Thresholds


@dataclass(frozen=True)
class Tier:
    """Points awarded for the high, mid and low bracket of one metric."""

    high: float
    mid: float
    low: float


@dataclass(frozen=True)
class Cuts:
    """Two cut points splitting a metric into high/mid/low brackets."""

    high: float
    mid: float


@dataclass(frozen=True)
class ScanExportPolicy:
    size: Tier = Tier(20, 12, 6)
    size_cuts: Cuts = Cuts(1.0, 0.6)
    sharpness: Tier = Tier(20, 12, 6)
    sharpness_cuts: Cuts = Cuts(120, 60)
    contrast: Tier = Tier(20, 12, 6)
    contrast_cuts: Cuts = Cuts(30, 20)
    uniformity: Tier = Tier(20, 12, 6)
    uniformity_cuts: Cuts = Cuts(8, 20)
    banding_empty_bins: int = 140
    banding_penalty: float = -10
    noise_sigma: float = 18
    noise_penalty: float = -8
    motion_ratio: float = 2.5
    motion_penalty: float = -10
    bonus: float = 10


@dataclass(frozen=True)
class PdfPolicy:
    text_layer: float = 35
    text_min_chars: int = 20
    render: Tier = Tier(20, 12, 0)
    render_cuts: Cuts = Cuts(2.0, 1.0)
    contrast: Tier = Tier(20, 12, 6)
    contrast_cuts: Cuts = Cuts(30, 20)
    completeness: float = 15


@dataclass(frozen=True)
class LabImagePolicy:
    resolution: Tier = Tier(35, 20, 8)
    resolution_cuts: Cuts = Cuts(2.0, 1.0)
    sharpness: Tier = Tier(25, 15, 6)
    sharpness_cuts: Cuts = Cuts(120, 60)
    contrast: Tier = Tier(20, 12, 6)
    contrast_cuts: Cuts = Cuts(30, 20)


@dataclass(frozen=True)
class DocumentImagePolicy:
    resolution_points: float = 40
    resolution_min_mp: float = 0.5
    resolution_max_mp: float = 3.0
    sharpness: Tier = Tier(30, 18, 8)
    sharpness_cuts: Cuts = Cuts(120, 60)
    contrast: Tier = Tier(20, 12, 6)
    contrast_cuts: Cuts = Cuts(30, 20)
    bonus: float = 10


@dataclass(frozen=True)
class CsvPolicy:
    rows_min: int = 10
    rows: Tier = Tier(30, 15, 15)
    consistency: Tier = Tier(35, 22, 10)
    consistency_cuts: Cuts = Cuts(0.05, 0.15)
    empties: Tier = Tier(20, 10, 5)
    empties_cuts: Cuts = Cuts(0.10, 0.25)
    units_bonus: float = 10


@dataclass(frozen=True)
class SpreadsheetPolicy:
    rows_min: int = 10
    rows: Tier = Tier(30, 15, 15)
    columns_present: float = 25
    columns_missing: float = 12
    empties: Tier = Tier(20, 10, 5)
    empties_cuts: Cuts = Cuts(0.10, 0.25)
    units_bonus: float = 10
    no_sheets_score: float = 45


@dataclass(frozen=True)
class FhirPolicy:
    structure: float = 60
    observation_each: float = 25
    observations_cap: float = 25
    units: float = 15


@dataclass(frozen=True)
class Hl7Policy:
    header_identity: float = 30
    order: float = 15
    result_each: float = 25
    results_cap: float = 25
    completion: float = 15


@dataclass(frozen=True)
class DocxPolicy:
    container: float = 50
    text: Tier = Tier(35, 20, 0)
    text_cuts: Cuts = Cuts(200, 20)
    completeness: float = 15


def _default_thresholds() -> Mapping[Family, Thresholds]:
    return MappingProxyType({family: Thresholds(accept=85, borderline=70) for family in Family})


@dataclass(frozen=True)
class Policy:
    """All weight tables and thresholds used by one Preflight instance."""

    xray: ScanExportPolicy = ScanExportPolicy()
    med_imaging: ScanExportPolicy = ScanExportPolicy()
    lab_pdf: PdfPolicy = PdfPolicy()
    lab_image: LabImagePolicy = LabImagePolicy()
    csv: CsvPolicy = CsvPolicy()
    spreadsheet: SpreadsheetPolicy = SpreadsheetPolicy()
    fhir: FhirPolicy = FhirPolicy()
    hl7: Hl7Policy = Hl7Policy()
    document_pdf: PdfPolicy = PdfPolicy()
    document_image: DocumentImagePolicy = DocumentImagePolicy()
    docx: DocxPolicy = DocxPolicy()
    thresholds: Mapping[Family, Thresholds] = field(default_factory=_default_thresholds)
    dicom_stub_score: float = 75
    degraded_score: float = 50
    unknown_format_score: float = 55
    unrecognized_score: float = 50

    def thresholds_for(self, family: Family) -> Thresholds:
        return self.thresholds[family]


DEFAULT_POLICY = Policy()
