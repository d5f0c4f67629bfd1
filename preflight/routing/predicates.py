"""File-type facts and the family predicates built on them.

Predicates only look at the descriptor's name and declared content type,
never at the bytes.
"""

import re
from dataclasses import dataclass

from preflight.files.models import FileDescriptor

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "bmp", "webp"})

_XRAY_RE = re.compile(r"x[- ]?ray|xray|radiograph|hand|wrist|chest|bone")
_MODALITY_TOKENS = frozenset({"ct", "mr", "mri", "us"})
_MODALITY_RE = re.compile(r"ultrasound|axial|sagittal|coronal|radiology|dicom|series")
_LAB_RE = re.compile(
    r"lab|report|cbc|cmp|lipid|thyroid|blood|hl7|fhir|chemistry|haem|hematology|biochem|pathology"
)
_TOKEN_RE = re.compile(r"[a-z0-9]+")


@dataclass(frozen=True)
class FileFacts:
    name: str
    type: str
    extension: str
    is_pdf: bool
    is_image: bool
    is_csv: bool
    is_xlsx: bool
    is_docx: bool
    is_dicom: bool
    is_json: bool
    is_hl7: bool

    @property
    def name_tokens(self) -> frozenset[str]:
        return frozenset(_TOKEN_RE.findall(self.name))


def facts(descriptor: FileDescriptor) -> FileFacts:
    """Classify a descriptor by extension and declared MIME type."""
    name = descriptor.name.lower()
    mime = descriptor.content_type.lower()
    ext = descriptor.extension
    return FileFacts(
        name=name,
        type=mime,
        extension=ext,
        is_pdf=ext == "pdf" or mime == "application/pdf",
        is_image=mime.startswith("image/") or ext in IMAGE_EXTENSIONS,
        is_csv=ext == "csv" or mime == "text/csv",
        is_xlsx=ext == "xlsx"
        or "spreadsheet" in mime
        or "excel" in mime
        or "officedocument.spreadsheetml" in mime,
        is_docx=ext == "docx" or "officedocument.wordprocessingml" in mime,
        is_dicom=ext == "dcm" or "dicom" in mime,
        is_json=ext == "json" or "application/json" in mime or "fhir+json" in mime,
        is_hl7=ext == "hl7" or "x-hl7" in mime,
    )


def looks_like_dicom(f: FileFacts) -> bool:
    return f.is_dicom


def looks_like_xray(f: FileFacts) -> bool:
    return f.is_image and _XRAY_RE.search(f.name) is not None


def looks_like_med_imaging(f: FileFacts) -> bool:
    """Modality abbreviations must be whole name tokens so 'results' is not 'us'."""
    if not f.is_image:
        return False
    return bool(f.name_tokens & _MODALITY_TOKENS) or _MODALITY_RE.search(f.name) is not None


def looks_like_lab(f: FileFacts) -> bool:
    if f.is_csv or f.is_xlsx or f.is_json or f.is_hl7:
        return True
    return _LAB_RE.search(f.name) is not None


def looks_like_generic_doc(f: FileFacts) -> bool:
    return f.is_pdf or f.is_image or f.is_csv or f.is_xlsx or f.is_docx
