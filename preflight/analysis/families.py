from enum import Enum


class Family(str, Enum):
    """Closed set of document families the router can select."""

    DICOM_STUB = "dicom-stub"
    XRAY = "xray-plus"
    MED_IMAGING = "med-imaging"
    LABS = "labs"
    DOC_OCR = "doc-ocr"
    UNRECOGNIZED = "unrecognized"
