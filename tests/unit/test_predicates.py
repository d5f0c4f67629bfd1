import pytest

from preflight.routing.predicates import (
    facts,
    looks_like_dicom,
    looks_like_generic_doc,
    looks_like_lab,
    looks_like_med_imaging,
    looks_like_xray,
)
from tests.helpers import descriptor


class TestFacts:
    def test_extension_and_mime_flags(self) -> None:
        f = facts(descriptor("Report.PDF"))
        assert f.name == "report.pdf"
        assert f.extension == "pdf"
        assert f.is_pdf
        assert not f.is_image

    def test_mime_only_image(self) -> None:
        assert facts(descriptor("upload", content_type="image/tiff")).is_image

    @pytest.mark.parametrize(
        ("name", "content_type", "flag"),
        [
            ("a.csv", "", "is_csv"),
            ("a", "text/csv", "is_csv"),
            ("a.xlsx", "", "is_xlsx"),
            ("a", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", "is_xlsx"),
            ("a.docx", "", "is_docx"),
            ("a.dcm", "", "is_dicom"),
            ("a", "application/dicom", "is_dicom"),
            ("a.json", "", "is_json"),
            ("a", "application/fhir+json", "is_json"),
            ("a.hl7", "", "is_hl7"),
            ("a", "x-application/x-hl7", "is_hl7"),
        ],
    )
    def test_format_flags(self, name: str, content_type: str, flag: str) -> None:
        assert getattr(facts(descriptor(name, content_type=content_type)), flag)

    def test_name_tokens(self) -> None:
        assert facts(descriptor("CT_axial-01.png")).name_tokens == {"ct", "axial", "01", "png"}


class TestFamilyPredicates:
    def test_dicom(self) -> None:
        assert looks_like_dicom(facts(descriptor("series.dcm")))

    @pytest.mark.parametrize("name", ["chest_xray.jpg", "x-ray.png", "Hand_AP.jpeg", "radiograph.bmp"])
    def test_xray_images(self, name: str) -> None:
        assert looks_like_xray(facts(descriptor(name)))

    def test_xray_keywords_need_an_image(self) -> None:
        assert not looks_like_xray(facts(descriptor("chest_xray.pdf")))

    @pytest.mark.parametrize("name", ["ct_slice.png", "brain MR.jpg", "abdomen_us.png", "sagittal.webp"])
    def test_med_imaging(self, name: str) -> None:
        assert looks_like_med_imaging(facts(descriptor(name)))

    @pytest.mark.parametrize("name", ["results.png", "picture.jpg", "structure.png"])
    def test_modality_abbreviations_match_whole_tokens_only(self, name: str) -> None:
        assert not looks_like_med_imaging(facts(descriptor(name)))

    @pytest.mark.parametrize("name", ["data.csv", "panel.xlsx", "bundle.json", "msg.hl7", "cbc_scan.jpg"])
    def test_lab(self, name: str) -> None:
        assert looks_like_lab(facts(descriptor(name)))

    def test_plain_pdf_is_not_lab(self) -> None:
        assert not looks_like_lab(facts(descriptor("invoice.pdf")))

    @pytest.mark.parametrize("name", ["a.pdf", "a.png", "a.csv", "a.xlsx", "a.docx"])
    def test_generic_doc(self, name: str) -> None:
        assert looks_like_generic_doc(facts(descriptor(name)))

    def test_unknown_is_not_generic_doc(self) -> None:
        assert not looks_like_generic_doc(facts(descriptor("archive.zip")))
