import io
import zipfile
from unittest.mock import MagicMock

import docx
import pytest

from preflight.analysis.exceptions import ParseError
from preflight.analysis.policy import DocumentImagePolicy, DocxPolicy
from preflight.analysis.result import AnalysisResult
from preflight.analyzers.base import BaseAnalyzer
from preflight.analyzers.documents import (
    DOCUMENT_REMINDER,
    DocumentAnalyzer,
    DocumentImageAnalyzer,
    DocxAnalyzer,
    docx_text,
)
from tests.helpers import descriptor, flat_pixels, gray, scan_like_pixels


def _docx(*paragraphs: str, table: list[list[str]] | None = None, header: str = "") -> bytes:
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table:
        grid = document.add_table(rows=len(table), cols=len(table[0]))
        for row, values in zip(grid.rows, table):
            for cell, value in zip(row.cells, values):
                cell.text = value
    if header:
        document.sections[0].header.paragraphs[0].text = header
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


class TestDocumentImageAnalyzer:
    def test_sharp_large_scan(self) -> None:
        result = DocumentImageAnalyzer(MagicMock(), DocumentImagePolicy()).score(
            gray(scan_like_pixels(2000, 1500))
        )
        assert result.score == 100
        assert result.messages == ()
        assert result.details[0] == "MP: 3.00 (2000x1500)"

    def test_resolution_is_interpolated(self) -> None:
        # 1.75 MP sits halfway between 0.5 and 3.0
        result = DocumentImageAnalyzer(MagicMock(), DocumentImagePolicy()).score(
            gray(scan_like_pixels(1750, 1000))
        )
        assert result.score == 20 + 30 + 20 + 10
        assert "Low resolution: aim for >= 300 DPI." in result.messages

    def test_tiny_flat_image(self) -> None:
        result = DocumentImageAnalyzer(MagicMock(), DocumentImagePolicy()).score(gray(flat_pixels(50, 50)))
        assert result.score == 0 + 8 + 6 + 10
        assert result.messages == (
            "Very low resolution.",
            "Blurry: retake or rescan.",
            "Low contrast: improve lighting or scanner settings.",
        )


class TestDocxText:
    def test_extracts_paragraphs(self) -> None:
        assert docx_text(_docx("Discharge", "summary")) == "Discharge summary"

    def test_extracts_tables_and_headers(self) -> None:
        data = _docx(table=[["Test", "Result"], ["Hb", "13.5 g/dL"]], header="City Clinic")
        text = docx_text(data)
        assert "Hb" in text
        assert "13.5 g/dL" in text
        assert "City Clinic" in text

    def test_zip_without_document_part(self) -> None:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as archive:
            archive.writestr("notes.txt", "not a word document")
        with pytest.raises(ParseError, match="not a valid DOCX"):
            docx_text(buf.getvalue())

    def test_not_a_zip(self) -> None:
        with pytest.raises(ParseError, match="not a valid DOCX"):
            docx_text(b"plain text")


class TestDocxAnalyzer:
    def test_text_rich_document(self) -> None:
        result = DocxAnalyzer(DocxPolicy()).analyze(descriptor("letter.docx", _docx("word " * 60)))
        assert result.score == 100
        assert result.messages == (DOCUMENT_REMINDER,)

    def test_short_document(self) -> None:
        result = DocxAnalyzer(DocxPolicy()).analyze(descriptor("letter.docx", _docx("Referral for imaging")))
        assert result.score == 50 + 20 + 15
        assert "Little extractable text: check the document is not a pasted scan." in result.messages

    def test_empty_document(self) -> None:
        result = DocxAnalyzer(DocxPolicy()).analyze(descriptor("letter.docx", _docx()))
        assert result.score == 65
        assert "No extractable text: embedded scans will need OCR." in result.messages

    def test_broken_archive_degrades(self) -> None:
        result = DocxAnalyzer(DocxPolicy()).analyze(descriptor("letter.docx", b"PK\x03\x04broken"))
        assert result.score == 50
        assert result.degraded is True
        assert result.messages[0].startswith("Could not open DOCX, limited checks:")


class TestDocumentAnalyzer:
    def _documents(self) -> tuple[DocumentAnalyzer, dict[str, MagicMock]]:
        parts = {}
        for name in ("pdf", "image", "docx"):
            analyzer = MagicMock(spec=BaseAnalyzer)
            analyzer.analyze.return_value = AnalysisResult.of(70, messages=[name])
            parts[name] = analyzer
        return DocumentAnalyzer(**parts), parts

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("summary.pdf", "pdf"), ("scan.png", "image"), ("letter.docx", "docx")],
    )
    def test_dispatches_by_format(self, name: str, expected: str) -> None:
        documents, parts = self._documents()
        assert documents.analyze(descriptor(name)).messages == (expected,)
        parts[expected].analyze.assert_called_once()

    def test_other_document_format(self) -> None:
        documents, _parts = self._documents()
        result = documents.analyze(descriptor("table.csv"))
        assert result.score == 55
        assert result.messages == ("Unsupported document format for OCR preflight.",)
