from unittest.mock import MagicMock

import pytest

from preflight.analysis.families import Family
from preflight.analysis.policy import DEFAULT_POLICY
from preflight.analysis.verdict import Thresholds
from preflight.routing.router import FAMILY_RULES, FamilyRule, Router, select_family
from tests.helpers import descriptor


class TestSelectFamily:
    @pytest.mark.parametrize(
        ("name", "content_type", "family"),
        [
            ("study.dcm", "", Family.DICOM_STUB),
            ("chest_ct.dcm", "application/dicom", Family.DICOM_STUB),
            ("chest_xray.jpg", "image/jpeg", Family.XRAY),
            ("ct_axial_export.png", "image/png", Family.MED_IMAGING),
            ("labs.csv", "text/csv", Family.LABS),
            ("cbc_report.pdf", "application/pdf", Family.LABS),
            ("results.json", "application/json", Family.LABS),
            ("oru.hl7", "", Family.LABS),
            ("discharge_summary.pdf", "application/pdf", Family.DOC_OCR),
            ("letter.docx", "", Family.DOC_OCR),
            ("scan.png", "image/png", Family.DOC_OCR),
            ("archive.zip", "application/zip", Family.UNRECOGNIZED),
            ("noextension", "", Family.UNRECOGNIZED),
        ],
    )
    def test_routes(self, name: str, content_type: str, family: Family) -> None:
        assert select_family(descriptor(name, content_type=content_type)) is family

    def test_xray_keywords_win_over_modality(self) -> None:
        assert select_family(descriptor("chest_ct.png")) is Family.XRAY

    def test_imaging_wins_over_lab_keywords(self) -> None:
        assert select_family(descriptor("ct_report.png")) is Family.MED_IMAGING

    def test_is_deterministic(self) -> None:
        d = descriptor("ct_axial_export.png", content_type="image/png")
        assert {select_family(d) for _ in range(20)} == {Family.MED_IMAGING}

    def test_rule_order_is_respected(self) -> None:
        rules = (
            FamilyRule(Family.LABS, lambda f: True),
            *FAMILY_RULES,
        )
        assert select_family(descriptor("study.dcm"), rules) is Family.LABS

    def test_failsafe_without_rules(self) -> None:
        assert select_family(descriptor("a.pdf"), rules=()) is Family.DOC_OCR
        assert select_family(descriptor("a.bin"), rules=()) is Family.UNRECOGNIZED


class TestRouter:
    def _analyzers(self) -> dict[Family, MagicMock]:
        return {family: MagicMock(name=family.value) for family in Family}

    def test_route_returns_family_analyzer_and_thresholds(self) -> None:
        analyzers = self._analyzers()
        router = Router(analyzers, DEFAULT_POLICY)
        route = router.route(descriptor("labs.csv"))
        assert route.family is Family.LABS
        assert route.analyzer is analyzers[Family.LABS]
        assert route.thresholds == Thresholds(accept=85, borderline=70)

    def test_every_family_has_thresholds(self) -> None:
        for family in Family:
            assert DEFAULT_POLICY.thresholds_for(family).accept > 0

    def test_requires_analyzer_for_every_family(self) -> None:
        analyzers = self._analyzers()
        del analyzers[Family.UNRECOGNIZED]
        with pytest.raises(ValueError, match="unrecognized"):
            Router(analyzers, DEFAULT_POLICY)
