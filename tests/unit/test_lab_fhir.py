import json

from preflight.analysis.policy import FhirPolicy
from preflight.analyzers.lab_fhir import LabFhirAnalyzer, collect_resources, has_unit
from tests.helpers import descriptor


def _observation(unit: str | None = None) -> dict[str, object]:
    quantity: dict[str, object] = {"value": 5.4}
    if unit:
        quantity["unit"] = unit
    return {"resourceType": "Observation", "valueQuantity": quantity}


def _bundle(*resources: dict[str, object]) -> bytes:
    document = {
        "resourceType": "Bundle",
        "entry": [{"resource": resource} for resource in resources],
    }
    return json.dumps(document).encode()


class TestCollectResources:
    def test_bundle_entries(self) -> None:
        document = {"entry": [{"resource": {"resourceType": "Patient"}}, {"fullUrl": "x"}, "junk"]}
        assert collect_resources(document) == [{"resourceType": "Patient"}]

    def test_single_resource(self) -> None:
        assert collect_resources({"resourceType": "Observation"}) == [{"resourceType": "Observation"}]

    def test_unrelated_object(self) -> None:
        assert collect_resources({"hello": "world"}) == []


class TestHasUnit:
    def test_unit_or_code(self) -> None:
        assert has_unit({"valueQuantity": {"unit": "mg/dL"}})
        assert has_unit({"valueQuantity": {"code": "mmol/L"}})

    def test_missing(self) -> None:
        assert not has_unit({"valueQuantity": {"value": 1}})
        assert not has_unit({"valueString": "positive"})


class TestLabFhirAnalyzer:
    def test_observations_without_units(self) -> None:
        data = _bundle({"resourceType": "Patient"}, _observation(), _observation(), _observation())
        result = LabFhirAnalyzer(FhirPolicy()).analyze(descriptor("bundle.json", data))
        # structure 60 + observation credit capped at 25, no unit bonus
        assert result.score == 85
        assert result.messages == ("Observations missing units.",)
        assert result.details == ("Resources: 4", "Observations: 3, With units: 0")

    def test_complete_bundle(self) -> None:
        data = _bundle({"resourceType": "Patient"}, _observation("mg/dL"))
        result = LabFhirAnalyzer(FhirPolicy()).analyze(descriptor("bundle.json", data))
        assert result.score == 100
        assert result.messages == ()

    def test_observation_credit_scales_below_cap(self) -> None:
        policy = FhirPolicy(observation_each=10, observations_cap=25)
        data = _bundle({"resourceType": "Patient"}, _observation("g/L"), _observation("g/L"))
        assert LabFhirAnalyzer(policy).analyze(descriptor("b.json", data)).score == 60 + 20 + 15

    def test_empty_bundle(self) -> None:
        result = LabFhirAnalyzer(FhirPolicy()).analyze(descriptor("b.json", _bundle()))
        assert result.score == 0
        assert result.messages == (
            "No Patient resource found.",
            "No Observation resources found.",
            "Observations missing units.",
        )

    def test_invalid_json_degrades(self) -> None:
        result = LabFhirAnalyzer(FhirPolicy()).analyze(descriptor("b.json", b"{not json"))
        assert result.score == 50
        assert result.degraded is True
        assert result.messages[0].startswith("Invalid JSON or FHIR structure: JSON parse error")

    def test_non_object_json_degrades(self) -> None:
        result = LabFhirAnalyzer(FhirPolicy()).analyze(descriptor("b.json", b"[1, 2]"))
        assert result.degraded is True
        assert "must be a JSON object" in result.messages[0]

    def test_oversized_integer_degrades(self) -> None:
        data = b'{"resourceType": "Observation", "n": ' + b"1" * 5000 + b"}"
        result = LabFhirAnalyzer(FhirPolicy()).analyze(descriptor("b.json", data))
        assert result.score == 50
        assert result.degraded is True
        assert result.messages[0].startswith("Invalid JSON or FHIR structure: JSON parse error")

    def test_deep_nesting_degrades(self) -> None:
        data = b"[" * 100_000 + b"]" * 100_000
        result = LabFhirAnalyzer(FhirPolicy()).analyze(descriptor("b.json", data))
        assert result.score == 50
        assert result.degraded is True
        assert result.messages[0].startswith("Invalid JSON or FHIR structure: JSON parse error")
