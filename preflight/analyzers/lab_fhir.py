import json
from typing import Any

from preflight.analysis.exceptions import ParseError, PreflightError
from preflight.analysis.policy import FhirPolicy
from preflight.analysis.result import AnalysisResult, ResultBuilder
from preflight.analyzers.base import DEFAULT_DEGRADED_SCORE, BaseAnalyzer
from preflight.files.models import FileDescriptor


def collect_resources(document: dict[str, Any]) -> list[dict[str, Any]]:
    """Resources of a Bundle's entries, or the document itself when it is a resource."""
    entries = document.get("entry")
    if isinstance(entries, list):
        resources = [entry.get("resource") for entry in entries if isinstance(entry, dict)]
        return [r for r in resources if isinstance(r, dict)]
    if "resourceType" in document:
        return [document]
    return []


def has_unit(observation: dict[str, Any]) -> bool:
    quantity = observation.get("valueQuantity")
    return isinstance(quantity, dict) and bool(quantity.get("unit") or quantity.get("code"))


class LabFhirAnalyzer(BaseAnalyzer):
    """Completeness checks for FHIR JSON lab results."""

    label = "FHIR JSON"

    def __init__(
        self, policy: FhirPolicy, *, degraded_score: float = DEFAULT_DEGRADED_SCORE
    ) -> None:
        super().__init__(degraded_score=degraded_score)
        self._policy = policy

    def _analyze(self, descriptor: FileDescriptor) -> AnalysisResult:
        try:
            document = json.loads(descriptor.read().decode("utf-8-sig"))
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"JSON parse error: {exc}") from exc
        if not isinstance(document, dict):
            raise ParseError("FHIR document must be a JSON object")
        return self.score(document)

    def score(self, document: dict[str, Any]) -> AnalysisResult:
        policy = self._policy
        result = ResultBuilder()
        resources = collect_resources(document)
        observations = [r for r in resources if r.get("resourceType") == "Observation"]
        with_units = [o for o in observations if has_unit(o)]

        if any(r.get("resourceType") == "Patient" for r in resources):
            result.add(policy.structure)
        else:
            result.advise("No Patient resource found.")

        if observations:
            result.add(min(policy.observations_cap, policy.observation_each * len(observations)))
        else:
            result.advise("No Observation resources found.")

        if with_units:
            result.add(policy.units)
        else:
            result.advise("Observations missing units.")

        result.detail(f"Resources: {len(resources)}")
        result.detail(f"Observations: {len(observations)}, With units: {len(with_units)}")
        return result.build()

    def failure_message(self, exc: PreflightError) -> str:
        return "Invalid JSON or FHIR structure"
