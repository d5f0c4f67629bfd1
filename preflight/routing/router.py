"""Family selection.

Rules are evaluated in a fixed order and the first match wins. The order
is load-bearing: DICOM before anything else, imaging keywords before labs,
labs before the generic document fallback (so a CSV lab export is never
treated as a plain document).
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from preflight.analysis.families import Family
from preflight.analysis.policy import Policy
from preflight.analysis.verdict import Thresholds
from preflight.analyzers.base import BaseAnalyzer
from preflight.files.models import FileDescriptor
from preflight.routing.predicates import (
    FileFacts,
    facts,
    looks_like_dicom,
    looks_like_generic_doc,
    looks_like_lab,
    looks_like_med_imaging,
    looks_like_xray,
)


@dataclass(frozen=True)
class FamilyRule:
    family: Family
    test: Callable[[FileFacts], bool]


FAMILY_RULES: tuple[FamilyRule, ...] = (
    FamilyRule(Family.DICOM_STUB, looks_like_dicom),
    FamilyRule(Family.XRAY, looks_like_xray),
    FamilyRule(Family.MED_IMAGING, looks_like_med_imaging),
    FamilyRule(Family.LABS, looks_like_lab),
    FamilyRule(Family.DOC_OCR, looks_like_generic_doc),
)


def select_family(
    descriptor: FileDescriptor, rules: Sequence[FamilyRule] = FAMILY_RULES
) -> Family:
    """Return the first family whose rule accepts the descriptor.

    Document-like files that no rule took fall back to DOC_OCR; anything
    else is UNRECOGNIZED. Total and deterministic.
    """
    f = facts(descriptor)
    for rule in rules:
        if rule.test(f):
            return rule.family
    if looks_like_generic_doc(f):
        return Family.DOC_OCR
    return Family.UNRECOGNIZED


@dataclass(frozen=True)
class Route:
    family: Family
    analyzer: BaseAnalyzer
    thresholds: Thresholds


class Router:
    """Maps a descriptor to its family analyzer and thresholds."""

    def __init__(
        self,
        analyzers: Mapping[Family, BaseAnalyzer],
        policy: Policy,
        rules: Sequence[FamilyRule] = FAMILY_RULES,
    ) -> None:
        missing = [family.value for family in Family if family not in analyzers]
        if missing:
            raise ValueError(f"Router is missing analyzers for: {missing}")
        self._analyzers = dict(analyzers)
        self._policy = policy
        self._rules = tuple(rules)

    def route(self, descriptor: FileDescriptor) -> Route:
        family = select_family(descriptor, self._rules)
        return Route(
            family=family,
            analyzer=self._analyzers[family],
            thresholds=self._policy.thresholds_for(family),
        )
