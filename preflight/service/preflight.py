from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from preflight.analysis.families import Family
from preflight.analysis.policy import DEFAULT_POLICY, Policy
from preflight.analysis.result import AnalysisResult
from preflight.analysis.verdict import classify
from preflight.analyzers.factory import AnalyzerFactory
from preflight.config.settings import Settings
from preflight.files.models import FileDescriptor
from preflight.imaging.pillow_adapter import PillowImageDecoder
from preflight.logging.logger import Log
from preflight.pdf.factory import PdfRendererFactory
from preflight.routing.router import Router
from preflight.service.models import PreflightReport
from preflight.tabular.factory import SpreadsheetReaderFactory


class Preflight:
    """Routes files to their family analyzer and classifies the score.

    Pipeline: route -> analyze -> classify -> report. Every call returns a
    report; analyses share no mutable state and may run in parallel.
    """

    def __init__(self, router: Router, policy: Policy, max_workers: int = 4) -> None:
        self._router = router
        self._policy = policy
        self._max_workers = max(1, max_workers)

    def inspect(self, descriptor: FileDescriptor) -> PreflightReport:
        """Preflight a single file."""
        route = self._router.route(descriptor)
        Log.info(f"Analyzing {descriptor.name} via {route.family.value}")
        try:
            result = route.analyzer.analyze(descriptor)
        except Exception as exc:
            Log.exception(f"Unexpected failure analyzing {descriptor.name}: {exc}")
            result = AnalysisResult.of(
                self._policy.degraded_score,
                messages=[f"Analysis error, limited checks: {exc}"],
                details=[f"{type(exc).__name__}: {exc}"],
                degraded=True,
            )
        verdict = classify(result.score, route.thresholds)
        Log.info(
            f"{descriptor.name}: score {result.score}/100, {verdict.value} "
            f"({route.family.value})"
        )
        return PreflightReport(
            file_name=descriptor.name,
            content_type=descriptor.content_type,
            size=descriptor.size,
            family=route.family,
            result=result,
            thresholds=route.thresholds,
            verdict=verdict,
        )

    def inspect_many(self, descriptors: Sequence[FileDescriptor]) -> list[PreflightReport]:
        """Preflight independent files concurrently; reports keep input order."""
        if len(descriptors) <= 1:
            return [self.inspect(d) for d in descriptors]
        workers = min(self._max_workers, len(descriptors))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.inspect, descriptors))

    def family_of(self, descriptor: FileDescriptor) -> Family:
        return self._router.route(descriptor).family


def build_preflight(settings: Settings, policy: Policy = DEFAULT_POLICY) -> Preflight:
    """Build a Preflight with all collaborator adapters from settings."""
    analyzers = AnalyzerFactory.create_all(
        settings,
        policy,
        decoder=PillowImageDecoder(),
        pdf_renderer=PdfRendererFactory.create(settings),
        spreadsheet_reader=SpreadsheetReaderFactory.create(settings),
    )
    router = Router(analyzers, policy)
    return Preflight(router, policy, max_workers=settings.max_workers)
