from preflight.analyzers.base import BaseAnalyzer
from preflight.analyzers.factory import AnalyzerFactory

__all__ = ["AnalyzerFactory", "BaseAnalyzer"]
