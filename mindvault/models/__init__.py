"""Domain models."""

from .resource import (
    AIAnalysis,
    AnalysisFallback,
    AnalysisOutcome,
    AnalysisResult,
    FallbackReason,
    RESOURCE_TYPES,
    Resource,
    ResourceType,
)

__all__ = [
    "AIAnalysis",
    "AnalysisFallback",
    "AnalysisOutcome",
    "AnalysisResult",
    "FallbackReason",
    "RESOURCE_TYPES",
    "Resource",
    "ResourceType",
]
