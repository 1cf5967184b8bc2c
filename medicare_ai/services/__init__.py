"""
Service layer: async AI integration façade and analysis history.
"""
from .ai_integration import AIIntegrationService, LatencyProfile
from .history import AnalysisHistory, AnalysisRecord, AnalysisType

__all__ = [
    "AIIntegrationService",
    "LatencyProfile",
    "AnalysisHistory",
    "AnalysisRecord",
    "AnalysisType",
]
