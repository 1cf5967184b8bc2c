"""
Decision Engine

Rule-based symptom analysis, triage scoring, prescription-category inference
and mock image analysis over static lookup tables.

Usage:
    from medicare_ai.core.decision import DecisionEngine

    engine = DecisionEngine(seed=7)
    analysis = engine.analyze_symptoms("fever and headache", {"age": 8})
    rx = engine.suggest_prescription("bacterial infection", {"allergies": ["penicillin"]})
"""
from .engine import DecisionEngine
from .base import (
    AnalysisResult,
    ConditionMatch,
    HealthInsights,
    ImageAnalysisResult,
    PatientInfo,
    PrescriptionLine,
    PrescriptionSuggestion,
    TriageResult,
    Urgency,
)

__all__ = [
    "DecisionEngine",
    "AnalysisResult",
    "ConditionMatch",
    "HealthInsights",
    "ImageAnalysisResult",
    "PatientInfo",
    "PrescriptionLine",
    "PrescriptionSuggestion",
    "TriageResult",
    "Urgency",
]
