"""
Decision Engine — Base Types

Value records produced by the symptom matcher, triage scorer, prescription
inferencer and image analyser. Every record is created per call, never
mutated, and serialised with ``to_dict()`` using the camelCase keys the
MediCare+ dashboards read.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class Urgency(str, Enum):
    """
    Ordinal severity tag attached to a symptom or condition.

    LOW    – routine appointment
    MEDIUM – see a provider within 24–48 h
    HIGH   – immediate attention
    """
    LOW    = "low"
    MEDIUM = "medium"
    HIGH   = "high"

    @property
    def rank(self) -> int:
        return _URGENCY_RANK[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["Urgency"]:
        """Return the matching Urgency, or None for anything unrecognised."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


_URGENCY_RANK = {
    Urgency.LOW:    1,
    Urgency.MEDIUM: 2,
    Urgency.HIGH:   3,
}


def clamp(value: float, low: int, high: int) -> int:
    """Round to the nearest integer and clamp into [low, high]."""
    return max(low, min(high, int(round(value))))


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _as_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class PatientInfo:
    """
    Patient attributes the engine may consult.

    Every field is optional; an absent attribute simply means the related
    bonus, note or precaution is not applied.
    """
    patient_id: Optional[str] = None
    age: Optional[float] = None
    allergies: Tuple[str, ...] = ()
    chronic_conditions: Tuple[str, ...] = ()
    current_medications: Tuple[str, ...] = ()
    bmi: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PatientInfo":
        """
        Build from a loosely-shaped dict. Accepts both snake_case and the
        dashboard's camelCase keys; unknown keys and unparseable numbers are
        ignored.
        """
        if data is None:
            return cls()
        if isinstance(data, PatientInfo):
            return data

        patient_id = _pick(data, "patient_id", "patientId")
        return cls(
            patient_id=str(patient_id) if patient_id is not None else None,
            age=_as_number(_pick(data, "age")),
            allergies=_as_tuple(_pick(data, "allergies")),
            chronic_conditions=_as_tuple(_pick(data, "chronic_conditions", "chronicConditions")),
            current_medications=_as_tuple(_pick(data, "current_medications", "currentMedications")),
            bmi=_as_number(_pick(data, "bmi")),
        )

    # A zero or missing age never earns an age bonus.
    @property
    def is_elderly(self) -> bool:
        return bool(self.age) and self.age > 65

    @property
    def is_child(self) -> bool:
        return bool(self.age) and self.age < 12


PatientLike = Union[PatientInfo, Mapping[str, Any], None]


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ConditionMatch:
    """A candidate diagnosis with its probability (percent)."""
    name: str
    probability: int
    treatment: str
    specialty: str
    urgency: Urgency
    key: Optional[str] = None        # knowledge-base key; None for the default match
    match_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "probability": self.probability,
            "treatment": self.treatment,
            "specialty": self.specialty,
            "urgency": self.urgency.value,
        }


@dataclass(frozen=True)
class TriageResult:
    """Priority score in [0, 100] and the actions derived from it."""
    score: int
    priority: Urgency
    estimated_wait_time: str
    recommended_action: str
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "priority": self.priority.value,
            "estimatedWaitTime": self.estimated_wait_time,
            "recommendedAction": self.recommended_action,
            "triageNotes": self.notes,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of a free-text symptom analysis."""
    detected_symptoms: Tuple[str, ...]
    primary_condition: ConditionMatch
    alternative_conditions: Tuple[ConditionMatch, ...]
    urgency_level: Urgency
    confidence: int
    recommendations: Tuple[str, ...]
    suggested_specialty: str
    triage: TriageResult
    follow_up_recommended: bool = True
    disclaimer_shown: bool = True

    @property
    def requires_immediate_attention(self) -> bool:
        return self.urgency_level is Urgency.HIGH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detectedSymptoms": list(self.detected_symptoms),
            "primaryCondition": self.primary_condition.to_dict(),
            "alternativeConditions": [c.to_dict() for c in self.alternative_conditions],
            "urgencyLevel": self.urgency_level.value,
            "confidence": self.confidence,
            "recommendations": list(self.recommendations),
            "suggestedSpecialty": self.suggested_specialty,
            "triageScore": self.triage.to_dict(),
            "requiresImmediateAttention": self.requires_immediate_attention,
            "followUpRecommended": self.follow_up_recommended,
            "disclaimerShown": self.disclaimer_shown,
        }


@dataclass(frozen=True)
class PrescriptionLine:
    """One suggested medication with dosage and administration details."""
    medication: str
    dosage: str
    frequency: str
    duration: str
    instructions: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "medication": self.medication,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "duration": self.duration,
            "instructions": self.instructions,
        }


@dataclass(frozen=True)
class FollowUp:
    timeframe: str
    conditions: str
    specialist: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timeframe": self.timeframe,
            "conditions": self.conditions,
            "specialist": self.specialist,
        }


@dataclass(frozen=True)
class PrescriptionSuggestion:
    """
    Medication suggestions for a free-text diagnosis.

    Always flagged for doctor review; the engine never asserts certainty.
    """
    category: str
    primary_medications: Tuple[PrescriptionLine, ...]
    alternative_medications: Tuple[PrescriptionLine, ...]
    precautions: Tuple[str, ...]
    interactions: Tuple[str, ...]
    lifestyle: Tuple[str, ...]
    follow_up: FollowUp
    confidence: int
    pharmacy_notes: str = "Verify patient allergies before dispensing"

    # Not constructor arguments: these can never be switched off.
    requires_doctor_review: bool = field(default=True, init=False)
    disclaimer_shown: bool = field(default=True, init=False)

    @property
    def warnings_present(self) -> bool:
        return len(self.interactions) > 0 or len(self.precautions) > 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "primaryMedications": [m.to_dict() for m in self.primary_medications],
            "alternativeMedications": [m.to_dict() for m in self.alternative_medications],
            "precautions": list(self.precautions),
            "interactions": list(self.interactions),
            "lifestyle": list(self.lifestyle),
            "followUp": self.follow_up.to_dict(),
            "confidence": self.confidence,
            "warningsPresent": self.warnings_present,
            "requiresDoctorReview": self.requires_doctor_review,
            "pharmacyNotes": self.pharmacy_notes,
            "disclaimerShown": self.disclaimer_shown,
        }


@dataclass(frozen=True)
class ImageAnalysisResult:
    """Canned finding returned for an uploaded medical image."""
    image_type: str
    confidence: int
    findings: str
    recommendation: str
    severity: str
    follow_up_priority: str
    requires_specialist_review: bool
    suggested_specialty: str
    quality_score: int
    additional_recommendations: Tuple[str, ...]
    processing_time: str = "2.3 seconds"
    model_version: str = "MediAI-Vision-v2.1"
    disclaimer_shown: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imageType": self.image_type,
            "confidence": self.confidence,
            "findings": self.findings,
            "recommendation": self.recommendation,
            "severity": self.severity,
            "followUpPriority": self.follow_up_priority,
            "requiresSpecialistReview": self.requires_specialist_review,
            "suggestedSpecialty": self.suggested_specialty,
            "qualityScore": self.quality_score,
            "processingTime": self.processing_time,
            "modelVersion": self.model_version,
            "disclaimerShown": self.disclaimer_shown,
            "additionalRecommendations": list(self.additional_recommendations),
        }


@dataclass(frozen=True)
class HealthInsights:
    risk_factors: Tuple[str, ...] = ()
    preventive_recommendations: Tuple[str, ...] = ()
    lifestyle_insights: Tuple[str, ...] = ()
    follow_up_recommendations: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riskFactors": list(self.risk_factors),
            "preventiveRecommendations": list(self.preventive_recommendations),
            "lifestyleInsights": list(self.lifestyle_insights),
            "followUpRecommendations": list(self.follow_up_recommendations),
        }
