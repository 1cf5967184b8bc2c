"""
Triage Scorer

Additive priority score:

    base (urgency)            high 80 / medium 50 / low 20 / unknown 30
  + symptom count             5 each, at most 20
  + age                       +15 if over 65, else +10 if under 12
  + chronic conditions        +10 if any are recorded
  → clamped to [0, 100]

Priority is HIGH at 70+, MEDIUM at 40+, LOW otherwise.
"""
from __future__ import annotations

from typing import List, Optional, Union

from .base import PatientInfo, PatientLike, TriageResult, Urgency, clamp
from .knowledge import (
    RECOMMENDED_ACTIONS,
    TRIAGE_BASE_SCORES,
    TRIAGE_UNKNOWN_BASE_SCORE,
    WAIT_TIMES,
)

SYMPTOM_POINTS = 5
SYMPTOM_POINTS_CAP = 20
ELDERLY_BONUS = 15
CHILD_BONUS = 10
CHRONIC_BONUS = 10

HIGH_PRIORITY_THRESHOLD = 70
MEDIUM_PRIORITY_THRESHOLD = 40


def priority_for_score(score: int) -> Urgency:
    if score >= HIGH_PRIORITY_THRESHOLD:
        return Urgency.HIGH
    if score >= MEDIUM_PRIORITY_THRESHOLD:
        return Urgency.MEDIUM
    return Urgency.LOW


def _triage_notes(urgency: Optional[Urgency], symptom_count: int, patient: PatientInfo) -> str:
    notes: List[str] = []

    if urgency is Urgency.HIGH:
        notes.append("High priority case requiring immediate attention")

    if symptom_count > 3:
        notes.append("Multiple symptoms reported - comprehensive assessment needed")

    if patient.is_elderly:
        notes.append("Elderly patient - increased priority")

    return "; ".join(notes)


def calculate_triage_score(
    urgency: Union[Urgency, str, None],
    symptom_count: int,
    patient: PatientLike = None,
) -> TriageResult:
    """
    Score a patient for queue prioritisation.

    Args:
        urgency: Urgency or its string value. Anything unrecognised scores
                 the unknown base of 30.
        symptom_count: Number of detected symptoms (negative counts add nothing).
        patient: PatientInfo or a dict with optional ``age`` / ``chronicConditions``.
    """
    patient = PatientInfo.from_dict(patient)
    level = Urgency.parse(urgency)

    score = TRIAGE_BASE_SCORES.get(level, TRIAGE_UNKNOWN_BASE_SCORE)
    score += min(SYMPTOM_POINTS_CAP, max(0, symptom_count) * SYMPTOM_POINTS)

    if patient.is_elderly:
        score += ELDERLY_BONUS
    elif patient.is_child:
        score += CHILD_BONUS

    if patient.chronic_conditions:
        score += CHRONIC_BONUS

    score = clamp(score, 0, 100)
    priority = priority_for_score(score)

    return TriageResult(
        score=score,
        priority=priority,
        estimated_wait_time=WAIT_TIMES[priority],
        recommended_action=RECOMMENDED_ACTIONS[priority],
        notes=_triage_notes(level, symptom_count, patient),
    )
