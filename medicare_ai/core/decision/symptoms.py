"""
Symptom Matcher & Condition Scorer

Maps a free-text symptom description onto the knowledge base.

Matching is plain lower-cased substring containment, not word-tokenised:
"headache" is detected inside "subheadaches". Conditions overlap with
detected symptoms in either direction ("severe headache" ⊇ "headache").

Every function here is pure and total: empty or garbage text yields no
detected symptoms, LOW urgency and the default condition.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .base import ConditionMatch, Urgency, clamp
from .knowledge import CONDITIONS, SYMPTOMS, SYMPTOM_SPECIALTY

MAX_CONDITION_PROBABILITY = 95
MATCH_BONUS = 10                 # probability points per overlapping symptom
MAX_ALTERNATIVES = 2

DEFAULT_CONDITION_NAME = "General Health Concern"
DEFAULT_CONDITION_PROBABILITY = 50


def match_symptoms(free_text: Optional[str]) -> Tuple[Tuple[str, ...], Urgency]:
    """
    Detect known symptoms in free text.

    Returns:
        (detected, max_urgency): detected symptoms in knowledge-base order,
        and the highest urgency among them (LOW when nothing is detected).
    """
    normalized = (free_text or "").lower()
    detected: List[str] = []
    max_urgency = Urgency.LOW

    for symptom, entry in SYMPTOMS.items():
        if symptom in normalized:
            detected.append(symptom)
            if entry.urgency.rank > max_urgency.rank:
                max_urgency = entry.urgency

    return tuple(detected), max_urgency


def _display_name(key: str) -> str:
    # Only the first underscore is replaced: "allergic_reaction" -> "ALLERGIC REACTION"
    return key.replace("_", " ", 1).upper()


def _overlaps(condition_symptom: str, detected: Iterable[str]) -> bool:
    cs = condition_symptom.lower()
    return any(cs in d or d in cs for d in detected)


def score_conditions(detected: Iterable[str]) -> List[ConditionMatch]:
    """
    Score every known condition against the detected symptoms.

    Conditions with no overlapping symptom are skipped. Probability is
    ``min(95, base * 100 + 10 * match_score)``. The result is sorted by
    descending probability; ties keep knowledge-base order.
    """
    detected = [d.lower() for d in detected if d]
    if not detected:
        return []

    matches: List[ConditionMatch] = []
    for key, condition in CONDITIONS.items():
        match_score = sum(1 for cs in condition.symptoms if _overlaps(cs, detected))
        if match_score == 0:
            continue

        probability = clamp(
            condition.base_probability * 100 + match_score * MATCH_BONUS,
            0, MAX_CONDITION_PROBABILITY,
        )
        matches.append(ConditionMatch(
            name=_display_name(key),
            probability=probability,
            treatment=condition.treatment,
            specialty=condition.specialty,
            urgency=condition.urgency,
            key=key,
            match_score=match_score,
        ))

    # list.sort is stable
    matches.sort(key=lambda m: m.probability, reverse=True)
    return matches


def default_condition(urgency: Urgency) -> ConditionMatch:
    """Placeholder used when no condition matches."""
    return ConditionMatch(
        name=DEFAULT_CONDITION_NAME,
        probability=DEFAULT_CONDITION_PROBABILITY,
        treatment="Consult with healthcare provider",
        specialty="general",
        urgency=urgency,
    )


def split_conditions(
    matches: Sequence[ConditionMatch],
    urgency: Urgency,
) -> Tuple[ConditionMatch, Tuple[ConditionMatch, ...]]:
    """Return (primary, up to two alternatives) from a sorted match list."""
    if not matches:
        return default_condition(urgency), ()
    return matches[0], tuple(matches[1:1 + MAX_ALTERNATIVES])


def analysis_confidence(symptom_count: int) -> int:
    """60 % baseline, +10 per detected symptom, capped at 95."""
    return clamp(60 + max(0, symptom_count) * 10, 0, 95)


def generate_recommendations(urgency: Urgency, detected: Sequence[str]) -> List[str]:
    if urgency is Urgency.HIGH:
        recommendations = [
            "Seek immediate medical attention",
            "Consider emergency room visit if symptoms worsen",
        ]
    elif urgency is Urgency.MEDIUM:
        recommendations = [
            "Schedule appointment with healthcare provider within 24-48 hours",
            "Monitor symptoms closely",
        ]
    else:
        recommendations = [
            "Schedule routine appointment with primary care physician",
            "Rest and maintain good hydration",
        ]

    if "fever" in detected:
        recommendations.append("Take temperature regularly and record")
        recommendations.append("Use fever-reducing medications as needed")

    if "chest pain" in detected:
        recommendations.append("Avoid physical exertion")
        recommendations.append("Seek immediate help if pain worsens")

    return recommendations


def suggest_specialty(detected: Sequence[str]) -> str:
    """First detected symptom with a specialty mapping decides; else general."""
    for symptom in detected:
        specialty = SYMPTOM_SPECIALTY.get(symptom)
        if specialty:
            return specialty
    return "general"
