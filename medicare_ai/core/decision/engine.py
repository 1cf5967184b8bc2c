"""
Decision Engine

Single entry point for every rule-based analysis the dashboards request.

Usage:
    from medicare_ai.core.decision import DecisionEngine

    engine = DecisionEngine(seed=42)
    result = engine.analyze_symptoms("I have chest pain and dizziness", {"age": 70})
    print(result.primary_condition.name, result.triage.priority)

Every operation is synchronous and total: any input, including empty text
or a missing patient record, produces a result. Randomness (prescription
instructions and confidence, image finding choice) comes only from the
``random.Random`` the engine was built with.
"""
from __future__ import annotations

import random
from typing import Any, Dict, Iterable, Optional, Union

from medicare_ai.utils import get_logger

from .base import (
    AnalysisResult,
    HealthInsights,
    ImageAnalysisResult,
    PatientInfo,
    PatientLike,
    PrescriptionSuggestion,
    TriageResult,
    Urgency,
)
from .imaging import analyze_image
from .insights import generate_health_insights
from .prescription import infer_prescription
from .symptoms import (
    analysis_confidence,
    generate_recommendations,
    match_symptoms,
    score_conditions,
    split_conditions,
    suggest_specialty,
)
from .triage import calculate_triage_score

logger = get_logger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 80


class DecisionEngine:
    """
    Rule-based symptom, triage, prescription and imaging analysis.

    Holds no state between calls apart from its random source, so it is
    safe to share across threads or concurrent requests.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    ):
        """
        Args:
            rng: Random source for the randomized fields. Takes precedence over ``seed``.
            seed: Seed for a private ``random.Random`` when ``rng`` is not given.
            confidence_threshold: Image results below this confidence are
                flagged for specialist review.
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.confidence_threshold = confidence_threshold

    def analyze_symptoms(
        self,
        symptoms: Optional[str],
        patient: PatientLike = None,
    ) -> AnalysisResult:
        """
        Analyse a free-text symptom description.

        Returns:
            AnalysisResult. When no condition matches, the primary condition is
            "General Health Concern" at 50 % carrying the detected urgency.
        """
        patient = PatientInfo.from_dict(patient)
        detected, max_urgency = match_symptoms(symptoms)
        matches = score_conditions(detected)
        primary, alternatives = split_conditions(matches, max_urgency)

        result = AnalysisResult(
            detected_symptoms=detected,
            primary_condition=primary,
            alternative_conditions=alternatives,
            urgency_level=max_urgency,
            confidence=analysis_confidence(len(detected)),
            recommendations=tuple(generate_recommendations(max_urgency, detected)),
            suggested_specialty=suggest_specialty(detected),
            triage=calculate_triage_score(max_urgency, len(detected), patient),
        )

        logger.debug(
            f"DecisionEngine: detected {list(detected) or 'nothing'} "
            f"→ {primary.name} ({primary.probability}%), "
            f"urgency={max_urgency.value}, triage={result.triage.score}"
        )
        return result

    def calculate_triage_score(
        self,
        urgency: Union[Urgency, str, None],
        symptom_count: int,
        patient: PatientLike = None,
    ) -> TriageResult:
        return calculate_triage_score(urgency, symptom_count, patient)

    def suggest_prescription(
        self,
        diagnosis: Optional[str],
        patient: PatientLike = None,
    ) -> PrescriptionSuggestion:
        """Medication suggestions for a diagnosis; always requires doctor review."""
        suggestion = infer_prescription(diagnosis, patient, self.rng)
        logger.debug(
            f"DecisionEngine: diagnosis {diagnosis!r} → category={suggestion.category}, "
            f"confidence={suggestion.confidence}"
        )
        return suggestion

    def analyze_image(self, image_type: Optional[str]) -> ImageAnalysisResult:
        result = analyze_image(image_type, self.confidence_threshold, self.rng)
        if result.requires_specialist_review:
            logger.debug(
                f"DecisionEngine: {result.image_type} confidence {result.confidence} "
                f"below threshold {self.confidence_threshold}, specialist review flagged"
            )
        return result

    def generate_health_insights(self, patient: PatientLike = None) -> HealthInsights:
        return generate_health_insights(patient)

    @staticmethod
    def summarise(results: Iterable[AnalysisResult]) -> Dict[str, Any]:
        """
        Compact roll-up of several symptom analyses, e.g. for a doctor's queue.

        Example output:
        {
            "total_analyses": 3,
            "high_priority_count": 1,
            "medium_priority_count": 1,
            "low_priority_count": 1,
            "specialties": ["cardiology", "general"],
            "analyses": [{...}, ...]       # highest triage score first
        }
        """
        results = sorted(results, key=lambda r: r.triage.score, reverse=True)

        counts = {level: 0 for level in Urgency}
        for r in results:
            counts[r.triage.priority] += 1

        # Deduplicated, in triage order
        seen = set()
        specialties = []
        for r in results:
            if r.suggested_specialty not in seen:
                seen.add(r.suggested_specialty)
                specialties.append(r.suggested_specialty)

        return {
            "total_analyses": len(results),
            "high_priority_count": counts[Urgency.HIGH],
            "medium_priority_count": counts[Urgency.MEDIUM],
            "low_priority_count": counts[Urgency.LOW],
            "specialties": specialties,
            "analyses": [r.to_dict() for r in results],
        }
