"""
Prescription Inferencer

Selects a medication category from a free-text diagnosis with an ordered
keyword rule list (first hit wins), then builds one prescription line per
medication in that category.

The two randomized fields, instruction text and confidence, draw from the
``random.Random`` passed in, so a seeded generator gives reproducible output.
"""
from __future__ import annotations

import random
from typing import List, Optional

from .base import (
    FollowUp,
    PatientInfo,
    PatientLike,
    PrescriptionLine,
    PrescriptionSuggestion,
)
from .knowledge import (
    CATEGORY_RULES,
    DEFAULT_DOSAGE,
    DEFAULT_DURATION,
    DEFAULT_FREQUENCY,
    DURATIONS,
    FALLBACK_MEDICATION_CATEGORY,
    FREQUENCIES,
    INSTRUCTIONS,
    LIFESTYLE_RECOMMENDATIONS,
    MEDICATIONS,
    PEDIATRIC_DOSAGES,
)

GENERAL_CATEGORY = "general"
PRIMARY_COUNT = 2

CONFIDENCE_MIN = 75
CONFIDENCE_MAX = 95              # exclusive

ELDERLY_PRECAUTION = "Elderly patients may require dosage adjustment"
PENICILLIN_PRECAUTION = "Patient has penicillin allergy - alternative antibiotic recommended"
STANDARD_PRECAUTIONS = (
    "Monitor for side effects and report to healthcare provider",
    "Do not consume alcohol while taking this medication",
)
INTERACTION_ADVISORY = "Check for interactions with current medications"


def select_category(diagnosis: Optional[str]) -> str:
    """Map a diagnosis onto a medication category; ``general`` if no rule fires."""
    normalized = (diagnosis or "").lower()
    for keywords, category in CATEGORY_RULES:
        if any(k in normalized for k in keywords):
            return category
    return GENERAL_CATEGORY


def medications_for(category: str) -> tuple:
    return MEDICATIONS.get(category, MEDICATIONS[FALLBACK_MEDICATION_CATEGORY])


def dosage_for(medication: str, patient: PatientInfo) -> str:
    doses = PEDIATRIC_DOSAGES.get(medication)
    if doses is None:
        return DEFAULT_DOSAGE
    adult, child = doses
    return child if patient.is_child else adult


def build_precautions(category: str, patient: PatientInfo) -> List[str]:
    precautions: List[str] = []

    if patient.is_elderly:
        precautions.append(ELDERLY_PRECAUTION)

    allergies = {a.strip().lower() for a in patient.allergies}
    if "penicillin" in allergies and category == "infection":
        precautions.append(PENICILLIN_PRECAUTION)

    precautions.extend(STANDARD_PRECAUTIONS)
    return precautions


def follow_up_for(diagnosis: Optional[str]) -> FollowUp:
    chronic = "chronic" in (diagnosis or "").lower()
    return FollowUp(
        timeframe="1-2 weeks",
        conditions="if symptoms persist or worsen",
        specialist="specialist consultation" if chronic else "primary care follow-up",
    )


def infer_prescription(
    diagnosis: Optional[str],
    patient: PatientLike = None,
    rng: Optional[random.Random] = None,
) -> PrescriptionSuggestion:
    """
    Suggest medications for a diagnosis.

    Args:
        diagnosis: Free-text diagnosis; matched case-insensitively.
        patient: PatientInfo or dict with optional ``age``, ``allergies``,
                 ``currentMedications``.
        rng: Source for instruction choice and confidence. A fresh unseeded
             generator is used when omitted.

    Returns:
        PrescriptionSuggestion with ``requires_doctor_review`` always True.
    """
    rng = rng or random.Random()
    patient = PatientInfo.from_dict(patient)
    category = select_category(diagnosis)

    frequency = FREQUENCIES.get(category, DEFAULT_FREQUENCY)
    duration = DURATIONS.get(category, DEFAULT_DURATION)

    lines = [
        PrescriptionLine(
            medication=medication,
            dosage=dosage_for(medication, patient),
            frequency=frequency,
            duration=duration,
            instructions=rng.choice(INSTRUCTIONS),
        )
        for medication in medications_for(category)
    ]

    interactions = (INTERACTION_ADVISORY,) if patient.current_medications else ()

    return PrescriptionSuggestion(
        category=category,
        primary_medications=tuple(lines[:PRIMARY_COUNT]),
        alternative_medications=tuple(lines[PRIMARY_COUNT:]),
        precautions=tuple(build_precautions(category, patient)),
        interactions=interactions,
        lifestyle=LIFESTYLE_RECOMMENDATIONS[:3],
        follow_up=follow_up_for(diagnosis),
        confidence=rng.randrange(CONFIDENCE_MIN, CONFIDENCE_MAX),
    )
