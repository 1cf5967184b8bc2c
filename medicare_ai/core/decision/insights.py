"""
Preventive health insights derived from age, BMI and recorded allergies.
"""
from __future__ import annotations

from typing import List

from .base import HealthInsights, PatientInfo, PatientLike

OBESITY_BMI = 30.0
UNDERWEIGHT_BMI = 18.5


def generate_health_insights(patient: PatientLike = None) -> HealthInsights:
    patient = PatientInfo.from_dict(patient)
    risk_factors: List[str] = []
    preventive: List[str] = []
    lifestyle: List[str] = []

    age = patient.age or 0
    if age > 40:
        preventive.append("Annual cardiovascular screening")
        preventive.append("Regular blood pressure monitoring")

    if age > 50:
        preventive.append("Colonoscopy screening")
        preventive.append("Bone density testing")

    if patient.bmi:
        if patient.bmi > OBESITY_BMI:
            risk_factors.append("Obesity")
            lifestyle.append("Weight management program recommended")
        elif patient.bmi < UNDERWEIGHT_BMI:
            risk_factors.append("Underweight")
            lifestyle.append("Nutritional consultation recommended")

    if patient.allergies:
        risk_factors.append("Known allergies: " + ", ".join(patient.allergies))

    return HealthInsights(
        risk_factors=tuple(risk_factors),
        preventive_recommendations=tuple(preventive),
        lifestyle_insights=tuple(lifestyle),
    )
