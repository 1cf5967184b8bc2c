"""
Decision Engine — Static Knowledge Base

The only knowledge source the engine consults. Tables are wrapped in
``MappingProxyType`` over tuples/frozensets so they are read-only for the
life of the process. Declaration order is significant: symptom detection
reports symptoms in this order and condition ties keep it.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from .base import Urgency


@dataclass(frozen=True)
class SymptomEntry:
    urgency: Urgency
    specialties: FrozenSet[str]


@dataclass(frozen=True)
class ConditionEntry:
    base_probability: float          # 0..1
    symptoms: Tuple[str, ...]
    urgency: Urgency
    treatment: str
    specialty: str


# ── Symptoms ─────────────────────────────────────────────────────────────────
SYMPTOMS: Mapping[str, SymptomEntry] = MappingProxyType({
    "fever":               SymptomEntry(Urgency.MEDIUM, frozenset({"general", "infectious-disease"})),
    "chest pain":          SymptomEntry(Urgency.HIGH,   frozenset({"cardiology", "emergency"})),
    "headache":            SymptomEntry(Urgency.LOW,    frozenset({"neurology", "general"})),
    "shortness of breath": SymptomEntry(Urgency.HIGH,   frozenset({"cardiology", "pulmonology"})),
    "nausea":              SymptomEntry(Urgency.LOW,    frozenset({"gastroenterology", "general"})),
    "dizziness":           SymptomEntry(Urgency.MEDIUM, frozenset({"neurology", "cardiology"})),
    "fatigue":             SymptomEntry(Urgency.LOW,    frozenset({"general", "endocrinology"})),
    "joint pain":          SymptomEntry(Urgency.LOW,    frozenset({"orthopedics", "rheumatology"})),
    "skin rash":           SymptomEntry(Urgency.LOW,    frozenset({"dermatology"})),
    "abdominal pain":      SymptomEntry(Urgency.MEDIUM, frozenset({"gastroenterology", "general"})),
})

# ── Conditions ───────────────────────────────────────────────────────────────
CONDITIONS: Mapping[str, ConditionEntry] = MappingProxyType({
    "common_cold": ConditionEntry(
        base_probability=0.85,
        symptoms=("runny nose", "sore throat", "mild fever", "fatigue"),
        urgency=Urgency.LOW,
        treatment="Rest, fluids, over-the-counter medications",
        specialty="general",
    ),
    "hypertension": ConditionEntry(
        base_probability=0.75,
        symptoms=("headache", "dizziness", "chest pain"),
        urgency=Urgency.MEDIUM,
        treatment="Lifestyle changes, antihypertensive medications",
        specialty="cardiology",
    ),
    "migraine": ConditionEntry(
        base_probability=0.70,
        symptoms=("severe headache", "nausea", "light sensitivity"),
        urgency=Urgency.MEDIUM,
        treatment="Pain relief medications, rest in dark room",
        specialty="neurology",
    ),
    "allergic_reaction": ConditionEntry(
        base_probability=0.65,
        symptoms=("skin rash", "itching", "swelling"),
        urgency=Urgency.MEDIUM,
        treatment="Antihistamines, avoid triggers",
        specialty="allergology",
    ),
})

# ── Specialty routing for detected symptoms (first hit wins) ─────────────────
SYMPTOM_SPECIALTY: Mapping[str, str] = MappingProxyType({
    "chest pain":     "cardiology",
    "headache":       "neurology",
    "joint pain":     "orthopedics",
    "skin rash":      "dermatology",
    "abdominal pain": "gastroenterology",
})

# ── Medications ──────────────────────────────────────────────────────────────
MEDICATIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "pain":         ("Acetaminophen 500mg", "Ibuprofen 200mg", "Naproxen 220mg"),
    "fever":        ("Acetaminophen 500mg", "Aspirin 325mg", "Ibuprofen 400mg"),
    "allergy":      ("Loratadine 10mg", "Cetirizine 10mg", "Diphenhydramine 25mg"),
    "hypertension": ("Lisinopril 10mg", "Amlodipine 5mg", "Metoprolol 50mg"),
    "infection":    ("Amoxicillin 500mg", "Azithromycin 250mg", "Cephalexin 500mg"),
})

# Category used when the diagnosis matches no keyword rule
FALLBACK_MEDICATION_CATEGORY = "pain"

# Ordered: the first rule whose keyword occurs in the diagnosis wins.
CATEGORY_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("pain", "ache"),                       "pain"),
    (("fever", "temperature"),               "fever"),
    (("allerg", "rash"),                     "allergy"),
    (("hypertension", "blood pressure"),     "hypertension"),
    (("infection", "bacterial"),             "infection"),
)

# Adult dose → pediatric dose (age < 12)
PEDIATRIC_DOSAGES: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "Acetaminophen 500mg": ("500mg", "250mg"),
    "Ibuprofen 200mg":     ("200mg", "100mg"),
    "Amoxicillin 500mg":   ("500mg", "250mg"),
})
DEFAULT_DOSAGE = "1 tablet"

FREQUENCIES: Mapping[str, str] = MappingProxyType({
    "pain":         "Every 6-8 hours as needed",
    "fever":        "Every 4-6 hours as needed",
    "allergy":      "Once daily",
    "hypertension": "Once daily",
    "infection":    "Twice daily",
})
DEFAULT_FREQUENCY = "As directed"

DURATIONS: Mapping[str, str] = MappingProxyType({
    "pain":         "3-5 days",
    "fever":        "3-5 days",
    "allergy":      "7-14 days",
    "hypertension": "Ongoing",
    "infection":    "7-10 days",
})
DEFAULT_DURATION = "5-7 days"

INSTRUCTIONS: Tuple[str, ...] = (
    "Take with food to reduce stomach irritation",
    "Take with a full glass of water",
    "Do not exceed recommended dosage",
    "Complete the full course even if feeling better",
    "Take at the same time each day",
)

LIFESTYLE_RECOMMENDATIONS: Tuple[str, ...] = (
    "Maintain adequate hydration",
    "Get sufficient rest and sleep",
    "Eat a balanced diet rich in nutrients",
    "Engage in regular appropriate physical activity",
    "Avoid smoking and excessive alcohol consumption",
)

# ── Triage tables ────────────────────────────────────────────────────────────
TRIAGE_BASE_SCORES: Mapping[Urgency, int] = MappingProxyType({
    Urgency.HIGH:   80,
    Urgency.MEDIUM: 50,
    Urgency.LOW:    20,
})
TRIAGE_UNKNOWN_BASE_SCORE = 30

WAIT_TIMES: Mapping[Urgency, str] = MappingProxyType({
    Urgency.HIGH:   "0-15 minutes",
    Urgency.MEDIUM: "15-45 minutes",
    Urgency.LOW:    "45-90 minutes",
})

RECOMMENDED_ACTIONS: Mapping[Urgency, str] = MappingProxyType({
    Urgency.HIGH:   "Immediate assessment required",
    Urgency.MEDIUM: "Prompt medical evaluation",
    Urgency.LOW:    "Routine medical consultation",
})
