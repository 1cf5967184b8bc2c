"""
Unit Tests for DecisionEngine

End-to-end behaviour of the façade: symptom analysis records, defaults for
empty input, reproducibility and the summary roll-up.
"""
import random

from medicare_ai.core.decision import DecisionEngine, PatientInfo, Urgency


class TestAnalyzeSymptoms:
    """Tests for DecisionEngine.analyze_symptoms."""

    def test_chest_pain_scenario(self, engine):
        result = engine.analyze_symptoms("I have chest pain and dizziness")

        assert set(result.detected_symptoms) == {"chest pain", "dizziness"}
        assert result.urgency_level == Urgency.HIGH
        assert result.primary_condition.name == "HYPERTENSION"
        assert result.primary_condition.probability == 95
        assert result.alternative_conditions == ()
        assert result.confidence == 80
        assert result.suggested_specialty == "cardiology"
        assert result.requires_immediate_attention
        # 80 base + 10 for two symptoms
        assert result.triage.score == 90
        assert result.triage.priority == Urgency.HIGH

    def test_patient_attributes_reach_triage(self, engine, elderly_patient):
        result = engine.analyze_symptoms("nausea", elderly_patient)

        # 20 + 5 + 15 (age) + 10 (chronic)
        assert result.triage.score == 50
        assert "Elderly patient - increased priority" in result.triage.notes

    def test_alternatives(self, engine):
        result = engine.analyze_symptoms("fever with a skin rash and some nausea")

        assert result.primary_condition.name == "COMMON COLD"
        assert [c.name for c in result.alternative_conditions] == ["MIGRAINE", "ALLERGIC REACTION"]
        assert result.primary_condition not in result.alternative_conditions
        assert result.urgency_level == Urgency.MEDIUM

    def test_alternatives_sorted(self, engine):
        result = engine.analyze_symptoms("fever, headache, nausea, skin rash, dizziness")
        probabilities = [result.primary_condition.probability] + [
            c.probability for c in result.alternative_conditions
        ]

        assert probabilities == sorted(probabilities, reverse=True)
        assert len(result.alternative_conditions) == 2

    def test_empty_text_defaults(self, engine):
        result = engine.analyze_symptoms("")

        assert result.detected_symptoms == ()
        assert result.primary_condition.name == "General Health Concern"
        assert result.primary_condition.probability == 50
        assert result.primary_condition.urgency == Urgency.LOW
        assert result.confidence == 60
        assert result.suggested_specialty == "general"
        assert result.triage.score == 20
        assert result.triage.notes == ""

    def test_symptom_without_condition(self, engine):
        """Joint pain matches no condition; default inherits the symptom urgency."""
        result = engine.analyze_symptoms("joint pain and abdominal pain")

        assert result.primary_condition.name == "General Health Concern"
        assert result.primary_condition.urgency == Urgency.MEDIUM
        assert result.suggested_specialty == "orthopedics"

    def test_idempotent(self, engine):
        text = "shortness of breath, chest pain, fatigue, fever"
        patient = PatientInfo(age=8)

        assert engine.analyze_symptoms(text, patient) == engine.analyze_symptoms(text, patient)

    def test_to_dict_flags(self, engine):
        data = engine.analyze_symptoms("headache").to_dict()

        assert data["disclaimerShown"] is True
        assert data["followUpRecommended"] is True
        assert data["triageScore"]["priority"] == "low"
        assert data["primaryCondition"]["name"] == "HYPERTENSION"


class TestRandomSource:
    """Randomized fields come only from the injected generator."""

    def test_same_seed_same_output(self):
        a = DecisionEngine(seed=3)
        b = DecisionEngine(seed=3)

        assert a.suggest_prescription("infection").to_dict() == b.suggest_prescription("infection").to_dict()
        assert a.analyze_image("x-ray") == b.analyze_image("x-ray")

    def test_injected_rng_takes_precedence(self):
        a = DecisionEngine(rng=random.Random(11), seed=999)
        b = DecisionEngine(rng=random.Random(11))

        assert a.suggest_prescription("fever").confidence == b.suggest_prescription("fever").confidence

    def test_threshold_passed_to_image_analysis(self):
        engine = DecisionEngine(seed=1, confidence_threshold=100)
        assert engine.analyze_image("ct").requires_specialist_review


class TestSummarise:
    """Tests for DecisionEngine.summarise."""

    def test_summary(self, engine):
        results = [
            engine.analyze_symptoms("headache"),
            engine.analyze_symptoms("chest pain"),
            engine.analyze_symptoms("abdominal pain"),
        ]
        summary = DecisionEngine.summarise(results)

        assert summary["total_analyses"] == 3
        assert summary["high_priority_count"] == 1
        assert summary["medium_priority_count"] == 1
        assert summary["low_priority_count"] == 1
        assert summary["specialties"] == ["cardiology", "gastroenterology", "neurology"]
        assert summary["analyses"][0]["triageScore"]["score"] == 85

    def test_empty(self):
        assert DecisionEngine.summarise([])["total_analyses"] == 0
