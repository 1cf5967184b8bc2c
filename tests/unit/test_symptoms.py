"""
Unit Tests for Symptom Matcher and Condition Scorer

Covers substring detection, urgency aggregation, condition scoring and
ordering, and the default condition fallback.
"""
import pytest

from medicare_ai.core.decision import Urgency
from medicare_ai.core.decision.symptoms import (
    analysis_confidence,
    default_condition,
    generate_recommendations,
    match_symptoms,
    score_conditions,
    split_conditions,
    suggest_specialty,
)


class TestMatchSymptoms:
    """Tests for match_symptoms."""

    def test_chest_pain_and_dizziness(self):
        """Both symptoms detected; chest pain drives HIGH urgency."""
        detected, urgency = match_symptoms("I have chest pain and dizziness")

        assert set(detected) == {"chest pain", "dizziness"}
        assert urgency == Urgency.HIGH

    @pytest.mark.parametrize("text", ["", "   ", "feeling a bit off today", "!!!???", None])
    def test_no_known_symptoms(self, text):
        """Unmatched text yields nothing detected and LOW urgency."""
        detected, urgency = match_symptoms(text)

        assert detected == ()
        assert urgency == Urgency.LOW

    def test_case_insensitive(self):
        detected, urgency = match_symptoms("SEVERE FEVER and Nausea")

        assert detected == ("fever", "nausea")
        assert urgency == Urgency.MEDIUM

    def test_knowledge_base_order(self):
        """Detected symptoms follow table order, not text order."""
        detected, _ = match_symptoms("skin rash, then nausea, then fever")
        assert detected == ("fever", "nausea", "skin rash")

    def test_partial_word_match(self):
        """Matching is substring containment, so partial words still count."""
        detected, _ = match_symptoms("recurring subheadaches")
        assert detected == ("headache",)

    def test_low_only(self):
        _, urgency = match_symptoms("fatigue and joint pain")
        assert urgency == Urgency.LOW


class TestScoreConditions:
    """Tests for score_conditions."""

    def test_hypertension_scores_above_base(self):
        """Chest pain + dizziness overlap two hypertension symptoms: 75 + 20 capped at 95."""
        matches = score_conditions(["chest pain", "dizziness"])

        names = [m.name for m in matches]
        assert "HYPERTENSION" in names
        hypertension = matches[names.index("HYPERTENSION")]
        assert hypertension.probability > 75
        assert hypertension.probability == 95
        assert hypertension.match_score == 2
        assert hypertension.specialty == "cardiology"

    def test_overlap_either_direction(self):
        """'fever' is contained in 'mild fever'; 'headache' in 'severe headache'."""
        matches = score_conditions(["fever", "headache"])
        by_key = {m.key: m for m in matches}

        assert by_key["common_cold"].match_score == 1
        assert by_key["migraine"].match_score == 1
        assert by_key["hypertension"].match_score == 1

    def test_sorted_descending(self):
        matches = score_conditions(["fever", "nausea", "skin rash"])

        assert [m.name for m in matches] == ["COMMON COLD", "MIGRAINE", "ALLERGIC REACTION"]
        assert [m.probability for m in matches] == [95, 80, 75]

    def test_ties_keep_table_order(self):
        """Hypertension and allergic reaction both score 85; hypertension is declared first."""
        matches = score_conditions(["headache", "skin rash", "itching"])

        assert [(m.key, m.probability) for m in matches] == [
            ("hypertension", 85),
            ("allergic_reaction", 85),
            ("migraine", 80),
        ]

    def test_every_match_has_score(self):
        for detected in (["fatigue"], ["nausea", "dizziness"], ["chest pain", "skin rash", "fever"]):
            for match in score_conditions(detected):
                assert match.match_score >= 1
                assert 0 <= match.probability <= 95

    def test_no_overlap(self):
        assert score_conditions([]) == []
        assert score_conditions(["joint pain"]) == []


class TestConditionHelpers:
    """Tests for default condition, splitting and confidence."""

    def test_default_condition(self):
        match = default_condition(Urgency.MEDIUM)

        assert match.name == "General Health Concern"
        assert match.probability == 50
        assert match.urgency == Urgency.MEDIUM
        assert match.specialty == "general"
        assert match.key is None

    def test_split_limits_alternatives(self):
        matches = score_conditions(["fever", "nausea", "skin rash", "headache"])
        primary, alternatives = split_conditions(matches, Urgency.MEDIUM)

        assert primary == matches[0]
        assert len(alternatives) <= 2
        assert primary not in alternatives

    def test_split_empty_uses_default(self):
        primary, alternatives = split_conditions([], Urgency.HIGH)

        assert primary.name == "General Health Concern"
        assert primary.urgency == Urgency.HIGH
        assert alternatives == ()

    @pytest.mark.parametrize("count,expected", [(0, 60), (1, 70), (3, 90), (4, 95), (10, 95)])
    def test_analysis_confidence(self, count, expected):
        assert analysis_confidence(count) == expected


class TestRecommendations:
    """Tests for recommendations and specialty routing."""

    def test_high_with_chest_pain(self):
        recs = generate_recommendations(Urgency.HIGH, ["chest pain"])

        assert recs[0] == "Seek immediate medical attention"
        assert "Avoid physical exertion" in recs
        assert len(recs) == 4

    def test_medium_with_fever(self):
        recs = generate_recommendations(Urgency.MEDIUM, ["fever"])

        assert recs[0].startswith("Schedule appointment with healthcare provider")
        assert "Take temperature regularly and record" in recs

    def test_low_default(self):
        assert generate_recommendations(Urgency.LOW, []) == [
            "Schedule routine appointment with primary care physician",
            "Rest and maintain good hydration",
        ]

    def test_specialty_first_mapped_symptom(self):
        assert suggest_specialty(["fever", "headache", "chest pain"]) == "neurology"
        assert suggest_specialty(["fever", "nausea"]) == "general"
        assert suggest_specialty([]) == "general"
