"""
Unit Tests for Mock Image Analysis and Health Insights
"""
import random

import pytest

from medicare_ai.core.decision.imaging import (
    IMAGE_FINDINGS,
    analyze_image,
    image_recommendations,
    specialty_for_image,
)
from medicare_ai.core.decision.insights import generate_health_insights


class TestAnalyzeImage:
    """Tests for analyze_image."""

    def test_xray(self, rng):
        result = analyze_image("x-ray", 80, rng)

        assert result.image_type == "X-RAY"
        assert result.findings in {f.findings for f in IMAGE_FINDINGS["x-ray"]}
        assert 50 <= result.confidence <= 95
        assert 80 <= result.quality_score <= 95
        assert result.suggested_specialty == "radiology"
        assert result.disclaimer_shown is True

    def test_unknown_type_uses_fallback_pool(self, rng):
        result = analyze_image("Thermal", 80, rng)

        assert result.image_type == "THERMAL"
        assert result.findings == IMAGE_FINDINGS["unknown"][0].findings
        # 65 ± 5
        assert 60 <= result.confidence <= 70
        assert result.requires_specialist_review

    def test_missing_type(self, rng):
        assert analyze_image(None, 80, rng).image_type == "UNKNOWN"
        assert analyze_image("  ", 80, rng).image_type == "UNKNOWN"

    def test_review_flag_uses_unrounded_confidence(self):
        class FixedRandom(random.Random):
            def choice(self, seq):
                return seq[1]            # x-ray finding at 76

            def random(self):
                return 0.86              # 76 + 0.36 * 10 = 79.6

        result = analyze_image("x-ray", 80, FixedRandom())

        assert result.confidence == 80
        assert result.requires_specialist_review
        assert not analyze_image("x-ray", 79, FixedRandom()).requires_specialist_review

    def test_threshold_controls_review_flag(self):
        for seed in range(10):
            assert not analyze_image("mri", 0, random.Random(seed)).requires_specialist_review
            assert analyze_image("mri", 100, random.Random(seed)).requires_specialist_review

    def test_seeded_reproducible(self):
        a = analyze_image("ct", 80, random.Random(5))
        b = analyze_image("ct", 80, random.Random(5))
        assert a == b

    @pytest.mark.parametrize("image_type,specialty", [
        ("ECG", "cardiology"), ("eeg", "neurology"), ("ultrasound", "radiology"), ("pet", "radiology"),
    ])
    def test_specialty(self, image_type, specialty):
        assert specialty_for_image(image_type) == specialty

    def test_recommendations_by_severity(self):
        assert image_recommendations("normal") == [
            "Continue current treatment plan", "Follow up as scheduled",
        ]
        assert image_recommendations("mild")[0] == "Specialist consultation recommended"


class TestHealthInsights:
    """Tests for generate_health_insights."""

    def test_older_obese_with_allergies(self):
        insights = generate_health_insights(
            {"age": 55, "bmi": 32.0, "allergies": ["penicillin", "latex"]}
        )

        assert insights.preventive_recommendations == (
            "Annual cardiovascular screening",
            "Regular blood pressure monitoring",
            "Colonoscopy screening",
            "Bone density testing",
        )
        assert insights.risk_factors == ("Obesity", "Known allergies: penicillin, latex")
        assert insights.lifestyle_insights == ("Weight management program recommended",)

    def test_underweight(self):
        insights = generate_health_insights({"age": 45, "bmi": 17.0})

        assert insights.risk_factors == ("Underweight",)
        assert len(insights.preventive_recommendations) == 2

    def test_empty_patient(self):
        data = generate_health_insights(None).to_dict()
        assert all(v == [] for v in data.values())
