"""
Pytest Configuration and Fixtures

Shared fixtures for decision engine and service tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from medicare_ai.core.decision import DecisionEngine
from medicare_ai.config import AISettings
from medicare_ai.services import AIIntegrationService, AnalysisHistory, LatencyProfile


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible randomized fields."""
    return random.Random(1234)


@pytest.fixture
def engine() -> DecisionEngine:
    """Seeded decision engine."""
    return DecisionEngine(seed=42)


@pytest.fixture
def elderly_patient() -> dict:
    return {
        "patientId": "P001",
        "age": 70,
        "chronicConditions": ["diabetes"],
        "currentMedications": ["Metformin 500mg"],
    }


@pytest.fixture
def child_patient() -> dict:
    return {"patientId": "P002", "age": 8, "allergies": ["penicillin"]}


@pytest.fixture
def service() -> AIIntegrationService:
    """Service with no simulated latency."""
    return AIIntegrationService(
        engine=DecisionEngine(seed=7),
        history=AnalysisHistory(),
        ai_settings=AISettings(),
        latency=LatencyProfile.none(),
    )
