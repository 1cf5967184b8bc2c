"""
AI Integration Service

Async façade the dashboards call. For each request it:
1. checks the input and that the model is switched on in the AI settings
2. waits a simulated processing delay (cosmetic, configurable, can be off)
3. runs the synchronous DecisionEngine
4. appends the result to the analysis history

The delay never influences the result; tests build the service with
``LatencyProfile.none()``.
"""
from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from medicare_ai.config import AIModel, AISettings, Settings, load_ai_settings
from medicare_ai.core.decision import (
    AnalysisResult,
    DecisionEngine,
    HealthInsights,
    ImageAnalysisResult,
    PatientInfo,
    PrescriptionSuggestion,
    TriageResult,
    Urgency,
)
from medicare_ai.core.decision.base import PatientLike
from medicare_ai.utils import InvalidInputError, ModelDisabledError, get_logger

from .history import AnalysisHistory, AnalysisRecord, AnalysisType

logger = get_logger(__name__)

Range = Tuple[float, float]


@dataclass(frozen=True)
class LatencyProfile:
    """Simulated processing delay per operation, as (min, max) seconds."""
    symptom: Range = (2.0, 3.0)
    image: Range = (3.0, 5.0)
    prescription: Range = (1.5, 1.5)

    @classmethod
    def none(cls) -> "LatencyProfile":
        return cls(symptom=(0.0, 0.0), image=(0.0, 0.0), prescription=(0.0, 0.0))

    @classmethod
    def from_settings(cls, settings: Settings) -> "LatencyProfile":
        if not settings.simulate_latency:
            return cls.none()
        return cls(
            symptom=(settings.symptom_latency_min, settings.symptom_latency_max),
            image=(settings.image_latency_min, settings.image_latency_max),
            prescription=(settings.prescription_latency_min, settings.prescription_latency_max),
        )


class AIIntegrationService:
    """
    Caller-side wrapper around DecisionEngine with history and settings.

    Usage:
        service = AIIntegrationService.from_settings(settings)
        analysis = await service.analyze_symptoms("fever and nausea", {"patientId": "P001"})
        history = service.get_analysis_history(patient_id="P001")
    """

    def __init__(
        self,
        engine: Optional[DecisionEngine] = None,
        history: Optional[AnalysisHistory] = None,
        ai_settings: Optional[AISettings] = None,
        latency: Optional[LatencyProfile] = None,
        latency_rng: Optional[random.Random] = None,
    ):
        self.ai_settings = ai_settings or AISettings()
        self.engine = engine or DecisionEngine(
            confidence_threshold=self.ai_settings.confidence_threshold
        )
        self.history = history if history is not None else AnalysisHistory()
        self.latency = latency or LatencyProfile()
        # Separate from the engine's generator so delays never shift seeded results
        self._latency_rng = latency_rng or random.Random()
        self._in_flight = 0

        enabled = [m.value for m in AIModel if self.ai_settings.is_enabled(m)]
        logger.info(f"AI Integration initialized; models enabled: {', '.join(enabled) or 'none'}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "AIIntegrationService":
        """Build a service wired from process settings and the AI settings file."""
        ai_settings = load_ai_settings(settings.ai_settings_file)
        return cls(
            engine=DecisionEngine(
                seed=settings.random_seed,
                confidence_threshold=ai_settings.confidence_threshold,
            ),
            history=AnalysisHistory(max_records=settings.history_max_records),
            ai_settings=ai_settings,
            latency=LatencyProfile.from_settings(settings),
        )

    @property
    def is_processing(self) -> bool:
        return self._in_flight > 0

    # ── Guards ────────────────────────────────────────────────────────────

    def _require_model(self, model: AIModel) -> None:
        if not self.ai_settings.is_enabled(model):
            logger.warning(f"Rejected request: model {model.value} is disabled")
            raise ModelDisabledError(f"{model.value} is disabled in AI settings", model=model.value)

    @staticmethod
    def _require_text(value: Optional[str], field: str, message: str) -> str:
        if value is None or not str(value).strip():
            logger.warning(f"Rejected request: empty {field}")
            raise InvalidInputError(message, field=field)
        return value

    async def _simulate_processing(self, window: Range) -> None:
        low, high = window
        delay = self._latency_rng.uniform(low, max(low, high))
        if delay > 0:
            await asyncio.sleep(delay)

    # ── Operations ────────────────────────────────────────────────────────

    async def analyze_symptoms(
        self,
        symptoms: str,
        patient: PatientLike = None,
    ) -> AnalysisResult:
        """Analyse a symptom description and log it to history."""
        self._require_model(AIModel.SYMPTOM_ANALYZER)
        self._require_text(symptoms, "symptoms", "Please describe your symptoms.")
        patient = PatientInfo.from_dict(patient)

        self._in_flight += 1
        try:
            await self._simulate_processing(self.latency.symptom)
            result = self.engine.analyze_symptoms(symptoms, patient)
        finally:
            self._in_flight -= 1

        self.history.record(
            AnalysisType.SYMPTOM_ANALYSIS, symptoms, result.to_dict(), patient.patient_id
        )
        logger.info(
            f"Symptom analysis complete: {len(result.detected_symptoms)} symptom(s), "
            f"primary={result.primary_condition.name}, "
            f"triage={result.triage.score} ({result.triage.priority.value})",
            extra={"patient_id": patient.patient_id},
        )
        return result

    async def analyze_medical_image(
        self,
        image_type: str = "unknown",
        patient: PatientLike = None,
        content_type: Optional[str] = None,
    ) -> ImageAnalysisResult:
        """
        Mock-analyse an uploaded image.

        Args:
            image_type: Modality, e.g. ``x-ray``, ``mri``, ``ct``.
            patient: Optional patient record (only ``patientId`` is used).
            content_type: MIME type of the upload, when known; must be ``image/*``.
        """
        self._require_model(AIModel.IMAGE_ANALYZER)
        if content_type is not None and not content_type.startswith("image/"):
            logger.warning(f"Rejected request: non-image upload ({content_type})")
            raise InvalidInputError(
                "Please select a valid image file.",
                field="content_type",
                details={"content_type": content_type},
            )
        patient = PatientInfo.from_dict(patient)

        self._in_flight += 1
        try:
            await self._simulate_processing(self.latency.image)
            result = self.engine.analyze_image(image_type)
        finally:
            self._in_flight -= 1

        self.history.record(
            AnalysisType.IMAGE_ANALYSIS,
            {"imageType": image_type},
            result.to_dict(),
            patient.patient_id,
        )
        logger.info(
            f"Image analysis complete: {result.image_type} confidence={result.confidence}"
            + (" (specialist review)" if result.requires_specialist_review else ""),
            extra={"patient_id": patient.patient_id},
        )
        return result

    async def generate_prescription_suggestions(
        self,
        diagnosis: str,
        patient: PatientLike = None,
    ) -> PrescriptionSuggestion:
        self._require_model(AIModel.PRESCRIPTION_SUGGESTER)
        self._require_text(diagnosis, "diagnosis", "Please enter a diagnosis.")
        patient = PatientInfo.from_dict(patient)

        self._in_flight += 1
        try:
            await self._simulate_processing(self.latency.prescription)
            result = self.engine.suggest_prescription(diagnosis, patient)
        finally:
            self._in_flight -= 1

        self.history.record(
            AnalysisType.PRESCRIPTION_SUGGESTION, diagnosis, result.to_dict(), patient.patient_id
        )
        logger.info(
            f"Prescription suggestion complete: category={result.category}",
            extra={"patient_id": patient.patient_id},
        )
        return result

    def calculate_triage_score(
        self,
        urgency: Union[Urgency, str, None],
        symptom_count: int,
        patient: PatientLike = None,
    ) -> TriageResult:
        """Standalone triage; requires the auto-triage model to be on."""
        self._require_model(AIModel.TRIAGE_SYSTEM)
        patient = PatientInfo.from_dict(patient)
        result = self.engine.calculate_triage_score(urgency, symptom_count, patient)
        self.history.record(
            AnalysisType.TRIAGE,
            {"urgency": getattr(urgency, "value", urgency), "symptomCount": symptom_count},
            result.to_dict(),
            patient.patient_id,
        )
        return result

    def generate_health_insights(self, patient: PatientLike = None) -> HealthInsights:
        return self.engine.generate_health_insights(patient)

    def get_analysis_history(
        self,
        patient_id: Optional[str] = None,
        analysis_type: Optional[Union[AnalysisType, str]] = None,
    ) -> List[AnalysisRecord]:
        return self.history.query(patient_id=patient_id, analysis_type=analysis_type)

    def status(self) -> Dict[str, Any]:
        return {
            "is_processing": self.is_processing,
            "confidence_threshold": self.ai_settings.confidence_threshold,
            "models": {m.value: self.ai_settings.is_enabled(m) for m in AIModel},
            "history_size": len(self.history),
        }
