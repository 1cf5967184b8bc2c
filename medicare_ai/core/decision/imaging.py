"""
Medical Image Analysis (mock)

No pixels are inspected. A canned finding is drawn from the pool for the
image type, its confidence jittered by up to ±5 points and clamped to
[50, 95]. Results below the configured confidence threshold are flagged
for specialist review.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .base import ImageAnalysisResult, clamp


@dataclass(frozen=True)
class ImageFinding:
    confidence: int
    findings: str
    recommendation: str
    follow_up: str               # routine / priority / urgent
    severity: str                # normal / mild


UNKNOWN_IMAGE_TYPE = "unknown"
CONFIDENCE_JITTER = 10           # total spread, centred on the canned confidence
MIN_CONFIDENCE = 50
MAX_CONFIDENCE = 95

IMAGE_FINDINGS: Mapping[str, Tuple[ImageFinding, ...]] = MappingProxyType({
    "x-ray": (
        ImageFinding(
            89,
            "Clear lung fields with normal cardiac silhouette. No acute abnormalities detected.",
            "Continue routine monitoring. Results within normal limits.",
            "routine", "normal",
        ),
        ImageFinding(
            76,
            "Mild infiltrate in lower right lung field. Possible early pneumonia.",
            "Antibiotic therapy recommended. Follow-up chest X-ray in 1 week.",
            "urgent", "mild",
        ),
        ImageFinding(
            84,
            "Normal bone structure and alignment. No fractures or dislocations observed.",
            "No acute intervention required. Consider physiotherapy if pain persists.",
            "routine", "normal",
        ),
    ),
    "mri": (
        ImageFinding(
            91,
            "Brain tissue appears normal with good gray-white matter differentiation.",
            "No abnormal findings. Continue current treatment plan.",
            "routine", "normal",
        ),
        ImageFinding(
            73,
            "Small area of increased signal intensity in white matter. Clinical correlation needed.",
            "Neurology consultation recommended for further evaluation.",
            "priority", "mild",
        ),
    ),
    "ct": (
        ImageFinding(
            87,
            "No acute intracranial abnormalities. Normal brain parenchyma.",
            "Reassuring findings. Continue symptomatic management.",
            "routine", "normal",
        ),
        ImageFinding(
            82,
            "Normal abdominal organs with no signs of acute pathology.",
            "No immediate concerns. Consider dietary modifications.",
            "routine", "normal",
        ),
    ),
    UNKNOWN_IMAGE_TYPE: (
        ImageFinding(
            65,
            "Image quality adequate for preliminary assessment. No obvious abnormalities.",
            "Professional radiological review recommended for definitive interpretation.",
            "routine", "normal",
        ),
    ),
})

IMAGE_SPECIALTY: Mapping[str, str] = MappingProxyType({
    "x-ray":      "radiology",
    "mri":        "radiology",
    "ct":         "radiology",
    "ultrasound": "radiology",
    "ecg":        "cardiology",
    "eeg":        "neurology",
})


def specialty_for_image(image_type: str) -> str:
    return IMAGE_SPECIALTY.get(image_type.lower(), "radiology")


def image_recommendations(severity: str) -> List[str]:
    if severity == "normal":
        return ["Continue current treatment plan", "Follow up as scheduled"]
    return ["Specialist consultation recommended", "Additional tests may be required"]


def analyze_image(
    image_type: Optional[str],
    confidence_threshold: float = 80,
    rng: Optional[random.Random] = None,
) -> ImageAnalysisResult:
    """
    Produce a mock analysis for an image of the given modality.

    Unrecognised or missing image types use the ``unknown`` pool.
    """
    rng = rng or random.Random()
    image_type = (image_type or UNKNOWN_IMAGE_TYPE).strip() or UNKNOWN_IMAGE_TYPE
    pool = IMAGE_FINDINGS.get(image_type.lower(), IMAGE_FINDINGS[UNKNOWN_IMAGE_TYPE])
    finding = rng.choice(pool)

    jittered = finding.confidence + (rng.random() - 0.5) * CONFIDENCE_JITTER
    jittered = max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, jittered))
    confidence = clamp(jittered, MIN_CONFIDENCE, MAX_CONFIDENCE)

    return ImageAnalysisResult(
        image_type=image_type.upper(),
        confidence=confidence,
        findings=finding.findings,
        recommendation=finding.recommendation,
        severity=finding.severity,
        follow_up_priority=finding.follow_up,
        # Review flag uses the unrounded confidence: 79.6 is below a threshold of 80.
        requires_specialist_review=jittered < confidence_threshold,
        suggested_specialty=specialty_for_image(image_type),
        quality_score=int(round(80 + rng.random() * 15)),
        additional_recommendations=tuple(image_recommendations(finding.severity)),
    )
