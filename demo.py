"""
End-to-End Demo Script for the MediCare+ AI Decision Engine

Walks through every analysis the dashboards use, with mock patients:
1. Symptom analysis (condition matching + triage)
2. Standalone triage scoring
3. Prescription suggestions
4. Medical image analysis
5. Health insights
6. Analysis history

Run: python demo.py            (set MEDICARE_AI_SIMULATE_LATENCY=false to skip delays)
"""
import asyncio
import json

from medicare_ai.config import settings
from medicare_ai.services import AIIntegrationService
from medicare_ai.utils import setup_logging

PATIENTS = {
    "P001": {"patientId": "P001", "age": 70, "chronicConditions": ["diabetes"],
             "currentMedications": ["Metformin 500mg"]},
    "P002": {"patientId": "P002", "age": 8, "allergies": ["penicillin"]},
    "P003": {"patientId": "P003", "age": 34, "bmi": 31.2},
}


def section(title: str) -> None:
    print()
    print("=" * 60)
    print(title)
    print("=" * 60)


async def main() -> None:
    setup_logging(settings.log_level, settings.log_file, settings.log_color)
    service = AIIntegrationService.from_settings(settings)

    section("[1/6] Symptom analysis")
    for pid, text in (
        ("P001", "I have chest pain and dizziness"),
        ("P002", "fever with a skin rash and some nausea"),
        ("P003", "just feeling a bit off"),
    ):
        analysis = await service.analyze_symptoms(text, PATIENTS[pid])
        print(f"   {pid}: {text!r}")
        print(f"      detected:  {list(analysis.detected_symptoms)}")
        print(f"      primary:   {analysis.primary_condition.name} "
              f"({analysis.primary_condition.probability}%)")
        print(f"      urgency:   {analysis.urgency_level.value}   "
              f"triage: {analysis.triage.score} / {analysis.triage.priority.value} "
              f"(wait {analysis.triage.estimated_wait_time})")

    section("[2/6] Triage")
    triage = service.calculate_triage_score("high", 4, PATIENTS["P001"])
    print(f"   score={triage.score} priority={triage.priority.value}")
    print(f"   notes: {triage.notes}")

    section("[3/6] Prescription suggestions")
    for pid, diagnosis in (("P002", "bacterial infection"), ("P001", "chronic hypertension")):
        rx = await service.generate_prescription_suggestions(diagnosis, PATIENTS[pid])
        print(f"   {pid}: {diagnosis!r} → category {rx.category}")
        for line in rx.primary_medications:
            print(f"      {line.medication:22} {line.dosage:8} {line.frequency} / {line.duration}")
        for precaution in rx.precautions:
            print(f"      ⚠️  {precaution}")

    section("[4/6] Image analysis")
    image = await service.analyze_medical_image("x-ray", PATIENTS["P003"], content_type="image/png")
    print(f"   {image.image_type}: {image.findings}")
    print(f"   confidence={image.confidence} specialist review={image.requires_specialist_review}")

    section("[5/6] Health insights")
    print(json.dumps(service.generate_health_insights(PATIENTS["P003"]).to_dict(), indent=2))

    section("[6/6] Analysis history")
    for record in service.get_analysis_history():
        print(f"   {record.timestamp.isoformat()}  {record.type.value:24} {record.patient_id}")


if __name__ == "__main__":
    asyncio.run(main())
