"""
Analysis History

Append-only in-memory log of every analysis the service performed. The
engine never writes here; the service records each result after the fact.
"""
from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from medicare_ai.utils import get_logger

logger = get_logger(__name__)


class AnalysisType(str, Enum):
    SYMPTOM_ANALYSIS        = "symptom_analysis"
    IMAGE_ANALYSIS          = "image_analysis"
    PRESCRIPTION_SUGGESTION = "prescription_suggestion"
    TRIAGE                  = "triage"


class AnalysisRecord(BaseModel):
    """One history entry."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    type: AnalysisType
    input: Any = None
    result: Dict[str, Any]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    patient_id: Optional[str] = None


class AnalysisHistory:
    """
    Thread-safe append-only history.

    Args:
        max_records: When set, the oldest records are dropped once the log
            grows past this size.
    """

    def __init__(self, max_records: Optional[int] = None):
        self.max_records = max_records
        self._records: List[AnalysisRecord] = []
        self._lock = threading.Lock()

    def record(
        self,
        analysis_type: Union[AnalysisType, str],
        input: Any,
        result: Dict[str, Any],
        patient_id: Optional[str] = None,
    ) -> AnalysisRecord:
        entry = AnalysisRecord(
            type=AnalysisType(analysis_type),
            input=input,
            result=result,
            patient_id=patient_id,
        )
        with self._lock:
            self._records.append(entry)
            if self.max_records is not None and len(self._records) > self.max_records:
                dropped = len(self._records) - self.max_records
                del self._records[:dropped]
                logger.debug(f"AnalysisHistory: dropped {dropped} oldest record(s)")
        return entry

    def query(
        self,
        patient_id: Optional[str] = None,
        analysis_type: Optional[Union[AnalysisType, str]] = None,
    ) -> List[AnalysisRecord]:
        """Filtered records, newest first. Filters left as None match everything."""
        wanted_type = AnalysisType(analysis_type) if analysis_type else None
        with self._lock:
            records = list(self._records)

        if patient_id:
            records = [r for r in records if r.patient_id == patient_id]
        if wanted_type is not None:
            records = [r for r in records if r.type is wanted_type]

        # Stable sort keeps insertion order for equal timestamps; reversed
        # first so the later insert wins a tie.
        return sorted(reversed(records), key=lambda r: r.timestamp, reverse=True)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
