"""
Result models (no persistence)

Key Models:
- ActionItem: one recommended follow-up step
- GeneratedPlan: generator output (English summary + action plan)
- ProcessingResult / ProcessingError: the two outcomes of one pipeline run
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Priority(enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProfessionalType(enum.Enum):
    IMMIGRATION_LAWYER = "immigration_lawyer"
    TAX_ADVISOR = "tax_advisor"
    MEDICAL_INTERPRETER = "medical_interpreter"
    HOUSING_ADVISOR = "housing_advisor"
    FAMILY_LAW_ATTORNEY = "family_law_attorney"
    BENEFITS_COUNSELOR = "benefits_counselor"


@dataclass(frozen=True)
class ActionItem:
    step: str
    description: str
    priority: Priority
    professional_type: Optional[ProfessionalType] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "step": self.step,
            "description": self.description,
            "priority": self.priority.value,
        }
        if self.professional_type is not None:
            data["professionalType"] = self.professional_type.value
        return data


@dataclass
class GeneratedPlan:
    summary: str
    action_plan: List[ActionItem] = field(default_factory=list)


@dataclass
class ProcessingResult:
    translated_summary: str
    action_plan: List[ActionItem]
    target_language: str
    summary_length: int
    original_length: int
    timestamp: str = field(default_factory=now_utc_iso)

    success = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "translatedSummary": self.translated_summary,
            "actionPlan": [item.to_dict() for item in self.action_plan],
            "targetLanguage": self.target_language,
            "summaryLength": self.summary_length,
            "originalLength": self.original_length,
            "timestamp": self.timestamp,
        }


@dataclass
class ProcessingError:
    error: str
    timestamp: str = field(default_factory=now_utc_iso)

    success = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.error,
            "timestamp": self.timestamp,
        }
