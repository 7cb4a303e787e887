"""Plain result records returned by the detectors."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CallsignResult:
    callsign: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IncidentTypeResult:
    type: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IncidentTypeMatch:
    type: str
    confidence: float
    matched_keywords: List[str] = field(default_factory=list)
    priority: Optional[str] = None  # priority hint of the matched rule

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PriorityConfidence:
    priority: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PriorityResult:
    priority: str
    confidence: float
    signals: List[str] = field(default_factory=list)
    reasoning: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IncidentDetectionResult:
    incident_type: Optional[str] = None
    occurrence: Optional[str] = None
    priority: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.incident_type is None and self.occurrence is None and self.priority is None

    def to_dict(self) -> Dict[str, Any]:
        """Only the fields that were set; an unclassified input gives ``{}``."""
        return {k: v for k, v in asdict(self).items() if v is not None}
