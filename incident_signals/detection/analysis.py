"""Run every detector over one report and reconcile the two type classifiers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from incident_signals.common.text import as_text
from incident_signals.detection.callsign import (
    detect_callsign_with_confidence, extract_all_callsigns,
)
from incident_signals.detection.incident_logic import ATTENDANCE, detect_incident_from_text
from incident_signals.detection.incident_type import (
    FALLBACK_CONFIDENCE, MATCH_CONFIDENCE, get_all_incident_type_matches,
    get_alternative_incident_types,
)
from incident_signals.detection.priority import detect_priority_optimized
from incident_signals.detection.vocabulary import is_incident_type_available

TYPE_SOURCE_LOGIC = "logic"
TYPE_SOURCE_LADDER = "ladder"


@dataclass(frozen=True)
class IncidentAnalysis:
    callsign: str
    callsign_confidence: float
    callsigns: List[str]
    incident_type: str
    type_confidence: float
    type_source: Optional[str]
    alternative_types: List[str]
    occurrence: str
    priority: str
    priority_confidence: float
    signals: List[str] = field(default_factory=list)
    reasoning: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze_incident_text(text: str, event_type: Optional[str] = None) -> IncidentAnalysis:
    """All signals for one report.

    The first-match table wins for Attendance (it also normalises the
    occurrence); otherwise the keyword ladder decides and the table is the
    fallback. Alternatives are limited to the types offered for *event_type*
    (concert when not given).
    """
    text = as_text(text)
    logic = detect_incident_from_text(text)
    matches = get_all_incident_type_matches(text)
    ladder_type = matches[0].type if matches else ""

    if logic.incident_type == ATTENDANCE or (logic.incident_type and not ladder_type):
        incident_type, source = logic.incident_type, TYPE_SOURCE_LOGIC
    elif ladder_type:
        incident_type, source = ladder_type, TYPE_SOURCE_LADDER
    else:
        incident_type, source = "", None

    callsign = detect_callsign_with_confidence(text)
    priority = detect_priority_optimized(text, incident_type or None)

    return IncidentAnalysis(
        callsign=callsign.callsign if callsign else "",
        callsign_confidence=callsign.confidence if callsign else 0.0,
        callsigns=extract_all_callsigns(text),
        incident_type=incident_type,
        type_confidence=MATCH_CONFIDENCE if incident_type else FALLBACK_CONFIDENCE,
        type_source=source,
        alternative_types=[
            t for t in get_alternative_incident_types(text)
            if t != incident_type and is_incident_type_available(t, event_type)
        ],
        occurrence=logic.occurrence or text,
        priority=priority.priority,
        priority_confidence=priority.confidence,
        signals=priority.signals,
        reasoning=priority.reasoning,
    )
