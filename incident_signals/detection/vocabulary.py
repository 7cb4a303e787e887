"""Closed vocabularies shared by every detector: priority levels and incident-type labels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

PRIORITY_URGENT = "urgent"
PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

# Most severe first.
PRIORITY_LEVELS = (PRIORITY_URGENT, PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)

PRIORITY_RANK: Dict[str, int] = {
    PRIORITY_URGENT: 4,
    PRIORITY_HIGH: 3,
    PRIORITY_MEDIUM: 2,
    PRIORITY_LOW: 1,
}

DEFAULT_PRIORITY = PRIORITY_MEDIUM


def priority_rank(level: str) -> int:
    return PRIORITY_RANK.get(level, 0)


def more_severe(a: str, b: str) -> str:
    return a if priority_rank(a) >= priority_rank(b) else b


SHARED_INCIDENT_TYPES = (
    "Medical",
    "Ejection",
    "Refusal",
    "Welfare",
    "Suspicious Behaviour",
    "Lost Property",
    "Attendance",
    "Site Issue",
    "Tech Issue",
    "Environmental",
    "Other",
    "Alcohol / Drug Related",
    "Weapon Related",
    "Sexual Misconduct",
    "Crowd Management",
    "Hostile Act",
    "Fire Alarm",
    "Noise Complaint",
    "Evacuation",
    "Counter-Terror Alert",
    "Entry Breach",
    "Theft",
    "Animal Incident",
    "Missing Child/Person",
    "Accreditation",
    "Staffing",
    "Accessibility",
    "Suspected Fire",
    "Fire",
    "Fight",
)

CONCERT_INCIDENT_TYPES = (
    "Artist Movement",
    "Artist On Stage",
    "Artist Off Stage",
    "Event Timing",
    "Timings",
    "Sit Rep",
    "Showdown",
    "Emergency Show Stop",
    "Queue Build-Up",
)

FOOTBALL_INCIDENT_TYPES = (
    "Pitch Invasion",
    "Fan Disorder",
    "Pyrotechnic Incident",
    "Crowd Surge",
    "Stand Conflict",
    "Supporter Ejection",
    "Steward Deployment",
    "Segregation Breach",
    "Disorder at Entry/Exit",
    "Offensive Chanting",
    "Throwing Objects",
    "Use of Flares / Smoke Devices",
    "Pitch Encroachment",
    "Post-Match Incident",
    "Half-Time Incident",
    "Match Abandonment",
    "On-Field Medical Emergency",
    "Player Safety Concern",
    "Referee / Official Abuse",
    "Security Perimeter Breach",
)

INCIDENT_TYPES_BY_EVENT: Dict[str, tuple] = {
    "shared": SHARED_INCIDENT_TYPES,
    "concert": CONCERT_INCIDENT_TYPES,
    "football": FOOTBALL_INCIDENT_TYPES,
    "festival": (),
    "parade": (),
}

ALL_INCIDENT_TYPES = frozenset(
    SHARED_INCIDENT_TYPES + CONCERT_INCIDENT_TYPES + FOOTBALL_INCIDENT_TYPES
)

_DISPLAY_NAMES = {
    "Attendance": "Attendance Update",
    "Timings": "Timing Update",
    "Sit Rep": "Situation Report",
}


def incident_types_for_event(event_type: Optional[str] = None) -> List[str]:
    """Shared types plus the event-specific ones; unknown or missing event types fall back to concert."""
    key = (event_type or "").strip().lower()
    specific = INCIDENT_TYPES_BY_EVENT.get(key)
    if specific is None or key == "shared":
        specific = CONCERT_INCIDENT_TYPES
    return list(SHARED_INCIDENT_TYPES) + list(specific)


def is_incident_type_available(incident_type: str, event_type: Optional[str] = None) -> bool:
    return incident_type in incident_types_for_event(event_type)


def display_name(incident_type: str) -> str:
    return _DISPLAY_NAMES.get(incident_type, incident_type)


def require_known_types(labels: Iterable[str], where: str) -> None:
    unknown = sorted({label for label in labels if label not in ALL_INCIDENT_TYPES})
    if unknown:
        raise ValueError(f"Unknown incident types in {where}: {unknown}")


def require_known_priority(level: Optional[str], where: str) -> None:
    if level is not None and level not in PRIORITY_RANK:
        raise ValueError(f"Unknown priority level {level!r} in {where}")


@dataclass(frozen=True)
class PriorityBounds:
    """Minimum / maximum priority an incident type allows. ``None`` leaves that side open."""
    floor: Optional[str] = None
    ceiling: Optional[str] = None

    def clamp(self, level: str) -> str:
        if self.floor is not None:
            level = more_severe(level, self.floor)
        if self.ceiling is not None and priority_rank(level) > priority_rank(self.ceiling):
            level = self.ceiling
        return level


_URGENT_FLOOR = PriorityBounds(floor=PRIORITY_URGENT)
_HIGH_FLOOR = PriorityBounds(floor=PRIORITY_HIGH)
_LOW_CEILING = PriorityBounds(ceiling=PRIORITY_LOW)

TYPE_PRIORITY_BOUNDS: Dict[str, PriorityBounds] = {
    "Fire": _URGENT_FLOOR,
    "Evacuation": _URGENT_FLOOR,
    "Weapon Related": _URGENT_FLOOR,
    "Hostile Act": _URGENT_FLOOR,
    "Counter-Terror Alert": _URGENT_FLOOR,
    "Emergency Show Stop": _URGENT_FLOOR,
    "Pitch Invasion": _URGENT_FLOOR,
    "Pitch Encroachment": _URGENT_FLOOR,
    "Crowd Surge": _URGENT_FLOOR,
    "Match Abandonment": _URGENT_FLOOR,
    "On-Field Medical Emergency": _URGENT_FLOOR,
    "Security Perimeter Breach": _URGENT_FLOOR,

    "Medical": _HIGH_FLOOR,
    "Fight": _HIGH_FLOOR,
    "Sexual Misconduct": _HIGH_FLOOR,
    "Suspected Fire": _HIGH_FLOOR,
    "Fire Alarm": _HIGH_FLOOR,
    "Missing Child/Person": _HIGH_FLOOR,
    "Entry Breach": _HIGH_FLOOR,

    "Attendance": _LOW_CEILING,
    "Event Timing": _LOW_CEILING,
    "Artist On Stage": _LOW_CEILING,
    "Artist Off Stage": _LOW_CEILING,
    "Sit Rep": _LOW_CEILING,
    "Timings": _LOW_CEILING,
}

_OPEN_BOUNDS = PriorityBounds()


def bounds_for_type(incident_type: Optional[str]) -> PriorityBounds:
    if not incident_type:
        return _OPEN_BOUNDS
    return TYPE_PRIORITY_BOUNDS.get(incident_type, _OPEN_BOUNDS)


def _validate_bounds() -> None:
    require_known_types(TYPE_PRIORITY_BOUNDS, "TYPE_PRIORITY_BOUNDS")
    for label, bounds in TYPE_PRIORITY_BOUNDS.items():
        require_known_priority(bounds.floor, f"floor of {label}")
        require_known_priority(bounds.ceiling, f"ceiling of {label}")
        if bounds.floor and bounds.ceiling and priority_rank(bounds.floor) > priority_rank(bounds.ceiling):
            raise ValueError(f"Priority floor above ceiling for {label}: {bounds}")


_validate_bounds()
