"""Fast first-match incident classifier used while the operator is still typing.

A coarser table than the keyword ladder in ``incident_type``: rules are
checked strictly in ``order`` and the first rule with any keyword present
decides the type. Rules may pin a priority; otherwise the priority scorer
runs with the matched type as its hint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from incident_signals.common.logging import get_logger
from incident_signals.common.text import as_text, contains_any
from incident_signals.detection import patterns as P
from incident_signals.detection.priority import detect_priority
from incident_signals.detection.types import IncidentDetectionResult
from incident_signals.detection.vocabulary import (
    PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_URGENT,
    bounds_for_type, require_known_priority, require_known_types,
)

log = get_logger("incident_logic")

ATTENDANCE = "Attendance"


@dataclass(frozen=True)
class _LogicRule:
    order: int
    label: str
    keywords: Tuple[str, ...]
    priority: Optional[str] = None


_RULES: List[_LogicRule] = [
    _LogicRule(10, "Counter-Terror Alert",
               ("bomb", "terror", "explosive", "suspect package", "suspicious package",
                "unattended bag", "unattended item"),
               PRIORITY_URGENT),
    _LogicRule(20, "Fire Alarm", ("fire alarm", "alarm activated", "alarm sounding"), PRIORITY_HIGH),
    _LogicRule(30, "Suspected Fire",
               ("suspected fire", "smoke", "burning smell", "smell of burning", "smoldering",
                "smouldering"),
               PRIORITY_HIGH),
    _LogicRule(40, "Fire", ("fire", "flames", "blaze"), PRIORITY_URGENT),
    _LogicRule(50, "Evacuation", ("evacuate", "evacuation", "assembly point"), PRIORITY_URGENT),
    _LogicRule(60, "Emergency Show Stop",
               ("show stop", "stop the show", "stop performance", "halt performance"),
               PRIORITY_URGENT),
    _LogicRule(70, "Weapon Related",
               ("weapon", "knife", "knives", "firearm", "gunshot", "machete", "blade"),
               PRIORITY_URGENT),
    _LogicRule(80, ATTENDANCE,
               ("current attendance", "attendance", "head count", "headcount", "current numbers",
                "people in venue"),
               PRIORITY_LOW),
    _LogicRule(90, "Sexual Misconduct",
               ("sexual", "groped", "groping", "indecent", "inappropriate touching"),
               PRIORITY_URGENT),
    # A reported fight stays a Fight even when described as violent.
    _LogicRule(95, "Fight", ("fight", "altercation", "brawl", "scuffle", "punch"), PRIORITY_HIGH),
    _LogicRule(100, "Hostile Act",
               ("hostile", "threatening", "violent", "violence", "attacked", "attacking",
                "physical attack")),
    _LogicRule(120, "Missing Child/Person",
               ("missing child", "lost child", "missing person", "missing kid", "lost kid",
                "unaccompanied child", "unaccompanied minor"),
               PRIORITY_HIGH),
    _LogicRule(130, "Entry Breach",
               ("entry breach", "gate breach", "forced entry", "unauthorised entry",
                "unauthorized entry", "jumped the fence", "jumped fence"),
               PRIORITY_HIGH),
    _LogicRule(140, "Medical",
               ("medical", "medic", "heart attack", "cardiac", "injury", "injured", "unwell",
                "collapsed", "collapse", "bleeding", "hurt", "passed out", "seizure", "fainted",
                "chest pain", "first aid", "ambulance", "paramedic", "not breathing", "unconscious")),
    _LogicRule(150, "Alcohol / Drug Related",
               ("overdose", "drugs", "drug use", "intoxicated", "drunk", "under the influence"),
               PRIORITY_MEDIUM),
    _LogicRule(160, "Welfare",
               ("welfare", "distressed", "vulnerable", "safeguarding", "crying", "mental health",
                "confused"),
               PRIORITY_MEDIUM),
    _LogicRule(170, "Crowd Management",
               ("crowd surge", "crowd crush", "crush", "overcrowd", "crowd density",
                "crowd control", "dense crowd"),
               PRIORITY_HIGH),
    _LogicRule(180, "Queue Build-Up",
               ("queue", "bottleneck", "congestion", "backed up", "line forming"),
               PRIORITY_MEDIUM),
    _LogicRule(190, "Theft", ("theft", "stolen", "pickpocket", "stealing", "robbed"), PRIORITY_MEDIUM),
    _LogicRule(200, "Ejection",
               ("ejected", "ejection", "removed from", "kicked out", "escorted out", "thrown out"),
               PRIORITY_MEDIUM),
    _LogicRule(210, "Refusal",
               ("refused", "refusal", "denied entry", "turned away", "not allowed in"),
               PRIORITY_MEDIUM),
    _LogicRule(220, "Suspicious Behaviour",
               ("suspicious", "acting strangely", "loitering", "unusual behaviour"),
               PRIORITY_MEDIUM),
    _LogicRule(230, "Lost Property",
               ("lost property", "lost phone", "lost wallet", "lost bag", "left behind",
                "misplaced", "found item", "dropped"),
               PRIORITY_LOW),
    _LogicRule(240, "Tech Issue",
               ("tech issue", "technical issue", "equipment failure", "power cut", "power outage",
                "system down", "radio failure"),
               PRIORITY_MEDIUM),
    _LogicRule(250, "Site Issue",
               ("site issue", "damage", "broken", "trip hazard", "maintenance", "barrier down"),
               PRIORITY_MEDIUM),
    _LogicRule(260, "Environmental",
               ("spill", "flood", "weather", "icy", "slippery", "lightning", "storm"),
               PRIORITY_MEDIUM),
    _LogicRule(270, "Noise Complaint", ("noise", "too loud", "sound complaint", "volume"), PRIORITY_LOW),
    _LogicRule(280, "Accreditation", ("accreditation", "wristband", "credential", "pass issue"), PRIORITY_LOW),
    _LogicRule(290, "Staffing",
               ("staffing", "staff shortage", "understaffed", "short staffed"),
               PRIORITY_MEDIUM),
    _LogicRule(300, "Accessibility",
               ("accessibility", "wheelchair", "disabled access", "accessible"),
               PRIORITY_MEDIUM),
    _LogicRule(310, "Animal Incident", ("animal", "dog", "wildlife"), PRIORITY_LOW),
    _LogicRule(320, "Artist Movement",
               ("artist moving", "artist movement", "artist arriving", "artist leaving",
                "escort artist", "artist escort", "artist en route"),
               PRIORITY_MEDIUM),
    _LogicRule(330, "Artist On Stage",
               ("artist on stage", "on stage", "onstage", "taking the stage", "now performing",
                "started performing"),
               PRIORITY_LOW),
    _LogicRule(340, "Artist Off Stage",
               ("artist off stage", "off stage", "offstage", "left the stage", "left stage",
                "finished performing", "set finished"),
               PRIORITY_LOW),
    _LogicRule(350, "Showdown", ("showdown", "show down"), PRIORITY_LOW),
    _LogicRule(360, "Event Timing",
               ("doors open", "doors green", "venue open", "venue clear", "delayed", "running late",
                "postponed", "timing"),
               PRIORITY_LOW),
    _LogicRule(370, "Timings", ("set time", "stage time", "set times", "schedule"), PRIORITY_LOW),
    _LogicRule(380, "Sit Rep",
               ("sit rep", "sitrep", "situation report", "status update", "all quiet", "all clear"),
               PRIORITY_LOW),
]


def _validate_rules() -> None:
    require_known_types((r.label for r in _RULES), "incident logic table")
    orders = [r.order for r in _RULES]
    if len(set(orders)) != len(orders):
        raise ValueError("Incident logic rule orders must be unique")
    for rule in _RULES:
        require_known_priority(rule.priority, f"incident logic rule {rule.label}")
        if rule.priority and bounds_for_type(rule.label).clamp(rule.priority) != rule.priority:
            raise ValueError(
                f"Pinned priority {rule.priority} for {rule.label} is outside its type bounds"
            )


_validate_rules()
_RULES.sort(key=lambda r: r.order)


def _match_rule(lowered: str) -> Optional[_LogicRule]:
    for rule in _RULES:
        if contains_any(lowered, rule.keywords):
            return rule
    return None


def normalize_attendance(text: str) -> Optional[str]:
    """``Current Attendance: <digits>``, or ``None`` when *text* holds no figure.

    The number following the attendance wording is preferred; otherwise the
    first standalone number is used.
    """
    text = as_text(text)
    m = P.ATTENDANCE_FIGURE.search(text)
    if m:
        figure = m.group(1)
    else:
        m = P.ATTENDANCE_NUMBER.search(text)
        if not m:
            return None
        figure = m.group(0)
    return f"Current Attendance: {figure.replace(',', '')}"


def detect_incident_from_text(text: str) -> IncidentDetectionResult:
    """Type, occurrence and priority from the first matching rule; empty result when nothing matches."""
    text = as_text(text)
    rule = _match_rule(text.lower())
    if rule is None:
        return IncidentDetectionResult()

    occurrence = text
    if rule.label == ATTENDANCE:
        occurrence = normalize_attendance(text) or text

    priority = rule.priority or detect_priority(text, rule.label)
    log.debug("incident logic matched %s (order %d) -> %s", rule.label, rule.order, priority)
    return IncidentDetectionResult(incident_type=rule.label, occurrence=occurrence, priority=priority)
