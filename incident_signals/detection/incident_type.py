"""Keyword-ladder incident type classifier with confidence scoring.

Rules are grouped into tiers ordered by severity (safety-critical first,
operational logs last). Each tier owns a disjoint confidence band, so a
match from a more severe tier always outranks one from a less severe tier;
inside a band, more keyword hits mean higher confidence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from incident_signals.common.logging import get_logger
from incident_signals.common.text import as_text, contains_any
from incident_signals.detection.types import IncidentTypeMatch, IncidentTypeResult
from incident_signals.detection.vocabulary import (
    PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_URGENT,
    bounds_for_type, require_known_types,
)

log = get_logger("incident_type")

TIER_SAFETY = 0
TIER_MEDICAL = 1
TIER_SECURITY = 2
TIER_CROWD = 3
TIER_GENERAL = 4
TIER_OPERATIONAL = 5

# (low, high]: a match in a tier scores strictly above ``low``.
_TIER_BANDS: Dict[int, Tuple[float, float]] = {
    TIER_SAFETY: (0.85, 1.0),
    TIER_MEDICAL: (0.75, 0.85),
    TIER_SECURITY: (0.65, 0.75),
    TIER_CROWD: (0.55, 0.65),
    TIER_GENERAL: (0.45, 0.55),
    TIER_OPERATIONAL: (0.35, 0.45),
}

_TIER_PRIORITY = {
    TIER_SAFETY: PRIORITY_URGENT,
    TIER_MEDICAL: PRIORITY_HIGH,
    TIER_SECURITY: PRIORITY_MEDIUM,
    TIER_CROWD: PRIORITY_MEDIUM,
    TIER_GENERAL: PRIORITY_MEDIUM,
    TIER_OPERATIONAL: PRIORITY_LOW,
}

PHRASE_POINTS = 2.0
KEYWORD_POINTS = 1.0
SATURATION_POINTS = 4.0
EXCLUDE_FACTOR = 0.5

MATCH_CONFIDENCE = 0.8
FALLBACK_CONFIDENCE = 0.3
MAX_ALTERNATIVES = 5


@dataclass(frozen=True)
class _TypeRule:
    label: str
    tier: int
    rank: int
    keywords: Tuple[str, ...]
    phrases: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()

    @property
    def priority(self) -> str:
        bounds = bounds_for_type(self.label)
        return bounds.floor or bounds.ceiling or _TIER_PRIORITY[self.tier]


_RULES: List[_TypeRule] = [
    # Safety-critical
    _TypeRule("Counter-Terror Alert", TIER_SAFETY, 10,
              ("bomb", "terror", "explosive", "suspect package", "suspicious package",
               "unattended bag", "unattended item"),
              ("bomb threat", "terror threat", "suspect package", "suspicious package")),
    _TypeRule("Fire", TIER_SAFETY, 20,
              ("fire", "flames", "blaze", "on fire"),
              ("fire outbreak", "flames visible", "building on fire"),
              exclude=("suspected", "alarm")),
    _TypeRule("Suspected Fire", TIER_SAFETY, 30,
              ("suspected fire", "smoke", "burning smell", "burning", "smoldering", "smouldering"),
              ("suspected fire", "smell of smoke", "burning smell")),
    _TypeRule("Fire Alarm", TIER_SAFETY, 40,
              ("fire alarm", "alarm activated", "alarm sounding", "fire bell"),
              ("fire alarm activated", "fire alarm triggered")),
    _TypeRule("Evacuation", TIER_SAFETY, 50,
              ("evacuation", "evacuate", "assembly point", "clear the area"),
              ("emergency evacuation", "evacuation required")),
    _TypeRule("Emergency Show Stop", TIER_SAFETY, 60,
              ("show stop", "stop performance", "emergency stop", "stop the show", "halt performance"),
              ("emergency show stop",)),
    _TypeRule("Weapon Related", TIER_SAFETY, 70,
              ("weapon", "knife", "knives", "firearm", "gunshot", "handgun", "blade", "machete",
               "armed man", "armed person", "armed individual"),
              ("person with weapon", "person with knife", "armed individual", "knife spotted")),

    # Medical
    _TypeRule("Medical", TIER_MEDICAL, 100,
              ("medical", "medic", "first aid", "injury", "injured", "collapse", "casualty",
               "ambulance", "hurt", "unconscious", "not breathing", "bleeding", "seizure",
               "heart attack", "fainted", "chest pain", "unwell", "paramedic"),
              ("medical emergency", "medical incident", "first aid required", "person injured",
               "medical assistance", "collapsed person")),

    # Security
    _TypeRule("Sexual Misconduct", TIER_SECURITY, 200,
              ("sexual", "harassment", "inappropriate touching", "grope", "groping", "indecent"),
              ("sexual assault", "sexual harassment", "sexual misconduct")),
    _TypeRule("Hostile Act", TIER_SECURITY, 210,
              ("hostile", "aggressive", "attacked", "attacking", "physical attack", "violence",
               "threatening"),
              ("hostile act", "aggressive behaviour", "aggressive behavior", "threatening behaviour")),
    _TypeRule("Fight", TIER_SECURITY, 220,
              ("fight", "altercation", "brawl", "scuffle", "punch", "physical confrontation"),
              ("fight broke out", "people fighting", "physical altercation", "violent altercation")),
    _TypeRule("Missing Child/Person", TIER_SECURITY, 230,
              ("missing child", "lost child", "missing person", "missing kid", "lost kid",
               "unaccompanied child", "unaccompanied minor", "child separated"),
              ("missing child", "lost child", "missing person")),
    _TypeRule("Entry Breach", TIER_SECURITY, 240,
              ("entry breach", "gate breach", "forced entry", "unauthorized entry",
               "unauthorised entry", "jumped fence", "jumped the fence", "fence jumper"),
              ("gate breached", "jumped the fence")),
    _TypeRule("Theft", TIER_SECURITY, 250,
              ("theft", "stolen", "pickpocket", "stealing", "robbed", "robbery"),
              ("item stolen", "theft reported", "phone stolen")),
    _TypeRule("Ejection", TIER_SECURITY, 260,
              ("ejection", "ejected", "removed from", "escorted out", "thrown out", "kicked out"),
              ("ejected from", "removed from venue", "escorted off site")),
    _TypeRule("Refusal", TIER_SECURITY, 270,
              ("refusal", "refused entry", "denied entry", "turned away", "refused service",
               "refused access"),
              ("entry refused", "denied access")),
    _TypeRule("Suspicious Behaviour", TIER_SECURITY, 280,
              ("suspicious", "acting strangely", "unusual behaviour", "unusual behavior", "loitering"),
              ("suspicious activity", "acting suspiciously")),

    # Crowd and welfare
    _TypeRule("Crowd Management", TIER_CROWD, 300,
              ("crowd", "dense", "surge", "crush", "capacity", "crowded", "overcrowd", "queue"),
              ("crowd control", "crowd surge", "crowd density", "queue management", "crowd movement")),
    _TypeRule("Queue Build-Up", TIER_CROWD, 310,
              ("queue build", "queue building", "large queue", "long queue", "bottleneck",
               "congestion", "backed up"),
              ("queue building up",)),
    _TypeRule("Welfare", TIER_CROWD, 320,
              ("welfare", "wellbeing", "distressed", "upset", "vulnerable", "confused",
               "crying", "safeguarding", "mental health"),
              ("welfare check", "welfare concern", "person distressed")),
    _TypeRule("Alcohol / Drug Related", TIER_CROWD, 330,
              ("alcohol", "drunk", "intoxicated", "drugs", "overdose", "inebriated",
               "under the influence"),
              ("suspected overdose", "drug use", "intoxicated person")),

    # General
    _TypeRule("Lost Property", TIER_GENERAL, 400,
              ("lost property", "left behind", "dropped", "found item", "misplaced",
               "lost phone", "lost wallet", "lost bag"),
              ("lost item", "property found", "missing property"),
              exclude=("missing child", "lost child", "missing person")),
    _TypeRule("Environmental", TIER_GENERAL, 410,
              ("spill", "weather", "flood", "icy", "slippery", "environmental", "lightning",
               "high wind", "storm"),
              ("environmental hazard", "slippery surface")),
    _TypeRule("Tech Issue", TIER_GENERAL, 420,
              ("tech issue", "technical issue", "technical problem", "equipment failure",
               "system down", "power cut", "power outage", "radio failure"),
              ("equipment failure", "power outage")),
    _TypeRule("Site Issue", TIER_GENERAL, 430,
              ("site issue", "damage", "broken", "hazard", "maintenance", "barrier down"),
              ("site damage", "maintenance required")),
    _TypeRule("Noise Complaint", TIER_GENERAL, 440,
              ("noise", "too loud", "sound complaint", "volume"),
              ("noise complaint",)),
    _TypeRule("Accreditation", TIER_GENERAL, 450,
              ("accreditation", "pass issue", "credential", "wristband"),
              ("accreditation issue",)),
    _TypeRule("Staffing", TIER_GENERAL, 460,
              ("staffing", "staff shortage", "understaffed", "short staffed", "staff issue"),
              ("staff shortage",)),
    _TypeRule("Accessibility", TIER_GENERAL, 470,
              ("accessibility", "disabled access", "wheelchair", "accessible"),
              ("wheelchair access",)),
    _TypeRule("Animal Incident", TIER_GENERAL, 480,
              ("animal", "dog", "wildlife"),
              ("animal incident", "dog on site")),

    # Operational
    _TypeRule("Artist Movement", TIER_OPERATIONAL, 500,
              ("artist moving", "artist movement", "escort artist", "artist escort",
               "artist arriving", "artist leaving", "band move", "artist en route")),
    _TypeRule("Artist On Stage", TIER_OPERATIONAL, 510,
              ("artist on stage", "on stage", "onstage", "taking the stage", "taking stage",
               "now performing", "started performing", "main act started", "show started"),
              ("artist on stage",)),
    _TypeRule("Artist Off Stage", TIER_OPERATIONAL, 520,
              ("artist off stage", "off stage", "offstage", "left the stage", "left stage",
               "finished performing", "set finished", "show ended", "performance ended"),
              ("artist off stage",)),
    _TypeRule("Showdown", TIER_OPERATIONAL, 525,
              ("showdown", "show down")),
    _TypeRule("Event Timing", TIER_OPERATIONAL, 530,
              ("timing", "delayed", "running late", "running behind", "postponed",
               "doors open", "doors green", "venue open", "venue clear"),
              ("event delayed", "timing change")),
    _TypeRule("Timings", TIER_OPERATIONAL, 540,
              ("set time", "stage time", "schedule"),
              ("set times", "stage times", "schedule update")),
    _TypeRule("Sit Rep", TIER_OPERATIONAL, 550,
              ("sit rep", "sitrep", "situation report", "status update", "update",
               "all quiet", "all clear"),
              ("situation report", "status update", "operational update")),
    _TypeRule("Attendance", TIER_OPERATIONAL, 560,
              ("attendance", "current numbers", "head count", "headcount"),
              ("current attendance", "attendance figure", "attendance count")),
]

# Clusters that are always offered together for human correction.
_ALTERNATIVE_CLUSTERS: List[Tuple[str, ...]] = [
    ("Medical", "Welfare", "Alcohol / Drug Related"),
    ("Suspicious Behaviour", "Theft", "Hostile Act", "Ejection"),
    ("Crowd Management", "Queue Build-Up", "Welfare"),
    ("Tech Issue", "Site Issue", "Environmental"),
    ("Fire", "Suspected Fire", "Fire Alarm"),
]


def _validate_rules() -> None:
    labels = [r.label for r in _RULES]
    require_known_types(labels, "incident type ladder")
    require_known_types((t for c in _ALTERNATIVE_CLUSTERS for t in c), "alternative clusters")
    dupes = sorted({l for l in labels if labels.count(l) > 1})
    if dupes:
        raise ValueError(f"Duplicate incident type rules: {dupes}")
    ranks = [r.rank for r in _RULES]
    if len(set(ranks)) != len(ranks):
        raise ValueError("Incident type rule ranks must be unique")


_validate_rules()
_RULES.sort(key=lambda r: (r.tier, r.rank))


def _score(lowered: str, rule: _TypeRule) -> Tuple[float, List[str]]:
    phrases = contains_any(lowered, rule.phrases)
    keywords = contains_any(lowered, rule.keywords)
    points = PHRASE_POINTS * len(phrases) + KEYWORD_POINTS * len(keywords)
    for _ in contains_any(lowered, rule.exclude):
        points *= EXCLUDE_FACTOR
    matched = phrases + [k for k in keywords if k not in phrases]
    return points, matched


def _confidence(tier: int, points: float) -> float:
    low, high = _TIER_BANDS[tier]
    density = min(points, SATURATION_POINTS) / SATURATION_POINTS
    return round(low + (high - low) * density, 4)


def get_all_incident_type_matches(text: str) -> List[IncidentTypeMatch]:
    """Every matching type, most confident first."""
    lowered = as_text(text).lower()
    if not lowered.strip():
        return []

    scored = []
    for rule in _RULES:
        points, matched = _score(lowered, rule)
        if points <= 0:
            continue
        match = IncidentTypeMatch(
            type=rule.label,
            confidence=_confidence(rule.tier, points),
            matched_keywords=matched,
            priority=rule.priority,
        )
        scored.append((rule.rank, match))

    scored.sort(key=lambda t: (-t[1].confidence, t[0]))
    return [m for _, m in scored]


def detect_incident_type(text: str) -> str:
    matches = get_all_incident_type_matches(text)
    if not matches:
        return ""
    log.debug("incident type %s (%.2f) from %s", matches[0].type, matches[0].confidence,
              matches[0].matched_keywords)
    return matches[0].type


def detect_incident_type_with_confidence(text: str) -> IncidentTypeResult:
    """``MATCH_CONFIDENCE`` on a keyword hit, ``FALLBACK_CONFIDENCE`` with an empty type otherwise."""
    best = detect_incident_type(text)
    if not best:
        return IncidentTypeResult(type="", confidence=FALLBACK_CONFIDENCE)
    return IncidentTypeResult(type=best, confidence=MATCH_CONFIDENCE)


def get_alternative_incident_types(text: str) -> List[str]:
    """Other plausible types for the reviewer: runner-up matches, then related clusters."""
    matches = get_all_incident_type_matches(text)
    if not matches:
        return []

    primary = matches[0].type
    matched_types = [m.type for m in matches]
    out: List[str] = []

    for t in matched_types[1:4]:
        if t not in out:
            out.append(t)

    for cluster in _ALTERNATIVE_CLUSTERS:
        if not any(t in cluster for t in matched_types):
            continue
        for t in cluster:
            if t != primary and t not in out:
                out.append(t)

    return out[:MAX_ALTERNATIVES]
