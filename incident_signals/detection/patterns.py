"""Pattern library: compiled regexes and keyword lists shared by the detectors.

Everything here is built once at import and never mutated.
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

from incident_signals.detection.vocabulary import (
    PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_URGENT,
)

# ---- Callsigns ----
# ASCII-only so a detected callsign is always [A-Z]{1,2}\d+ or "Control".

CALLSIGN_STANDARD = re.compile(r"\b([A-Z]{1,2})[-/]?(\d+)\b", re.A)

NATO_ALPHABET: Dict[str, str] = {
    "alpha": "A", "bravo": "B", "charlie": "C", "delta": "D", "echo": "E",
    "foxtrot": "F", "golf": "G", "hotel": "H", "india": "I", "juliet": "J",
    "juliett": "J", "kilo": "K", "lima": "L", "mike": "M", "november": "N",
    "oscar": "O", "papa": "P", "quebec": "Q", "romeo": "R", "sierra": "S",
    "tango": "T", "uniform": "U", "victor": "V", "whiskey": "W", "whisky": "W",
    "xray": "X", "x-ray": "X", "yankee": "Y", "zulu": "Z",
}

_NATO_WORDS = "|".join(sorted((re.escape(w) for w in NATO_ALPHABET), key=len, reverse=True))

CALLSIGN_NATO = re.compile(r"\b(" + _NATO_WORDS + r")[\s-]*(\d+)\b", re.I | re.A)

ROLE_CODES: Dict[str, str] = {
    "security": "S",
    "sec": "S",
    "staff": "S",
    "supervisor": "S",
    "medical": "M",
    "medic": "M",
    "med": "M",
    "manager": "M",
    "response": "R",
    "admin": "A",
}

_ROLE_WORDS = "|".join(sorted(ROLE_CODES, key=len, reverse=True))

CALLSIGN_ROLE = re.compile(r"\b(" + _ROLE_WORDS + r")[\s-]*(\d+)\b", re.I | re.A)

# "crowd control" and similar are activities, not the control room.
CALLSIGN_CONTROL = re.compile(
    r"(?<!crowd )(?<!access )(?<!traffic )(?<!quality )\b(?:event\s+)?control\b",
    re.I | re.A,
)

CONTROL_CALLSIGN = "Control"

# Cue words that sit right next to a callsign when it is the reporting unit.
CALLSIGN_CUE_BEFORE = re.compile(
    r"\b(?:reported\s+by|by|from|to|contact|call|callsign)\s*[:,]?\s*$",
    re.I,
)
CALLSIGN_CUE_AFTER = re.compile(
    r"^\s*[:,]?\s*(?:responding|reporting|reports|reported|on\s+scene|at|requesting"
    r"|en\s+route|attending|on\s+duty)\b",
    re.I,
)

# Anchored forms used by normalize_callsign.
NORMALIZE_STANDARD = re.compile(r"^([A-Z]{1,2})\s*[-/]?\s*(\d+)$", re.I | re.A)
NORMALIZE_NATO = re.compile(r"^(" + _NATO_WORDS + r")\s*[-/]?\s*(\d+)$", re.I | re.A)
NORMALIZE_ROLE = re.compile(r"^(" + _ROLE_WORDS + r")\s*[-/]?\s*(\d+)$", re.I | re.A)
NORMALIZE_CONTROL = re.compile(r"^(?:event\s+)?control$", re.I | re.A)

# ---- Attendance ----

# Comma-grouped first ("3,500"), then plain digits. Digits glued to letters
# ("A2", "S1") are callsigns, not figures.
ATTENDANCE_NUMBER = re.compile(r"\b(?:\d{1,3}(?:,\d{3})+|\d+)\b", re.A)

# A figure right after the attendance wording wins over earlier numbers.
ATTENDANCE_FIGURE = re.compile(
    r"\b(?:attendance|head\s?count|current\s+numbers)\b\D{0,20}?"
    r"\b(\d{1,3}(?:,\d{3})+|\d+)\b",
    re.I | re.A,
)

# ---- Priority ----

LEVEL_WEIGHTS: Dict[str, int] = {
    PRIORITY_URGENT: 4,
    PRIORITY_HIGH: 3,
    PRIORITY_MEDIUM: 2,
    PRIORITY_LOW: 1,
}

PRIORITY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    PRIORITY_URGENT: (
        "urgent", "critical", "emergency", "immediate", "life threatening",
        "life-threatening", "serious injury", "unconscious", "unresponsive",
        "not breathing", "cardiac", "heart attack", "collapse", "bomb", "terror", "weapon",
        "firearm", "gunshot", "shooting", "stabbing", "stabbed", "knife",
        "fire", "flames", "evacuation", "evacuate", "show stop", "code red",
    ),
    PRIORITY_HIGH: (
        "high priority", "serious", "major", "significant", "security",
        "medical", "injury", "injured", "bleeding", "fight", "hostile",
        "aggressive", "breach", "surge", "crush", "missing child", "assault",
        "attack", "backup",
    ),
    PRIORITY_MEDIUM: (
        "moderate", "attention needed", "issue", "problem", "concern",
        "assistance", "support", "help", "drunk", "intoxicated", "theft",
        "stolen", "complaint", "welfare", "suspicious", "ejected", "refused",
    ),
    PRIORITY_LOW: (
        "low priority", "minor", "mild", "routine", "information", "update",
        "lost property", "found", "timing", "attendance", "head count",
        "noise", "all quiet", "all clear", "situation report", "sit rep",
        "on stage", "off stage",
    ),
}

QUANTITY_COUNT = re.compile(
    r"\b(\d+)\s+(people|persons|individuals|injured|casualties|patients|fans|affected)\b",
    re.I | re.A,
)
QUANTITY_MULTIPLE = re.compile(
    r"\b(multiple|several|many|numerous)\s+(people|persons|individuals|casualties|patients|fans)\b",
    re.I,
)
TEMPORAL_URGENCY = re.compile(
    r"\b(immediate|immediately|urgent|urgently|now|asap|right away)\b",
    re.I,
)
ESCALATION = re.compile(
    r"\b(escalating|worsening|deteriorating|spreading|ongoing|in progress)\b",
    re.I,
)
