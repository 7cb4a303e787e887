"""Callsign detection from free-text radio / incident reports.

Strategies are tried in a fixed order and the first one with any match wins:

1. standard alphanumeric (``S1``, ``AB12``, ``S-1``, ``A/2``)
2. NATO phonetic (``Sierra 12`` -> ``S12``)
3. role prefix (``Security 5`` -> ``S5``, ``Medic 1`` -> ``M1``)
4. control (``Control``, ``Event Control`` -> ``Control``)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from incident_signals.common.logging import get_logger
from incident_signals.common.text import as_text
from incident_signals.detection import patterns as P
from incident_signals.detection.types import CallsignResult

log = get_logger("callsign")

CONTEXT_CONFIDENCE = 0.95


@dataclass(frozen=True)
class _Strategy:
    name: str
    pattern: re.Pattern
    normalize: Callable[[re.Match], str]
    base_confidence: float


def _standard(m: re.Match) -> str:
    return m.group(1).upper() + m.group(2)


def _nato(m: re.Match) -> str:
    return P.NATO_ALPHABET[m.group(1).lower()] + m.group(2)


def _role(m: re.Match) -> str:
    return P.ROLE_CODES[m.group(1).lower()] + m.group(2)


def _control(m: re.Match) -> str:
    return P.CONTROL_CALLSIGN


_STRATEGIES: List[_Strategy] = [
    _Strategy("standard", P.CALLSIGN_STANDARD, _standard, 0.8),
    _Strategy("nato", P.CALLSIGN_NATO, _nato, 0.85),
    _Strategy("role", P.CALLSIGN_ROLE, _role, 0.8),
    _Strategy("control", P.CALLSIGN_CONTROL, _control, 0.7),
]


def _has_context(text: str, m: re.Match) -> bool:
    before = text[:m.start()]
    after = text[m.end():]
    return bool(P.CALLSIGN_CUE_BEFORE.search(before) or P.CALLSIGN_CUE_AFTER.search(after))


def detect_callsign_with_confidence(text: str) -> Optional[CallsignResult]:
    """First callsign by strategy precedence, or ``None`` when nothing matches."""
    text = as_text(text)
    if not text.strip():
        return None

    for strategy in _STRATEGIES:
        m = strategy.pattern.search(text)
        if m is None:
            continue
        callsign = strategy.normalize(m)
        confidence = CONTEXT_CONFIDENCE if _has_context(text, m) else strategy.base_confidence
        log.debug("callsign %s via %s (%.2f)", callsign, strategy.name, confidence)
        return CallsignResult(callsign=callsign, confidence=confidence)

    return None


def detect_callsign(text: str) -> str:
    result = detect_callsign_with_confidence(text)
    return result.callsign if result else ""


def extract_all_callsigns(text: str) -> List[str]:
    """Every distinct callsign mentioned, across all strategies."""
    text = as_text(text)
    found: List[str] = []
    for strategy in _STRATEGIES:
        for m in strategy.pattern.finditer(text):
            callsign = strategy.normalize(m)
            if callsign not in found:
                found.append(callsign)
    return found


def normalize_callsign(callsign: str) -> str:
    """Canonical form of a single callsign token. Idempotent.

    Standard forms are upcased with separators removed, NATO words and role
    prefixes collapse to their letter, ``control`` becomes ``Control``. Anything
    unrecognised comes back upcased.
    """
    token = as_text(callsign).strip().upper()
    if not token:
        return ""

    if P.NORMALIZE_CONTROL.match(token):
        return P.CONTROL_CALLSIGN

    m = P.NORMALIZE_NATO.match(token)
    if m:
        return P.NATO_ALPHABET[m.group(1).lower()] + m.group(2)

    m = P.NORMALIZE_ROLE.match(token)
    if m:
        return P.ROLE_CODES[m.group(1).lower()] + m.group(2)

    m = P.NORMALIZE_STANDARD.match(token)
    if m:
        return m.group(1).upper() + m.group(2)

    return token
