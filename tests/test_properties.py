"""Properties every detector keeps on hostile or odd input."""

from __future__ import annotations

import re

import pytest

from incident_signals.detection.analysis import analyze_incident_text
from incident_signals.detection.callsign import (
    detect_callsign, detect_callsign_with_confidence, extract_all_callsigns,
    normalize_callsign,
)
from incident_signals.detection.incident_logic import detect_incident_from_text
from incident_signals.detection.incident_type import (
    detect_incident_type, get_all_incident_type_matches,
)
from incident_signals.detection.priority import detect_priority_optimized
from incident_signals.detection.vocabulary import ALL_INCIDENT_TYPES, PRIORITY_LEVELS

CALLSIGN_SHAPE = re.compile(r"^(?:[A-Z]{1,2}\d+|Control)$")

CORPUS = [
    None,
    "",
    "   \t\n",
    "!!!???...,,,;;;",
    "日本語のテキスト 火事",
    "Привет мир, пожар",
    "🔥🔥🔥 🚑",
    "\x00\x01\x02",
    "1234567890",
    "a" * 100000,
    "S1 " * 2000,
    "Fire " * 500 + "minor",
    "Medical incident at main stage, female collapsed and not breathing, reported by S1",
    "Situation report from Alpha 2: current attendance 3500, all quiet, artist on stage",
]


@pytest.mark.parametrize("text", CORPUS, ids=[f"case{i}" for i in range(len(CORPUS))])
class TestDetectorProperties:

    def test_priority_in_vocabulary(self, text):
        result = detect_priority_optimized(text)
        assert result.priority in PRIORITY_LEVELS
        assert 0.0 <= result.confidence <= 1.0

    def test_callsign_shape(self, text):
        callsign = detect_callsign(text)
        assert callsign == "" or CALLSIGN_SHAPE.match(callsign)
        result = detect_callsign_with_confidence(text)
        if result is not None:
            assert 0.0 <= result.confidence <= 1.0
        for c in extract_all_callsigns(text):
            assert CALLSIGN_SHAPE.match(c)

    def test_matches_sorted_and_known(self, text):
        matches = get_all_incident_type_matches(text)
        confidences = [m.confidence for m in matches]
        assert confidences == sorted(confidences, reverse=True)
        for m in matches:
            assert m.type in ALL_INCIDENT_TYPES
            assert 0.0 <= m.confidence <= 1.0
        assert detect_incident_type(text) == (matches[0].type if matches else "")

    def test_logic_result_known(self, text):
        result = detect_incident_from_text(text)
        if not result.is_empty:
            assert result.incident_type in ALL_INCIDENT_TYPES
            assert result.priority in PRIORITY_LEVELS

    def test_analysis_total(self, text):
        analysis = analyze_incident_text(text)
        assert analysis.priority in PRIORITY_LEVELS
        assert analysis.incident_type == "" or analysis.incident_type in ALL_INCIDENT_TYPES


@pytest.mark.parametrize("text", [t for t in CORPUS if t is None or len(t) < 1000], ids=str)
def test_normalize_idempotent(text):
    once = normalize_callsign(text)
    assert normalize_callsign(once) == once


@pytest.mark.parametrize("text", ["mild inconvenience", "", "all quiet", "minor"])
def test_urgent_floor_always_applies(text):
    for label in ("Fire", "Evacuation", "Weapon Related", "Counter-Terror Alert"):
        assert detect_priority_optimized(text, label).priority == "urgent"


@pytest.mark.parametrize("text", ["URGENT URGENT ASAP", "critical emergency fire", ""])
def test_low_ceiling_always_applies(text):
    for label in ("Attendance", "Sit Rep", "Artist On Stage", "Timings"):
        assert detect_priority_optimized(text, label).priority == "low"


class _Unprintable:
    def __str__(self):
        raise RuntimeError("no text")


def test_non_string_input_coerced():
    assert detect_priority_optimized(12345).priority == "medium"
    assert detect_callsign(12345) == ""


def test_failing_str_propagates():
    with pytest.raises(RuntimeError):
        detect_priority_optimized(_Unprintable())
