"""Priority scoring: keyword voting, type bounds and confidence boosts."""

from __future__ import annotations

import pytest

from incident_signals.detection.priority import (
    detect_priority, detect_priority_optimized, detect_priority_with_confidence,
)
from incident_signals.detection.vocabulary import PRIORITY_LEVELS


class TestKeywordVoting:

    @pytest.mark.parametrize("text,expected", [
        ("Life threatening injury", "urgent"),
        ("Person not breathing", "urgent"),
        ("Bomb threat at venue", "urgent"),
        ("Fight in progress", "high"),
        ("Hostile person at entrance", "high"),
        ("Person injured and bleeding", "high"),
        ("Drunk person causing disturbance", "medium"),
        ("Theft reported at merchandise", "medium"),
        ("Lost property at gate A", "low"),
        ("Attendance count is 4000", "low"),
    ])
    def test_level(self, text, expected):
        assert detect_priority(text) == expected

    def test_no_keywords_defaults_to_medium(self):
        result = detect_priority_optimized("Something happening")
        assert result.priority == "medium"
        assert result.confidence == 0.3
        assert "defaulting to medium" in result.reasoning

    def test_tie_goes_to_more_severe(self):
        # 3 urgent hits (12) against 4 high hits (12)
        result = detect_priority_optimized("critical cardiac unconscious serious major security backup")
        assert result.priority == "urgent"
        assert "tie broken" in result.reasoning

    def test_medium_low_tie(self):
        assert detect_priority("minor update concern") == "medium"

    def test_signals_are_tagged(self):
        result = detect_priority_optimized("Fight in progress")
        assert "high:fight" in result.signals
        assert "escalation:in progress" in result.signals


class TestTypeBounds:

    @pytest.mark.parametrize("text,incident_type,expected", [
        ("Fire outbreak", "Fire", "urgent"),
        ("mild inconvenience", "Fire", "urgent"),
        ("Incident at gate", "Medical", "high"),
        ("URGENT URGENT ASAP", "Attendance", "low"),
        ("Person ejected", "Ejection", "medium"),
        ("Artist on stage", "Artist On Stage", "low"),
        ("Timing update", "Event Timing", "low"),
    ])
    def test_bounded(self, text, incident_type, expected):
        assert detect_priority(text, incident_type) == expected

    def test_floor_reasoning(self):
        result = detect_priority_optimized("mild inconvenience", "Fire")
        assert "incident type floor applied" in result.reasoning
        assert result.confidence >= 0.75
        assert "type:Fire" in result.signals

    def test_ceiling_reasoning(self):
        result = detect_priority_optimized("URGENT URGENT ASAP", "Attendance")
        assert "caps priority at low" in result.reasoning

    def test_agreement_reasoning(self):
        result = detect_priority_optimized("Multiple people injured in crowd surge", "Medical")
        assert result.priority == "high"
        assert result.confidence > 0.7
        assert result.signals
        assert "incident type Medical agrees with high" in result.reasoning

    def test_unbounded_type(self):
        result = detect_priority_optimized("Fight in progress", "Made Up Type")
        assert result.priority == "high"
        assert "sets no priority bounds" in result.reasoning

    def test_type_only(self):
        assert detect_priority("", "Fire") == "urgent"
        assert detect_priority("", "Attendance") == "low"


class TestConfidence:

    def test_quantity_boost(self):
        single = detect_priority_optimized("Person injured")
        many = detect_priority_optimized("15 people injured")
        assert single.priority == many.priority == "high"
        assert many.confidence > single.confidence
        assert "quantity:15 people" in many.signals

    def test_temporal_boost(self):
        base = detect_priority_optimized("Medical incident, response required")
        now = detect_priority_optimized("Medical incident, response required now")
        assert base.priority == now.priority == "high"
        assert now.confidence > base.confidence
        assert "temporal:now" in now.signals

    def test_empty_input(self):
        result = detect_priority_optimized("")
        assert result.priority == "medium"
        assert result.confidence == 0.3
        assert result.signals == []

    def test_with_confidence(self):
        result = detect_priority_with_confidence("Emergency situation")
        assert result.priority in PRIORITY_LEVELS
        assert 0 < result.confidence <= 1

    @pytest.mark.parametrize("text", [
        "URGENT emergency critical now immediately asap 50 people escalating",
        "Multiple people, several fans, 200 casualties, ongoing, right away",
        "minor",
    ])
    def test_confidence_bounded(self, text):
        result = detect_priority_optimized(text, "Fire")
        assert 0.0 <= result.confidence <= 1.0
