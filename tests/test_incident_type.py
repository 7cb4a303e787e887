"""Keyword-ladder incident type classification."""

from __future__ import annotations

import pytest

from incident_signals.detection.incident_type import (
    FALLBACK_CONFIDENCE, MATCH_CONFIDENCE, detect_incident_type,
    detect_incident_type_with_confidence, get_all_incident_type_matches,
    get_alternative_incident_types,
)
from incident_signals.detection.vocabulary import ALL_INCIDENT_TYPES


class TestSafetyCritical:

    @pytest.mark.parametrize("text,expected", [
        ("Fire in building 3", "Fire"),
        ("Flames visible in backstage area", "Fire"),
        ("Smoke detected in equipment room", "Suspected Fire"),
        ("Burning smell in venue", "Suspected Fire"),
        ("Fire alarm activated in block C", "Fire Alarm"),
        ("Evacuation of main stage area", "Evacuation"),
        ("Need to evacuate crowd", "Evacuation"),
        ("Person with knife spotted", "Weapon Related"),
        ("Armed individual at gate", "Weapon Related"),
        ("Bomb threat called in", "Counter-Terror Alert"),
    ])
    def test_detected(self, text, expected):
        assert detect_incident_type(text) == expected

    def test_safety_outranks_operational(self):
        assert detect_incident_type("Smoke and attendance numbers at gate") == "Suspected Fire"


class TestMedicalAndSecurity:

    @pytest.mark.parametrize("text,expected", [
        ("Medical incident at main stage, person collapsed", "Medical"),
        ("First aid required at gate A", "Medical"),
        ("Person injured near stage", "Medical"),
        ("Fight broke out in crowd", "Fight"),
        ("Physical altercation at bar", "Fight"),
        ("Theft reported at merchandise stand", "Theft"),
        ("Pickpocket in crowd", "Theft"),
        ("Person ejected from venue", "Ejection"),
        ("Removed from site for disorderly conduct", "Ejection"),
    ])
    def test_detected(self, text, expected):
        assert detect_incident_type(text) == expected


class TestCrowdAndOperational:

    @pytest.mark.parametrize("text,expected", [
        ("Crowd surge at barrier", "Crowd Management"),
        ("Dense crowd at main stage", "Crowd Management"),
        ("Queue management needed at gate", "Crowd Management"),
        ("Current attendance is 5000", "Attendance"),
        ("Head count at 3500", "Attendance"),
        ("Situation report for control", "Sit Rep"),
        ("Status update from security", "Sit Rep"),
    ])
    def test_detected(self, text, expected):
        assert detect_incident_type(text) == expected


class TestMatches:

    def test_multiple_matches_sorted(self):
        matches = get_all_incident_type_matches("Medical incident with crowd surge")
        assert len(matches) > 1
        assert matches[0].type == "Medical"
        confidences = [m.confidence for m in matches]
        assert confidences == sorted(confidences, reverse=True)

    def test_head_matches_detect(self):
        text = "Fight near bar, person injured and bleeding"
        assert get_all_incident_type_matches(text)[0].type == detect_incident_type(text)

    def test_match_fields(self):
        match = get_all_incident_type_matches("Fire in building 3")[0]
        assert "fire" in match.matched_keywords
        assert match.priority == "urgent"
        assert 0.85 < match.confidence <= 1.0

    def test_exclude_keyword_weakens_match(self):
        matches = {m.type: m.confidence for m in get_all_incident_type_matches("Fire alarm activated")}
        assert matches["Fire Alarm"] > matches["Fire"]

    def test_labels_are_known(self):
        for m in get_all_incident_type_matches("Fight, fire, smoke, theft, crowd, update, dog"):
            assert m.type in ALL_INCIDENT_TYPES

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty(self, value):
        assert get_all_incident_type_matches(value) == []
        assert detect_incident_type(value) == ""

    def test_attendance_among_matches(self):
        text = "Situation report from Alpha 2: current attendance 3500, all quiet, artist on stage"
        types = [m.type for m in get_all_incident_type_matches(text)]
        assert "Attendance" in types
        assert "Sit Rep" in types


class TestWithConfidence:

    def test_match(self):
        result = detect_incident_type_with_confidence("Medical emergency, person collapsed")
        assert result.type == "Medical"
        assert result.confidence == MATCH_CONFIDENCE

    def test_no_match(self):
        result = detect_incident_type_with_confidence("zzz")
        assert result.type == ""
        assert result.confidence == FALLBACK_CONFIDENCE


class TestAlternatives:

    def test_related_types_offered(self):
        alternatives = get_alternative_incident_types("Person hurt and distressed")
        assert "Welfare" in alternatives
        assert "Medical" not in alternatives

    def test_cluster_members_without_direct_hit(self):
        alternatives = get_alternative_incident_types("Person acting strangely near gate")
        assert "Theft" in alternatives
        assert "Suspicious Behaviour" not in alternatives

    def test_capped(self):
        text = "Fire, smoke, fire alarm, medical, fight, theft, crowd, spill, broken, update"
        assert len(get_alternative_incident_types(text)) <= 5

    def test_no_match_no_alternatives(self):
        assert get_alternative_incident_types("") == []
        assert get_alternative_incident_types("zzz") == []
