"""Batch classification of incident log exports with pandas."""

from __future__ import annotations

import pandas as pd
import pytest

from incident_signals.data.log_export import (
    CLASSIFIED_COLUMNS, classify_frame, find_text_column, incident_type_counts,
    load_incident_log,
)

REPORTS = [
    "Current attendance: 3,500",
    "Fight broke out near Bar 3, multiple people involved, Security 5 requesting backup",
    "",
    "Medical incident at main stage, female collapsed and not breathing, reported by S1",
]


@pytest.fixture
def log_df():
    return pd.DataFrame({"log_number": ["1", "2", "3", "4"], "occurrence": REPORTS})


class TestClassifyFrame:

    def test_columns_added(self, log_df):
        out = classify_frame(log_df)
        for col in CLASSIFIED_COLUMNS:
            assert col in out.columns
        assert list(out["incident_type"]) == ["Attendance", "Fight", "", "Medical"]
        assert list(out["priority"]) == ["low", "high", "medium", "urgent"]
        assert list(out["callsign"]) == ["", "S5", "", "S1"]

    def test_input_untouched(self, log_df):
        classify_frame(log_df)
        assert list(log_df.columns) == ["log_number", "occurrence"]

    def test_explicit_text_column(self):
        df = pd.DataFrame({"notes": ["Fire near the main stage"]})
        out = classify_frame(df, text_col="notes")
        assert out.loc[0, "incident_type"] == "Fire"

    def test_missing_text_column(self):
        with pytest.raises(ValueError):
            classify_frame(pd.DataFrame({"notes": ["x"]}))
        with pytest.raises(ValueError, match="Missing required columns"):
            classify_frame(pd.DataFrame({"notes": ["x"]}), text_col="body")


class TestLoad:

    def test_find_text_column(self):
        assert find_text_column(pd.DataFrame(columns=["id", "text", "description"])) == "text"
        assert find_text_column(pd.DataFrame(columns=["id"])) is None

    def test_load_csv(self, tmp_path, log_df):
        path = tmp_path / "log.csv"
        log_df.to_csv(path, index=False)
        df = load_incident_log(str(path))
        assert len(df) == 4
        assert df.loc[2, "occurrence"] == ""

    def test_load_csv_without_text(self, tmp_path):
        path = tmp_path / "log.csv"
        pd.DataFrame({"id": ["1"]}).to_csv(path, index=False)
        with pytest.raises(ValueError, match="No incident text column"):
            load_incident_log(str(path))


class TestTypeCounts:

    def test_counts_and_share(self):
        df = pd.DataFrame({"incident_type": ["Medical", "Medical", "Fight", ""]})
        out = incident_type_counts(df)
        assert list(out["incident_type"]) == ["Medical", "Fight"]
        assert list(out["count"]) == [2, 1]
        assert out.loc[0, "share"] == pytest.approx(0.6667)

    def test_top_n(self, log_df):
        out = incident_type_counts(classify_frame(log_df), top_n=2)
        assert len(out) == 2

    def test_nothing_typed(self):
        out = incident_type_counts(pd.DataFrame({"incident_type": ["", ""]}))
        assert out.empty
        assert list(out.columns) == ["incident_type", "count", "share"]
