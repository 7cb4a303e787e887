"""Batch classification of exported incident logs."""

from __future__ import annotations

from typing import List, Optional

import pandas as pd

from incident_signals.common.logging import get_logger
from incident_signals.detection.analysis import analyze_incident_text

log = get_logger("log_export")

TEXT_COLUMN_CANDIDATES = ("occurrence", "ai_input", "text", "description")

CLASSIFIED_COLUMNS = [
    "callsign",
    "incident_type",
    "type_confidence",
    "priority",
    "priority_confidence",
]


def _require_cols(df: pd.DataFrame, cols: List[str]):
    missing = [c for c in cols if c and c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}\nAvailable columns (sample): {list(df.columns)[:50]}")


def find_text_column(df: pd.DataFrame) -> Optional[str]:
    for col in TEXT_COLUMN_CANDIDATES:
        if col in df.columns:
            return col
    return None


def load_incident_log(path: str, text_col: Optional[str] = None) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    col = text_col or find_text_column(df)
    if col is None:
        raise ValueError(
            f"No incident text column found; expected one of {list(TEXT_COLUMN_CANDIDATES)}\n"
            f"Available columns (sample): {list(df.columns)[:50]}"
        )
    _require_cols(df, [col])
    log.info("Loaded %d log entries from %s (text column %r)", len(df), path, col)
    return df


def _classify_row(text: str) -> dict:
    a = analyze_incident_text(text)
    return {
        "callsign": a.callsign,
        "incident_type": a.incident_type,
        "type_confidence": a.type_confidence,
        "priority": a.priority,
        "priority_confidence": a.priority_confidence,
    }


def classify_frame(df: pd.DataFrame, text_col: Optional[str] = None) -> pd.DataFrame:
    """Copy of *df* with the detector outputs appended as columns."""
    col = text_col or find_text_column(df)
    if col is None:
        raise ValueError(f"No incident text column found; expected one of {list(TEXT_COLUMN_CANDIDATES)}")
    _require_cols(df, [col])

    out = df.copy()
    rows = [_classify_row(t) for t in out[col].fillna("").astype(str)]
    classified = pd.DataFrame(rows, columns=CLASSIFIED_COLUMNS, index=out.index)
    for c in CLASSIFIED_COLUMNS:
        out[c] = classified[c]

    log.info(
        "Classified %d entries: urgent=%d high=%d untyped=%d",
        len(out),
        int((out["priority"] == "urgent").sum()),
        int((out["priority"] == "high").sum()),
        int((out["incident_type"] == "").sum()),
    )
    return out


def incident_type_counts(df: pd.DataFrame, top_n: int = 10) -> pd.DataFrame:
    """Most frequent incident types: columns ``incident_type``, ``count``, ``share``."""
    _require_cols(df, ["incident_type"])
    typed = df.loc[df["incident_type"].fillna("") != "", "incident_type"]
    if typed.empty:
        return pd.DataFrame(columns=["incident_type", "count", "share"])

    counts = typed.value_counts()
    out = counts.rename_axis("incident_type").reset_index(name="count")
    out["share"] = (out["count"] / len(typed)).round(4)
    out = out.sort_values(["count", "incident_type"], ascending=[False, True]).reset_index(drop=True)
    return out.head(top_n)
