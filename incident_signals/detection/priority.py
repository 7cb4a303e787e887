"""Priority scoring by weighted keyword voting, bounded by incident type.

Each level owns a keyword list and an integer weight (urgent=4 .. low=1).
A level scores ``hits * weight``; the best score wins and ties go to the
more severe level. No hits at all means ``medium``: an under-described
incident is not quietly pushed down the queue.

The incident type, when known, clamps the keyword result into the type's
``[floor, ceiling]``. Quantity, temporal and escalation cues only move the
confidence, never the level.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from incident_signals.common.logging import get_logger
from incident_signals.common.text import as_text, contains_any
from incident_signals.detection import patterns as P
from incident_signals.detection.types import PriorityConfidence, PriorityResult
from incident_signals.detection.vocabulary import (
    DEFAULT_PRIORITY, PRIORITY_LEVELS, bounds_for_type, priority_rank,
)

log = get_logger("priority")

NO_SIGNAL_CONFIDENCE = 0.3
FLOOR_CONFIDENCE = 0.75
CEILING_CONFIDENCE = 0.85


def _keyword_scores(lowered: str) -> Dict[str, Tuple[int, List[str]]]:
    out = {}
    for level in PRIORITY_LEVELS:
        matched = contains_any(lowered, P.PRIORITY_KEYWORDS[level])
        out[level] = (len(matched) * P.LEVEL_WEIGHTS[level], matched)
    return out


def _keyword_winner(scores: Dict[str, Tuple[int, List[str]]]) -> Optional[str]:
    best = max(PRIORITY_LEVELS, key=lambda lvl: (scores[lvl][0], priority_rank(lvl)))
    return best if scores[best][0] > 0 else None


def _keyword_confidence(winner: str, scores: Dict[str, Tuple[int, List[str]]],
                        reasoning: List[str]) -> float:
    score, matched = scores[winner]
    runner_up = max(scores[lvl][0] for lvl in PRIORITY_LEVELS if lvl != winner)
    confidence = min(0.8, 0.5 + 0.1 * len(matched))

    noun = "keyword" if len(matched) == 1 else "keywords"
    reasoning.append(f"matched {len(matched)} {winner} {noun}")

    if score == runner_up:
        reasoning.append("tie broken toward higher severity")
        confidence -= 0.1
    elif score > 1.5 * runner_up:
        confidence += 0.1
    return confidence


def _boosts(text: str, signals: List[str], reasoning: List[str]) -> float:
    boost = 0.0

    m = P.QUANTITY_COUNT.search(text)
    quantity = False
    if m:
        count = int(m.group(1))
        if count > 10:
            boost += 0.15
            quantity = True
        elif count > 1:
            boost += 0.1
            quantity = True
        if quantity:
            signals.append(f"quantity:{count} {m.group(2).lower()}")
    m = P.QUANTITY_MULTIPLE.search(text)
    if m:
        boost += 0.1
        quantity = True
        signals.append(f"quantity:{m.group(1).lower()} {m.group(2).lower()}")
    if quantity:
        reasoning.append("boosted by quantity signal")

    temporal = []
    for word in P.TEMPORAL_URGENCY.findall(text):
        word = word.lower()
        if word not in temporal:
            temporal.append(word)
    if temporal:
        boost += 0.1
        signals.extend(f"temporal:{w}" for w in temporal)
        reasoning.append("boosted by temporal urgency signal")

    m = P.ESCALATION.search(text)
    if m:
        boost += 0.05
        signals.append(f"escalation:{m.group(1).lower()}")
        reasoning.append("boosted by escalation signal")

    return boost


def detect_priority_optimized(text: str, incident_type: Optional[str] = None) -> PriorityResult:
    """Priority with confidence, the signals that fired and a short audit trail."""
    text = as_text(text)
    incident_type = as_text(incident_type).strip()

    if not text.strip() and not incident_type:
        return PriorityResult(
            priority=DEFAULT_PRIORITY,
            confidence=NO_SIGNAL_CONFIDENCE,
            signals=[],
            reasoning="no text or incident type provided, defaulting to medium",
        )

    lowered = text.lower()
    signals: List[str] = []
    reasoning: List[str] = []

    scores = _keyword_scores(lowered)
    for level in PRIORITY_LEVELS:
        signals.extend(f"{level}:{kw}" for kw in scores[level][1])

    winner = _keyword_winner(scores)
    if winner is None:
        level = DEFAULT_PRIORITY
        confidence = NO_SIGNAL_CONFIDENCE
        reasoning.append("no priority keywords matched, defaulting to medium")
    else:
        level = winner
        confidence = _keyword_confidence(winner, scores, reasoning)

    if incident_type:
        signals.append(f"type:{incident_type}")
        bounds = bounds_for_type(incident_type)
        bounded = bounds.clamp(level)
        if priority_rank(bounded) < priority_rank(level):
            reasoning.append(f"incident type {incident_type} caps priority at {bounded}")
            confidence = CEILING_CONFIDENCE
        elif priority_rank(bounded) > priority_rank(level):
            reasoning.append(f"incident type floor applied ({incident_type} -> {bounded})")
            confidence = max(confidence, FLOOR_CONFIDENCE)
        elif bounds.floor or bounds.ceiling:
            reasoning.append(f"incident type {incident_type} agrees with {bounded}")
            confidence += 0.05
        else:
            reasoning.append(f"incident type {incident_type} sets no priority bounds")
        level = bounded

    confidence += _boosts(text, signals, reasoning)
    confidence = round(max(0.0, min(1.0, confidence)), 4)

    log.debug("priority %s (%.2f): %s", level, confidence, "; ".join(reasoning))
    return PriorityResult(
        priority=level,
        confidence=confidence,
        signals=signals,
        reasoning="; ".join(reasoning),
    )


def detect_priority(text: str, incident_type: Optional[str] = None) -> str:
    return detect_priority_optimized(text, incident_type).priority


def detect_priority_with_confidence(text: str, incident_type: Optional[str] = None) -> PriorityConfidence:
    result = detect_priority_optimized(text, incident_type)
    return PriorityConfidence(priority=result.priority, confidence=result.confidence)
