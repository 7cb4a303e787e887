from typing import Optional

from fastapi import FastAPI

from incident_signals.common.logging import get_logger
from incident_signals.detection.analysis import analyze_incident_text
from incident_signals.detection.callsign import (
    detect_callsign_with_confidence, extract_all_callsigns,
)
from incident_signals.detection.incident_type import (
    detect_incident_type_with_confidence, get_all_incident_type_matches,
    get_alternative_incident_types,
)
from incident_signals.detection.priority import detect_priority_optimized
from incident_signals.detection.vocabulary import (
    ALL_INCIDENT_TYPES, PRIORITY_LEVELS, display_name, incident_types_for_event,
)
from incident_signals.service.schemas import (
    AnalysisResponse, BatchDetectRequest, BatchDetectResponse, CallsignResponse,
    DetectRequest, HealthResponse, IncidentTypeMatchOut, IncidentTypeOut,
    IncidentTypeResponse, IncidentTypesResponse, PriorityResponse,
)

log = get_logger("service")

app = FastAPI(title="Incident Signal Extraction API", version="1.0")


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="ok",
        incident_types=len(ALL_INCIDENT_TYPES),
        priority_levels=list(PRIORITY_LEVELS),
    )


@app.get("/incident-types", response_model=IncidentTypesResponse)
def incident_types(event_type: Optional[str] = None):
    types = [
        IncidentTypeOut(label=t, display_name=display_name(t))
        for t in incident_types_for_event(event_type)
    ]
    return IncidentTypesResponse(event_type=event_type, types=types)


@app.post("/detect", response_model=AnalysisResponse)
def detect(req: DetectRequest):
    return AnalysisResponse(**analyze_incident_text(req.text, req.event_type).to_dict())


@app.post("/detect/callsign", response_model=CallsignResponse)
def detect_callsign(req: DetectRequest):
    result = detect_callsign_with_confidence(req.text)
    return CallsignResponse(
        callsign=result.callsign if result else "",
        confidence=result.confidence if result else 0.0,
        callsigns=extract_all_callsigns(req.text),
    )


@app.post("/detect/incident-type", response_model=IncidentTypeResponse)
def detect_incident_type(req: DetectRequest):
    best = detect_incident_type_with_confidence(req.text)
    matches = [IncidentTypeMatchOut(**m.to_dict()) for m in get_all_incident_type_matches(req.text)]
    return IncidentTypeResponse(
        type=best.type,
        confidence=best.confidence,
        matches=matches,
        alternatives=get_alternative_incident_types(req.text),
    )


@app.post("/detect/priority", response_model=PriorityResponse)
def detect_priority(req: DetectRequest):
    return PriorityResponse(**detect_priority_optimized(req.text, req.incident_type).to_dict())


@app.post("/detect/batch", response_model=BatchDetectResponse)
def detect_batch(req: BatchDetectRequest):
    results = [AnalysisResponse(**analyze_incident_text(t, req.event_type).to_dict()) for t in req.texts]
    log.info("classified batch of %d reports", len(results))
    return BatchDetectResponse(results=results)
