from pydantic import BaseModel, Field
from typing import List, Optional


class DetectRequest(BaseModel):
    """One free-text radio / incident report."""
    text: str = ""
    incident_type: Optional[str] = None
    event_type: Optional[str] = None


class BatchDetectRequest(BaseModel):
    texts: List[str] = Field(default_factory=list)
    event_type: Optional[str] = None


class CallsignResponse(BaseModel):
    callsign: str
    confidence: float
    callsigns: List[str] = []


class IncidentTypeMatchOut(BaseModel):
    type: str
    confidence: float
    matched_keywords: List[str] = []
    priority: Optional[str] = None


class IncidentTypeResponse(BaseModel):
    type: str
    confidence: float
    matches: List[IncidentTypeMatchOut] = []
    alternatives: List[str] = []


class PriorityResponse(BaseModel):
    priority: str
    confidence: float
    signals: List[str] = []
    reasoning: str = ""


class AnalysisResponse(BaseModel):
    callsign: str
    callsign_confidence: float
    callsigns: List[str] = []
    incident_type: str
    type_confidence: float
    type_source: Optional[str] = None
    alternative_types: List[str] = []
    occurrence: str
    priority: str
    priority_confidence: float
    signals: List[str] = []
    reasoning: str = ""


class BatchDetectResponse(BaseModel):
    results: List[AnalysisResponse]


class IncidentTypeOut(BaseModel):
    label: str
    display_name: str


class IncidentTypesResponse(BaseModel):
    event_type: Optional[str] = None
    types: List[IncidentTypeOut]


class HealthResponse(BaseModel):
    status: str
    incident_types: int
    priority_levels: List[str]
