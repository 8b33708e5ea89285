"""Pydantic response models for API."""

from pydantic import BaseModel


class AnalysisResponse(BaseModel):
    bpm: float
    raw_bpm: float
    peak_count: int
    sample_rate: int
    duration: float = 0.0
