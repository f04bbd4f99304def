"""Pydantic schemas for speech-to-text results."""

from .base import CamelModel


class TranscriptSegment(CamelModel):
    start: float  # seconds
    end: float  # seconds
    text: str


class Transcript(CamelModel):
    text: str
    segments: list[TranscriptSegment]
