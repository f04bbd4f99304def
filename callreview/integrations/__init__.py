"""External service integrations."""

from .transcription import TranscriptionClient, get_transcription_client

__all__ = ["TranscriptionClient", "get_transcription_client"]
