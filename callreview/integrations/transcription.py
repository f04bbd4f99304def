"""Speech-to-text integration for call recordings.

Single attempt per invocation; the reviewer retries from the UI.
"""

from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from callreview.config.settings import settings
from callreview.middleware.error_handler import UpstreamServiceError
from callreview.schemas.transcription import Transcript

logger = structlog.get_logger()


class TranscriptionClient:
    """Client for an OpenAI-compatible audio transcription endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.OPENAI_API_KEY if api_key is None else api_key
        self.url = url or settings.TRANSCRIPTION_URL
        self.model = model or settings.TRANSCRIPTION_MODEL
        self.timeout = timeout or settings.TRANSCRIPTION_TIMEOUT_SECONDS
        self.transport = transport

    def _fail(self, reason: str) -> UpstreamServiceError:
        return UpstreamServiceError(reason=reason)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def transcribe_url(self, recording_url: str) -> Transcript:
        """Download a recording and transcribe it.

        Args:
            recording_url: Where the call audio lives

        Returns:
            Full text plus timestamped segments

        Raises:
            UpstreamServiceError: Missing credential, audio fetch failure,
                non-success from the provider, or a malformed response
        """
        if not self.api_key:
            raise self._fail("Transcription API key is not configured")

        async with self._client() as client:
            try:
                audio = await client.get(recording_url, follow_redirects=True)
            except httpx.RequestError as e:
                raise self._fail(f"Failed to fetch audio file: {e}") from e

            if not audio.is_success:
                raise self._fail(
                    f"Failed to fetch audio file: {audio.status_code} {audio.reason_phrase}",
                )

            data = await self._post_audio(client, "audio.mp3", audio.content, "audio/mpeg")

        if not isinstance(data, dict) or not data.get("text") or data.get("segments") is None:
            raise self._fail("Invalid response format from transcription service")

        try:
            transcript = Transcript(
                text=data["text"],
                segments=[
                    {"start": segment["start"], "end": segment["end"], "text": segment["text"]}
                    for segment in data["segments"]
                ],
            )
        except (KeyError, TypeError, PydanticValidationError) as e:
            raise self._fail(f"Invalid segment in transcription response: {e}") from e

        logger.info(
            "Recording transcribed",
            url=recording_url,
            segments=len(transcript.segments),
        )
        return transcript

    async def transcribe_upload(self, filename: str, content: bytes, content_type: str) -> dict[str, Any]:
        """Transcribe uploaded audio and return the provider's JSON as-is.

        Raises:
            UpstreamServiceError: Missing credential or provider failure
        """
        if not self.api_key:
            raise self._fail("Transcription API key is not configured")

        async with self._client() as client:
            data = await self._post_audio(client, filename, content, content_type)

        logger.info("Upload transcribed", filename=filename, size=len(content))
        return data

    async def _post_audio(
        self,
        client: httpx.AsyncClient,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> Any:
        try:
            response = await client.post(
                self.url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                data={"model": self.model, "response_format": "verbose_json"},
                files={"file": (filename, content, content_type)},
            )
        except httpx.RequestError as e:
            raise self._fail(f"Transcription request failed: {e}") from e

        if not response.is_success:
            raise self._fail(
                f"Failed to transcribe audio: {response.status_code} {response.reason_phrase}",
                body=response.text[:500],
            )

        try:
            return response.json()
        except ValueError as e:
            raise self._fail("Transcription service returned invalid JSON") from e


def get_transcription_client() -> TranscriptionClient:
    """FastAPI dependency for the transcription client."""
    return TranscriptionClient()
