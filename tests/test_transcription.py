"""Unit tests for TranscriptionClient against a mocked provider."""

import httpx
import pytest

from callreview.integrations.transcription import TranscriptionClient
from callreview.middleware.error_handler import UpstreamServiceError

RECORDING_URL = "https://recordings.example/calls/abc.mp3"
TRANSCRIBE_URL = "https://stt.example/v1/audio/transcriptions"

VERBOSE_RESPONSE = {
    "text": "Hello, thanks for calling.",
    "language": "english",
    "segments": [
        {"id": 0, "start": 0.0, "end": 1.4, "text": "Hello,", "avg_logprob": -0.2},
        {"id": 1, "start": 1.4, "end": 2.9, "text": " thanks for calling."},
    ],
}


def make_client(handler, api_key="sk-test"):
    return TranscriptionClient(
        api_key=api_key,
        url=TRANSCRIBE_URL,
        model="whisper-1",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def provider(audio_status=200, stt_status=200, stt_json=VERBOSE_RESPONSE, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.method == "GET":
            return httpx.Response(audio_status, content=b"ID3fakeaudio")
        if stt_json is None:
            return httpx.Response(stt_status, content=b"not json")
        return httpx.Response(stt_status, json=stt_json)

    return handler


class TestTranscribeUrl:
    @pytest.mark.asyncio
    async def test_returns_segments(self):
        seen = []
        client = make_client(provider(seen=seen))

        transcript = await client.transcribe_url(RECORDING_URL)

        assert transcript.text == "Hello, thanks for calling."
        assert [(s.start, s.end, s.text) for s in transcript.segments] == [
            (0.0, 1.4, "Hello,"),
            (1.4, 2.9, " thanks for calling."),
        ]

        fetch, upload = seen
        assert str(fetch.url) == RECORDING_URL
        assert str(upload.url) == TRANSCRIBE_URL
        assert upload.headers["Authorization"] == "Bearer sk-test"
        assert b"verbose_json" in upload.content
        assert b"whisper-1" in upload.content
        assert b"ID3fakeaudio" in upload.content

    @pytest.mark.asyncio
    async def test_missing_credential(self):
        seen = []
        client = make_client(provider(seen=seen), api_key="")

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.transcribe_url(RECORDING_URL)

        assert "not configured" in exc_info.value.reason
        assert seen == []

    @pytest.mark.asyncio
    async def test_audio_fetch_failure(self):
        client = make_client(provider(audio_status=404))

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.transcribe_url(RECORDING_URL)

        assert "Failed to fetch audio file: 404" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_provider_error_status(self):
        client = make_client(provider(stt_status=429, stt_json={"error": "rate limited"}))

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.transcribe_url(RECORDING_URL)

        assert "429" in exc_info.value.reason
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to transcribe audio"

    @pytest.mark.asyncio
    async def test_response_without_segments(self):
        client = make_client(provider(stt_json={"text": "Hello"}))

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.transcribe_url(RECORDING_URL)

        assert "Invalid response format" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        client = make_client(provider(stt_json=None))

        with pytest.raises(UpstreamServiceError):
            await client.transcribe_url(RECORDING_URL)

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        client = make_client(handler)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.transcribe_url(RECORDING_URL)

        assert "unreachable" in exc_info.value.reason


class TestTranscribeUpload:
    @pytest.mark.asyncio
    async def test_passes_provider_json_through(self):
        client = make_client(provider())

        data = await client.transcribe_upload("call.wav", b"RIFFdata", "audio/wav")

        assert data == VERBOSE_RESPONSE

    @pytest.mark.asyncio
    async def test_missing_credential(self):
        client = make_client(provider(), api_key="")

        with pytest.raises(UpstreamServiceError):
            await client.transcribe_upload("call.wav", b"RIFFdata", "audio/wav")
