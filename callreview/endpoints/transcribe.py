"""Audio upload transcription endpoint."""

from fastapi import APIRouter, Depends, File, UploadFile

from callreview.integrations.transcription import TranscriptionClient, get_transcription_client

router = APIRouter()


@router.post("")
async def transcribe_upload(
    file: UploadFile = File(...),
    client: TranscriptionClient = Depends(get_transcription_client),
):
    """Transcribe an uploaded audio file; the provider's JSON is passed through."""
    content = await file.read()
    return await client.transcribe_upload(
        file.filename or "audio.mp3",
        content,
        file.content_type or "application/octet-stream",
    )
