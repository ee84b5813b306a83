"""
FastAPI app: HTTP API for transcription with heuristic speaker labels.

POST /api/transcribe: body is raw PCM 16-bit mono (little-endian). Runs ASR, then
speaker detection. Responds with JSON segments or, with format=text, a
downloadable "[MM:SS - MM:SS] Speaker N: text" export.
POST /api/diarize: JSON with base64 float32 PCM and an existing ASR result;
runs speaker detection only.
"""
from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from transcribeai.asr.base import ASREngine, ASRError, ASRResult
from transcribeai.asr.cloudflare import CloudflareWhisperEngine
from transcribeai.asr.local_whisper import LocalWhisperEngine, load_whisper_model
from transcribeai.audio.pcm import float32_bytes_to_array, pcm16_bytes_to_float32
from transcribeai.config import Settings, get_settings
from transcribeai.diarization.models import Transcription
from transcribeai.diarization.speaker_detection import analyze_speakers
from transcribeai.schemas.transcription import DiarizeRequest, TranscriptionResponse
from transcribeai.services.transcription_service import TranscriptionService
from transcribeai.transcript.writer import format_transcript_text, save_transcript, transcript_filename

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """Apply LOG_LEVEL and optional LOG_FILE to the root logger."""
    settings = settings or get_settings()
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE, encoding="utf-8"))
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_asr_engine(settings: Settings | None = None) -> ASREngine:
    """Build the ASR engine for ASR_BACKEND. Local loads the Whisper model once, here."""
    settings = settings or get_settings()
    if settings.ASR_BACKEND == "cloudflare":
        return CloudflareWhisperEngine(settings)
    return LocalWhisperEngine(model=load_whisper_model(settings), settings=settings)


def get_asr_engine(request: Request) -> ASREngine:
    engine = getattr(request.app.state, "asr_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="ASR engine not initialized")
    return engine


async def _read_body(request: Request, settings: Settings) -> bytes:
    """Read the request body, stopping as soon as it passes MAX_UPLOAD_BYTES."""
    limit = settings.MAX_UPLOAD_BYTES
    too_large = HTTPException(status_code=400, detail=f"Audio body exceeds {limit} bytes")
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise too_large

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise too_large
    if not body:
        raise HTTPException(status_code=400, detail="Audio body is empty")
    return bytes(body)


def _text_response(transcription: Transcription) -> PlainTextResponse:
    return PlainTextResponse(
        format_transcript_text(transcription),
        headers={"Content-Disposition": f'attachment; filename="{transcript_filename()}"'},
    )


def create_app(engine: ASREngine | None = None) -> FastAPI:
    """
    engine: ASR engine to use. When None, one is built at startup from settings
    (ASR_BACKEND) and dropped at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        owns_engine = engine is None
        app.state.asr_engine = create_asr_engine() if owns_engine else engine
        logger.info("ASR engine ready: %s", app.state.asr_engine.model_name)
        yield
        if owns_engine:
            app.state.asr_engine = None

    app = FastAPI(
        title="TranscribeAI",
        description="Transcription with lightweight pitch/energy speaker labels",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.post("/api/transcribe", response_model=TranscriptionResponse)
    async def transcribe(
        request: Request,
        sample_rate: int | None = Query(None, gt=0, description="Sample rate of the PCM body; defaults to SAMPLE_RATE"),
        language: str | None = Query(None, description="Language tag for the result; defaults to DEFAULT_LANGUAGE"),
        format: Literal["json", "text"] = Query("json"),
    ):
        """
        Body: raw PCM 16-bit little-endian mono.
        ASR failures are reported as 502 with the engine's message.
        """
        settings = get_settings()
        engine = get_asr_engine(request)
        body = await _read_body(request, settings)
        try:
            samples = pcm16_bytes_to_float32(body)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        service = TranscriptionService(engine, language=language)
        try:
            transcription = await service.transcribe(
                samples,
                sample_rate or settings.SAMPLE_RATE,
                on_progress=lambda p: logger.debug("Transcription progress %.0f%%", p * 100),
            )
        except ASRError as e:
            logger.warning("ASR failed: %s", e)
            raise HTTPException(status_code=502, detail=str(e))
        except Exception as e:
            logger.exception("Transcription failed: %s", e)
            raise HTTPException(status_code=500, detail="Transcription failed")

        save_transcript(transcription)
        if format == "text":
            return _text_response(transcription)
        return TranscriptionResponse.from_transcription(transcription, model=engine.model_name)

    @app.post("/api/diarize", response_model=TranscriptionResponse)
    async def diarize(body: DiarizeRequest) -> TranscriptionResponse:
        """Speaker-tag an existing ASR result against its audio. No ASR is run."""
        settings = get_settings()
        try:
            raw = base64.b64decode(body.audio_base64, validate=True)
            samples = float32_bytes_to_array(raw)
        except (binascii.Error, ValueError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid audio_base64: {e}")

        asr_result = ASRResult.from_payload(body.asr.model_dump())
        duration = body.duration if body.duration is not None else len(samples) / body.sample_rate
        loop = asyncio.get_running_loop()
        segments = await loop.run_in_executor(
            None,
            analyze_speakers,
            samples,
            body.sample_rate,
            asr_result,
            duration,
            settings.DIARIZATION_MAX_SPEAKERS,
        )
        transcription = Transcription(
            segments=segments,
            duration=duration,
            language=body.language or settings.DEFAULT_LANGUAGE,
        )
        return TranscriptionResponse.from_transcription(transcription)

    return app


app = create_app()
