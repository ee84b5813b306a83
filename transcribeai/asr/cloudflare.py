"""
CloudflareWhisperEngine: Whisper via Cloudflare Workers AI.

Accepts float32 audio; wraps it as a 16-bit WAV for the API.
Runs HTTP call in executor to avoid blocking event loop.
Segments are returned as timestamped chunks when the model provides them.
"""
from __future__ import annotations

import asyncio
import io
import logging
import wave
from typing import Any

import httpx
import numpy as np

from transcribeai.asr.base import ASRChunk, ASREngine, ASRError, ASRResult, ProgressCallback
from transcribeai.audio.pcm import float32_to_pcm16_bytes
from transcribeai.config import Settings, get_settings

logger = logging.getLogger(__name__)

CLOUDFLARE_MODEL = "@cf/openai/whisper"


def _float32_to_wav_bytes(audio: np.ndarray, sample_rate: int) -> bytes:
    """Mono 16-bit WAV container around the samples."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(float32_to_pcm16_bytes(audio))
    return buf.getvalue()


def _parse_result(data: dict[str, Any]) -> ASRResult:
    result = data.get("result", data)
    if isinstance(result, str):
        return ASRResult(text=result.strip())
    if not isinstance(result, dict):
        raise ASRError("Cloudflare Whisper returned an unexpected response")

    text = (result.get("text") or result.get("transcript") or "").strip()
    chunks: list[ASRChunk] = []
    for seg in result.get("segments") or []:
        seg_text = seg.get("text") or ""
        if not seg_text.strip():
            continue
        end = seg.get("end")
        chunks.append(
            ASRChunk(
                text=seg_text,
                start=float(seg.get("start") or 0.0),
                end=float(end) if end is not None else None,
            )
        )
    return ASRResult(text=text, chunks=chunks or None)


def _sync_transcribe_cloudflare(wav_bytes: bytes, settings: Settings) -> ASRResult:
    """Blocking HTTP call; run in executor."""
    account_id = settings.CLOUDFLARE_ACCOUNT_ID
    token = settings.CLOUDFLARE_API_TOKEN
    if not account_id or not token:
        raise ASRError("Cloudflare credentials are not configured (CLOUDFLARE_ACCOUNT_ID / CLOUDFLARE_API_TOKEN)")

    url = f"https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{CLOUDFLARE_MODEL}"
    headers = {"Authorization": f"Bearer {token}"}
    body = {"audio": list(wav_bytes)}

    try:
        with httpx.Client(timeout=settings.CLOUDFLARE_TIMEOUT_SECONDS) as client:
            resp = client.post(url, headers=headers, json=body)
    except httpx.HTTPError as e:
        raise ASRError(f"Cloudflare Whisper request failed: {e}") from e
    if resp.status_code != 200:
        logger.warning("Cloudflare Whisper returned %s: %s", resp.status_code, resp.text[:200])
        raise ASRError(f"Cloudflare Whisper returned HTTP {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as e:
        raise ASRError("Cloudflare Whisper returned invalid JSON") from e
    return _parse_result(data)


class CloudflareWhisperEngine(ASREngine):
    """
    Remote Whisper via Cloudflare Workers AI.
    One request per clip; progress jumps from 0 to 1.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    async def transcribe(
        self,
        audio: np.ndarray,
        sample_rate: int,
        on_progress: ProgressCallback | None = None,
    ) -> ASRResult:
        wav_bytes = _float32_to_wav_bytes(audio, sample_rate)
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None,
            _sync_transcribe_cloudflare,
            wav_bytes,
            self._settings,
        )
        if on_progress is not None:
            on_progress(1.0)
        return result

    @property
    def model_name(self) -> str:
        return CLOUDFLARE_MODEL
