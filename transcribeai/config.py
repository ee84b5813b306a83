"""Application configuration. Loads from env vars."""
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """App settings. Override via environment variables."""

    # Audio: mono PCM; uploads are PCM 16-bit at this rate unless the request says otherwise
    SAMPLE_RATE: int = 16000
    MAX_UPLOAD_BYTES: int = 200 * 1024 * 1024

    # ASR backend: "local" | "cloudflare"
    ASR_BACKEND: Literal["local", "cloudflare"] = "local"
    # Audio is split into windows of this length before ASR; progress is reported per window
    ASR_CHUNK_LENGTH_SECONDS: int = 30

    # Local Whisper (when ASR_BACKEND=local); model loaded once at startup
    LOCAL_WHISPER_MODEL: str = "tiny"  # tiny | base | small | medium | large-v3
    LOCAL_WHISPER_DEVICE: Literal["cpu", "cuda"] = "cpu"
    LOCAL_WHISPER_COMPUTE_TYPE: Literal["int8", "float16"] = "int8"
    LOCAL_WHISPER_BEAM_SIZE: int = 5

    # Cloudflare Workers AI (when ASR_BACKEND=cloudflare)
    CLOUDFLARE_ACCOUNT_ID: str = ""
    CLOUDFLARE_API_TOKEN: str = ""
    CLOUDFLARE_TIMEOUT_SECONDS: float = 60.0

    # Speaker heuristic: combined pitch/energy band is taken modulo this (2 = Speaker 1 / Speaker 2)
    DIARIZATION_MAX_SPEAKERS: int = 2

    # Language tag attached to results; never detected
    DEFAULT_LANGUAGE: str = "en"

    # Text export: one .txt per transcription when enabled
    TRANSCRIPT_SAVE_ENABLED: bool = False
    TRANSCRIPT_DIR: str = "./transcripts"

    # Logging: level (DEBUG, INFO, WARNING, ERROR); file path empty = console only
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    class Config:
        env_file = ".env"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
