"""Transcript export: text rendering and optional persistence."""
from .writer import format_time, format_transcript_text, save_transcript, transcript_filename

__all__ = ["format_time", "format_transcript_text", "save_transcript", "transcript_filename"]
