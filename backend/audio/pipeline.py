"""
TTS payload pipeline.

    base64 text -> raw PCM16 bytes -> AudioBuffer -> WAV bytes

Thin composition of the pure codec functions, adding structured logging
and timing. Every function here is synchronous and CPU-bound; async
callers should run them off the event loop for long audio (see
audio.session).

Failures are logged and re-raised unchanged. Nothing is retried here:
a bad payload has to be re-fetched upstream.
"""

from __future__ import annotations

import re
from pathlib import Path

from audio.base64_codec import decode_base64
from audio.buffer import AudioBuffer
from audio.errors import AudioCodecError
from audio.pcm import decode_pcm16
from config import AppConfig
from constants import PODCAST_FILENAME_SUFFIX
from observability.logger import emit, set_enabled
from observability.metrics import timed
from protocol.wav import encode_wav, write_wav

_UNSAFE_FILENAME_CHARS_RE = re.compile(r"[^a-zA-Z0-9]")


def _underscore_per_code_unit(match: re.Match[str]) -> str:
    return "__" if ord(match.group()) > 0xFFFF else "_"


def configure_logging(config: AppConfig) -> None:
    set_enabled(config.enable_json_logs)


def decode_tts_audio(
    payload: str | bytes,
    *,
    sample_rate_hz: int,
    channel_count: int,
) -> AudioBuffer:
    """
    Decode a base64 TTS payload into an AudioBuffer.

    sample_rate_hz and channel_count must match what the TTS service
    emits. A mismatch cannot be detected here and yields structurally
    valid but wrong-sounding audio.

    Raises:
        MalformedEncodingError, TruncatedAudioDataError,
        InvalidAudioBufferError
    """
    payload_chars = len(payload) if isinstance(payload, (str, bytes, bytearray)) else None

    try:
        with timed("tts_audio_decode", details={"payload_chars": payload_chars}) as extra:
            raw = decode_base64(payload)
            extra["pcm_bytes"] = len(raw)

            buffer = decode_pcm16(
                raw,
                sample_rate_hz=sample_rate_hz,
                channel_count=channel_count,
            )
            extra["frames"] = buffer.frame_count
    except AudioCodecError as e:
        emit(
            "AUDIO_DECODE_FAILED",
            error_type=type(e).__name__,
            error=str(e),
            sample_rate_hz=sample_rate_hz,
            channel_count=channel_count,
        )
        raise

    emit(
        "AUDIO_DECODED",
        sample_rate_hz=buffer.sample_rate_hz,
        channel_count=buffer.channel_count,
        frame_count=buffer.frame_count,
        duration_s=round(buffer.duration_s, 3),
    )
    return buffer


def render_wav(buffer: AudioBuffer) -> bytes:
    """Encode a buffer as WAV bytes, with logging."""
    try:
        with timed("wav_encode", details={"frames": buffer.frame_count}):
            wav_bytes = encode_wav(buffer)
    except AudioCodecError as e:
        emit(
            "AUDIO_ENCODE_FAILED",
            error_type=type(e).__name__,
            error=str(e),
        )
        raise

    emit("AUDIO_ENCODED", wav_bytes=len(wav_bytes))
    return wav_bytes


def export_wav(buffer: AudioBuffer, path: str | Path) -> Path:
    """Write a buffer to `path` as a WAV file, with logging."""
    try:
        with timed("wav_export", details={"frames": buffer.frame_count}):
            out = write_wav(path, buffer)
    except AudioCodecError as e:
        emit(
            "AUDIO_EXPORT_FAILED",
            error_type=type(e).__name__,
            error=str(e),
            path=str(path),
        )
        raise

    emit("AUDIO_EXPORTED", path=str(out), frame_count=buffer.frame_count)
    return out


def podcast_download_filename(title: str) -> str:
    """
    Build the download filename for a story's podcast audio.

    Every UTF-16 code unit outside [a-zA-Z0-9] becomes "_", then the result
    is lowercased: "Hello, World!" -> "hello__world__podcast.wav". Characters
    beyond the BMP (emoji) take two code units and so become "__", matching
    the names browsers give the same download.
    """
    safe = _UNSAFE_FILENAME_CHARS_RE.sub(_underscore_per_code_unit, title)
    return safe.lower() + PODCAST_FILENAME_SUFFIX
