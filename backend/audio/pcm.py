"""PCM16 conversion utilities."""
from __future__ import annotations

import numpy as np

from audio.buffer import AudioBuffer
from audio.errors import InvalidAudioBufferError, TruncatedAudioDataError
from constants import PCM_INT16_MAX, PCM_INT16_MIN, PCM_SAMPLE_WIDTH_BYTES, PCM_SCALE


def _check_format(sample_rate_hz: int, channel_count: int) -> None:
    if sample_rate_hz < 1:
        raise InvalidAudioBufferError(f"Invalid sample_rate_hz: {sample_rate_hz}")
    if channel_count < 1:
        raise InvalidAudioBufferError(f"Invalid channel_count: {channel_count}")


def decode_pcm16(
    pcm_bytes: bytes,
    *,
    sample_rate_hz: int,
    channel_count: int,
) -> AudioBuffer:
    """
    Convert interleaved PCM16 little-endian bytes to an AudioBuffer.

    Each int16 sample s becomes s / 32768.0, so the output range is
    [-1.0, 32767/32768]. Channels are de-interleaved frame by frame:
    channel c takes samples frame * channel_count + c.

    No resampling. No channel mixing.

    Raises:
        TruncatedAudioDataError if the byte length is not a whole number
        of frames.
        InvalidAudioBufferError if sample_rate_hz or channel_count < 1.
    """
    _check_format(sample_rate_hz, channel_count)

    frame_bytes = PCM_SAMPLE_WIDTH_BYTES * channel_count
    if len(pcm_bytes) % frame_bytes != 0:
        raise TruncatedAudioDataError(
            f"PCM length {len(pcm_bytes)} is not a multiple of "
            f"{frame_bytes} bytes ({channel_count} channel(s) x PCM16)"
        )

    audio_i16 = np.frombuffer(pcm_bytes, dtype="<i2")  # little-endian int16
    frames = audio_i16.reshape(-1, channel_count)
    audio_f32 = frames.astype(np.float32) / PCM_SCALE

    return AudioBuffer(
        sample_rate_hz=sample_rate_hz,
        channel_data=tuple(audio_f32[:, c] for c in range(channel_count)),
    )


def encode_pcm16(buffer: AudioBuffer) -> bytes:
    """
    Convert an AudioBuffer to interleaved PCM16 little-endian bytes.

    Exact inverse of decode_pcm16: samples are scaled by 32768, rounded to
    the nearest integer and saturated to the int16 range, so +1.0 maps to
    32767 and decoded PCM16 re-encodes to identical bytes.
    """
    # AudioBuffer already guarantees [-1.0, 1.0]
    scaled = np.rint(buffer.interleaved().astype(np.float64) * PCM_SCALE)
    audio_i16 = np.clip(scaled, PCM_INT16_MIN, PCM_INT16_MAX).astype("<i2")
    return audio_i16.tobytes()
