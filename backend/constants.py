"""
CONSTANTS
---------
Single source of truth for the audio formats this codebase reads and writes.

Rules:
- If changing a value changes bytes on the wire or on disk, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# TTS payload format (PCM16 mono @ 24kHz, not self-describing)
# =============================================================================

TTS_SAMPLE_RATE_HZ_DEFAULT: Final[int] = 24_000
TTS_CHANNELS_DEFAULT: Final[int] = 1

PCM_SAMPLE_WIDTH_BYTES: Final[int] = 2  # PCM16 (signed 16-bit)
PCM_BITS_PER_SAMPLE: Final[int] = PCM_SAMPLE_WIDTH_BYTES * 8
PCM_INT16_MIN: Final[int] = -32_768
PCM_INT16_MAX: Final[int] = 32_767

# int16 -> float divides by this; float -> int16 multiplies by it and saturates
PCM_SCALE: Final[float] = 32_768.0

SAMPLE_MIN: Final[float] = -1.0
SAMPLE_MAX: Final[float] = 1.0

# =============================================================================
# Canonical RIFF/WAVE layout (16-bit PCM, no extension chunks)
# =============================================================================

RIFF_TAG: Final[bytes] = b"RIFF"
WAVE_TAG: Final[bytes] = b"WAVE"
FMT_TAG: Final[bytes] = b"fmt "
DATA_TAG: Final[bytes] = b"data"

WAV_FMT_CHUNK_SIZE_PCM: Final[int] = 16
WAV_FORMAT_PCM: Final[int] = 1
WAV_HEADER_BYTES: Final[int] = 44

# chunkSize = 4 ("WAVE") + 8 + fmt chunk + 8 + data
WAV_RIFF_SIZE_OVERHEAD: Final[int] = WAV_HEADER_BYTES - 8

# little-endian: RIFF size WAVE | fmt size format channels rate byterate align bits | data size
WAV_HEADER_STRUCT: Final[str] = "<4sI4s4sIHHIIHH4sI"

U16_MAX: Final[int] = 2**16 - 1
U32_MAX: Final[int] = 2**32 - 1

# =============================================================================
# Export naming
# =============================================================================

PODCAST_FILENAME_SUFFIX: Final[str] = "_podcast.wav"
