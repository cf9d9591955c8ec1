# backend/protocol/wav.py
"""
Canonical WAV (RIFF/WAVE, 16-bit PCM) serialization.

Layout (all integers little-endian):

    0   4  "RIFF"
    4   4  chunk_size      (u32) = 36 + data_size
    8   4  "WAVE"
    12  4  "fmt "
    16  4  fmt_size        (u32) = 16
    20  2  audio_format    (u16) = 1 (PCM)
    22  2  channels        (u16)
    24  4  sample_rate     (u32)
    28  4  byte_rate       (u32) = sample_rate * channels * 2
    32  2  block_align     (u16) = channels * 2
    34  2  bits_per_sample (u16) = 16
    36  4  "data"
    40  4  data_size       (u32) = frames * channels * 2
    44  …  interleaved PCM16 samples

No extension chunks are written. 16-bit data is always an even number of
bytes, so no pad byte is ever needed.

Usage example:

    buffer = decode_pcm16(raw, sample_rate_hz=24_000, channel_count=1)
    wav_bytes = encode_wav(buffer)
    write_wav(export_dir / podcast_download_filename(title), buffer)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

from audio.buffer import AudioBuffer
from audio.errors import AudioCodecError, InvalidAudioBufferError
from audio.pcm import decode_pcm16, encode_pcm16
from constants import (
    DATA_TAG,
    FMT_TAG,
    PCM_BITS_PER_SAMPLE,
    PCM_SAMPLE_WIDTH_BYTES,
    RIFF_TAG,
    U16_MAX,
    U32_MAX,
    WAV_FMT_CHUNK_SIZE_PCM,
    WAV_FORMAT_PCM,
    WAV_HEADER_BYTES,
    WAV_HEADER_STRUCT,
    WAV_RIFF_SIZE_OVERHEAD,
    WAVE_TAG,
)


# -------------------------
# Exceptions
# -------------------------

class InvalidWavHeader(AudioCodecError):
    """
    Raised when bytes handed to the WAV reader are not the canonical
    16-bit PCM layout this module writes.

    Covers wrong magic tags, non-PCM formats, inconsistent derived fields,
    and data sizes that disagree with the byte count actually present.
    """


# -------------------------
# Header model
# -------------------------

@dataclass(frozen=True)
class WavHeader:
    """
    Parsed canonical WAV header.
    """
    channels: int
    sample_rate_hz: int
    data_size: int

    @property
    def block_align(self) -> int:
        return self.channels * PCM_SAMPLE_WIDTH_BYTES

    @property
    def byte_rate(self) -> int:
        return self.sample_rate_hz * self.block_align

    @property
    def chunk_size(self) -> int:
        return WAV_RIFF_SIZE_OVERHEAD + self.data_size

    @property
    def frame_count(self) -> int:
        return self.data_size // self.block_align


# -------------------------
# Low-level helpers
# -------------------------

def _pack_header(header: WavHeader) -> bytes:
    if header.channels > U16_MAX:
        raise InvalidAudioBufferError(f"Too many channels for WAV: {header.channels}")

    # block_align is a u16 as well
    if header.block_align > U16_MAX:
        raise InvalidAudioBufferError(f"block_align overflows u16: {header.block_align}")

    for name, value in (
        ("sample_rate", header.sample_rate_hz),
        ("byte_rate", header.byte_rate),
        ("chunk_size", header.chunk_size),
    ):
        if value > U32_MAX:
            raise InvalidAudioBufferError(f"{name} overflows u32: {value}")

    return struct.pack(
        WAV_HEADER_STRUCT,
        RIFF_TAG,
        header.chunk_size,
        WAVE_TAG,
        FMT_TAG,
        WAV_FMT_CHUNK_SIZE_PCM,
        WAV_FORMAT_PCM,
        header.channels,
        header.sample_rate_hz,
        header.byte_rate,
        header.block_align,
        PCM_BITS_PER_SAMPLE,
        DATA_TAG,
        header.data_size,
    )


# -------------------------
# Encode
# -------------------------

def encode_wav(buffer: AudioBuffer) -> bytes:
    """
    Serialize an AudioBuffer as a canonical 16-bit PCM WAV file.

    Output length is exactly 44 + frame_count * channel_count * 2.

    Raises:
        InvalidAudioBufferError if the buffer is structurally invalid or a
        header field cannot hold its value. Nothing is returned on failure.
    """
    if not isinstance(buffer, AudioBuffer):
        raise InvalidAudioBufferError(
            f"Expected AudioBuffer, got {type(buffer).__name__}"
        )

    # AudioBuffer validates on construction; re-check in case the frozen
    # dataclass was bypassed with object.__setattr__.
    lengths = {len(ch) for ch in buffer.channel_data}
    if len(lengths) != 1:
        raise InvalidAudioBufferError(
            f"Channel lengths differ: {[len(ch) for ch in buffer.channel_data]}"
        )
    if buffer.sample_rate_hz < 1:
        raise InvalidAudioBufferError(f"Invalid sample_rate_hz: {buffer.sample_rate_hz}")

    header = WavHeader(
        channels=buffer.channel_count,
        sample_rate_hz=buffer.sample_rate_hz,
        data_size=buffer.frame_count * buffer.channel_count * PCM_SAMPLE_WIDTH_BYTES,
    )
    header_bytes = _pack_header(header)
    pcm_bytes = encode_pcm16(buffer)

    payload = header_bytes + pcm_bytes

    if len(payload) != WAV_HEADER_BYTES + header.data_size:
        raise InvalidAudioBufferError(
            f"WAV length {len(payload)} != {WAV_HEADER_BYTES + header.data_size}"
        )

    return payload


def write_wav(path: str | Path, buffer: AudioBuffer) -> Path:
    """
    Encode `buffer` and write it to `path`, creating parent directories.

    The file is only opened once encoding has succeeded.
    """
    wav_bytes = encode_wav(buffer)

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(wav_bytes)
    return out


# -------------------------
# Decode (canonical subset only)
# -------------------------

def parse_wav_header(data: bytes) -> WavHeader:
    """
    Parse and validate the 44-byte canonical header at the start of `data`.
    """
    if len(data) < WAV_HEADER_BYTES:
        raise InvalidWavHeader(f"WAV length {len(data)} < {WAV_HEADER_BYTES}")

    (
        riff,
        chunk_size,
        wave,
        fmt,
        fmt_size,
        audio_format,
        channels,
        sample_rate_hz,
        byte_rate,
        block_align,
        bits_per_sample,
        data_tag,
        data_size,
    ) = struct.unpack_from(WAV_HEADER_STRUCT, data, 0)

    if riff != RIFF_TAG or wave != WAVE_TAG:
        raise InvalidWavHeader("Missing RIFF/WAVE tags")
    if fmt != FMT_TAG or fmt_size != WAV_FMT_CHUNK_SIZE_PCM:
        raise InvalidWavHeader(f"Unsupported fmt chunk: {fmt!r} size {fmt_size}")
    if audio_format != WAV_FORMAT_PCM or bits_per_sample != PCM_BITS_PER_SAMPLE:
        raise InvalidWavHeader(
            f"Only 16-bit PCM is supported (format={audio_format}, bits={bits_per_sample})"
        )
    if data_tag != DATA_TAG:
        raise InvalidWavHeader(f"Expected data chunk, got {data_tag!r}")
    if channels < 1 or sample_rate_hz < 1:
        raise InvalidWavHeader(f"Invalid format: channels={channels}, rate={sample_rate_hz}")

    header = WavHeader(
        channels=channels,
        sample_rate_hz=sample_rate_hz,
        data_size=data_size,
    )

    if block_align != header.block_align or byte_rate != header.byte_rate:
        raise InvalidWavHeader(
            f"Inconsistent block_align/byte_rate: {block_align}/{byte_rate}"
        )
    if chunk_size != header.chunk_size:
        raise InvalidWavHeader(f"chunk_size {chunk_size} != {header.chunk_size}")
    if data_size % header.block_align != 0:
        raise InvalidWavHeader(
            f"data_size {data_size} is not a multiple of block_align {header.block_align}"
        )

    return header


def decode_wav(data: bytes) -> AudioBuffer:
    """
    Decode a canonical WAV artifact back into an AudioBuffer.

    Inverse of encode_wav; used to hand exported audio to playback.
    """
    header = parse_wav_header(data)

    pcm_bytes = data[WAV_HEADER_BYTES:]
    if len(pcm_bytes) != header.data_size:
        raise InvalidWavHeader(
            f"data_size {header.data_size} != {len(pcm_bytes)} bytes present"
        )

    return decode_pcm16(
        pcm_bytes,
        sample_rate_hz=header.sample_rate_hz,
        channel_count=header.channels,
    )
