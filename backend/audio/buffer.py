"""
Audio buffer primitive.

Caller-owned, immutable container for decoded audio.
No I/O, no playback, no format knowledge beyond float samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Iterable, Sequence

import numpy as np

from audio.errors import InvalidAudioBufferError
from constants import SAMPLE_MAX, SAMPLE_MIN


def _freeze_channel(index: int, samples: Sequence[float] | np.ndarray) -> np.ndarray:
    try:
        arr = np.asarray(samples, dtype=np.float32)
    except (TypeError, ValueError) as e:
        raise InvalidAudioBufferError(
            f"Channel {index} is not a numeric sample sequence: {e}"
        ) from e

    if arr.ndim != 1:
        raise InvalidAudioBufferError(
            f"Channel {index} must be one-dimensional, got shape {arr.shape}"
        )

    if np.isnan(arr).any():
        raise InvalidAudioBufferError(f"Channel {index} contains NaN samples")

    # Clamp, never wrap. np.clip always returns a fresh array, so the
    # caller's data is never aliased.
    arr = np.clip(arr, SAMPLE_MIN, SAMPLE_MAX)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class AudioBuffer:
    """
    Decoded audio, one float32 sequence per channel.

    sample_rate_hz:
        Samples per second per channel. Must be >= 1. Not derivable from
        TTS payloads; supplied by whoever decoded the audio.

    channel_data:
        One read-only float32 array per channel, all the same length,
        every value in [-1.0, 1.0]. Out-of-range input is clamped at
        construction.
    """
    sample_rate_hz: int
    channel_data: tuple[np.ndarray, ...]

    def __post_init__(self) -> None:
        if isinstance(self.sample_rate_hz, bool) or not isinstance(self.sample_rate_hz, Integral):
            raise InvalidAudioBufferError(
                f"sample_rate_hz must be an int, got {type(self.sample_rate_hz).__name__}"
            )
        object.__setattr__(self, "sample_rate_hz", int(self.sample_rate_hz))
        if self.sample_rate_hz < 1:
            raise InvalidAudioBufferError(f"Invalid sample_rate_hz: {self.sample_rate_hz}")

        channels = tuple(
            _freeze_channel(i, ch) for i, ch in enumerate(self.channel_data)
        )
        if not channels:
            raise InvalidAudioBufferError("Audio buffer needs at least one channel")

        lengths = {len(ch) for ch in channels}
        if len(lengths) != 1:
            raise InvalidAudioBufferError(
                f"Channel lengths differ: {[len(ch) for ch in channels]}"
            )

        object.__setattr__(self, "channel_data", channels)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_channels(
        cls,
        channels: Iterable[Sequence[float] | np.ndarray],
        *,
        sample_rate_hz: int,
    ) -> AudioBuffer:
        return cls(sample_rate_hz=sample_rate_hz, channel_data=tuple(channels))

    @classmethod
    def empty(cls, *, sample_rate_hz: int, channel_count: int = 1) -> AudioBuffer:
        """Return a buffer with zero frames on every channel."""
        if channel_count < 1:
            raise InvalidAudioBufferError(f"Invalid channel_count: {channel_count}")
        return cls(
            sample_rate_hz=sample_rate_hz,
            channel_data=tuple(np.zeros(0, dtype=np.float32) for _ in range(channel_count)),
        )

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def channel_count(self) -> int:
        return len(self.channel_data)

    @property
    def frame_count(self) -> int:
        return len(self.channel_data[0])

    @property
    def duration_s(self) -> float:
        return self.frame_count / self.sample_rate_hz

    def channel(self, index: int) -> np.ndarray:
        return self.channel_data[index]

    def interleaved(self) -> np.ndarray:
        """
        Return samples as a (frame_count, channel_count) array.

        Row order is frame order, so flattening it yields [L0, R0, L1, R1, ...].
        """
        return np.stack(self.channel_data, axis=1)
