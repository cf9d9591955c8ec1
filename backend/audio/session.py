"""
Per-story podcast audio cache.

Holds the decoded AudioBuffer for one story so replay and download do not
trigger another TTS request or another decode pass. The buffer lives until
reset() (new story, page teardown).

Non-responsibilities:
- No playback (the platform player consumes the buffer)
- No retries (a failed fetch or decode surfaces to the caller)
- No TTS prompt construction
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from audio.buffer import AudioBuffer
from audio.pipeline import decode_tts_audio, render_wav
from config import AppConfig
from constants import TTS_CHANNELS_DEFAULT, TTS_SAMPLE_RATE_HZ_DEFAULT


class NoAudioLoaded(RuntimeError):
    """Raised when exporting before any audio has been decoded."""


class PodcastAudioSession:
    """
    Fetch-once, decode-once cache for a story's podcast audio.

    Design:
    - The fetch coroutine is awaited only when nothing is cached
    - Decoding runs in a worker thread so long payloads do not stall the
      event loop
    - Concurrent ensure_buffer() calls share one fetch (asyncio.Lock)
    """

    def __init__(
        self,
        *,
        sample_rate_hz: int = TTS_SAMPLE_RATE_HZ_DEFAULT,
        channel_count: int = TTS_CHANNELS_DEFAULT,
    ) -> None:
        self._sample_rate_hz = sample_rate_hz
        self._channel_count = channel_count
        self._buffer: Optional[AudioBuffer] = None
        self._lock = asyncio.Lock()
        # bumped by reset(); a fetch started under an older generation
        # must not populate the cache
        self._generation = 0

    @classmethod
    def from_config(cls, config: AppConfig) -> PodcastAudioSession:
        return cls(
            sample_rate_hz=config.tts_sample_rate_hz,
            channel_count=config.tts_channels,
        )

    @property
    def buffer(self) -> Optional[AudioBuffer]:
        return self._buffer

    async def ensure_buffer(
        self,
        fetch_payload: Callable[[], Awaitable[str]],
    ) -> AudioBuffer:
        """
        Return the cached buffer, fetching and decoding it first if needed.

        Errors from fetch_payload or from decoding propagate unchanged and
        leave the cache empty. If reset() runs while the fetch is in flight,
        the decoded buffer is returned to this caller but not cached.
        """
        async with self._lock:
            if self._buffer is not None:
                return self._buffer

            generation = self._generation
            payload = await fetch_payload()
            buffer = await asyncio.to_thread(
                decode_tts_audio,
                payload,
                sample_rate_hz=self._sample_rate_hz,
                channel_count=self._channel_count,
            )
            if generation == self._generation:
                self._buffer = buffer
            return buffer

    def wav_bytes(self) -> bytes:
        if self._buffer is None:
            raise NoAudioLoaded("No podcast audio has been generated yet")
        return render_wav(self._buffer)

    def reset(self) -> None:
        self._generation += 1
        self._buffer = None
