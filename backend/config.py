"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No WAV/PCM layout constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from constants import TTS_CHANNELS_DEFAULT, TTS_SAMPLE_RATE_HZ_DEFAULT


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup and passed to the pipeline,
    the session cache and the CLI tools.
    """

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # TTS payload format (out-of-band; payloads are not self-describing)
    # ------------------------------------------------------------------

    tts_sample_rate_hz: int
    tts_channels: int

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    audio_export_dir: Path

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if an audio format variable is not a positive integer.
        """
        return AppConfig(
            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",

            tts_sample_rate_hz=_positive_int("TTS_SAMPLE_RATE_HZ", TTS_SAMPLE_RATE_HZ_DEFAULT),
            tts_channels=_positive_int("TTS_CHANNELS", TTS_CHANNELS_DEFAULT),

            audio_export_dir=Path(os.environ.get("AUDIO_EXPORT_DIR", ".")),
        )
