# pylint: disable=missing-module-docstring,missing-function-docstring

from pathlib import Path

import pytest

from config import AppConfig

_VARS = ("ENABLE_JSON_LOGS", "TTS_SAMPLE_RATE_HZ", "TTS_CHANNELS", "AUDIO_EXPORT_DIR")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig.load_from_env()

    assert config.enable_json_logs is True
    assert config.tts_sample_rate_hz == 24_000
    assert config.tts_channels == 1
    assert config.audio_export_dir == Path(".")


def test_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENABLE_JSON_LOGS", "0")
    monkeypatch.setenv("TTS_SAMPLE_RATE_HZ", "48000")
    monkeypatch.setenv("TTS_CHANNELS", "2")
    monkeypatch.setenv("AUDIO_EXPORT_DIR", "/tmp/exports")

    config = AppConfig.load_from_env()

    assert config.enable_json_logs is False
    assert config.tts_sample_rate_hz == 48_000
    assert config.tts_channels == 2
    assert config.audio_export_dir == Path("/tmp/exports")


@pytest.mark.parametrize("value", ["abc", "0", "-24000", "24000.5"])
def test_rejects_invalid_sample_rate(monkeypatch: pytest.MonkeyPatch, value: str):
    monkeypatch.setenv("TTS_SAMPLE_RATE_HZ", value)

    with pytest.raises(ValueError):
        AppConfig.load_from_env()


def test_config_is_immutable():
    config = AppConfig.load_from_env()

    with pytest.raises(AttributeError):
        config.tts_channels = 2  # type: ignore[misc]
