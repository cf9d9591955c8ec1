# pylint: disable=missing-module-docstring,missing-function-docstring

import json
import struct

import pytest

from audio import pipeline
from audio.base64_codec import encode_base64
from audio.errors import InvalidAudioBufferError, MalformedEncodingError, TruncatedAudioDataError
from config import AppConfig
from observability import logger


@pytest.fixture
def log_lines(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    monkeypatch.setattr(logger, "_enabled", True)
    return lines


def events(lines: list[str]) -> list[dict]:
    return [json.loads(line) for line in lines]


def event_types(lines: list[str]) -> list[str]:
    return [e["event_type"] for e in events(lines)]


def test_decode_tts_audio_mono(log_lines):
    payload = encode_base64(struct.pack("<3h", 0, 16384, -32768))

    buf = pipeline.decode_tts_audio(payload, sample_rate_hz=24_000, channel_count=1)

    assert buf.frame_count == 3
    assert buf.channel(0).tolist() == [0.0, 0.5, -1.0]

    logged = events(log_lines)
    assert event_types(log_lines) == ["METRIC_TIMER", "AUDIO_DECODED"]
    assert logged[0]["metric"] == "tts_audio_decode"
    assert logged[0]["ok"] is True
    assert logged[0]["details"] == {"payload_chars": len(payload), "pcm_bytes": 6, "frames": 3}
    assert logged[1]["frame_count"] == 3


def test_decode_then_render_matches_concrete_bytes(log_lines):
    buf = pipeline.decode_tts_audio(
        encode_base64(bytes([0x00, 0x00, 0xFF, 0x7F])),
        sample_rate_hz=24_000,
        channel_count=1,
    )
    wav_bytes = pipeline.render_wav(buf)

    assert len(wav_bytes) == 48
    assert wav_bytes[44:] == bytes([0x00, 0x00, 0xFF, 0x7F])
    assert "AUDIO_ENCODED" in event_types(log_lines)


def test_malformed_payload_is_logged_and_reraised(log_lines):
    with pytest.raises(MalformedEncodingError):
        pipeline.decode_tts_audio("not base64!", sample_rate_hz=24_000, channel_count=1)

    logged = events(log_lines)
    assert event_types(log_lines) == ["METRIC_TIMER", "AUDIO_DECODE_FAILED"]
    assert logged[0]["ok"] is False
    assert logged[1]["error_type"] == "MalformedEncodingError"


def test_truncated_payload_is_reraised(log_lines):
    with pytest.raises(TruncatedAudioDataError):
        pipeline.decode_tts_audio(encode_base64(b"\x00\x00\x00"), sample_rate_hz=24_000, channel_count=1)

    assert events(log_lines)[-1]["error_type"] == "TruncatedAudioDataError"


def test_render_wav_failure_is_logged(log_lines):
    with pytest.raises(InvalidAudioBufferError):
        pipeline.render_wav(
            pipeline.decode_tts_audio(encode_base64(b"\x00\x00"), sample_rate_hz=2**31, channel_count=1)
        )

    assert events(log_lines)[-1]["event_type"] == "AUDIO_ENCODE_FAILED"


def test_logging_can_be_disabled(log_lines, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENABLE_JSON_LOGS", "0")
    pipeline.configure_logging(AppConfig.load_from_env())

    pipeline.decode_tts_audio("AAA=", sample_rate_hz=24_000, channel_count=1)

    assert log_lines == []


@pytest.mark.parametrize(
    "title, expected",
    [
        ("The Lost Key", "the_lost_key_podcast.wav"),
        ("Hello, World!", "hello__world__podcast.wav"),
        ("Chuyện cổ tích", "chuy_n_c__t_ch_podcast.wav"),
        ("", "_podcast.wav"),
    ],
)
def test_podcast_download_filename(title: str, expected: str):
    assert pipeline.podcast_download_filename(title) == expected


def test_download_filename_counts_emoji_as_two_code_units():
    assert pipeline.podcast_download_filename("Moon 🌙 Tale") == "moon____tale_podcast.wav"


# ---------------------------------------------------------------------
# export_wav
# ---------------------------------------------------------------------

def test_export_wav_writes_and_logs(log_lines, tmp_path):
    buf = pipeline.decode_tts_audio("AAD/fw==", sample_rate_hz=24_000, channel_count=1)

    out = pipeline.export_wav(buf, tmp_path / "exports" / "story_podcast.wav")

    data = out.read_bytes()
    assert len(data) == 48
    assert data[44:] == b"\x00\x00\xff\x7f"
    exported = events(log_lines)[-1]
    assert exported["event_type"] == "AUDIO_EXPORTED"
    assert exported["path"] == str(out)


def test_export_wav_failure_is_logged(log_lines, tmp_path):
    buf = pipeline.decode_tts_audio("AAA=", sample_rate_hz=2**31, channel_count=1)
    target = tmp_path / "bad.wav"

    with pytest.raises(InvalidAudioBufferError):
        pipeline.export_wav(buf, target)

    assert events(log_lines)[-1]["event_type"] == "AUDIO_EXPORT_FAILED"
    assert not target.exists()
