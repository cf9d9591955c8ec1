# pylint: disable=missing-module-docstring,missing-function-docstring

import numpy as np
import pytest

from audio.buffer import AudioBuffer
from audio.errors import InvalidAudioBufferError


def test_derived_properties():
    buf = AudioBuffer.from_channels([[0.0, 0.5, -0.5, 0.25]], sample_rate_hz=4)

    assert buf.channel_count == 1
    assert buf.frame_count == 4
    assert buf.duration_s == 1.0


def test_out_of_range_samples_are_clamped_not_wrapped():
    buf = AudioBuffer.from_channels([[1.5, -3.0, np.inf, -np.inf]], sample_rate_hz=8000)

    assert buf.channel(0).tolist() == [1.0, -1.0, 1.0, -1.0]


def test_channels_are_read_only_copies():
    source = np.array([0.1, 0.2], dtype=np.float32)
    buf = AudioBuffer.from_channels([source], sample_rate_hz=8000)

    source[0] = 0.9
    assert buf.channel(0)[0] == pytest.approx(0.1)

    with pytest.raises(ValueError):
        buf.channel(0)[0] = 0.5


def test_interleaved_is_frame_major():
    buf = AudioBuffer.from_channels([[0.1, 0.2], [-0.1, -0.2]], sample_rate_hz=8000)

    np.testing.assert_allclose(
        buf.interleaved().ravel(),
        np.array([0.1, -0.1, 0.2, -0.2], dtype=np.float32),
    )


def test_empty_buffer():
    buf = AudioBuffer.empty(sample_rate_hz=24_000, channel_count=2)

    assert buf.channel_count == 2
    assert buf.frame_count == 0


# ---------------------------------------------------------------------
# Contract violations
# ---------------------------------------------------------------------

def test_rejects_mismatched_channel_lengths():
    with pytest.raises(InvalidAudioBufferError):
        AudioBuffer.from_channels([[0.0, 0.0], [0.0]], sample_rate_hz=8000)


def test_rejects_no_channels():
    with pytest.raises(InvalidAudioBufferError):
        AudioBuffer.from_channels([], sample_rate_hz=8000)


@pytest.mark.parametrize("rate", [0, -1, 24_000.0, True])
def test_rejects_bad_sample_rate(rate):
    with pytest.raises(InvalidAudioBufferError):
        AudioBuffer.from_channels([[0.0]], sample_rate_hz=rate)


def test_rejects_nan():
    with pytest.raises(InvalidAudioBufferError):
        AudioBuffer.from_channels([[0.0, float("nan")]], sample_rate_hz=8000)


def test_rejects_multi_dimensional_channel():
    with pytest.raises(InvalidAudioBufferError):
        AudioBuffer.from_channels([[[0.0], [0.0]]], sample_rate_hz=8000)


def test_empty_rejects_zero_channels():
    with pytest.raises(InvalidAudioBufferError):
        AudioBuffer.empty(sample_rate_hz=8000, channel_count=0)


@pytest.mark.parametrize("channel", [["a"], [[0.0, 0.1], [0.2]], [None]])
def test_rejects_non_numeric_channel(channel):
    with pytest.raises(InvalidAudioBufferError):
        AudioBuffer.from_channels([channel], sample_rate_hz=8000)
