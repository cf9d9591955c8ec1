"""
Audio codec exceptions.

All codec failures are local, synchronous validation errors. None of them
are transient: the upstream payload or buffer is wrong, so callers must not
retry at this layer.
"""

from __future__ import annotations


class AudioCodecError(Exception):
    """Base class for audio codec errors."""


class MalformedEncodingError(AudioCodecError):
    """
    Raised when a base64 payload cannot be decoded.

    Covers characters outside the standard alphabet, misplaced or excess
    padding, and lengths that cannot come from base64 grouping. No bytes are
    returned for a malformed payload.
    """


class TruncatedAudioDataError(AudioCodecError):
    """
    Raised when raw PCM bytes do not end on a frame boundary.

    A partial trailing sample or frame means the payload was corrupted or
    cut short in transit; it is never silently dropped.
    """


class InvalidAudioBufferError(AudioCodecError):
    """
    Raised when an audio buffer violates its structural contract.

    Channel lengths differ, the sample rate or channel count is below 1,
    samples are not finite, or a header field cannot hold the value.
    """
