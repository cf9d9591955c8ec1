"""
Command-line entry point for offline audio work.

    tts-audio to-wav --input payload.b64 --output story.wav
    tts-audio to-wav --input the_lost_key.b64   # -> $AUDIO_EXPORT_DIR/the_lost_key_podcast.wav
    tts-audio info story.wav

Defaults for sample rate and channel count come from AppConfig
(TTS_SAMPLE_RATE_HZ / TTS_CHANNELS).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from audio.errors import AudioCodecError
from audio.pipeline import (
    configure_logging,
    decode_tts_audio,
    export_wav,
    podcast_download_filename,
)
from config import AppConfig
from protocol.wav import parse_wav_header


def _cmd_to_wav(args: argparse.Namespace) -> int:
    src = Path(args.input)
    payload = src.read_bytes()

    buffer = decode_tts_audio(
        payload,
        sample_rate_hz=args.sample_rate,
        channel_count=args.channels,
    )

    if args.output is None:
        out = args.export_dir / podcast_download_filename(src.stem)
    else:
        out = Path(args.output)

    print(export_wav(buffer, out))
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    header = parse_wav_header(Path(args.path).read_bytes())
    print("sample_rate:", header.sample_rate_hz)
    print("channels:", header.channels)
    print("frames:", header.frame_count)
    print("duration_s:", round(header.frame_count / header.sample_rate_hz, 3))
    return 0


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tts-audio")
    sub = ap.add_subparsers(dest="command", required=True)

    to_wav = sub.add_parser("to-wav", help="Convert a base64 PCM16 TTS payload to WAV")
    to_wav.add_argument("--input", required=True, help="File holding the base64 payload")
    to_wav.add_argument(
        "--output",
        default=None,
        help="Destination .wav path (default: AUDIO_EXPORT_DIR/<input name>_podcast.wav)",
    )
    to_wav.add_argument(
        "--sample-rate",
        type=int,
        default=config.tts_sample_rate_hz,
        help="Sample rate the TTS service emits (Hz)",
    )
    to_wav.add_argument(
        "--channels",
        type=int,
        default=config.tts_channels,
        help="Channel count the TTS service emits",
    )
    to_wav.set_defaults(func=_cmd_to_wav, export_dir=config.audio_export_dir)

    info = sub.add_parser("info", help="Print the header of a canonical PCM16 WAV file")
    info.add_argument("path")
    info.set_defaults(func=_cmd_info)

    return ap


def main(argv: Sequence[str] | None = None) -> int:
    config = AppConfig.load_from_env()
    configure_logging(config)

    args = build_parser(config).parse_args(argv)

    try:
        return args.func(args)
    except AudioCodecError as e:
        print(f"failed to process audio data: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"failed to access audio file: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
