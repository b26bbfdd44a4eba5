import argparse
import logging
import sys

from wavecodec import WavContainer, WavError, describe, read_wave, write_wave
from wavecodec.config import DATA_SIZE_WIDTHS, get_settings
from wavecodec.tones import pure_tone, quantize

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def cmd_info(args):
    container = read_wave(args.input, args.data_size_width)
    print(describe(container))


def cmd_copy(args):
    container = read_wave(args.input, args.data_size_width)
    write_wave(args.output, container, args.recompute, args.data_size_width)
    print(f"Copied {args.input} -> {args.output} ({container.n_frames} frames)")


def cmd_tone(args):
    signal = pure_tone(args.freq, args.duration, args.sample_rate, args.amplitude, args.channels)
    container = WavContainer.from_samples(
        quantize(signal, args.bits),
        args.sample_rate,
        channels=args.channels,
        bits_per_sample=args.bits,
        data_size_width=args.data_size_width,
    )
    write_wave(args.output, container, data_size_width=args.data_size_width)
    print(f"Wrote {args.freq}Hz tone to {args.output} ({container.duration:.2f}s)")


def build_parser():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="wavecodec - PCM WAV reader/writer")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--data-size-width",
        type=int,
        choices=DATA_SIZE_WIDTHS,
        default=settings.data_size_width,
        help="Bytes in the data chunk size field (default: %(default)s)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print the header of a WAV file")
    info.add_argument("input", help="Input WAV file")
    info.set_defaults(func=cmd_info)

    copy = sub.add_parser("copy", help="Decode a WAV file and write it back out")
    copy.add_argument("input", help="Input WAV file")
    copy.add_argument("output", help="Output WAV file")
    copy.add_argument("--recompute", action="store_true", help="Recompute byte rate and block align")
    copy.set_defaults(func=cmd_copy)

    tone = sub.add_parser("tone", help="Write a sine tone")
    tone.add_argument("output", help="Output WAV file")
    tone.add_argument("--freq", type=float, default=440.0, help="Frequency in Hz (default: 440)")
    tone.add_argument("--duration", type=float, default=1.0, help="Duration in seconds (default: 1)")
    tone.add_argument("--sample-rate", type=positive_int, default=44100, help="Sample rate (default: 44100)")
    tone.add_argument("--bits", type=int, choices=(8, 16, 32), default=16, help="Bits per sample (default: 16)")
    tone.add_argument("--channels", type=positive_int, default=1, help="Channel count (default: 1)")
    tone.add_argument("--amplitude", type=float, default=0.5, help="Amplitude 0-1 (default: 0.5)")
    tone.set_defaults(func=cmd_tone)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        args.func(args)
    except WavError as err:
        print(f"error {err.code}: {err.message}", file=sys.stderr)
        return 1
    except ValueError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
