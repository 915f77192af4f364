from __future__ import annotations

import argparse
from pathlib import Path

from .audio import decode_wav
from .config import settings
from .logging_utils import get_logger
from .models import SignalDescriptor, TransmissionConfig, WaveformType, default_signals
from .services import ExportService, InsufficientDurationError, assemble_burst, export_filename


logger = get_logger(__name__)


_TYPE_ALIASES = {
    "cw": WaveformType.CW,
    "lfm-up": WaveformType.LFM_UP,
    "lfm-down": WaveformType.LFM_DOWN,
}


def parse_signal(spec: str) -> SignalDescriptor:
    """Parse ``TYPE:FREQ:BW:PW[:AMP]``, e.g. ``lfm-up:5000:4000:0.5:0.8``."""
    parts = spec.split(":")
    if len(parts) not in (4, 5):
        raise argparse.ArgumentTypeError(
            f"expected TYPE:FREQ:BW:PW[:AMP], got '{spec}'"
        )
    kind = _TYPE_ALIASES.get(parts[0].lower())
    if kind is None:
        raise argparse.ArgumentTypeError(
            f"unknown signal type '{parts[0]}' (choose from {', '.join(_TYPE_ALIASES)})"
        )
    try:
        numbers = [float(p) for p in parts[1:]]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number in '{spec}'") from exc
    amplitude = numbers[3] if len(numbers) == 4 else 0.8
    return SignalDescriptor(
        active=True,
        type=kind,
        center_freq_hz=numbers[0],
        bandwidth_hz=numbers[1],
        pulse_width_sec=numbers[2],
        amplitude=amplitude,
    )


def _cmd_export(args: argparse.Namespace) -> int:
    signals = args.signal or default_signals()
    burst = assemble_burst(signals, args.sample_rate)
    config = TransmissionConfig(
        inter_sequence_interval_sec=args.interval,
        total_duration_sec=args.total,
    )
    try:
        data = ExportService().export_wav(burst, config)
    except InsufficientDurationError as exc:
        logger.error("Export failed: %s", exc)
        return 2

    out_path = Path(args.out) if args.out else Path(export_filename())
    out_path.write_bytes(data)
    logger.info("Wrote %s (%d bytes, %d Hz)", out_path, len(data), args.sample_rate)
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    try:
        samples, sample_rate = decode_wav(Path(args.file).read_bytes())
    except ValueError as exc:
        logger.error("Cannot read %s: %s", args.file, exc)
        return 1
    peak = max((abs(s) for s in samples), default=0.0)
    duration = len(samples) / sample_rate if sample_rate > 0 else 0.0
    logger.info(
        "%s: %d samples @%dHz (%.3fs), peak=%.4f",
        args.file,
        len(samples),
        sample_rate,
        duration,
        peak,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="signalgen CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Write a pulsed WAV file")
    export.add_argument("--out", default=None, help="Output path (.wav)")
    export.add_argument(
        "--signal",
        action="append",
        type=parse_signal,
        help="Active pulse as TYPE:FREQ:BW:PW[:AMP]; repeat for more pulses",
    )
    export.add_argument("--interval", type=float, default=1.0, help="Silence between bursts (s)")
    export.add_argument("--total", type=float, default=5.0, help="Total duration (s)")
    export.add_argument(
        "--sample-rate", type=int, default=settings.sample_rate_hz, help="Sample rate in Hz"
    )
    export.set_defaults(func=_cmd_export)

    inspect = sub.add_parser("inspect", help="Summarise a WAV written by export")
    inspect.add_argument("file")
    inspect.set_defaults(func=_cmd_inspect)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
