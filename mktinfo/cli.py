"""
Command-line interface
======================

Entry point for the ``mktinfo`` command.

Examples:
    mktinfo --list
    mktinfo --list --strategy probe
    mktinfo --port COM3
    mktinfo --port /dev/ttyUSB0 --baudrate 115200 --command AT+GMR
    mktinfo --port /dev/ttyUSB0 --detect-only -v
"""

import argparse
import logging
import sys
from typing import List, Optional

from .commands import DEFAULT_TIMEOUT, encode_command, expect_ok
from .data_types import BAUD_RATE_CANDIDATES, ProbeSettings
from .errors import NoPortsAvailable
from .negotiator import negotiate
from .ports import ENUMERATORS, make_enumerator
from .reader import DeviceInfoReader

EXIT_OK = 0
EXIT_DEVICE_ERROR = 1
EXIT_NO_PORTS = 3


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def non_negative_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def ascii_command(text: str) -> bytes:
    """AT commands are plain ASCII; CR is appended."""
    try:
        return encode_command(text)
    except UnicodeEncodeError:
        raise argparse.ArgumentTypeError(f"command must be ASCII: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mktinfo",
        description="MediaTek (MKT) Device Info Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Without --baudrate the rate is detected by sending AT at each of
    """ + ", ".join(str(b) for b in BAUD_RATE_CANDIDATES) + """
and keeping the first rate that answers.
        """,
    )
    parser.add_argument('--port', '-p', default=None,
                        help='Serial port (default: first discovered port)')
    parser.add_argument('--baudrate', '-b', type=positive_int, default=None,
                        help='Use this baud rate instead of detecting it')
    parser.add_argument('--command', '-c', type=ascii_command, default=None,
                        help='Command to send (default: AT+DEVICEINFO)')
    parser.add_argument('--timeout', '-t', type=non_negative_float, default=DEFAULT_TIMEOUT,
                        help=f'Read timeout per attempt in seconds (default: {DEFAULT_TIMEOUT})')
    parser.add_argument('--strategy', '-s', choices=sorted(ENUMERATORS), default='system',
                        help='Port discovery strategy (default: system)')
    parser.add_argument('--list', '-l', action='store_true',
                        help='List discovered ports and exit')
    parser.add_argument('--detect-only', action='store_true',
                        help='Only detect the baud rate')
    parser.add_argument('--require-ok', action='store_true',
                        help='Only accept a probe response containing OK')
    parser.add_argument('--accept-empty', action='store_true',
                        help='Accept an empty probe response (original behaviour)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging, show every probe attempt')
    return parser


def settings_from_args(args: argparse.Namespace) -> ProbeSettings:
    kwargs = dict(
        timeout=args.timeout,
        accept_empty=args.accept_empty,
        strategy=args.strategy,
    )
    if args.command:
        kwargs["info_command"] = args.command
    if args.require_ok:
        kwargs["verify"] = expect_ok
    return ProbeSettings(**kwargs)


def first_port(reader: DeviceInfoReader) -> str:
    """First discovered port; raises NoPortsAvailable when there is none."""
    ports = reader.refresh_ports()
    if not ports:
        raise NoPortsAvailable(reader.enumerator.name)
    return ports[0]


def _detect(port: str, settings: ProbeSettings, reader: DeviceInfoReader, verbose: bool) -> int:
    baud_rate, attempts = negotiate(
        port,
        candidates=settings.candidates,
        command=settings.probe_command,
        timeout=settings.timeout,
        opener=reader.opener,
        buffer_size=settings.buffer_size,
        accept_empty=settings.accept_empty,
        verify=settings.verify,
    )
    if verbose:
        for attempt in attempts:
            print(f"  {attempt}")
    if baud_rate is None:
        print(f"Error detecting baud rate: could not detect baud rate on {port}")
        return EXIT_DEVICE_ERROR
    print(baud_rate)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = settings_from_args(args)
    enumerator = make_enumerator(settings.strategy)
    reader = DeviceInfoReader(enumerator=enumerator, settings=settings)

    if args.list:
        ports = reader.refresh_ports()
        if not ports:
            print("No COM ports detected")
            return EXIT_OK
        for port in ports:
            print(port)
        return EXIT_OK

    port = args.port
    if port is None:
        try:
            port = first_port(reader)
        except NoPortsAvailable as e:
            print(f"ERROR: {e}")
            return EXIT_NO_PORTS
        print(f"Using {port}")

    if args.detect_only:
        return _detect(port, settings, reader, args.verbose)

    reading = reader.read_info(port, args.baudrate)
    print(reading.message())
    if reading.ok and args.verbose:
        print(f"  ({reading.baud_rate} baud)")
    return EXIT_OK if reading.ok else EXIT_DEVICE_ERROR


if __name__ == "__main__":
    sys.exit(main())
