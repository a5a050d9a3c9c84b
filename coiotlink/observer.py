import argparse
import sys
from typing import Optional, Sequence, TextIO

from coiotlink.core.errors import CoIoTError
from coiotlink.observer_app import CoIoTSettings, MulticastObserver
from coiotlink.observer_app.logging import create_logger
from coiotlink.transports.coap import CoapTransport


def print_status(settings: CoIoTSettings, out: TextIO = sys.stdout) -> None:
    if not settings.device_host:
        raise ValueError("A device address is required (--host or COIOT_DEVICE_HOST).")
    transport = CoapTransport(settings.device_host, port=settings.coap_port, timeout=settings.request_timeout)
    for reading in transport.get_readings():
        print(reading.render(), file=out)


def print_announcements(settings: CoIoTSettings, verbose: bool = False, out: TextIO = sys.stdout) -> None:
    logger = create_logger("coiotlink.observer", settings.log_ring_size, verbose=verbose)
    observer = MulticastObserver(settings, logger=logger)
    for announcement in observer.announcements():
        host, port = announcement.sender
        identity = announcement.identity or "unknown device"
        print(f"{identity} @ {host}:{port} seq={announcement.sequence} valid={announcement.validity}", file=out)
        for reading in announcement.readings:
            print(f"  {reading.render()}", file=out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coiotlink", description="Read CoIoT device status.")
    parser.add_argument("--verbose", action="store_true", help="Log observer events to stderr.")
    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Fetch descriptor and status once and print the readings.")
    status.add_argument("--host", type=str, default=None, help="Device IP address or host name.")
    status.add_argument("--port", type=int, default=None, help="Device CoAP port.")
    status.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")

    observe = sub.add_parser("observe", help="Listen for multicast status announcements.")
    observe.add_argument("--port", type=int, default=None, help="Multicast port to listen on.")
    observe.add_argument("--timeout", type=float, default=None, help="Give up after this many silent seconds.")
    return parser


def settings_from_args(args: argparse.Namespace) -> CoIoTSettings:
    overrides = {}
    if args.command == "status":
        if args.host is not None:
            overrides["device_host"] = args.host
        if args.port is not None:
            overrides["coap_port"] = args.port
        if args.timeout is not None:
            overrides["request_timeout"] = args.timeout
    else:
        if args.port is not None:
            overrides["multicast_port"] = args.port
        if args.timeout is not None:
            overrides["receive_timeout"] = args.timeout
    return CoIoTSettings(**overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings_from_args(args)
    try:
        if args.command == "status":
            print_status(settings)
        else:
            print_announcements(settings, verbose=args.verbose)
    except KeyboardInterrupt:
        return 130
    except (CoIoTError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
