#!/usr/bin/env python3
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.pretty import Pretty

from activitywire import __version__
from activitywire.codec import dumps, loads
from activitywire.config import Config, InvalidConfigError
from activitywire.errors import ActivityWireError
from activitywire.log import create_logger, get_logger

parser = ArgumentParser(prog="activitywire", description="Inspect Discord activity payloads")
parser.add_argument("-v", "--version",
                    dest="version",
                    action="store_true",
                    help="Print out the program's version and exit"
                    )
parser.add_argument("--config", "-c",
                    dest="config",
                    action="store",
                    type=str,
                    help="Path to config file",
                    metavar="Path")
parser.add_argument("--debug", "-d",
                    dest="debug",
                    action="store_true",
                    help="Enable debug logging",
                    )
parser.add_argument("--log", "-l",
                    dest="log",
                    action="store",
                    type=str,
                    help="Path to log file, logs go to stderr when not given",
                    metavar="Path")
subparsers = parser.add_subparsers(dest="command")

decode_parser = subparsers.add_parser("decode", help="Decode an activity and show the record")
decode_parser.add_argument("file", nargs="?", help="JSON file to read, stdin when omitted")

encode_parser = subparsers.add_parser("encode", help="Decode an activity and print its normalised wire JSON")
encode_parser.add_argument("file", nargs="?", help="JSON file to read, stdin when omitted")
encode_parser.add_argument("--indent",
                           dest="indent",
                           action="store",
                           type=int,
                           help="Override the configured indentation (0 for compact output)")


def _read(file: Optional[str]) -> bytes:
    if file:
        return Path(file).read_bytes()
    return sys.stdin.buffer.read()


def run(argv: Optional[list[str]] = None, console: Optional[Console] = None) -> int:
    args: Namespace = parser.parse_args(argv)
    console = console or Console()
    error_console = Console(stderr=True)

    if args.version:
        console.print(__version__)
        return 0

    if not args.command:
        parser.print_help()
        return 2

    if getattr(args, "indent", None) is not None and args.indent < 0:
        parser.error(f"argument --indent: must not be negative, got {args.indent}")

    try:
        config = Config(Path(args.config).resolve()) if args.config else Config.get_config()
    except InvalidConfigError as exc:
        error_console.print(f"error: {exc}", markup=False)
        return 1

    log_path = args.log or config.logging.log_file
    create_logger(verbose=args.debug or config.logging.verbose, log=Path(log_path).resolve() if log_path else None)
    _log = get_logger()

    try:
        activity = loads(_read(args.file))
        if args.command == "decode":
            console.print(Pretty(activity))
            console.print(f"rich presence: {activity.is_rich_presence()}", markup=False)
            console.print(f"custom status: {activity.is_custom_status()}", markup=False)
        else:
            options = config.output.json_options()
            if args.indent is not None:
                options["indent"] = args.indent or None
            console.print(dumps(activity, **options), markup=False, emoji=False, highlight=False, soft_wrap=True)
    except (ActivityWireError, OSError) as exc:
        _log.debug(f"{args.command} failed: {exc}")
        error_console.print(f"error: {exc}", markup=False)
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
