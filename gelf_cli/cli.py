"""
gelf-cli - Main entry point.

Builds a Logger from a YAML config and/or command-line flags and sends (or
just encodes) a single message.
"""

import argparse
import dataclasses
import math
import sys
from typing import Any, Dict, List, Optional, Tuple

from gelf_logger import Level, Message, MqttBackend, WireMessage
from gelf_logger.config import BACKEND_TYPES, LoggerConfig, build_logger, resolve_hostname


def parse_field(raw: str) -> Tuple[str, Any]:
    """
    Parse a ``KEY=VALUE`` field argument.

    Integers and floats are sent as numbers, everything else as strings.

    Raises:
        ValueError: If the argument has no ``=`` or an empty key
    """
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise ValueError(f"Invalid field '{raw}', expected KEY=VALUE")

    for convert in (int, float):
        try:
            number = convert(value)
        except ValueError:
            continue
        if math.isfinite(number):
            return key, number
    return key, value


def load_config(args: argparse.Namespace) -> LoggerConfig:
    """Load the YAML config (if any) and apply command-line overrides."""
    config = LoggerConfig.from_yaml(args.config) if args.config else LoggerConfig()

    overrides = {
        name: getattr(args, attr)
        for name, attr in (
            ("type", "backend"),
            ("host", "host"),
            ("port", "port"),
            ("compression", "compression"),
        )
        if getattr(args, attr) is not None
    }
    if overrides:
        backend = config.backend
        if "type" in overrides and "port" not in overrides:
            # re-derive the port default for the new backend type
            overrides["port"] = None
        config = dataclasses.replace(config, backend=dataclasses.replace(backend, **overrides))

    if args.hostname:
        config = dataclasses.replace(config, hostname=args.hostname)
    return config


def build_message(args: argparse.Namespace) -> Message:
    fields: Dict[str, Any] = dict(parse_field(raw) for raw in args.field)
    message = Message(args.short_message, Level.from_name(args.level))
    if args.full:
        message = message.with_full_message(args.full)
    return message.with_all_metadata(fields)


def send(config: LoggerConfig, message: Message) -> None:
    """Log one message through a Logger built from config."""
    logger = build_logger(config)
    if isinstance(logger.backend, MqttBackend) and not logger.backend.connect():
        raise ConnectionError(f"Unable to connect to MQTT broker at {logger.backend.broker}")

    with logger:
        logger.log_message(message)

    print(f"✅ Sent to {config.backend.type}://{config.backend.host}:{config.backend.port}")


def encode(config: LoggerConfig, message: Message) -> str:
    """Render the GELF JSON a Logger built from config would send."""
    defaults: Dict[str, Any] = dict(config.default_metadata)
    return WireMessage(message, resolve_hostname(config), defaults).to_gelf()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gelf-cli",
        description="gelf-cli - Send GELF messages to Graylog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Send over UDP (gzip) to a Graylog GELF input
  gelf-cli --host graylog.local send "Deploy finished" --level notice

  # Use a YAML config, add fields
  gelf-cli --config config/gelf.yaml send "Backup failed" --level error --field job=nightly

  # Print the GELF JSON without sending
  gelf-cli --hostname web-01 encode "Hello" --field facility=billing
"""
    )

    # Global arguments
    parser.add_argument("--config", help="Path to logger config YAML")
    parser.add_argument(
        "--backend",
        choices=sorted(BACKEND_TYPES),
        help="Transport (default: udp, or the config's)"
    )
    parser.add_argument("--host", help="GELF input / broker host")
    parser.add_argument("--port", type=int, help="GELF input / broker port")
    parser.add_argument(
        "--compression",
        choices=["none", "gzip", "zlib"],
        help="Payload compression (default: backend's)"
    )
    parser.add_argument("--hostname", help="Value of the GELF host field (default: detected)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for name, help_text in (
        ("send", "Send one message"),
        ("encode", "Print the GELF JSON for one message"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("short_message", help="Short message text")
        sub.add_argument("--full", help="Full message text")
        sub.add_argument("--level", default="info", help="Severity name (default: info)")
        sub.add_argument(
            "--field",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Additional field (repeatable)"
        )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
        message = build_message(args)

        if args.command == "send":
            send(config, message)
        elif args.command == "encode":
            print(encode(config, message))

    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
