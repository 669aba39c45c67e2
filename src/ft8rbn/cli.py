from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .channels import DEFAULT_CHANNEL_TABLE, load_channel_table
from .config import get_default_settings, load_settings
from .encoder import DatagramEncoder
from .transport import DryRunSink, TransportError, UdpSink
from .uploader import upload_lines

logger = logging.getLogger(__name__)


def port_number(text: str) -> int:
    try:
        port = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be 0-65535, got {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ft8rbn",
        description="Send FT8 decodes to RBN Aggregator as WSJT-X UDP datagrams",
    )
    parser.add_argument("broadcast_ip", help="Broadcast IP address")
    parser.add_argument("broadcast_port", type=port_number, help="Broadcast port")
    parser.add_argument("decode_file", help="Decode file")
    parser.add_argument("--config", default=None, help="JSON file with uploader settings")
    parser.add_argument("--channels", default=None, help="JSON file with channel base frequencies (kHz)")
    parser.add_argument("--dry-run", action="store_true", help="Log datagrams instead of sending them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = get_default_settings() if args.config is None else load_settings(args.config)
        table = DEFAULT_CHANNEL_TABLE if args.channels is None else load_channel_table(args.channels)
    except (OSError, ValueError) as exc:
        logger.error("Bad configuration: %s", exc)
        return 1

    try:
        decode_file = open(args.decode_file, "r", encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        logger.error("Cannot open input file %s: %s", args.decode_file, exc)
        return 1

    with decode_file:
        try:
            sink = DryRunSink() if args.dry_run else UdpSink(args.broadcast_ip, args.broadcast_port)
        except TransportError as exc:
            logger.error("%s", exc)
            return 1
        with sink:
            encoder = DatagramEncoder(table=table, settings=settings)
            try:
                stats = upload_lines(decode_file, sink, encoder=encoder)
            except TransportError as exc:
                logger.error("%s", exc)
                return 1

    logger.info(
        "%s: %d lines, %d skipped, %d status + %d decode datagrams, %d bytes",
        args.decode_file,
        stats.lines,
        stats.skipped,
        stats.status_datagrams,
        stats.decode_datagrams,
        stats.total_bytes,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
