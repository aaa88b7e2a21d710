"""tlvbox command-line interface.

Usage:
    python -m tlvbox dump --input stream.bin
    echo 00000001000000022a2a | python -m tlvbox dump --hex
    python -m tlvbox encode --input entries.json
    python -m tlvbox serve --port 10290
    python -m tlvbox version
"""
from __future__ import annotations

import argparse
import base64
import json
import sys
from typing import List, Optional

from tlvbox import __version__
from tlvbox.domain import box_from_entries
from tlvbox.errors import TlvError
from tlvbox.parsing.tlv import describe_records, iter_records


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tlvbox", description="Inspect and build TLV box streams")
    sub = parser.add_subparsers(dest="command")

    dump_p = sub.add_parser("dump", help="Print the records of a TLV stream as JSON lines")
    dump_p.add_argument("--input", "-i", metavar="FILE", help="Read the stream from FILE instead of stdin")
    dump_p.add_argument("--offset", type=int, default=0, help="Byte offset of the first record")
    dump_p.add_argument("--length", type=int, default=None, help="Number of bytes to decode")
    dump_p.add_argument("--hex", action="store_true", help="Input is hex text rather than raw bytes")

    encode_p = sub.add_parser("encode", help="Encode a JSON entry list and print the stream as base64")
    encode_p.add_argument("--input", "-i", metavar="FILE", help="Read JSON from FILE instead of stdin")

    serve_p = sub.add_parser("serve", help="Run the HTTP inspection service")
    serve_p.add_argument("--ip", type=str, default=None, help="IP address to bind to")
    serve_p.add_argument("--port", type=int, default=None, help="Port to listen on")

    sub.add_parser("version", help="Print version and exit")
    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    return sys.stdin.buffer.read()


def _cmd_dump(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    if args.hex:
        raw = bytes.fromhex(raw.decode("ascii"))
    for row in describe_records(iter_records(raw, args.offset, args.length)):
        print(json.dumps(row))


def _cmd_encode(args: argparse.Namespace) -> None:
    entries = json.loads(_read_input(args.input))
    box = box_from_entries(entries)
    print(base64.b64encode(box.serialize()).decode("ascii"))


def _cmd_serve(args: argparse.Namespace) -> None:
    from tlvbox.service import InspectionServer
    from tlvbox.service_app import get_settings

    settings = get_settings()
    overrides = {}
    if args.ip is not None:
        overrides["server_ip"] = args.ip
    if args.port is not None:
        overrides["server_port"] = args.port
    InspectionServer(settings.model_copy(update=overrides)).start()


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"tlvbox {__version__}")
        return

    try:
        if args.command == "dump":
            _cmd_dump(args)
        elif args.command == "encode":
            _cmd_encode(args)
        elif args.command == "serve":
            _cmd_serve(args)
    except TlvError as e:
        print(f"tlvbox: error [{type(e).__name__}]: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"tlvbox: invalid input: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
