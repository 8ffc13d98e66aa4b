from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .browser import FileSelector
from .config import parse_chunk_size
from .errors import FileCryptoError
from .logging_utils import configure_logging, resolve_level
from .pipeline import Direction
from .prompts import ask_direction, ask_password
from .selftest import run_self_test
from .service import default_output_path, run_file_crypto


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filecrypt",
        description="Encrypt or decrypt a file with a password (AES-256-CBC, scrypt key).",
    )
    parser.add_argument("--log-level", default=None, help="Override FILECRYPT_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command")

    for direction in Direction:
        cmd = sub.add_parser(direction.value, help=f"{direction.value.capitalize()} a file")
        cmd.add_argument("path", nargs="?", help="File to process; browse interactively if omitted")
        cmd.add_argument("-o", "--output", help=f"Output path (default: <path>.{direction.past_tense})")
        cmd.add_argument(
            "--no-atomic",
            action="store_true",
            help="Write the output in place instead of via a temporary file",
        )

    sub.add_parser("self-test", help="Encrypt and decrypt a sample with a throwaway password")
    return parser


def _process(
    direction: Direction,
    path: Optional[str],
    output: Optional[str],
    atomic: bool,
    chunk_size: int,
) -> None:
    if path:
        source = Path(path).resolve()
    else:
        print(f"Select the file to {direction.value}:")
        source = FileSelector().run()
    dest = Path(output) if output else default_output_path(source, direction)

    password = ask_password(direction)
    run_file_crypto(
        direction, source, dest, password, atomic=atomic, chunk_size=chunk_size
    )
    del password

    print(f"File {direction.past_tense} successfully")
    print(f"Output file: {dest}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        resolve_level(args.log_level)
        chunk_size = parse_chunk_size(os.getenv("FILECRYPT_CHUNK_SIZE"))
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    configure_logging(args.log_level)

    try:
        if args.command == "self-test":
            ok = run_self_test()
            print("Self-test passed" if ok else "Self-test FAILED")
            return 0 if ok else 1

        if args.command is None:
            _process(ask_direction(), None, None, True, chunk_size)
        else:
            _process(
                Direction(args.command), args.path, args.output, not args.no_atomic, chunk_size
            )
    except FileCryptoError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nAborted", file=sys.stderr)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
