from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import List, Optional

from .engine import run_program
from .errors import BFError
from .loader import load_file, load_stream

log = logging.getLogger(__name__)

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _configure_logging(verbosity: int) -> None:
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _dump_memory(state, width: int = 16) -> None:
    memory = state.memory
    ptr = memory.pos()
    start = max(0, ptr - width // 2)
    cells = memory.snapshot(start, start + width).tolist()
    row = " ".join(f"[{v:3d}]" if start + i == ptr else f" {v:3d} " for i, v in enumerate(cells))
    sys.stderr.write(f"ptr={ptr} steps={state.steps}\n{start:>6} | {row}\n")


def _load_program_stdin(encoding: str):
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return load_stream(sys.stdin)
    stream = io.TextIOWrapper(buffer, encoding=encoding)
    try:
        return load_stream(stream)
    finally:
        # Leave sys.stdin.buffer open for the program's own input.
        stream.detach()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bftape",
        description="Brainfuck interpreter over growable tapes.",
    )
    parser.add_argument("program", help="Program file, or '-' to read the program from stdin")
    parser.add_argument("--encoding", default="utf-8", help="Program encoding, for files and for '-' (default utf-8)")
    parser.add_argument("--trace", action="store_true", help="Print an instruction trace to stderr after the run")
    parser.add_argument("--dump", action="store_true", help="Print the memory around the pointer to stderr after the run")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.program == "-":
            program = _load_program_stdin(args.encoding)
        else:
            program = load_file(args.program, encoding=args.encoding)
        log.info("Running %s", args.program)
        state = run_program(program, trace=args.trace)
    except BFError as e:
        sys.stdout.flush()
        print(e, file=sys.stderr)
        return 1

    if args.trace:
        sys.stderr.write("\n".join(state.trace) + "\n")
    if args.dump:
        _dump_memory(state)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
