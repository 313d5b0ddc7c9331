from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional

import numpy as np

from .engine import BrainFuckInterpreter
from .loader import load_file, load_string
from .state import ExecutionState
from .tape import Tape


@dataclass(frozen=True)
class RunOptions:
    trace: bool = False
    encoding: str = "utf-8"


@dataclass(frozen=True)
class RunResult:
    output: bytes
    memory: bytes
    memory_ptr: int
    steps: int
    trace: List[str] = field(default_factory=list)


def _used_memory(memory: Tape) -> bytes:
    # Trailing zero cells are dropped, but the pointer cell is always kept.
    nonzero = np.flatnonzero(memory.data)
    end = max(int(nonzero[-1]) + 1 if nonzero.size else 0, memory.pos() + 1)
    return memory.snapshot(0, end).tobytes()


def _to_result(state: ExecutionState) -> RunResult:
    return RunResult(
        output=bytes(state.output),
        memory=_used_memory(state.memory),
        memory_ptr=state.memory.pos(),
        steps=state.steps,
        trace=list(state.trace),
    )


def run_tape(
    program: Tape,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    opts = options or RunOptions()
    interpreter = BrainFuckInterpreter(
        stdin=stdin if stdin is not None else io.BytesIO(),
        stdout=stdout if stdout is not None else io.BytesIO(),
        trace=opts.trace,
        record_output=True,
    )
    return _to_result(interpreter.run(program))


def run_string(
    source: str,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    return run_tape(load_string(source), stdin=stdin, stdout=stdout, options=options)


def run_file(
    path: str | Path,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    opts = options or RunOptions()
    return run_tape(load_file(path, encoding=opts.encoding), stdin=stdin, stdout=stdout, options=opts)
