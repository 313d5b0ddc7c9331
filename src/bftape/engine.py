from __future__ import annotations

import io
import logging
import sys
from typing import BinaryIO, Optional

from .errors import (
    BFInvalidSymbolError,
    BFIOError,
    BFPointerError,
    BFTapeBoundsError,
    BFUnmatchedBracketError,
    make_runtime_error,
)
from .state import ExecutionState
from .tape import Tape

log = logging.getLogger(__name__)


class BrainFuckInterpreter:
    """
    Executes a symbol tape against a fresh byte memory tape.

    Loops are matched lazily with a stack of open-bracket positions:
    - '[' pushes the position just after itself. On a zero cell it scans
      forward, pushing nested '[' and popping on ']', until the stack is
      back to the depth it had before this '['.
    - ']' on a zero cell pops its entry; on a non-zero cell it jumps back
      to the position on top of the stack and leaves the entry in place.

    Execution ends when the program pointer reaches a cell past the loaded
    program, which reads as the tape's zero value.

    Streams are meant to be binary. Text streams are accepted as a latin-1
    approximation: a byte is written as chr(byte), and a character read is
    encoded as latin-1 with characters outside it replaced by '?'.

    Bytes written are only kept on the returned state when record_output
    is set; otherwise they go to stdout alone.
    """

    def __init__(
        self,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        *,
        trace: bool = False,
        record_output: bool = False,
    ):
        self.stdin = stdin
        self.stdout = stdout
        self.trace = trace
        self.record_output = record_output

    def run(self, program: Tape) -> ExecutionState:
        state = ExecutionState(program=program, is_tracing=self.trace)
        stdin = self.stdin if self.stdin is not None else getattr(sys.stdin, 'buffer', sys.stdin)
        stdout = self.stdout if self.stdout is not None else getattr(sys.stdout, 'buffer', sys.stdout)

        log.debug("Starting run at program position %d", program.pos())
        self._execute(state, stdin, stdout)
        log.debug(
            "Program finished after %d steps, memory pointer at %d",
            state.steps,
            state.memory.pos(),
        )
        return state

    # ===== Dispatch loop =====

    def _execute(self, state: ExecutionState, stdin, stdout) -> None:
        program = state.program
        memory = state.memory
        sentinel = program.default

        while True:
            symbol = program.next()
            if symbol == sentinel:
                return

            state.steps += 1
            if state.is_tracing:
                state.add_trace(
                    f"{state.steps:>8} pc={program.pos() - 1:<6} {symbol} "
                    f"ptr={memory.pos()} cell={memory.get()}"
                )

            if symbol == '>':
                memory.seek(1)
            elif symbol == '<':
                self._move_left(state)
            elif symbol == '+':
                memory.set((memory.get() + 1) & 0xFF)
            elif symbol == '-':
                memory.set((memory.get() - 1) & 0xFF)
            elif symbol == '.':
                self._write_byte(state, stdout, memory.get())
            elif symbol == ',':
                memory.set(self._read_byte(state, stdin))
            elif symbol == '[':
                self._left_bracket(state)
            elif symbol == ']':
                self._right_bracket(state)
            else:
                raise make_runtime_error(
                    BFInvalidSymbolError,
                    message=f"Invalid program symbol: {symbol!r}",
                    program=state.program_text(),
                    position=program.pos() - 1,
                    symbol=str(symbol),
                )

    def _move_left(self, state: ExecutionState) -> None:
        try:
            state.memory.seek(-1)
        except BFTapeBoundsError as e:
            raise make_runtime_error(
                BFPointerError,
                message=e.message,
                program=state.program_text(),
                position=state.program.pos() - 1,
            ) from e

    # ===== Brackets =====

    def _left_bracket(self, state: ExecutionState) -> None:
        program = state.program
        stack = state.bracket_stack
        orig_depth = len(stack)
        stack.append(program.pos())
        if state.memory.get() != 0:
            return

        sentinel = program.default
        while True:
            symbol = program.next()
            if symbol == '[':
                stack.append(program.pos())
            elif symbol == ']':
                stack.pop()
                if len(stack) == orig_depth:
                    return
            elif symbol == sentinel:
                open_pos = stack[orig_depth] - 1
                del stack[orig_depth:]
                raise make_runtime_error(
                    BFUnmatchedBracketError,
                    message="Reached end of tape before finding matching ]",
                    program=state.program_text(),
                    position=open_pos,
                    bracket='[',
                )

    def _right_bracket(self, state: ExecutionState) -> None:
        program = state.program
        stack = state.bracket_stack
        if not stack:
            raise make_runtime_error(
                BFUnmatchedBracketError,
                message="Encountered ] without matching [",
                program=state.program_text(),
                position=program.pos() - 1,
                bracket=']',
            )
        if state.memory.get() == 0:
            stack.pop()
        else:
            program.seek(stack[-1] - program.pos())

    # ===== I/O =====

    def _read_byte(self, state: ExecutionState, stdin) -> int:
        try:
            data = stdin.read(1)
        except OSError as e:
            raise make_runtime_error(
                BFIOError,
                message=f"Couldn't read from input: {e}",
                program=state.program_text(),
                position=state.program.pos() - 1,
            ) from e
        if not data:
            return 0
        if isinstance(data, str):
            return data.encode('latin-1', errors='replace')[0]
        return data[0]

    def _write_byte(self, state: ExecutionState, stdout, byte: int) -> None:
        try:
            if isinstance(stdout, io.TextIOBase):
                stdout.write(chr(byte))
            else:
                try:
                    stdout.write(bytes((byte,)))
                except TypeError:
                    # Text-like object outside the io hierarchy.
                    stdout.write(chr(byte))
            stdout.flush()
        except OSError as e:
            raise make_runtime_error(
                BFIOError,
                message=f"Couldn't write to output: {e}",
                program=state.program_text(),
                position=state.program.pos() - 1,
            ) from e
        if self.record_output:
            state.output.append(byte)


def run_program(
    program: Tape,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    trace: bool = False,
    record_output: bool = False,
) -> ExecutionState:
    return BrainFuckInterpreter(
        stdin=stdin, stdout=stdout, trace=trace, record_output=record_output
    ).run(program)
