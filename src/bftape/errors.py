from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Type, TypeVar


_CONTEXT_WIDTH = 24


def _build_context(program: str, position: int, *, width: int = _CONTEXT_WIDTH) -> str:
    idx = max(0, min(position, len(program)))
    start = max(0, idx - width)
    end = min(len(program), idx + width + 1)

    line = program[start:end]
    prefix = '...' if start > 0 else ''
    suffix = '...' if end < len(program) else ''
    caret = ' ' * (len(prefix) + idx - start) + '^'
    return f"  {prefix}{line}{suffix}\n  {caret}"


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if 'without matching [' in msg:
        return "Every ']' must close an earlier '['. Look for a stray ']' at or before the caret."
    if 'matching ]' in msg:
        return "The '[' at the caret is never closed. Add the missing ']' or remove the extra '['."
    if 'below 0' in msg:
        return "The program moved the memory pointer left of cell 0. Check the '<' moves leading up to the caret."
    if 'invalid program symbol' in msg:
        return 'Programs should be built with load_string/load_file, which drop non-instruction characters.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFLoadError(BFError):
    path: str


@dataclass
class BFTapeBoundsError(BFError):
    position: int
    offset: int


@dataclass
class BFRuntimeError(BFError):
    position: int
    context: str


@dataclass
class BFPointerError(BFRuntimeError):
    pass


@dataclass
class BFUnmatchedBracketError(BFRuntimeError):
    bracket: str = ''


@dataclass
class BFInvalidSymbolError(BFRuntimeError):
    symbol: str = ''


@dataclass
class BFIOError(BFRuntimeError):
    pass


E = TypeVar('E', bound=BFRuntimeError)


def make_runtime_error(cls: Type[E], *, message: str, program: str, position: int, **extra) -> E:
    ctx = _build_context(program, position)
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"RuntimeError: {message} (symbol {position})\n{ctx}{hint_block}",
        position=position,
        context=ctx,
        **extra,
    )
