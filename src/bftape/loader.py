from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TextIO

from .errors import BFLoadError
from .tape import Tape

log = logging.getLogger(__name__)

SYMBOLS = '<>+-.,[]'
SYMBOL_DTYPE = 'U1'

_NON_SYMBOL = re.compile(f"[^{re.escape(SYMBOLS)}]")


def filter_symbols(text: str) -> str:
    """Drop whitespace, then everything outside the instruction alphabet."""
    text = re.sub(r'\s+', '', text)
    return _NON_SYMBOL.sub('', text)


def load_string(text: str) -> Tape:
    symbols = filter_symbols(text)
    log.debug("Loaded %d symbols from %d characters of source", len(symbols), len(text))
    return Tape.from_iterable(symbols, SYMBOL_DTYPE)


def load_stream(stream: TextIO) -> Tape:
    try:
        text = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        name = getattr(stream, 'name', '<stream>')
        raise BFLoadError(message=f"Couldn't read program: {e}", path=str(name)) from e
    return load_string(text)


def load_file(path: str | Path, *, encoding: str = 'utf-8') -> Tape:
    p = Path(path)
    try:
        text = p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise BFLoadError(message=f"Couldn't read file: {e}", path=str(p)) from e
    return load_string(text)
