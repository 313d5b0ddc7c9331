from .tape import GROWTH_BATCH, Tape
from .loader import SYMBOLS, filter_symbols, load_file, load_stream, load_string
from .engine import BrainFuckInterpreter, run_program
from .state import ExecutionState
from .errors import (
    BFError,
    BFInvalidSymbolError,
    BFIOError,
    BFLoadError,
    BFPointerError,
    BFRuntimeError,
    BFTapeBoundsError,
    BFUnmatchedBracketError,
)
from .api import RunOptions, RunResult, run_file, run_string, run_tape

__all__ = [
    'Tape',
    'GROWTH_BATCH',
    'SYMBOLS',
    'filter_symbols',
    'load_string',
    'load_stream',
    'load_file',
    'BrainFuckInterpreter',
    'run_program',
    'ExecutionState',
    'BFError',
    'BFLoadError',
    'BFTapeBoundsError',
    'BFRuntimeError',
    'BFPointerError',
    'BFUnmatchedBracketError',
    'BFInvalidSymbolError',
    'BFIOError',
    'RunOptions',
    'RunResult',
    'run_tape',
    'run_string',
    'run_file',
]
