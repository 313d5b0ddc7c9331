from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .tape import Tape


@dataclass
class ExecutionState:
    program: Tape
    memory: Tape = field(default_factory=lambda: Tape(np.uint8))
    bracket_stack: List[int] = field(default_factory=list)
    steps: int = 0
    output: bytearray = field(default_factory=bytearray)
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)

    def program_text(self) -> str:
        # Unloaded cells are '' so they vanish from the join.
        return ''.join(self.program.data.tolist())
