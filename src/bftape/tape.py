from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from .errors import BFTapeBoundsError


GROWTH_BATCH = 1000


def _unwrap(value: Any) -> Any:
    # object-dtype arrays already hand back plain Python values.
    return value.item() if isinstance(value, np.generic) else value


class Tape:
    """
    Pointer-addressed linear buffer that grows to the right on demand.

    The element type is a numpy dtype. Cells that were never written read
    as the dtype's zero value: 0 for integer tapes, '' for 'U1' symbol tapes.

    Capacity only changes inside seek(): when the pointer moves past the
    end, the backing array is regrown to (position + batch) cells in one
    step, so long runs of '>' stay linear instead of regrowing per cell.
    """

    def __init__(self, dtype: Any = np.uint8, *, batch: int = GROWTH_BATCH):
        if batch < 1:
            raise ValueError(f"batch must be >= 1, got {batch}")
        self.dtype = np.dtype(dtype)
        self.batch = batch
        self.data = np.zeros(0, dtype=self.dtype)
        self.ptr = 0
        self._allocate_for(0)

    @classmethod
    def from_iterable(cls, values: Iterable[Any], dtype: Any = np.uint8, *, batch: int = GROWTH_BATCH) -> 'Tape':
        tape = cls(dtype, batch=batch)
        for value in values:
            tape.set(value)
            tape.seek(1)
        tape.zero()
        return tape

    def _allocate_for(self, pos: int) -> None:
        if len(self.data) < pos + 1:
            grown = np.zeros(pos + self.batch, dtype=self.dtype)
            grown[:len(self.data)] = self.data
            self.data = grown

    @property
    def capacity(self) -> int:
        return len(self.data)

    @property
    def default(self) -> Any:
        return _unwrap(np.zeros(1, dtype=self.dtype)[0])

    def __len__(self) -> int:
        return len(self.data)

    def get(self) -> Any:
        return _unwrap(self.data[self.ptr])

    def set(self, value: Any) -> None:
        self.data[self.ptr] = value

    def seek(self, offset: int) -> None:
        new_ptr = self.ptr + offset
        if new_ptr < 0:
            raise BFTapeBoundsError(
                message="Attempted to move tape head below 0.",
                position=self.ptr,
                offset=offset,
            )
        self._allocate_for(new_ptr)
        self.ptr = new_ptr

    def next(self) -> Any:
        elem = self.get()
        self.seek(1)
        return elem

    def pos(self) -> int:
        return self.ptr

    def zero(self) -> None:
        # Rewinds only; data is left as is.
        self.ptr = 0

    def snapshot(self, start: int = 0, stop: int | None = None) -> np.ndarray:
        return self.data[start:stop].copy()

    def __repr__(self) -> str:
        return f"Tape(dtype={self.dtype.str!r}, ptr={self.ptr}, capacity={self.capacity})"
