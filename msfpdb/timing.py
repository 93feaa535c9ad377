"""Nested, indented timing of named steps, printed as they start and finish."""

from __future__ import annotations

import sys
import time
from types import TracebackType
from typing import ClassVar, TextIO

__all__ = ["TimedScope"]

_INDENT_GUIDE = "| | | | | | | | "


class TimedScope:
    """Prints a message on creation and the elapsed time when done.

    Scopes nest: every open scope indents the lines of the scopes opened
    inside it.
    """

    _depth: ClassVar[int] = 0

    def __init__(self, message: str, out: TextIO | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._finished = False
        self._out.write(f"{self._indent()}{message}\n")
        TimedScope._depth += 1
        self._begin = time.perf_counter()

    @staticmethod
    def _indent() -> str:
        return _INDENT_GUIDE[: TimedScope._depth * 2]

    def done(self, count: int | None = None) -> float:
        """Close the scope, print the elapsed time and return it in milliseconds."""
        if self._finished:
            raise RuntimeError("timed scope is already done")
        self._finished = True
        TimedScope._depth = max(TimedScope._depth - 1, 0)
        elapsed = self.milliseconds()
        suffix = f" ({count} elements)" if count is not None else ""
        self._out.write(f"{self._indent()}---> done in {elapsed:.3f}ms{suffix}\n")
        return elapsed

    def milliseconds(self) -> float:
        """Return the milliseconds elapsed since the scope was opened."""
        return (time.perf_counter() - self._begin) * 1000.0

    def __enter__(self) -> TimedScope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self._finished:
            self.done()