"""Tokenizer splitting RobTop-format text at a literal delimiter."""

from __future__ import annotations
from collections import deque
from typing import Deque, Iterator, Optional, Tuple


class Splitter:
    """Splits ``source`` at every occurrence of ``delimiter``.

    Tokens are slices of the source, produced one at a time as the input is
    consumed. An empty token (delimiter at the start of the remaining input,
    two adjacent delimiters, or a trailing delimiter) is distinct from EOF,
    which is signalled by ``None`` once all input has been consumed.

    Args:
        source: Text to split
        delimiter: Non-empty literal separator
    """

    def __init__(self, source: str, delimiter: str):
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        self.source = source
        self.delimiter = delimiter
        # Start offset of the next token, None once the input is exhausted
        self._start: Optional[int] = 0
        # End offset of the next token, computed lazily by peek()
        self._end: Optional[int] = None
        self._position = 0
        # Start offset of the last consumed token
        self._last_start = 0
        self._consumed = 0

    def _next_end(self) -> int:
        if self._end is None:
            end = self.source.find(self.delimiter, self._start)
            self._end = len(self.source) if end == -1 else end
        return self._end

    def peek(self) -> Optional[str]:
        """Return the next token without consuming it, ``None`` at EOF."""
        if self._start is None:
            return None
        return self.source[self._start:self._next_end()]

    def consume(self) -> Optional[str]:
        """Consume and return the next token, ``None`` at EOF."""
        if self._start is None:
            return None
        start = self._start
        end = self._next_end()
        self._position = end
        self._last_start = start
        self._consumed += 1
        self._end = None
        if end == len(self.source):
            self._start = None
        else:
            self._start = end + len(self.delimiter)
        return self.source[start:end]

    def is_eof(self) -> bool:
        return self._start is None

    @property
    def position(self) -> int:
        """Offset just past the last consumed token."""
        return self._position

    def nth_last(self, nth: int) -> Optional[str]:
        """Return the token consumed ``nth`` positions ago (1 = the last one).

        Older tokens are found by re-splitting the consumed prefix from the
        front, the same way :meth:`consume` split it, so self-overlapping
        delimiters such as ``~|~`` yield the same tokens. Meant for error
        paths.
        """
        if nth < 1 or nth > self._consumed:
            return None
        if nth == 1:
            return self.source[self._last_start:self._position]
        recent: Deque[Tuple[int, int]] = deque(maxlen=nth)
        start = 0
        while True:
            end = self.source.find(self.delimiter, start)
            if end == -1 or end >= self._position:
                recent.append((start, self._position))
                break
            recent.append((start, end))
            start = end + len(self.delimiter)
        start, end = recent[0]
        return self.source[start:end]

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        token = self.consume()
        if token is None:
            raise StopIteration
        return token
