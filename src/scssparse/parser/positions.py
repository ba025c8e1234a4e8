"""
Source Position Index

Maps character offsets in a stylesheet buffer to (line, column) pairs.
Line starts are computed once per parse; lookups are a binary search.
"""

from bisect import bisect_right
from typing import List, Tuple


class SourcePositionIndex:
    """
    Precomputed line-start offsets for one buffer.

    Usage:
        index = SourcePositionIndex(text)
        line, column = index.position(offset)   # 1-based line, 0-based column
    """

    def __init__(self, text: str):
        starts = [0]
        pos = text.find('\n')
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find('\n', pos + 1)
        self._line_starts: Tuple[int, ...] = tuple(starts)
        self.length = len(text)

    @property
    def line_starts(self) -> List[int]:
        return list(self._line_starts)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position(self, offset: int) -> Tuple[int, int]:
        """Return (line, column) for offset. Offsets past the end land on the last line."""
        if offset < 0:
            offset = 0
        line_idx = bisect_right(self._line_starts, offset) - 1
        return line_idx + 1, offset - self._line_starts[line_idx]

    def line(self, offset: int) -> int:
        return self.position(offset)[0]
