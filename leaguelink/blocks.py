"""Splitting an index range into nearly equal consecutive blocks."""

from __future__ import annotations

from collections.abc import Iterator


class Blocks:
    """Divide ``[first_index, index_after_last)`` into at most ``num_blocks`` blocks.

    The first ``remainder`` blocks are one index longer than the rest, so
    block sizes differ by at most one. An empty range has no blocks.
    """

    __slots__ = ("_first", "_after_last", "_num_blocks", "_block_size", "_remainder")

    def __init__(self, first_index: int, index_after_last: int, num_blocks: int) -> None:
        if num_blocks < 1:
            raise ValueError(f"num_blocks must be at least 1, got {num_blocks}")
        self._first = first_index
        self._after_last = index_after_last
        self._block_size = 0
        self._remainder = 0
        if index_after_last > first_index:
            total = index_after_last - first_index
            num_blocks = min(num_blocks, total)
            self._block_size, self._remainder = divmod(total, num_blocks)
            if self._block_size == 0:
                self._block_size = 1
                num_blocks = total if total > 1 else 1
            self._num_blocks = num_blocks
        else:
            self._num_blocks = 0

    def _check(self, block: int) -> None:
        if not 0 <= block < self._num_blocks:
            raise IndexError(f"block {block} out of range for {self._num_blocks} blocks")

    def start(self, block: int) -> int:
        """First index of a block."""
        self._check(block)
        return self._first + block * self._block_size + min(block, self._remainder)

    def end(self, block: int) -> int:
        """Index after the last index of a block."""
        self._check(block)
        if block == self._num_blocks - 1:
            return self._after_last
        return self.start(block + 1)

    def __len__(self) -> int:
        return self._num_blocks

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Yield ``(start, end)`` for each block in order."""
        for block in range(self._num_blocks):
            yield self.start(block), self.end(block)

    def __repr__(self) -> str:
        return (
            f"Blocks(first_index={self._first}, index_after_last={self._after_last}, "
            f"num_blocks={self._num_blocks})"
        )