"""Access to the streams of an MSF container.

An MSF file is split into fixed-size blocks; each stream is a list of block
indices plus a byte size.  :class:`DirectMSFStream` reads through the block
list on demand, while :class:`CoalescedMSFStream` holds the whole stream as
one contiguous buffer.  That buffer is a view into the file when the blocks
are already contiguous, and a copy otherwise.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = [
    "IndexAndOffset",
    "DirectMSFStream",
    "CoalescedMSFStream",
    "block_count",
    "blocks_are_contiguous",
    "coalesce_blocks",
    "coalesce_direct_stream",
]


def block_count(size: int, block_size: int) -> int:
    """Return how many blocks of *block_size* bytes are needed for *size* bytes."""
    if block_size <= 0:
        raise ValueError("block size must be positive")
    return -(-size // block_size)


def blocks_are_contiguous(
    block_indices: Sequence[int], block_size: int, stream_size: int
) -> bool:
    """Return whether the blocks covering *stream_size* bytes are N, N+1, N+2, ..."""
    count = block_count(stream_size, block_size)
    if count <= 1:
        return True
    if count > len(block_indices):
        raise ValueError("not enough block indices for the stream size")
    first = block_indices[0]
    return all(
        index == first + step
        for step, index in enumerate(block_indices[1:count], start=1)
    )


def _file_slice(data: memoryview, start: int, size: int) -> memoryview:
    if start < 0 or start + size > len(data):
        raise ValueError(
            f"range [{start}:{start + size}] lies outside the file of {len(data)} bytes"
        )
    return data[start : start + size]


@dataclass(frozen=True)
class IndexAndOffset:
    """Position of a stream offset: index into the block list and offset within that block."""

    index: int
    offset_within_block: int


class DirectMSFStream:
    """Reads an MSF stream directly from the file's blocks, without copying it up front."""

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        block_size: int,
        block_indices: Sequence[int],
        size: int,
    ) -> None:
        if block_size <= 0 or block_size & (block_size - 1):
            raise ValueError("MSF block size must be a power of two")
        self.data = memoryview(data).cast("B") if not isinstance(data, memoryview) else data
        self.block_size = block_size
        self.block_indices = tuple(block_indices)
        self.size = size
        self._block_size_log2 = block_size.bit_length() - 1

    def read_at_offset(self, size: int, offset: int) -> bytes:
        """Return *size* bytes of the stream starting at *offset*."""
        if size < 0 or offset < 0:
            raise ValueError("size and offset must not be negative")
        if offset + size > self.size:
            raise ValueError("not enough data left to read")

        chunks = []
        position = offset
        remaining = size
        while remaining:
            location = self.block_index_for_offset(position)
            length = min(self.block_size - location.offset_within_block, remaining)
            start = self.data_offset_for(location)
            chunks.append(_file_slice(self.data, start, length))
            position += length
            remaining -= length
        return b"".join(chunks)

    def block_index_for_offset(self, offset: int) -> IndexAndOffset:
        """Return the block-list index and in-block offset for a stream offset."""
        return IndexAndOffset(
            offset >> self._block_size_log2, offset & (self.block_size - 1)
        )

    def data_offset_for(self, index_and_offset: IndexAndOffset) -> int:
        """Return the file offset that a block-list position refers to."""
        try:
            block = self.block_indices[index_and_offset.index]
        except IndexError:
            raise ValueError("block index lies outside the stream") from None
        return (block << self._block_size_log2) + index_and_offset.offset_within_block


class CoalescedMSFStream:
    """A whole MSF stream held as one contiguous buffer."""

    def __init__(self, data: bytes | bytearray | memoryview, is_view: bool) -> None:
        self._data = memoryview(data)
        self.is_view = is_view

    def __len__(self) -> int:
        return len(self._data)

    def data_at_offset(self, offset: int = 0, size: int | None = None) -> memoryview:
        """Return a read-only view of *size* bytes at *offset* (to the end if *size* is None)."""
        if size is None:
            size = len(self._data) - offset
        if offset < 0 or size < 0 or offset + size > len(self._data):
            raise ValueError(
                f"range [{offset}:{offset + size}] lies outside the stream of {len(self._data)} bytes"
            )
        return self._data[offset : offset + size].toreadonly()


def coalesce_blocks(
    data: bytes | bytearray | memoryview,
    block_size: int,
    block_indices: Sequence[int],
    size: int,
) -> CoalescedMSFStream:
    """Build a contiguous stream from the blocks of *data* listed in *block_indices*."""
    view = memoryview(data)
    if size == 0:
        return CoalescedMSFStream(b"", is_view=False)

    if blocks_are_contiguous(block_indices, block_size, size):
        start = block_indices[0] * block_size
        return CoalescedMSFStream(_file_slice(view, start, size), is_view=True)

    needed = block_count(size, block_size)
    chunks = []
    remaining = size
    for index in block_indices[:needed]:
        length = min(block_size, remaining)
        chunks.append(_file_slice(view, index * block_size, length))
        remaining -= length
    return CoalescedMSFStream(b"".join(chunks), is_view=False)


def coalesce_direct_stream(
    direct_stream: DirectMSFStream, size: int, offset: int
) -> CoalescedMSFStream:
    """Build a contiguous stream of *size* bytes read from *direct_stream* at *offset*."""
    if size < 0 or offset < 0 or offset + size > direct_stream.size:
        raise ValueError("not enough data left to read")
    if size == 0:
        return CoalescedMSFStream(b"", is_view=False)

    location = direct_stream.block_index_for_offset(offset)
    # The in-block offset counts towards the span: a read may cross into one more block.
    span = location.offset_within_block + size
    remaining_indices = direct_stream.block_indices[location.index :]
    if blocks_are_contiguous(remaining_indices, direct_stream.block_size, span):
        start = direct_stream.data_offset_for(location)
        return CoalescedMSFStream(
            _file_slice(direct_stream.data, start, size), is_view=True
        )
    return CoalescedMSFStream(direct_stream.read_at_offset(size, offset), is_view=False)