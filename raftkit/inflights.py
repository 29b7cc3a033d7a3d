"""Flow control for in-flight append messages."""

from __future__ import annotations


class Inflights:
    """Limits the number and byte size of unacknowledged append messages.

    Each in-flight message is represented by the largest log index it carries
    and its total byte size. Callers check :meth:`full` before :meth:`add`,
    and release quota through :meth:`free_le` when acks arrive.

    A ``max_bytes`` of 0 means no byte limit. The byte limit is soft: a single
    message may take the total from below ``max_bytes`` to at or above it.
    """

    def __init__(self, size: int, max_bytes: int) -> None:
        self._size = size
        self._max_bytes = max_bytes
        self._start = 0
        self._count = 0
        self._bytes = 0
        # Ring buffer of (index, bytes) pairs, grown on demand up to size.
        self._buffer: list[tuple[int, int]] = []

    @property
    def size(self) -> int:
        """Maximum number of in-flight messages."""
        return self._size

    @property
    def max_bytes(self) -> int:
        """Maximum total byte size of in-flight messages (0 for no limit)."""
        return self._max_bytes

    @property
    def start(self) -> int:
        """Position of the oldest in-flight message in the ring buffer."""
        return self._start

    @property
    def total_bytes(self) -> int:
        """Total byte size of the messages currently in flight."""
        return self._bytes

    @property
    def buffer(self) -> list[tuple[int, int]]:
        """A copy of the ring buffer as (index, bytes) pairs."""
        return list(self._buffer)

    def clone(self) -> Inflights:
        """Return an identical Inflights that shares no state with this one."""
        other = Inflights(self._size, self._max_bytes)
        other._start = self._start
        other._count = self._count
        other._bytes = self._bytes
        other._buffer = list(self._buffer)
        return other

    def add(self, index: int, bytes_: int) -> None:
        """Record a dispatched message with the given last index and size.

        Indexes of consecutive calls must be monotonic.
        """
        if self.full():
            raise RuntimeError("cannot add into a Full inflights")
        nxt = self._start + self._count
        if nxt >= self._size:
            nxt -= self._size
        if nxt >= len(self._buffer):
            self._grow()
        self._buffer[nxt] = (index, bytes_)
        self._count += 1
        self._bytes += bytes_

    def _grow(self) -> None:
        new_size = len(self._buffer) * 2
        if new_size == 0:
            new_size = 1
        elif new_size > self._size:
            new_size = self._size
        self._buffer.extend([(0, 0)] * (new_size - len(self._buffer)))

    def free_le(self, to: int) -> None:
        """Free all in-flight messages with an index less than or equal to ``to``."""
        if self._count == 0 or to < self._buffer[self._start][0]:
            return

        idx = self._start
        freed = 0
        freed_bytes = 0
        while freed < self._count:
            index, size = self._buffer[idx]
            if to < index:
                break
            freed_bytes += size
            freed += 1
            idx += 1
            if idx >= self._size:
                idx -= self._size

        self._count -= freed
        self._bytes -= freed_bytes
        self._start = idx
        if self._count == 0:
            # Restart at the beginning so the buffer does not grow needlessly.
            self._start = 0

    def full(self) -> bool:
        """Return True if no more messages can be sent at the moment."""
        return self._count == self._size or (
            self._max_bytes != 0 and self._bytes >= self._max_bytes
        )

    def count(self) -> int:
        """Return the number of in-flight messages."""
        return self._count

    def reset(self) -> None:
        """Free all in-flight messages."""
        self._start = 0
        self._count = 0
        self._bytes = 0