"""Log entries, persistent state and message types exchanged by raft nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


def _label(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


class MessageType(IntEnum):
    """Kinds of messages exchanged between raft nodes and their local threads."""

    MSG_HUP = 0
    MSG_BEAT = 1
    MSG_PROP = 2
    MSG_APP = 3
    MSG_APP_RESP = 4
    MSG_VOTE = 5
    MSG_VOTE_RESP = 6
    MSG_SNAP = 7
    MSG_HEARTBEAT = 8
    MSG_HEARTBEAT_RESP = 9
    MSG_UNREACHABLE = 10
    MSG_SNAP_STATUS = 11
    MSG_CHECK_QUORUM = 12
    MSG_TRANSFER_LEADER = 13
    MSG_TIMEOUT_NOW = 14
    MSG_READ_INDEX = 15
    MSG_READ_INDEX_RESP = 16
    MSG_PRE_VOTE = 17
    MSG_PRE_VOTE_RESP = 18
    MSG_STORAGE_APPEND = 19
    MSG_STORAGE_APPEND_RESP = 20
    MSG_STORAGE_APPLY = 21
    MSG_STORAGE_APPLY_RESP = 22

    def __str__(self) -> str:
        return _label(self.name)

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


class EntryType(IntEnum):
    """Kinds of log entries."""

    ENTRY_NORMAL = 0
    ENTRY_CONF_CHANGE = 1
    ENTRY_CONF_CHANGE_V2 = 2

    def __str__(self) -> str:
        return _label(self.name)

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


def _varint_size(value: int) -> int:
    """Number of bytes of ``value`` in protocol buffer varint encoding."""
    return max(1, (value.bit_length() + 6) // 7)


@dataclass(frozen=True)
class Entry:
    """A single raft log entry.

    ``data`` is ``None`` for an entry without payload, which is distinct
    from an empty payload in the encoded form.
    """

    term: int = 0
    index: int = 0
    type: EntryType = EntryType.ENTRY_NORMAL
    data: bytes | None = None

    def size(self) -> int:
        """Return the protocol buffer encoding size of the entry in bytes."""
        n = 1 + _varint_size(self.term)
        n += 1 + _varint_size(self.index)
        n += 1 + _varint_size(int(self.type))
        if self.data is not None:
            length = len(self.data)
            n += 1 + length + _varint_size(length)
        return n


@dataclass(frozen=True)
class HardState:
    """State a node must persist before sending messages."""

    term: int = 0
    vote: int = 0
    commit: int = 0

    def is_empty(self) -> bool:
        """Return True if every field is zero."""
        return self == HardState()