"""Message classification, debug descriptions and size helpers."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from raftkit.messages import Entry, EntryType, HardState, MessageType

EntryFormatter = Callable[[bytes], str]

_LOCAL_MSGS = frozenset(
    {
        MessageType.MSG_HUP,
        MessageType.MSG_BEAT,
        MessageType.MSG_UNREACHABLE,
        MessageType.MSG_SNAP_STATUS,
        MessageType.MSG_CHECK_QUORUM,
        MessageType.MSG_STORAGE_APPEND,
        MessageType.MSG_STORAGE_APPEND_RESP,
        MessageType.MSG_STORAGE_APPLY,
        MessageType.MSG_STORAGE_APPLY_RESP,
    }
)

_RESPONSE_MSGS = frozenset(
    {
        MessageType.MSG_APP_RESP,
        MessageType.MSG_VOTE_RESP,
        MessageType.MSG_HEARTBEAT_RESP,
        MessageType.MSG_UNREACHABLE,
        MessageType.MSG_READ_INDEX_RESP,
        MessageType.MSG_PRE_VOTE_RESP,
        MessageType.MSG_STORAGE_APPEND_RESP,
        MessageType.MSG_STORAGE_APPLY_RESP,
    }
)

_VOTE_RESPONSES = {
    MessageType.MSG_VOTE: MessageType.MSG_VOTE_RESP,
    MessageType.MSG_PRE_VOTE: MessageType.MSG_PRE_VOTE_RESP,
}

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def is_local_msg(msgt: int) -> bool:
    """Return True for messages that never leave the local node."""
    return msgt in _LOCAL_MSGS


def is_response_msg(msgt: int) -> bool:
    """Return True for messages that answer another message."""
    return msgt in _RESPONSE_MSGS


def vote_resp_msg_type(msgt: MessageType) -> MessageType:
    """Return the response type of a vote or pre-vote message."""
    try:
        return _VOTE_RESPONSES[msgt]
    except KeyError:
        raise ValueError(f"not a vote message: {msgt}") from None


def describe_hard_state(hs: HardState) -> str:
    """Return a concise description of a hard state."""
    text = f"Term:{hs.term}"
    if hs.vote != 0:
        text += f" Vote:{hs.vote}"
    return text + f" Commit:{hs.commit}"


def _utf8_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def _quote(data: bytes) -> str:
    """Quote bytes as a double-quoted string with escapes for unprintables."""
    out = ['"']
    i = 0
    while i < len(data):
        length = _utf8_length(data[i])
        char = None
        if length:
            try:
                char = data[i : i + length].decode("utf-8")
            except UnicodeDecodeError:
                char = None
        if char is None or len(char) != 1:
            out.append(f"\\x{data[i]:02x}")
            i += 1
            continue
        i += length
        code = ord(char)
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif char.isprintable():
            out.append(char)
        elif code < 0x80:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def describe_entry(e: Entry, f: EntryFormatter | None = None) -> str:
    """Return a concise description of an entry.

    Normal entries have their payload rendered by ``f``, or quoted when
    ``f`` is None. Configuration change entries are described without
    their payload.
    """
    formatter = f if f is not None else _quote
    formatted = ""
    if e.type == EntryType.ENTRY_NORMAL:
        formatted = formatter(e.data or b"")
    if formatted:
        formatted = " " + formatted
    return f"{e.term}/{e.index} {e.type}{formatted}"


def describe_entries(ents: Sequence[Entry], f: EntryFormatter | None = None) -> str:
    """Describe each entry on its own newline-terminated line."""
    return "".join(describe_entry(e, f) + "\n" for e in ents)


def ents_size(ents: Sequence[Entry]) -> int:
    """Return the total encoding size of the entries."""
    return sum(e.size() for e in ents)


def limit_size(ents: Sequence[Entry], max_size: int) -> list[Entry]:
    """Return the longest prefix of ``ents`` whose size does not exceed ``max_size``.

    The first entry is always kept, even if it alone exceeds the limit.
    """
    if not ents:
        return []
    size = ents[0].size()
    for limit, entry in enumerate(ents[1:], start=1):
        size += entry.size()
        if size > max_size:
            return list(ents[:limit])
    return list(ents)


def payload_size(e: Entry) -> int:
    """Return the size of the entry's payload; empty entries count as zero."""
    return len(e.data or b"")


def payloads_size(ents: Sequence[Entry]) -> int:
    """Return the total payload size of the entries."""
    return sum(payload_size(e) for e in ents)