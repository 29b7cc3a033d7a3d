# raftkit

Building blocks for the leader side of a Raft consensus implementation:
tracking each follower's replication progress, limiting in-flight append
messages, recording votes, and describing log entries for debugging.
Pure Python, no dependencies.

## Installation

```
pip install raftkit
```

## Modules

- `raftkit.state` — `StateType`, the replication state of a follower:
  `PROBE`, `REPLICATE` and `SNAPSHOT`, printed as `StateProbe`,
  `StateReplicate` and `StateSnapshot`.
- `raftkit.inflights` — `Inflights(size, max_bytes)`, a ring-buffer window
  that caps the number and total byte size of unacknowledged append
  messages. `add(index, bytes_)` records a message (and raises
  `RuntimeError` when the window is full), `free_le(to)` releases every
  message up to and including `to`, `full()`, `count()`, `reset()` and
  `clone()` do what their names say. A `max_bytes` of 0 means no byte
  limit; the byte limit is soft, so one message may push the total past it.
- `raftkit.progress` — `Progress`, a dataclass holding a follower's
  `match` and `next` indexes, its state, pending snapshot, activity and
  pause flags, and its `Inflights`. Transitions: `become_probe()`,
  `become_replicate()`, `become_snapshot(index)`. Events:
  `update_on_entries_send(entries, bytes_, next_index)` (raises
  `ValueError` in `SNAPSHOT` state), `maybe_update(n)`,
  `optimistic_update(n)`, `maybe_decr_to(rejected, match_hint)`.
  `is_paused()` tells whether sending is throttled. `ProgressMap` is a
  `dict` of node id to `Progress` that prints one line per node in id order.
- `raftkit.tracker` — `Config`, the (possibly joint) voter configuration
  with learners and pending learners, and `ProgressTracker`, which holds a
  `Config`, a `ProgressMap` and recorded votes. It offers `is_singleton()`,
  `visit(f)` (peers in ascending id order), `voter_nodes()`,
  `learner_nodes()`, `reset_votes()` and `record_vote(id, v)` (only a
  peer's first vote counts). `Config.clone()` copies the id sets but leaves
  `auto_leave` unset.
- `raftkit.messages` — `MessageType`, `EntryType`, the frozen dataclasses
  `Entry` (with `size()`, its protocol buffer encoding size) and
  `HardState` (with `is_empty()`).
- `raftkit.util` — message classification (`is_local_msg`,
  `is_response_msg`, `vote_resp_msg_type`), descriptions
  (`describe_entry`, `describe_entries`, `describe_hard_state`) and size
  helpers (`ents_size`, `limit_size`, `payload_size`, `payloads_size`).

## Example

```python
from raftkit.inflights import Inflights
from raftkit.progress import Progress

pr = Progress(match=1, next=2, inflights=Inflights(256, 0))
pr.become_replicate()
pr.update_on_entries_send(3, 300, pr.next)
print(pr)            # StateReplicate match=1 next=5 inactive inflight=1
pr.maybe_update(4)   # follower acknowledged up to index 4
pr.inflights.free_le(4)
assert pr.inflights.count() == 0
```

Limiting a batch of entries by encoded size, and describing entries:

```python
from raftkit.messages import Entry
from raftkit.util import describe_entry, limit_size

ents = [Entry(index=4, term=4), Entry(index=5, term=5)]
assert limit_size(ents, 0) == ents[:1]   # the first entry is always kept

print(describe_entry(Entry(term=1, index=2, data=b"hello")))
# 1/2 EntryNormal "hello"
```

## What this package does not do

It is a toolkit of pieces, not a running consensus node. There is no
election or log-replication state machine, no log storage, no networking
and no command-line tool. `ProgressTracker` does not compute the committed
index, tally votes into an election result or check quorum activity, and
the message types carry no message structure of their own.
`describe_entry` renders the payload of normal entries only; configuration
change entries are described by term, index and type, without decoding
their payload.

## Running the tests

```
pip install -e ".[test]"
pytest
```