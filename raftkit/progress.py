"""A follower's replication progress as seen by the leader."""

from __future__ import annotations

from dataclasses import dataclass, field

from raftkit.inflights import Inflights
from raftkit.state import StateType


@dataclass
class Progress:
    """Leader-side view of one follower's replication state.

    ``state`` decides how the leader talks to the follower: in PROBE at most
    one append is sent per heartbeat interval, in REPLICATE ``next`` is
    advanced optimistically, and in SNAPSHOT replication is paused until the
    pending snapshot is resolved.
    """

    match: int = 0
    next: int = 0
    state: StateType = StateType.PROBE
    # Index of the snapshot in flight while in StateType.SNAPSHOT.
    pending_snapshot: int = 0
    # Whether the follower was heard from recently; reset on election timeout.
    recent_active: bool = False
    # Set when the append flow to this node is throttled; cleared on heartbeat
    # responses so that probes still go out once in a while.
    msg_app_flow_paused: bool = False
    inflights: Inflights = field(default_factory=lambda: Inflights(0, 0))
    is_learner: bool = False

    def reset_state(self, state: StateType) -> None:
        """Move into ``state``, clearing pause, pending snapshot and inflights."""
        self.msg_app_flow_paused = False
        self.pending_snapshot = 0
        self.state = state
        self.inflights.reset()

    def become_probe(self) -> None:
        """Switch to PROBE; ``next`` becomes match+1, or past a sent snapshot."""
        if self.state == StateType.SNAPSHOT:
            pending = self.pending_snapshot
            self.reset_state(StateType.PROBE)
            self.next = max(self.match + 1, pending + 1)
        else:
            self.reset_state(StateType.PROBE)
            self.next = self.match + 1

    def become_replicate(self) -> None:
        """Switch to REPLICATE, resetting ``next`` to match+1."""
        self.reset_state(StateType.REPLICATE)
        self.next = self.match + 1

    def become_snapshot(self, snapshot_index: int) -> None:
        """Switch to SNAPSHOT with the given pending snapshot index."""
        self.reset_state(StateType.SNAPSHOT)
        self.pending_snapshot = snapshot_index

    def update_on_entries_send(self, entries: int, bytes_: int, next_index: int) -> None:
        """Account for ``entries`` entries of ``bytes_`` bytes sent from ``next_index``.

        Raises ValueError if appends are not expected in the current state.
        """
        if self.state == StateType.REPLICATE:
            if entries > 0:
                last = next_index + entries - 1
                self.optimistic_update(last)
                self.inflights.add(last, bytes_)
            # An overflowing or already full window turns this into a probe.
            self.msg_app_flow_paused = self.inflights.full()
        elif self.state == StateType.PROBE:
            if entries > 0:
                self.msg_app_flow_paused = True
        else:
            raise ValueError(f"sending append in unhandled state {self.state}")

    def maybe_update(self, n: int) -> bool:
        """Handle an ack of index ``n``; return False if it is outdated."""
        updated = False
        if self.match < n:
            self.match = n
            updated = True
            self.msg_app_flow_paused = False
        self.next = max(self.next, n + 1)
        return updated

    def optimistic_update(self, n: int) -> None:
        """Note that appends up to and including ``n`` are in flight."""
        self.next = n + 1

    def maybe_decr_to(self, rejected: int, match_hint: int) -> bool:
        """Handle a rejected append at index ``rejected``.

        Returns False, changing nothing, for a stale rejection; otherwise
        lowers ``next`` and clears the follower for sending again.
        """
        if self.state == StateType.REPLICATE:
            if rejected <= self.match:
                return False
            self.next = self.match + 1
            return True

        # Non-replicating followers are probed one entry at a time.
        if self.next - 1 != rejected:
            return False

        self.next = max(min(rejected, match_hint + 1), 1)
        self.msg_app_flow_paused = False
        return True

    def is_paused(self) -> bool:
        """Return whether sending log entries to this node is throttled."""
        if self.state in (StateType.PROBE, StateType.REPLICATE):
            return self.msg_app_flow_paused
        if self.state == StateType.SNAPSHOT:
            return True
        raise ValueError("unexpected state")

    def __str__(self) -> str:
        parts = [f"{self.state} match={self.match} next={self.next}"]
        if self.is_learner:
            parts.append(" learner")
        if self.is_paused():
            parts.append(" paused")
        if self.pending_snapshot > 0:
            parts.append(f" pendingSnap={self.pending_snapshot}")
        if not self.recent_active:
            parts.append(" inactive")
        n = self.inflights.count()
        if n > 0:
            parts.append(f" inflight={n}")
            if self.inflights.full():
                parts.append("[full]")
        return "".join(parts)


class ProgressMap(dict):
    """Mapping of node id to :class:`Progress`."""

    def __str__(self) -> str:
        return "".join(f"{node_id}: {self[node_id]}\n" for node_id in sorted(self))