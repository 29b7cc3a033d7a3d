"""Tracking of the active configuration and of every peer's progress."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from raftkit.progress import Progress, ProgressMap


def _copy_set(ids: set[int] | None) -> set[int] | None:
    return None if ids is None else set(ids)


@dataclass
class Config:
    """The configuration tracked by a :class:`ProgressTracker`.

    ``voters`` is a joint configuration: the incoming voter set and the
    outgoing one, the latter being ``None`` unless the configuration is
    joint. ``learners`` and ``learners_next`` are ``None`` until used.

    Invariant: learners and voters do not intersect. A voter demoted to a
    learner while entering a joint configuration is kept in
    ``learners_next`` and becomes a learner once the joint configuration is
    left.
    """

    voters: tuple[set[int], set[int] | None] = field(
        default_factory=lambda: (set(), None)
    )
    # Leave the joint configuration automatically once that is possible.
    auto_leave: bool = False
    learners: set[int] | None = None
    learners_next: set[int] | None = None

    def clone(self) -> Config:
        """Return a copy that shares no sets with this one.

        ``auto_leave`` is not carried over; the copy starts with it unset.
        """
        incoming, outgoing = self.voters
        return Config(
            voters=(set(incoming), _copy_set(outgoing)),
            learners=_copy_set(self.learners),
            learners_next=_copy_set(self.learners_next),
        )

    def voter_ids(self) -> set[int]:
        """Return the ids of all voters in either half of the configuration."""
        incoming, outgoing = self.voters
        return set(incoming) | set(outgoing or ())


class ProgressTracker:
    """Tracks the active configuration and what is known about each peer."""

    def __init__(self, max_inflight: int, max_inflight_bytes: int) -> None:
        self.config = Config()
        self.progress: ProgressMap = ProgressMap()
        self.votes: dict[int, bool] = {}
        self.max_inflight = max_inflight
        self.max_inflight_bytes = max_inflight_bytes

    def is_singleton(self) -> bool:
        """Return True if the leader is the only voting member."""
        incoming, outgoing = self.config.voters
        return len(incoming) == 1 and not outgoing

    def visit(self, f: Callable[[int, Progress], None]) -> None:
        """Call ``f(id, progress)`` for every tracked peer in ascending id order."""
        for node_id in sorted(self.progress):
            f(node_id, self.progress[node_id])

    def voter_nodes(self) -> list[int]:
        """Return the sorted ids of all voters."""
        return sorted(self.config.voter_ids())

    def learner_nodes(self) -> list[int]:
        """Return the sorted ids of all learners."""
        return sorted(self.config.learners or ())

    def reset_votes(self) -> None:
        """Forget all recorded votes before a new round of counting."""
        self.votes = {}

    def record_vote(self, id: int, v: bool) -> None:
        """Record the vote of ``id``; only its first vote counts."""
        self.votes.setdefault(id, v)