"""Replication states of a follower as seen by the leader."""

from enum import IntEnum


class StateType(IntEnum):
    """State of a tracked follower."""

    # The follower's last index is unknown; it is probed with periodic appends.
    PROBE = 0
    # Steady state: the follower eagerly receives log entries.
    REPLICATE = 1
    # The follower needs a full snapshot before it can replicate again.
    SNAPSHOT = 2

    def __str__(self) -> str:
        return _NAMES[self]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_NAMES = {
    StateType.PROBE: "StateProbe",
    StateType.REPLICATE: "StateReplicate",
    StateType.SNAPSHOT: "StateSnapshot",
}