"""Follower progress, in-flight windows, vote recording and log helpers for Raft."""

__version__ = "0.1.0"
__all__ = ["inflights", "messages", "progress", "state", "tracker", "util"]