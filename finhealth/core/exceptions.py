"""Exceptions raised by FinHealth.

Core calculations never raise for data conditions (zero income, unknown
ids, dangling references); these cover configuration, persistence and
session misuse.
"""


class FinHealthError(Exception):
    """Base class for all FinHealth errors."""


class ConfigError(FinHealthError):
    """Configuration file is unreadable or invalid."""


class SnapshotError(FinHealthError):
    """A persisted snapshot could not be read or written."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Snapshot '{key}': {reason}")


class SessionClosedError(FinHealthError):
    """A command was dispatched to a store whose session is closed."""
