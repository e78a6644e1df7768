"""Global enums."""

from enum import Enum


class NotifyAction(str, Enum):
    """Change kinds published to the lot fan-out channel."""
    BID = "bid"
    ADDED = "added"
    DELETED = "deleted"


class LotPhase(str, Enum):
    """Derived from the clock, never stored."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"
