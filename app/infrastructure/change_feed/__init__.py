"""Change feed store implementations."""

from .memory import InMemoryChangeFeed
from .tracker import ChildTracker, matches_range

__all__ = ["ChildTracker", "InMemoryChangeFeed", "matches_range"]
