"""
Marker values used by the memoizer.

Two distinct markers are needed: SKIP is returned by a key function to say
"do not touch the cache for this call", while MISSING means "no value was
found or produced". None is an ordinary value and is cached like any other.
"""

from enum import Enum


class Marker(Enum):
    """Enumeration of the memoizer's marker values."""
    SKIP = "skip"
    MISSING = "missing"

    def __repr__(self) -> str:
        return self.name

    def __bool__(self) -> bool:
        return False


SKIP = Marker.SKIP
MISSING = Marker.MISSING
