from dataclasses import dataclass
from typing import Any, Tuple

# Key carried by the absent node; real keys start at MIN_KEY.
ABSENT_KEY = 0
MIN_KEY = 1

# Status returned by insert on a duplicate key and by delete on a missing key.
NOT_FOUND = -1


class TreeStructureError(RuntimeError):
    """Raised when the tree links or cached aggregates are found to be corrupted."""


@dataclass
class KVPair:
    """A key-value pair with named access."""
    key: int
    value: Any

    def to_tuple(self) -> Tuple[int, Any]:
        """Convert to a tuple (key, value)."""
        return self.key, self.value
