"""InsertResult dataclass returned by bulk insertion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class InsertResult:
    """
    Result from bulk insertion operations.

    Attributes:
        inserted: Number of items stored in the tree.
        rejected: Items whose position fell outside the root bounds, in input order.
    """

    inserted: int = 0
    rejected: list[Any] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Return the number of items offered to the tree."""
        return self.inserted + len(self.rejected)
