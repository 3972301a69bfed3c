"""
Base class for incremental indicators.

All incremental indicators inherit from IncrementalIndicator, which defines
the per-bar interface: update(), reset(), value, is_ready.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import Any


class IncrementalIndicator(ABC):
    """Base class for incremental indicators."""

    @abstractmethod
    def update(self, *args: Any, **kwargs: Any) -> Any:
        """Update with new data and return the current value."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset state to initial."""
        ...

    @property
    @abstractmethod
    def value(self) -> Any:
        """Current indicator value (NaN while not ready)."""
        ...

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True when warmup period complete."""
        ...


def validate_length(name: str, length: int) -> None:
    """Raise ValueError if a window length is not a positive integer."""
    if isinstance(length, bool) or not isinstance(length, numbers.Integral) or length < 1:
        raise ValueError(
            f"{name} length must be a positive integer, got {length!r}\n"
            f"\n"
            f"Fix: {name}(length=20)"
        )
