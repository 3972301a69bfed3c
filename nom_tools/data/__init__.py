"""Bar data loading."""

from .bars import bars_from_frame, load_bars_csv

__all__ = ["bars_from_frame", "load_bars_csv"]
