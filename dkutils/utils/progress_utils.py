"""Progress reporting utilities for copy and move operations."""

import threading
from typing import Callable, Optional

# Called with (bytes_copied_so_far, total_bytes)
ProgressListener = Callable[[int, int], None]

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def format_bytes(bytes_value: int) -> str:
    if bytes_value < 0:
        raise ValueError("Bytes must be non-negative")

    size = float(bytes_value)
    unit_index = 0
    while size >= 1024 and unit_index < len(BYTE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {BYTE_UNITS[unit_index]}"
    elif unit_index == 1:
        return f"{max(size, 1.0):.1f} {BYTE_UNITS[unit_index]}"
    else:
        return f"{size:.2f} {BYTE_UNITS[unit_index]}"


class ProgressAggregator:
    """
    Combines per-file progress into one running total for a batch.

    The total is fixed at construction. Each file reports its own cumulative
    count through ``listener_for_file()``; the aggregator forwards the sum of
    finished files plus the current file's progress to the batch listener.
    """

    def __init__(self, total_bytes: int, listener: Optional[ProgressListener] = None):
        self.total_bytes = total_bytes
        self._listener = listener
        self._completed_bytes = 0
        self._current_file_bytes = 0
        self._lock = threading.Lock()

    @property
    def bytes_copied(self) -> int:
        with self._lock:
            return self._completed_bytes + self._current_file_bytes

    def listener_for_file(self) -> ProgressListener:
        """Start a new file and return the per-file listener for it."""
        with self._lock:
            self._completed_bytes += self._current_file_bytes
            self._current_file_bytes = 0

        def on_progress(file_bytes_copied: int, _file_total: int) -> None:
            with self._lock:
                self._current_file_bytes = file_bytes_copied
                current = self._completed_bytes + self._current_file_bytes
            if self._listener is not None:
                self._listener(current, self.total_bytes)

        return on_progress
