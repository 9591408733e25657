"""
Snapshot-based undo history for the pixel art editor.

Every edit gesture pushes one full copy of the grid. The stack is bounded:
when it is full the oldest snapshot is dropped before the new one is added.
Snapshots that have sunk below the most recent few are compressed with zlib
to keep memory usage down on large grids.
"""

# Standard library imports
import zlib
from datetime import datetime, timezone
from typing import Any, Optional

# Third-party imports
import numpy as np

from .pixel_art_constants import UNDO_COMPRESSION_AGE, UNDO_STACK_SIZE


class GridSnapshot:
    """A frozen copy of the pixel grid.

    The pixel data can be compressed for long-term storage and is
    decompressed transparently when the snapshot is restored.
    """

    def __init__(self, data: np.ndarray) -> None:
        """Copy the grid data into a new snapshot.

        Args:
            data: The (size, size, 4) grid array to capture
        """
        self.timestamp: datetime = datetime.now(timezone.utc)
        self.compressed: bool = False
        self.shape: tuple[int, ...] = tuple(data.shape)
        self.dtype = data.dtype
        self._data: Optional[np.ndarray] = data.copy()
        self._compressed_data: Optional[bytes] = None

    def compress(self) -> None:
        """Compress pixel data and release the uncompressed array."""
        if not self.compressed and self._data is not None:
            self._compressed_data = zlib.compress(self._data.tobytes())
            self._data = None
            self.compressed = True

    def decompress(self) -> None:
        """Restore the uncompressed array from compressed bytes."""
        if self.compressed and self._compressed_data is not None:
            raw = zlib.decompress(self._compressed_data)
            self._data = np.frombuffer(raw, dtype=self.dtype).reshape(self.shape).copy()
            self._compressed_data = None
            self.compressed = False

    def to_array(self) -> np.ndarray:
        """Get the captured grid data, decompressing if needed."""
        if self.compressed:
            self.decompress()
        assert self._data is not None
        return self._data

    def get_memory_size(self) -> int:
        """Approximate memory usage in bytes, including overhead."""
        if self.compressed and self._compressed_data is not None:
            return len(self._compressed_data) + 64
        if self._data is not None:
            return self._data.nbytes + 64
        return 64


class UndoStack:
    """Bounded LIFO of grid snapshots with FIFO eviction of the oldest entry.

    There is no redo: popping a snapshot discards it.
    """

    def __init__(
        self,
        capacity: int = UNDO_STACK_SIZE,
        compression_age: Optional[int] = UNDO_COMPRESSION_AGE,
    ) -> None:
        """Initialize the undo stack.

        Args:
            capacity: Maximum number of snapshots to retain
            compression_age: Snapshots more than this many steps below the top
                are compressed; None disables compression
        """
        if capacity < 1:
            raise ValueError(f"Undo capacity must be at least 1, got {capacity}")
        self.capacity: int = capacity
        self.compression_age: Optional[int] = compression_age
        self.snapshots: list[GridSnapshot] = []

    def __len__(self) -> int:
        return len(self.snapshots)

    @property
    def can_undo(self) -> bool:
        return bool(self.snapshots)

    def push(self, data: np.ndarray) -> GridSnapshot:
        """Capture a copy of the grid data as the newest snapshot.

        Args:
            data: Current grid array

        Returns:
            The snapshot that was added
        """
        # Evict before appending so the length never exceeds capacity
        if len(self.snapshots) >= self.capacity:
            self.snapshots.pop(0)

        snapshot = GridSnapshot(data)
        self.snapshots.append(snapshot)
        self._compress_old_snapshots()
        return snapshot

    def pop(self) -> Optional[np.ndarray]:
        """Remove the newest snapshot and return its grid data.

        Returns:
            The grid array, or None if the stack is empty
        """
        if not self.snapshots:
            return None
        return self.snapshots.pop().to_array()

    def clear(self) -> None:
        """Drop all history."""
        self.snapshots.clear()

    def _compress_old_snapshots(self) -> None:
        """Compress snapshots older than compression_age."""
        if self.compression_age is None:
            return
        compress_before = max(0, len(self.snapshots) - self.compression_age)
        for snapshot in self.snapshots[:compress_before]:
            if not snapshot.compressed:
                snapshot.compress()

    def get_memory_usage(self) -> dict[str, Any]:
        """Get current memory usage statistics.

        Returns:
            Dictionary with memory usage information
        """
        total = sum(s.get_memory_size() for s in self.snapshots)
        compressed = sum(1 for s in self.snapshots if s.compressed)

        return {
            "total_bytes": total,
            "total_mb": total / (1024 * 1024),
            "snapshot_count": len(self.snapshots),
            "compressed_count": compressed,
            "capacity": self.capacity,
            "can_undo": self.can_undo,
        }
