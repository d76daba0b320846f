"""Step-duration history: a rolling window plus an all-time log."""

import logging
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

MIN_WINDOW_CAPACITY = 10


def downsample(samples: Sequence[float], total_size: int, num_buckets: int) -> np.ndarray:
    """Reduce samples to per-bucket averages for compact graphing.

    The first ``(total_size // num_buckets) * num_buckets`` samples are split
    into ``num_buckets`` contiguous, equal-sized buckets. A bucket holding an
    exact 0.0 reports 0.0, since zero marks a slot that was never measured.

    Args:
        samples: Sample sequence
        total_size: Number of leading samples to consider
        num_buckets: Number of buckets to produce

    Returns:
        Array of ``num_buckets`` bucket averages

    Raises:
        ValueError: If there are fewer samples than the buckets cover
    """
    if num_buckets <= 0:
        return np.zeros(0, dtype=np.float64)

    bucket_size = total_size // num_buckets
    if bucket_size <= 0:
        return np.zeros(num_buckets, dtype=np.float64)

    used = bucket_size * num_buckets
    data = np.asarray(samples, dtype=np.float64)[:used]
    if data.size < used:
        raise ValueError(f"Need {used} samples for {num_buckets} buckets, got {data.size}")

    buckets = data.reshape(num_buckets, bucket_size)
    averages = buckets.mean(axis=1)
    averages[(buckets == 0.0).any(axis=1)] = 0.0
    return averages


class History:
    """Recent and all-time step durations.

    ``recent`` is a ring buffer keyed by iteration index. ``all_time`` stores
    every sample at its iteration index and grows by ``window_capacity`` each
    time its last slot is written, so its capacity is always a multiple of the
    window capacity.
    """

    def __init__(self, window_capacity: int = 100) -> None:
        """Create empty buffers.

        Args:
            window_capacity: Size of the rolling window, must be greater than 10

        Raises:
            ValueError: If window_capacity is 10 or less
        """
        if window_capacity <= MIN_WINDOW_CAPACITY:
            logger.error("History size must be greater than %d", MIN_WINDOW_CAPACITY)
            raise ValueError(
                f"History size must be greater than {MIN_WINDOW_CAPACITY}, got {window_capacity}"
            )

        self.window_capacity = window_capacity
        self.all_time_capacity = window_capacity
        self.recent = np.zeros(window_capacity, dtype=np.float64)
        self.all_time = np.zeros(window_capacity, dtype=np.float64)

    def record(self, duration: float, iteration_index: int) -> None:
        """Store the duration of step ``iteration_index``.

        Raises:
            IndexError: If iteration_index is past the pre-sized all-time log
        """
        self.recent[iteration_index % self.window_capacity] = duration
        self.all_time[iteration_index] = duration

        if iteration_index == self.all_time_capacity - 1:
            self._grow()

    def _grow(self) -> None:
        new_capacity = self.all_time_capacity + self.window_capacity
        grown = np.zeros(new_capacity, dtype=np.float64)
        grown[: self.all_time_capacity] = self.all_time
        logger.debug("Growing all-time history %d -> %d", self.all_time_capacity, new_capacity)
        self.all_time = grown
        self.all_time_capacity = new_capacity

    def ordered_recent(self, iteration_count: int) -> np.ndarray:
        """Return the ring unrolled so the oldest sample comes first."""
        capacity = self.window_capacity
        indices = (iteration_count - capacity + np.arange(capacity)) % capacity
        return self.recent[indices]

    def downsampled(self) -> np.ndarray:
        """Bucket the all-time log into ``window_capacity`` averages."""
        return downsample(self.all_time, self.all_time_capacity, self.window_capacity)

    def reset(self) -> "History":
        """Return a fresh history with the same window capacity."""
        return History(self.window_capacity)
