"""Fixed-bin frequency accumulator over a numeric range.

Authors: sfmstats developers
"""

from typing import Dict, Iterable, Tuple, Union

import numpy as np

import sfmstats.utils.logger as logger_utils

logger = logger_utils.get_logger()

Number = Union[int, float]


class Histogram:
    """N equal-width bins covering [low, high).

    A sample s falls in bin floor((s - low) / width), clamped into [0, N - 1]: samples outside [low, high) are folded
    into the nearest edge bin, so every added sample is counted exactly once.

    Only the non-empty bins are stored, so a wide range (e.g. a residual histogram stretched by one outlier) costs no
    more memory than the number of distinct bins hit.

    A histogram with zero bins is a valid "unused" state. Samples added to it are counted in `num_samples` but not
    binned. A degenerate range (high <= low) collapses to that zero-bin state.
    """

    def __init__(self, low: Number = 0.0, high: Number = 0.0, num_bins: int = 0) -> None:
        """Initializes the bins.

        Args:
            low: lower bound of the first bin.
            high: upper bound of the last bin.
            num_bins: number of bins, N >= 0.
        """
        if num_bins < 0:
            raise ValueError(f"Number of bins must be non-negative, got {num_bins}.")
        if num_bins > 0 and not high > low:
            logger.debug("Degenerate histogram range [%s, %s), using an empty histogram.", low, high)
            num_bins = 0

        self._low = float(low)
        self._high = float(high)
        self._num_bins = int(num_bins)
        self._width = (self._high - self._low) / self._num_bins if self._num_bins > 0 else 0.0
        # bin index -> count, non-empty bins only
        self._counts: Dict[int, int] = {}
        self._num_samples = 0

    @property
    def low(self) -> float:
        return self._low

    @property
    def high(self) -> float:
        return self._high

    @property
    def num_bins(self) -> int:
        return self._num_bins

    @property
    def width(self) -> float:
        """Width of every bin, 0 for the empty histogram."""
        return self._width

    @property
    def counts(self) -> np.ndarray:
        """Dense, read-only count for each of the N bins.

        Materializes all N bins; use `nonzero_counts()` for histograms with a very wide range.
        """
        counts = np.zeros(self._num_bins, dtype=np.int64)
        for bin_idx, count in self._counts.items():
            counts[bin_idx] = count
        counts.flags.writeable = False
        return counts

    @property
    def num_samples(self) -> int:
        """Number of samples added so far, binned or not."""
        return self._num_samples

    def is_empty(self) -> bool:
        return self._num_bins == 0

    def nonzero_counts(self) -> Dict[int, int]:
        """Counts of the non-empty bins, keyed by ascending bin index."""
        return dict(sorted(self._counts.items()))

    def _bin_indices(self, samples: np.ndarray) -> np.ndarray:
        positions = np.floor((samples - self._low) / self._width)
        return np.clip(positions, 0, self._num_bins - 1).astype(np.int64)

    def bin_index(self, sample: Number) -> int:
        """Index of the bin the sample falls in, after clamping to the edge bins."""
        if self.is_empty():
            raise ValueError("An empty histogram has no bins.")
        if np.isnan(sample):
            raise ValueError("Cannot bin a NaN sample.")
        return int(self._bin_indices(np.array([sample], dtype=np.float64))[0])

    def add(self, sample: Number) -> None:
        self.add_samples([sample])

    def add_samples(self, samples: Iterable[Number]) -> None:
        """Adds every sample.

        Raises:
            ValueError: if a sample is NaN. No sample of the call is added then.
        """
        samples = np.asarray(list(samples), dtype=np.float64).ravel()
        if samples.size == 0:
            return
        if np.isnan(samples).any():
            raise ValueError("Cannot bin a NaN sample.")

        self._num_samples += int(samples.size)
        if self.is_empty():
            return

        bin_indices, bin_counts = np.unique(self._bin_indices(samples), return_counts=True)
        for bin_idx, count in zip(bin_indices.tolist(), bin_counts.tolist()):
            self._counts[bin_idx] = self._counts.get(bin_idx, 0) + count

    def bin_range(self, bin_idx: int) -> Tuple[float, float]:
        """Lower and upper bound of one bin."""
        lower = self._low + bin_idx * self._width
        upper = self._high if bin_idx == self._num_bins - 1 else self._low + (bin_idx + 1) * self._width
        return lower, upper

    def bin_edges(self) -> np.ndarray:
        """Returns the N + 1 edges of the bins."""
        if self.is_empty():
            return np.array([], dtype=np.float64)
        return np.linspace(self._low, self._high, self._num_bins + 1)

    def to_dict(self) -> Dict[str, int]:
        """Counts of the non-empty bins, keyed by the "lower-upper" range of each bin."""
        histogram_dict: Dict[str, int] = {}
        for bin_idx, count in self.nonzero_counts().items():
            lower, upper = self.bin_range(bin_idx)
            histogram_dict["%.2f-%.2f" % (lower, upper)] = count
        return histogram_dict

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Histogram):
            return False
        return (
            self._low == other.low
            and self._high == other.high
            and self._num_bins == other.num_bins
            and self._num_samples == other.num_samples
            and self.nonzero_counts() == other.nonzero_counts()
        )

    def __repr__(self) -> str:
        return f"Histogram(low={self._low}, high={self._high}, num_bins={self._num_bins}, samples={self._num_samples})"
