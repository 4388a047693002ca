"""Box summary (count, extrema, mean, median and quartiles) of a sequence of samples.

Authors: sfmstats developers
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Union

import numpy as np

Number = Union[int, float]


@dataclass(frozen=True)
class BoxStats:
    """Seven-number summary of an unordered sample sequence.

    Quartiles use the nearest-rank method on the sorted samples: the first quartile is the sample at rank
    floor(count / 4) and the third quartile is the sample at rank floor(3 * count / 4) (0-based). The median is the
    middle sample for an odd count, and the average of the two central samples for an even count.

    An empty sample sequence yields a summary where every field is 0. Callers must check `count` (or `is_empty()`)
    before trusting the other fields.
    """

    count: int = 0
    min: Number = 0.0
    max: Number = 0.0
    mean: float = 0.0
    median: float = 0.0
    first_quartile: Number = 0.0
    third_quartile: Number = 0.0

    @classmethod
    def from_samples(cls, samples: Iterable[Number]) -> "BoxStats":
        """Computes the summary over the given samples.

        Args:
            samples: samples of a numeric type; the order does not matter.

        Returns:
            Summary of the samples, or the zero summary if there are none.
        """
        data = np.sort(np.asarray(list(samples)))
        count = data.size
        if count == 0:
            return cls()

        if count % 2 == 0:
            median = (data[count // 2 - 1] + data[count // 2]) / 2
        else:
            median = data[count // 2]

        return cls(
            count=int(count),
            min=data[0].item(),
            max=data[-1].item(),
            mean=float(data.sum() / count),
            median=float(median),
            first_quartile=data[count // 4].item(),
            third_quartile=data[(3 * count) // 4].item(),
        )

    def is_empty(self) -> bool:
        """Whether the summary was computed over zero samples."""
        return self.count == 0

    def to_dict(self) -> Dict[str, Number]:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"BoxStats(count={self.count}, min={self.min}, max={self.max}, mean={self.mean:.3f}, "
            f"median={self.median}, q1={self.first_quartile}, q3={self.third_quartile})"
        )
