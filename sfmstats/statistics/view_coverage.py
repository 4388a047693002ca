"""Per-view landmark coverage: number of landmarks visible in each view.

Authors: sfmstats developers
"""

from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from sfmstats.common.box_stats import BoxStats
from sfmstats.common.histogram import Histogram
from sfmstats.common.sfm_data import SfmData

# Fixed, whatever the range of the counts. Unlike the other histograms, the bin width thus varies with the data.
LANDMARKS_PER_VIEW_NUM_BINS = 10


def count_landmarks_per_view(sfm_data: SfmData) -> Dict[int, int]:
    """Number of landmarks with an observation in each view, keyed by view id in ascending order.

    Views without any observation are absent.
    """
    num_landmarks_per_view: Dict[int, int] = defaultdict(int)
    for landmark in sfm_data.landmarks().values():
        for view_id in landmark.observations:
            num_landmarks_per_view[view_id] += 1

    return dict(sorted(num_landmarks_per_view.items()))


def compute_landmarks_per_view(sfm_data: SfmData) -> List[int]:
    """Compute the number of landmarks visible in each observed view.

    The counts are ordered by ascending view id, which is not necessarily the dataset view order; join with
    `count_landmarks_per_view` to get the view ids.
    """
    return list(count_landmarks_per_view(sfm_data).values())


def compute_landmarks_per_view_histogram(
    sfm_data: SfmData, with_histogram: bool = True
) -> Tuple[BoxStats, Optional[Histogram]]:
    """Compute the statistics of the number of landmarks visible per view.

    Args:
        sfm_data: reconstruction to read.
        with_histogram: whether to also compute the histogram, with a fixed number of bins over [min, max + 1].

    Returns:
        Box statistics of the per-view counts, empty if there is no observation.
        Histogram of the per-view counts, or None if not requested.
    """
    histogram = Histogram() if with_histogram else None
    landmarks_per_view = compute_landmarks_per_view(sfm_data)
    if len(landmarks_per_view) == 0:
        return BoxStats(), histogram

    stats = BoxStats.from_samples(landmarks_per_view)
    if with_histogram:
        histogram = Histogram(stats.min, stats.max + 1, LANDMARKS_PER_VIEW_NUM_BINS)
        histogram.add_samples(landmarks_per_view)

    return stats, histogram
