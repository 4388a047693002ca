"""Distribution of the detection scales of the observations.

Authors: sfmstats developers
"""

import math
from typing import AbstractSet, List, Optional, Tuple

from sfmstats.common.box_stats import BoxStats
from sfmstats.common.histogram import Histogram
from sfmstats.common.sfm_data import SfmData
from sfmstats.statistics.view_filters import observation_in_filter


def collect_scales(sfm_data: SfmData, specific_views: Optional[AbstractSet[int]] = None) -> List[float]:
    """Detection scale of every observation selected by the per-observation filter."""
    return [
        float(observation.scale)
        for landmark in sfm_data.landmarks().values()
        for view_id, observation in landmark.observations.items()
        if observation_in_filter(view_id, specific_views)
    ]


def compute_scale_histogram(
    sfm_data: SfmData, specific_views: Optional[AbstractSet[int]] = None, with_histogram: bool = True
) -> Tuple[BoxStats, Optional[Histogram]]:
    """Compute the statistics of the detection scales.

    Args:
        sfm_data: reconstruction to read.
        specific_views: if non-empty, only the observations made in these views are considered.
        with_histogram: whether to also compute the histogram over [0, ceil(max)] with ceil(max) + 1 bins.

    Returns:
        Box statistics of the scales, empty if there is no observation.
        Histogram of the scales, or None if not requested.
    """
    histogram = Histogram() if with_histogram else None
    if sfm_data.number_landmarks() == 0:
        return BoxStats(), histogram

    scales = collect_scales(sfm_data, specific_views)
    if len(scales) == 0:
        return BoxStats(), histogram

    stats = BoxStats.from_samples(scales)
    if with_histogram:
        max_value = math.ceil(stats.max)
        histogram = Histogram(0.0, max_value, max(max_value + 1, 0))
        histogram.add_samples(scales)

    return stats, histogram
