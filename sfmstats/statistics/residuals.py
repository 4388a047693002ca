"""Reprojection residual statistics over the observations of a reconstruction.

Authors: sfmstats developers
"""

import math
from typing import AbstractSet, List, Optional, Tuple

import numpy as np

import sfmstats.utils.logger as logger_utils
import sfmstats.utils.reprojection as reproj_utils
from sfmstats.common.box_stats import BoxStats
from sfmstats.common.histogram import Histogram
from sfmstats.common.sfm_data import Landmark, SfmData
from sfmstats.statistics.view_filters import observation_in_filter

logger = logger_utils.get_logger()

# Two bins per residual unit (pixel).
RESIDUAL_BINS_PER_UNIT = 2


def compute_observation_residual_norm(sfm_data: SfmData, landmark: Landmark, view_id: int) -> float:
    """Euclidean norm of the residual of the landmark's observation in the given view."""
    view = sfm_data.get_view(view_id)
    residual = reproj_utils.compute_observation_residual(
        sfm_data.get_pose(view),
        sfm_data.get_intrinsic(view),
        landmark.point3,
        landmark.observations[view_id].uv,
    )
    return float(np.linalg.norm(residual))


def collect_residual_norms(sfm_data: SfmData, specific_views: Optional[AbstractSet[int]] = None) -> List[float]:
    """Residual norms of every observation selected by the per-observation filter, in landmark order."""
    residual_norms: List[float] = []
    num_non_finite = 0
    for landmark in sfm_data.landmarks().values():
        for view_id in landmark.observations:
            if not observation_in_filter(view_id, specific_views):
                continue
            residual_norm = compute_observation_residual_norm(sfm_data, landmark, view_id)
            if not math.isfinite(residual_norm):
                num_non_finite += 1
                continue
            residual_norms.append(residual_norm)

    if num_non_finite > 0:
        logger.warning("Skipped %d observations with a non-finite reprojection residual.", num_non_finite)
    return residual_norms


def residuals_histogram(residual_norms: List[float], stats: BoxStats) -> Histogram:
    """Histogram over [0, ceil(max)] with two bins per residual unit."""
    upper = math.ceil(stats.max)
    histogram = Histogram(0.0, upper, upper * RESIDUAL_BINS_PER_UNIT)
    histogram.add_samples(residual_norms)
    return histogram


def compute_residuals_histogram(
    sfm_data: SfmData, specific_views: Optional[AbstractSet[int]] = None, with_histogram: bool = True
) -> Tuple[BoxStats, Optional[Histogram]]:
    """Compute the reprojection residual statistics of the reconstruction.

    Args:
        sfm_data: reconstruction to read.
        specific_views: if non-empty, only the observations made in these views are considered.
        with_histogram: whether to also compute the histogram of the residual norms.

    Returns:
        Box statistics of the residual norms, empty if there is no residual.
        Histogram of the residual norms, or None if not requested.
    """
    histogram = Histogram() if with_histogram else None
    if sfm_data.number_landmarks() == 0:
        return BoxStats(), histogram

    residual_norms = collect_residual_norms(sfm_data, specific_views)
    if len(residual_norms) == 0:
        return BoxStats(), histogram

    stats = BoxStats.from_samples(residual_norms)
    if with_histogram:
        histogram = residuals_histogram(residual_norms, stats)

    return stats, histogram
