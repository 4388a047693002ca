"""Per-view box statistics of the reprojection residuals and the track lengths.

The samples of every view are equal to those selected by a single-view filter (per-observation filter for residuals,
per-landmark participation filter for track lengths) and are collected in the same landmark order. They are bucketed
by view in one pass over the landmarks instead of one pass per view.

Authors: sfmstats developers
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import sfmstats.utils.logger as logger_utils
from sfmstats.common.box_stats import BoxStats
from sfmstats.common.sfm_data import SfmData
from sfmstats.statistics.residuals import compute_observation_residual_norm

logger = logger_utils.get_logger()


@dataclass
class PerViewBoxStats:
    """Parallel per-view sequences of box statistic fields, one entry per view in dataset order.

    Views without any sample get the zero summary.
    """

    num_views: int = 0
    min: List[float] = field(default_factory=list)
    max: List[float] = field(default_factory=list)
    mean: List[float] = field(default_factory=list)
    median: List[float] = field(default_factory=list)
    first_quartile: List[float] = field(default_factory=list)
    third_quartile: List[float] = field(default_factory=list)

    def append(self, stats: BoxStats) -> None:
        self.min.append(stats.min)
        self.max.append(stats.max)
        self.mean.append(stats.mean)
        self.median.append(stats.median)
        self.first_quartile.append(stats.first_quartile)
        self.third_quartile.append(stats.third_quartile)
        self.num_views += 1


def bucket_residual_norms_by_view(sfm_data: SfmData) -> Dict[int, List[float]]:
    """Residual norms of the observations, grouped by the view they are made in."""
    view_ids = set(sfm_data.view_ids())
    residual_norms_per_view: Dict[int, List[float]] = defaultdict(list)
    for landmark in sfm_data.landmarks().values():
        for view_id in landmark.observations:
            if view_id not in view_ids:
                continue
            residual_norm = compute_observation_residual_norm(sfm_data, landmark, view_id)
            if math.isfinite(residual_norm):
                residual_norms_per_view[view_id].append(residual_norm)

    return residual_norms_per_view


def bucket_track_lengths_by_view(sfm_data: SfmData) -> Dict[int, List[int]]:
    """Full track lengths of the landmarks, grouped by every view the landmark participates in."""
    track_lengths_per_view: Dict[int, List[int]] = defaultdict(list)
    for landmark in sfm_data.landmarks().values():
        track_length = landmark.number_observations()
        for view_id in landmark.observations:
            track_lengths_per_view[view_id].append(track_length)

    return track_lengths_per_view


def _box_stats_per_view(
    sfm_data: SfmData, samples_per_view: Dict[int, list], per_view_stats: PerViewBoxStats
) -> PerViewBoxStats:
    for view_id in sfm_data.view_ids():
        per_view_stats.append(BoxStats.from_samples(samples_per_view.get(view_id, [])))
    return per_view_stats


def compute_residuals_per_view(
    sfm_data: SfmData, per_view_stats: Optional[PerViewBoxStats] = None
) -> PerViewBoxStats:
    """Compute the box statistics of the residual norms of each view.

    Args:
        sfm_data: reconstruction to read.
        per_view_stats: optional sequences to append to; a new record is created otherwise.

    Returns:
        The per-view sequences, with one more entry per view. Nothing is appended if there is no landmark.
    """
    if per_view_stats is None:
        per_view_stats = PerViewBoxStats()
    if sfm_data.number_landmarks() == 0:
        return per_view_stats

    logger.debug("Computing residual statistics for %d views.", sfm_data.number_views())
    return _box_stats_per_view(sfm_data, bucket_residual_norms_by_view(sfm_data), per_view_stats)


def compute_observations_lengths_per_view(
    sfm_data: SfmData, per_view_stats: Optional[PerViewBoxStats] = None
) -> PerViewBoxStats:
    """Compute the box statistics of the full track lengths of the landmarks observed in each view.

    Args:
        sfm_data: reconstruction to read.
        per_view_stats: optional sequences to append to; a new record is created otherwise.

    Returns:
        The per-view sequences, with one more entry per view. Nothing is appended if there is no landmark.
    """
    if per_view_stats is None:
        per_view_stats = PerViewBoxStats()
    if sfm_data.number_landmarks() == 0:
        return per_view_stats

    logger.debug("Computing track length statistics for %d views.", sfm_data.number_views())
    return _box_stats_per_view(sfm_data, bucket_track_lengths_by_view(sfm_data), per_view_stats)
