"""Track length statistics: number of observations of each landmark.

Authors: sfmstats developers
"""

from typing import AbstractSet, List, Optional, Tuple

from sfmstats.common.box_stats import BoxStats
from sfmstats.common.histogram import Histogram
from sfmstats.common.sfm_data import SfmData
from sfmstats.statistics.view_filters import landmark_participates


class ObservationCounter:
    """Caller-owned running total of observations, accumulated across calls.

    Not safe to share between concurrent computations without external synchronization.
    """

    def __init__(self, total: int = 0) -> None:
        self.total = total

    def add(self, num_observations: int) -> None:
        self.total += num_observations

    def __repr__(self) -> str:
        return f"ObservationCounter(total={self.total})"


def collect_track_lengths(
    sfm_data: SfmData, observation_counter: ObservationCounter, specific_views: Optional[AbstractSet[int]] = None
) -> List[int]:
    """Full track length of every landmark selected by the per-landmark participation filter.

    The counter is incremented by the track length of every landmark, selected or not.
    """
    track_lengths: List[int] = []
    for landmark in sfm_data.landmarks().values():
        track_length = landmark.number_observations()
        if landmark_participates(landmark, specific_views):
            track_lengths.append(track_length)
        observation_counter.add(track_length)

    return track_lengths


def track_lengths_histogram(track_lengths: List[int], stats: BoxStats) -> Histogram:
    """Histogram over [min, max + 1] with one unit-width bin per integer track length."""
    histogram = Histogram(stats.min, stats.max + 1, int(stats.max - stats.min + 1))
    histogram.add_samples(track_lengths)
    return histogram


def compute_observations_lengths_histogram(
    sfm_data: SfmData,
    observation_counter: ObservationCounter,
    specific_views: Optional[AbstractSet[int]] = None,
    with_histogram: bool = True,
) -> Tuple[BoxStats, Optional[Histogram]]:
    """Compute the statistics of the track lengths (number of 2d observations per 3d point).

    Note: with a non-empty `specific_views`, a landmark is selected when at least one of its observations is in one of
    these views, and its *full* track length is recorded, not the number of its observations in `specific_views`.

    Args:
        sfm_data: reconstruction to read.
        observation_counter: accumulator incremented by the track length of every landmark, regardless of the filter.
        specific_views: if non-empty, only the landmarks observed in at least one of these views are considered.
        with_histogram: whether to also compute the histogram of the track lengths.

    Returns:
        Box statistics of the track lengths, empty if no landmark is selected.
        Histogram of the track lengths, or None if not requested.
    """
    histogram = Histogram() if with_histogram else None
    if sfm_data.number_landmarks() == 0:
        return BoxStats(), histogram

    track_lengths = collect_track_lengths(sfm_data, observation_counter, specific_views)
    if len(track_lengths) == 0:
        return BoxStats(), histogram

    stats = BoxStats.from_samples(track_lengths)
    if with_histogram:
        histogram = track_lengths_histogram(track_lengths, stats)

    return stats, histogram
