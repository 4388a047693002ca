"""Computes every quality-control statistic of a sparse reconstruction, as one group of metrics.

Authors: sfmstats developers
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

import dask
from dask.delayed import Delayed

import sfmstats.utils.logger as logger_utils
from sfmstats.common.sfm_data import SfmData
from sfmstats.data_association.tracks_builder import DsfTracksBuilder, TracksBuilderBase
from sfmstats.evaluation.metrics import SfmMetric, SfmMetricsGroup
from sfmstats.loader.feature_loader_base import FeatureLoaderBase
from sfmstats.loader.match_loader_base import MatchLoaderBase
from sfmstats.statistics.feature_yield import compute_feat_match_per_view
from sfmstats.statistics.per_view import (
    PerViewBoxStats,
    compute_observations_lengths_per_view,
    compute_residuals_per_view,
)
from sfmstats.statistics.residuals import compute_residuals_histogram
from sfmstats.statistics.scales import compute_scale_histogram
from sfmstats.statistics.track_lengths import ObservationCounter, compute_observations_lengths_histogram
from sfmstats.statistics.view_coverage import compute_landmarks_per_view, compute_landmarks_per_view_histogram

logger = logger_utils.get_logger()

METRICS_GROUP_NAME = "reconstruction_statistics"


def _per_view_metrics(prefix: str, per_view_stats: PerViewBoxStats) -> List[SfmMetric]:
    return [
        SfmMetric(f"{prefix}_per_view_min", per_view_stats.min),
        SfmMetric(f"{prefix}_per_view_max", per_view_stats.max),
        SfmMetric(f"{prefix}_per_view_mean", per_view_stats.mean),
        SfmMetric(f"{prefix}_per_view_median", per_view_stats.median),
        SfmMetric(f"{prefix}_per_view_first_quartile", per_view_stats.first_quartile),
        SfmMetric(f"{prefix}_per_view_third_quartile", per_view_stats.third_quartile),
    ]


@dataclass(frozen=True)
class ReconstructionStatistics:
    """Runs the statistics over a reconstruction.

    Args:
        compute_per_view: whether to compute the per-view residual and track length statistics.
        feature_loader: provides the detected features; feature yield statistics are skipped if None.
        match_loader: provides the pairwise matches; feature yield statistics are skipped if None.
        tracks_builder: builds the tracks from the pairwise matches.
    """

    compute_per_view: bool = True
    feature_loader: Optional[FeatureLoaderBase] = None
    match_loader: Optional[MatchLoaderBase] = None
    tracks_builder: TracksBuilderBase = field(default_factory=DsfTracksBuilder)

    def run(self, sfm_data: SfmData) -> SfmMetricsGroup:
        """Computes the statistics.

        Args:
            sfm_data: reconstruction to read.

        Returns:
            Metrics group with one metric per statistic. The feature yield metrics are absent when unavailable.
        """
        start_time = time.time()
        metrics = SfmMetricsGroup(METRICS_GROUP_NAME, [])
        metrics.add_metric(SfmMetric("number_views", sfm_data.number_views()))
        metrics.add_metric(SfmMetric("number_landmarks", sfm_data.number_landmarks()))

        residual_stats, residual_histogram = compute_residuals_histogram(sfm_data)
        metrics.add_metric(SfmMetric.from_box_stats("reprojection_residuals_px", residual_stats, residual_histogram))

        observation_counter = ObservationCounter()
        track_length_stats, track_length_histogram = compute_observations_lengths_histogram(
            sfm_data, observation_counter
        )
        metrics.add_metric(SfmMetric.from_box_stats("track_lengths", track_length_stats, track_length_histogram))
        metrics.add_metric(SfmMetric("number_observations", observation_counter.total))

        coverage_stats, coverage_histogram = compute_landmarks_per_view_histogram(sfm_data)
        metrics.add_metric(SfmMetric.from_box_stats("landmarks_per_view", coverage_stats, coverage_histogram))
        metrics.add_metric(SfmMetric("landmarks_per_view_counts", compute_landmarks_per_view(sfm_data)))

        scale_stats, scale_histogram = compute_scale_histogram(sfm_data)
        metrics.add_metric(SfmMetric.from_box_stats("observation_scales", scale_stats, scale_histogram))

        if self.compute_per_view:
            metrics.add_metrics(_per_view_metrics("residuals", compute_residuals_per_view(sfm_data)))
            metrics.add_metrics(_per_view_metrics("track_lengths", compute_observations_lengths_per_view(sfm_data)))

        if self.feature_loader is not None and self.match_loader is not None:
            feat_per_view, match_per_view = compute_feat_match_per_view(
                sfm_data, self.feature_loader, self.match_loader, self.tracks_builder
            )
            if len(feat_per_view) > 0:
                metrics.add_metric(SfmMetric("features_per_view", feat_per_view))
                metrics.add_metric(SfmMetric("tracks_per_view", match_per_view))
            else:
                logger.warning("Feature and match statistics are unavailable.")

        logger.info("Computed reconstruction statistics in %.2f sec.", time.time() - start_time)
        return metrics

    def create_computation_graph(self, sfm_data_graph: Delayed) -> Delayed:
        """Creates a computation graph for computing the statistics.

        Args:
            sfm_data_graph: SfmData object wrapped up as Delayed.

        Returns:
            SfmMetricsGroup wrapped up as Delayed.
        """
        return dask.delayed(self.run)(sfm_data_graph)
