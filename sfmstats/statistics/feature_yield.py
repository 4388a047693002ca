"""Per-view feature yield: detected features and matched tracks touching each view.

Authors: sfmstats developers
"""

from typing import List, Tuple

import sfmstats.utils.logger as logger_utils
from sfmstats.common.sfm_data import SfmData
from sfmstats.data_association.tracks_builder import TracksBuilderBase, compute_tracks_per_view
from sfmstats.loader.errors import FeatureLoadError, MatchLoadError
from sfmstats.loader.feature_loader_base import FeatureLoaderBase
from sfmstats.loader.match_loader_base import MatchLoaderBase

logger = logger_utils.get_logger()


def compute_feat_match_per_view(
    sfm_data: SfmData,
    feature_loader: FeatureLoaderBase,
    match_loader: MatchLoaderBase,
    tracks_builder: TracksBuilderBase,
) -> Tuple[List[int], List[int]]:
    """Compute, for each view in dataset order, the number of detected features and of tracks touching the view.

    The describer types are the ones declared by the landmarks of the reconstruction. Loading is not retried: if
    either loader fails, the failure is logged and both sequences are returned empty, which means the statistics are
    unavailable (not zero).

    Args:
        sfm_data: reconstruction to read.
        feature_loader: provides the number of features detected per view.
        match_loader: provides the pairwise matches.
        tracks_builder: builds multi-view tracks from the pairwise matches.

    Returns:
        Number of detected features per view (0 for views without loaded features).
        Number of tracks touching each view (0 for views without tracks).
    """
    describer_types = sfm_data.get_landmark_describer_types()

    try:
        num_features_per_view = feature_loader.load_num_features_per_view(sfm_data, describer_types)
    except FeatureLoadError:
        logger.exception("Invalid features.")
        return [], []

    try:
        pairwise_matches = match_loader.load_pairwise_matches(sfm_data, describer_types)
    except MatchLoadError:
        logger.exception("Unable to load matches.")
        return [], []

    tracks = tracks_builder.build(pairwise_matches)
    tracks_per_view = compute_tracks_per_view(tracks, sfm_data.view_ids())

    feat_per_view: List[int] = []
    match_per_view: List[int] = []
    for view_id in sfm_data.view_ids():
        feat_per_view.append(num_features_per_view.get(view_id, 0))
        match_per_view.append(len(tracks_per_view.get(view_id, set())))

    return feat_per_view, match_per_view
