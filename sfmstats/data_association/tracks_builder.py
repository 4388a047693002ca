"""Builds feature tracks from pairwise matches. Uses the Union-Find algorithm, with view ID and feature index in that
view as the unique keys.

References:
1. P. Moulon, P. Monasse. Unordered Feature Tracking Made Fast and Easy, 2012, HAL Archives.
   https://hal-enpc.archives-ouvertes.fr/hal-00769267/file/moulon_monasse_featureTracking_CVMP12.pdf

Authors: sfmstats developers
"""

import abc
from typing import Dict, Iterable, List, Set

import gtsam  # type: ignore

import sfmstats.utils.logger as logger_utils
from sfmstats.common.feature_track import FeatureMeasurement, FeatureTrack
from sfmstats.common.types import PairwiseMatches

logger = logger_utils.get_logger()


class TracksBuilderBase(metaclass=abc.ABCMeta):
    """Base class for building multi-view feature tracks from pairwise matches."""

    @abc.abstractmethod
    def build(self, pairwise_matches: PairwiseMatches) -> List[FeatureTrack]:
        """Builds the tracks.

        Args:
            pairwise_matches: matched feature indices per image pair and describer type.

        Returns:
            Tracks, each of a single describer type.
        """


class DsfTracksBuilder(TracksBuilderBase):
    """Tracks builder using a disjoint-set forest (DSF) for each describer type.

    Every feature (i, k) is a singleton of the forest, where i is the view id and k the index of the feature in that
    view. Every match merges two singletons.
    """

    def __init__(self, clear_forks: bool = False, min_track_length: int = 2) -> None:
        """
        Args:
            clear_forks: whether to delete the tracks having more than one feature in the same view.
            min_track_length: tracks with fewer measurements are dropped.
        """
        self._clear_forks = clear_forks
        self._min_track_length = min_track_length

    def build(self, pairwise_matches: PairwiseMatches) -> List[FeatureTrack]:
        dsf_per_desc_type: Dict[str, gtsam.DSFMapIndexPair] = {}
        for (i1, i2), matches_per_desc_type in pairwise_matches.items():
            for describer_type, k_pairs in matches_per_desc_type.items():
                dsf = dsf_per_desc_type.setdefault(describer_type, gtsam.DSFMapIndexPair())
                for k1, k2 in k_pairs:
                    dsf.merge(gtsam.IndexPair(i1, int(k1)), gtsam.IndexPair(i2, int(k2)))

        tracks: List[FeatureTrack] = []
        for describer_type in sorted(dsf_per_desc_type):
            key_set = dsf_per_desc_type[describer_type].sets()
            for set_id in key_set:
                # key_set is a wrapped C++ map, so this unusual syntax is required
                index_pair_set = key_set[set_id]
                measurements = sorted(
                    FeatureMeasurement(index_pair.i(), index_pair.j())
                    for index_pair in gtsam.IndexPairSetAsArray(index_pair_set)
                )
                if len(measurements) < self._min_track_length:
                    continue
                tracks.append(FeatureTrack(describer_type, measurements))

        if self._clear_forks:
            tracks = delete_forked_tracks(tracks)

        logger.info("Built %d tracks from %d image pairs.", len(tracks), len(pairwise_matches))
        return tracks


def delete_forked_tracks(tracks: List[FeatureTrack]) -> List[FeatureTrack]:
    """Delete tracks that have more than one measurement in the same view.

    Args:
        tracks: feature tracks.

    Returns:
        filtered feature tracks.
    """
    filtered_tracks = [track for track in tracks if track.validate_unique_views()]
    if len(filtered_tracks) < len(tracks):
        logger.debug("Deleted %d forked tracks.", len(tracks) - len(filtered_tracks))
    return filtered_tracks


def compute_tracks_per_view(tracks: List[FeatureTrack], view_ids: Iterable[int]) -> Dict[int, Set[int]]:
    """Indices of the tracks touching each view.

    Args:
        tracks: feature tracks.
        view_ids: views to create an entry for, even if no track touches them.

    Returns:
        Set of track indices per view id.
    """
    tracks_per_view: Dict[int, Set[int]] = {view_id: set() for view_id in view_ids}
    for track_idx, track in enumerate(tracks):
        for view_id in track.view_ids():
            tracks_per_view.setdefault(view_id, set()).add(track_idx)

    return tracks_per_view
