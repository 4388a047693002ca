"""Unit tests for the DSF tracks builder.

Authors: sfmstats developers
"""

import unittest

import numpy as np

from sfmstats.common.feature_track import FeatureMeasurement, FeatureTrack
from sfmstats.data_association.tracks_builder import DsfTracksBuilder, compute_tracks_per_view, delete_forked_tracks


class TestDsfTracksBuilder(unittest.TestCase):
    """Unit tests for DsfTracksBuilder."""

    def test_chained_matches_form_one_track(self) -> None:
        pairwise_matches = {
            (0, 1): {"sift": np.array([[3, 4]])},
            (1, 2): {"sift": np.array([[4, 7]])},
        }

        tracks = DsfTracksBuilder().build(pairwise_matches)

        self.assertEqual(len(tracks), 1)
        expected_track = FeatureTrack(
            "sift", [FeatureMeasurement(0, 3), FeatureMeasurement(1, 4), FeatureMeasurement(2, 7)]
        )
        self.assertEqual(tracks[0], expected_track)

    def test_describer_types_are_not_merged(self) -> None:
        """Same feature indices under different describer types are different features."""
        pairwise_matches = {
            (0, 1): {"sift": np.array([[0, 0]]), "akaze": np.array([[0, 0]])},
        }

        tracks = DsfTracksBuilder().build(pairwise_matches)

        self.assertEqual(len(tracks), 2)
        self.assertEqual([track.describer_type for track in tracks], ["akaze", "sift"])
        for track in tracks:
            self.assertEqual(track.number_measurements(), 2)

    def test_forks(self) -> None:
        """Feature 0 of view 0 matches two features of view 1, which forks the track."""
        pairwise_matches = {(0, 1): {"sift": np.array([[0, 0], [0, 1]])}, (1, 2): {"sift": np.array([[5, 5]])}}

        tracks_with_forks = DsfTracksBuilder(clear_forks=False).build(pairwise_matches)
        tracks_without_forks = DsfTracksBuilder(clear_forks=True).build(pairwise_matches)

        self.assertEqual(len(tracks_with_forks), 2)
        self.assertEqual(len(tracks_without_forks), 1)
        self.assertEqual(tracks_without_forks[0].view_ids(), {1, 2})

    def test_min_track_length(self) -> None:
        pairwise_matches = {
            (0, 1): {"sift": np.array([[3, 4], [0, 0]])},
            (1, 2): {"sift": np.array([[4, 7]])},
        }

        tracks = DsfTracksBuilder(min_track_length=3).build(pairwise_matches)

        self.assertEqual(len(tracks), 1)
        self.assertEqual(tracks[0].view_ids(), {0, 1, 2})

    def test_no_matches(self) -> None:
        self.assertEqual(DsfTracksBuilder().build({}), [])

    def test_delete_forked_tracks(self) -> None:
        valid_track = FeatureTrack("sift", [FeatureMeasurement(0, 1), FeatureMeasurement(1, 1)])
        forked_track = FeatureTrack("sift", [FeatureMeasurement(0, 1), FeatureMeasurement(0, 2)])

        self.assertEqual(delete_forked_tracks([valid_track, forked_track]), [valid_track])

    def test_compute_tracks_per_view(self) -> None:
        tracks = [
            FeatureTrack("sift", [FeatureMeasurement(0, 1), FeatureMeasurement(1, 1)]),
            FeatureTrack("sift", [FeatureMeasurement(1, 2), FeatureMeasurement(2, 0)]),
        ]

        tracks_per_view = compute_tracks_per_view(tracks, view_ids=[0, 1, 2, 3])

        self.assertEqual(tracks_per_view, {0: {0}, 1: {0, 1}, 2: {1}, 3: set()})


if __name__ == "__main__":
    unittest.main()
